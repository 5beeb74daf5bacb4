"""Decides which appointments get a reminder and what it says.

Nothing here does I/O; the jobs module feeds in fetched appointments and the
current instant. All comparisons happen in UTC; the display timezone only
affects how a start time is printed.
"""
import math
from datetime import date, datetime, timedelta, timezone
from uuid import UUID

import pytz

from care_reminders.schemas import Appointment, Notification

ATTENDANCE_ROUTE = "/(tabs)/home"
PAYMENT_ROUTE = "/detail-payment"

ATTENDANCE_MINUTES_TEMPLATE = "Bạn có một cuộc hẹn sẽ bắt đầu sau {minutes} phút nữa, hãy lên đường nào!"
ATTENDANCE_CLOCK_TEMPLATE = "Bạn có một cuộc hẹn bắt đầu lúc {clock}, hãy lên đường nào!"
PAYMENT_REMINDER_TEXT = (
	"Nhắc nhở: bạn có một cuộc hẹn đã được lên lịch nhưng chưa thanh toán.\n"
	"Vui lòng thanh toán để đảm bảo dịch vụ của bạn."
)


def utc(dt: datetime) -> datetime:
	if dt.tzinfo is None:
		return dt.replace(tzinfo=timezone.utc)
	return dt.astimezone(timezone.utc)


def appointment_window(now: datetime) -> tuple[date, date]:
	"""Calendar days to fetch: today and tomorrow, by the UTC date of ``now``."""
	today = utc(now).date()
	return today, today + timedelta(days=1)


def minutes_until(start: datetime, now: datetime) -> int:
	return math.floor((utc(start) - utc(now)).total_seconds() / 60)


def format_local_clock(start: datetime, tz_name: str) -> str:
	return utc(start).astimezone(pytz.timezone(tz_name)).strftime("%H:%M %d/%m/%Y")


def attendance_reminder(
	appt: Appointment,
	now: datetime,
	window_minutes: int = 60,
	eligible_status: str = "upcoming",
	message_style: str = "minutes",
	display_timezone: str = "Asia/Ho_Chi_Minh",
) -> Notification | None:
	"""Reminder for the assigned caregiver, or None when the visit doesn't qualify.

	Qualifies when a caregiver is assigned, the status is ``eligible_status``
	and the visit starts in (0, window_minutes] whole minutes.
	"""
	if appt.nursing_id is None or appt.status != eligible_status:
		return None
	minutes = minutes_until(appt.est_date, now)
	if not (0 < minutes <= window_minutes):
		return None
	if message_style == "clock":
		content = ATTENDANCE_CLOCK_TEMPLATE.format(clock=format_local_clock(appt.est_date, display_timezone))
	else:
		content = ATTENDANCE_MINUTES_TEMPLATE.format(minutes=minutes)
	return Notification(
		account_id=str(appt.nursing_id),
		content=content,
		sub_id=str(appt.id),
		route=ATTENDANCE_ROUTE,
	)


def payment_reminder_due(appt: Appointment, now: datetime) -> bool:
	# no window: every unpaid visit that hasn't started qualifies on every run
	return not appt.is_paid and utc(now) <= utc(appt.est_date)


def payment_reminder(appt: Appointment, account_id: UUID | str) -> Notification:
	return Notification(
		account_id=str(account_id),
		content=PAYMENT_REMINDER_TEXT,
		sub_id=str(appt.id),
		route=PAYMENT_ROUTE,
	)
