import threading
from datetime import datetime, timezone
from functools import wraps

from care_reminders.config import Settings
from care_reminders.exceptions import DispatchError, FetchError, RelativesLookupError
from care_reminders.integrations.appointments import AppointmentClient
from care_reminders.integrations.notifications import NotificationClient
from care_reminders.integrations.patients import PatientClient
from care_reminders.logger import get_logger
from care_reminders.schemas import Appointment, BatchResult
from care_reminders.services import evaluator

ATTENDANCE_JOB = "remind_caregiver_attendance"
PAYMENT_JOB = "remind_unpaid_appointments"

log = get_logger("jobs")

_running = {ATTENDANCE_JOB: threading.Lock(), PAYMENT_JOB: threading.Lock()}


def single_flight(job: str):
	"""Skip a firing while the previous firing of the same job is still running.

	The locks are per process. They cover threads inside one worker and the
	manual API triggers, but not a prefork pool or several workers; the
	solo worker started by ``care-reminders`` is what keeps scheduled
	firings from overlapping.
	"""
	def decorator(fn):
		@wraps(fn)
		def wrapper(*args, **kwargs) -> BatchResult:
			lock = _running[job]
			if not lock.acquire(blocking=False):
				log.warning("%s is still running, skipping this firing", job)
				return BatchResult(job=job, skipped=True)
			try:
				return fn(*args, **kwargs)
			finally:
				lock.release()
		return wrapper
	return decorator


def _fetch(job: str, appointments: AppointmentClient, now: datetime) -> list[Appointment] | None:
	date_from, date_to = evaluator.appointment_window(now)
	try:
		batch = appointments.fetch_window(date_from, date_to)
	except FetchError as e:
		log.error("%s: error fetching appointments: %s", job, e)
		return None
	log.info("%s: current time %s, %d appointments fetched", job, now.isoformat(), len(batch))
	return batch


@single_flight(ATTENDANCE_JOB)
def remind_caregiver_attendance(
	appointments: AppointmentClient,
	notifications: NotificationClient,
	cfg: Settings,
	now: datetime | None = None,
) -> BatchResult:
	now = now or datetime.now(timezone.utc)
	result = BatchResult(job=ATTENDANCE_JOB)
	log.info("%s running", ATTENDANCE_JOB)

	batch = _fetch(ATTENDANCE_JOB, appointments, now)
	if batch is None:
		result.aborted = True
		return result
	result.fetched = len(batch)

	for appt in batch:
		notification = evaluator.attendance_reminder(
			appt,
			now,
			window_minutes=cfg.attendance_window_minutes,
			eligible_status=cfg.attendance_status,
			message_style=cfg.attendance_message_style,
			display_timezone=cfg.display_timezone,
		)
		if notification is None:
			continue
		result.eligible += 1
		try:
			notifications.send(notification)
		except DispatchError as e:
			result.failed += 1
			log.error("failed to notify caregiver for appointment %s: %s", appt.id, e)
			continue
		result.sent += 1
		log.info("attendance reminder sent for appointment %s (starts %s)", appt.id, appt.est_date.isoformat())

	log.info("%s done: %d sent, %d failed", ATTENDANCE_JOB, result.sent, result.failed)
	return result


@single_flight(PAYMENT_JOB)
def remind_unpaid_appointments(
	appointments: AppointmentClient,
	patients: PatientClient,
	notifications: NotificationClient,
	cfg: Settings,
	now: datetime | None = None,
) -> BatchResult:
	"""Nudge whoever pays for each unpaid visit that hasn't started yet.

	Nothing is remembered between runs, so a visit is reminded about on every
	firing until it is paid or starts.
	"""
	now = now or datetime.now(timezone.utc)
	result = BatchResult(job=PAYMENT_JOB)
	log.info("%s running", PAYMENT_JOB)

	batch = _fetch(PAYMENT_JOB, appointments, now)
	if batch is None:
		result.aborted = True
		return result
	result.fetched = len(batch)

	for appt in batch:
		if not evaluator.payment_reminder_due(appt, now):
			continue
		result.eligible += 1
		try:
			if cfg.payment_target == "relatives":
				account_id = patients.get_relatives_id(appt.patient_id)
			else:
				account_id = appt.patient_id
			notifications.send(evaluator.payment_reminder(appt, account_id))
		except RelativesLookupError as e:
			result.failed += 1
			log.error("failed to get relatives-id of patient %s: %s", appt.patient_id, e)
			continue
		except DispatchError as e:
			result.failed += 1
			log.error("failed to send payment reminder for appointment %s: %s", appt.id, e)
			continue
		result.sent += 1
		log.info("payment reminder sent for appointment %s", appt.id)

	log.info("%s done: %d sent, %d failed", PAYMENT_JOB, result.sent, result.failed)
	return result
