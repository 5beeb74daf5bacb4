from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from care_reminders.config import Settings
from care_reminders.exceptions import DispatchError, FetchError, RelativesLookupError
from care_reminders.schemas import Appointment

NOW = datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc)


def make_appt(minutes_from_now: float = 45, now: datetime = NOW, **fields) -> Appointment:
	raw = {
		"id": str(uuid4()),
		"service-id": str(uuid4()),
		"nursing-id": str(uuid4()),
		"patient-id": str(uuid4()),
		"patient-address": "12 Le Loi, District 1",
		"est-date": (now + timedelta(minutes=minutes_from_now)).isoformat(),
		"status": "upcoming",
		"is-paid": False,
		"total-est-duration": 60,
	}
	raw.update(fields)
	return Appointment.model_validate(raw)


class FakeAppointments:
	def __init__(self, batch=None, error: Exception | None = None):
		self.batch = batch or []
		self.error = error
		self.calls = []

	def fetch_window(self, date_from, date_to):
		self.calls.append((date_from, date_to))
		if self.error:
			raise self.error
		return list(self.batch)


class FakePatients:
	def __init__(self, relatives=None, failing=()):
		self.relatives = relatives or {}
		self.failing = set(failing)
		self.calls = []

	def get_relatives_id(self, patient_id):
		self.calls.append(patient_id)
		if patient_id in self.failing:
			raise RelativesLookupError(f"no relative for {patient_id}")
		return self.relatives.get(patient_id, uuid4())


class FakeNotifications:
	def __init__(self, failing_subs=()):
		self.failing_subs = set(failing_subs)
		self.sent = []
		self.attempts = 0

	def send(self, notification):
		self.attempts += 1
		if notification.sub_id in self.failing_subs:
			raise DispatchError("failed to send notification, status: 500", status_code=500)
		self.sent.append(notification)


@pytest.fixture()
def cfg():
	return Settings(_env_file=None, base_api_url="http://api.test")


@pytest.fixture()
def notifications():
	return FakeNotifications()


@pytest.fixture()
def fetch_down():
	return FakeAppointments(error=FetchError("connection refused"))


class ClosingSession:
	"""Stands in for requests.Session and records whether it was closed."""

	def __init__(self):
		self.closed = False

	def __enter__(self):
		return self

	def __exit__(self, *exc):
		self.closed = True
		return False
