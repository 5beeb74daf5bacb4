from typing import NamedTuple

import requests

from care_reminders.config import Settings, require_base_url
from care_reminders.integrations.appointments import AppointmentClient
from care_reminders.integrations.notifications import NotificationClient
from care_reminders.integrations.patients import PatientClient


class Clients(NamedTuple):
	appointments: AppointmentClient
	patients: PatientClient
	notifications: NotificationClient


def build_clients(cfg: Settings, session: requests.Session | None = None) -> Clients:
	base_url = require_base_url(cfg)
	session = session or requests.Session()
	timeout = cfg.http_timeout_seconds
	return Clients(
		appointments=AppointmentClient(base_url, timeout, session),
		patients=PatientClient(base_url, timeout, session),
		notifications=NotificationClient(base_url, timeout, session),
	)
