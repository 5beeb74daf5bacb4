from datetime import date

import requests
from pydantic import ValidationError

from care_reminders.exceptions import FetchError
from care_reminders.integrations.http import ApiClient
from care_reminders.schemas import Appointment, AppointmentListResponse

APPOINTMENTS_PATH = "/appointment/api/v1/appointments"


class AppointmentClient(ApiClient):

	def fetch_window(self, date_from: date, date_to: date) -> list[Appointment]:
		params = {
			"est-date-from": date_from.isoformat(),
			"est-date-to": date_to.isoformat(),
			"apply-paging": "false",
		}
		try:
			r = self.session.get(self.url(APPOINTMENTS_PATH), params=params, timeout=self.timeout)
			r.raise_for_status()
			body = AppointmentListResponse.model_validate(r.json())
		except (requests.RequestException, ValidationError, ValueError) as e:
			raise FetchError(f"could not fetch appointments {date_from}..{date_to}: {e}") from e
		return body.data or []
