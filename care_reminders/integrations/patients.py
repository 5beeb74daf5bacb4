from uuid import UUID

import requests
from pydantic import ValidationError

from care_reminders.exceptions import RelativesLookupError
from care_reminders.integrations.http import ApiClient
from care_reminders.schemas import RelativesIdResponse


class PatientClient(ApiClient):

	def get_relatives_id(self, patient_id: UUID) -> UUID:
		"""Resolve the relative account that pays for ``patient_id``'s care."""
		path = f"/patient/api/v1/patients/{patient_id}/relatives-id"
		try:
			r = self.session.get(self.url(path), timeout=self.timeout)
			body = RelativesIdResponse.model_validate(r.json())
		except (requests.RequestException, ValidationError, ValueError) as e:
			raise RelativesLookupError(f"relatives lookup for patient {patient_id} failed: {e}") from e
		if not body.success or body.data is None:
			raise RelativesLookupError(f"relatives lookup for patient {patient_id} returned an unsuccessful response")
		return body.data.relatives_id
