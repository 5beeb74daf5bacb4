import requests

from care_reminders.exceptions import DispatchError
from care_reminders.integrations.http import ApiClient
from care_reminders.schemas import Notification

NOTIFICATIONS_PATH = "/notification/external/rpc/notifications"


class NotificationClient(ApiClient):

	def send(self, notification: Notification) -> None:
		try:
			r = self.session.post(self.url(NOTIFICATIONS_PATH), json=notification.to_payload(), timeout=self.timeout)
		except requests.RequestException as e:
			raise DispatchError(f"failed to send notification: {e}") from e
		if r.status_code >= 300:
			raise DispatchError(f"failed to send notification, status: {r.status_code}", status_code=r.status_code)
