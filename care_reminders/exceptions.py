class ReminderError(Exception):
	"""Base class for everything the reminder jobs raise on purpose."""


class ConfigurationError(ReminderError):
	pass


class FetchError(ReminderError):
	"""Appointments could not be retrieved; the whole batch is abandoned."""


class RelativesLookupError(ReminderError):
	"""The patient's relative could not be resolved."""


class DispatchError(ReminderError):
	"""The notification service rejected or never received a notification."""

	def __init__(self, message: str, status_code: int | None = None):
		super().__init__(message)
		self.status_code = status_code
