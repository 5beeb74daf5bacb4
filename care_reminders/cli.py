import sys

from care_reminders.config import settings, require_base_url
from care_reminders.exceptions import ConfigurationError
from care_reminders.logger import get_logger

log = get_logger("cli")


def main(argv: list[str] | None = None) -> int:
	"""Run the reminder service: one worker process with the beat scheduler embedded."""
	log.info("Starting reminder service")
	try:
		require_base_url(settings)
	except ConfigurationError as e:
		log.error("%s", e)
		return 1

	from care_reminders.workers.celery_app import celery_app

	log.info(
		"Attendance reminders every %d minutes, payment reminders at %s and %s UTC",
		settings.remind_interval_minutes,
		settings.payment_time_1,
		settings.payment_time_2,
	)
	args = ["worker", "--beat", "--pool=solo", f"--loglevel={settings.log_level.upper()}"]
	celery_app.worker_main(args + list(argv or []))
	return 0


def serve() -> None:
	"""Serve the health and manual-trigger API."""
	import uvicorn

	uvicorn.run("care_reminders.main:app", host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
	sys.exit(main(sys.argv[1:]))
