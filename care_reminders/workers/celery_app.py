from datetime import timedelta

import requests
from celery import Celery
from celery.schedules import crontab
from celery.signals import worker_init

from care_reminders.config import Settings, settings, require_base_url
from care_reminders.integrations.clients import build_clients
from care_reminders.logger import get_logger
from care_reminders.services import jobs

log = get_logger("worker")

celery_app = Celery(
	"care_reminders",
	broker=settings.celery_broker_url,
	backend=settings.celery_result_backend,
)
celery_app.conf.update(
	timezone="UTC",
	enable_utc=True,
	worker_prefetch_multiplier=1,
	task_acks_late=False,
)


def build_beat_schedule(cfg: Settings) -> dict:
	schedule = {
		"attendance-reminder": {
			"task": "care_reminders.remind_caregiver_attendance",
			"schedule": timedelta(minutes=cfg.remind_interval_minutes),
		},
	}
	for i, (hour, minute) in enumerate(cfg.payment_times, start=1):
		schedule[f"payment-reminder-{i}"] = {
			"task": "care_reminders.remind_unpaid_appointments",
			"schedule": crontab(hour=hour, minute=minute),
		}
	return schedule


if settings.enable_scheduler:
	celery_app.conf.beat_schedule = build_beat_schedule(settings)


@worker_init.connect
def _check_config(**kwargs):
	# a worker without a base URL would fail every firing; refuse to start
	require_base_url(settings)


@celery_app.task(name="care_reminders.remind_caregiver_attendance")

def remind_caregiver_attendance_task() -> dict:
	with requests.Session() as session:
		clients = build_clients(settings, session)
		result = jobs.remind_caregiver_attendance(clients.appointments, clients.notifications, settings)
	return result.model_dump()


@celery_app.task(name="care_reminders.remind_unpaid_appointments")

def remind_unpaid_appointments_task() -> dict:
	with requests.Session() as session:
		clients = build_clients(settings, session)
		result = jobs.remind_unpaid_appointments(clients.appointments, clients.patients, clients.notifications, settings)
	return result.model_dump()
