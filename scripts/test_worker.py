from datetime import datetime, timedelta, timezone

from celery.schedules import crontab

from care_reminders import cli
from care_reminders.config import Settings
from care_reminders.integrations.clients import Clients
from care_reminders.workers import celery_app as worker
from conftest import ClosingSession, FakeAppointments, FakePatients, make_appt


def test_beat_schedule_from_settings():
	cfg = Settings(_env_file=None, remind_interval_minutes=15, payment_time_1="00:00", payment_time_2="06:30")
	schedule = worker.build_beat_schedule(cfg)

	assert set(schedule) == {"attendance-reminder", "payment-reminder-1", "payment-reminder-2"}
	assert schedule["attendance-reminder"]["schedule"] == timedelta(minutes=15)
	assert schedule["payment-reminder-1"]["schedule"] == crontab(hour=0, minute=0)
	assert schedule["payment-reminder-2"]["schedule"] == crontab(hour=6, minute=30)
	assert schedule["payment-reminder-2"]["task"] == "care_reminders.remind_unpaid_appointments"


def test_tasks_are_registered():
	assert "care_reminders.remind_caregiver_attendance" in worker.celery_app.tasks
	assert "care_reminders.remind_unpaid_appointments" in worker.celery_app.tasks
	assert worker.celery_app.conf.timezone == "UTC"


def test_tasks_run_the_jobs(monkeypatch, cfg, notifications):
	now = datetime.now(timezone.utc)
	source = FakeAppointments([make_appt(30, now=now)])
	monkeypatch.setattr(worker, "settings", cfg)
	sessions = []

	def new_session():
		sessions.append(ClosingSession())
		return sessions[-1]

	monkeypatch.setattr(worker.requests, "Session", new_session)
	monkeypatch.setattr(worker, "build_clients", lambda s, session: Clients(source, FakePatients(), notifications))

	attendance = worker.remind_caregiver_attendance_task()
	payment = worker.remind_unpaid_appointments_task()

	assert attendance["sent"] == 1
	assert payment["sent"] == 1
	assert [n.route for n in notifications.sent] == ["/(tabs)/home", "/detail-payment"]
	assert len(sessions) == 2
	assert all(s.closed for s in sessions)


def test_cli_exits_when_base_url_missing(monkeypatch):
	monkeypatch.setattr(cli, "settings", Settings(_env_file=None, base_api_url=None))
	assert cli.main([]) == 1


def test_serve_runs_the_api(monkeypatch, cfg):
	calls = []
	monkeypatch.setattr(cli, "settings", cfg)
	monkeypatch.setattr("uvicorn.run", lambda app, **kw: calls.append((app, kw)))

	cli.serve()

	assert calls == [("care_reminders.main:app", {"host": "0.0.0.0", "port": 8000, "log_level": "info"})]
