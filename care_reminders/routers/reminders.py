import requests
from fastapi import APIRouter, Depends, HTTPException

from care_reminders.config import Settings, settings
from care_reminders.exceptions import ConfigurationError
from care_reminders.integrations.clients import Clients, build_clients
from care_reminders.schemas import BatchResult
from care_reminders.services import jobs

router = APIRouter(prefix="/reminders", tags=["reminders"])


def get_settings() -> Settings:
	return settings


def get_clients(cfg: Settings = Depends(get_settings)):
	with requests.Session() as session:
		try:
			clients = build_clients(cfg, session)
		except ConfigurationError as e:
			raise HTTPException(status_code=503, detail=str(e))
		yield clients


@router.post("/attendance/run", response_model=BatchResult)

def run_attendance(clients: Clients = Depends(get_clients), cfg: Settings = Depends(get_settings)):
	return jobs.remind_caregiver_attendance(clients.appointments, clients.notifications, cfg)


@router.post("/payment/run", response_model=BatchResult)

def run_payment(clients: Clients = Depends(get_clients), cfg: Settings = Depends(get_settings)):
	return jobs.remind_unpaid_appointments(clients.appointments, clients.patients, clients.notifications, cfg)
