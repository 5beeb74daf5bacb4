from datetime import datetime, timezone
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


def _as_utc(value: datetime) -> datetime:
	# the scheduling API sends offsets; a bare timestamp is UTC
	if value.tzinfo is None:
		return value.replace(tzinfo=timezone.utc)
	return value


_ZERO_VALUES = {
	"patient_address": "",
	"patient_lat_lng": "",
	"status": "",
	"is_paid": False,
	"total_est_duration": 0,
}


class Appointment(BaseModel):
	id: UUID
	service_id: Optional[UUID] = Field(default=None, alias="service-id")
	svcpackage_id: Optional[UUID] = Field(default=None, alias="svcpackage-id")
	cuspackage_id: Optional[UUID] = Field(default=None, alias="cuspackage-id")
	nursing_id: Optional[UUID] = Field(default=None, alias="nursing-id")
	patient_id: UUID = Field(alias="patient-id")
	patient_address: str = Field(default="", alias="patient-address")
	patient_lat_lng: str = Field(default="", alias="patient-lat-lng")
	est_date: datetime = Field(alias="est-date")
	act_date: Optional[str] = Field(default=None, alias="act-date")
	status: str = ""
	is_paid: bool = Field(default=False, alias="is-paid")
	total_est_duration: int = Field(default=0, alias="total-est-duration")
	created_at: Optional[datetime] = Field(default=None, alias="created-at")

	@field_validator("patient_address", "patient_lat_lng", "status", "is_paid", "total_est_duration", mode="before")
	@classmethod
	def _null_as_zero(cls, v, info):
		# the API sends null for blank scalars; read it as the zero value
		if v is None:
			return _ZERO_VALUES[info.field_name]
		return v

	@field_validator("est_date", "created_at")
	@classmethod
	def _tz_aware(cls, v):
		return _as_utc(v) if v is not None else v

	class Config:
		populate_by_name = True


class AppointmentListResponse(BaseModel):
	data: Optional[List[Appointment]] = None


class RelativesId(BaseModel):
	relatives_id: UUID = Field(alias="relatives-id")

	class Config:
		populate_by_name = True


class RelativesIdResponse(BaseModel):
	data: Optional[RelativesId] = None
	success: bool = False


class Notification(BaseModel):
	account_id: str = Field(alias="account-id")
	content: str
	sub_id: Optional[str] = Field(default=None, alias="sub-id")
	route: str

	class Config:
		populate_by_name = True

	def to_payload(self) -> dict:
		return self.model_dump(by_alias=True, exclude_none=True)


class BatchResult(BaseModel):
	job: str
	fetched: int = 0
	eligible: int = 0
	sent: int = 0
	failed: int = 0
	aborted: bool = False
	skipped: bool = False
