from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from care_reminders.exceptions import ConfigurationError

DEFAULT_REMIND_INTERVAL_MINUTES = 30
DEFAULT_PAYMENT_TIME_1 = "00:00"
DEFAULT_PAYMENT_TIME_2 = "06:00"


def parse_hhmm(value: str) -> tuple[int, int]:
	"""Split an ``HH:MM`` wall-clock string into (hour, minute)."""
	parts = value.strip().split(":")
	if len(parts) != 2 or not all(p.isdigit() for p in parts):
		raise ValueError(f"expected HH:MM, got {value!r}")
	hour, minute = int(parts[0]), int(parts[1])
	if not (0 <= hour < 24 and 0 <= minute < 60):
		raise ValueError(f"time out of range: {value!r}")
	return hour, minute


class Settings(BaseSettings):
	app_env: str = Field(default="development")
	log_level: str = Field(default="INFO")

	base_api_url: str | None = None
	http_timeout_seconds: float = Field(default=10.0)

	remind_interval_minutes: int = Field(default=DEFAULT_REMIND_INTERVAL_MINUTES)
	payment_time_1: str = Field(default=DEFAULT_PAYMENT_TIME_1)
	payment_time_2: str = Field(default=DEFAULT_PAYMENT_TIME_2)

	attendance_window_minutes: int = Field(default=60)
	attendance_status: str = Field(default="upcoming")
	attendance_message_style: Literal["minutes", "clock"] = Field(default="minutes")
	display_timezone: str = Field(default="Asia/Ho_Chi_Minh")
	payment_target: Literal["relatives", "patient"] = Field(default="relatives")

	api_host: str = Field(default="0.0.0.0")
	api_port: int = Field(default=8000)

	enable_scheduler: bool = Field(default=True)
	celery_broker_url: str = Field(default="redis://localhost:6379/0")
	celery_result_backend: str = Field(default="redis://localhost:6379/1")

	@field_validator("remind_interval_minutes", mode="before")
	@classmethod
	def _interval_or_default(cls, v):
		# unset, blank or garbage falls back to the default cadence
		try:
			minutes = int(v)
		except (TypeError, ValueError):
			return DEFAULT_REMIND_INTERVAL_MINUTES
		return minutes if minutes > 0 else DEFAULT_REMIND_INTERVAL_MINUTES

	@field_validator("payment_time_1", "payment_time_2", mode="before")
	@classmethod
	def _payment_time(cls, v, info):
		if v is None or not str(v).strip():
			return DEFAULT_PAYMENT_TIME_1 if info.field_name == "payment_time_1" else DEFAULT_PAYMENT_TIME_2
		hour, minute = parse_hhmm(str(v))
		return f"{hour:02d}:{minute:02d}"

	@field_validator("base_api_url", mode="before")
	@classmethod
	def _strip_base_url(cls, v):
		if v is None:
			return None
		v = str(v).strip().rstrip("/")
		return v or None

	@property
	def payment_times(self) -> list[tuple[int, int]]:
		return [parse_hhmm(self.payment_time_1), parse_hhmm(self.payment_time_2)]

	class Config:
		env_file = ".env"
		env_file_encoding = "utf-8"
		extra = "ignore"


def require_base_url(cfg: Settings) -> str:
	if not cfg.base_api_url:
		raise ConfigurationError("BASE_API_URL is not set")
	return cfg.base_api_url


settings = Settings()
