from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from care_reminders.config import settings
from care_reminders.logger import get_logger
from care_reminders.routers import reminders

app = FastAPI(title="Home-care Reminder Service", version="1.0.0")
log = get_logger("api")

app.include_router(reminders.router)

@app.get("/")

def root():
	return {"status": "ok", "env": settings.app_env}


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
	log.exception("Unhandled error: %s", exc)
	return JSONResponse(status_code=500, content={"detail": "Internal server error"})
