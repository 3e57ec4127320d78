from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import asyncio
import logging
import os

from drivingschool import __version__
from drivingschool.api.routes import (
    auth,
    calendar,
    dashboard,
    instructors,
    notifications,
    preferences,
    profile,
    schedule,
    students,
    vehicles,
)
from drivingschool.config import settings
from drivingschool.db.session import init_db, test_connection
from drivingschool.db.supabase import supabase_client
from drivingschool.errors import PortalError, SchedulingConflictError

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.INIT_DB_ON_STARTUP and settings.DATABASE_URL:
        await asyncio.to_thread(init_db)
    logger.info(f"{settings.APP_NAME} démarré ({settings.ENVIRONMENT})")
    yield

app = FastAPI(
    title="AutoEcole Pro API",
    description="Gestion d'auto-école : élèves, moniteurs, véhicules et planning des leçons",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    content = {"success": False, "error": exc.message}
    if isinstance(exc, SchedulingConflictError):
        content["conflicts"] = exc.conflicts
    return JSONResponse(status_code=exc.status_code, content=content)

for module in (auth, dashboard, profile, calendar, schedule, students, instructors, vehicles, notifications, preferences):
    app.include_router(module.router)

@app.get("/health")
def health():
    status = {"status": "AutoEcole Pro backend running", "database": supabase_client.enabled}
    if settings.DATABASE_URL:
        status["schema_connection"] = test_connection()
    return status

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("drivingschool.main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)), reload=settings.DEBUG)
