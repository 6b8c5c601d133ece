# barbershop/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from sqlmodel import Session

from .auth import ensure_admin
from .config import settings
from .db import engine, init_db
from .routers import (
    appointments_routes,
    auth_routes,
    barbers_routes,
    services_routes,
    settings_routes,
    users_routes,
)
from .storage import PHOTO_ROUTE

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
    if settings.admin_email and settings.admin_password:
        with Session(engine) as session:
            ensure_admin(session, settings.admin_email, settings.admin_password)
    yield


app = FastAPI(title="Barbershop", lifespan=lifespan)

app.include_router(auth_routes.router)
app.include_router(users_routes.router)
app.include_router(barbers_routes.router)
app.include_router(services_routes.router)
app.include_router(appointments_routes.router)
app.include_router(settings_routes.router)

app.mount(PHOTO_ROUTE, StaticFiles(directory=settings.photo_dir, check_dir=False), name="barber-photos")


@app.get("/health")
def health_check():
    return {"status": "ok"}
