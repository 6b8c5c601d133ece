# barbershop/db.py

import logging

from sqlmodel import SQLModel, Session, create_engine, select

from .config import settings
from .data import DEFAULT_SETTINGS
from .models import Setting

logger = logging.getLogger(__name__)

connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False  # required for SQLite + FastAPI

engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,
    connect_args=connect_args,
)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session


def seed_settings(session: Session) -> None:
    existing = set(session.exec(select(Setting.key)).all())
    missing = [key for key in DEFAULT_SETTINGS if key not in existing]
    for key in missing:
        value, label, category = DEFAULT_SETTINGS[key]
        session.add(Setting(key=key, value=value, label=label, category=category))
    if missing:
        session.commit()
        logger.info("Seeded %d default settings", len(missing))


def init_db(bind=None) -> None:
    bind = bind or engine
    SQLModel.metadata.create_all(bind)
    with Session(bind) as session:
        seed_settings(session)
