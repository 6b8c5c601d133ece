# barbershop/models.py

from typing import Optional
from datetime import datetime, date as Date, time, timezone

from sqlalchemy import Index, UniqueConstraint, text
from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    is_admin: bool = False
    created_at: datetime = Field(default_factory=utc_now)


class Barber(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=utc_now)


class BarberSchedule(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("barber_id", "day_of_week", name="uq_barber_day"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    barber_id: int = Field(foreign_key="barber.id", index=True)
    day_of_week: int  # 0=Mon ... 6=Sun
    start_time: time
    end_time: time
    is_active: bool = True
    break_start: Optional[time] = None
    break_end: Optional[time] = None


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: Optional[str] = None
    duration_minutes: int = 30
    price: float
    is_active: bool = True


class Appointment(SQLModel, table=True):
    # cancelled rows don't hold on to their slot
    __table_args__ = (
        Index(
            "uq_barber_date_time",
            "barber_id",
            "appointment_date",
            "appointment_time",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    client_name: str
    client_phone: str
    barber_id: int = Field(foreign_key="barber.id", index=True)
    service_id: int = Field(foreign_key="service.id")
    appointment_date: Date = Field(index=True)
    appointment_time: time
    status: str = "pending"
    user_id: Optional[int] = Field(default=None, foreign_key="user.id")
    created_at: datetime = Field(default_factory=utc_now)


class Setting(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(index=True, unique=True)
    value: str = ""
    label: str
    category: str  # contact, address, social or hours
