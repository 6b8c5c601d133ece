# barbershop/availability.py

from datetime import date, datetime, time, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo

from sqlmodel import Session, select

from .config import settings
from .core import Booking, DaySchedule, compute_available_slots
from .models import Appointment, BarberSchedule, Service


def local_now() -> datetime:
    return datetime.now(ZoneInfo(settings.timezone)).replace(tzinfo=None)


def day_schedule(session: Session, barber_id: int, on_date: date) -> Optional[DaySchedule]:
    row = session.exec(
        select(BarberSchedule)
        .where(BarberSchedule.barber_id == barber_id)
        .where(BarberSchedule.day_of_week == on_date.weekday())
    ).first()
    if row is None:
        return None
    return DaySchedule(
        start_time=row.start_time,
        end_time=row.end_time,
        is_active=row.is_active,
        break_start=row.break_start,
        break_end=row.break_end,
    )


def day_bookings(session: Session, barber_id: int, on_date: date) -> List[Booking]:
    rows = session.exec(
        select(Appointment, Service)
        .join(Service, Service.id == Appointment.service_id)
        .where(Appointment.barber_id == barber_id)
        .where(Appointment.appointment_date == on_date)
        .where(Appointment.status != "cancelled")
    ).all()
    return [Booking(appt.appointment_time, service.duration_minutes) for appt, service in rows]


def bookable_window(on_date: date, now: datetime) -> bool:
    today = now.date()
    return today <= on_date <= today + timedelta(days=settings.booking_horizon_days)


def open_slots(session: Session, barber_id: int, on_date: date, duration_minutes: int) -> List[time]:
    """Free start times for one barber on one date, hiding anything already in the past."""
    now = local_now()
    if not bookable_window(on_date, now):
        return []

    slots = compute_available_slots(
        day_schedule(session, barber_id, on_date),
        day_bookings(session, barber_id, on_date),
        duration_minutes,
    )
    if on_date == now.date():
        slots = [s for s in slots if s > now.time()]
    return slots
