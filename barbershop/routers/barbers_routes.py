# barbershop/routers/barbers_routes.py

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlmodel import Session, select

from barbershop.auth import get_optional_user
from barbershop.availability import open_slots
from barbershop.config import settings
from barbershop.core import BLOCK_MINUTES
from barbershop.data import DEFAULT_WEEK
from barbershop.db import get_session
from barbershop.deps import require_admin
from barbershop.models import Appointment, Barber, BarberSchedule, Service, User
from barbershop.schemas import (
    ActiveToggle,
    AvailabilityResponse,
    BarberCreate,
    BarberPublic,
    BarberUpdate,
    PhotoUploaded,
    SchedulePublic,
    ScheduleUpdate,
)
from barbershop.storage import PHOTO_TYPES, store_photo

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/barbers",
    tags=["barbers"],
)


def get_barber_or_404(session: Session, barber_id: int) -> Barber:
    barber = session.get(Barber, barber_id)
    if barber is None:
        raise HTTPException(status_code=404, detail="Barber not found")
    return barber


def apply_default_week(session: Session, barber_id: int) -> None:
    existing = {
        s.day_of_week: s
        for s in session.exec(select(BarberSchedule).where(BarberSchedule.barber_id == barber_id)).all()
    }
    for day, (start, end, active) in DEFAULT_WEEK.items():
        row = existing.get(day)
        if row is None:
            row = BarberSchedule(barber_id=barber_id, day_of_week=day, start_time=start, end_time=end)
        row.start_time = start
        row.end_time = end
        row.is_active = active
        row.break_start = None
        row.break_end = None
        session.add(row)


def validate_schedule(schedule: ScheduleUpdate) -> None:
    times = [schedule.start_time, schedule.end_time, schedule.break_start, schedule.break_end]
    for t in times:
        if t is not None and (t.minute % BLOCK_MINUTES != 0 or t.second or t.microsecond):
            raise HTTPException(status_code=422, detail="Times must be in 30-minute increments")

    if not schedule.is_active:
        return
    if schedule.start_time >= schedule.end_time:
        raise HTTPException(status_code=422, detail="start_time must be before end_time")
    if schedule.break_start is not None:
        if schedule.break_start >= schedule.break_end:
            raise HTTPException(status_code=422, detail="break_start must be before break_end")
        if schedule.break_start < schedule.start_time or schedule.break_end > schedule.end_time:
            raise HTTPException(status_code=422, detail="Break must be within working hours")


@router.get("", response_model=List[BarberPublic])
def list_barbers(
    include_inactive: bool = False,
    session: Session = Depends(get_session),
    current_user: Optional[User] = Depends(get_optional_user),
):
    stmt = select(Barber)
    if include_inactive:
        if current_user is None or not current_user.is_admin:
            raise HTTPException(status_code=403, detail="Forbidden")
    else:
        stmt = stmt.where(Barber.is_active == True)  # noqa: E712
    return session.exec(stmt.order_by(Barber.name)).all()


@router.post("", response_model=BarberPublic, status_code=201)
def create_barber(
    barber: BarberCreate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    name = barber.name.strip()
    if not name:
        raise HTTPException(status_code=422, detail="Name is required")

    db_barber = Barber(name=name, photo_url=barber.photo_url, bio=barber.bio or None)
    session.add(db_barber)
    session.commit()
    session.refresh(db_barber)

    # every barber starts with the shop's default week
    apply_default_week(session, db_barber.id)
    session.commit()
    session.refresh(db_barber)

    logger.info("Barber %s created by %s", db_barber.id, admin.email)
    return db_barber


@router.post("/photos", response_model=PhotoUploaded, status_code=201)
async def upload_photo(
    file: UploadFile = File(...),
    admin: User = Depends(require_admin),
):
    if file.content_type not in PHOTO_TYPES:
        raise HTTPException(status_code=415, detail="Photo must be a JPEG, PNG, WebP or GIF image")

    data = await file.read(settings.max_photo_bytes + 1)
    if len(data) > settings.max_photo_bytes:
        raise HTTPException(status_code=413, detail="Image is too large")
    if not data:
        raise HTTPException(status_code=422, detail="Empty file")

    return {"url": store_photo(data, file.content_type)}


@router.get("/{barber_id}", response_model=BarberPublic)
def get_barber(barber_id: int, session: Session = Depends(get_session)):
    return get_barber_or_404(session, barber_id)


@router.patch("/{barber_id}", response_model=BarberPublic)
def update_barber(
    barber_id: int,
    updates: BarberUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    db_barber = get_barber_or_404(session, barber_id)

    data = updates.model_dump(exclude_unset=True)
    if "name" in data:
        data["name"] = (data["name"] or "").strip()
        if not data["name"]:
            raise HTTPException(status_code=422, detail="Name is required")
    for field, value in data.items():
        if field == "is_active" and value is None:
            continue
        setattr(db_barber, field, value)

    session.add(db_barber)
    session.commit()
    session.refresh(db_barber)
    return db_barber


@router.patch("/{barber_id}/active", response_model=BarberPublic)
def set_barber_active(
    barber_id: int,
    toggle: ActiveToggle,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    db_barber = get_barber_or_404(session, barber_id)
    db_barber.is_active = toggle.is_active
    session.add(db_barber)
    session.commit()
    session.refresh(db_barber)
    logger.info("Barber %s %s", barber_id, "activated" if toggle.is_active else "deactivated")
    return db_barber


@router.delete("/{barber_id}", status_code=204)
def delete_barber(
    barber_id: int,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    db_barber = get_barber_or_404(session, barber_id)

    linked = session.exec(select(Appointment).where(Appointment.barber_id == barber_id)).first()
    if linked is not None:
        raise HTTPException(status_code=409, detail="Barber has appointments; deactivate instead")

    for schedule in session.exec(select(BarberSchedule).where(BarberSchedule.barber_id == barber_id)).all():
        session.delete(schedule)
    session.delete(db_barber)
    session.commit()
    logger.info("Barber %s deleted by %s", barber_id, admin.email)


@router.get("/{barber_id}/schedules", response_model=List[SchedulePublic])
def list_schedules(barber_id: int, session: Session = Depends(get_session)):
    get_barber_or_404(session, barber_id)
    return session.exec(
        select(BarberSchedule)
        .where(BarberSchedule.barber_id == barber_id)
        .order_by(BarberSchedule.day_of_week)
    ).all()


@router.put("/{barber_id}/schedules/{day_of_week}", response_model=SchedulePublic)
def update_schedule(
    barber_id: int,
    day_of_week: int,
    schedule: ScheduleUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    if not (0 <= day_of_week <= 6):
        raise HTTPException(status_code=422, detail="day_of_week must be an integer between 0 and 6")
    get_barber_or_404(session, barber_id)
    validate_schedule(schedule)

    # DB upsert: one row per barber and weekday
    db_schedule = session.exec(
        select(BarberSchedule)
        .where(BarberSchedule.barber_id == barber_id)
        .where(BarberSchedule.day_of_week == day_of_week)
    ).first()
    if db_schedule is None:
        db_schedule = BarberSchedule(barber_id=barber_id, day_of_week=day_of_week, **schedule.model_dump())
    else:
        for field, value in schedule.model_dump().items():
            setattr(db_schedule, field, value)

    session.add(db_schedule)
    session.commit()
    session.refresh(db_schedule)
    return db_schedule


@router.post("/{barber_id}/schedules/reset", response_model=List[SchedulePublic])
def reset_schedules(
    barber_id: int,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    get_barber_or_404(session, barber_id)
    apply_default_week(session, barber_id)
    session.commit()
    logger.info("Schedules of barber %s reset to default", barber_id)
    return session.exec(
        select(BarberSchedule)
        .where(BarberSchedule.barber_id == barber_id)
        .order_by(BarberSchedule.day_of_week)
    ).all()


@router.get("/{barber_id}/availability", response_model=AvailabilityResponse)
def barber_availability(
    barber_id: int,
    date: date,
    service_id: Optional[int] = None,
    session: Session = Depends(get_session),
):
    barber = get_barber_or_404(session, barber_id)

    duration = BLOCK_MINUTES
    if service_id is not None:
        service = session.get(Service, service_id)
        if service is None or not service.is_active:
            raise HTTPException(status_code=404, detail="Service not found")
        duration = service.duration_minutes

    available = []
    if barber.is_active:
        available = [t.strftime("%H:%M") for t in open_slots(session, barber_id, date, duration)]

    return {
        "barber_id": barber_id,
        "date": date,
        "duration_minutes": duration,
        "available_starts": available,
    }
