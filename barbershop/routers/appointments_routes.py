# barbershop/routers/appointments_routes.py

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from barbershop.auth import get_current_user, get_optional_user
from barbershop.availability import day_bookings, open_slots
from barbershop.core import clashes
from barbershop.db import get_session
from barbershop.deps import require_admin
from barbershop.models import Appointment, Barber, Service, User
from barbershop.schemas import (
    AppointmentCreate,
    AppointmentPublic,
    AppointmentStatus,
    StatusUpdate,
)

logger = logging.getLogger(__name__)

SLOT_TAKEN = "This time slot is already taken. Please choose another time."

router = APIRouter(
    tags=["appointments"],
)


def with_service(appt: Appointment, service: Optional[Service]) -> dict:
    data = appt.model_dump()
    data["service"] = service.model_dump() if service is not None else None
    return data


@router.post("/appointments", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    session: Session = Depends(get_session),
    current_user: Optional[User] = Depends(get_optional_user),
):
    # 1) Validate service and barber
    service = session.get(Service, appt.service_id)
    if service is None or not service.is_active:
        raise HTTPException(status_code=422, detail="Service not available")

    barber = session.get(Barber, appt.barber_id)
    if barber is None or not barber.is_active:
        raise HTTPException(status_code=422, detail="Barber not available")

    # 2) The chosen time must still be on the barber's free list
    free = open_slots(session, barber.id, appt.appointment_date, service.duration_minutes)
    if appt.appointment_time not in free:
        logger.info(
            "Rejected booking for barber %s on %s at %s: not available",
            appt.barber_id, appt.appointment_date, appt.appointment_time,
        )
        raise HTTPException(status_code=409, detail=SLOT_TAKEN)

    # 3) Create and save appointment
    db_appt = Appointment(
        client_name=appt.client_name.strip(),
        client_phone=appt.client_phone.strip(),
        barber_id=barber.id,
        service_id=service.id,
        appointment_date=appt.appointment_date,
        appointment_time=appt.appointment_time,
        status=AppointmentStatus.pending.value,
        user_id=current_user.id if current_user is not None else None,
    )

    session.add(db_appt)
    try:
        session.commit()
    except IntegrityError:
        # another client booked the same slot between our read and this write
        session.rollback()
        logger.warning(
            "Booking race lost for barber %s on %s at %s",
            appt.barber_id, appt.appointment_date, appt.appointment_time,
        )
        raise HTTPException(status_code=409, detail=SLOT_TAKEN)

    session.refresh(db_appt)  # fills db_appt.id
    session.refresh(service)  # expired by the commit
    logger.info("Appointment %s booked with barber %s", db_appt.id, barber.id)
    return with_service(db_appt, service)


@router.get("/appointments", response_model=List[AppointmentPublic])
def list_appointments(
    status: Optional[AppointmentStatus] = None,
    on_date: Optional[date] = None,
    barber_id: Optional[int] = None,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    stmt = select(Appointment, Service).join(Service, Service.id == Appointment.service_id, isouter=True)

    if status is not None:
        stmt = stmt.where(Appointment.status == status.value)
    if on_date is not None:
        stmt = stmt.where(Appointment.appointment_date == on_date)
    if barber_id is not None:
        stmt = stmt.where(Appointment.barber_id == barber_id)

    stmt = stmt.order_by(Appointment.appointment_date, Appointment.appointment_time)

    return [with_service(appt, service) for appt, service in session.exec(stmt).all()]


@router.get("/me/appointments", response_model=List[AppointmentPublic])
def list_my_appointments(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    stmt = (
        select(Appointment, Service)
        .join(Service, Service.id == Appointment.service_id, isouter=True)
        .where(Appointment.user_id == current_user.id)
        .order_by(Appointment.appointment_date, Appointment.appointment_time)
    )
    return [with_service(appt, service) for appt, service in session.exec(stmt).all()]


@router.patch("/appointments/{appt_id}/status", response_model=AppointmentPublic)
def update_appointment_status(
    appt_id: int,
    update: StatusUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    target = session.get(Appointment, appt_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Appointment not found")

    # a revived booking must not land on blocks someone else holds now
    if target.status == AppointmentStatus.cancelled.value and update.status != AppointmentStatus.cancelled:
        service = session.get(Service, target.service_id)
        others = day_bookings(session, target.barber_id, target.appointment_date)
        if clashes(target.appointment_time, service.duration_minutes, others):
            logger.info("Refused to revive appointment %s: its time is taken", appt_id)
            raise HTTPException(status_code=409, detail=SLOT_TAKEN)

    target.status = update.status.value
    session.add(target)
    try:
        session.commit()
    except IntegrityError:
        # reviving a cancelled booking whose slot was taken since
        session.rollback()
        raise HTTPException(status_code=409, detail=SLOT_TAKEN)
    session.refresh(target)

    logger.info("Appointment %s marked %s by %s", appt_id, target.status, admin.email)
    return with_service(target, session.get(Service, target.service_id))


@router.delete("/appointments/{appt_id}", status_code=204)
def delete_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    target = session.get(Appointment, appt_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Appointment not found")

    session.delete(target)
    session.commit()
    logger.info("Appointment %s deleted by %s", appt_id, admin.email)
