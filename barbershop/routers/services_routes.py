# barbershop/routers/services_routes.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from barbershop.auth import get_optional_user
from barbershop.db import get_session
from barbershop.deps import require_admin
from barbershop.models import Appointment, Service, User
from barbershop.schemas import ActiveToggle, ServiceCreate, ServicePublic, ServiceUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


def get_service_or_404(session: Session, service_id: int) -> Service:
    service = session.get(Service, service_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.get("", response_model=List[ServicePublic])
def list_services(
    include_inactive: bool = False,
    session: Session = Depends(get_session),
    current_user: Optional[User] = Depends(get_optional_user),
):
    stmt = select(Service)
    if include_inactive:
        if current_user is None or not current_user.is_admin:
            raise HTTPException(status_code=403, detail="Forbidden")
    else:
        stmt = stmt.where(Service.is_active == True)  # noqa: E712
    return session.exec(stmt.order_by(Service.name)).all()


@router.post("", response_model=ServicePublic, status_code=201)
def create_service(
    service: ServiceCreate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    name = service.name.strip()
    if not name:
        raise HTTPException(status_code=422, detail="Service name is required")

    db_service = Service(
        name=name,
        description=(service.description or "").strip() or None,
        duration_minutes=service.duration_minutes,
        price=service.price,
        is_active=service.is_active,
    )
    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    logger.info("Service %s created", db_service.id)
    return db_service


@router.patch("/{service_id}", response_model=ServicePublic)
def update_service(
    service_id: int,
    updates: ServiceUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    db_service = get_service_or_404(session, service_id)

    data = updates.model_dump(exclude_unset=True)
    if "name" in data:
        data["name"] = (data["name"] or "").strip()
        if not data["name"]:
            raise HTTPException(status_code=422, detail="Service name is required")
    if "description" in data:
        data["description"] = (data["description"] or "").strip() or None
    for field, value in data.items():
        if value is None and field in ("duration_minutes", "price", "is_active"):
            continue
        setattr(db_service, field, value)

    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    return db_service


@router.patch("/{service_id}/active", response_model=ServicePublic)
def set_service_active(
    service_id: int,
    toggle: ActiveToggle,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    db_service = get_service_or_404(session, service_id)
    db_service.is_active = toggle.is_active
    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    return db_service


@router.delete("/{service_id}", status_code=204)
def delete_service(
    service_id: int,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    db_service = get_service_or_404(session, service_id)

    linked = session.exec(select(Appointment).where(Appointment.service_id == service_id)).first()
    if linked is not None:
        raise HTTPException(status_code=409, detail="Service may have linked appointments")

    session.delete(db_service)
    session.commit()
    logger.info("Service %s deleted", service_id)
