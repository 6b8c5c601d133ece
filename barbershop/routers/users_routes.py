# barbershop/routers/users_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from barbershop.db import get_session
from barbershop.deps import require_admin
from barbershop.models import User
from barbershop.schemas import AdminCreate, UserPublic
from barbershop.auth import get_current_user, hash_password

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["users"],
)

@router.get("/me", response_model=UserPublic)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("/admins", response_model=List[UserPublic])
def list_admins(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    return session.exec(
        select(User).where(User.is_admin == True).order_by(User.email)  # noqa: E712
    ).all()


@router.post("/admins", status_code=201, response_model=UserPublic)
def create_admin(
    payload: AdminCreate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    email = payload.email.strip().lower()

    existing = session.exec(
        select(User).where(User.email == email)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    db_user = User(
        email=email,
        password_hash=hash_password(payload.password),
        full_name=email.split("@")[0],
        is_admin=True,
    )
    session.add(db_user)
    session.commit()
    session.refresh(db_user)

    logger.info("Admin %s created by %s", db_user.email, admin.email)
    return db_user


@router.delete("/admins/{user_id}", status_code=204)
def remove_admin(
    user_id: int,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    target = session.get(User, user_id)
    if target is None or not target.is_admin:
        raise HTTPException(status_code=404, detail="Administrator not found")
    if target.id == admin.id:
        raise HTTPException(status_code=409, detail="You cannot remove your own admin role")

    target.is_admin = False
    session.add(target)
    session.commit()
    logger.info("Admin role revoked from %s by %s", target.email, admin.email)
