# barbershop/routers/settings_routes.py

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from barbershop.data import DEFAULT_SETTINGS
from barbershop.db import get_session
from barbershop.deps import require_admin
from barbershop.models import Setting, User
from barbershop.schemas import SettingPublic, SettingsUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/settings",
    tags=["settings"],
)


@router.get("", response_model=Dict[str, str])
def public_settings(session: Session = Depends(get_session)):
    values = {key: default for key, (default, _, _) in DEFAULT_SETTINGS.items()}
    for setting in session.exec(select(Setting)).all():
        values[setting.key] = setting.value
    return values


@router.get("/all", response_model=List[SettingPublic])
def all_settings(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    return session.exec(select(Setting).order_by(Setting.category, Setting.key)).all()


@router.put("", response_model=List[SettingPublic])
def update_settings(
    payload: SettingsUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    rows = {s.key: s for s in session.exec(select(Setting)).all()}

    unknown = sorted(set(payload.values) - set(rows))
    if unknown:
        raise HTTPException(status_code=422, detail=f"Unknown settings: {', '.join(unknown)}")

    changed = []
    for key, value in payload.values.items():
        row = rows[key]
        if row.value != value:
            row.value = value
            session.add(row)
            changed.append(key)

    if changed:
        session.commit()
        logger.info("Settings updated by %s: %s", admin.email, ", ".join(changed))

    return session.exec(select(Setting).order_by(Setting.category, Setting.key)).all()
