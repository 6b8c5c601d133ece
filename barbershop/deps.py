# barbershop/deps.py

from fastapi import Depends, HTTPException

from .auth import get_current_user
from .models import User

def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Forbidden")
    return user
