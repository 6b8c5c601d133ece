# barbershop/schemas.py

from pydantic import BaseModel, Field, field_validator, model_validator
from enum import Enum
from datetime import datetime, date, time
from typing import Dict, List, Optional


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"

class UserPublic(BaseModel):
    id: int
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    is_admin: bool

class UserCreate(BaseModel):
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6, max_length=72)
    full_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20)

class AdminCreate(BaseModel):
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6, max_length=72)

class BarberCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    photo_url: Optional[str] = None
    bio: Optional[str] = None

class BarberUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    is_active: Optional[bool] = None

class BarberPublic(BaseModel):
    id: int
    name: str
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    is_active: bool
    created_at: datetime

class ActiveToggle(BaseModel):
    is_active: bool

class PhotoUploaded(BaseModel):
    url: str

class ScheduleUpdate(BaseModel):
    start_time: time
    end_time: time
    is_active: bool = True
    break_start: Optional[time] = None
    break_end: Optional[time] = None

    @model_validator(mode="after")
    def check_break_pair(self) -> "ScheduleUpdate":
        if (self.break_start is None) != (self.break_end is None):
            raise ValueError("break_start and break_end must be set together")
        return self

class SchedulePublic(BaseModel):
    id: int
    barber_id: int
    day_of_week: int    # 0=Mon, 1=Tues....
    start_time: time
    end_time: time
    is_active: bool
    break_start: Optional[time] = None
    break_end: Optional[time] = None

class ServiceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    duration_minutes: int = Field(default=30, gt=0, le=24 * 60)
    price: float = Field(gt=0)
    is_active: bool = True

class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, gt=0, le=24 * 60)
    price: Optional[float] = Field(default=None, gt=0)
    is_active: Optional[bool] = None

class ServicePublic(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    duration_minutes: int
    price: float
    is_active: bool

class AppointmentCreate(BaseModel):
    client_name: str = Field(min_length=2, max_length=100)
    client_phone: str = Field(min_length=10, max_length=15, pattern=r"^[\d\s\-()]+$")
    barber_id: int
    service_id: int
    appointment_date: date
    appointment_time: time

    @field_validator("appointment_time")
    @classmethod
    def whole_minutes(cls, value: time) -> time:
        if value.second or value.microsecond:
            raise ValueError("appointment_time must not carry seconds")
        return value

class AppointmentPublic(BaseModel):
    id: int
    client_name: str
    client_phone: str
    barber_id: int
    service_id: int
    appointment_date: date
    appointment_time: time
    status: AppointmentStatus
    user_id: Optional[int] = None
    created_at: datetime
    service: Optional[ServicePublic] = None

class StatusUpdate(BaseModel):
    status: AppointmentStatus

class AvailabilityResponse(BaseModel):
    barber_id: int
    date: date
    duration_minutes: int
    available_starts: List[str]

class SettingPublic(BaseModel):
    key: str
    value: str
    label: str
    category: str

class SettingsUpdate(BaseModel):
    values: Dict[str, str]
