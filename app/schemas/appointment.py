# schemas/appointment.py

import datetime as dt
from typing import List
from pydantic import BaseModel, Field


class AppointmentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    date: dt.date
    time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    attendees: List[str] = []
    description: str = ""


class AppointmentUpdate(BaseModel):
    title: str | None = None
    date: dt.date | None = None
    time: str | None = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    attendees: List[str] | None = None
    description: str | None = None


class AppointmentResponse(BaseModel):
    id: int
    title: str
    date: dt.date
    time: str
    attendees: List[str]
    description: str

    class Config:
        from_attributes = True
