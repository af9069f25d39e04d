# schemas/user.py

from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128, description="Plain password, stored as a pbkdf2 hash.")
    business_name: str = Field(..., min_length=1, description="Account name; every record is scoped to it.")
    display_name: str | None = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: int
    email: EmailStr
    display_name: str | None
    business_id: int
    business_name: str | None
    created_at: datetime

    class Config:
        from_attributes = True
