# app/models/appointments.py

from sqlalchemy import Column, Date, Index, Integer, String, ForeignKey, JSON, DateTime
from sqlalchemy.sql import func

from app.database import Base


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)

    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    time = Column(String(5), nullable=False)
    attendees = Column(JSON, nullable=False, default=list)
    description = Column(String, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_appointments_business_date", "business_id", "date"),
    )
