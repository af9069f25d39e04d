# app/routers/appointments.py

import json
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import NotFoundError
from app.core.rate_limiter import limiter
from app.ai.client import GenerativeClient, get_generative_client
from app.ai.appointment_summary import AppointmentSummaryInput, generate_appointment_summary
from app.models.appointments import Appointment
from app.routers.ai import run_ai_action
from app.schemas.appointment import AppointmentCreate, AppointmentUpdate, AppointmentResponse

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def _get_appointment(db: Session, business_id: int, appointment_id: int) -> Appointment:
    appointment = (
        db.query(Appointment)
        .filter(
            Appointment.id == appointment_id,
            Appointment.business_id == business_id,
        )
        .first()
    )

    if not appointment:
        raise NotFoundError("Appointment not found")

    return appointment


def calendar_data_for(appointments) -> str:
    return json.dumps(
        [
            {
                "title": a.title,
                "date": a.date.isoformat(),
                "time": a.time,
                "attendees": list(a.attendees or []),
                "description": a.description,
            }
            for a in appointments
        ],
        ensure_ascii=False,
    )


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    appointment_data: AppointmentCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    appointment = Appointment(
        business_id=current_user.business_id,
        **appointment_data.model_dump(),
    )

    db.add(appointment)
    db.commit()
    db.refresh(appointment)

    return appointment


@router.get("", response_model=list[AppointmentResponse])
def list_appointments(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    day: Optional[date] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
):
    query = db.query(Appointment).filter(Appointment.business_id == current_user.business_id)

    if day:
        query = query.filter(Appointment.date == day)

    if start_date:
        query = query.filter(Appointment.date >= start_date)

    if end_date:
        query = query.filter(Appointment.date <= end_date)

    return query.order_by(Appointment.date, Appointment.time, Appointment.id).all()


@router.post("/summary")
@limiter.limit("10/minute")
def summarize_day(
    request: Request,
    day: date = Query(...),
    db: Session = Depends(get_db),
    client: GenerativeClient = Depends(get_generative_client),
    current_user=Depends(get_current_user),
):
    appointments = (
        db.query(Appointment)
        .filter(
            Appointment.business_id == current_user.business_id,
            Appointment.date == day,
        )
        .order_by(Appointment.time, Appointment.id)
        .all()
    )

    data = AppointmentSummaryInput(calendar_data=calendar_data_for(appointments))

    return run_ai_action(generate_appointment_summary, data, client)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return _get_appointment(db, current_user.business_id, appointment_id)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: int,
    appointment_data: AppointmentUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    appointment = _get_appointment(db, current_user.business_id, appointment_id)

    for field, value in appointment_data.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(appointment, field, value)

    db.commit()
    db.refresh(appointment)

    return appointment


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    appointment = _get_appointment(db, current_user.business_id, appointment_id)

    db.delete(appointment)
    db.commit()

    return None
