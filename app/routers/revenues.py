# app/routers/revenues.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import ConflictError, NotFoundError
from app.models.revenues import Revenue
from app.schemas.ledger import RevenueCreate, RevenueUpdate, RevenueResponse

router = APIRouter(prefix="/revenues", tags=["Revenues"])


def _get_revenue(db: Session, business_id: int, revenue_id: int) -> Revenue:
    revenue = (
        db.query(Revenue)
        .filter(
            Revenue.id == revenue_id,
            Revenue.business_id == business_id,
        )
        .first()
    )

    if not revenue:
        raise NotFoundError("Revenue not found")

    return revenue


def _ensure_not_paired(revenue: Revenue):
    if revenue.sale_id is not None:
        raise ConflictError("This revenue belongs to a sale. Cancel the sale instead.")


@router.post("", response_model=RevenueResponse, status_code=status.HTTP_201_CREATED)
def create_revenue(
    revenue_data: RevenueCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    revenue = Revenue(
        business_id=current_user.business_id,
        **revenue_data.model_dump(),
    )

    db.add(revenue)
    db.commit()
    db.refresh(revenue)

    return revenue


@router.get("", response_model=list[RevenueResponse])
def list_revenues(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
):
    query = db.query(Revenue).filter(Revenue.business_id == current_user.business_id)

    if start_date:
        query = query.filter(Revenue.date >= start_date)

    if end_date:
        query = query.filter(Revenue.date <= end_date)

    return (
        query
        .order_by(Revenue.date.desc(), Revenue.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


@router.get("/{revenue_id}", response_model=RevenueResponse)
def get_revenue(
    revenue_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return _get_revenue(db, current_user.business_id, revenue_id)


@router.put("/{revenue_id}", response_model=RevenueResponse)
def update_revenue(
    revenue_id: int,
    revenue_data: RevenueUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    revenue = _get_revenue(db, current_user.business_id, revenue_id)
    _ensure_not_paired(revenue)

    for field, value in revenue_data.model_dump(exclude_unset=True).items():
        if value is None and field != "payment_method":
            continue
        setattr(revenue, field, value)

    db.commit()
    db.refresh(revenue)

    return revenue


@router.delete("/{revenue_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_revenue(
    revenue_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    revenue = _get_revenue(db, current_user.business_id, revenue_id)
    _ensure_not_paired(revenue)

    db.delete(revenue)
    db.commit()

    return None
