# app/routers/purchases.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import NotFoundError
from app.models.purchases import Purchase
from app.schemas.purchase import PurchaseCreate, PurchaseResponse, PurchaseActionResult
from app.services import stock

router = APIRouter(prefix="/purchases", tags=["Purchases"])


@router.post("", response_model=PurchaseActionResult, status_code=status.HTTP_201_CREATED)
def create_purchase(
    purchase_data: PurchaseCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    purchase = stock.purchase(db, current_user.business_id, purchase_data)

    return {
        "success": True,
        "message": "Purchase recorded and raw material stock updated.",
        "purchase": purchase,
    }


@router.get("", response_model=list[PurchaseResponse])
def list_purchases(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    raw_material_id: Optional[int] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    query = db.query(Purchase).filter(Purchase.business_id == current_user.business_id)

    if start_date:
        query = query.filter(Purchase.date >= start_date)

    if end_date:
        query = query.filter(Purchase.date <= end_date)

    if raw_material_id:
        query = query.filter(Purchase.raw_material_id == raw_material_id)

    return (
        query
        .order_by(Purchase.date.desc(), Purchase.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


@router.get("/{purchase_id}", response_model=PurchaseResponse)
def get_purchase(
    purchase_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    purchase = (
        db.query(Purchase)
        .filter(
            Purchase.id == purchase_id,
            Purchase.business_id == current_user.business_id,
        )
        .first()
    )

    if not purchase:
        raise NotFoundError("Purchase not found")

    return purchase
