# =========================================================
# SALES ROUTER
#
# - Creating a sale takes flavor stock and writes the paired
#   revenue in one transaction
# - Deleting a sale is a cancellation: stock goes back and
#   the paired revenue is removed in one transaction
# =========================================================

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import NotFoundError
from app.models.sales import Sale
from app.schemas.common import ActionResult
from app.schemas.sale import SaleCreate, SaleResponse, SaleActionResult
from app.services import stock

router = APIRouter(prefix="/sales", tags=["Sales"])


# =========================================================
# CREATE SALE
# =========================================================
@router.post("", response_model=SaleActionResult, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    sale = stock.sell(db, current_user.business_id, sale_data)

    return {
        "success": True,
        "message": "Sale recorded and stock updated.",
        "sale": sale,
    }


# =========================================================
# LIST SALES
# =========================================================
@router.get("", response_model=list[SaleResponse])
def list_sales(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    product_id: Optional[int] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    query = db.query(Sale).filter(Sale.business_id == current_user.business_id)

    if start_date:
        query = query.filter(Sale.date >= start_date)

    if end_date:
        query = query.filter(Sale.date <= end_date)

    if product_id:
        query = query.filter(Sale.product_id == product_id)

    return (
        query
        .order_by(Sale.date.desc(), Sale.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


# =========================================================
# GET SINGLE SALE
# =========================================================
@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    sale = (
        db.query(Sale)
        .filter(
            Sale.id == sale_id,
            Sale.business_id == current_user.business_id,
        )
        .first()
    )

    if not sale:
        raise NotFoundError("Sale not found")

    return sale


# =========================================================
# CANCEL SALE
# =========================================================
@router.delete("/{sale_id}", response_model=ActionResult)
def cancel_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    stock.cancel_sale(db, current_user.business_id, sale_id)

    return {
        "success": True,
        "message": "Sale cancelled and stock restored.",
    }
