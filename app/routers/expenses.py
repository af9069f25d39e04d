# app/routers/expenses.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import NotFoundError
from app.models.expenses import Expense
from app.schemas.ledger import ExpenseCreate, ExpenseUpdate, ExpenseResponse

router = APIRouter(prefix="/expenses", tags=["Expenses"])


def _get_expense(db: Session, business_id: int, expense_id: int) -> Expense:
    expense = (
        db.query(Expense)
        .filter(
            Expense.id == expense_id,
            Expense.business_id == business_id,
        )
        .first()
    )

    if not expense:
        raise NotFoundError("Expense not found")

    return expense


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense_data: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    expense = Expense(
        business_id=current_user.business_id,
        **expense_data.model_dump(),
    )

    db.add(expense)
    db.commit()
    db.refresh(expense)

    return expense


@router.get("", response_model=list[ExpenseResponse])
def list_expenses(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    category: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
):
    query = db.query(Expense).filter(Expense.business_id == current_user.business_id)

    if start_date:
        query = query.filter(Expense.date >= start_date)

    if end_date:
        query = query.filter(Expense.date <= end_date)

    if category:
        query = query.filter(Expense.category == category)

    return (
        query
        .order_by(Expense.date.desc(), Expense.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return _get_expense(db, current_user.business_id, expense_id)


@router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    expense_data: ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    expense = _get_expense(db, current_user.business_id, expense_id)

    for field, value in expense_data.model_dump(exclude_unset=True).items():
        if value is None and field != "payment_method":
            continue
        setattr(expense, field, value)

    db.commit()
    db.refresh(expense)

    return expense


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    expense = _get_expense(db, current_user.business_id, expense_id)

    db.delete(expense)
    db.commit()

    return None
