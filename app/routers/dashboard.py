# =========================================================
# DASHBOARD ROUTER
#
# One call for the landing page:
# - all-time revenue, expenses and profit
# - revenue vs expenses for the last 6 calendar months
# - the 5 most recent ledger entries
# - raw materials at or below minimum stock
# - the next 3 appointments from today on
# =========================================================

from datetime import date, datetime, timezone
from decimal import Decimal

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func

from app.database import get_db
from app.core.auth import get_current_user
from app.models.appointments import Appointment
from app.models.expenses import Expense
from app.models.raw_materials import RawMaterial
from app.models.revenues import Revenue
from app.schemas.report import DashboardOverviewResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

MONTHS_SHOWN = 6
RECENT_TRANSACTIONS = 5
UPCOMING_APPOINTMENTS = 3


def _month_starts(today: date, count: int) -> list[date]:
    year, month = today.year, today.month
    starts = []

    for _ in range(count):
        starts.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12

    return list(reversed(starts))


def _sum_amount(db: Session, model, business_id: int) -> Decimal:
    total = (
        db.query(func.coalesce(func.sum(model.amount), 0))
        .filter(model.business_id == business_id)
        .scalar()
    )
    return Decimal(str(total or 0)).quantize(Decimal("0.01"))


def monthly_totals(revenues, expenses, today: date) -> list[dict]:
    months = {
        start.strftime("%Y-%m"): {
            "month": start.strftime("%Y-%m"),
            "revenue": Decimal("0"),
            "expenses": Decimal("0"),
        }
        for start in _month_starts(today, MONTHS_SHOWN)
    }

    for revenue in revenues:
        bucket = months.get(revenue.date.strftime("%Y-%m"))
        if bucket is not None:
            bucket["revenue"] += Decimal(revenue.amount)

    for expense in expenses:
        bucket = months.get(expense.date.strftime("%Y-%m"))
        if bucket is not None:
            bucket["expenses"] += Decimal(expense.amount)

    return list(months.values())


@router.get("/overview", response_model=DashboardOverviewResponse)
def overview(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    business_id = current_user.business_id
    today = datetime.now(timezone.utc).date()
    window_start = _month_starts(today, MONTHS_SHOWN)[0]

    total_revenue = _sum_amount(db, Revenue, business_id)
    total_expenses = _sum_amount(db, Expense, business_id)

    window_revenues = (
        db.query(Revenue)
        .filter(Revenue.business_id == business_id, Revenue.date >= window_start)
        .all()
    )
    window_expenses = (
        db.query(Expense)
        .filter(Expense.business_id == business_id, Expense.date >= window_start)
        .all()
    )

    recent_revenues = (
        db.query(Revenue)
        .filter(Revenue.business_id == business_id)
        .order_by(Revenue.date.desc(), Revenue.id.desc())
        .limit(RECENT_TRANSACTIONS)
        .all()
    )
    recent_expenses = (
        db.query(Expense)
        .filter(Expense.business_id == business_id)
        .order_by(Expense.date.desc(), Expense.id.desc())
        .limit(RECENT_TRANSACTIONS)
        .all()
    )

    recent = [
        {"kind": "revenue", "id": r.id, "description": r.source, "amount": r.amount, "date": r.date}
        for r in recent_revenues
    ] + [
        {"kind": "expense", "id": e.id, "description": e.description, "amount": e.amount, "date": e.date}
        for e in recent_expenses
    ]
    recent.sort(key=lambda item: item["date"], reverse=True)

    low_stock_count = (
        db.query(func.count(RawMaterial.id))
        .filter(
            RawMaterial.business_id == business_id,
            RawMaterial.quantity <= RawMaterial.min_stock,
        )
        .scalar()
    )

    upcoming = (
        db.query(Appointment)
        .filter(Appointment.business_id == business_id, Appointment.date >= today)
        .order_by(Appointment.date, Appointment.time, Appointment.id)
        .limit(UPCOMING_APPOINTMENTS)
        .all()
    )

    return {
        "total_revenue": total_revenue,
        "total_expenses": total_expenses,
        "profit": total_revenue - total_expenses,
        "low_stock_count": low_stock_count or 0,
        "monthly": monthly_totals(window_revenues, window_expenses, today),
        "recent_transactions": recent[:RECENT_TRANSACTIONS],
        "upcoming_appointments": upcoming,
    }
