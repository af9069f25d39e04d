# =========================================================
# CASH FLOW ROUTER
#
# Revenue vs expenses for a rolling or calendar window:
# - 7d: today and the six days before it
# - this_week: from Sunday of the current week
# - this_month: from the first day of the current month
# =========================================================

from collections import OrderedDict
from datetime import date, timedelta, datetime, timezone
from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.models.expenses import Expense
from app.models.revenues import Revenue
from app.schemas.report import CashFlowRange, CashFlowResponse

router = APIRouter(prefix="/cash-flow", tags=["Cash Flow"])

PAYMENT_METHOD_BUCKETS = ("PIX", "Card", "Cash", "N/A")


def get_range_dates(range_name: str, today: date):
    if range_name == "this_week":
        # weekday(): Monday == 0, so Sunday is (weekday + 1) % 7 days back
        start_date = today - timedelta(days=(today.weekday() + 1) % 7)
    elif range_name == "this_month":
        start_date = today.replace(day=1)
    else:
        start_date = today - timedelta(days=6)

    return start_date, today


def build_cash_flow(revenues, expenses, start_date: date, end_date: date) -> dict:
    daily = OrderedDict()
    current = start_date
    while current <= end_date:
        daily[current] = {"date": current, "revenue": Decimal("0"), "expenses": Decimal("0")}
        current += timedelta(days=1)

    by_method = OrderedDict(
        (method, {"payment_method": method, "revenue": Decimal("0"), "expenses": Decimal("0")})
        for method in PAYMENT_METHOD_BUCKETS
    )

    total_revenue = Decimal("0")
    total_expenses = Decimal("0")

    for revenue in revenues:
        amount = Decimal(revenue.amount)
        total_revenue += amount
        if revenue.date in daily:
            daily[revenue.date]["revenue"] += amount
        by_method[revenue.payment_method or "N/A"]["revenue"] += amount

    for expense in expenses:
        amount = Decimal(expense.amount)
        total_expenses += amount
        if expense.date in daily:
            daily[expense.date]["expenses"] += amount
        by_method[expense.payment_method or "N/A"]["expenses"] += amount

    return {
        "start_date": start_date,
        "end_date": end_date,
        "total_revenue": total_revenue,
        "total_expenses": total_expenses,
        "balance": total_revenue - total_expenses,
        "daily": list(daily.values()),
        "by_payment_method": list(by_method.values()),
    }


@router.get("", response_model=CashFlowResponse)
def cash_flow(
    range: CashFlowRange = Query("7d"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    today = datetime.now(timezone.utc).date()
    start_date, end_date = get_range_dates(range, today)

    revenues = (
        db.query(Revenue)
        .filter(
            Revenue.business_id == current_user.business_id,
            Revenue.date.between(start_date, end_date),
        )
        .all()
    )

    expenses = (
        db.query(Expense)
        .filter(
            Expense.business_id == current_user.business_id,
            Expense.date.between(start_date, end_date),
        )
        .all()
    )

    report = build_cash_flow(revenues, expenses, start_date, end_date)
    report["range"] = range

    return report
