# =========================================================
# REPORTS ROUTER
#
# - Summary: ledger totals plus sales volume, cost of goods
#   sold (quantity x product final cost) and gross margin
# - Products: quantity, revenue, cost and profit per product
#
# Defaults to the last 30 days when no dates are given.
# Schema-safe: Always returns Decimal (never None)
# =========================================================

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import date, timedelta, datetime, timezone
from decimal import Decimal
from typing import Optional

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import ValidationError
from app.models.expenses import Expense
from app.models.finished_products import FinishedProduct
from app.models.revenues import Revenue
from app.models.sales import Sale
from app.schemas.report import (
    SummaryReportResponse,
    ProductSalesReportResponse,
    ProductSalesResponse,
)

router = APIRouter(prefix="/reports", tags=["Reports"])


def _resolve_period(start_date: Optional[date], end_date: Optional[date]):
    today = datetime.now(timezone.utc).date()

    end_date = end_date or today
    start_date = start_date or (end_date - timedelta(days=29))

    if start_date > end_date:
        raise ValidationError("start_date must be on or before end_date")

    return start_date, end_date


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


def _margin(profit: Decimal, revenue: Decimal) -> Decimal:
    if revenue == 0:
        return Decimal("0.00")
    return ((profit / revenue) * 100).quantize(Decimal("0.01"))


# =========================================================
# CORE SUMMARY CALCULATION
# =========================================================
def _calculate_summary(
    db: Session,
    business_id: int,
    start_date: date,
    end_date: date,
):
    total_revenue = (
        db.query(func.coalesce(func.sum(Revenue.amount), 0))
        .filter(
            Revenue.business_id == business_id,
            Revenue.date.between(start_date, end_date),
        )
        .scalar()
    )

    total_expenses = (
        db.query(func.coalesce(func.sum(Expense.amount), 0))
        .filter(
            Expense.business_id == business_id,
            Expense.date.between(start_date, end_date),
        )
        .scalar()
    )

    sale_filter = [
        Sale.business_id == business_id,
        Sale.date.between(start_date, end_date),
    ]

    total_sales, total_items_sold, sales_revenue = (
        db.query(
            func.count(Sale.id),
            func.coalesce(func.sum(Sale.quantity), 0),
            func.coalesce(func.sum(Sale.unit_price * Sale.quantity), 0),
        )
        .filter(*sale_filter)
        .one()
    )

    cost_of_goods_sold = (
        db.query(func.coalesce(func.sum(FinishedProduct.final_cost * Sale.quantity), 0))
        .select_from(Sale)
        .join(FinishedProduct, Sale.product_id == FinishedProduct.id)
        .filter(*sale_filter)
        .scalar()
    )

    total_revenue = _money(total_revenue)
    total_expenses = _money(total_expenses)
    sales_revenue = _money(sales_revenue)
    cost_of_goods_sold = _money(cost_of_goods_sold)
    gross_profit = sales_revenue - cost_of_goods_sold

    return {
        "start_date": start_date,
        "end_date": end_date,
        "total_revenue": total_revenue,
        "total_expenses": total_expenses,
        "balance": total_revenue - total_expenses,
        "total_sales": total_sales,
        "total_items_sold": int(total_items_sold or 0),
        "sales_revenue": sales_revenue,
        "cost_of_goods_sold": cost_of_goods_sold,
        "gross_profit": gross_profit,
        "profit_margin_percentage": _margin(gross_profit, sales_revenue),
    }


# =========================================================
# CORE PRODUCT SALES CALCULATION
# =========================================================
def _calculate_product_sales(
    db: Session,
    business_id: int,
    start_date: date,
    end_date: date,
    search: Optional[str],
    limit: int,
    offset: int,
):
    line_total = Sale.unit_price * Sale.quantity

    base_query = (
        db.query(
            FinishedProduct.id.label("product_id"),
            FinishedProduct.name.label("product_name"),
            func.coalesce(func.sum(Sale.quantity), 0).label("total_quantity_sold"),
            func.coalesce(func.sum(line_total), 0).label("total_revenue"),
            func.coalesce(
                func.sum(FinishedProduct.final_cost * Sale.quantity), 0
            ).label("total_cost"),
        )
        .select_from(FinishedProduct)
        .join(Sale, Sale.product_id == FinishedProduct.id)
        .filter(
            Sale.business_id == business_id,
            Sale.date.between(start_date, end_date),
        )
        .group_by(FinishedProduct.id, FinishedProduct.name)
    )

    if search:
        base_query = base_query.filter(FinishedProduct.name.ilike(f"%{search}%"))

    total_products = base_query.count()

    results = (
        base_query
        .order_by(func.sum(line_total).desc(), FinishedProduct.id)
        .limit(limit)
        .offset(offset)
        .all()
    )

    formatted_results = []

    for row in results:
        total_revenue = _money(row.total_revenue)
        total_cost = _money(row.total_cost)

        formatted_results.append(
            ProductSalesResponse(
                product_id=row.product_id,
                product_name=row.product_name,
                total_quantity_sold=row.total_quantity_sold,
                total_revenue=total_revenue,
                total_cost=total_cost,
                total_profit=total_revenue - total_cost,
            )
        )

    return {
        "start_date": start_date,
        "end_date": end_date,
        "total_products": total_products,
        "results": formatted_results,
    }


# =========================================================
# SUMMARY REPORT
# =========================================================
@router.get("/summary", response_model=SummaryReportResponse)
def summary_report(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    start_date, end_date = _resolve_period(start_date, end_date)

    return _calculate_summary(
        db,
        current_user.business_id,
        start_date,
        end_date,
    )


# =========================================================
# PRODUCT SALES REPORT
# =========================================================
@router.get("/products", response_model=ProductSalesReportResponse)
def product_sales_report(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    search: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    start_date, end_date = _resolve_period(start_date, end_date)

    return _calculate_product_sales(
        db,
        current_user.business_id,
        start_date,
        end_date,
        search,
        limit,
        offset,
    )
