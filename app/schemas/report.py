# schemas/report.py

from pydantic import BaseModel
import datetime as dt
from decimal import Decimal
from typing import List, Literal

from app.schemas.appointment import AppointmentResponse

CashFlowRange = Literal["7d", "this_week", "this_month"]


class DailyCashFlow(BaseModel):
    date: dt.date
    revenue: Decimal
    expenses: Decimal


class PaymentMethodCashFlow(BaseModel):
    payment_method: str
    revenue: Decimal
    expenses: Decimal


class CashFlowResponse(BaseModel):
    range: CashFlowRange
    start_date: dt.date
    end_date: dt.date
    total_revenue: Decimal
    total_expenses: Decimal
    balance: Decimal
    daily: List[DailyCashFlow]
    by_payment_method: List[PaymentMethodCashFlow]


class SummaryReportResponse(BaseModel):
    start_date: dt.date
    end_date: dt.date
    total_revenue: Decimal
    total_expenses: Decimal
    balance: Decimal
    total_sales: int
    total_items_sold: int
    sales_revenue: Decimal
    cost_of_goods_sold: Decimal
    gross_profit: Decimal
    profit_margin_percentage: Decimal


class ProductSalesResponse(BaseModel):
    product_id: int
    product_name: str
    total_quantity_sold: int
    total_revenue: Decimal
    total_cost: Decimal
    total_profit: Decimal


class ProductSalesReportResponse(BaseModel):
    start_date: dt.date
    end_date: dt.date
    total_products: int
    results: List[ProductSalesResponse]


class MonthlyTotals(BaseModel):
    month: str
    revenue: Decimal
    expenses: Decimal


class RecentTransaction(BaseModel):
    kind: Literal["revenue", "expense"]
    id: int
    description: str
    amount: Decimal
    date: dt.date


class DashboardOverviewResponse(BaseModel):
    total_revenue: Decimal
    total_expenses: Decimal
    profit: Decimal
    low_stock_count: int
    monthly: List[MonthlyTotals]
    recent_transactions: List[RecentTransaction]
    upcoming_appointments: List[AppointmentResponse]
