from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace

from app.routers.dashboard import monthly_totals


def test_monthly_totals_cover_six_months_across_year_end():
    revenues = [
        SimpleNamespace(date=date(2026, 2, 10), amount=Decimal("100")),
        SimpleNamespace(date=date(2025, 9, 30), amount=Decimal("999")),
        SimpleNamespace(date=date(2025, 9, 1), amount=Decimal("1")),
    ]
    expenses = [SimpleNamespace(date=date(2025, 12, 24), amount=Decimal("40"))]

    months = monthly_totals(revenues, expenses, today=date(2026, 2, 15))

    assert [m["month"] for m in months] == [
        "2025-09", "2025-10", "2025-11", "2025-12", "2026-01", "2026-02",
    ]
    assert months[0]["revenue"] == Decimal("1000")
    assert months[3]["expenses"] == Decimal("40")
    assert months[-1]["revenue"] == Decimal("100")


def test_overview(auth_client, make_raw_material):
    today = datetime.now(timezone.utc).date()

    make_raw_material(description="Butter", quantity=1, min_stock=3)
    make_raw_material(description="Flour", quantity=10, min_stock=3)

    for day_offset in range(6):
        auth_client.post(
            "/revenues",
            json={
                "amount": 10 + day_offset,
                "source": f"Order {day_offset}",
                "date": (today - timedelta(days=day_offset)).isoformat(),
            },
        )
    auth_client.post(
        "/expenses",
        json={"amount": 25, "description": "Rent share", "date": today.isoformat()},
    )

    for offset, title in [(-1, "Past"), (0, "Today"), (2, "Soon"), (5, "Later"), (9, "Far")]:
        auth_client.post(
            "/appointments",
            json={
                "title": title,
                "date": (today + timedelta(days=offset)).isoformat(),
                "time": "10:00",
            },
        )

    response = auth_client.get("/dashboard/overview")

    assert response.status_code == 200
    body = response.json()
    # 10 + 11 + ... + 15
    assert float(body["total_revenue"]) == 75
    assert float(body["total_expenses"]) == 25
    assert float(body["profit"]) == 50
    assert body["low_stock_count"] == 1
    assert len(body["monthly"]) == 6
    assert body["monthly"][-1]["month"] == today.strftime("%Y-%m")

    recent = body["recent_transactions"]
    assert len(recent) == 5
    assert recent[0]["date"] == today.isoformat()
    assert {t["kind"] for t in recent} == {"revenue", "expense"}

    assert [a["title"] for a in body["upcoming_appointments"]] == ["Today", "Soon", "Later"]


def test_overview_for_a_new_account(auth_client):
    body = auth_client.get("/dashboard/overview").json()

    assert float(body["profit"]) == 0
    assert body["recent_transactions"] == []
    assert body["upcoming_appointments"] == []
    assert all(float(m["revenue"]) == 0 for m in body["monthly"])
