from datetime import datetime, timedelta, timezone

import pytest


@pytest.fixture
def sold_products(auth_client, make_raw_material, make_product):
    flour = make_raw_material(cost=4)
    cake = make_product(
        name="Bolo",
        sale_price=40,
        recipe=[{"raw_material_id": flour["id"], "quantity": 2.5}],
        flavors=[{"name": "Chocolate", "stock": 10}],
    )
    pastel = make_product(
        name="Pastel",
        sale_price=8,
        final_cost=3,
        flavors=[{"name": "Queijo", "stock": 10}],
    )

    for product, quantity in [(cake, 2), (pastel, 5), (cake, 1)]:
        response = auth_client.post(
            "/sales",
            json={
                "product_id": product["id"],
                "flavor_id": product["flavors"][0]["id"],
                "quantity": quantity,
            },
        )
        assert response.status_code == 201

    return cake, pastel


def test_summary_report(auth_client, sold_products):
    today = datetime.now(timezone.utc).date()
    auth_client.post(
        "/expenses",
        json={"amount": 20, "description": "Packaging", "date": today.isoformat()},
    )

    response = auth_client.get("/reports/summary")

    assert response.status_code == 200
    body = response.json()
    # 3 * 40 + 5 * 8
    assert float(body["sales_revenue"]) == 160
    assert float(body["total_revenue"]) == 160
    assert float(body["total_expenses"]) == 20
    assert float(body["balance"]) == 140
    assert body["total_sales"] == 3
    assert body["total_items_sold"] == 8
    # 3 * 10 + 5 * 3
    assert float(body["cost_of_goods_sold"]) == 45
    assert float(body["gross_profit"]) == 115
    assert float(body["profit_margin_percentage"]) == 71.88


def test_summary_report_for_an_empty_period(auth_client, sold_products):
    past = datetime.now(timezone.utc).date() - timedelta(days=365)

    response = auth_client.get(
        "/reports/summary",
        params={"start_date": past.isoformat(), "end_date": (past + timedelta(days=1)).isoformat()},
    )

    body = response.json()
    assert body["total_sales"] == 0
    assert float(body["sales_revenue"]) == 0
    assert float(body["profit_margin_percentage"]) == 0


def test_summary_rejects_inverted_period(auth_client):
    response = auth_client.get(
        "/reports/summary",
        params={"start_date": "2026-02-01", "end_date": "2026-01-01"},
    )

    assert response.status_code == 422
    assert response.json()["success"] is False


def test_product_sales_report(auth_client, sold_products):
    cake, pastel = sold_products

    response = auth_client.get("/reports/products")

    assert response.status_code == 200
    body = response.json()
    assert body["total_products"] == 2

    first, second = body["results"]
    assert first["product_id"] == cake["id"]
    assert first["total_quantity_sold"] == 3
    assert float(first["total_revenue"]) == 120
    assert float(first["total_profit"]) == 90
    assert second["product_name"] == "Pastel"
    assert float(second["total_cost"]) == 15


def test_product_sales_report_search(auth_client, sold_products):
    response = auth_client.get("/reports/products", params={"search": "pas"})

    assert [r["product_name"] for r in response.json()["results"]] == ["Pastel"]
