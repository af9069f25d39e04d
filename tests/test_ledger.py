def test_revenue_crud(auth_client):
    created = auth_client.post(
        "/revenues",
        json={"amount": 150, "source": "Catering", "date": "2026-05-02", "payment_method": "Card"},
    )

    assert created.status_code == 201
    revenue = created.json()
    assert revenue["sale_id"] is None

    updated = auth_client.put(f"/revenues/{revenue['id']}", json={"amount": 175.5})
    assert updated.status_code == 200
    assert updated.json()["amount"] == 175.5
    assert updated.json()["source"] == "Catering"

    assert [r["id"] for r in auth_client.get("/revenues").json()] == [revenue["id"]]

    assert auth_client.delete(f"/revenues/{revenue['id']}").status_code == 204
    assert auth_client.get(f"/revenues/{revenue['id']}").status_code == 404


def test_revenue_amount_cannot_be_negative(auth_client):
    response = auth_client.post(
        "/revenues",
        json={"amount": -1, "source": "Refund", "date": "2026-05-02"},
    )

    assert response.status_code == 422


def test_expense_crud(auth_client):
    created = auth_client.post(
        "/expenses",
        json={
            "amount": 89.9,
            "category": "Software",
            "description": "POS subscription",
            "date": "2026-05-03",
            "payment_method": "Card",
        },
    )

    assert created.status_code == 201
    expense = created.json()
    assert expense["category"] == "Software"

    updated = auth_client.put(f"/expenses/{expense['id']}", json={"category": "Other"})
    assert updated.json()["category"] == "Other"
    assert updated.json()["amount"] == 89.9

    assert auth_client.delete(f"/expenses/{expense['id']}").status_code == 204
    assert auth_client.get("/expenses").json() == []


def test_expense_category_is_validated(auth_client):
    response = auth_client.post(
        "/expenses",
        json={"amount": 10, "category": "Taxes", "description": "x", "date": "2026-05-03"},
    )

    assert response.status_code == 422


def test_expense_category_defaults_to_other(auth_client):
    response = auth_client.post(
        "/expenses",
        json={"amount": 10, "description": "Misc", "date": "2026-05-03"},
    )

    assert response.json()["category"] == "Other"


def test_list_expenses_filters_by_category_and_dates(auth_client):
    for category, day in [("Marketing", "2026-05-01"), ("Team", "2026-05-02"), ("Team", "2026-06-01")]:
        auth_client.post(
            "/expenses",
            json={"amount": 10, "category": category, "description": category, "date": day},
        )

    response = auth_client.get(
        "/expenses",
        params={"category": "Team", "start_date": "2026-05-01", "end_date": "2026-05-31"},
    )

    assert [e["date"] for e in response.json()] == ["2026-05-02"]


def test_ledger_is_scoped_to_the_account(auth_client, other_client):
    revenue = auth_client.post(
        "/revenues",
        json={"amount": 10, "source": "Tips", "date": "2026-05-02"},
    ).json()

    assert other_client.get("/revenues").json() == []
    assert other_client.delete(f"/revenues/{revenue['id']}").status_code == 404
