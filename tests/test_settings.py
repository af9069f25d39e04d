def test_settings_default_document(auth_client):
    response = auth_client.get("/settings")

    assert response.status_code == 200
    body = response.json()
    assert body["default_profit_margin"] == 30
    assert body["product_categories"] == ["Bolo", "Pastel", "Bebida"]
    assert body["taxes"] == {"icms": 0, "iss": 0, "pis": 0, "cofins": 0}
    assert set(body["payment_rates"]) == {"credit", "debit", "pix", "mercado_pago"}
    assert set(body["platform_fees"]) == {"ifood", "ta_na_mesa"}


def test_settings_put_replaces_whole_document(auth_client):
    first = {
        "taxes": {"icms": 18, "iss": 5},
        "payment_rates": {"credit": 4.99, "pix": 0.99},
        "platform_fees": {"ifood": 27},
        "default_profit_margin": 45,
        "product_categories": ["Bolo", "Torta"],
    }
    auth_client.put("/settings", json=first)

    response = auth_client.put("/settings", json={"default_profit_margin": 50})

    assert response.status_code == 200
    body = response.json()
    assert body["default_profit_margin"] == 50
    assert body["taxes"]["icms"] == 0
    assert body["product_categories"] == ["Bolo", "Pastel", "Bebida"]
    assert auth_client.get("/settings").json() == body


def test_settings_rates_are_validated(auth_client):
    response = auth_client.put("/settings", json={"taxes": {"icms": 120}})

    assert response.status_code == 422


def test_margin_change_feeds_product_pricing(auth_client, make_product):
    product = make_product(final_cost=10, sale_price=25)
    auth_client.put("/settings", json={"default_profit_margin": 100})

    body = auth_client.get(f"/finished-products/{product['id']}/pricing").json()

    assert body["default_profit_margin"] == 100
    assert body["margin_price"] == 20
    assert body["markup_percentage"] == 150
