from app.models.flavors import Flavor
from app.models.raw_materials import RawMaterial


def test_create_product_with_recipe_calculates_cost(auth_client, make_raw_material, make_product):
    flour = make_raw_material(description="Flour", cost=2.5)
    eggs = make_raw_material(description="Eggs", cost=0.8, unit="UN")

    product = make_product(
        name="Bolo de Cenoura",
        sale_price=45,
        recipe=[
            {"raw_material_id": flour["id"], "quantity": 0.5},
            {"raw_material_id": eggs["id"], "quantity": 3},
        ],
        flavors=[{"name": "Chocolate"}, {"name": "Natural"}],
    )

    # 0.5 * 2.5 + 3 * 0.8
    assert product["final_cost"] == 3.65
    assert [f["name"] for f in product["flavors"]] == ["Chocolate", "Natural"]
    assert all(f["stock"] == 0 for f in product["flavors"])
    assert len(product["recipe"]) == 2


def test_explicit_final_cost_wins(make_product):
    product = make_product(final_cost=12, sale_price=30)

    assert product["final_cost"] == 12


def test_recipe_with_unknown_material_is_rejected(auth_client):
    response = auth_client.post(
        "/finished-products",
        json={
            "name": "Pastel",
            "sale_price": 10,
            "recipe": [{"raw_material_id": 999, "quantity": 1}],
        },
    )

    assert response.status_code == 404


def test_duplicate_product_name_is_rejected(auth_client, make_product):
    make_product(name="Pastel")

    response = auth_client.post("/finished-products", json={"name": "Pastel", "sale_price": 8})

    assert response.status_code == 409


def test_update_recipe_recalculates_cost(auth_client, make_raw_material, make_product):
    flour = make_raw_material(cost=2)
    sugar = make_raw_material(description="Sugar", cost=5)
    product = make_product(recipe=[{"raw_material_id": flour["id"], "quantity": 1}])

    response = auth_client.put(
        f"/finished-products/{product['id']}",
        json={"recipe": [{"raw_material_id": sugar["id"], "quantity": 2}]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["final_cost"] == 10
    assert [r["raw_material_id"] for r in body["recipe"]] == [sugar["id"]]


def test_add_and_delete_flavor(auth_client, make_product):
    product = make_product(flavors=[{"name": "Chocolate"}])

    added = auth_client.post(
        f"/finished-products/{product['id']}/flavors",
        json={"name": "Morango", "stock": 2},
    )
    duplicate = auth_client.post(
        f"/finished-products/{product['id']}/flavors",
        json={"name": "chocolate"},
    )

    assert added.status_code == 201
    assert duplicate.status_code == 422
    assert duplicate.json()["message"] == "Flavor already exists for this product"

    flavor_id = added.json()["id"]
    response = auth_client.delete(f"/finished-products/{product['id']}/flavors/{flavor_id}")

    assert response.status_code == 204
    names = [f["name"] for f in auth_client.get(f"/finished-products/{product['id']}").json()["flavors"]]
    assert names == ["Chocolate"]


def test_delete_product(auth_client, make_product):
    product = make_product()

    assert auth_client.delete(f"/finished-products/{product['id']}").status_code == 204
    assert auth_client.get(f"/finished-products/{product['id']}").status_code == 404


# =========================================================
# PRODUCTION
# =========================================================
def test_production_consumes_materials_and_adds_stock(auth_client, db, make_raw_material, make_product):
    flour = make_raw_material(description="Flour", quantity=10)
    eggs = make_raw_material(description="Eggs", quantity=12)
    product = make_product(
        recipe=[
            {"raw_material_id": flour["id"], "quantity": 2},
            {"raw_material_id": eggs["id"], "quantity": 3},
        ],
    )
    flavor_id = product["flavors"][0]["id"]

    response = auth_client.post(
        f"/finished-products/{product['id']}/production",
        json={"flavor_id": flavor_id, "quantity": 4},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["flavor"]["stock"] == 4

    db.expire_all()
    assert float(db.get(RawMaterial, flour["id"]).quantity) == 2
    assert float(db.get(RawMaterial, eggs["id"]).quantity) == 0


def test_production_with_insufficient_material_changes_nothing(auth_client, db, make_raw_material, make_product):
    flour = make_raw_material(description="Flour", quantity=10)
    sugar = make_raw_material(description="Sugar", quantity=100)
    product = make_product(
        recipe=[
            {"raw_material_id": sugar["id"], "quantity": 1},
            {"raw_material_id": flour["id"], "quantity": 3},
        ],
    )
    flavor_id = product["flavors"][0]["id"]

    response = auth_client.post(
        f"/finished-products/{product['id']}/production",
        json={"flavor_id": flavor_id, "quantity": 4},
    )

    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "message": 'Insufficient stock for "Flour". Required: 12, Available: 10.',
    }

    db.expire_all()
    assert float(db.get(RawMaterial, flour["id"]).quantity) == 10
    assert float(db.get(RawMaterial, sugar["id"]).quantity) == 100
    assert db.get(Flavor, flavor_id).stock == 0


def test_production_for_unknown_flavor(auth_client, make_product):
    product = make_product()

    response = auth_client.post(
        f"/finished-products/{product['id']}/production",
        json={"flavor_id": 999, "quantity": 1},
    )

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_production_for_unknown_product(auth_client):
    response = auth_client.post(
        "/finished-products/999/production",
        json={"flavor_id": 1, "quantity": 1},
    )

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Finished product not found."}


# =========================================================
# PRICING
# =========================================================
def test_pricing_uses_default_profit_margin(auth_client, make_raw_material, make_product):
    flour = make_raw_material(cost=5)
    product = make_product(
        sale_price=20,
        recipe=[{"raw_material_id": flour["id"], "quantity": 2}],
    )

    response = auth_client.get(f"/finished-products/{product['id']}/pricing")

    assert response.status_code == 200
    body = response.json()
    assert body["calculated_cost"] == 10
    assert body["final_cost"] == 10
    assert body["default_profit_margin"] == 30
    assert body["margin_price"] == 13
    assert body["markup_percentage"] == 100
