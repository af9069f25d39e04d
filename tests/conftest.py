"""
Pytest fixtures for the BizView API test suite.

Provides:
- An in-memory SQLite database shared by the app and the test
- A TestClient, logged in or anonymous
- A fake generative client in place of the Gemini REST client
- Small factories for raw materials and finished products

Environment is set before the app is imported, so the settings
object never needs a real .env file.
"""

import os

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_COOKIE_SECURE"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.ai.client import get_generative_client

PASSWORD = "s3cure-bakery-pass"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class FakeGenerativeClient:
    """Records prompts and replays canned JSON answers."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {}
        self.error = error
        self.calls = []

    def generate_json(self, prompt, response_schema):
        self.calls.append({"prompt": prompt, "schema": response_schema})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_ai():
    fake = FakeGenerativeClient()
    app.dependency_overrides[get_generative_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_generative_client, None)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


def signup_and_login(test_client, email, business_name):
    response = test_client.post(
        "/auth/signup",
        json={
            "email": email,
            "password": PASSWORD,
            "business_name": business_name,
            "display_name": "Owner",
        },
    )
    assert response.status_code == 201, response.text

    response = test_client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return test_client


@pytest.fixture
def auth_client(client):
    return signup_and_login(client, "owner@bakery.com", "Doce Bakery")


@pytest.fixture
def other_client(client, db):
    """A second, separately logged-in account on the same database."""
    with TestClient(app) as second:
        yield signup_and_login(second, "owner@pastelaria.com", "Pastelaria Central")


@pytest.fixture
def make_raw_material(auth_client):
    counter = {"n": 0}

    def _make(description="Flour", quantity=10, cost=2.5, min_stock=0, unit="KG", **extra):
        counter["n"] += 1
        payload = {
            "code": extra.pop("code", f"MP-{counter['n']:03d}"),
            "description": description,
            "unit": unit,
            "cost": cost,
            "quantity": quantity,
            "min_stock": min_stock,
            **extra,
        }
        response = auth_client.post("/raw-materials", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_product(auth_client):
    def _make(name="Bolo", sale_price=40, recipe=None, flavors=None, **extra):
        payload = {
            "name": name,
            "sale_price": sale_price,
            "recipe": recipe or [],
            "flavors": flavors if flavors is not None else [{"name": "Chocolate", "stock": 0}],
            **extra,
        }
        response = auth_client.post("/finished-products", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
