import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CHECKOUT_PAYMENT_DELAY_SECONDS", "0")
os.environ.pop("ORDER_WEBHOOK_URL", None)

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from flowershop.db import session as db_session
from flowershop.models.catalog import ProductRead


@pytest.fixture(autouse=True)
def db():
    """Fresh in-memory database with the demo catalog for every test."""
    from flowershop.services.catalog import seed_catalog

    engine = db_session.reset_engine("sqlite://")
    db_session.init_db()
    seed_catalog()
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def client():
    from flowershop.main import app

    return TestClient(app)


@pytest.fixture()
def login(client):
    """Log a session in with the given role and return headers carrying its id."""

    def _login(session_id, role="customer", email=None):
        email = email or f"{role}@example.com"
        resp = client.post(
            "/login",
            json={"email": email, "password": "x", "role": role},
            headers={"X-Session-Id": session_id},
        )
        assert resp.status_code == 200
        return {"X-Session-Id": session_id}

    return _login


@pytest.fixture()
def bouquet():
    return ProductRead(id=1, name="Orchid Bouquet", price=500000, stock=25, low_stock_threshold=5)


@pytest.fixture()
def basket():
    return ProductRead(id=3, name="Orchid Basket", price=800000, stock=8, low_stock_threshold=2)
