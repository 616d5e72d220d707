"""
Shared fixtures: in-memory SQLite, FastAPI TestClient, users with bearer tokens.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("JWT_SECRET", "test-secret")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from order_api.data.database import Base, SessionLocal, engine
from order_api.data.models.order import OrderModel
from order_api.data.models.user import UserModel
from order_api.main import app
from order_api.utils.security import create_token, hash_password

ORDERS_URL = "/api/v1/orders/"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user():
    """Factory: creates a user and returns a plain namespace with auth headers."""

    def _make(name="Alice", email="alice@shop.io", role="user", password="secret123"):
        session = SessionLocal()
        try:
            user = UserModel(name=name, email=email, role=role, password_hash=hash_password(password))
            session.add(user)
            session.commit()
            session.refresh(user)
            return SimpleNamespace(
                id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
                password=password,
                headers={"Authorization": f"Bearer {create_token(user.id)}"},
            )
        finally:
            session.close()

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(name="Admin", email="admin@shop.io", role="admin")


@pytest.fixture
def alice(make_user):
    return make_user(name="Alice", email="alice@shop.io")


@pytest.fixture
def bob(make_user):
    return make_user(name="Bob", email="bob@shop.io")


def order_payload(**overrides):
    payload = {
        "orderNumber": "ORD-1",
        "customerName": "A",
        "customerEmail": "a@x.com",
        "items": [{"productName": "Widget", "quantity": 2, "price": 10.5}],
    }
    payload.update(overrides)
    return payload


def fetch_order(order_id):
    """Reads the stored row with a fresh session, bypassing any identity map."""
    session = SessionLocal()
    try:
        order = session.get(OrderModel, order_id)
        if order is not None:
            order.items  # load before detaching
            session.expunge(order)
        return order
    finally:
        session.close()
