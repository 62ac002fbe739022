import os

# Point the app at a throwaway database before any backend module is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
import models.users, models.product, models.order, models.log  # noqa: F401,E401
from models.product import Product
from services.cart_sessions import CartSessionRegistry, get_cart_sessions
from services.errors import DispatchError, PersistenceError
from services.notifications import NotificationDispatcher


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingDispatcher(NotificationDispatcher):
    def __init__(self, fail: bool = False):
        self.messages = []
        self.fail = fail

    def dispatch(self, message: str) -> None:
        self.messages.append(message)
        if self.fail:
            raise DispatchError("webhook unreachable")


class FakeOrderStore:
    """Stands in for OrderStore; records every create call."""

    def __init__(self, fail: bool = False, on_create=None):
        self.calls = []
        self.fail = fail
        self.on_create = on_create

    def create(self, payload):
        self.calls.append(payload)
        if self.on_create:
            self.on_create()
        if self.fail:
            raise PersistenceError()
        return models.order.Order(id=f"order-{len(self.calls):04d}-abcdef", **payload)


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
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def registry(dispatcher):
    return CartSessionRegistry(dispatcher_factory=lambda: dispatcher, idle_minutes=60)


@pytest.fixture
def client(db, registry):
    from main import app

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_cart_sessions] = lambda: registry
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_product(db):
    def _make(name="Pan Francés", price=1000, category="pan", is_active=True, **kw):
        product = Product(
            name=name,
            price=price,
            category=category,
            image_url=kw.pop("image_url", "https://img.example.com/bread.jpg"),
            is_active=is_active,
            **kw,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product
    return _make


def register_and_login(client, email, password="secret123", full_name=None):
    r = client.post("/register", json={"email": email, "password": password, "full_name": full_name})
    assert r.status_code == 201, r.text
    r = client.post("/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    # First registered account is promoted to admin
    return register_and_login(client, "owner@trigopan.co", full_name="Owner")


VALID_DRAFT = {
    "name": "Ana Gomez",
    "email": "ana@example.com",
    "phone": "3001234567",
    "address": "Calle 10 #20-30, Centro",
    "paymentMethod": "cash",
}
