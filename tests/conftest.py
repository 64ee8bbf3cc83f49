import datetime as dt
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RABBITMQ_URL"] = ""
os.environ["ADMIN_USERNAME"] = "freshflower"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ["ADMIN_PASSWORD_HASH"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from flower_shop.auth import create_access_token
from flower_shop.database import get_db
from flower_shop.main import app
from flower_shop.models import Base, Booking, Guest, Product

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PICKUP = dt.datetime(2026, 10, 25, 10, 0, tzinfo=dt.timezone.utc)


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
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_access_token('freshflower')}"}


def make_product(db, **overrides) -> Product:
    data = {
        "name": "Rose Bouquet",
        "catalog_type": "Bucket Fresh Flower",
        "detail": "Red roses",
        "price": 100000,
        "stock": 10,
        "status": "Available",
        "image": "",
    }
    data.update(overrides)
    product = Product(**data)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def product(db):
    return make_product(db)


def guest_contact(email="a@x.com", **overrides) -> dict:
    data = {
        "name": "Ayu",
        "email": email,
        "phone": "08123456789",
        "deliveryType": "pickup",
    }
    data.update(overrides)
    return data


def booking_body(product_id, quantity=3, email="a@x.com", **guest_overrides) -> dict:
    return {
        "productId": product_id,
        "guestData": guest_contact(email, **guest_overrides),
        "quantity": quantity,
        "pickupDate": PICKUP.isoformat(),
    }


def stock_of(db, product_id) -> int:
    db.expire_all()
    return db.get(Product, product_id).stock


def count(db, model) -> int:
    db.expire_all()
    return db.query(model).count()
