import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["LOG_LEVEL"] = "WARNING"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from localwear.auth import Principal, create_token, hash_password
from localwear.db import Base, SessionLocal, engine
from localwear.main import app
from localwear.models import Product, Role, User

ADMIN_EMAIL = "admin@localwear.com"
ADMIN_PASSWORD = "admin123"


@pytest.fixture(autouse=True)
def clean_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def make_user(db, email="jane@example.com", role=Role.CUSTOMER, password=None, name="Jane"):
    u = User(
        name=name,
        email=email,
        role=role.value,
        password_hash=hash_password(password) if password else None,
    )
    db.add(u)
    db.commit()
    return u


def make_product(db, name="Tee", price="10.00", stock=10, sizes=("S", "M", "L"), category="Tops"):
    p = Product(
        name=name,
        description=f"{name} description",
        price=Decimal(price),
        category=category,
        sizes=list(sizes),
        quantity_in_stock=stock,
    )
    db.add(p)
    db.commit()
    return p


def principal_for(user):
    return Principal(user_id=user.id, email=user.email, role=user.role)


def headers_for(user):
    return {"Authorization": f"Bearer {create_token(user.id, user.email, user.role)}"}


@pytest.fixture
def customer(db):
    return make_user(db)


@pytest.fixture
def customer_headers(client, db):
    return headers_for(make_user(db))


@pytest.fixture
def admin_headers(client):
    r = client.post("/auth/admin-login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}
