import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from asset_inventory.main import app
from asset_inventory.database import Base, get_db
from asset_inventory.core.bootstrap import ensure_default_admin
from asset_inventory.core.config import settings
from asset_inventory.core.hashing import hash_password
from asset_inventory.core.rate_limiter import limiter
from asset_inventory.models.users import User, UserRole

limiter.enabled = False


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSessionLocal()
    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_user(db, username="alice", password="password", role=UserRole.USER, is_active=True):
    user = User(
        username=username,
        password_hash=hash_password(password),
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login(client, username, password):
    return client.post(
        "/auth/login",
        json={"username": username, "password": password},
    )


def bearer(session_id):
    return {"Authorization": f"Bearer {session_id}"}


@pytest.fixture
def admin_headers(client, db_session):
    ensure_default_admin(db_session)
    response = login(client, settings.DEFAULT_ADMIN_USERNAME, settings.DEFAULT_ADMIN_PASSWORD)
    assert response.status_code == 200
    return bearer(response.json()["session_id"])


@pytest.fixture
def user_headers(client, db_session):
    create_user(db_session, username="alice", password="password")
    response = login(client, "alice", "password")
    assert response.status_code == 200
    return bearer(response.json()["session_id"])


@pytest.fixture
def make_category(client, user_headers):
    def _make(name="Laptops", description=None):
        response = client.post(
            "/categories",
            json={"name": name, "description": description},
            headers=user_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_location(client, user_headers):
    def _make(name="Head Office", branch_code="HO01", address=None):
        response = client.post(
            "/locations",
            json={"name": name, "branch_code": branch_code, "address": address},
            headers=user_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_supplier(client, user_headers):
    def _make(name="Tech Supply Co", contact_person=None, phone_number=None, address=None):
        response = client.post(
            "/suppliers",
            json={
                "name": name,
                "contact_person": contact_person,
                "phone_number": phone_number,
                "address": address,
            },
            headers=user_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_item(client, user_headers):
    def _make(category_id, location_id, item_code="LT-001", **overrides):
        payload = {
            "item_code": item_code,
            "name": "ThinkPad T14",
            "description": "Developer laptop",
            "category_id": category_id,
            "location_id": location_id,
            "condition": "good",
            "quantity": 1,
            "purchase_price": 1200.0,
            "purchase_date": "2024-01-15T00:00:00",
        }
        payload.update(overrides)
        response = client.post("/inventory", json=payload, headers=user_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_purchase(client, user_headers):
    def _make(item_id, supplier_id, quantity=1, unit_price=10.0, purchase_date="2024-01-20T00:00:00", notes=None):
        response = client.post(
            "/purchases",
            json={
                "item_id": item_id,
                "supplier_id": supplier_id,
                "quantity": quantity,
                "unit_price": unit_price,
                "purchase_date": purchase_date,
                "notes": notes,
            },
            headers=user_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_transfer(client, user_headers):
    def _make(item_id, to_location_id, from_location_id=None, status="pending", **overrides):
        payload = {
            "item_id": item_id,
            "from_location_id": from_location_id,
            "to_location_id": to_location_id,
            "transfer_date": "2024-03-01T09:00:00",
            "transferred_by": "IT Support",
            "reason": "Reassignment",
            "status": status,
            "notes": None,
        }
        payload.update(overrides)
        response = client.post("/location-history", json=payload, headers=user_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
