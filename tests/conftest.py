from datetime import date

import pytest

from moneybook import create_app
from moneybook.config import TestConfig
from moneybook.extensions import db


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register_and_login(client, email, name="Tester", password="secret123"):
    res = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert res.status_code == 201, res.get_json()
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.get_json()
    return res.get_json()


@pytest.fixture
def auth_client(app):
    """Test client logged in as alice."""
    client = app.test_client()
    register_and_login(client, "alice@example.com", name="Alice")
    return client


@pytest.fixture
def other_client(app):
    """Test client logged in as a second user, bob."""
    client = app.test_client()
    register_and_login(client, "bob@example.com", name="Bob")
    return client


@pytest.fixture
def today():
    return date.today()


def make_record(client, **overrides):
    payload = {
        "type": "expense",
        "amount": 350,
        "category": "อาหาร",
        "description": "ข้าวกลางวัน",
        "date": date.today().isoformat(),
    }
    payload.update(overrides)
    res = client.post("/api/records", json=payload)
    assert res.status_code == 201, res.get_json()
    return res.get_json()
