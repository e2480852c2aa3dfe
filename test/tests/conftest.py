"""
Shared fixtures: a fresh in-memory app per test with one admin and two
customers, logged-in header helpers and a menu item factory.
"""

import os
import sys

import pytest

# --- Make sure project root is importable ---
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app import create_app  # noqa: E402
from auth import hash_password  # noqa: E402
from models import db, User, MenuItem  # noqa: E402

USERS = {
    "admin": {"name": "Admin", "email": "admin@example.com", "password": "password", "role": "admin"},
    "alice": {"name": "Alice", "email": "alice@example.com", "password": "alicepass", "role": "customer"},
    "bob": {"name": "Bob", "email": "bob@example.com", "password": "bobpass1", "role": "customer"},
}


@pytest.fixture
def app():
    app = create_app(testing=True)
    with app.app_context():
        db.drop_all()
        db.create_all()
        for u in USERS.values():
            db.session.add(User(name=u["name"], email=u["email"],
                                password_hash=hash_password(u["password"]), role=u["role"]))
        db.session.commit()
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def _login(app, who):
    # throwaway client so the login cookie never leaks into the test client
    u = USERS[who]
    resp = app.test_client().post("/api/auth/login", json={"email": u["email"], "password": u["password"]})
    assert resp.status_code == 200, resp.get_json()
    data = resp.get_json()
    return {"Authorization": f"Bearer {data['token']}"}, data["user"]["id"]


@pytest.fixture
def admin_headers(app):
    return _login(app, "admin")[0]


@pytest.fixture
def customer(app):
    """(headers, user id) for the customer Alice."""
    return _login(app, "alice")


@pytest.fixture
def other_customer(app):
    return _login(app, "bob")


@pytest.fixture
def make_menu_item(app):
    def _make(name, price, category="Main course", available=True, description=None):
        with app.app_context():
            item = MenuItem(name=name, price=price, category=category,
                            available=available, description=description)
            db.session.add(item)
            db.session.commit()
            return item.id
    return _make
