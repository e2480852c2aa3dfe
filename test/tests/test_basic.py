import pytest

from app import create_app


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok"}


def test_unknown_route_is_json_404(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.get_json()["message"] == "Route not found"


def test_startup_fails_without_secret_key():
    with pytest.raises(RuntimeError, match="SECRET_KEY"):
        create_app(testing=True, config_overrides={"SECRET_KEY": None})


def test_unexpected_error_is_generic_500(app, client, monkeypatch):
    import orders

    def boom(customer_id):
        raise RuntimeError("database exploded at 0xdeadbeef")

    monkeypatch.setattr(orders, "list_for_customer", boom)
    login = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "alicepass"})
    token = login.get_json()["token"]
    r = client.get("/api/orders/user", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 500
    assert r.get_json() == {"message": "Something went wrong"}


def test_seed_creates_admin_and_menu_once():
    from models import db, MenuItem, User
    from seed import STARTER_MENU, seed

    app = create_app(testing=True, config_overrides={"ADMIN_EMAIL": "boss@example.com", "ADMIN_PASSWORD": "bosspass"})
    seed(app)
    seed(app)
    with app.app_context():
        admins = db.session.scalars(db.select(User).where(User.role == "admin")).all()
        assert [a.email for a in admins] == ["boss@example.com"]
        assert db.session.scalar(db.select(db.func.count(MenuItem.id))) == len(STARTER_MENU)

    r = app.test_client().post("/api/auth/login", json={"email": "boss@example.com", "password": "bosspass"})
    assert r.get_json()["user"]["role"] == "admin"


def test_seed_requires_admin_password():
    from seed import seed

    app = create_app(testing=True, config_overrides={"ADMIN_PASSWORD": None})
    with pytest.raises(RuntimeError, match="ADMIN_PASSWORD"):
        seed(app)
