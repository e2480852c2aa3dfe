"""
Order service called directly, without the HTTP layer.
"""

import pytest

import orders
import pricing
from auth import Principal, can_access, ensure_access
from errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from models import db, Order

ADMIN = Principal(id=1, role="admin")
ALICE = Principal(id=2, role="customer")
BOB = Principal(id=3, role="customer")


def test_access_guard():
    assert can_access(2, ALICE)
    assert can_access(2, ADMIN)
    assert not can_access(2, BOB)
    with pytest.raises(ForbiddenError):
        ensure_access(2, BOB)
    ensure_access(2, ALICE)


@pytest.fixture
def burger(make_menu_item):
    return make_menu_item("Burger", 10.0)


def test_create_validates_before_touching_the_catalog(app, burger, monkeypatch):
    def fail(*_args, **_kwargs):
        raise AssertionError("pricing should not run")

    monkeypatch.setattr(orders, "price_items", fail)
    with app.app_context():
        with pytest.raises(ValidationError):
            orders.create_order(ALICE.id, [])
        with pytest.raises(ValidationError):
            orders.create_order(ALICE.id, [(burger, 0)])
        with pytest.raises(ValidationError):
            orders.create_order(ALICE.id, [(burger, "1")])
        with pytest.raises(ValidationError):
            orders.create_order(ALICE.id, [(burger, 1)], order_type="takeaway")
        with pytest.raises(NotFoundError):
            orders.create_order(ALICE.id, [(burger, 1)], reservation_id=77)


def test_forbidden_even_with_valid_input(app, burger):
    with app.app_context():
        order = orders.create_order(ALICE.id, [(burger, 1)])
        with pytest.raises(ForbiddenError):
            orders.add_item(order.id, BOB, burger, 1)
        with pytest.raises(ForbiddenError):
            orders.remove_item(order.id, BOB, burger)
        with pytest.raises(ForbiddenError):
            orders.delete_order(order.id, BOB)


def test_concurrent_modification_is_a_conflict(app, burger, monkeypatch):
    with app.app_context():
        order_id = orders.create_order(ALICE.id, [(burger, 1)]).id

    real_price_items = pricing.price_items
    table = Order.__table__

    def price_after_concurrent_write(lines, lookup=pricing.catalog_prices):
        # another writer bumps the row version between our read and our write
        db.session.connection().execute(
            table.update().where(table.c.id == order_id).values(version=table.c.version + 1)
        )
        return real_price_items(lines, lookup=lookup)

    monkeypatch.setattr(orders, "price_items", price_after_concurrent_write)
    with app.app_context():
        with pytest.raises(ConflictError):
            orders.add_item(order_id, ALICE, burger, 1)

    with app.app_context():
        stored = db.session.get(Order, order_id)
        assert stored.items[0].quantity == 1
        assert stored.total_price == 10.0
