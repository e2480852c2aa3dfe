"""
Project: Restaurant Management API
Description:
Order business rules: creation, adding and removing line items, status
changes and deletion. Totals always come from the pricing module, and
item mutations are guarded by the owner-or-admin check.
"""

import logging
from collections import OrderedDict

from sqlalchemy.orm.exc import StaleDataError

from auth import ensure_access
from errors import ConflictError, NotFoundError, ValidationError
from models import db, utcnow, MenuItem, Order, OrderItem, Reservation, ORDER_STATUSES, ORDER_TYPES
from pricing import price_items

logger = logging.getLogger(__name__)

EMPTY_ITEMS_MESSAGE = "Order items cannot be empty."


def _check_quantity(quantity):
    # bool is an int subclass; reject it explicitly
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError("Quantity must be a positive integer.")


def _get_order(order_id):
    order = db.session.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order not found.")
    return order


def _retotal(order):
    order.total_price = price_items((oi.menu_item_id, oi.quantity) for oi in order.items)
    order.updated_at = utcnow()


def _commit_order(order):
    try:
        db.session.commit()
    except StaleDataError:
        db.session.rollback()
        logger.warning("Order %s was modified concurrently", order.id)
        raise ConflictError("Order was modified by another request. Please try again.")


def create_order(customer_id, items, order_type="dine-in", reservation_id=None):
    """Create a pending order for ``customer_id``.

    ``items`` is a sequence of ``(menu_item_id, quantity)``; repeated menu
    items are merged into a single line.
    """
    if not items:
        raise ValidationError(EMPTY_ITEMS_MESSAGE)
    merged = OrderedDict()
    for menu_item_id, quantity in items:
        if menu_item_id is None:
            raise ValidationError("Each order item needs a menu item.")
        _check_quantity(quantity)
        merged[menu_item_id] = merged.get(menu_item_id, 0) + quantity
    if order_type not in ORDER_TYPES:
        raise ValidationError(f"Order type must be one of: {', '.join(ORDER_TYPES)}")

    if reservation_id is not None and db.session.get(Reservation, reservation_id) is None:
        raise NotFoundError("Reservation not found.")

    try:
        total = price_items(merged.items())
    except NotFoundError as err:
        # an unknown item is a bad request at creation time
        raise ValidationError(err.message, errors=err.errors)

    order = Order(
        customer_id=customer_id,
        reservation_id=reservation_id,
        order_type=order_type,
        status="pending",
        total_price=total,
        items=[OrderItem(menu_item_id=m, quantity=q) for m, q in merged.items()],
    )
    db.session.add(order)
    db.session.commit()
    logger.info("Order %s created for customer %s (total %.2f)", order.id, customer_id, order.total_price)
    return order


def add_item(order_id, principal, menu_item_id, quantity=1):
    if menu_item_id is None:
        raise ValidationError("menuItemId is required.")
    _check_quantity(quantity)

    order = _get_order(order_id)
    ensure_access(order.customer_id, principal, "You can only modify your own orders.")
    if db.session.get(MenuItem, menu_item_id) is None:
        raise NotFoundError("Menu item not found.")

    line = order.find_item(menu_item_id)
    if line is not None:
        line.quantity += quantity
    else:
        order.items.append(OrderItem(menu_item_id=menu_item_id, quantity=quantity))
    _retotal(order)
    _commit_order(order)
    logger.info("Added %s x menu item %s to order %s", quantity, menu_item_id, order.id)
    return order


def remove_item(order_id, principal, menu_item_id):
    if menu_item_id is None:
        raise ValidationError("menuItemId is required.")

    order = _get_order(order_id)
    ensure_access(order.customer_id, principal, "You can only modify your own orders.")
    line = order.find_item(menu_item_id)
    if line is None:
        raise NotFoundError("Menu item does not exist in this order.")

    order.items.remove(line)
    _retotal(order)
    _commit_order(order)
    logger.info("Removed menu item %s from order %s", menu_item_id, order.id)
    return order


def delete_order(order_id, principal):
    order = _get_order(order_id)
    ensure_access(order.customer_id, principal, "You can only delete your own orders.")
    db.session.delete(order)
    _commit_order(order)
    logger.info("Order %s deleted by user %s", order_id, principal.id)


def update_status(order_id, status):
    # Any status may move to any other; only membership is checked.
    if status not in ORDER_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(ORDER_STATUSES)}")
    order = _get_order(order_id)
    order.status = status
    _commit_order(order)
    logger.info("Order %s status set to %s", order.id, status)
    return order


def list_for_customer(customer_id):
    return db.session.scalars(
        db.select(Order)
        .where(Order.customer_id == customer_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
    ).all()


def list_all(status=None, order_type=None):
    query = db.select(Order)
    if status:
        query = query.where(Order.status == status)
    if order_type:
        query = query.where(Order.order_type == order_type)
    return db.session.scalars(query.order_by(Order.created_at.desc(), Order.id.desc())).all()
