"""
Project: Restaurant Management API
Description:
HTTP surface for orders. Parses request bodies and hands off to the order
service; business failures surface as typed errors.
"""

from flask import Blueprint, g, jsonify, request

import orders
from auth import require_roles
from errors import NotFoundError, ValidationError
from models import db, User
from realtime import emit_event
from schemas import AddItemRequest, OrderCreate, RemoveItemRequest, json_body, parse

bp = Blueprint("order_api", __name__, url_prefix="/api/orders")


@bp.post("/create")
@require_roles("customer", "admin")
def create_order():
    data = json_body()
    if not data.get("items"):
        # checked before shape validation so the message is stable
        raise ValidationError(orders.EMPTY_ITEMS_MESSAGE)
    body = parse(OrderCreate, data, "Invalid order payload")

    customer_id = g.principal.id
    if body.customer_id is not None and g.principal.is_admin:
        if db.session.get(User, body.customer_id) is None:
            raise NotFoundError("Customer not found.")
        customer_id = body.customer_id

    order = orders.create_order(
        customer_id,
        [(line.menu_item, line.quantity) for line in body.items],
        order_type=body.order_type,
        reservation_id=body.reservation_id,
    )
    emit_event("order.created", order=order.to_dict())
    return jsonify({"message": "Order created successfully.", "data": order.to_dict()}), 201


@bp.get("/user")
@require_roles("customer", "admin")
def list_user_orders():
    result = orders.list_for_customer(g.principal.id)
    return jsonify({"message": "Orders fetched successfully.", "data": [o.to_dict() for o in result]})


@bp.get("/all")
@require_roles("admin")
def list_all_orders():
    result = orders.list_all(status=request.args.get("status"), order_type=request.args.get("orderType"))
    return jsonify({
        "message": "All orders fetched successfully.",
        "data": [o.to_dict(with_customer=True) for o in result],
    })


@bp.patch("/update/<int:order_id>")
@require_roles("admin")
def update_order_status(order_id):
    data = json_body()
    order = orders.update_status(order_id, data.get("status"))
    emit_event("order.updated", order=order.to_dict())
    return jsonify({"message": "Order status updated successfully.", "data": order.to_dict()})


@bp.post("/<int:order_id>/items")
@require_roles("customer", "admin")
def add_order_item(order_id):
    body = parse(AddItemRequest, json_body(), "Invalid order item payload")
    order = orders.add_item(order_id, g.principal, body.menu_item_id, body.quantity)
    emit_event("order.updated", order=order.to_dict())
    return jsonify({"message": "Menu item added to order.", "data": order.to_dict()})


@bp.delete("/<int:order_id>/items")
@require_roles("customer", "admin")
def remove_order_item(order_id):
    body = parse(RemoveItemRequest, json_body(), "Invalid order item payload")
    order = orders.remove_item(order_id, g.principal, body.menu_item_id)
    emit_event("order.updated", order=order.to_dict())
    return jsonify({"message": "Menu item removed from order.", "data": order.to_dict()})


@bp.delete("/<int:order_id>")
@require_roles("customer", "admin")
def delete_order(order_id):
    orders.delete_order(order_id, g.principal)
    emit_event("order.deleted", id=order_id)
    return jsonify({"message": "Order deleted successfully."})
