"""
Project: Restaurant Management API
Description:
Menu routes. Listing is public; adding, editing and deleting are admin-only.
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func, or_

from auth import require_roles
from errors import ConflictError, NotFoundError, ValidationError
from models import db, MenuItem, OrderItem
from realtime import emit_event
from schemas import MenuItemCreate, MenuItemUpdate, json_body, parse

logger = logging.getLogger(__name__)

bp = Blueprint("menu_api", __name__, url_prefix="/api/menu")

NOT_NULLABLE = ("name", "price", "category", "available")


def _get_item(item_id):
    item = db.session.get(MenuItem, item_id)
    if item is None:
        raise NotFoundError("Menu item not found")
    return item


def _name_taken(name, exclude_id=None):
    query = db.select(MenuItem.id).where(func.lower(MenuItem.name) == name.lower())
    if exclude_id is not None:
        query = query.where(MenuItem.id != exclude_id)
    return db.session.execute(query).first() is not None


def _int_arg(name, default):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")
    if value < 0:
        raise ValidationError(f"{name} must not be negative")
    return value


@bp.get("/list")
def list_menu():
    """Public menu. A missing or zero ``limit`` means MENU_PAGE_LIMIT; larger values are capped at MENU_PAGE_MAX."""
    query = db.select(MenuItem)
    category = request.args.get("category")
    if category:
        query = query.where(MenuItem.category == category)
    available = request.args.get("available")
    if available is not None:
        query = query.where(MenuItem.available.is_(available.lower() == "true"))
    search = (request.args.get("search") or "").strip()
    if search:
        pattern = f"%{search.lower()}%"
        query = query.where(or_(
            func.lower(MenuItem.name).like(pattern),
            func.lower(func.coalesce(MenuItem.description, "")).like(pattern),
        ))

    limit = _int_arg("limit", 0) or current_app.config["MENU_PAGE_LIMIT"]
    limit = min(limit, current_app.config["MENU_PAGE_MAX"])
    skip = _int_arg("skip", 0)
    items = db.session.scalars(
        query.order_by(MenuItem.category, MenuItem.name).limit(limit).offset(skip)
    ).all()
    return jsonify([m.to_dict() for m in items])


@bp.post("/add")
@require_roles("admin")
def add_menu_item():
    data = json_body()
    if not data.get("name") or data.get("price") is None or not data.get("category"):
        raise ValidationError("name, price and category are required")
    body = parse(MenuItemCreate, data, "Invalid menu item payload")

    if _name_taken(body.name):
        raise ConflictError("Menu item with this name already exists")
    item = MenuItem(**body.model_dump())
    db.session.add(item)
    db.session.commit()
    logger.info("Menu item %s (%s) created", item.id, item.name)
    emit_event("menu.created", item=item.to_dict())
    return jsonify(item.to_dict()), 201


@bp.put("/edit/<int:item_id>")
@require_roles("admin")
def edit_menu_item(item_id):
    data = json_body()
    if "price" in data and (isinstance(data["price"], bool) or not isinstance(data["price"], (int, float))):
        raise ValidationError("Invalid price")
    if "name" in data and not isinstance(data["name"], str):
        raise ValidationError("Invalid name")
    item = _get_item(item_id)
    body = parse(MenuItemUpdate, data, "Invalid menu item payload")
    updates = {k: v for k, v in body.model_dump(exclude_unset=True).items()
               if v is not None or k not in NOT_NULLABLE}

    if "name" in updates and _name_taken(updates["name"], exclude_id=item.id):
        raise ConflictError("Menu item with this name already exists")
    for k, v in updates.items():
        setattr(item, k, v)
    db.session.commit()
    logger.info("Menu item %s updated: %s", item.id, sorted(updates))
    emit_event("menu.updated", item=item.to_dict())
    return jsonify(item.to_dict())


@bp.delete("/delete/<int:item_id>")
@require_roles("admin")
def delete_menu_item(item_id):
    item = _get_item(item_id)
    in_use = db.session.execute(
        db.select(OrderItem.id).where(OrderItem.menu_item_id == item.id).limit(1)
    ).first()
    if in_use:
        raise ConflictError("Menu item is part of existing orders; mark it unavailable instead")
    db.session.delete(item)
    db.session.commit()
    logger.info("Menu item %s deleted", item_id)
    emit_event("menu.deleted", id=item_id)
    return jsonify({"message": "Deleted", "id": item_id})
