"""
Project: Restaurant Management API
Description:
SQLAlchemy models for users, menu items, reservations, orders with their
line items, and customer feedback.
"""

from flask_sqlalchemy import SQLAlchemy
from datetime import datetime, timezone

db = SQLAlchemy()

MENU_CATEGORIES = (
    "Breakfast", "Main course", "Appetizers", "Salads",
    "Soups", "Desserts", "Drinks", "Extras",
)
RESERVATION_STATUSES = ("pending", "confirmed", "cancelled")
ACTIVE_RESERVATION_STATUSES = ("pending", "confirmed")
ORDER_STATUSES = ("pending", "preparing", "completed", "cancelled")
ORDER_TYPES = ("dine-in", "pre-order")


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class User(TimestampMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), default="customer", nullable=False)

    def to_dict(self):
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}


class MenuItem(TimestampMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Float, nullable=False)
    category = db.Column(db.String(40), nullable=False)
    available = db.Column(db.Boolean, default=True, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "available": self.available,
        }


class Reservation(TimestampMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    date = db.Column(db.String(10), nullable=False)
    time = db.Column(db.String(5), nullable=False)
    number_of_guests = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), default="pending", nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    notes = db.Column(db.String(240), nullable=True)

    customer = db.relationship("User", lazy=True)

    def to_dict(self, with_customer=False):
        data = {
            "id": self.id,
            "customer_id": self.customer_id,
            "date": self.date,
            "time": self.time,
            "number_of_guests": self.number_of_guests,
            "status": self.status,
            "is_active": self.is_active,
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
        }
        if with_customer and self.customer is not None:
            data["customer"] = {"id": self.customer.id, "name": self.customer.name, "email": self.customer.email}
        return data


class Order(TimestampMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    reservation_id = db.Column(db.Integer, db.ForeignKey("reservation.id"), nullable=True)
    total_price = db.Column(db.Float, default=0.0, nullable=False)
    order_type = db.Column(db.String(20), default="dine-in", nullable=False)
    status = db.Column(db.String(20), default="pending", nullable=False, index=True)
    version = db.Column(db.Integer, nullable=False)

    items = db.relationship(
        "OrderItem",
        backref="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        lazy=True,
    )
    customer = db.relationship("User", lazy=True)
    reservation = db.relationship("Reservation", lazy=True)

    # UPDATEs are issued with "WHERE version = <loaded>", so a concurrent
    # writer makes the flush fail instead of silently overwriting.
    __mapper_args__ = {"version_id_col": version}

    def find_item(self, menu_item_id):
        return next((oi for oi in self.items if oi.menu_item_id == menu_item_id), None)

    def to_dict(self, with_customer=False):
        data = {
            "id": self.id,
            "customer_id": self.customer_id,
            "reservation_id": self.reservation_id,
            "reservation": self.reservation.to_dict() if self.reservation else None,
            "items": [oi.to_dict() for oi in self.items],
            "total_price": self.total_price,
            "order_type": self.order_type,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
        if with_customer and self.customer is not None:
            data["customer"] = {"id": self.customer.id, "name": self.customer.name, "email": self.customer.email}
        return data


class OrderItem(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("order.id"), nullable=False, index=True)
    menu_item_id = db.Column(db.Integer, db.ForeignKey("menu_item.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)

    menu_item = db.relationship("MenuItem", lazy=True)

    def to_dict(self):
        mi = self.menu_item
        return {
            "menu_item_id": self.menu_item_id,
            "name": mi.name if mi else None,
            "price": mi.price if mi else None,
            "quantity": self.quantity,
        }


class Feedback(TimestampMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=True)

    customer = db.relationship("User", lazy=True)

    def to_dict(self, with_customer=False):
        data = {
            "id": self.id,
            "customer_id": self.customer_id,
            "rating": self.rating,
            "comment": self.comment,
            "created_at": self.created_at.isoformat(),
        }
        if with_customer and self.customer is not None:
            data["customer"] = {"id": self.customer.id, "name": self.customer.name, "email": self.customer.email}
        return data
