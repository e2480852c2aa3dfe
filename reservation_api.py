"""
Project: Restaurant Management API
Description:
Table reservations. Customers book and list their own slots; admins see
everything and move reservations between pending, confirmed and cancelled.
A slot (date + time) holds at most one active reservation.
"""

import logging

from flask import Blueprint, g, jsonify, request

from auth import require_roles
from errors import ConflictError, NotFoundError
from models import db, Reservation, ACTIVE_RESERVATION_STATUSES
from realtime import emit_event
from schemas import ReservationCreate, ReservationStatusUpdate, json_body, parse

logger = logging.getLogger(__name__)

bp = Blueprint("reservation_api", __name__, url_prefix="/api/reservations")


def slot_taken(date, time):
    return db.session.execute(
        db.select(Reservation.id).where(
            Reservation.date == date,
            Reservation.time == time,
            Reservation.is_active.is_(True),
            Reservation.status.in_(ACTIVE_RESERVATION_STATUSES),
        ).limit(1)
    ).first() is not None


@bp.post("/users/reservations")
@require_roles("customer", "admin")
def create_reservation():
    body = parse(ReservationCreate, json_body(), "Invalid reservation payload")
    if slot_taken(body.date, body.time):
        raise ConflictError("Selected time slot is unavailable. Please choose another slot.")

    r = Reservation(
        customer_id=g.principal.id,
        date=body.date,
        time=body.time,
        number_of_guests=body.number_of_guests,
        notes=body.notes or None,
        status="pending",
        is_active=True,
    )
    db.session.add(r)
    db.session.commit()
    logger.info("Reservation %s created for %s %s by %s", r.id, r.date, r.time, r.customer_id)
    emit_event("reservation.created", reservation=r.to_dict())
    return jsonify({"message": "Reservation created successfully", "reservation": r.to_dict()}), 201


@bp.get("/users/reservations")
@require_roles("customer", "admin")
def list_own_reservations():
    res = db.session.scalars(
        db.select(Reservation)
        .where(Reservation.customer_id == g.principal.id)
        .order_by(Reservation.date, Reservation.time)
    ).all()
    return jsonify({"reservations": [r.to_dict() for r in res]})


@bp.get("/reservations")
@require_roles("admin")
def list_reservations():
    query = db.select(Reservation)
    status = request.args.get("status")
    if status:
        query = query.where(Reservation.status == status)
    res = db.session.scalars(query.order_by(Reservation.created_at.desc(), Reservation.id.desc())).all()
    return jsonify({"reservations": [r.to_dict(with_customer=True) for r in res]})


@bp.patch("/reservations/<int:res_id>")
@require_roles("admin")
def update_reservation_status(res_id):
    body = parse(ReservationStatusUpdate, json_body(), "Invalid reservation status")
    r = db.session.get(Reservation, res_id)
    if r is None:
        raise NotFoundError("Reservation not found")
    r.status = body.status
    r.is_active = body.status in ACTIVE_RESERVATION_STATUSES
    db.session.commit()
    logger.info("Reservation %s status set to %s", r.id, r.status)
    emit_event("reservation.updated", reservation=r.to_dict())
    return jsonify({"message": "Reservation status updated", "reservation": r.to_dict()})
