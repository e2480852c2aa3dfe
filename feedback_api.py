"""
Project: Restaurant Management API
Description:
Customer feedback. Customers submit ratings; a single entry is visible to
its author and to admins, the full list to admins only.
"""

import logging

from flask import Blueprint, g, jsonify

from auth import ensure_access, login_required, require_roles
from errors import NotFoundError, ValidationError
from models import db, Feedback
from realtime import emit_event
from schemas import FeedbackCreate, json_body, parse

logger = logging.getLogger(__name__)

bp = Blueprint("feedback_api", __name__, url_prefix="/api/feedback")


@bp.post("")
@require_roles("customer", "admin")
def submit_feedback():
    data = json_body()
    rating = data.get("rating")
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        raise ValidationError("Rating must be a number between 1 and 5.")
    if rating < 1 or rating > 5:
        raise ValidationError("Rating must be between 1 and 5.")
    body = parse(FeedbackCreate, data, "Rating must be a whole number between 1 and 5.")

    fb = Feedback(customer_id=g.principal.id, rating=body.rating, comment=body.comment or None)
    db.session.add(fb)
    db.session.commit()
    logger.info("Feedback %s submitted by %s (rating %s)", fb.id, fb.customer_id, fb.rating)
    emit_event("feedback.created", feedback=fb.to_dict())
    return jsonify({"message": "Feedback submitted successfully.", "feedback": fb.to_dict()}), 201


@bp.get("")
@require_roles("admin")
def list_feedback():
    rows = db.session.scalars(
        db.select(Feedback).order_by(Feedback.created_at.desc(), Feedback.id.desc())
    ).all()
    return jsonify({
        "message": "All feedback retrieved successfully.",
        "count": len(rows),
        "feedback": [f.to_dict(with_customer=True) for f in rows],
    })


@bp.get("/<int:feedback_id>")
@login_required
def view_feedback(feedback_id):
    fb = db.session.get(Feedback, feedback_id)
    if fb is None:
        raise NotFoundError("Feedback not found.")
    ensure_access(fb.customer_id, g.principal, "You can only view your own feedback.")
    return jsonify({"message": "Feedback retrieved successfully.", "feedback": fb.to_dict(with_customer=True)})
