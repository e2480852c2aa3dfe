"""
Project: Restaurant Management API
Description:
Registration, login, logout, the current-user lookup and password change.
Self-registration always creates a customer; admins are provisioned by seed.py.
"""

import logging

from flask import Blueprint, current_app, g, jsonify

from auth import hash_password, issue_token, login_required, token_payload, verify_password
from errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from models import db, User
from schemas import PasswordChangeRequest, RegisterRequest, json_body, parse

logger = logging.getLogger(__name__)

bp = Blueprint("auth_api", __name__, url_prefix="/api/auth")


def _find_user(email):
    return db.session.scalars(db.select(User).where(User.email == email)).first()


@bp.post("/register")
def register():
    data = json_body()
    if not all(data.get(k) for k in ("name", "email", "password")):
        raise ValidationError("Provide all fields")
    body = parse(RegisterRequest, data, "Invalid registration payload")

    if _find_user(body.email):
        raise ConflictError("User already exists")
    # role is never taken from the request
    user = User(name=body.name, email=body.email, password_hash=hash_password(body.password), role="customer")
    db.session.add(user)
    db.session.commit()
    logger.info("Registered customer %s", user.id)
    return jsonify({"message": "User registered successfully", "user": user.to_dict()}), 201


@bp.post("/login")
def login():
    data = json_body()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    if not email or not password:
        raise ValidationError("Enter Valid Email or Password")

    user = _find_user(email)
    if user is None:
        raise NotFoundError("User not found")
    if not verify_password(password, user.password_hash):
        logger.warning("Failed login for user %s", user.id)
        raise AuthenticationError("Invalid password")

    token = issue_token(user)
    resp = jsonify({"message": "Login successful", "token": token, "user": token_payload(user)})
    resp.set_cookie(
        current_app.config["TOKEN_COOKIE_NAME"],
        token,
        httponly=True,
        samesite="Lax",
        secure=current_app.config["TOKEN_COOKIE_SECURE"],
        max_age=current_app.config["TOKEN_MAX_AGE"],
    )
    return resp


@bp.post("/logout")
def logout():
    resp = jsonify({"message": "Logged out successfully"})
    resp.delete_cookie(current_app.config["TOKEN_COOKIE_NAME"])
    return resp


@bp.get("/me")
@login_required
def me():
    user = db.session.get(User, g.principal.id)
    if user is None:
        raise NotFoundError("User not found")
    return jsonify({"user": user.to_dict()})


@bp.put("/password")
@login_required
def change_password():
    body = parse(PasswordChangeRequest, json_body(), "Invalid password payload")
    user = db.session.get(User, g.principal.id)
    if user is None:
        raise NotFoundError("User not found")
    if not verify_password(body.current_password, user.password_hash):
        raise AuthenticationError("Current password is incorrect")
    user.password_hash = hash_password(body.new_password)
    db.session.commit()
    logger.info("User %s changed password", user.id)
    return jsonify({"message": "Password updated successfully"})
