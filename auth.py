"""
Project: Restaurant Management API
Description:
Password hashing, signed access tokens, the request decorators that attach
the acting principal, and the owner-or-admin access guard.
"""

import logging
from collections import namedtuple
from functools import wraps

from flask import current_app, g, request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from errors import AuthenticationError, ForbiddenError

logger = logging.getLogger(__name__)

TOKEN_SALT = "auth-token"


class Principal(namedtuple("Principal", ["id", "role"])):
    """The authenticated actor attached to a request."""

    __slots__ = ()

    @property
    def is_admin(self):
        return self.role == "admin"


def hash_password(password):
    return generate_password_hash(password)


def verify_password(password, password_hash):
    return check_password_hash(password_hash, password)


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def issue_token(user):
    return _serializer().dumps(token_payload(user))


def token_payload(user):
    return {"id": user.id, "role": user.role, "name": user.name, "email": user.email}


def load_token(token):
    """Return the payload of a valid token; raise AuthenticationError otherwise."""
    try:
        data = _serializer().loads(token, max_age=current_app.config["TOKEN_MAX_AGE"])
    except SignatureExpired:
        raise AuthenticationError("Invalid or expired token")
    except BadSignature:
        logger.warning("Rejected token with bad signature")
        raise AuthenticationError("Invalid or expired token")
    if not isinstance(data, dict) or "id" not in data or not data.get("role"):
        raise AuthenticationError("Invalid or expired token")
    return data


def extract_token():
    # explicit headers win over the browser cookie
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        token = header.split(" ", 1)[1].strip()
        if token:
            return token
    token = request.headers.get("x-access-token") or request.headers.get("x-auth-token")
    if token:
        return token
    return request.cookies.get(current_app.config["TOKEN_COOKIE_NAME"])


def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        token = extract_token()
        if not token:
            raise AuthenticationError("Authentication token required")
        data = load_token(token)
        g.principal = Principal(id=int(data["id"]), role=str(data["role"]).strip().lower())
        return fn(*args, **kwargs)
    return wrapper


def require_roles(*roles):
    allowed = {r.strip().lower() for r in roles}

    def deco(fn):
        @wraps(fn)
        @login_required
        def wrapper(*args, **kwargs):
            if g.principal.role not in allowed:
                logger.warning("Principal %s with role %r denied (needs %s)",
                               g.principal.id, g.principal.role, sorted(allowed))
                raise ForbiddenError("Access denied: Unauthorized role")
            return fn(*args, **kwargs)
        return wrapper
    return deco


# --------- access guard ---------

def can_access(owner_id, principal):
    return principal.is_admin or owner_id == principal.id


def ensure_access(owner_id, principal, message="You do not have access to this resource."):
    if not can_access(owner_id, principal):
        raise ForbiddenError(message)
