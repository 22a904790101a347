"""
Session tokens.

A signed JWT carrying the user id is handed out at login in an httpOnly
cookie. Flask-Login's request loader reads it back (cookie first, then an
``Authorization: Bearer`` header) so views can simply use ``login_required``
and ``current_user``.
"""
import logging
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app
from flask_login import LoginManager

from errors import NotFound, Unauthorized
from models import db
from models.user import User

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"

login_manager = LoginManager()
# Identity comes from the token on every request, never from the Flask session.
login_manager.session_protection = None


def issue_token(user):
    now = datetime.now(timezone.utc)
    payload = {
        "id": user.id,
        "iat": now,
        "exp": now + timedelta(days=current_app.config["JWT_EXPIRE_DAYS"]),
    }
    return jwt.encode(
        payload,
        current_app.config["JWT_SECRET"],
        algorithm=current_app.config["JWT_ALGORITHM"],
    )


def decode_token(token):
    """Return the user id embedded in ``token``."""
    try:
        payload = jwt.decode(
            token,
            current_app.config["JWT_SECRET"],
            algorithms=[current_app.config["JWT_ALGORITHM"]],
        )
    except jwt.InvalidTokenError as exc:
        logger.warning("Rejected session token: %s", exc)
        raise Unauthorized("Invalid token") from exc

    user_id = payload.get("id")
    if user_id is None:
        raise Unauthorized("Invalid token")
    return user_id


def extract_token(req):
    token = req.cookies.get(TOKEN_COOKIE)
    if token:
        return token

    header = req.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def set_token_cookie(response, token):
    expires = datetime.now(timezone.utc) + timedelta(
        days=current_app.config["COOKIE_EXPIRE_DAYS"]
    )
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        expires=expires,
        httponly=True,
        secure=True,
        samesite="None",
    )
    return response


def clear_token_cookie(response):
    response.set_cookie(
        TOKEN_COOKIE,
        "",
        expires=0,
        httponly=True,
        secure=True,
        samesite="None",
    )
    return response


@login_manager.request_loader
def load_user_from_request(req):
    token = extract_token(req)
    if not token:
        return None

    user = db.session.get(User, decode_token(token))
    if user is None:
        raise NotFound("User not found")
    return user


@login_manager.unauthorized_handler
def unauthorized():
    raise Unauthorized("Not authenticated")
