import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from errors import Conflict, InvalidArgument, Unauthorized
from models import db
from models.user import User

logger = logging.getLogger(__name__)


def _clean(value):
    return value.strip() if isinstance(value, str) else ""


def _is_password(value):
    return isinstance(value, str) and bool(value)


def register_user(full_name, username, email, password):
    full_name = _clean(full_name)
    username = _clean(username)
    email = _clean(email).lower()
    if (
        not full_name
        or not username
        or not email
        or not _is_password(password)
    ):
        raise InvalidArgument("Please provide all required fields")

    existing_user = User.query.filter(
        or_(User.email == email, User.username == username)
    ).first()
    if existing_user:
        if existing_user.email == email:
            raise Conflict("Email already registered")
        raise Conflict("Username already taken")

    user = User(full_name=full_name, username=username, email=email)
    user.password = password
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("User already exists")

    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def authenticate_user(email, password):
    email = _clean(email).lower()
    if not email or not _is_password(password):
        raise InvalidArgument("Please provide email and password")

    user = User.query.filter_by(email=email).first()
    if user is None or not user.verify_password(password):
        logger.warning("Failed login for %s", email)
        raise Unauthorized("Invalid email or password")
    return user


def search_users(requester_id, query):
    """
    Case-insensitive substring search over username, email and full name.

    The requester never appears in the results. No match is an empty list.
    """
    query = _clean(query)
    if not query:
        raise InvalidArgument("Search query is required")

    users = (
        User.query.filter(
            User.id != requester_id,
            or_(
                User.username.icontains(query, autoescape=True),
                User.email.icontains(query, autoescape=True),
                User.full_name.icontains(query, autoescape=True),
            ),
        )
        .order_by(User.id)
        .all()
    )
    return [user.to_public_dict() for user in users]
