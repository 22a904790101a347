"""
Friend-request state machine.

A request is created ``pending`` on the recipient's side and can only move
to ``accepted``. Accepting writes the status change and the friendship edge
in one transaction.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError

from errors import Conflict, InvalidArgument, NotFound
from models import db
from models.friend_request import ACCEPTED, PENDING, FriendRequest
from models.friendship import Friendship
from models.user import User
from . import parse_id

logger = logging.getLogger(__name__)


def send_friend_request(requester_id, target_id):
    target_id = parse_id(target_id, "Friend ID")

    # Prevent self-friendship
    if target_id == requester_id:
        raise InvalidArgument("You cannot send a friend request to yourself")

    target = db.session.get(User, target_id)
    if target is None:
        raise NotFound("User not found")

    if Friendship.between(requester_id, target_id):
        raise Conflict("You are already friends with this user")

    # Any earlier request blocks a new one, accepted or not
    existing = FriendRequest.query.filter_by(
        sender_id=requester_id, recipient_id=target_id
    ).first()
    if existing:
        raise Conflict("Friend request already sent")

    friend_request = FriendRequest(
        sender_id=requester_id, recipient_id=target_id, status=PENDING
    )
    db.session.add(friend_request)
    try:
        db.session.commit()
    except IntegrityError:
        # A concurrent send for the same pair won the insert
        db.session.rollback()
        logger.warning(
            "Duplicate friend request %s -> %s rejected at commit",
            requester_id,
            target_id,
        )
        raise Conflict("Friend request already sent")

    logger.info("Friend request %s sent: %s -> %s",
                friend_request.id, requester_id, target_id)
    return friend_request


def accept_friend_request(accepter_id, request_id):
    request_id = parse_id(request_id, "Request ID")

    # Only requests addressed to the accepter can be accepted by them
    friend_request = FriendRequest.query.filter_by(
        id=request_id, recipient_id=accepter_id
    ).first()
    if friend_request is None:
        raise NotFound("Friend request not found")

    if friend_request.status != PENDING:
        raise Conflict("Friend request already processed")

    sender_id = friend_request.sender_id
    try:
        updated = FriendRequest.query.filter_by(
            id=request_id, status=PENDING
        ).update(
            {"status": ACCEPTED, "updated_at": datetime.now(timezone.utc)},
            synchronize_session="fetch",
        )
        if not updated:
            # Another accept committed between our read and this update
            raise Conflict("Friend request already processed")

        # Both users may have requested each other; the edge exists only once
        if Friendship.between(accepter_id, sender_id) is None:
            db.session.add(Friendship.create(accepter_id, sender_id))
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Friend request already processed")
    except Exception:
        db.session.rollback()
        raise

    logger.info("Friend request %s accepted: %s <-> %s",
                request_id, sender_id, accepter_id)
    return friend_request


def list_friend_requests(user_id, status=PENDING):
    if status not in (PENDING, ACCEPTED):
        raise InvalidArgument(f"Invalid status '{status}'")

    friend_requests = (
        FriendRequest.query.filter_by(recipient_id=user_id, status=status)
        .order_by(FriendRequest.id)
        .all()
    )
    return [
        dict(req.to_dict(), sender=req.sender.to_public_dict())
        for req in friend_requests
    ]


def list_friends(user_id):
    friend_ids = Friendship.friend_ids_of(user_id)
    if not friend_ids:
        return []
    friends = (
        User.query.filter(User.id.in_(list(friend_ids)))
        .order_by(User.id)
        .all()
    )
    return [friend.to_public_dict() for friend in friends]
