from datetime import datetime, timezone

from . import db


PENDING = "pending"
ACCEPTED = "accepted"


class FriendRequest(db.Model):
    __tablename__ = "friend_requests"

    id = db.Column(db.Integer, primary_key=True)
    sender_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    recipient_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    status = db.Column(
        db.Enum(PENDING, ACCEPTED, name="friend_request_status"),
        default=PENDING,
        nullable=False,
    )
    created_at = db.Column(
        db.DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    sender = db.relationship("User", foreign_keys=[sender_id], lazy=True)

    # One request per direction, whatever its status. A second insert for the
    # same pair fails at commit even when two sends race past the read check.
    __table_args__ = (
        db.UniqueConstraint(
            "sender_id", "recipient_id", name="unique_friend_request"
        ),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "from": self.sender_id,
            "to": self.recipient_id,
            "status": self.status,
        }

    def __repr__(self):
        return (
            f"<FriendRequest id={self.id} from={self.sender_id} "
            f"to={self.recipient_id} status={self.status}>"
        )
