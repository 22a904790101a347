from datetime import datetime, timezone

from sqlalchemy import or_

from . import db


class Friendship(db.Model):
    """
    A single edge per unordered pair of friends.

    The lower user id is always stored in ``user_id``, so one row answers
    "is A friends with B" from either side and accepting a request never
    has to write two records.
    """

    __tablename__ = "friendships"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    friend_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False
    )
    created_at = db.Column(
        db.DateTime, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        db.UniqueConstraint("user_id", "friend_id", name="unique_friendship"),
        db.CheckConstraint("user_id < friend_id", name="ordered_friendship"),
    )

    @classmethod
    def create(cls, first_id, second_id):
        low, high = sorted((first_id, second_id))
        return cls(user_id=low, friend_id=high)

    @classmethod
    def between(cls, first_id, second_id):
        low, high = sorted((first_id, second_id))
        return cls.query.filter_by(user_id=low, friend_id=high).first()

    @classmethod
    def touching(cls, user_ids):
        """All edges with at least one endpoint in ``user_ids``."""
        user_ids = list(user_ids)
        return cls.query.filter(
            or_(cls.user_id.in_(user_ids), cls.friend_id.in_(user_ids))
        )

    @classmethod
    def friend_ids_of(cls, user_id):
        edges = cls.touching([user_id]).all()
        return {edge.other(user_id) for edge in edges}

    def other(self, user_id):
        return self.friend_id if self.user_id == user_id else self.user_id

    def __repr__(self):
        return f"<Friendship {self.user_id} <-> {self.friend_id}>"
