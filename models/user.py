from datetime import datetime, timezone

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from . import db
from .friendship import Friendship


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(128), nullable=False)
    username = db.Column(db.String(128), unique=True, nullable=False)
    email = db.Column(db.String(128), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(
        db.DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Incoming requests, oldest first
    friend_requests = db.relationship(
        "FriendRequest",
        foreign_keys="FriendRequest.recipient_id",
        backref="recipient",
        order_by="FriendRequest.id",
        lazy=True,
    )

    @property
    def password(self):
        # Prevent reading the password attribute
        raise AttributeError("password is not a readable attribute")

    @password.setter
    def password(self, password):
        # Automatically hash on setting
        self.password_hash = generate_password_hash(password)

    def verify_password(self, password):
        # Check hashed password
        return check_password_hash(self.password_hash, password)

    @property
    def friends(self):
        """IDs of every user this user is friends with."""
        return Friendship.friend_ids_of(self.id)

    def to_public_dict(self):
        return {
            "id": self.id,
            "fullName": self.full_name,
            "username": self.username,
            "email": self.email,
        }

    def __repr__(self):
        return f"<User id={self.id} username={self.username}>"
