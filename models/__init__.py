from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Registered here so relationship strings resolve whichever model is
# imported first.
from .user import User  # noqa: E402,F401
from .friend_request import FriendRequest  # noqa: E402,F401
from .friendship import Friendship  # noqa: E402,F401
