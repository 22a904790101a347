from flask import Flask

import os
import unittest

from sqlalchemy.exc import IntegrityError

from config import Config
from errors import Conflict, InvalidArgument, NotFound
from models import db
from models.user import User
from models.friend_request import FriendRequest
from models.friendship import Friendship
from services import parse_id
from services.friend_requests import (
    accept_friend_request,
    send_friend_request,
)
from services.recommendations import (
    get_friend_recommendations,
    mutual_friend_reason,
)


class TestFriendGraphServices(unittest.TestCase):
    def setUp(self):
        self.app = Flask(__name__)
        self.app.config.from_object(Config)
        self.app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get(
            "TEST_FLASK_DB_URL", "sqlite://"
        )
        self.app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {}
        self.app.config["TESTING"] = True

        db.init_app(self.app)
        self.ctx = self.app.app_context()
        self.ctx.push()
        db.create_all()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.ctx.pop()

    def make_users(self, *names):
        users = []
        for name in names:
            user = User(full_name=name.title(), username=name,
                        email=f"{name}@x.com")
            user.password = "password123"
            db.session.add(user)
            users.append(user)
        db.session.commit()
        return [user.id for user in users]

    def befriend(self, first_id, second_id):
        friend_request = send_friend_request(first_id, second_id)
        accept_friend_request(second_id, friend_request.id)

    # --------------------------------------
    # Friend requests
    # --------------------------------------

    def test_self_request_rejected(self):
        (alice,) = self.make_users("alice")
        with self.assertRaises(InvalidArgument):
            send_friend_request(alice, alice)
        # String ids from JSON bodies are coerced before comparing
        with self.assertRaises(InvalidArgument):
            send_friend_request(alice, str(alice))

    def test_parse_id(self):
        self.assertEqual(parse_id(7, "Friend ID"), 7)
        self.assertEqual(parse_id(" 7 ", "Friend ID"), 7)
        for bad_id in (None, "", 2.9, "1.5", "abc", "²", True, 0, 2**63):
            with self.assertRaises(InvalidArgument):
                parse_id(bad_id, "Friend ID")

    def test_unknown_target(self):
        (alice,) = self.make_users("alice")
        with self.assertRaises(NotFound):
            send_friend_request(alice, alice + 100)

    def test_duplicate_pair_blocked_by_store(self):
        alice, bob = self.make_users("alice", "bob")
        db.session.add(FriendRequest(sender_id=alice, recipient_id=bob))
        db.session.commit()

        # A second row for the same pair cannot be written, even when the
        # read-side check is bypassed
        db.session.add(FriendRequest(sender_id=alice, recipient_id=bob))
        with self.assertRaises(IntegrityError):
            db.session.commit()
        db.session.rollback()

        with self.assertRaises(Conflict):
            send_friend_request(alice, bob)
        self.assertEqual(FriendRequest.query.count(), 1)

    def test_resend_after_accept_blocked(self):
        alice, bob = self.make_users("alice", "bob")
        self.befriend(alice, bob)

        # Remove the edge directly; the accepted request still blocks
        db.session.delete(Friendship.between(alice, bob))
        db.session.commit()
        with self.assertRaises(Conflict):
            send_friend_request(alice, bob)

    def test_accept_symmetry(self):
        alice, bob = self.make_users("alice", "bob")
        friend_request = send_friend_request(alice, bob)
        accept_friend_request(bob, friend_request.id)

        self.assertIn(bob, db.session.get(User, alice).friends)
        self.assertIn(alice, db.session.get(User, bob).friends)
        self.assertEqual(db.session.get(FriendRequest, friend_request.id).status,
                         "accepted")

    def test_accept_after_concurrent_accept(self):
        alice, bob = self.make_users("alice", "bob")
        friend_request = send_friend_request(alice, bob)
        request_id = friend_request.id

        # Status flipped by another writer; no friendship edge is created
        FriendRequest.query.filter_by(id=request_id).update(
            {"status": "accepted"}
        )
        db.session.commit()

        with self.assertRaises(Conflict):
            accept_friend_request(bob, request_id)
        self.assertIsNone(Friendship.between(alice, bob))

    def test_friendship_edge_is_ordered(self):
        alice, bob = self.make_users("alice", "bob")
        edge = Friendship.create(bob, alice)
        self.assertEqual((edge.user_id, edge.friend_id), (alice, bob))
        self.assertEqual(edge.other(alice), bob)
        self.assertEqual(edge.other(bob), alice)

    # --------------------------------------
    # Recommendations
    # --------------------------------------

    def test_reason_wording(self):
        self.assertEqual(mutual_friend_reason(1), "1 mutual friend")
        self.assertEqual(mutual_friend_reason(2), "2 mutual friends")

    def test_recommendation_ranking(self):
        a, b, c, d, e, f = self.make_users("a", "b", "c", "d", "e", "f")
        self.befriend(a, b)
        self.befriend(a, c)
        self.befriend(d, b)
        self.befriend(d, c)
        self.befriend(d, e)
        self.befriend(f, b)

        recommendations = get_friend_recommendations(a)
        self.assertEqual([r["id"] for r in recommendations], [d, f])
        self.assertEqual(recommendations[0]["mutualCount"], 2)
        self.assertEqual(recommendations[0]["reason"], "2 mutual friends")
        self.assertEqual(recommendations[1]["reason"], "1 mutual friend")
        self.assertEqual(recommendations[0]["username"], "d")
        self.assertIn("fullName", recommendations[0])
        self.assertIn("email", recommendations[0])

    def test_recommendations_exclude_friends_and_self(self):
        a, b, c = self.make_users("a", "b", "c")
        self.befriend(a, b)
        self.befriend(a, c)
        self.befriend(b, c)

        # b and c share each other, but both are already a's friends
        self.assertEqual(get_friend_recommendations(a), [])

    def test_recommendations_ties_and_limit(self):
        ids = self.make_users("hub", "me", "p1", "p2", "p3", "p4", "p5", "p6")
        hub, me, others = ids[0], ids[1], ids[2:]
        self.befriend(me, hub)
        for other in reversed(others):
            self.befriend(other, hub)

        recommendations = get_friend_recommendations(me)
        self.assertEqual(len(recommendations), 5)
        # All have one mutual friend, so storage order decides
        self.assertEqual([r["id"] for r in recommendations], others[:5])

        self.assertEqual(len(get_friend_recommendations(me, limit=2)), 2)

    def test_recommendations_without_friends(self):
        (alice,) = self.make_users("alice")
        self.assertEqual(get_friend_recommendations(alice), [])

    def test_recommendations_unknown_user(self):
        with self.assertRaises(NotFound):
            get_friend_recommendations(12345)


if __name__ == "__main__":
    unittest.main()
