from collections import Counter

from errors import NotFound
from models import db
from models.friendship import Friendship
from models.user import User

DEFAULT_LIMIT = 5


def mutual_friend_reason(count):
    noun = "mutual friend" if count == 1 else "mutual friends"
    return f"{count} {noun}"


def count_mutual_friends(user_id, friend_ids):
    """
    Count, for every user outside ``friend_ids`` (and not ``user_id``), how
    many members of ``friend_ids`` they are friends with.
    """
    excluded = set(friend_ids) | {user_id}
    counts = Counter()
    for edge in Friendship.touching(friend_ids).all():
        for friend, candidate in (
            (edge.user_id, edge.friend_id),
            (edge.friend_id, edge.user_id),
        ):
            if friend in friend_ids and candidate not in excluded:
                counts[candidate] += 1
    return counts


def get_friend_recommendations(user_id, limit=DEFAULT_LIMIT):
    """
    Rank non-friends by how many friends they share with ``user_id``.

    Candidates with no mutual friends are dropped. Ties keep user id order.
    """
    if db.session.get(User, user_id) is None:
        raise NotFound("User not found")

    friend_ids = Friendship.friend_ids_of(user_id)
    if not friend_ids:
        return []

    counts = count_mutual_friends(user_id, friend_ids)
    if not counts:
        return []

    candidates = (
        User.query.filter(User.id.in_(list(counts))).order_by(User.id).all()
    )
    # sorted() is stable, so equal counts stay in id order
    ranked = sorted(
        candidates, key=lambda candidate: counts[candidate.id], reverse=True
    )

    recommendations = []
    for candidate in ranked[:limit]:
        mutual_count = counts[candidate.id]
        entry = candidate.to_public_dict()
        entry["mutualCount"] = mutual_count
        entry["reason"] = mutual_friend_reason(mutual_count)
        recommendations.append(entry)
    return recommendations
