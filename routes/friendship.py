from flask import Blueprint, current_app, request, jsonify
from flask_login import current_user, login_required

from services.friend_requests import (
    accept_friend_request,
    list_friend_requests,
    list_friends,
    send_friend_request,
)
from services.recommendations import get_friend_recommendations
from . import API_PREFIX, get_json_body


friendship_api_bp = Blueprint("friendship", __name__, url_prefix=API_PREFIX)


# =================================
#       Friendship Endpoints
# =================================


@friendship_api_bp.route("/request", methods=["POST"])
@login_required
def send_request():
    data = get_json_body()
    friend_request = send_friend_request(current_user.id, data.get("friendId"))
    return jsonify(
        {
            "success": True,
            "message": "Friend request sent",
            "request": friend_request.to_dict(),
        }
    ), 200


@friendship_api_bp.route("/accept", methods=["POST"])
@login_required
def accept_request():
    data = get_json_body()
    friend_request = accept_friend_request(
        current_user.id, data.get("requestId")
    )
    return jsonify(
        {
            "success": True,
            "message": "Friend request accepted",
            "request": friend_request.to_dict(),
        }
    ), 200


@friendship_api_bp.route("/requests", methods=["GET"])
@login_required
def get_friend_requests():
    status = request.args.get("status", "pending")
    requests_list = list_friend_requests(current_user.id, status)
    return jsonify({"success": True, "requests": requests_list}), 200


@friendship_api_bp.route("/friends", methods=["GET"])
@login_required
def get_friend_list():
    return jsonify(
        {"success": True, "friends": list_friends(current_user.id)}
    ), 200


@friendship_api_bp.route("/recommendations", methods=["GET"])
@login_required
def get_recommendations():
    limit = current_app.config.get("RECOMMENDATION_LIMIT", 5)
    recommendations = get_friend_recommendations(current_user.id, limit)
    return jsonify(
        {"success": True, "recommendations": recommendations}
    ), 200
