import logging

from flask import Blueprint, request, jsonify
from flask_login import current_user, login_required

from auth import clear_token_cookie, issue_token, set_token_cookie
from services.users import authenticate_user, register_user, search_users
from . import API_PREFIX, get_json_body

logger = logging.getLogger(__name__)

user_api_bp = Blueprint("user", __name__, url_prefix=API_PREFIX)


# =================================
#       User Endpoints
# =================================


@user_api_bp.route("/register", methods=["POST"])
def register():
    data = get_json_body()
    user = register_user(
        data.get("fullName"),
        data.get("username"),
        data.get("email"),
        data.get("password"),
    )
    return jsonify(
        {
            "success": True,
            "message": "Registered successfully",
            "user": user.to_public_dict(),
        }
    ), 201


@user_api_bp.route("/login", methods=["POST"])
def login():
    data = get_json_body()
    user = authenticate_user(data.get("email"), data.get("password"))

    response = jsonify(
        {
            "success": True,
            "message": f"Welcome back, {user.full_name}",
            "user": user.to_public_dict(),
        }
    )
    set_token_cookie(response, issue_token(user))
    logger.info("User %s logged in", user.id)
    return response, 200


@user_api_bp.route("/logout", methods=["GET"])
def logout():
    response = jsonify({"success": True, "message": "Logged out successfully"})
    clear_token_cookie(response)
    return response, 200


@user_api_bp.route("/search", methods=["GET"])
@login_required
def search():
    users = search_users(current_user.id, request.args.get("query"))
    return jsonify({"success": True, "users": users}), 200
