from flask import Blueprint, jsonify, request

from errors import InvalidArgument


API_PREFIX = "/api/v1"

other_api_bp = Blueprint("other", __name__)


@other_api_bp.route("/", methods=["GET"])
def health_check():
    return jsonify({"status": "Friends Service is running!"}), 200


# =================================
#         Helper Functions
# =================================


def get_json_body():
    """
    Helper returning the request's JSON object, or {} when the body is empty.
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidArgument("Request body must be a JSON object")
    return data
