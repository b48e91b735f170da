# medtrack/controllers/identity.py
from flask_jwt_extended import get_jwt_identity
from werkzeug.exceptions import Unauthorized


def current_user_id() -> int:
    """Read the caller's user id from the verified JWT once, at the edge."""
    identity = get_jwt_identity()
    try:
        return int(identity)
    except (ValueError, TypeError):
        raise Unauthorized("Invalid user ID format in token")
