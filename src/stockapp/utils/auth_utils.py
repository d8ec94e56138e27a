import base64
import binascii

from flask import request
from flask_smorest import abort

from stockapp.config import setup_logger
from stockapp.exceptions import StoreError

logger = setup_logger(name="Auth")

AUTH_HEADER = "Authorization"
USERNAME_HEADER = "Username"
AUTH_FAILURE = "Authentication failed"
INTERNAL_SERVER_ERROR = "Internal server error"


def parse_basic_auth(header_value):
    """
    Parse an RFC 7617 Basic credentials header.

    Parameters:
        header_value (str): Value of the Authorization header

    Returns:
        tuple: (username, password), or None when the header is missing or malformed
    """
    if not header_value:
        return None

    scheme, _, credentials = header_value.strip().partition(" ")
    if scheme.lower() != "basic" or not credentials.strip():
        return None

    try:
        decoded = base64.b64decode(credentials.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None

    # user-ids cannot contain a colon, passwords can
    username, separator, password = decoded.partition(":")
    if not separator:
        return None
    return username, password


def require_basic_auth(claimed_username, user_service):
    """
    Abort with 401 unless the request carries valid Basic credentials for
    claimed_username. Store failures abort with 500.
    """
    credentials = parse_basic_auth(request.headers.get(AUTH_HEADER))
    if credentials is None:
        abort(401, message=AUTH_FAILURE)

    header_username, password = credentials
    if not claimed_username or header_username != claimed_username:
        abort(401, message=AUTH_FAILURE)

    try:
        verified = user_service.verify_password(header_username, password)
    except StoreError:
        abort(500, message=INTERNAL_SERVER_ERROR)

    if not verified:
        logger.info(f"Failed authentication for {header_username}")
        abort(401, message=AUTH_FAILURE)
    return header_username
