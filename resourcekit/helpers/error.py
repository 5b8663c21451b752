"""
Flask Error Endpoints
"""

from flask import (
    jsonify, current_app
)
from werkzeug.exceptions import InternalServerError

from resourcekit.helpers.api_helper import (
    make_api_message
)


def handle_error(error):
    """
    handle_error Render an HTTP error as a JSON status message

    Unhandled exceptions reach the 500 handler wrapped in InternalServerError;
    the wrapped exception is logged, never sent to the client.

    :param error: The werkzeug HTTPException raised by abort() or by Flask
    :return JSON with the error code and message, and the error code
    """

    original = getattr(error, "original_exception", None)
    if isinstance(error, InternalServerError) and original is not None:
        current_app.logger.error(f"Unhandled exception: {original!r}")
        message = "Internal server error"
    else:
        message = error.description or "An error occurred"

    return jsonify(make_api_message(error.code, message)), error.code
