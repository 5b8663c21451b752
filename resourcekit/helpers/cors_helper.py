"""
Helper to add CORS headers to API responses
"""


ALLOWED_METHODS = 'GET,PUT,PATCH,POST,DELETE,OPTIONS'


def set_cors(response):
    """
    set_cors Function called on endpoint leave. Sets the CORS headers so browser clients
    can reach the API.

    :return The response object for flask calls
    """

    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = 'Content-Type'
    response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    response.headers["Access-Control-Expose-Headers"] = 'Location'

    return response
