"""
Sanity check API for the Flask application
"""

from flask import (
    Blueprint, jsonify
)

from resourcekit.adapters.adapter_factory import AdapterFactory
from resourcekit.api_v2.resources import ResourceRegistry
from resourcekit.helpers.api_helper import (
    make_api_message
)
from resourcekit.helpers.cors_helper import (
    set_cors
)


bp = Blueprint('health', __name__, url_prefix='/api/v1')
bp.after_request(set_cors)


@bp.route('/health/flask', methods=('GET',))
def get_health_flask():
    """
    get_health_flask API call to verify the health of the Flask Application

    :return A JSON of a data object with a message
    """

    data = make_api_message("success", "Flask is running")
    return jsonify(data)


@bp.route('/health/resources', methods=('GET',))
def get_health_resources():
    """
    get_health_resources API call listing the served resources and the database backend

    :return A JSON of a data object with the backend and resource paths
    """

    data = make_api_message("success", "Resources are registered")
    data["backend"] = AdapterFactory.get_backend()
    data["resources"] = ResourceRegistry.paths()
    return jsonify(data)
