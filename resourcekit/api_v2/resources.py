"""
Generic Resource API
"""

import json

from flask import (
    Blueprint, request, abort, current_app
)
from werkzeug.exceptions import HTTPException

from resourcekit.helpers.cors_helper import set_cors
from resourcekit.helpers.rest_helper import ResourceHelper


URL_PREFIX = '/api/v2'

bp = Blueprint('resources', __name__, url_prefix=URL_PREFIX)
bp.after_request(set_cors)


class ResourceRegistry:
    """Registry of the resources served by the API, keyed by REST path."""
    _resources = {}

    @classmethod
    def register(cls, resource):
        """Serve a resource under its REST path.

        Raises:
            ValueError: If the resource has no path or the path is taken
        """
        if not resource.path:
            raise ValueError("Resource must define a path to be served")
        if resource.path in cls._resources and cls._resources[resource.path] is not resource:
            raise ValueError(f"Path '{resource.path}' is already registered")
        cls._resources[resource.path] = resource

    @classmethod
    def get(cls, path):
        """Return the resource for a path, or None."""
        return cls._resources.get(path)

    @classmethod
    def paths(cls):
        """Return the registered paths in sorted order."""
        return sorted(cls._resources)

    @classmethod
    def all(cls):
        """Return the registered resources."""
        return list(cls._resources.values())

    @classmethod
    def clear(cls):
        cls._resources = {}


def load_helper(path):
    """Build the REST helper for a registered path, aborting with 404 if unknown."""
    resource = ResourceRegistry.get(path)
    if resource is None:
        abort(404, description=f"{path} not supported")
    return ResourceHelper(resource, base_url=URL_PREFIX)


def validate_json_request():
    """Validate that the request contains valid JSON data"""
    if not request.is_json:
        abort(400, description="Content-Type must be application/json")

    if not request.data:
        abort(400, description="Request body is required")

    try:
        return json.loads(request.data)
    except ValueError:
        abort(400, description="Invalid JSON in request body")


@bp.route('/<path>', methods=['GET', 'POST'])
@bp.route('/<path>/<string:ident>', methods=['GET', 'PUT', 'PATCH', 'DELETE'])
def handle_crud(path, ident=None):
    """Handle CRUD operations for registered resources.

    Args:
        path: The REST path of the resource
        ident: Optional identifier for single document operations

    Returns:
        Response object with appropriate status code and data
    """
    try:
        helper = load_helper(path)

        if request.method == 'GET':
            if ident is not None:
                return helper.get_by_ident(ident)
            # Pass query parameters for filtering
            return helper.get_all(query_params=request.args)
        if request.method == 'POST':
            return helper.create(validate_json_request())
        if request.method in ('PUT', 'PATCH'):
            return helper.update(ident, validate_json_request())
        if request.method == 'DELETE':
            return helper.delete(ident)
        # This should never happen due to route decorators, but handle it
        abort(405, description="Method not allowed")
    except HTTPException as e:
        abort(e.code, description=e.description)
    except Exception as ex:
        current_app.logger.error(f"Internal server error: {str(ex)}")
        abort(500, description="Internal server error")
