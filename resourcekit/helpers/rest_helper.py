"""
REST helper translating resource outcomes into Flask responses
"""

from flask import jsonify, abort, current_app
from werkzeug.exceptions import HTTPException

from resourcekit.base.errors import (
    ConflictError, NotFoundError, PersistenceError, ValidationError
)
from resourcekit.helpers.api_helper import (
    make_list_api_response, arg_matches, get_arg_predicate, get_start_limit
)


class ResourceHelper:
    """Helper class exposing one resource over REST.

    Documents are addressed by the resource key when it has one, otherwise
    by its auto-index, otherwise by native identity.
    """
    def __init__(self, resource, base_url: str = ""):
        self.resource = resource
        self.base_url = base_url.rstrip("/")

    @property
    def ident_field(self):
        """The property that identifies documents in URLs."""
        return self.resource.key or self.resource.index or self.resource.db.id_field

    def _parse_ident(self, ident):
        if self.resource.key or not self.resource.index:
            return ident

        try:
            return int(ident)
        except ValueError:
            abort(400, description=f"Index '{ident}' must be an integer")

    def _read(self, ident):
        if self.resource.key:
            return self.resource.read_by_key(ident)
        if self.resource.index:
            return self.resource.read_by_index(ident)
        return self.resource.read(ident)

    def _update(self, ident, data):
        if self.resource.key:
            return self.resource.update_by_key(ident, data)
        if self.resource.index:
            return self.resource.update_by_index(ident, data)
        return self.resource.update(ident, data)

    def _delete(self, ident):
        if self.resource.key:
            return self.resource.delete_by_key(ident)
        if self.resource.index:
            return self.resource.delete_by_index(ident)
        return self.resource.delete(ident)

    def location(self, doc):
        """
        Build the URL of a document

        Args:
            doc: A document as returned by the resource

        Returns:
            The URL, or None if the document does not show its identifier
        """
        ident = doc.get(self.ident_field) if isinstance(doc, dict) else None
        if ident is None:
            return None
        return f"{self.base_url}/{self.resource.path}/{ident}"

    def _backend_predicate(self, filters: dict) -> dict:
        """Filters the backend can apply as stored: the key as given, the index as an int."""
        predicate = {}
        if self.resource.key and self.resource.key in filters:
            predicate[self.resource.key] = filters[self.resource.key]
        if self.resource.index and self.resource.index in filters:
            raw = filters[self.resource.index]
            try:
                predicate[self.resource.index] = int(raw)
            except ValueError as ex:
                raise ValueError(f"Index '{raw}' must be an integer") from ex
        return predicate

    def get_all(self, query_params=None):
        """
        Get all documents with optional equality filters and pagination

        Filters match the documents as the API returns them, after out_map, so
        a property hidden from responses cannot be filtered on.

        Args:
            query_params: Flask request.args object for query parameter filtering
        """
        query_params = query_params or {}

        try:
            filters, filter_string = get_arg_predicate(query_params, None)
            start, limit, filter_string = get_start_limit(
                query_params,
                start_default=0,
                limit_default=50,
                current_filter=filter_string
            )

            docs = [
                doc for doc in self.resource.find(self._backend_predicate(filters))
                if isinstance(doc, dict) and all(
                    name in doc and arg_matches(doc[name], raw) for name, raw in filters.items()
                )
            ]
            total_count = len(docs)
            is_last = (start + limit) >= total_count

            return jsonify(make_list_api_response(
                docs[start:start + limit],
                start,
                limit,
                is_last,
                filter_string,
                total_count
            )), 200

        except ValueError as e:
            current_app.logger.warning(f"Invalid query parameters: {str(e)}")
            abort(400, description=f"Invalid query parameters: {str(e)}")
        except HTTPException as e:
            abort(e.code, description=e.description)
        except Exception as e:
            current_app.logger.error(f"Error retrieving {self.resource.path}: {str(e)}")
            abort(500, description="Internal server error while retrieving documents")

    def get_by_ident(self, ident):
        """
        Get a single document

        Args:
            ident: The identifier from the URL
        """
        ident = self._parse_ident(ident)

        try:
            return jsonify(self._read(ident)), 200

        except NotFoundError as e:
            abort(404, description=str(e))
        except HTTPException as e:
            abort(e.code, description=e.description)
        except Exception as e:
            current_app.logger.error(f"Error retrieving document '{ident}': {str(e)}")
            abort(500, description="Internal server error while retrieving document")

    def create(self, data):
        """
        Create a new document

        Args:
            data: The proposed document
        """
        if not isinstance(data, dict):
            abort(400, description="Request body must be a JSON object")

        try:
            created = self.resource.create(data)
            response = jsonify(created)
            response.status_code = 201

            location = self.location(created)
            if location:
                response.headers["Location"] = location
            return response

        except ValidationError as e:
            current_app.logger.warning(f"Validation error during create: {str(e)}")
            abort(400, description=f"Validation error: {str(e)}")
        except (ConflictError, PersistenceError) as e:
            current_app.logger.warning(f"Conflict during create: {str(e)}")
            abort(409, description=f"Conflict: {str(e)}")
        except HTTPException as e:
            abort(e.code, description=e.description)
        except Exception as e:
            current_app.logger.error(f"Error creating document: {str(e)}")
            abort(500, description="Internal server error while creating document")

    def update(self, ident, data):
        """
        Update an existing document

        Args:
            ident: The identifier from the URL
            data: The property values to apply
        """
        if not isinstance(data, dict):
            abort(400, description="Request body must be a JSON object")

        ident = self._parse_ident(ident)

        try:
            return jsonify(self._update(ident, data)), 200

        except NotFoundError as e:
            abort(404, description=str(e))
        except ValidationError as e:
            current_app.logger.warning(f"Validation error during update: {str(e)}")
            abort(400, description=f"Validation error: {str(e)}")
        except HTTPException as e:
            abort(e.code, description=e.description)
        except Exception as e:
            current_app.logger.error(f"Error updating document '{ident}': {str(e)}")
            abort(500, description="Internal server error while updating document")

    def delete(self, ident):
        """
        Delete a document

        Args:
            ident: The identifier from the URL
        """
        ident = self._parse_ident(ident)

        try:
            self._delete(ident)
            return "", 204

        except NotFoundError as e:
            abort(404, description=str(e))
        except HTTPException as e:
            abort(e.code, description=e.description)
        except Exception as e:
            current_app.logger.error(f"Error deleting document '{ident}': {str(e)}")
            abort(500, description="Internal server error while deleting document")
