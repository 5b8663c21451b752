"""Tests for resourcekit.helpers.error handlers."""

import json
from unittest.mock import patch

from resourcekit.base.errors import PersistenceError


class TestHandleError:

    def test_400_error(self, client):
        response = client.post(
            '/api/v2/users',
            data='not-json',
            content_type='text/plain'
        )
        assert response.status_code == 400
        data = response.get_json()
        assert data['status'] == 400
        assert data['message'] == 'Content-Type must be application/json'

    def test_404_unsupported_path(self, client):
        response = client.get('/api/v2/unknown_things')
        assert response.status_code == 404
        assert response.get_json()['status'] == 404

    def test_405_method(self, client):
        response = client.delete('/api/v2/users')
        assert response.status_code == 405
        assert response.get_json()['status'] == 405

    def test_409_on_persistence_error(self, client, json_headers, app):
        from resourcekit.api_v2.resources import ResourceRegistry
        users = ResourceRegistry.get('users')

        with patch.object(users, 'create', side_effect=PersistenceError("Document not created")):
            response = client.post(
                '/api/v2/users',
                data=json.dumps({'username': 'ada', 'email': 'ada@example.com'}),
                headers=json_headers
            )

        assert response.status_code == 409
        assert 'Document not created' in response.get_json()['message']

    def test_500_on_adapter_failure(self, client, app):
        from resourcekit.api_v2.resources import ResourceRegistry
        users = ResourceRegistry.get('users')

        with patch.object(users.db, 'find', side_effect=RuntimeError("connection lost")):
            response = client.get('/api/v2/users/ada')

        assert response.status_code == 500
        data = response.get_json()
        assert data['message'] == 'Internal server error while retrieving document'

    def test_error_response_structure(self, client):
        data = client.get('/api/v2/unknown_things').get_json()

        assert 'status' in data
        assert 'message' in data

    def test_unhandled_exception_hides_details(self, client, app):
        app.config['PROPAGATE_EXCEPTIONS'] = False

        with patch('resourcekit.api_v1.health.ResourceRegistry.paths', side_effect=RuntimeError("secret detail")):
            response = client.get('/api/v1/health/resources')

        assert response.status_code == 500
        data = response.get_json()
        assert data['status'] == 500
        assert data['message'] == 'Internal server error'
