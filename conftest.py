"""
Root conftest.py for the resourcekit test suite.

Provides fixtures for the Flask app, test client, in-memory adapters,
sample documents and factory resets.
"""

import os
import pytest

# Set test environment before importing the app
os.environ['APP_SETTINGS'] = 'resourcekit.config.DevelopmentConfig'
os.environ['FLASK_DEBUG'] = 'true'
os.environ.setdefault('SECRET_KEY', 'test-secret-key-for-flask-min-32-bytes-long!')
if os.environ.get('INTEGRATION') != '1':
    os.environ['DATABASE_BACKEND'] = 'memory'


from resourcekit import create_app
from resourcekit.adapters.adapter_factory import AdapterFactory
from resourcekit.adapters.memory_adapter import MemoryAdapter
from resourcekit.api_v2.resources import ResourceRegistry
from resourcekit.config import DevelopmentConfig


class TestConfig(DevelopmentConfig):
    # pylint: disable=too-few-public-methods
    """Configuration for the API tests"""

    TESTING = True
    DATABASE_BACKEND = 'memory'
    RESOURCE_MODULES = ['user']


def _reset_all_factories():
    """Reset the adapter factory and resource registry to clean state."""
    AdapterFactory._instances = {}
    AdapterFactory._backend = None
    AdapterFactory._mongo_client = None
    AdapterFactory._mongo_database = None
    AdapterFactory._rethink_conn = None
    AdapterFactory._rethink_database = None
    AdapterFactory._dynamo_client = None
    ResourceRegistry.clear()


@pytest.fixture
def memory_adapter():
    """Provide an empty in-memory adapter."""
    return MemoryAdapter("test")


@pytest.fixture
def app():
    """Create a Flask application serving the bundled resources on the memory backend."""
    _reset_all_factories()

    flask_app = create_app(TestConfig)

    yield flask_app

    # Cleanup after test
    _reset_all_factories()


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def json_headers():
    """Provide JSON content-type headers."""
    return {
        'Content-Type': 'application/json'
    }


@pytest.fixture
def sample_user_data():
    """Provide sample user data for POST requests."""
    return {
        'username': 'ada',
        'email': 'Ada@Example.com ',
        'name': 'Ada Lovelace',
        'password_hash': 'not-a-real-hash',
        'status': 'active'
    }
