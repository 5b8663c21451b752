"""
Configuration objects for the Flask application.
Sets the data that can be accessed with app.config["key"]
"""

import os
import json


def _load_resource_modules():
    """Read the RESOURCE_MODULES JSON list, falling back to the bundled user resource."""
    raw_modules = os.environ.get('RESOURCE_MODULES')
    if not raw_modules:
        return ["user"]

    try:
        modules = json.loads(raw_modules)
    except ValueError:
        return ["user"]

    if isinstance(modules, str):
        return [modules]
    if isinstance(modules, list):
        return [module for module in modules if isinstance(module, str)]
    return ["user"]


class BaseConfig:
    # pylint: disable=too-few-public-methods
    """Base configuration"""

    SECRET_KEY = os.environ.get('SECRET_KEY')

    DATABASE_BACKEND = os.environ.get('DATABASE_BACKEND', 'memory').lower()

    MONGODB_USER = os.environ.get('MONGODB_USER', '')
    MONGODB_PASSWORD = os.environ.get('MONGODB_PASSWORD', '')
    MONGODB_SERVER = os.environ.get('MONGODB_SERVER', 'localhost:27017')
    MONGODB_DATABASE = os.environ.get('MONGODB_DATABASE', 'resourcekit')

    RETHINKDB_HOST = os.environ.get('RETHINKDB_HOST', 'localhost')
    RETHINKDB_PORT = int(os.environ.get('RETHINKDB_PORT', '28015'))
    RETHINKDB_DB = os.environ.get('RETHINKDB_DB', 'resourcekit')

    DYNAMODB_REGION = os.environ.get('DYNAMODB_REGION')
    DYNAMODB_ENDPOINT = os.environ.get('DYNAMODB_ENDPOINT')
    DYNAMODB_ACCESS_KEY = os.environ.get('DYNAMODB_ACCESS_KEY')
    DYNAMODB_SECRET_KEY = os.environ.get('DYNAMODB_SECRET_KEY')

    # Model modules under resourcekit.models to serve
    RESOURCE_MODULES = _load_resource_modules()


class DevelopmentConfig(BaseConfig):
    # pylint: disable=too-few-public-methods
    """Development configuration"""

    FLASK_DEBUG = True


class QAConfig(BaseConfig):
    # pylint: disable=too-few-public-methods
    """QA configuration"""

    FLASK_DEBUG = False


class ProductionConfig(BaseConfig):
    # pylint: disable=too-few-public-methods
    """Production configuration"""

    FLASK_DEBUG = False
