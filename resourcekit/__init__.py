"""
Flask Application init
"""

import importlib
import logging
import os

from flask import Flask

import resourcekit.helpers.error as rkerror
from resourcekit.adapters.adapter_factory import AdapterFactory
from resourcekit.api_v1 import health
from resourcekit.api_v2 import resources as resources_api
from resourcekit.api_v2.resources import ResourceRegistry


DEFAULT_SETTINGS = 'resourcekit.config.DevelopmentConfig'


def load_resources(module_names):
    """
    load_resources Build the resources defined by modules under resourcekit.models

    Each module must provide a ``build_resource()`` function.

    :param module_names: Module names relative to resourcekit.models
    :return List of resources
    """

    loaded = []
    for module_name in module_names:
        module = importlib.import_module(f"resourcekit.models.{module_name}")
        loaded.append(module.build_resource())

    return loaded


def create_app(config_object=None, resources=None):
    """
    create_app Will setup the Flask application, all blueprints, database connections
    and served resources

    :param config_object: Config object or import path, defaults to APP_SETTINGS
    :param resources: Resources to serve, defaults to the configured RESOURCE_MODULES
    :return The Flask application
    """

    # create and configure the flask_application
    flask_application = Flask(__name__, instance_relative_config=True)

    # load the app config values from the config python file
    flask_application.config.from_object(config_object or os.getenv('APP_SETTINGS', DEFAULT_SETTINGS))

    # Configure logging
    if flask_application.config.get("FLASK_DEBUG"):
        flask_application.logger.setLevel(logging.DEBUG)
    else:
        flask_application.logger.setLevel(logging.INFO)

    # Setup adapter factory
    AdapterFactory.configure(
        flask_application.config.get("DATABASE_BACKEND", "memory"),
        flask_app=flask_application
    )

    # Setup the served resources
    ResourceRegistry.clear()
    if resources is None:
        resources = load_resources(flask_application.config.get("RESOURCE_MODULES", []))
    for resource in resources:
        ResourceRegistry.register(resource)
        flask_application.logger.debug(f"Serving resource '{resource.path}'")

    # load api endpoints
    flask_application.register_blueprint(health.bp)
    flask_application.register_blueprint(resources_api.bp)

    # Setup the Error handlers
    for code in [400, 404, 405, 409, 500]:
        flask_application.register_error_handler(code, rkerror.handle_error)

    return flask_application
