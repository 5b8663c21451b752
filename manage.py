"""
Manager module for the Flask Application
"""


from flask.cli import FlaskGroup
import serverless_wsgi
import logging

from resourcekit import create_app
from resourcekit.api_v2.resources import ResourceRegistry

# Cleanup logging for proper lambda logs
root = logging.getLogger()
if root.handlers:
    for handler in root.handlers:
        root.removeHandler(handler)

# very important for the running of uwsgi to have app here
app = create_app()
cli = FlaskGroup(create_app=create_app)


@cli.command('init-resources')
def init_resources():
    """
    init_resources Run the database setup of every served resource
    """
    for resource in ResourceRegistry.all():
        resource.init()
        print(f"Initialized resource '{resource.path}'")


def handler(event, context):
    print("=== Starting Flask App ===")
    return serverless_wsgi.handle_request(app, event, context)


if __name__ == '__main__':
    cli()
