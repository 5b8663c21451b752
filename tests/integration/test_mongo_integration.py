"""
Integration tests for resources on MongoDB via MongoAdapter.

Requires MongoDB to be running. MONGODB_SERVER (and optionally MONGODB_USER /
MONGODB_PASSWORD) select the server.
Run with: INTEGRATION=1 MONGODB_SERVER=localhost:27017 pytest tests/integration -v
"""

import os
import uuid
import pytest

from resourcekit.base.base_resource import Resource
from resourcekit.base.errors import ConflictError, NotFoundError


pytestmark = pytest.mark.integration

INTEGRATION_DATABASE_NAME = "resourcekit_integration"


@pytest.fixture(scope="module")
def mongo_client():
    """Real MongoDB client; skip if integration env is not set or server is unreachable."""
    if os.environ.get("INTEGRATION") != "1":
        pytest.skip("Integration tests require INTEGRATION=1 and a reachable MongoDB")

    from pymongo import MongoClient
    from pymongo.errors import PyMongoError

    user = os.environ.get("MONGODB_USER", "")
    password = os.environ.get("MONGODB_PASSWORD", "")
    server = os.environ.get("MONGODB_SERVER", "localhost:27017")
    uri = f"mongodb://{user}:{password}@{server}" if user else f"mongodb://{server}"

    client = MongoClient(uri, serverSelectionTimeoutMS=2000)
    try:
        client.admin.command("ping")
    except PyMongoError:
        pytest.skip(f"MongoDB not reachable at {server}")

    yield client
    client.drop_database(INTEGRATION_DATABASE_NAME)
    client.close()


@pytest.fixture
def mongo_adapter(mongo_client):
    """MongoAdapter on a fresh collection."""
    from resourcekit.adapters.mongo_adapter import MongoAdapter

    collection = mongo_client[INTEGRATION_DATABASE_NAME][f"it_{uuid.uuid4().hex[:12]}"]
    yield MongoAdapter(collection)
    collection.drop()


class TestMongoIntegrationCRUD:
    """CRUD operations against real MongoDB."""

    def test_create_and_read(self, mongo_adapter):
        resource = Resource(mongo_adapter, key="username", index="uid")

        created = resource.create({"username": "ada", "name": "Ada"})

        assert isinstance(created["_id"], str)
        assert created["uid"] == 0
        assert resource.read(created["_id"])["name"] == "Ada"
        assert resource.read_by_key("ada")["uid"] == 0

    def test_index_sequence(self, mongo_adapter):
        resource = Resource(mongo_adapter, index="uid")
        uids = [resource.create({"name": str(i)})["uid"] for i in range(3)]
        assert uids == [0, 1, 2]

    def test_conflict(self, mongo_adapter):
        resource = Resource(mongo_adapter, uniq=["email"])
        resource.create({"email": "a@b.c"})

        with pytest.raises(ConflictError):
            resource.create({"email": "a@b.c"})

    def test_update(self, mongo_adapter):
        resource = Resource(mongo_adapter, key="username", props=["username", "name"])
        resource.create({"username": "ada", "name": "Ada"})

        updated = resource.update_by_key("ada", {"name": "Countess", "extra": 1})

        assert updated["name"] == "Countess"
        assert "extra" not in updated

    def test_delete(self, mongo_adapter):
        resource = Resource(mongo_adapter)
        created = resource.create({"name": "gone"})

        resource.delete(created["_id"])

        with pytest.raises(NotFoundError):
            resource.read(created["_id"])
