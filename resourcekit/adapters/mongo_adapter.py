"""MongoDB adapter implementation for database operations."""

import logging

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from resourcekit.base.base_adapter import BaseAdapter


logger = logging.getLogger(__name__)


def to_object_id(native_id):
    """
    Convert a string identity to an ObjectId where it is one

    Args:
        native_id: An identity as received from a caller

    Returns:
        ObjectId for 24 character hex strings, the value unchanged otherwise
    """
    if isinstance(native_id, str) and ObjectId.is_valid(native_id):
        return ObjectId(native_id)
    return native_id


def from_mongo(doc):
    """Return a copy of a MongoDB document with a string ``_id``."""
    if doc is None:
        return None

    doc = dict(doc)
    if isinstance(doc.get("_id"), ObjectId):
        doc["_id"] = str(doc["_id"])
    return doc


class MongoAdapter(BaseAdapter):
    """MongoDB adapter providing the resource operations on one collection.

    Native identities leave the adapter as strings and are turned back into
    ObjectIds on the way in.
    """

    id_field = "_id"

    def __init__(self, collection=None):
        if collection is None:
            raise ValueError("collection must be provided")
        self.collection = collection

    def _query(self, predicate: dict) -> dict:
        query = dict(predicate)
        if "_id" in query:
            query["_id"] = to_object_id(query["_id"])
        return query

    def init(self, index_field: str = None):
        if not index_field:
            return

        # create_index is a no-op when the index already exists
        name = self.collection.create_index([(index_field, DESCENDING)])
        logger.debug("Ensured index %s on %s", name, self.collection.name)

    def find(self, predicate: dict) -> list:
        return [from_mongo(doc) for doc in self.collection.find(self._query(predicate))]

    def get(self, native_id):
        return from_mongo(self.collection.find_one({"_id": to_object_id(native_id)}))

    def insert(self, doc: dict):
        # insert_one sets _id on the dict it is given
        doc = self._query(doc)
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            return None

        return self.get(result.inserted_id)

    def update(self, native_id, doc: dict):
        changes = dict(doc)
        changes.pop("_id", None)
        if not changes:
            return self.get(native_id)

        updated = self.collection.find_one_and_update(
            {"_id": to_object_id(native_id)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER
        )
        return from_mongo(updated)

    def delete(self, native_id) -> bool:
        result = self.collection.delete_one({"_id": to_object_id(native_id)})
        return result.deleted_count > 0

    def next_index(self, index_field: str) -> int:
        doc = self.collection.find_one(
            {index_field: {"$type": "number"}},
            sort=[(index_field, DESCENDING)]
        )
        return int(doc[index_field]) + 1 if doc else 0

    def check_unique_values(self, unique_fields: dict) -> list:
        if not unique_fields:
            return []

        query = {"$or": [self._query({name: value}) for name, value in unique_fields.items()]}
        docs = [from_mongo(doc) for doc in self.collection.find(query)]

        return [
            name for name, value in unique_fields.items()
            if any(doc.get(name) == value for doc in docs)
        ]
