"""RethinkDB adapter implementation for database operations."""

import logging

from rethinkdb import RethinkDB

from resourcekit.base.base_adapter import BaseAdapter


logger = logging.getLogger(__name__)

r = RethinkDB()


class RethinkAdapter(BaseAdapter):
    """RethinkDB adapter providing the resource operations on one table."""

    id_field = "id"

    def __init__(self, table_name: str, conn=None, db_name: str = None):
        if conn is None:
            raise ValueError("conn must be provided")
        self.conn = conn
        self.table_name = table_name
        self.table = r.db(db_name).table(table_name) if db_name else r.table(table_name)

    def init(self, index_field: str = None):
        if not index_field:
            return

        indexes = self.table.index_list().run(self.conn)
        if index_field in indexes:
            return

        self.table.index_create(index_field).run(self.conn)
        self.table.index_wait(index_field).run(self.conn)
        logger.debug("Created index %s on %s", index_field, self.table_name)

    def find(self, predicate: dict) -> list:
        return list(self.table.filter(predicate).run(self.conn))

    def get(self, native_id):
        return self.table.get(native_id).run(self.conn)

    def insert(self, doc: dict):
        result = self.table.insert(doc).run(self.conn)
        if not result.get("inserted"):
            return None

        generated_keys = result.get("generated_keys") or []
        native_id = generated_keys[0] if generated_keys else doc.get(self.id_field)
        return self.get(native_id)

    def update(self, native_id, doc: dict):
        result = self.table.get(native_id).update(doc).run(self.conn)
        if result.get("skipped"):
            return None

        return self.get(native_id)

    def delete(self, native_id) -> bool:
        result = self.table.get(native_id).delete().run(self.conn)
        return result.get("deleted", 0) > 0

    def next_index(self, index_field: str) -> int:
        doc = self.table.order_by(index=index_field).nth(-1).default(None).run(self.conn)
        return doc[index_field] + 1 if doc else 0

    def check_unique_values(self, unique_fields: dict) -> list:
        if not unique_fields:
            return []

        docs = list(self.table.filter(
            lambda doc: r.or_(*[doc[name].eq(value) for name, value in unique_fields.items()])
        ).run(self.conn))

        return [
            name for name, value in unique_fields.items()
            if any(doc.get(name) == value for doc in docs)
        ]
