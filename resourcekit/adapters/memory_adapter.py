"""In-memory adapter implementation for tests and development."""

import copy
import threading
import uuid

from resourcekit.base.base_adapter import BaseAdapter


class MemoryAdapter(BaseAdapter):
    """Adapter keeping documents of one table in a process-local dict.

    Documents are copied on the way in and out, so callers never share state
    with the store. Identities are ``uuid4`` hex strings unless the inserted
    document already carries one.

    Every method holds the adapter lock, so threaded requests see whole
    documents. Separate calls are not atomic with each other.
    """

    id_field = "id"

    def __init__(self, table_name: str = None):
        self.table_name = table_name
        self.items = {}
        self.indexes = set()
        self._lock = threading.Lock()

    def init(self, index_field: str = None):
        if index_field:
            with self._lock:
                self.indexes.add(index_field)

    def find(self, predicate: dict) -> list:
        with self._lock:
            return [
                copy.deepcopy(item) for item in list(self.items.values())
                if all(prop in item and item[prop] == value for prop, value in predicate.items())
            ]

    def get(self, native_id):
        with self._lock:
            item = self.items.get(native_id)
            return copy.deepcopy(item) if item is not None else None

    def insert(self, doc: dict):
        item = copy.deepcopy(doc)
        with self._lock:
            native_id = item.setdefault(self.id_field, uuid.uuid4().hex)
            if native_id in self.items:
                return None

            self.items[native_id] = item
            return copy.deepcopy(item)

    def update(self, native_id, doc: dict):
        changes = copy.deepcopy(doc)
        changes.pop(self.id_field, None)

        with self._lock:
            item = self.items.get(native_id)
            if item is None:
                return None

            item.update(changes)
            return copy.deepcopy(item)

    def delete(self, native_id) -> bool:
        with self._lock:
            return self.items.pop(native_id, None) is not None

    def next_index(self, index_field: str) -> int:
        with self._lock:
            values = [
                item[index_field] for item in list(self.items.values())
                if isinstance(item.get(index_field), int)
            ]
        return max(values) + 1 if values else 0
