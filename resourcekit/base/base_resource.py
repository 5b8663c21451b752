"""Base resource class providing validated CRUD operations over an adapter."""

from resourcekit.base.errors import (
    ConfigurationError, ConflictError, NotFoundError, PersistenceError, ValidationError
)
from resourcekit.base.schema import PropertyFilter, Validator, describe_properties


class Resource:
    """A configured collection of documents with uniform CRUD semantics.

    A resource validates documents against its schema predicates, enforces
    unique properties, filters documents onto a property whitelist and
    optionally allocates an auto-incrementing index before handing documents to
    its adapter. The configuration is fixed at construction; the resource keeps
    no per-document state, so one instance may serve many callers at once.

    Uniqueness checks and index allocation read the table before the insert
    writes to it. Two concurrent creates can both pass either check, so pair
    ``uniq`` and ``index`` with a unique constraint in the backend, or
    serialize creates above this class, where duplicates are unacceptable.

    The next index is the current maximum plus one, so deleting the document
    holding the maximum lets the next create reuse its index value.
    """

    def __init__(self, db, *, schema=None, props=None, key=None, index=None, uniq=None,
                 in_map=None, out_map=None, path=None, validator=None, cleaner=None):
        """Initialize the resource and its adapter.

        Args:
            db: The adapter for the backing table
            schema: A schema predicate or a sequence of them, OR-combined
            props: Property whitelist, derived from the schema when omitted
            key: Unique business key property
            index: Auto-index property
            uniq: Additional unique properties
            in_map: Transform applied to documents on the write path
            out_map: Transform applied to documents on the read path
            path: REST path segment
            validator: Replacement for the default Validator
            cleaner: Replacement for the default PropertyFilter

        Raises:
            ConfigurationError: If no adapter is provided
        """
        if db is None:
            raise ConfigurationError("No database provided")
        self.db = db

        if schema is None:
            predicates = ()
        elif callable(schema):
            predicates = (schema,)
        else:
            predicates = tuple(schema)
        self.predicates = predicates

        if props is None:
            props = describe_properties(predicates)
        else:
            props = tuple(props)

        # an allocated index must survive the whitelist
        if props is not None and index and index not in props:
            props = props + (index,)
        self.props = props

        self.key = key
        self.index = index

        unique = []
        for prop in (db.id_field, key, index, *(uniq or ())):
            if prop and prop not in unique:
                unique.append(prop)
        self.uniq = tuple(unique)

        self.in_map = in_map
        self.out_map = out_map
        self.path = path

        self.validator = validator or Validator(predicates)
        self.cleaner = cleaner or PropertyFilter(props)

        self.init()

    def init(self):
        """Run the adapter setup for this resource."""
        self.db.init(self.index)

    def is_valid(self, doc) -> bool:
        """Check if a document passes any of the schema predicates."""
        return self.validator.is_valid(doc)

    def clean(self, doc: dict) -> dict:
        """Remove properties outside of the whitelist from a document."""
        return self.cleaner.clean(doc)

    def check_admissible(self, doc: dict):
        """
        Ensure a document is valid and holds no unique value already in use

        The auto-index property is not checked, as create always replaces it.

        Args:
            doc: The candidate document, already passed through in_map

        Raises:
            ValidationError: If the document fails the schema
            ConflictError: If another document uses one of its unique values
        """
        if not self.is_valid(doc):
            raise ValidationError("Document does not match the schema")

        unique_fields = self._unique_values(doc, exclude=(self.index,))
        if not unique_fields:
            return

        conflicting_fields = self.db.check_unique_values(unique_fields)
        if conflicting_fields:
            raise ConflictError(conflicting_fields)

    def is_admissible(self, doc: dict) -> bool:
        """Check if a document could be created right now."""
        try:
            self.check_admissible(self._map_in(doc))
        except (ValidationError, ConflictError):
            return False

        return True

    def create(self, doc: dict):
        """
        Create a new document

        Steps run strictly in order: in_map, validation, uniqueness check,
        property filter, index allocation, insert and out_map. A caller
        supplied index value is always replaced.

        Args:
            doc: The proposed document

        Returns:
            The persisted document passed through out_map

        Raises:
            ValidationError: If the document fails the schema
            ConflictError: If a unique value is already in use
            PersistenceError: If the adapter did not insert the document
        """
        doc = self._map_in(doc)
        self.check_admissible(doc)

        doc = dict(self.clean(doc))
        if self.index:
            doc[self.index] = self.db.next_index(self.index)

        created = self.db.insert(doc)
        if created is None:
            raise PersistenceError("Document not created")

        return self._map_out(created)

    def read(self, native_id):
        """Get a document by native identity."""
        return self._map_out(self._get(native_id))

    def read_by_key(self, key):
        """Get a document by its business key."""
        self._require("key")
        return self._map_out(self._find_one(self.key, key))

    def read_by_index(self, index):
        """Get a document by its auto-index value."""
        self._require("index")
        return self._map_out(self._find_one(self.index, index))

    def find(self, predicate: dict = None) -> list:
        """
        Find all documents matching a predicate

        Args:
            predicate: Property-value pairs every result must hold

        Returns:
            List of documents passed through out_map, in backend order
        """
        docs = self.db.find(dict(predicate or {}))
        return [self._map_out(doc) for doc in docs]

    def read_all(self) -> list:
        """Get all documents."""
        return self.find({})

    def update(self, native_id, updates: dict):
        """
        Update a document by native identity

        Only properties already present on the stored document are updated,
        and unique properties never change. Delete the document and create a
        new one to change those.

        Args:
            native_id: The backend identity of the document
            updates: Property values to apply

        Returns:
            The updated document passed through out_map

        Raises:
            NotFoundError: If no document has this identity
            ValidationError: If the merged document fails the schema
            PersistenceError: If the adapter did not update the document
        """
        return self._update(native_id, self._get(native_id), updates)

    def update_by_key(self, key, updates: dict):
        """Update a document by its business key."""
        self._require("key")
        doc = self._find_one(self.key, key)
        return self._update(doc[self.db.id_field], doc, updates)

    def update_by_index(self, index, updates: dict):
        """Update a document by its auto-index value."""
        self._require("index")
        doc = self._find_one(self.index, index)
        return self._update(doc[self.db.id_field], doc, updates)

    def delete(self, native_id):
        """
        Delete a document by native identity

        Raises:
            NotFoundError: If no document was deleted
        """
        if not self.db.delete(native_id):
            raise NotFoundError(f"Document '{native_id}' not found")

    def delete_by_key(self, key):
        """Delete a document by its business key."""
        self._require("key")
        self.delete(self._find_one(self.key, key)[self.db.id_field])

    def delete_by_index(self, index):
        """Delete a document by its auto-index value."""
        self._require("index")
        self.delete(self._find_one(self.index, index)[self.db.id_field])

    def _update(self, native_id, doc: dict, updates: dict):
        updates = self._map_in(updates)

        merged = dict(doc)
        for prop in doc:
            if prop in updates:
                merged[prop] = updates[prop]

        if not self.is_valid(merged):
            raise ValidationError("Document does not match the schema")

        for prop in self.uniq:
            merged.pop(prop, None)
        merged = self.clean(merged)

        updated = self.db.update(native_id, merged)
        if updated is None:
            raise PersistenceError("Document not updated")

        return self._map_out(updated)

    def _get(self, native_id):
        doc = self.db.get(native_id)
        if doc is None:
            raise NotFoundError(f"Document '{native_id}' not found")
        return doc

    def _find_one(self, field_name, field_value):
        docs = self.db.find({field_name: field_value})
        if not docs:
            raise NotFoundError(f"Document with {field_name} '{field_value}' not found")
        return docs[0]

    def _require(self, option):
        if not getattr(self, option):
            raise ConfigurationError(f"Resource does not define a {option} property")

    def _unique_values(self, doc: dict, exclude=()) -> dict:
        return {
            prop: doc[prop] for prop in self.uniq
            if prop not in exclude and doc.get(prop) is not None
        }

    def _map_in(self, doc):
        doc = dict(doc or {})
        if self.in_map is None:
            return doc

        mapped = self.in_map(doc)
        return doc if mapped is None else mapped

    def _map_out(self, doc):
        if self.out_map is None:
            return doc

        mapped = self.out_map(doc)
        return doc if mapped is None else mapped
