"""Base adapter interface for document database backends."""

class BaseAdapter:
    """Base adapter class defining the interface for document database backends.

    A resource only ever talks to its backend through these methods, passing
    plain property-value mappings for predicates and native identity values for
    point lookups. Every backend variant implements the full set.
    """

    id_field = "id"

    def init(self, index_field: str = None):
        """Prepare the backing table. Safe to call more than once.

        Args:
            index_field: Optional auto-index property that should be indexed
        """
        raise NotImplementedError

    def find(self, predicate: dict) -> list:
        """Find all documents matching every property of the predicate.

        Args:
            predicate: Property-value pairs to match, empty for all documents

        Returns:
            List of matching documents
        """
        raise NotImplementedError

    def get(self, native_id):
        """Get a single document by native identity.

        Args:
            native_id: The backend identity of the document

        Returns:
            The document if found, None otherwise
        """
        raise NotImplementedError

    def insert(self, doc: dict):
        """Insert a new document.

        Args:
            doc: The document to insert

        Returns:
            The persisted document including its native identity, or None if
            nothing was inserted
        """
        raise NotImplementedError

    def update(self, native_id, doc: dict):
        """Set the given properties on an existing document.

        Args:
            native_id: The backend identity of the document
            doc: Properties to set

        Returns:
            The updated document, or None if no document was updated
        """
        raise NotImplementedError

    def delete(self, native_id) -> bool:
        """Delete a document by native identity.

        Args:
            native_id: The backend identity of the document

        Returns:
            True if a document was deleted, False otherwise
        """
        raise NotImplementedError

    def next_index(self, index_field: str) -> int:
        """
        Compute the next unused auto-index value

        Reads the current maximum of ``index_field`` across all documents and
        returns it plus one, or 0 for an empty table. Nothing reserves the
        value, concurrent callers may receive the same one.

        Args:
            index_field: The auto-index property

        Returns:
            The next index value
        """
        raise NotImplementedError

    def check_unique_values(self, unique_fields: dict) -> list:
        """
        Check if any of the provided unique field values already exist

        Args:
            unique_fields: Dictionary of field_name: value pairs to check

        Returns:
            List of field names that already exist, empty list if all are unique
        """
        conflicting_fields = []

        # Check each unique field individually
        for field_name, field_value in unique_fields.items():
            if self.find({field_name: field_value}):
                conflicting_fields.append(field_name)

        return conflicting_fields
