"""Exceptions raised by resource operations."""


class ResourceError(Exception):
    """Base class for every failure a resource operation reports."""


class ValidationError(ResourceError, ValueError):
    """The candidate or merged document failed every schema predicate."""


class ConflictError(ResourceError):
    """Another document already holds one of the unique property values.

    Args:
        fields: Names of the conflicting properties
    """

    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(f"Values for the following fields already exist: {', '.join(self.fields)}")


class PersistenceError(ResourceError):
    """The adapter did not persist a document that passed every gate."""


class NotFoundError(ResourceError, LookupError):
    """The target document does not exist."""


class ConfigurationError(ResourceError):
    """The resource is not configured for the requested operation."""
