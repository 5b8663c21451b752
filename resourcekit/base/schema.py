"""Schema predicates, document validation and property filtering."""


def describe_properties(predicates):
    """
    Collect the property names described by a sequence of schema predicates

    Only predicates that expose a ``describe_properties()`` method contribute.

    Args:
        predicates: Sequence of schema predicates

    Returns:
        Tuple of property names in first-seen order, or None if no predicate
        describes its properties
    """
    names = []
    described = False
    for predicate in predicates:
        describe = getattr(predicate, "describe_properties", None)
        if not callable(describe):
            continue
        described = True
        for name in describe():
            if name not in names:
                names.append(name)

    return tuple(names) if described else None


class FieldSchema:
    """A schema predicate built from a list of field definitions.

    Each field definition is a dict with a ``name``, a Python ``type`` (or
    None for any type), a ``null`` flag and optional ``allowed_values``. A
    document is accepted when every non-nullable field is present and every
    present field matches its type and allowed values.
    """

    def __init__(self, fields: list):
        self.fields = [dict(field) for field in fields]

    def __call__(self, doc) -> bool:
        if not isinstance(doc, dict):
            return False

        for field in self.fields:
            name = field["name"]
            value = doc.get(name)

            if value is None:
                if not field.get("null", False):
                    return False
                continue

            expected_type = field.get("type")
            if expected_type is not None:
                # bool is an int subclass, keep them apart
                if expected_type is int and isinstance(value, bool):
                    return False
                if expected_type is float and isinstance(value, int) and not isinstance(value, bool):
                    value = float(value)
                if not isinstance(value, expected_type):
                    return False

            allowed_values = field.get("allowed_values")
            if allowed_values is not None and value not in allowed_values:
                return False

        return True

    def describe_properties(self):
        """Return the field names of this schema."""
        return [field["name"] for field in self.fields]


class Validator:
    """Evaluates documents against zero or more schema predicates.

    A document is valid if any predicate accepts it. With no predicates every
    document is valid.
    """

    def __init__(self, predicates=()):
        self.predicates = tuple(predicates)

    def is_valid(self, doc) -> bool:
        if not self.predicates:
            return True

        return any(predicate(doc) for predicate in self.predicates)


class PropertyFilter:
    """Projects documents onto a whitelist of property names."""

    def __init__(self, props=None):
        self.props = tuple(props) if props is not None else None

    def clean(self, doc: dict) -> dict:
        """
        Remove properties that are not whitelisted

        Args:
            doc: The document to clean

        Returns:
            The document itself when no whitelist is set, otherwise a new
            dict holding the whitelisted properties present on ``doc``
        """
        if self.props is None:
            return doc

        return {prop: doc[prop] for prop in self.props if prop in doc}
