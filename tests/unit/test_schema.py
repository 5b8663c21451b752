"""Tests for resourcekit.base.schema module."""

import pytest

from resourcekit.base.schema import (
    FieldSchema,
    PropertyFilter,
    Validator,
    describe_properties
)


def has_name(doc):
    return isinstance(doc.get("name"), str)


def has_legacy_title(doc):
    return isinstance(doc.get("title"), str)


USER_FIELDS = [
    {"name": "username", "type": str, "null": False},
    {"name": "age", "type": int, "null": True},
    {"name": "score", "type": float, "null": True},
    {"name": "status", "type": str, "null": True, "allowed_values": ["active", "disabled"]},
    {"name": "extra", "type": None, "null": True},
]


class TestValidator:

    def test_no_predicates_accepts_everything(self):
        validator = Validator()
        assert validator.is_valid({}) is True
        assert validator.is_valid({"anything": 1}) is True

    def test_single_predicate(self):
        validator = Validator([has_name])
        assert validator.is_valid({"name": "a"}) is True
        assert validator.is_valid({"name": 123}) is False

    @pytest.mark.parametrize("doc,expected", [
        ({"name": "a"}, True),
        ({"title": "a"}, True),
        ({"name": "a", "title": "b"}, True),
        ({"name": 1, "title": 2}, False),
        ({}, False),
    ])
    def test_any_predicate_accepts(self, doc, expected):
        validator = Validator([has_name, has_legacy_title])
        assert validator.is_valid(doc) is (has_name(doc) or has_legacy_title(doc))
        assert validator.is_valid(doc) is expected

    def test_predicates_are_stored_as_tuple(self):
        predicates = [has_name]
        validator = Validator(predicates)
        predicates.append(has_legacy_title)
        assert validator.predicates == (has_name,)


class TestPropertyFilter:

    def test_no_whitelist_returns_same_document(self):
        doc = {"a": 1, "b": 2}
        assert PropertyFilter().clean(doc) is doc

    def test_copies_only_present_properties(self):
        cleaner = PropertyFilter(["a", "b"])
        assert cleaner.clean({"a": 1, "c": 3}) == {"a": 1}

    def test_returns_new_document(self):
        doc = {"a": 1}
        cleaned = PropertyFilter(["a"]).clean(doc)
        assert cleaned == doc
        assert cleaned is not doc

    def test_keeps_none_values_that_are_present(self):
        cleaner = PropertyFilter(["a"])
        assert cleaner.clean({"a": None}) == {"a": None}

    def test_idempotent(self):
        cleaner = PropertyFilter(["a", "b"])
        doc = {"a": 1, "b": {"nested": True}, "c": 3}
        assert cleaner.clean(cleaner.clean(doc)) == cleaner.clean(doc)

    def test_empty_whitelist_drops_everything(self):
        assert PropertyFilter([]).clean({"a": 1}) == {}


class TestFieldSchema:

    def test_accepts_valid_document(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema({"username": "ada", "age": 36, "score": 1.5, "status": "active"}) is True

    def test_rejects_missing_required(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema({"age": 36}) is False

    def test_rejects_null_required(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema({"username": None}) is False

    def test_rejects_wrong_type(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema({"username": 123}) is False

    def test_bool_is_not_int(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema({"username": "ada", "age": True}) is False

    def test_int_is_float(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema({"username": "ada", "score": 3}) is True

    def test_allowed_values(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema({"username": "ada", "status": "disabled"}) is True
        assert schema({"username": "ada", "status": "deleted"}) is False

    def test_any_type(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema({"username": "ada", "extra": {"x": [1, 2]}}) is True

    def test_ignores_unknown_properties(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema({"username": "ada", "unknown": 1}) is True

    def test_rejects_non_dict(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema(["username"]) is False
        assert schema(None) is False

    def test_describe_properties(self):
        schema = FieldSchema(USER_FIELDS)
        assert schema.describe_properties() == ["username", "age", "score", "status", "extra"]


class TestDescribeProperties:

    def test_no_describing_predicate(self):
        assert describe_properties([has_name]) is None

    def test_empty(self):
        assert describe_properties([]) is None

    def test_single_schema(self):
        schema = FieldSchema([{"name": "a", "type": str}, {"name": "b", "type": str}])
        assert describe_properties([schema]) == ("a", "b")

    def test_union_in_first_seen_order(self):
        first = FieldSchema([{"name": "a", "type": str}, {"name": "b", "type": str}])
        second = FieldSchema([{"name": "b", "type": str}, {"name": "c", "type": str}])
        assert describe_properties([first, has_name, second]) == ("a", "b", "c")
