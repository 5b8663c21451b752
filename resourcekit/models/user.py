"""User resource definition."""

import re

from resourcekit.adapters.adapter_factory import AdapterFactory
from resourcekit.base.base_resource import Resource
from resourcekit.base.schema import FieldSchema
from resourcekit.base.schema_loader import SchemaLoader


EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class UserSchema(FieldSchema):
    """User fields from ``schemas/user.json`` plus an e-mail format check."""

    def __call__(self, doc) -> bool:
        if not super().__call__(doc):
            return False

        return bool(EMAIL_PATTERN.match(doc["email"]))


def normalize_user(doc: dict) -> dict:
    """Lower-case and strip the e-mail address of an incoming user."""
    if isinstance(doc.get("email"), str):
        doc["email"] = doc["email"].lower().strip()
    return doc


def hide_secrets(doc: dict) -> dict:
    """Drop the password hash from an outgoing user."""
    return {name: value for name, value in doc.items() if name != "password_hash"}


def build_resource():
    """
    Build the users resource on the configured backend

    Users are addressed by username, numbered by ``uid`` and have a unique
    e-mail address.
    """
    return Resource(
        AdapterFactory.get("users"),
        schema=UserSchema(SchemaLoader().load_fields("user")),
        key="username",
        index="uid",
        uniq=["email"],
        in_map=normalize_user,
        out_map=hide_secrets,
        path="users"
    )
