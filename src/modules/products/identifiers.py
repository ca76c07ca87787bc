"""Conversion between transport identifiers and BSON ObjectIds."""

from __future__ import annotations

from bson import ObjectId
from bson.errors import InvalidId

from modules.products.exceptions import InvalidProductId


def object_id_to_string(object_id: ObjectId) -> str:
    return str(object_id)


def parse_object_id(value: str) -> ObjectId:
    """Parse a 24-character hex string into an ``ObjectId``.

    Raises:
        InvalidProductId: carrying the parser's own error text.
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise InvalidProductId(str(exc)) from exc
