"""Conversions between wire JSON, Source, and DynamoDB typed items."""

import json

from src.sources.models import Source

SOURCE_FIELDS = ("id", "name", "url")


class SourceDecodeError(ValueError):
    """Request body is not a JSON object with string fields."""


class CorruptRecordError(ValueError):
    """Stored item is missing a field or holds it with the wrong type."""

    def __init__(self, field: str, item_id: str | None = None):
        self.field = field
        self.item_id = item_id
        super().__init__(f"Stored source {item_id or '<unknown>'} has invalid attribute '{field}'")


def decode_source(body: str | bytes | None) -> Source:
    """Parse a request body into a Source.

    Missing fields default to empty strings (update is a full replace).
    Raises SourceDecodeError for empty, malformed, or non-object bodies.
    """
    if body is None or not body.strip():
        raise SourceDecodeError("Request body is empty")

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise SourceDecodeError(f"Request body is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise SourceDecodeError("Request body must be a JSON object")

    values = {}
    for field in SOURCE_FIELDS:
        value = data.get(field, "")
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise SourceDecodeError(f"Field '{field}' must be a string")
        values[field] = value

    return Source(**values)


def encode_source(source: Source) -> dict:
    return {"id": source.id, "name": source.name, "url": source.url}


def encode_sources(sources: list[Source]) -> list[dict]:
    """Always a list, so an empty table encodes to [] rather than null."""
    return [encode_source(s) for s in sources]


def source_to_item(source: Source) -> dict:
    """Build the DynamoDB typed item for a Source."""
    return {field: {"S": getattr(source, field)} for field in SOURCE_FIELDS}


def source_from_item(item: dict) -> Source:
    """Map a DynamoDB typed item back to a Source.

    Every field must be present as an "S" attribute; anything else is a
    data-integrity fault and raises CorruptRecordError.
    """
    raw_id = item.get("id")
    item_id = raw_id.get("S") if isinstance(raw_id, dict) else None

    values = {}
    for field in SOURCE_FIELDS:
        attr = item.get(field)
        if not isinstance(attr, dict) or not isinstance(attr.get("S"), str):
            raise CorruptRecordError(field, item_id)
        values[field] = attr["S"]

    if not values["id"]:
        raise CorruptRecordError("id", item_id)

    return Source(**values)
