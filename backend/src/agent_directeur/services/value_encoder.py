"""Encode loosely-typed application values into Notion property payloads.

``encode`` is total: it never raises. A field the table does not define,
a choice value outside the table's drop-down, or a value of the wrong
shape all yield ``None`` (omitted), so a whole record can be built with
a simple filter-map and one bad field never sinks the write.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Optional

from agent_directeur.domain.enums import FieldType
from agent_directeur.domain.records import EncodedProperty, LogicalRecord, TableSchema

TITLE_MAX_LENGTH = 120
TEXT_MAX_LENGTH = 1900

_SCALAR_TYPES = (str, int, float, bool)


def truncate(value: Any, max_length: int) -> str:
    """``str(value)`` cut to *max_length* characters."""
    return str(value)[:max_length]


def _text_payload(kind: str, content: str) -> dict:
    return {kind: [{"text": {"content": content}}]}


# ---------------------------------------------------------------------------
# Per-type encoders: (schema, field_name, value) -> payload | None
# ---------------------------------------------------------------------------


def _encode_title(schema: TableSchema, name: str, value: Any) -> Optional[dict]:
    if not isinstance(value, _SCALAR_TYPES):
        return None
    return _text_payload("title", truncate(value, TITLE_MAX_LENGTH))


def _encode_text(schema: TableSchema, name: str, value: Any) -> Optional[dict]:
    if not isinstance(value, _SCALAR_TYPES):
        return None
    return _text_payload("rich_text", truncate(value, TEXT_MAX_LENGTH))


def _encode_date(schema: TableSchema, name: str, value: Any) -> Optional[dict]:
    if isinstance(value, (date, datetime)):
        value = value.isoformat()
    if not isinstance(value, str) or not value:
        return None
    return {"date": {"start": value}}


def _encode_boolean(schema: TableSchema, name: str, value: Any) -> Optional[dict]:
    if isinstance(value, (list, tuple, set, dict)):
        return None
    return {"checkbox": bool(value)}


def _encode_single_choice(schema: TableSchema, name: str, value: Any) -> Optional[dict]:
    if not isinstance(value, str) or value not in schema.options(name):
        return None
    return {"select": {"name": value}}


def _encode_multi_choice(schema: TableSchema, name: str, value: Any) -> Optional[dict]:
    if not isinstance(value, (list, tuple)):
        return None
    allowed = schema.options(name)
    selected: list[str] = []
    for item in value:
        if isinstance(item, str) and item in allowed and item not in selected:
            selected.append(item)
    if not selected:
        return None
    return {"multi_select": [{"name": item} for item in selected]}


_ENCODERS: dict[FieldType, Callable[[TableSchema, str, Any], Optional[dict]]] = {
    FieldType.TITLE: _encode_title,
    FieldType.TEXT: _encode_text,
    FieldType.DATE: _encode_date,
    FieldType.BOOLEAN: _encode_boolean,
    FieldType.SINGLE_CHOICE: _encode_single_choice,
    FieldType.MULTI_CHOICE: _encode_multi_choice,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def encode(schema: TableSchema, field_name: str, value: Any) -> Optional[EncodedProperty]:
    """Encode one field against *schema*, or return ``None`` to omit it.

    ``None`` values are omitted for every type except boolean, where
    they read as unchecked.
    """
    field_type = schema.field_type(field_name)
    if field_type is None:
        return None
    if value is None and field_type != FieldType.BOOLEAN:
        return None

    payload = _ENCODERS[field_type](schema, field_name, value)
    if payload is None:
        return None
    return EncodedProperty(name=field_name, payload=payload)


def encode_record(schema: TableSchema, record: LogicalRecord) -> dict[str, dict]:
    """Encode every field of *record*, dropping the omitted ones."""
    properties: dict[str, dict] = {}
    for field_name, value in record.items():
        encoded = encode(schema, field_name, value)
        if encoded is not None:
            properties[encoded.name] = encoded.payload
    return properties
