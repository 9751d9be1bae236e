"""Process-lifetime cache of discovered Notion table schemas.

A table's property definitions are fetched once, on first use, and kept
for the rest of the process. Concurrent first lookups for the same table
share one in-flight fetch.
"""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Any

from agent_directeur.domain.enums import FieldType
from agent_directeur.domain.records import TableSchema

logger = logging.getLogger(__name__)


class SchemaError(Exception):
    """Raised when a table cannot be written to because of its schema."""

    NO_TITLE_FIELD = "no_title_field"

    def __init__(self, table_id: str, reason: str, detail: str = ""):
        self.table_id = table_id
        self.reason = reason
        super().__init__(detail or f"{reason} for table {table_id}")


def parse_schema(table_id: str, database: dict[str, Any]) -> TableSchema:
    """Build a ``TableSchema`` from a Notion database object.

    Properties whose type the encoder does not handle are left out, so
    they read as absent.

    Raises:
        SchemaError: if no property has the ``title`` type.
    """
    properties = database.get("properties") or {}

    title_field = None
    fields: dict[str, FieldType] = {}
    choice_options: dict[str, frozenset[str]] = {}

    for name, definition in properties.items():
        try:
            field_type = FieldType(definition.get("type"))
        except ValueError:
            continue

        fields[name] = field_type
        if field_type == FieldType.TITLE and title_field is None:
            title_field = name
        elif field_type in (FieldType.SINGLE_CHOICE, FieldType.MULTI_CHOICE):
            config = definition.get(field_type.value) or {}
            choice_options[name] = frozenset(
                option["name"]
                for option in config.get("options") or []
                if option.get("name")
            )

    if title_field is None:
        raise SchemaError(
            table_id,
            SchemaError.NO_TITLE_FIELD,
            f"No title property found for table {table_id}",
        )

    return TableSchema(
        table_id=table_id,
        title_field=title_field,
        fields=fields,
        choice_options=choice_options,
    )


class SchemaCache:
    """Discovers and memoises ``TableSchema`` objects per table id."""

    def __init__(self, notion) -> None:
        self._notion = notion
        self._schemas: dict[str, TableSchema] = {}
        self._inflight: dict[str, asyncio.Task] = {}

    async def get_schema(self, table_id: str) -> TableSchema:
        """Return the schema of *table_id*, fetching it on first use."""
        cached = self._schemas.get(table_id)
        if cached is not None:
            return cached

        task = self._inflight.get(table_id)
        if task is None:
            task = asyncio.ensure_future(self._fetch(table_id))
            self._inflight[table_id] = task
            task.add_done_callback(lambda done: self._forget(table_id, done))
        # A cancelled waiter must not cancel the fetch the others share
        return await asyncio.shield(task)

    def _forget(self, table_id: str, task: asyncio.Future) -> None:
        if self._inflight.get(table_id) is task:
            del self._inflight[table_id]

    def cached(self, table_id: str) -> TableSchema | None:
        return self._schemas.get(table_id)

    async def _fetch(self, table_id: str) -> TableSchema:
        database = await self._notion.retrieve_database(table_id)
        schema = parse_schema(table_id, database)
        self._schemas[table_id] = schema
        logger.info(
            "Schema cached for table %s: title=%r, %d fields, %d choice fields",
            table_id,
            schema.title_field,
            len(schema.fields),
            len(schema.choice_options),
        )
        return schema


@lru_cache
def get_schema_cache() -> SchemaCache:
    """Return the process-wide schema cache."""
    from agent_directeur.infra.notion_client import get_notion_client

    return SchemaCache(get_notion_client())
