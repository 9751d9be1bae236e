"""Schema-aware create / upsert-by-title writes into Notion tables."""

from __future__ import annotations

import logging
from typing import Any, Optional

from agent_directeur.domain.enums import WriteAction
from agent_directeur.domain.records import LogicalRecord, TableSchema, WriteResult
from agent_directeur.services.schema_cache import SchemaCache
from agent_directeur.services.value_encoder import (
    TITLE_MAX_LENGTH,
    encode,
    encode_record,
    truncate,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Sans titre"


class RecordWriter:
    """Creates or updates records, restricted to what each table accepts.

    Every write goes through the value encoder, so fields the table does
    not define and choice values it does not offer are silently dropped.
    The title property is always sent. Errors from the store propagate
    unchanged; nothing is retried.
    """

    def __init__(
        self,
        notion,
        schema_cache: SchemaCache,
        default_title: str = DEFAULT_TITLE,
    ) -> None:
        self._notion = notion
        self._schemas = schema_cache
        self.default_title = default_title

    async def create(
        self,
        table_id: str,
        record: LogicalRecord,
        title: Optional[str] = None,
    ) -> WriteResult:
        """Create a record in *table_id*.

        The title comes from *title*, else from the record's own title
        field, else the default placeholder.
        """
        schema = await self._schemas.get_schema(table_id)
        properties, title_text = self._build_properties(schema, record, title)

        page = await self._notion.create_page(table_id, properties)
        logger.info("Created record %s in table %s: %r", page.get("id"), table_id, title_text)
        return WriteResult(
            table_id=table_id,
            record_id=page.get("id", ""),
            action=WriteAction.CREATED,
            title=title_text,
        )

    async def upsert_by_title(
        self,
        table_id: str,
        title: str,
        record: LogicalRecord,
    ) -> WriteResult:
        """Update the record titled *title*, or create it when none exists.

        The lookup uses the title exactly as it would be stored, so an
        empty title matches the record created under the placeholder.
        The existence check and the create are two separate calls; a
        concurrent writer may slip a duplicate in between.
        """
        schema = await self._schemas.get_schema(table_id)
        title_text = self._resolve_title(schema, record, title)
        existing = await self.find_by_title(schema, title_text)
        if existing is None:
            return await self.create(table_id, record, title=title_text)

        properties, title_text = self._build_properties(schema, record, title_text)
        page = await self._notion.update_page(existing["id"], properties)
        logger.info("Updated record %s in table %s: %r", existing["id"], table_id, title_text)
        return WriteResult(
            table_id=table_id,
            record_id=page.get("id", existing["id"]),
            action=WriteAction.UPDATED,
            title=title_text,
        )

    async def find_by_title(self, schema: TableSchema, title: str) -> Optional[dict]:
        """Return the first record whose title equals *title* exactly."""
        # Stored titles are truncated, so compare against the stored form
        results = await self._notion.query_database(
            schema.table_id,
            filter={
                "property": schema.title_field,
                "title": {"equals": truncate(title, TITLE_MAX_LENGTH)},
            },
            page_size=1,
        )
        return results[0] if results else None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_title(
        self,
        schema: TableSchema,
        record: LogicalRecord,
        title: Optional[Any],
    ) -> str:
        """Title text as stored: *title*, else the record's title field, else the default."""
        for candidate in (title, record.get(schema.title_field)):
            if candidate in (None, ""):
                continue
            encoded = encode(schema, schema.title_field, candidate)
            if encoded is not None:
                return encoded.payload["title"][0]["text"]["content"]
        return truncate(self.default_title, TITLE_MAX_LENGTH)

    def _build_properties(
        self,
        schema: TableSchema,
        record: LogicalRecord,
        title: Optional[Any],
    ) -> tuple[dict[str, dict], str]:
        fields = {k: v for k, v in record.items() if k != schema.title_field}
        properties = encode_record(schema, fields)

        title_text = self._resolve_title(schema, record, title)
        properties[schema.title_field] = encode(schema, schema.title_field, title_text).payload
        return properties, title_text
