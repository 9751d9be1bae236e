"""Shared test infrastructure for the Agent Directeur test suite.

Provides:
- notion_property / notion_database: builders for Notion database objects
- notion_page: builder for Notion page objects with typed property values
- fake_notion: AsyncMock-backed stand-in for NotionClient
- schema_cache / record_writer: real services wired to fake_notion
"""

import itertools
from unittest.mock import AsyncMock, MagicMock

import pytest

from agent_directeur.services.record_writer import RecordWriter
from agent_directeur.services.schema_cache import SchemaCache


# ---------------------------------------------------------------------------
# Notion payload builders
# ---------------------------------------------------------------------------

def notion_property(prop_type: str, options: list[str] | None = None) -> dict:
    """Build one property definition as returned by GET /databases/{id}."""
    definition: dict = {"id": prop_type[:4], "type": prop_type, prop_type: {}}
    if options is not None:
        definition[prop_type] = {
            "options": [{"id": f"opt-{i}", "name": name, "color": "default"}
                        for i, name in enumerate(options)]
        }
    return definition


def notion_database(database_id: str = "db-test", **properties: dict) -> dict:
    """Build a database object; keyword names become property names."""
    return {"object": "database", "id": database_id, "properties": properties}


def _rich(text: str) -> list[dict]:
    return [{"type": "text", "text": {"content": text}, "plain_text": text}]


def notion_page(page_id: str = "page-1", title_field: str = "Name", title: str = "", **values) -> dict:
    """Build a page object. Values are (type, raw) tuples keyed by property name."""
    properties = {title_field: {"id": "title", "type": "title", "title": _rich(title)}}
    for name, (prop_type, raw) in values.items():
        if prop_type == "rich_text":
            properties[name] = {"type": "rich_text", "rich_text": _rich(raw)}
        elif prop_type == "select":
            properties[name] = {"type": "select", "select": {"name": raw} if raw else None}
        elif prop_type == "multi_select":
            properties[name] = {"type": "multi_select", "multi_select": [{"name": v} for v in raw]}
        elif prop_type == "date":
            properties[name] = {"type": "date", "date": {"start": raw} if raw else None}
        elif prop_type == "checkbox":
            properties[name] = {"type": "checkbox", "checkbox": raw}
        else:
            properties[name] = {"type": prop_type, prop_type: raw}
    return {"object": "page", "id": page_id, "properties": properties}


# ---------------------------------------------------------------------------
# Fake Notion client
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_notion():
    """Mock NotionClient.

    ``databases`` maps database ids to database objects served by
    ``retrieve_database``. ``query_database`` returns no results unless
    a test sets ``return_value``. ``create_page`` returns sequential ids.
    """
    mock = MagicMock()
    mock.databases = {}
    counter = itertools.count(1)

    async def _retrieve(database_id: str) -> dict:
        return mock.databases[database_id]

    async def _create(database_id: str, properties: dict) -> dict:
        return {"object": "page", "id": f"new-{next(counter)}"}

    async def _update(page_id: str, properties: dict) -> dict:
        return {"object": "page", "id": page_id}

    mock.retrieve_database = AsyncMock(side_effect=_retrieve)
    mock.query_database = AsyncMock(return_value=[])
    mock.create_page = AsyncMock(side_effect=_create)
    mock.update_page = AsyncMock(side_effect=_update)
    return mock


@pytest.fixture
def schema_cache(fake_notion) -> SchemaCache:
    return SchemaCache(fake_notion)


@pytest.fixture
def record_writer(fake_notion, schema_cache) -> RecordWriter:
    return RecordWriter(fake_notion, schema_cache, default_title="Sans titre")
