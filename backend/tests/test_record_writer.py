"""Tests for schema-aware create and upsert-by-title writes."""

import pytest

from agent_directeur.domain.enums import WriteAction
from agent_directeur.infra.notion_client import NotionAPIError
from agent_directeur.services.record_writer import RecordWriter
from agent_directeur.services.schema_cache import SchemaError

from conftest import notion_database, notion_property


@pytest.fixture
def status_table(fake_notion) -> str:
    fake_notion.databases["db-status"] = notion_database(
        "db-status",
        Name=notion_property("title"),
        status=notion_property("select", ["Active", "Closed"]),
    )
    return "db-status"


@pytest.fixture
def tags_table(fake_notion) -> str:
    fake_notion.databases["db-tags"] = notion_database(
        "db-tags",
        Name=notion_property("title"),
        tags=notion_property("multi_select", ["A", "B"]),
        notes=notion_property("rich_text"),
    )
    return "db-tags"


def _sent_properties(mock_call) -> dict:
    """Return the properties argument of a create_page/update_page call."""
    args, kwargs = mock_call
    return kwargs.get("properties", args[1] if len(args) > 1 else None)


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


class TestCreate:
    @pytest.mark.asyncio
    async def test_invalid_choice_leaves_only_title(self, fake_notion, record_writer: RecordWriter, status_table):
        result = await record_writer.create(status_table, {"status": "Pending"})

        props = _sent_properties(fake_notion.create_page.call_args)
        assert props == {"Name": {"title": [{"text": {"content": "Sans titre"}}]}}
        assert result.action == WriteAction.CREATED

    @pytest.mark.asyncio
    async def test_multi_choice_filtered(self, fake_notion, record_writer: RecordWriter, tags_table):
        await record_writer.create(tags_table, {"tags": ["A", "C"]}, title="Run")

        props = _sent_properties(fake_notion.create_page.call_args)
        assert props["tags"] == {"multi_select": [{"name": "A"}]}
        assert props["Name"] == {"title": [{"text": {"content": "Run"}}]}

    @pytest.mark.asyncio
    async def test_empty_record_uses_placeholder_title(self, fake_notion, record_writer: RecordWriter, status_table):
        result = await record_writer.create(status_table, {})

        assert fake_notion.create_page.await_count == 1
        assert result.title == "Sans titre"
        assert result.record_id == "new-1"
        assert result.created is True

    @pytest.mark.asyncio
    async def test_title_taken_from_record_title_field(self, fake_notion, record_writer: RecordWriter, status_table):
        result = await record_writer.create(status_table, {"Name": "From record", "status": "Active"})

        props = _sent_properties(fake_notion.create_page.call_args)
        assert props == {
            "Name": {"title": [{"text": {"content": "From record"}}]},
            "status": {"select": {"name": "Active"}},
        }
        assert result.title == "From record"

    @pytest.mark.asyncio
    async def test_explicit_title_wins_over_record(self, fake_notion, record_writer: RecordWriter, status_table):
        result = await record_writer.create(status_table, {"Name": "ignored"}, title="Explicit")
        assert result.title == "Explicit"

    @pytest.mark.asyncio
    async def test_long_title_truncated(self, fake_notion, record_writer: RecordWriter, status_table):
        result = await record_writer.create(status_table, {}, title="t" * 300)
        assert len(result.title) == 120

    @pytest.mark.asyncio
    async def test_custom_default_title(self, fake_notion, schema_cache, status_table):
        writer = RecordWriter(fake_notion, schema_cache, default_title="Run IA")
        result = await writer.create(status_table, {})
        assert result.title == "Run IA"

    @pytest.mark.asyncio
    async def test_create_targets_table(self, fake_notion, record_writer: RecordWriter, status_table):
        await record_writer.create(status_table, {})
        args, _ = fake_notion.create_page.call_args
        assert args[0] == "db-status"

    @pytest.mark.asyncio
    async def test_table_without_title_aborts_before_write(self, fake_notion, record_writer: RecordWriter):
        fake_notion.databases["db-broken"] = notion_database("db-broken", notes=notion_property("rich_text"))

        with pytest.raises(SchemaError):
            await record_writer.create("db-broken", {"notes": "x"})
        fake_notion.create_page.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, fake_notion, record_writer: RecordWriter, status_table):
        fake_notion.create_page.side_effect = NotionAPIError("bad", status_code=400, code="validation_error")

        with pytest.raises(NotionAPIError):
            await record_writer.create(status_table, {})
        assert fake_notion.create_page.await_count == 1


# ---------------------------------------------------------------------------
# upsert_by_title
# ---------------------------------------------------------------------------


class TestUpsertByTitle:
    @pytest.mark.asyncio
    async def test_existing_title_updates(self, fake_notion, record_writer: RecordWriter, status_table):
        fake_notion.query_database.return_value = [{"object": "page", "id": "page-42"}]

        result = await record_writer.upsert_by_title(status_table, "Projet A", {"status": "Closed"})

        assert fake_notion.query_database.await_count == 1
        assert fake_notion.update_page.await_count == 1
        fake_notion.create_page.assert_not_awaited()
        assert result.action == WriteAction.UPDATED
        assert result.record_id == "page-42"

        args, _ = fake_notion.update_page.call_args
        assert args[0] == "page-42"
        assert _sent_properties(fake_notion.update_page.call_args) == {
            "Name": {"title": [{"text": {"content": "Projet A"}}]},
            "status": {"select": {"name": "Closed"}},
        }

    @pytest.mark.asyncio
    async def test_missing_title_creates(self, fake_notion, record_writer: RecordWriter, status_table):
        result = await record_writer.upsert_by_title(status_table, "Projet B", {"status": "Active"})

        assert fake_notion.query_database.await_count == 1
        assert fake_notion.create_page.await_count == 1
        fake_notion.update_page.assert_not_awaited()
        assert result.action == WriteAction.CREATED
        assert result.title == "Projet B"

    @pytest.mark.asyncio
    async def test_query_is_exact_title_match(self, fake_notion, record_writer: RecordWriter, status_table):
        await record_writer.upsert_by_title(status_table, "Projet A", {})

        args, kwargs = fake_notion.query_database.call_args
        assert args[0] == "db-status"
        assert kwargs["filter"] == {"property": "Name", "title": {"equals": "Projet A"}}
        assert kwargs["page_size"] == 1

    @pytest.mark.asyncio
    async def test_query_uses_stored_title_form(self, fake_notion, record_writer: RecordWriter, status_table):
        await record_writer.upsert_by_title(status_table, "p" * 200, {})

        _, kwargs = fake_notion.query_database.call_args
        assert kwargs["filter"]["title"]["equals"] == "p" * 120

    @pytest.mark.asyncio
    async def test_schema_fetched_once_across_writes(self, fake_notion, record_writer: RecordWriter, status_table):
        await record_writer.upsert_by_title(status_table, "A", {})
        await record_writer.create(status_table, {})
        assert fake_notion.retrieve_database.await_count == 1

    @pytest.mark.asyncio
    async def test_query_failure_propagates_without_write(self, fake_notion, record_writer: RecordWriter, status_table):
        fake_notion.query_database.side_effect = NotionAPIError("timeout")

        with pytest.raises(NotionAPIError):
            await record_writer.upsert_by_title(status_table, "A", {})
        fake_notion.create_page.assert_not_awaited()
        fake_notion.update_page.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_title_updates_placeholder_record(self, fake_notion, record_writer: RecordWriter, status_table):
        stored: dict[str, str] = {}

        async def _create(database_id, properties):
            page_id = f"p{len(stored)}"
            stored[page_id] = properties["Name"]["title"][0]["text"]["content"]
            return {"object": "page", "id": page_id}

        async def _query(database_id, filter=None, sorts=None, page_size=10):
            wanted = filter["title"]["equals"]
            return [{"object": "page", "id": pid} for pid, text in stored.items() if text == wanted][:page_size]

        fake_notion.create_page.side_effect = _create
        fake_notion.query_database.side_effect = _query

        first = await record_writer.upsert_by_title(status_table, "", {})
        second = await record_writer.upsert_by_title(status_table, "", {"status": "Active"})

        assert first.action == WriteAction.CREATED
        assert second.action == WriteAction.UPDATED
        assert second.record_id == first.record_id
        assert stored == {"p0": "Sans titre"}
        _, kwargs = fake_notion.query_database.call_args
        assert kwargs["filter"]["title"]["equals"] == "Sans titre"
