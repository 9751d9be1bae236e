"""Shared FastAPI dependencies used across route modules."""

from fastapi import Depends

from agent_directeur.app.config import Settings, get_settings
from agent_directeur.infra.notion_client import NotionClient, get_notion_client
from agent_directeur.services.director_service import DirectorService, DirectorTables
from agent_directeur.services.memory_loader import MemoryLoader
from agent_directeur.services.record_writer import RecordWriter
from agent_directeur.services.schema_cache import SchemaCache, get_schema_cache


def get_record_writer(
    notion: NotionClient = Depends(get_notion_client),
    schema_cache: SchemaCache = Depends(get_schema_cache),
    settings: Settings = Depends(get_settings),
) -> RecordWriter:
    return RecordWriter(notion, schema_cache, default_title=settings.default_title)


def get_memory_loader(
    notion: NotionClient = Depends(get_notion_client),
    settings: Settings = Depends(get_settings),
) -> MemoryLoader:
    return MemoryLoader(
        notion,
        journal_db=settings.notion_db_journal,
        doctrine_db=settings.notion_db_doctrine,
        projects_db=settings.notion_db_projects,
        decisions_db=settings.notion_db_decisions,
        page_size=settings.memory_page_size,
    )


def get_director_service(
    writer: RecordWriter = Depends(get_record_writer),
    memory_loader: MemoryLoader = Depends(get_memory_loader),
    settings: Settings = Depends(get_settings),
) -> DirectorService:
    return DirectorService(
        writer=writer,
        memory_loader=memory_loader,
        tables=DirectorTables.from_settings(settings),
    )
