"""Application configuration via Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

# Resolve .env from backend/ regardless of CWD
_ENV_FILE = Path(__file__).resolve().parents[3] / ".env"


class Settings(BaseSettings):
    """Central configuration loaded from environment variables / .env file."""

    # AI
    gemini_api_key: str = ""
    director_model: str = "gemini-3-flash-preview"
    director_temperature: float = 0.2
    specialist_temperature: float = 0.4

    # Notion
    notion_token: str = ""
    notion_version: str = "2022-06-28"
    notion_api_url: str = "https://api.notion.com/v1"
    notion_timeout_seconds: float = 30.0

    # Notion databases (short names, or the legacy variable names)
    notion_db_journal: str = Field(
        "",
        validation_alias=AliasChoices(
            "notion_db_journal", "notion_db_journal_agent_directeur"
        ),
    )
    notion_db_doctrine: str = Field(
        "",
        validation_alias=AliasChoices(
            "notion_db_doctrine", "notion_db_doctrine_vivante"
        ),
    )
    notion_db_projects: str = Field(
        "",
        validation_alias=AliasChoices("notion_db_projects", "notion_db_projets"),
    )
    notion_db_decisions: str = Field(
        "",
        validation_alias=AliasChoices(
            "notion_db_decisions", "notion_db_decisions_strategiques"
        ),
    )

    # Memory / writes
    memory_page_size: int = 10
    default_title: str = "Sans titre"

    # General
    debug: bool = True
    port: int = 3000

    model_config = {
        "env_file": str(_ENV_FILE),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    def missing_required(self) -> list[str]:
        """Names of required settings that are still empty."""
        required = (
            "gemini_api_key",
            "notion_token",
            "notion_db_journal",
            "notion_db_doctrine",
            "notion_db_projects",
            "notion_db_decisions",
        )
        return [name for name in required if not getattr(self, name)]


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()
