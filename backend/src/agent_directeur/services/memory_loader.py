"""Load recent Notion records as plain-value "memory" for the director prompt.

Reading is tolerant: a property that is missing or of an unexpected type
reads as an empty string instead of failing the run.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from agent_directeur.services import notion_fields as nf

logger = logging.getLogger(__name__)

LATEST_FIRST = [{"timestamp": "last_edited_time", "direction": "descending"}]


def _plain_text(fragments: list[dict] | None) -> str:
    return "".join(fragment.get("plain_text", "") for fragment in fragments or [])


def page_title(page: dict) -> str:
    """Plain text of the page's title property, whatever its name."""
    for prop in (page.get("properties") or {}).values():
        if prop and prop.get("type") == "title":
            return _plain_text(prop.get("title"))
    return ""


def page_value(page: dict, name: str) -> str:
    """Plain-text rendering of one property of *page*."""
    prop = (page.get("properties") or {}).get(name)
    if not prop:
        return ""

    prop_type = prop.get("type")
    if prop_type in ("rich_text", "title"):
        return _plain_text(prop.get(prop_type))
    if prop_type == "select":
        return (prop.get("select") or {}).get("name", "")
    if prop_type == "multi_select":
        return ", ".join(option.get("name", "") for option in prop.get("multi_select") or [])
    if prop_type == "date":
        return (prop.get("date") or {}).get("start", "") or ""
    if prop_type == "checkbox":
        return "true" if prop.get("checkbox") else "false"
    return ""


class MemoryLoader:
    """Reads the latest records of the four director tables."""

    def __init__(
        self,
        notion,
        journal_db: str,
        doctrine_db: str,
        projects_db: str,
        decisions_db: str,
        page_size: int = 10,
    ) -> None:
        self._notion = notion
        self.journal_db = journal_db
        self.doctrine_db = doctrine_db
        self.projects_db = projects_db
        self.decisions_db = decisions_db
        self.page_size = page_size

    async def fetch_latest(self, database_id: str) -> list[dict]:
        return await self._notion.query_database(
            database_id,
            sorts=LATEST_FIRST,
            page_size=self.page_size,
        )

    async def load(self) -> dict[str, list[dict[str, Any]]]:
        """Return ``{"doctrine", "projects", "decisions", "journal"}`` summaries."""
        doctrine, projects, decisions, journal = await asyncio.gather(
            self.fetch_latest(self.doctrine_db),
            self.fetch_latest(self.projects_db),
            self.fetch_latest(self.decisions_db),
            self.fetch_latest(self.journal_db),
        )
        logger.info(
            "Memory loaded: doctrine=%d projects=%d decisions=%d journal=%d",
            len(doctrine), len(projects), len(decisions), len(journal),
        )

        return {
            "doctrine": [
                {
                    "title": page_title(p),
                    "type": page_value(p, nf.DOCTRINE_TYPE),
                    "version": page_value(p, nf.DOCTRINE_VERSION),
                    "active": page_value(p, nf.DOCTRINE_ACTIVE),
                }
                for p in doctrine
            ],
            "projects": [
                {
                    "title": page_title(p),
                    "objective": page_value(p, nf.PROJECT_OBJECTIVE),
                    "status": page_value(p, nf.STATUS),
                    "priority": page_value(p, nf.PROJECT_PRIORITY),
                    "domain": page_value(p, nf.DOMAIN),
                }
                for p in projects
            ],
            "decisions": [
                {
                    "title": page_title(p),
                    "status": page_value(p, nf.STATUS),
                    "domain": page_value(p, nf.DOMAIN),
                    "justification": page_value(p, nf.DECISION_JUSTIFICATION),
                    "impact": page_value(p, nf.DECISION_IMPACT),
                    "date": page_value(p, nf.DATE),
                }
                for p in decisions
            ],
            "journal": [
                {
                    "title": page_title(p),
                    "date": page_value(p, nf.DATE),
                    "decision": page_value(p, nf.JOURNAL_DECISION),
                    "next_action": page_value(p, nf.JOURNAL_NEXT_ACTION),
                }
                for p in journal
            ],
        }
