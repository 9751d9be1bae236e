"""Minimal async client for the Notion REST API.

Only the four endpoints the service needs are wrapped:

- GET   /databases/{id}        — property definitions (schema discovery)
- POST  /databases/{id}/query  — filtered / sorted page listing
- POST  /pages                 — create a page in a database
- PATCH /pages/{id}            — update page properties

Failures are never retried: any non-2xx answer or transport error is
raised as ``NotionAPIError``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional

import httpx

from agent_directeur.app.config import get_settings

logger = logging.getLogger(__name__)


class NotionAPIError(Exception):
    """Raised when the Notion API rejects a call or cannot be reached."""

    def __init__(self, message: str, status_code: int = 0, code: str = ""):
        self.status_code = status_code
        self.code = code
        self.message = message
        if status_code:
            super().__init__(f"Notion API {status_code} ({code or 'error'}): {message}")
        else:
            super().__init__(f"Notion API unreachable: {message}")


class NotionClient:
    """Async wrapper over the Notion REST API using httpx."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        timeout: float = 30.0,
    ) -> None:
        self._token = token
        self.base_url = base_url.rstrip("/")
        self.notion_version = notion_version
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json",
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def retrieve_database(self, database_id: str) -> dict:
        """Return the database object, including its ``properties`` map."""
        return await self._request("GET", f"/databases/{database_id}")

    async def query_database(
        self,
        database_id: str,
        filter: Optional[dict] = None,
        sorts: Optional[list[dict]] = None,
        page_size: int = 10,
    ) -> list[dict]:
        """Return the first page of results matching *filter* / *sorts*."""
        body: dict[str, Any] = {"page_size": page_size}
        if filter:
            body["filter"] = filter
        if sorts:
            body["sorts"] = sorts
        data = await self._request("POST", f"/databases/{database_id}/query", body)
        return data.get("results") or []

    async def create_page(self, database_id: str, properties: dict) -> dict:
        """Create a page whose parent is *database_id*."""
        body = {"parent": {"database_id": database_id}, "properties": properties}
        return await self._request("POST", "/pages", body)

    async def update_page(self, page_id: str, properties: dict) -> dict:
        """Overwrite the given properties of an existing page."""
        return await self._request("PATCH", f"/pages/{page_id}", {"properties": properties})

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, body: Optional[dict] = None) -> dict:
        url = f"{self.base_url}{path}"
        logger.debug("Notion %s %s", method, path)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.request(
                    method,
                    url,
                    json=body,
                    headers=self._headers(),
                )
        except httpx.HTTPError as exc:
            logger.error("Notion %s %s failed: %s", method, path, exc)
            raise NotionAPIError(str(exc) or exc.__class__.__name__) from exc

        if resp.status_code >= 400:
            try:
                payload = resp.json()
            except ValueError:
                payload = {}
            message = payload.get("message") or resp.text[:300]
            code = payload.get("code", "")
            logger.warning(
                "Notion %s %s rejected (%d %s): %s",
                method, path, resp.status_code, code, message,
            )
            raise NotionAPIError(message, status_code=resp.status_code, code=code)

        try:
            return resp.json()
        except ValueError as exc:
            logger.error("Notion %s %s returned a non-JSON body: %.200s", method, path, resp.text)
            raise NotionAPIError(
                "Response body is not JSON",
                status_code=resp.status_code,
                code="invalid_json",
            ) from exc


@lru_cache
def get_notion_client() -> NotionClient:
    """Return the process-wide Notion client built from settings."""
    settings = get_settings()
    return NotionClient(
        token=settings.notion_token,
        base_url=settings.notion_api_url,
        notion_version=settings.notion_version,
        timeout=settings.notion_timeout_seconds,
    )
