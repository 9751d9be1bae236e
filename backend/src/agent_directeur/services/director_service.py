"""Director run orchestration.

One run:
1. Load recent memory from the four Notion tables
2. Ask the Director Agent for a structured decision
3. Optionally consult the specialists the decision names
4. Write the journal entry, then every proposed doctrine / decision / project

Writes are sequential and never rolled back: if the Nth write fails, the
first N-1 stay in Notion and the error propagates to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from agent_directeur.agents.director_agent import DirectorAgent
from agent_directeur.agents.specialist_agent import SpecialistAgent
from agent_directeur.app.config import Settings
from agent_directeur.domain.enums import SpecialistName
from agent_directeur.domain.records import WriteResult
from agent_directeur.domain.schemas import (
    DecisionEntry,
    DirectorDecision,
    DoctrineEntry,
    ProjectEntry,
    RunRequest,
    RunResponse,
    SpecialistRequest,
    SpecialistResult,
    WriteRecord,
)
from agent_directeur.services import notion_fields as nf
from agent_directeur.services.memory_loader import MemoryLoader
from agent_directeur.services.record_writer import RecordWriter

logger = logging.getLogger(__name__)


class DirectorRunError(Exception):
    """Raised when the director could not produce a usable decision."""


@dataclass(frozen=True)
class DirectorTables:
    """Notion database ids used by a run."""

    journal: str
    doctrine: str
    projects: str
    decisions: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "DirectorTables":
        return cls(
            journal=settings.notion_db_journal,
            doctrine=settings.notion_db_doctrine,
            projects=settings.notion_db_projects,
            decisions=settings.notion_db_decisions,
        )


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class DirectorService:
    """Runs the director end to end and persists its output."""

    def __init__(
        self,
        writer: RecordWriter,
        memory_loader: MemoryLoader,
        tables: DirectorTables,
        agent: Optional[DirectorAgent] = None,
        specialist_factory: Callable[[SpecialistName], SpecialistAgent] = SpecialistAgent,
        clock: Callable[[], str] = _utc_now_iso,
    ) -> None:
        self.writer = writer
        self.memory_loader = memory_loader
        self.tables = tables
        self.agent = agent or DirectorAgent()
        self.specialist_factory = specialist_factory
        self.clock = clock

    async def run(self, request: RunRequest) -> RunResponse:
        """Execute one director run.

        Raises:
            DirectorRunError: if the model call or its validation failed.
            SchemaError: if a target table has no title property.
            NotionAPIError: if Notion rejects a read or a write.
        """
        memory = await self.memory_loader.load()

        result = await self.agent.decide(request, memory)
        if not result.ok:
            raise DirectorRunError(result.error or "Director decision failed")
        decision: DirectorDecision = result.data

        specialists: list[SpecialistResult] = []
        if request.consult_specialists and decision.specialists:
            specialists = await self.consult_specialists(decision, request)

        now = self.clock()
        writes = [await self.write_journal(request, decision, specialists, now)]
        for entry in decision.notion_writes.doctrine:
            writes.append(await self.write_doctrine(entry))
        for entry in decision.notion_writes.decisions:
            writes.append(await self.write_decision(entry, now))
        for entry in decision.notion_writes.projects:
            writes.append(await self.write_project(entry))

        logger.info(
            "Director run complete: type=%s domain=%s writes=%d specialists=%d",
            decision.request_type,
            decision.domain,
            len(writes),
            len(specialists),
        )
        return RunResponse(
            data=decision,
            specialists=specialists,
            writes=[WriteRecord(**w.to_dict()) for w in writes],
        )

    # ------------------------------------------------------------------
    # Specialists
    # ------------------------------------------------------------------

    async def consult_specialists(
        self,
        decision: DirectorDecision,
        request: RunRequest,
    ) -> list[SpecialistResult]:
        """Call every distinct specialist the decision names, concurrently."""
        names = list(dict.fromkeys(decision.specialists))
        payload = SpecialistRequest(
            brief=decision.validated_brief,
            context=request.context,
            constraints=request.constraints,
        )
        results = await asyncio.gather(
            *(self.specialist_factory(name).consult(payload) for name in names)
        )

        reports = []
        for name, res in zip(names, results):
            if not res.ok:
                logger.warning("Specialist %s failed: %s", name.value, res.error)
            reports.append(
                SpecialistResult(
                    specialist=name,
                    ok=res.ok,
                    output=res.data if res.ok else None,
                    error=res.error,
                )
            )
        return reports

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def write_journal(
        self,
        request: RunRequest,
        decision: DirectorDecision,
        specialists: list[SpecialistResult],
        now: str,
    ) -> WriteResult:
        agents = [nf.DIRECTOR_AGENT_OPTION, decision.domain]
        agents += [s.specialist.value for s in specialists if s.ok]
        record = {
            nf.DATE: now,
            nf.JOURNAL_RESULT: decision.final_deliverable,
            nf.JOURNAL_DECISION: decision.director_decision,
            nf.JOURNAL_NEXT_ACTION: " | ".join(decision.next_actions),
            nf.JOURNAL_AGENTS: [a for a in agents if a],
        }
        return await self.writer.create(
            self.tables.journal,
            record,
            title=request.request or nf.JOURNAL_FALLBACK_TITLE,
        )

    async def write_doctrine(self, entry: DoctrineEntry) -> WriteResult:
        record = {
            nf.DOCTRINE_CONTENT: entry.content,
            nf.DOCTRINE_VERSION: entry.version,
            nf.DOCTRINE_TYPE: entry.category,
            nf.DOCTRINE_ACTIVE: entry.active,
        }
        return await self.writer.upsert_by_title(self.tables.doctrine, entry.title, record)

    async def write_decision(self, entry: DecisionEntry, now: str) -> WriteResult:
        record = {
            nf.DATE: now,
            nf.DECISION_JUSTIFICATION: entry.justification,
            nf.DECISION_IMPACT: entry.impact,
            nf.STATUS: entry.status,
            nf.DOMAIN: entry.domain,
        }
        return await self.writer.create(self.tables.decisions, record, title=entry.title)

    async def write_project(self, entry: ProjectEntry) -> WriteResult:
        record = {
            nf.PROJECT_OBJECTIVE: entry.objective,
            nf.STATUS: entry.status,
            nf.PROJECT_PRIORITY: entry.priority,
            nf.DOMAIN: entry.domain,
        }
        return await self.writer.upsert_by_title(self.tables.projects, entry.title, record)
