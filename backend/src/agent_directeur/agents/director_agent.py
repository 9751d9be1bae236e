"""Director Agent - turns a client request and Notion memory into a structured decision."""

import json
import logging

from pydantic import ValidationError

from agent_directeur.agents.base import AgentResult, BaseAgent
from agent_directeur.agents.prompts.director import (
    DIRECTOR_SYSTEM_PROMPT,
    DIRECTOR_USER_PROMPT,
)
from agent_directeur.app.config import get_settings
from agent_directeur.domain.schemas import DirectorDecision, RunRequest

logger = logging.getLogger(__name__)


def build_system_prompt(memory: dict) -> str:
    """Embed the JSON-serialised memory into the director's policy prompt."""
    return DIRECTOR_SYSTEM_PROMPT.format(
        memory=json.dumps(memory, ensure_ascii=False),
    ).strip()


def build_user_prompt(request: RunRequest) -> str:
    return DIRECTOR_USER_PROMPT.format(
        request=request.request,
        context=request.context,
        constraints=request.constraints,
    ).strip()


class DirectorAgent(BaseAgent):
    """Produces the director's structured decision for one client request.

    The decision carries the imposed choice, the validated brief, the
    deliverable, the records to persist in Notion and the specialists to
    mobilise. Temperature is low because the same request should yield
    the same decision.
    """

    def __init__(self):
        settings = get_settings()
        super().__init__(
            agent_name="director",
            model_name=settings.director_model,
            temperature=settings.director_temperature,
        )

    async def decide(self, request: RunRequest, memory: dict) -> AgentResult:
        """Ask the model for a decision and validate it.

        Args:
            request: The client request / context / constraints triple.
            memory: Recent Notion records, as built by ``MemoryLoader``.

        Returns:
            AgentResult whose ``data`` is a validated ``DirectorDecision``.
        """
        result = await self.generate_json(
            prompt=build_user_prompt(request),
            system_instruction=build_system_prompt(memory),
            response_schema=DirectorDecision.model_json_schema(),
        )

        if not result.ok:
            return result

        try:
            decision = DirectorDecision.model_validate(result.data)
        except ValidationError as exc:
            logger.warning("[%s] Decision failed validation: %s", self.agent_name, exc)
            return AgentResult.failure(
                f"Validation error: {exc}", latency_ms=result.latency_ms
            )

        return AgentResult.success(
            data=decision,
            tokens_used=result.tokens_used,
            latency_ms=result.latency_ms,
        )
