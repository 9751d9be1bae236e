"""Specialist Agents - secondary model calls with a fixed payload shape."""

import logging

from pydantic import ValidationError

from agent_directeur.agents.base import AgentResult, BaseAgent
from agent_directeur.agents.prompts.specialists import (
    SPECIALIST_SYSTEM_PROMPTS,
    SPECIALIST_USER_PROMPT,
)
from agent_directeur.app.config import get_settings
from agent_directeur.domain.enums import SpecialistName
from agent_directeur.domain.schemas import SpecialistOutput, SpecialistRequest

logger = logging.getLogger(__name__)


class SpecialistAgent(BaseAgent):
    """One specialist (pedagogy, legal framework, offer) of the director."""

    def __init__(self, specialist: SpecialistName):
        settings = get_settings()
        super().__init__(
            agent_name=f"specialist_{specialist.value}",
            model_name=settings.director_model,
            temperature=settings.specialist_temperature,
        )
        self.specialist = specialist

    async def consult(self, payload: SpecialistRequest) -> AgentResult:
        """Run the specialist prompt on *payload*.

        Returns:
            AgentResult whose ``data`` is a validated ``SpecialistOutput``.
        """
        prompt = SPECIALIST_USER_PROMPT.format(
            brief=payload.brief,
            context=payload.context,
            constraints=payload.constraints,
            specialist=self.specialist.value,
        )

        result = await self.generate_json(
            prompt=prompt,
            system_instruction=SPECIALIST_SYSTEM_PROMPTS[self.specialist],
            response_schema=SpecialistOutput.model_json_schema(),
        )

        if not result.ok:
            return result

        data = result.data if isinstance(result.data, dict) else {}
        # The answer always belongs to the specialist that was called
        data = {**data, "specialist": self.specialist.value}

        try:
            output = SpecialistOutput.model_validate(data)
        except ValidationError as exc:
            logger.warning("[%s] Output failed validation: %s", self.agent_name, exc)
            return AgentResult.failure(
                f"Validation error: {exc}", latency_ms=result.latency_ms
            )

        return AgentResult.success(
            data=output,
            tokens_used=result.tokens_used,
            latency_ms=result.latency_ms,
        )
