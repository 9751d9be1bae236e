"""Shared plumbing for the director and its specialists.

Both kinds of agent send one prompt to Gemini, expect a JSON object back
and validate it against a pydantic model. This module owns the model
call itself; the agents own their prompts and output models.
"""

import asyncio
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from agent_directeur.infra import gemini_client

logger = logging.getLogger(__name__)

# Hard limit on a single model call
GENERATION_TIMEOUT_SECONDS = 120


@dataclass
class AgentResult:
    """Outcome of one agent call.

    Agents never raise on model trouble (quota, timeout, malformed JSON,
    failed validation); they hand back ``ok=False`` with the reason in
    ``error``. The director service turns a failed decision into
    ``DirectorRunError``; the specialists route turns it into a 500.
    """

    ok: bool
    data: Any = None
    error: Optional[str] = None
    tokens_used: int = 0
    latency_ms: int = 0

    @classmethod
    def success(cls, data: Any, tokens_used: int = 0, latency_ms: int = 0) -> "AgentResult":
        return cls(ok=True, data=data, tokens_used=tokens_used, latency_ms=latency_ms)

    @classmethod
    def failure(cls, error: str, latency_ms: int = 0) -> "AgentResult":
        return cls(ok=False, error=error, latency_ms=latency_ms)


def _elapsed_ms(started: float) -> int:
    return int((time.time() - started) * 1000)


def _token_count(response: Any) -> int:
    """Prompt + completion tokens reported by Gemini, 0 when absent."""
    usage = getattr(response, "usage_metadata", None)
    if not usage:
        return 0
    prompt_tokens = getattr(usage, "prompt_token_count", 0) or 0
    completion_tokens = getattr(usage, "candidates_token_count", 0) or 0
    return prompt_tokens + completion_tokens


class BaseAgent:
    """One named Gemini caller with a fixed model and temperature.

    ``DirectorAgent`` runs cold (the same request should give the same
    decision); specialists run a little warmer. Subclasses build the
    prompt, call ``generate_json`` with their output model's JSON schema,
    and validate what comes back.
    """

    def __init__(
        self,
        agent_name: str,
        model_name: str = "gemini-3-flash-preview",
        temperature: float = 0.7,
    ):
        self.agent_name = agent_name
        self.model_name = model_name
        self.temperature = temperature

    async def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        json_mode: bool = False,
        response_schema: dict | None = None,
    ) -> AgentResult:
        """Send *prompt* and return the raw response text in ``data``."""
        started = time.time()
        try:
            model = gemini_client.get_model(
                model_name=self.model_name,
                temperature=self.temperature,
                json_mode=json_mode,
                response_schema=response_schema,
                system_instruction=system_instruction,
            )
            response = await asyncio.wait_for(
                model.generate_content_async(prompt),
                timeout=GENERATION_TIMEOUT_SECONDS,
            )
            text = response.text
        except Exception as exc:
            latency_ms = _elapsed_ms(started)
            logger.error("[%s] Model call failed after %dms: %s", self.agent_name, latency_ms, exc)
            return AgentResult.failure(str(exc), latency_ms=latency_ms)

        tokens_used = _token_count(response)
        latency_ms = _elapsed_ms(started)
        logger.info("[%s] Model call ok: tokens=%d, latency=%dms", self.agent_name, tokens_used, latency_ms)
        return AgentResult.success(data=text, tokens_used=tokens_used, latency_ms=latency_ms)

    async def generate_json(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
        response_schema: dict | None = None,
    ) -> AgentResult:
        """Like ``generate`` in JSON mode, with ``data`` parsed into a dict.

        An unparseable answer is a failure carrying ``JSON parse error``.
        """
        result = await self.generate(
            prompt=prompt,
            system_instruction=system_instruction,
            json_mode=True,
            response_schema=response_schema,
        )
        if not result.ok:
            return result

        try:
            parsed = json.loads(result.data)
        except (json.JSONDecodeError, TypeError) as exc:
            logger.warning("[%s] Unparseable JSON answer: %s (%.200s)", self.agent_name, exc, result.data)
            return AgentResult.failure(f"JSON parse error: {exc}", latency_ms=result.latency_ms)

        return AgentResult.success(
            data=parsed,
            tokens_used=result.tokens_used,
            latency_ms=result.latency_ms,
        )
