"""
RelayService — one user message in, one model reply out.

Request flow (stops at the first failure, nothing is retried):

  VALIDATE_INPUT   AgentRunRequest, before this service is reached
  LOOKUP_AGENT     AgentService.get()  → 404 / store 500
  ENSURE_PROVIDER  ProviderHandle.get() → cached startup configuration error
  INVOKE_MODEL     provider.generate(system_prompt, input)
  EXTRACT_TEXT     inside the adapter; no text → EmptyResponseError

Provider failures are reported with a fixed user-facing message per category;
the provider's own text goes to the log only.
"""

from __future__ import annotations

import time
from typing import Any

import structlog

from agentstore.core.errors import ErrorCategory, ServerError
from agentstore.llm.errors import ProviderConfigError, ProviderError
from agentstore.llm.handle import ProviderHandle
from agentstore.services.agent_service import AgentService

log = structlog.get_logger(__name__)

USER_MESSAGES: dict[ErrorCategory, str] = {
    ErrorCategory.UPSTREAM_AUTH: (
        "Model provider authentication failed. Check your API credentials and permissions."
    ),
    ErrorCategory.UPSTREAM_QUOTA: "Rate limit exceeded. Please try again later.",
    ErrorCategory.UPSTREAM_UNAVAILABLE: (
        "The model provider is unavailable right now. Please try again later."
    ),
    ErrorCategory.EMPTY_RESPONSE: "No response text received from the model",
    ErrorCategory.GENERATION_FAILED: "Failed to generate AI response",
}


class RelayService:

    def __init__(self, agents: AgentService, llm: ProviderHandle) -> None:
        self._agents = agents
        self._llm = llm

    def run(self, agent_id: str, user_input: str) -> dict[str, Any]:
        agent = self._agents.get(agent_id)

        try:
            provider = self._llm.get()
        except ProviderConfigError as exc:
            raise ServerError(
                f"Model provider setup incomplete: {exc}. "
                "Please configure your environment variables.",
                ErrorCategory.PROVIDER_NOT_CONFIGURED,
            ) from exc

        t0 = time.monotonic()
        try:
            text = provider.generate(agent["system_prompt"], user_input)
        except ProviderError as exc:
            log.error(
                "model_generation_failed",
                agent_id=agent_id,
                provider=provider.name,
                category=exc.category.value,
                error=str(exc),
            )
            message = USER_MESSAGES.get(exc.category, USER_MESSAGES[ErrorCategory.GENERATION_FAILED])
            raise ServerError(message, exc.category) from exc

        log.info(
            "model_generation_completed",
            agent_id=agent_id,
            provider=provider.name,
            latency_ms=int((time.monotonic() - t0) * 1000),
        )
        return {"response": text}
