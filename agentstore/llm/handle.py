"""
Provider construction.

build_provider() turns Settings into a ready LLMProvider or raises
ProviderConfigError. ProviderHandle runs it exactly once, at application
startup, and keeps whichever outcome it got: every request then asks the
handle for the provider, and a failed initialization keeps failing the same
way until the process is restarted.
"""

from __future__ import annotations

from typing import Callable

import structlog

from agentstore.core.config import Settings
from agentstore.llm.base import LLMProvider
from agentstore.llm.claude import ClaudeProvider
from agentstore.llm.errors import ProviderConfigError
from agentstore.llm.gemini import GeminiProvider
from agentstore.llm.openai_chat import OpenAIProvider

log = structlog.get_logger(__name__)


def _require(value: str, env_var: str) -> str:
    if not value:
        raise ProviderConfigError(f"{env_var} environment variable is not set")
    return value


def _gemini(settings: Settings) -> LLMProvider:
    return GeminiProvider(
        project=_require(settings.google_project_id, "GOOGLE_PROJECT_ID"),
        location=settings.google_location,
        model=settings.gemini_model,
        max_tokens=settings.llm_max_tokens,
    )


def _openai(settings: Settings) -> LLMProvider:
    return OpenAIProvider(
        api_key=_require(settings.openai_api_key, "OPENAI_API_KEY"),
        model=settings.openai_model,
        max_tokens=settings.llm_max_tokens,
    )


def _claude(settings: Settings) -> LLMProvider:
    return ClaudeProvider(
        api_key=_require(settings.anthropic_api_key, "ANTHROPIC_API_KEY"),
        model=settings.claude_model,
        max_tokens=settings.llm_max_tokens,
    )


_BUILDERS: dict[str, Callable[[Settings], LLMProvider]] = {
    "vertexai": _gemini,
    "openai": _openai,
    "anthropic": _claude,
}


def build_provider(settings: Settings) -> LLMProvider:
    builder = _BUILDERS.get(settings.llm_provider)
    if builder is None:
        raise ProviderConfigError(f"Unknown LLM_PROVIDER '{settings.llm_provider}'")
    try:
        return builder(settings)
    except ProviderConfigError:
        raise
    except Exception as exc:
        # SDK constructors fail on unusable credentials (e.g. no ADC for Vertex)
        raise ProviderConfigError(str(exc)) from exc


class ProviderHandle:

    def __init__(
        self,
        provider: LLMProvider | None = None,
        error: ProviderConfigError | None = None,
    ) -> None:
        if (provider is None) == (error is None):
            raise ValueError("ProviderHandle needs exactly one of provider or error")
        self._provider = provider
        self._error = error

    @classmethod
    def initialize(cls, settings: Settings) -> ProviderHandle:
        try:
            provider = build_provider(settings)
        except ProviderConfigError as exc:
            log.error("llm_provider_init_failed", provider=settings.llm_provider, error=str(exc))
            return cls(error=exc)
        log.info("llm_provider_ready", provider=provider.name)
        return cls(provider=provider)

    @property
    def ready(self) -> bool:
        return self._provider is not None

    def get(self) -> LLMProvider:
        """Return the provider, or re-raise the initialization error."""
        if self._error is not None:
            raise self._error
        return self._provider  # type: ignore[return-value]
