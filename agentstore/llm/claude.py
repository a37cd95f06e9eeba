"""Anthropic Messages adapter: system prompt via `system=`, one user turn."""

from __future__ import annotations

from typing import Any

import anthropic

from agentstore.llm.errors import (
    EmptyResponseError,
    ProviderAuthError,
    ProviderQuotaError,
    ProviderUnavailableError,
    classify_failure,
)


class ClaudeProvider:
    name = "anthropic"

    def __init__(self, api_key: str, model: str, max_tokens: int, client: Any = None) -> None:
        self._client = client or anthropic.Anthropic(api_key=api_key)
        self._model = model
        self._max_tokens = max_tokens

    def generate(self, system_prompt: str, user_message: str) -> str:
        try:
            response = self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=system_prompt,
                messages=[{"role": "user", "content": user_message}],
            )
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as exc:
            raise ProviderAuthError(str(exc)) from exc
        except anthropic.RateLimitError as exc:
            raise ProviderQuotaError(str(exc)) from exc
        except (anthropic.APIConnectionError, anthropic.InternalServerError) as exc:
            raise ProviderUnavailableError(str(exc)) from exc
        except anthropic.AnthropicError as exc:
            raise classify_failure(exc) from exc

        texts = [
            block.text
            for block in response.content or []
            if getattr(block, "type", None) == "text" and block.text
        ]
        if not texts:
            raise EmptyResponseError("No response text received from Claude")
        return texts[0]
