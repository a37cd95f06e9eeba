"""OpenAI Chat Completions adapter: one flat call with system + user messages."""

from __future__ import annotations

from typing import Any

import openai

from agentstore.llm.errors import (
    EmptyResponseError,
    ProviderAuthError,
    ProviderQuotaError,
    ProviderUnavailableError,
    classify_failure,
)


class OpenAIProvider:
    name = "openai"

    def __init__(self, api_key: str, model: str, max_tokens: int, client: Any = None) -> None:
        self._client = client or openai.OpenAI(api_key=api_key)
        self._model = model
        self._max_tokens = max_tokens

    def generate(self, system_prompt: str, user_message: str) -> str:
        try:
            completion = self._client.chat.completions.create(
                model=self._model,
                max_completion_tokens=self._max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise ProviderAuthError(str(exc)) from exc
        except openai.RateLimitError as exc:
            raise ProviderQuotaError(str(exc)) from exc
        except (openai.APIConnectionError, openai.InternalServerError) as exc:
            raise ProviderUnavailableError(str(exc)) from exc
        except openai.OpenAIError as exc:
            raise classify_failure(exc) from exc

        choices = completion.choices or []
        text = choices[0].message.content if choices else None
        if not text:
            raise EmptyResponseError("No response text received from OpenAI")
        return text
