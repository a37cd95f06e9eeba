"""
Vertex AI Gemini adapter.

Gemini chat sessions have no system role, so the persona is injected as a
priming exchange at the head of the history:

  user:  "SYSTEM INSTRUCTION: <system prompt>"
  model: "Understood. I will act as this agent."

and the user's message is then sent as the only live turn.
"""

from __future__ import annotations

from typing import Any

import httpx
from google import genai
from google.auth.exceptions import GoogleAuthError
from google.genai import errors as genai_errors
from google.genai import types

from agentstore.llm.errors import (
    EmptyResponseError,
    ProviderAuthError,
    ProviderQuotaError,
    ProviderUnavailableError,
    classify_failure,
)

PRIMING_REPLY = "Understood. I will act as this agent."


def _priming_history(system_prompt: str) -> list[types.Content]:
    return [
        types.Content(
            role="user",
            parts=[types.Part(text=f"SYSTEM INSTRUCTION: {system_prompt}")],
        ),
        types.Content(role="model", parts=[types.Part(text=PRIMING_REPLY)]),
    ]


def _first_text(response: Any) -> str | None:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        text = getattr(part, "text", None)
        if text:
            return text
    return None


class GeminiProvider:
    name = "vertexai"

    def __init__(
        self,
        project: str,
        location: str,
        model: str,
        max_tokens: int,
        client: Any = None,
    ) -> None:
        self._client = client or genai.Client(
            vertexai=True, project=project, location=location
        )
        self._model = model
        self._config = types.GenerateContentConfig(max_output_tokens=max_tokens)

    def generate(self, system_prompt: str, user_message: str) -> str:
        try:
            chat = self._client.chats.create(
                model=self._model,
                config=self._config,
                history=_priming_history(system_prompt),
            )
            response = chat.send_message(user_message)
        except genai_errors.ClientError as exc:
            if exc.code in (401, 403):
                raise ProviderAuthError(str(exc)) from exc
            if exc.code == 429:
                raise ProviderQuotaError(str(exc)) from exc
            raise classify_failure(exc) from exc
        except genai_errors.ServerError as exc:
            raise ProviderUnavailableError(str(exc)) from exc
        except httpx.TransportError as exc:
            raise ProviderUnavailableError(str(exc)) from exc
        except GoogleAuthError as exc:
            # credentials could not be loaded or refreshed at request time
            raise classify_failure(exc) from exc

        text = _first_text(response)
        if not text:
            raise EmptyResponseError("No response text received from Gemini")
        return text
