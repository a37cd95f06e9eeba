"""
HTTP client the Streamlit pages use to talk to the agent store API.

API failures surface as ApiError with the server's message, category and
per-field errors, so pages never look at raw responses.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import httpx

from agentstore.core.config import get_settings


class ApiError(Exception):
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        category: str | None = None,
        field_errors: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.category = category
        self.field_errors = field_errors or {}


class MarketplaceClient:

    def __init__(self, base_url: str, transport: httpx.BaseTransport | None = None) -> None:
        # No timeout: a slow model call holds the chat until the provider answers.
        self._http = httpx.Client(base_url=base_url, timeout=None, transport=transport)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ApiError(f"Could not reach the agent store: {exc}") from exc
        if resp.is_success:
            return resp.json()
        raise self._error(resp)

    @staticmethod
    def _error(resp: httpx.Response) -> ApiError:
        try:
            body = resp.json()
        except ValueError:
            return ApiError(resp.text or f"HTTP {resp.status_code}", resp.status_code)
        if not isinstance(body, dict):
            return ApiError(f"HTTP {resp.status_code}", resp.status_code)
        field_errors = {
            e["field"]: e["message"] for e in body.get("errors", []) if "field" in e
        }
        return ApiError(
            body.get("error") or f"HTTP {resp.status_code}",
            resp.status_code,
            body.get("category"),
            field_errors,
        )

    # ── Registry ──────────────────────────────────────────────────────────────

    def list_agents(self) -> list[dict[str, Any]]:
        return self._request("GET", "/agents")

    def get_agent(self, agent_id: str) -> dict[str, Any]:
        return self._request("GET", f"/agents/{agent_id}")

    def create_agent(self, name: str, description: str, system_prompt: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/agents",
            json={"name": name, "description": description, "system_prompt": system_prompt},
        )

    # ── Relay ─────────────────────────────────────────────────────────────────

    def run_agent(self, agent_id: str, message: str) -> str:
        return self._request("POST", f"/agents/{agent_id}/run", json={"input": message})["response"]


@lru_cache
def get_client() -> MarketplaceClient:
    return MarketplaceClient(get_settings().api_base_url)
