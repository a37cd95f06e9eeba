"""
AgentService — the Agent Registry.

Responsibilities:
  - Shape validated create requests into store rows
  - Newest-first listing and single-agent lookup
  - Translate StoreError into HTTP-level AppErrors

Field validation happens before this layer (AgentCreateRequest), so nothing
that reaches create() can violate the length rules.
"""

from __future__ import annotations

from typing import Any

import structlog

from agentstore.core.errors import ErrorCategory, NotFoundError, ServerError
from agentstore.dao.base import BaseAgentDAO, StoreError
from agentstore.models.agent import AgentCreateRequest

log = structlog.get_logger(__name__)


class AgentService:

    def __init__(self, dao: BaseAgentDAO) -> None:
        self._dao = dao

    def create(self, body: AgentCreateRequest) -> dict[str, Any]:
        data = {
            "name": body.name,
            "description": body.description,
            "system_prompt": body.system_prompt,
        }
        try:
            agent = self._dao.create(data)
        except StoreError as exc:
            log.error("agent_create_failed", error=exc.message)
            raise ServerError(
                f"Failed to create agent: {exc.message}", ErrorCategory.STORE_ERROR
            ) from exc
        log.info("agent_created", agent_id=agent["id"], name=agent["name"])
        return agent

    def get(self, agent_id: str) -> dict[str, Any]:
        try:
            agent = self._dao.get(agent_id)
        except StoreError as exc:
            log.error("agent_fetch_failed", agent_id=agent_id, error=exc.message)
            raise ServerError("Failed to fetch agent", ErrorCategory.STORE_ERROR) from exc
        if not agent:
            raise NotFoundError("Agent not found")
        return agent

    def list_all(self) -> list[dict[str, Any]]:
        try:
            return self._dao.list_all()
        except StoreError as exc:
            log.error("agent_list_failed", error=exc.message)
            raise ServerError(
                f"Failed to fetch agents: {exc.message}", ErrorCategory.STORE_ERROR
            ) from exc
