"""
FastAPI dependency functions shared across all route modules.

Tests replace get_agent_dao and get_llm_handle through
app.dependency_overrides; everything else is built from those two.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from agentstore.core.config import get_settings
from agentstore.dao import build_agent_dao
from agentstore.dao.base import BaseAgentDAO
from agentstore.llm.handle import ProviderHandle
from agentstore.services.agent_service import AgentService
from agentstore.services.relay_service import RelayService


@lru_cache
def get_agent_dao() -> BaseAgentDAO:
    """One DAO per process; its boto3 resource or Supabase client is reused."""
    return build_agent_dao(get_settings())


def get_llm_handle(request: Request) -> ProviderHandle:
    """The handle built once in the application lifespan."""
    return request.app.state.llm


def get_agent_service(
    dao: Annotated[BaseAgentDAO, Depends(get_agent_dao)],
) -> AgentService:
    return AgentService(dao)


def get_relay_service(
    agents: Annotated[AgentService, Depends(get_agent_service)],
    llm: Annotated[ProviderHandle, Depends(get_llm_handle)],
) -> RelayService:
    return RelayService(agents, llm)


# ── Convenient type aliases for route signatures ───────────────────────────────

AgentServiceDep = Annotated[AgentService, Depends(get_agent_service)]
RelayServiceDep = Annotated[RelayService, Depends(get_relay_service)]
