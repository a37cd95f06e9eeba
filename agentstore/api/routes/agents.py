"""
Agent router — /agents

All endpoints are public (no auth model).
"""

from fastapi import APIRouter, status

from agentstore.api.deps import AgentServiceDep, RelayServiceDep
from agentstore.models.agent import (
    AgentCreateRequest,
    AgentResponse,
    AgentRunRequest,
    AgentRunResponse,
)

router = APIRouter()


# ── GET /agents  ──────────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=list[AgentResponse],
    summary="List agents",
)
def list_agents(svc: AgentServiceDep) -> list[AgentResponse]:
    """Return every agent, newest first."""
    return svc.list_all()  # type: ignore[return-value]


# ── POST /agents  ─────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=AgentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create agent",
)
def create_agent(body: AgentCreateRequest, svc: AgentServiceDep) -> AgentResponse:
    """
    Publish a new agent. name, description and system_prompt are trimmed
    before they are stored.
    """
    return svc.create(body)  # type: ignore[return-value]


# ── GET /agents/{agent_id}  ───────────────────────────────────────────────────

@router.get(
    "/{agent_id}",
    response_model=AgentResponse,
    summary="Get agent detail",
)
def get_agent(agent_id: str, svc: AgentServiceDep) -> AgentResponse:
    return svc.get(agent_id)  # type: ignore[return-value]


# ── POST /agents/{agent_id}/run  ─────────────────────────────────────────────

@router.post(
    "/{agent_id}/run",
    response_model=AgentRunResponse,
    summary="Chat with an agent",
)
def run_agent(
    agent_id: str,
    body: AgentRunRequest,
    svc: RelayServiceDep,
) -> AgentRunResponse:
    """
    Send one message to the agent's model under its system prompt and return
    the generated text. No conversation history is kept server-side.
    """
    return svc.run(agent_id, body.input)  # type: ignore[return-value]
