from abc import ABC, abstractmethod
from typing import Any


class StoreError(Exception):
    """A backend failure (connectivity, constraint violation, bad response)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BaseAgentDAO(ABC):
    """
    Storage contract for Agent records.

    Records are plain dicts with keys: id, name, description, system_prompt,
    created_at. Backend exceptions are re-raised as StoreError.
    """

    @abstractmethod
    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Insert one agent (name, description, system_prompt); return the stored record."""

    @abstractmethod
    def get(self, agent_id: str) -> dict[str, Any] | None:
        """Return the agent, or None when no row has this id."""

    @abstractmethod
    def list_all(self) -> list[dict[str, Any]]:
        """Return every agent, newest created_at first."""
