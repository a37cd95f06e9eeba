"""
Pydantic schemas for the Agent module.

Field rules
-----------
name           3 – 100 characters
description   10 – 500 characters
system_prompt 20 – 2000 characters

Lengths are measured after trimming surrounding whitespace; the trimmed text is
what gets stored. The same rule table drives the creation form in the UI, so
both sides report identical messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

MAX_INPUT_LENGTH = 5000


@dataclass(frozen=True)
class LengthRule:
    label: str
    min_length: int
    max_length: int

    def check(self, value: Any) -> str | None:
        """Return the violation message for value, or None when it passes."""
        if not isinstance(value, str) or value == "":
            return f"{self.label} is required and must be a string"
        text = value.strip()
        if len(text) < self.min_length:
            return f"{self.label} must be at least {self.min_length} characters"
        if len(text) > self.max_length:
            return f"{self.label} must not exceed {self.max_length} characters"
        return None


AGENT_FIELD_RULES: dict[str, LengthRule] = {
    "name": LengthRule("Name", 3, 100),
    "description": LengthRule("Description", 10, 500),
    "system_prompt": LengthRule("System prompt", 20, 2000),
}


def check_run_input(value: Any) -> str | None:
    """Violation message for a chat message, or None when it passes."""
    if not isinstance(value, str) or value == "":
        return "Input message is required"
    text = value.strip()
    if not text:
        return "Input message cannot be empty"
    if len(text) > MAX_INPUT_LENGTH:
        return f"Input message is too long (max {MAX_INPUT_LENGTH} characters)"
    return None


# ── Request bodies ────────────────────────────────────────────────────────────

class AgentCreateRequest(BaseModel):
    # Defaults are validated so a missing field reports the same message as an
    # empty one.
    model_config = ConfigDict(extra="ignore")

    name: str = Field(default=None, validate_default=True)
    description: str = Field(default=None, validate_default=True)
    system_prompt: str = Field(default=None, validate_default=True)

    @field_validator("name", "description", "system_prompt", mode="before")
    @classmethod
    def _check_length(cls, value: Any, info: ValidationInfo) -> str:
        problem = AGENT_FIELD_RULES[info.field_name].check(value)
        if problem:
            raise PydanticCustomError("agent_field", problem)
        return value.strip()


class AgentRunRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    input: str = Field(default=None, validate_default=True)

    @field_validator("input", mode="before")
    @classmethod
    def _check_input(cls, value: Any) -> str:
        problem = check_run_input(value)
        if problem:
            raise PydanticCustomError("agent_field", problem)
        return value.strip()


# ── Responses ─────────────────────────────────────────────────────────────────

class AgentResponse(BaseModel):
    id: str
    name: str
    description: str
    system_prompt: str
    created_at: str


class AgentRunResponse(BaseModel):
    response: str
