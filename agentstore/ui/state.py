"""
View state for the Streamlit pages.

Kept free of Streamlit calls so the transitions can be exercised directly;
the pages store these objects in st.session_state and render from them.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from agentstore.models.agent import AGENT_FIELD_RULES, check_run_input

REDIRECT_DELAY_SECONDS = 1.5


# ── List view ─────────────────────────────────────────────────────────────────

class ListStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    ERROR = "error"
    POPULATED = "populated"


@dataclass
class AgentListView:
    status: ListStatus = ListStatus.LOADING
    agents: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    def resolve(self, agents: list[dict[str, Any]]) -> None:
        self.agents = list(agents)
        self.error = None
        self.status = ListStatus.POPULATED if self.agents else ListStatus.EMPTY

    def reject(self, message: str) -> None:
        self.agents = []
        self.error = message
        self.status = ListStatus.ERROR


# ── Creation form ─────────────────────────────────────────────────────────────

@dataclass
class AgentForm:
    values: dict[str, str] = field(
        default_factory=lambda: {name: "" for name in AGENT_FIELD_RULES}
    )
    field_errors: dict[str, str] = field(default_factory=dict)
    submitting: bool = False
    succeeded: bool = False
    error: str | None = None

    def validate(self, **values: str) -> bool:
        """Store values and check them against the registry rules."""
        self.values.update(values)
        self.field_errors = {}
        for name, rule in AGENT_FIELD_RULES.items():
            problem = rule.check(self.values.get(name, ""))
            if problem:
                self.field_errors[name] = problem
        self.error = None
        return not self.field_errors

    def begin_submit(self) -> None:
        self.submitting = True
        self.error = None

    def succeed(self) -> None:
        self.submitting = False
        self.succeeded = True

    def fail(self, message: str, field_errors: dict[str, str] | None = None) -> None:
        self.submitting = False
        self.error = message
        self.field_errors = dict(field_errors or {})


# ── Chat view ─────────────────────────────────────────────────────────────────

class Sender(str, Enum):
    USER = "user"
    AGENT = "agent"


@dataclass
class Message:
    text: str
    sender: Sender
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_error: bool = False


@dataclass
class ChatTranscript:
    """
    Messages for one agent in one browser session.

    begin() appends the user's entry before the request is made; complete()
    or fail() then appends the agent's side. While a request is outstanding
    ``pending`` holds the text being sent and the input stays disabled.
    """

    agent_id: str
    messages: list[Message] = field(default_factory=list)
    pending: str | None = None
    error: str | None = None

    @property
    def busy(self) -> bool:
        return self.pending is not None

    def begin(self, text: str) -> str | None:
        """Queue text for sending. Returns a validation message instead when it is rejected."""
        if self.busy:
            return "Wait for the current reply"
        problem = check_run_input(text)
        if problem:
            return problem
        message = text.strip()
        self.messages.append(Message(text=message, sender=Sender.USER))
        self.pending = message
        self.error = None
        return None

    def complete(self, reply: str) -> None:
        self.messages.append(Message(text=reply, sender=Sender.AGENT))
        self.pending = None

    def fail(self, error: str) -> None:
        self.messages.append(Message(text=f"Error: {error}", sender=Sender.AGENT, is_error=True))
        self.error = error
        self.pending = None
