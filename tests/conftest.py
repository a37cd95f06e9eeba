import itertools
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from agentstore.api.deps import get_agent_dao, get_llm_handle
from agentstore.dao.base import BaseAgentDAO, StoreError
from agentstore.llm.handle import ProviderHandle
from agentstore.main import app

TRAVEL_BOT = {
    "name": "Travel Bot",
    "description": "Plans trips and itineraries",
    "system_prompt": "You are a helpful travel assistant that suggests destinations.",
}


class InMemoryAgentDAO(BaseAgentDAO):
    """Store double: rows kept in a list, created_at advances one second per insert."""

    def __init__(self):
        self.rows = []
        self.calls = []
        self.fail_with = None
        self._tick = itertools.count()

    def _record(self, op):
        self.calls.append(op)
        if self.fail_with:
            raise StoreError(self.fail_with)

    def create(self, data):
        self._record("create")
        created = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=next(self._tick))
        row = {"id": str(uuid.uuid4()), **data, "created_at": created.isoformat()}
        self.rows.append(row)
        return dict(row)

    def get(self, agent_id):
        self._record("get")
        return next((dict(r) for r in self.rows if r["id"] == agent_id), None)

    def list_all(self):
        self._record("list_all")
        return sorted((dict(r) for r in self.rows), key=lambda r: r["created_at"], reverse=True)


class FakeProvider:
    name = "fake"

    def __init__(self, reply="Day 1: ..."):
        self.reply = reply
        self.error = None
        self.calls = []

    def generate(self, system_prompt, user_message):
        self.calls.append((system_prompt, user_message))
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def dao():
    return InMemoryAgentDAO()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def llm_handle(provider):
    return ProviderHandle(provider=provider)


@pytest.fixture
def client(dao, llm_handle):
    app.dependency_overrides[get_agent_dao] = lambda: dao
    app.dependency_overrides[get_llm_handle] = lambda: llm_handle
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def travel_bot(dao):
    agent = dao.create(TRAVEL_BOT)
    dao.calls.clear()
    return agent
