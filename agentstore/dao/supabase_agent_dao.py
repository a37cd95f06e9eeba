"""
SupabaseAgentDAO

Postgres layout (see scripts/supabase_schema.sql):
  agents(id uuid PK default gen_random_uuid(),
         name text, description text, system_prompt text,
         created_at timestamptz default now())

id and created_at are assigned by the database on insert.
"""

from functools import lru_cache
from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client, SupabaseException, create_client

from agentstore.core.config import get_settings
from agentstore.dao.base import BaseAgentDAO, StoreError

# PostgREST surfaces Postgres' invalid_text_representation when the id is not a uuid.
_INVALID_ID_CODE = "22P02"


@lru_cache
def _client(url: str, key: str) -> Client:
    return create_client(url, key)


class SupabaseAgentDAO(BaseAgentDAO):

    def __init__(self, client: Client | None = None) -> None:
        self._settings = get_settings()
        self._client = client

    def _table(self):
        if self._client is None:
            url, key = self._settings.supabase_url, self._settings.supabase_key
            if not url or not key:
                raise StoreError("SUPABASE_URL and SUPABASE_KEY must be set")
            try:
                self._client = _client(url, key)
            except SupabaseException as exc:
                raise StoreError(str(exc)) from exc
        return self._client.table(self._settings.supabase_table)

    def _execute(self, query) -> Any:
        try:
            return query.execute()
        except APIError as exc:
            raise StoreError(exc.message or str(exc)) from exc
        except httpx.HTTPError as exc:
            raise StoreError(str(exc)) from exc

    # ── Write ─────────────────────────────────────────────────────────────────

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        resp = self._execute(self._table().insert(data))
        if not resp.data:
            raise StoreError("Insert returned no rows")
        return resp.data[0]

    # ── Read ──────────────────────────────────────────────────────────────────

    def get(self, agent_id: str) -> dict[str, Any] | None:
        query = self._table().select("*").eq("id", agent_id).limit(1)
        try:
            resp = self._execute(query)
        except StoreError as exc:
            cause = exc.__cause__
            if isinstance(cause, APIError) and cause.code == _INVALID_ID_CODE:
                return None
            raise
        return resp.data[0] if resp.data else None

    def list_all(self) -> list[dict[str, Any]]:
        resp = self._execute(
            self._table().select("*").order("created_at", desc=True)
        )
        return resp.data or []
