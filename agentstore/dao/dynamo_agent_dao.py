"""
DynamoAgentDAO

DynamoDB layout:
  PK = AGENT#<agentId>
  SK = METADATA

GSI usage:
  GSI1_EntityByDate — list_all()  query entityType="AGENT", createdAt desc
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from agentstore.core.config import get_settings
from agentstore.dao.base import BaseAgentDAO, StoreError

ENTITY_TYPE = "AGENT"
SK = "METADATA"
LIST_INDEX = "GSI1_EntityByDate"


def _to_python(obj: Any) -> Any:
    """Recursively convert DynamoDB Decimal to int / float."""
    if isinstance(obj, Decimal):
        return int(obj) if obj % 1 == 0 else float(obj)
    if isinstance(obj, dict):
        return {k: _to_python(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_to_python(i) for i in obj]
    return obj


def _store_error(exc: Exception) -> StoreError:
    if isinstance(exc, ClientError):
        return StoreError(exc.response["Error"].get("Message", str(exc)))
    return StoreError(str(exc))


class DynamoAgentDAO(BaseAgentDAO):

    def __init__(self, table: Any = None) -> None:
        if table is None:
            settings = get_settings()
            dynamodb = boto3.resource("dynamodb", region_name=settings.aws_region)
            table = dynamodb.Table(settings.dynamodb_table_name)
        self._table = table

    @staticmethod
    def _pk(agent_id: str) -> str:
        return f"AGENT#{agent_id}"

    @staticmethod
    def _record(item: dict[str, Any]) -> dict[str, Any]:
        """Strip the single-table bookkeeping keys."""
        item = _to_python(item)
        return {
            "id": item["agentId"],
            "name": item["name"],
            "description": item["description"],
            "system_prompt": item["systemPrompt"],
            "created_at": item["createdAt"],
        }

    # ── Write ─────────────────────────────────────────────────────────────────

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        agent_id = str(uuid.uuid4())
        item: dict[str, Any] = {
            "PK": self._pk(agent_id),
            "SK": SK,
            "entityType": ENTITY_TYPE,
            "agentId": agent_id,
            "name": data["name"],
            "description": data["description"],
            "systemPrompt": data["system_prompt"],
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self._table.put_item(
                Item=item,
                ConditionExpression=Attr("PK").not_exists(),
            )
        except (ClientError, BotoCoreError) as exc:
            raise _store_error(exc) from exc
        return self._record(item)

    # ── Read ──────────────────────────────────────────────────────────────────

    def get(self, agent_id: str) -> dict[str, Any] | None:
        try:
            resp = self._table.get_item(Key={"PK": self._pk(agent_id), "SK": SK})
        except (ClientError, BotoCoreError) as exc:
            raise _store_error(exc) from exc
        item = resp.get("Item")
        return self._record(item) if item else None

    def list_all(self) -> list[dict[str, Any]]:
        """Exhaust GSI1 pages, newest first."""
        items: list[dict[str, Any]] = []
        last_key: dict | None = None
        while True:
            kwargs: dict[str, Any] = {
                "IndexName": LIST_INDEX,
                "KeyConditionExpression": Key("entityType").eq(ENTITY_TYPE),
                "ScanIndexForward": False,  # descending createdAt
            }
            if last_key:
                kwargs["ExclusiveStartKey"] = last_key
            try:
                resp = self._table.query(**kwargs)
            except (ClientError, BotoCoreError) as exc:
                raise _store_error(exc) from exc
            items.extend(resp.get("Items", []))
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                break
        return [self._record(item) for item in items]
