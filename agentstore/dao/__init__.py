from agentstore.core.config import Settings
from agentstore.dao.base import BaseAgentDAO, StoreError
from agentstore.dao.dynamo_agent_dao import DynamoAgentDAO
from agentstore.dao.supabase_agent_dao import SupabaseAgentDAO

__all__ = [
    "BaseAgentDAO",
    "DynamoAgentDAO",
    "StoreError",
    "SupabaseAgentDAO",
    "build_agent_dao",
]


def build_agent_dao(settings: Settings) -> BaseAgentDAO:
    if settings.store_backend == "dynamodb":
        return DynamoAgentDAO()
    return SupabaseAgentDAO()
