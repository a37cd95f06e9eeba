from agentstore.llm.base import LLMProvider
from agentstore.llm.errors import (
    EmptyResponseError,
    GenerationError,
    ProviderAuthError,
    ProviderConfigError,
    ProviderError,
    ProviderQuotaError,
    ProviderUnavailableError,
)
from agentstore.llm.handle import ProviderHandle, build_provider

__all__ = [
    "EmptyResponseError",
    "GenerationError",
    "LLMProvider",
    "ProviderAuthError",
    "ProviderConfigError",
    "ProviderError",
    "ProviderHandle",
    "ProviderQuotaError",
    "ProviderUnavailableError",
    "build_provider",
]
