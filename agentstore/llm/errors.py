"""
Provider-neutral failures raised by the model adapters.

Each adapter maps its SDK's exception types onto these classes first; anything
it does not recognise goes through classify_failure(), which inspects the
error text the way the hosted APIs phrase their common failures.
"""

from __future__ import annotations

from agentstore.core.errors import ErrorCategory


class ProviderError(Exception):
    category = ErrorCategory.GENERATION_FAILED


class ProviderConfigError(ProviderError):
    """The provider client could not be built (missing project or credentials)."""
    category = ErrorCategory.PROVIDER_NOT_CONFIGURED


class ProviderAuthError(ProviderError):
    category = ErrorCategory.UPSTREAM_AUTH


class ProviderQuotaError(ProviderError):
    category = ErrorCategory.UPSTREAM_QUOTA


class ProviderUnavailableError(ProviderError):
    category = ErrorCategory.UPSTREAM_UNAVAILABLE


class EmptyResponseError(ProviderError):
    category = ErrorCategory.EMPTY_RESPONSE


class GenerationError(ProviderError):
    category = ErrorCategory.GENERATION_FAILED


_AUTH_MARKERS = ("api key", "permission", "credential", "unauthenticated")
_QUOTA_MARKERS = ("quota", "rate limit", "resource exhausted", "resource_exhausted")


def classify_failure(exc: BaseException) -> ProviderError:
    text = str(exc).lower()
    if any(marker in text for marker in _AUTH_MARKERS):
        return ProviderAuthError(str(exc))
    if any(marker in text for marker in _QUOTA_MARKERS):
        return ProviderQuotaError(str(exc))
    return GenerationError(str(exc))
