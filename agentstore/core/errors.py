"""
Error taxonomy shared by the service layer and the HTTP boundary.

Every failure that leaves the API carries a stable ``category`` string next to
the human-readable message, so the UI can react to the kind of failure without
parsing text.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, status


class ErrorCategory(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"
    PROVIDER_NOT_CONFIGURED = "provider_not_configured"
    UPSTREAM_AUTH = "upstream_auth"
    UPSTREAM_QUOTA = "upstream_quota"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    EMPTY_RESPONSE = "empty_response"
    GENERATION_FAILED = "generation_failed"
    INTERNAL = "internal"


class AppError(HTTPException):
    """
    HTTPException with a category and optional per-field errors.

    Raised from services; rendered by the handler registered in main.py.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        category: ErrorCategory,
        errors: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail)
        self.category = category
        self.errors = errors or []

    def payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.detail, "category": self.category.value}
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidInputError(AppError):
    def __init__(self, errors: list[dict[str, str]]) -> None:
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            "; ".join(e["message"] for e in errors),
            ErrorCategory.INVALID_INPUT,
            errors,
        )


class NotFoundError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, detail, ErrorCategory.NOT_FOUND)


class ServerError(AppError):
    def __init__(self, detail: str, category: ErrorCategory = ErrorCategory.INTERNAL) -> None:
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail, category)
