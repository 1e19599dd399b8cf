"""Common schemas used across the app."""

from typing import Any

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Structured error detail."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "error": { "code": str, "message": str, "detail": object } }
    """

    error: ErrorDetail

    @classmethod
    def build(cls, code: str, message: str, detail: dict[str, Any] | None = None) -> "ErrorResponse":
        return cls(error=ErrorDetail(code=code, message=message, detail=detail))
