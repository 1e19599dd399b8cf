"""Pydantic schemas for HTTP responses."""

from blog.schemas.common import ErrorDetail, ErrorResponse

__all__ = ["ErrorDetail", "ErrorResponse"]
