"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorBody(BaseModel):
    """Single error object carried by a response envelope."""

    message: str
    code: str | None = None


class Envelope(BaseModel, Generic[T]):
    """Response wrapper carrying a result, an error, or both after a partial success."""

    data: T | None = None
    error: ErrorBody | None = Field(default=None)
