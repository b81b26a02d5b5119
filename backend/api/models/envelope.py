"""
Response envelope models.

Used for OpenAPI documentation; responses themselves are built in
api.responses.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Standard response format for every endpoint."""

    error: bool
    code: int
    message: str
    data: Optional[T] = None


class ErrorEnvelope(Envelope[Any]):
    """Envelope returned on failures; data is usually null."""

    error: bool = True
