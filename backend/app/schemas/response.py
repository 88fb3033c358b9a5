from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every successful API response."""

    success: bool = True
    message: str
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""

    success: bool = False
    message: str
    error: Optional[Any] = None
