"""
Response Envelope.

Every board response, success or error, is one JSON object:

    {"success": ..., "data": ..., "error": ..., "metadata": {"timestamp", "request_id"}}

A mutation on a note that has already been deleted is a success whose
``data`` is null, so a renderer's late keystroke or drag step never
produces an error.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from modules.backend.core.utils import utc_now

PayloadT = TypeVar("PayloadT")


class ResponseMetadata(BaseModel):
    timestamp: datetime = Field(default_factory=utc_now, description="Naive UTC time the envelope was built")
    request_id: str | None = Field(default=None, description="Echo of X-Request-ID")


class ErrorDetail(BaseModel):
    code: str = Field(description="Stable machine code, e.g. RES_NOT_FOUND")
    message: str
    details: dict[str, Any] | None = None


class ApiResponse(BaseModel, Generic[PayloadT]):
    """Success envelope around a note, a list of notes or a board snapshot."""

    model_config = ConfigDict(from_attributes=True)

    success: bool = True
    data: PayloadT | None = None
    error: ErrorDetail | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class ErrorResponse(BaseModel):
    """Error envelope; ``data`` is always null."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)
