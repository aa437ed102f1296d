"""Pydantic response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel


class TreeFileEntry(BaseModel):
    path: str
    size: int


class ReadTreeResponseBody(BaseModel):
    """Successful response from ``GET /read-tree``."""

    files: list[TreeFileEntry]


class ReadersResponse(BaseModel):
    """Successful response from ``GET /readers``."""

    readers: list[str]


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
