"""API routes — thin controllers that delegate to the URL reader."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from azure_repo_reader.domain.entities import ReadTreeOptions
from azure_repo_reader.interface.dependencies import get_url_reader
from azure_repo_reader.interface.schemas import (
    ErrorResponse,
    ReadersResponse,
    ReadTreeResponseBody,
    TreeFileEntry,
)
from azure_repo_reader.services.url_reader_mux import UrlReaderPredicateMux

router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    403: {"model": ErrorResponse, "description": "No integration configured for the URL's host"},
    404: {"model": ErrorResponse, "description": "File or repository not found"},
    422: {"model": ErrorResponse, "description": "Invalid Azure DevOps URL"},
    502: {"model": ErrorResponse, "description": "Azure DevOps request failed"},
}


@router.get("/read", response_class=Response, responses=_ERROR_RESPONSES)
async def read(
    url: str = Query(..., min_length=1),
    reader: UrlReaderPredicateMux = Depends(get_url_reader),
) -> Response:
    """Return the raw bytes of a single file."""
    data = await reader.read(url)
    return Response(content=data, media_type="application/octet-stream")


@router.get("/read-tree", response_model=ReadTreeResponseBody, responses=_ERROR_RESPONSES)
async def read_tree(
    url: str = Query(..., min_length=1),
    prefix: str | None = Query(None, description="Only keep files under this path"),
    reader: UrlReaderPredicateMux = Depends(get_url_reader),
) -> ReadTreeResponseBody:
    """List the files of a directory tree."""
    options = None
    if prefix:
        options = ReadTreeOptions(filter=lambda path: path.startswith(prefix))
    tree = await reader.read_tree(url, options)
    return ReadTreeResponseBody(
        files=[TreeFileEntry(path=f.path, size=f.size) for f in tree.files()]
    )


@router.get("/readers", response_model=ReadersResponse)
async def readers(
    reader: UrlReaderPredicateMux = Depends(get_url_reader),
) -> ReadersResponse:
    """Describe the registered readers (never their credentials)."""
    return ReadersResponse(readers=reader.readers)
