"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from azure_repo_reader.domain.exceptions import (
    FetchError,
    InvalidAzureUrlError,
    NotAllowedError,
    NotFoundError,
    RepoReaderError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[RepoReaderError], int]] = [
    (InvalidAzureUrlError, 422),
    (NotAllowedError, 403),
    (NotFoundError, 404),
    (FetchError, 502),
]


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    def _make_handler(status_code: int):  # type: ignore[no-untyped-def]
        async def handler(request: Request, exc: Exception) -> JSONResponse:
            if isinstance(exc, FetchError) and exc.status_code is not None:
                logger.warning(
                    "%s for %s: upstream %s %s",
                    type(exc).__name__,
                    exc.derived_url,
                    exc.status_code,
                    exc.status_text,
                )
            else:
                logger.warning("%s: %s", type(exc).__name__, exc)
            return _error_json(status_code, str(exc))

        return handler

    for exc_type, code in _EXCEPTION_STATUS:
        app.add_exception_handler(exc_type, _make_handler(code))
    app.add_exception_handler(RepoReaderError, _make_handler(500))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        ]
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception while reading %s", request.url)
        return _error_json(500, "An unexpected error occurred. Please try again later.")
