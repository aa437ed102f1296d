"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging

import httpx

from azure_repo_reader.infrastructure.azure_url_reader import AzureUrlReader
from azure_repo_reader.infrastructure.config import (
    get_settings,
    read_azure_integration_configs,
)
from azure_repo_reader.infrastructure.zip_tree_response import ZipArchiveTreeResponseFactory
from azure_repo_reader.services.url_reader_mux import UrlReaderPredicateMux

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None
_url_reader: UrlReaderPredicateMux | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _url_reader  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))

    configs = read_azure_integration_configs(settings.integrations_azure)
    mux = UrlReaderPredicateMux()
    for registration in AzureUrlReader.factory(
        configs,
        client=_http_client,
        tree_response_factory=ZipArchiveTreeResponseFactory(),
    ):
        mux.register(registration)
    _url_reader = mux
    logger.info("Registered readers: %s", ", ".join(mux.readers))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _url_reader  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _url_reader = None


def get_url_reader() -> UrlReaderPredicateMux:
    """Return the reader multiplexer built at startup."""
    assert _url_reader is not None, "startup() was not called"
    return _url_reader
