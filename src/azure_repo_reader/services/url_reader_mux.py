"""URL reader multiplexer — routes each URL to the reader that accepts it.

The interface layer only ever talks to :class:`UrlReaderPredicateMux`; it
neither knows nor cares which concrete reader ends up serving a request.
"""

from __future__ import annotations

import logging

from azure_repo_reader.domain.entities import ReaderPredicateTuple, ReadTreeOptions
from azure_repo_reader.domain.exceptions import NotAllowedError
from azure_repo_reader.domain.ports.url_reader import ReadTreeResponse, UrlReader

logger = logging.getLogger(__name__)


class UrlReaderPredicateMux:
    """A :class:`UrlReader` that delegates to the first matching registration."""

    def __init__(self) -> None:
        self._readers: list[ReaderPredicateTuple] = []

    def register(self, registration: ReaderPredicateTuple) -> None:
        self._readers.append(registration)

    def _select(self, url: str) -> UrlReader:
        for registration in self._readers:
            if registration.predicate(url):
                logger.debug("Reading %s with %s", url, registration.reader)
                return registration.reader
        raise NotAllowedError(
            f"Reading from '{url}' is not allowed. "
            "You may need to configure an integration for the target host."
        )

    async def read(self, url: str) -> bytes:
        return await self._select(url).read(url)

    async def read_tree(
        self, url: str, options: ReadTreeOptions | None = None
    ) -> ReadTreeResponse:
        return await self._select(url).read_tree(url, options)

    @property
    def readers(self) -> list[str]:
        return [str(r.reader) for r in self._readers]

    def __str__(self) -> str:
        return f"predicateMux{{readers={','.join(self.readers)}}}"
