"""Port: URL reader — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator, Protocol

from azure_repo_reader.domain.entities import ReadTreeOptions, TreeFilter, TreeFile


class ReadTreeResponse(Protocol):
    """Handle on a downloaded tree; contents are materialised on demand."""

    def files(self) -> list[TreeFile]:
        """Return every accepted file with its content."""
        ...

    def archive(self) -> bytes:
        """Return the accepted files packed as a zip archive."""
        ...

    def dir(self, target_dir: Path | None = None) -> Path:
        """Extract the accepted files to a directory and return it."""
        ...


class TreeResponseFactory(Protocol):
    """Turns a raw archive stream into a :class:`ReadTreeResponse`.

    The stream is only readable until :meth:`from_zip_archive` returns, so
    implementations must consume it before then.
    """

    async def from_zip_archive(
        self, stream: AsyncIterator[bytes], filter: TreeFilter | None = None
    ) -> ReadTreeResponse:
        ...


class UrlReader(Protocol):
    """Abstract contract for reading content addressed by a URL."""

    async def read(self, url: str) -> bytes:
        """Return the raw bytes of a single file."""
        ...

    async def read_tree(
        self, url: str, options: ReadTreeOptions | None = None
    ) -> ReadTreeResponse:
        """Return a handle on a whole directory tree."""
        ...
