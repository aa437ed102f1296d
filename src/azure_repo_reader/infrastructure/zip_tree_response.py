"""Zip archive adapter — implements the TreeResponseFactory port."""

from __future__ import annotations

import io
import logging
import tempfile
import zipfile
from pathlib import Path
from typing import IO, AsyncIterator

from azure_repo_reader.domain.entities import TreeFile, TreeFilter
from azure_repo_reader.domain.exceptions import FetchError

logger = logging.getLogger(__name__)

_MAX_MEMORY_SIZE = 16 * 1024 * 1024


class ZipArchiveResponse:
    """Tree handle over a zip archive held in memory or a spooled file.

    Nothing is decompressed until one of :meth:`files`, :meth:`archive` or
    :meth:`dir` is called.
    """

    def __init__(self, data: bytes | IO[bytes], filter: TreeFilter | None = None) -> None:
        self._file = io.BytesIO(data) if isinstance(data, bytes) else data
        self._filter = filter

    def _entries(self, zf: zipfile.ZipFile) -> list[zipfile.ZipInfo]:
        return [
            info
            for info in zf.infolist()
            if not info.is_dir() and (self._filter is None or self._filter(info.filename))
        ]

    def _open(self) -> zipfile.ZipFile:
        try:
            return zipfile.ZipFile(self._file)
        except zipfile.BadZipFile as exc:
            raise FetchError(
                f"Tree response is not a valid zip archive: {exc}"
            ) from exc

    def files(self) -> list[TreeFile]:
        with self._open() as zf:
            return [TreeFile(path=info.filename, content=zf.read(info)) for info in self._entries(zf)]

    def archive(self) -> bytes:
        buf = io.BytesIO()
        with self._open() as src, zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as dst:
            for info in self._entries(src):
                dst.writestr(info, src.read(info))
        return buf.getvalue()

    def dir(self, target_dir: Path | None = None) -> Path:
        target = Path(target_dir) if target_dir else Path(tempfile.mkdtemp(prefix="azure-tree-"))
        root = target.resolve()
        with self._open() as zf:
            entries = self._entries(zf)
            for info in entries:
                dest = (root / info.filename).resolve()
                if not dest.is_relative_to(root):
                    raise FetchError(
                        f"Archive entry '{info.filename}' escapes {root}"
                    )
                dest.parent.mkdir(parents=True, exist_ok=True)
                dest.write_bytes(zf.read(info))
        logger.debug("Extracted %d files to %s", len(entries), root)
        return root


class ZipArchiveTreeResponseFactory:
    """Spools an archive stream and wraps it in a :class:`ZipArchiveResponse`.

    Archives larger than *max_memory_size* bytes roll over to a temporary file.
    """

    def __init__(self, max_memory_size: int = _MAX_MEMORY_SIZE) -> None:
        self._max_memory_size = max_memory_size

    async def from_zip_archive(
        self, stream: AsyncIterator[bytes], filter: TreeFilter | None = None
    ) -> ZipArchiveResponse:
        spool = tempfile.SpooledTemporaryFile(max_size=self._max_memory_size)
        size = 0
        async for chunk in stream:
            spool.write(chunk)
            size += len(chunk)
        spool.seek(0)
        logger.debug("Spooled %d byte archive", size)
        return ZipArchiveResponse(spool, filter=filter)
