"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from azure_repo_reader.domain.ports.url_reader import UrlReader

TreeFilter = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class AzureIntegrationConfig:
    """Connection details for one Azure DevOps host."""

    host: str
    token: str | None = field(default=None, repr=False)


@dataclass(frozen=True, slots=True)
class ReadTreeOptions:
    """Options for a tree read.

    ``filter`` receives each file path relative to the archive root and
    returns ``True`` to keep it.
    """

    filter: TreeFilter | None = None


@dataclass(frozen=True, slots=True)
class TreeFile:
    """A single file extracted from a tree archive."""

    path: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True, slots=True)
class ReaderPredicateTuple:
    """A reader paired with the predicate deciding which URLs it serves."""

    reader: UrlReader
    predicate: Callable[[str], bool]
