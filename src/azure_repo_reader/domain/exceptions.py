"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RepoReaderError(Exception):
    """Base exception for the entire application."""


# ── Configuration ───────────────────────────────────────────────────────────


class InvalidConfigurationError(RepoReaderError):
    """An integration config entry is malformed."""


class UnsupportedHostError(RepoReaderError):
    """A reader was constructed for a host it cannot talk to."""

    def __init__(self, host: str) -> None:
        super().__init__(
            "Azure integration currently only supports 'dev.azure.com', "
            f"tried to use host '{host}'"
        )
        self.host = host


# ── Input validation ────────────────────────────────────────────────────────


class InvalidAzureUrlError(RepoReaderError):
    """The supplied URL is not a usable Azure DevOps repository URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Incorrect url: {url}, {reason}")
        self.url = url
        self.reason = reason


class NotAllowedError(RepoReaderError):
    """No registered reader accepts the URL."""


# ── Remote errors ───────────────────────────────────────────────────────────


class FetchError(RepoReaderError):
    """The remote request failed (transport error or non-success status)."""

    def __init__(
        self,
        message: str,
        *,
        url: str = "",
        derived_url: str = "",
        status_code: int | None = None,
        status_text: str = "",
    ) -> None:
        super().__init__(message)
        self.url = url
        self.derived_url = derived_url
        self.status_code = status_code
        self.status_text = status_text


class NotFoundError(FetchError):
    """The remote item does not exist (404)."""
