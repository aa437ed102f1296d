"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qs, quote, urlsplit

from azure_repo_reader.domain.exceptions import InvalidAzureUrlError

AZURE_HOST = "dev.azure.com"
API_VERSION = "6.0"

_GIT_KEYWORD = "_git"
# version=GB<branch> | GC<commit> | GT<tag>
_REF_PREFIX_LEN = 2
# characters encodeURIComponent leaves alone beyond quote()'s defaults
_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True, slots=True)
class AzureRepoUrl:
    """Parsed Azure DevOps repository URL.

    Understands the browser form
    ``https://dev.azure.com/{org}/{project}/_git/{repo}?path=...&version=GB{ref}``.
    ``path`` keeps the leading slash as written; ``ref`` has the two-character
    version type prefix removed and is ``None`` when no ``version`` is given.
    """

    protocol: str
    host: str
    organization: str
    project: str
    repo: str
    keyword: str
    path: str
    ref: str | None
    raw: str

    @classmethod
    def from_string(cls, url: str) -> AzureRepoUrl:
        """Split a URL into its parts without checking completeness."""
        try:
            parts = urlsplit(url.strip())
            host = parts.netloc
        except ValueError as exc:
            raise InvalidAzureUrlError(url, str(exc)) from exc
        if not parts.scheme or not host:
            raise InvalidAzureUrlError(url, "not an absolute URL")

        segments = parts.path.split("/")
        # pad so that missing trailing segments compare as empty
        segments += [""] * (5 - len(segments))
        empty, organization, project, keyword, repo = segments[:5]
        if empty != "":
            raise InvalidAzureUrlError(url, "path must be absolute")

        query = parse_qs(parts.query, keep_blank_values=True)
        path = query.get("path", [""])[0]
        version = query.get("version", [None])[0]
        ref = version[_REF_PREFIX_LEN:] if version is not None else None

        return cls(
            protocol=parts.scheme,
            host=host,
            organization=organization,
            project=project,
            repo=repo,
            keyword=keyword,
            path=path,
            ref=ref,
            raw=url,
        )

    @property
    def hostname(self) -> str:
        """Host without userinfo or port, lower-cased."""
        return self.host.rsplit("@", 1)[-1].split(":", 1)[0].lower()

    def _api_base(self, protocol: str, host: str) -> str:
        return (
            f"{protocol}://{host}/{self.organization}/{self.project}"
            f"/_apis/git/repositories/{self.repo}/items"
        )

    def to_item_url(self) -> str:
        """Build the single-item API URL.

        Converts
        ``https://dev.azure.com/{org}/{project}/_git/{repo}?path={path}&version=GB{ref}``
        to
        ``https://dev.azure.com/{org}/{project}/_apis/git/repositories/{repo}/items?path={path}&version={ref}``.
        """
        if (
            self.hostname != AZURE_HOST
            or not self.organization
            or not self.project
            or self.keyword != _GIT_KEYWORD
            or not self.repo
            or not self.path
            or self.ref == ""
        ):
            raise InvalidAzureUrlError(self.raw, "Wrong Azure Devops URL or Invalid file path")

        query = [f"path={quote(self.path, safe='/')}"]
        if self.ref:
            query.append(f"version={quote(self.ref, safe='/')}")
        return f"{self._api_base('https', self.hostname)}?{'&'.join(query)}"

    def to_download_url(self) -> str:
        """Build the zip download API URL for the whole tree.

        ``scopePath`` limits the downloaded content: ``/docs`` only downloads
        the docs folder and everything below it, ``/docs/index.md`` only
        downloads index.md but puts it at the root of the archive.
        """
        if not self.organization or not self.project or not self.repo:
            raise InvalidAzureUrlError(self.raw, "missing organization, project or repository")

        url = (
            f"{self._api_base(self.protocol, self.host)}"
            f"?recursionLevel=full&download=true&api-version={API_VERSION}"
        )
        scope = self.path.lstrip("/")
        if scope:
            url += f"&scopePath={quote(scope, safe=_URI_COMPONENT_SAFE)}"
        return url
