"""Azure DevOps REST API adapter — implements the UrlReader port."""

from __future__ import annotations

import base64
import logging
from urllib.parse import urlsplit

import httpx

from azure_repo_reader.domain.entities import (
    AzureIntegrationConfig,
    ReaderPredicateTuple,
    ReadTreeOptions,
)
from azure_repo_reader.domain.exceptions import (
    FetchError,
    NotFoundError,
    UnsupportedHostError,
)
from azure_repo_reader.domain.ports.url_reader import ReadTreeResponse, TreeResponseFactory
from azure_repo_reader.domain.value_objects import AZURE_HOST, AzureRepoUrl

logger = logging.getLogger(__name__)

# private content with a bad or missing PAT comes back as a 203 sign-in page
_SIGN_IN_REDIRECT = 203


def url_host(url: str) -> str | None:
    """Return ``host[:port]`` of *url*, or ``None`` if it cannot be parsed."""
    try:
        netloc = urlsplit(url).netloc
    except ValueError:
        return None
    return netloc.rsplit("@", 1)[-1] or None


class AzureUrlReader:
    """Concrete UrlReader backed by the Azure DevOps Git items API."""

    def __init__(
        self,
        config: AzureIntegrationConfig,
        client: httpx.AsyncClient,
        tree_response_factory: TreeResponseFactory,
    ) -> None:
        if config.host != AZURE_HOST:
            raise UnsupportedHostError(config.host)
        self._config = config
        self._client = client
        self._tree_response_factory = tree_response_factory

    @classmethod
    def factory(
        cls,
        configs: list[AzureIntegrationConfig],
        *,
        client: httpx.AsyncClient,
        tree_response_factory: TreeResponseFactory,
    ) -> list[ReaderPredicateTuple]:
        """Build one reader per config, each selected by an exact host match."""
        tuples = []
        for config in configs:
            reader = cls(config, client, tree_response_factory)

            def predicate(url: str, host: str = config.host) -> bool:
                return url_host(url) == host

            tuples.append(ReaderPredicateTuple(reader=reader, predicate=predicate))
        return tuples

    async def read(self, url: str) -> bytes:
        """GET …/_apis/git/repositories/{repo}/items?path=…&version=… → raw bytes."""
        built_url = AzureRepoUrl.from_string(url).to_item_url()
        resp = await self._send(url, built_url)

        if resp.is_success and resp.status_code != _SIGN_IN_REDIRECT:
            return resp.content

        message = (
            f"{url} could not be read as {built_url}, "
            f"{resp.status_code} {resp.reason_phrase}"
        )
        raise self._status_error(message, url, built_url, resp)

    async def read_tree(
        self, url: str, options: ReadTreeOptions | None = None
    ) -> ReadTreeResponse:
        """GET …/items?recursionLevel=full&download=true → zip tree handle.

        The archive body is streamed into the tree response factory; the
        response is closed once the factory returns.
        """
        download_url = AzureRepoUrl.from_string(url).to_download_url()
        resp = await self._send(
            url, download_url, {"Accept": "application/zip"}, stream=True
        )
        try:
            if not resp.is_success:
                await resp.aread()
                message = (
                    f"Failed to read tree from {url} as {download_url}, "
                    f"{resp.status_code} {resp.reason_phrase}"
                )
                raise self._status_error(message, url, download_url, resp)

            try:
                return await self._tree_response_factory.from_zip_archive(
                    resp.aiter_bytes(),
                    filter=options.filter if options else None,
                )
            except httpx.HTTPError as exc:
                raise FetchError(
                    f"Failed to read tree from {url}, {exc}",
                    url=url,
                    derived_url=download_url,
                ) from exc
        finally:
            await resp.aclose()

    async def _send(
        self,
        url: str,
        built_url: str,
        additional_headers: dict[str, str] | None = None,
        *,
        stream: bool = False,
    ) -> httpx.Response:
        """Perform an authenticated GET, wrapping transport errors."""
        headers = dict(additional_headers or {})
        if self._config.token:
            credentials = base64.b64encode(f":{self._config.token}".encode()).decode("ascii")
            headers["Authorization"] = f"Basic {credentials}"

        logger.debug("GET %s (from %s)", built_url, url)
        request = self._client.build_request("GET", built_url, headers=headers)
        try:
            return await self._client.send(request, stream=stream)
        except httpx.HTTPError as exc:
            raise FetchError(
                f"Unable to read {url}, {exc}", url=url, derived_url=built_url
            ) from exc

    @staticmethod
    def _status_error(
        message: str, url: str, built_url: str, resp: httpx.Response
    ) -> FetchError:
        logger.warning(message)
        error_cls = NotFoundError if resp.status_code == 404 else FetchError
        return error_cls(
            message,
            url=url,
            derived_url=built_url,
            status_code=resp.status_code,
            status_text=resp.reason_phrase,
        )

    def __str__(self) -> str:
        return f"azure{{host={self._config.host},authed={bool(self._config.token)}}}"
