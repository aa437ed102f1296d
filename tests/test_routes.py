import pytest
from fastapi.testclient import TestClient

from azure_repo_reader.domain.entities import ReaderPredicateTuple, TreeFile
from azure_repo_reader.domain.exceptions import (
    FetchError,
    InvalidAzureUrlError,
    NotFoundError,
)
from azure_repo_reader.interface.app import create_app
from azure_repo_reader.interface.dependencies import get_url_reader
from azure_repo_reader.services.url_reader_mux import UrlReaderPredicateMux

AZURE_URL = "https://dev.azure.com/org/project/_git/repo?path=/a.md&version=GBmain"


class StubTree:
    def __init__(self, files, filter=None):
        self._files = files
        self._filter = filter

    def files(self):
        return [f for f in self._files if self._filter is None or self._filter(f.path)]


class StubReader:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error

    async def read(self, url):
        if self.error:
            raise self.error
        return b"file-bytes"

    async def read_tree(self, url, options=None):
        if self.error:
            raise self.error
        return StubTree(
            [TreeFile("README.md", b"hi"), TreeFile("docs/index.md", b"index")],
            filter=options.filter if options else None,
        )

    def __str__(self) -> str:
        return "azure{host=dev.azure.com,authed=True}"


def _client(reader: StubReader) -> TestClient:
    mux = UrlReaderPredicateMux()
    mux.register(
        ReaderPredicateTuple(
            reader=reader, predicate=lambda url: url.startswith("https://dev.azure.com/")
        )
    )
    app = create_app()
    app.dependency_overrides[get_url_reader] = lambda: mux
    return TestClient(app)


def test_health():
    assert _client(StubReader()).get("/health").json() == {"status": "ok"}


def test_read_returns_raw_bytes():
    resp = _client(StubReader()).get("/read", params={"url": AZURE_URL})

    assert resp.status_code == 200
    assert resp.content == b"file-bytes"
    assert resp.headers["content-type"] == "application/octet-stream"


def test_read_tree_lists_files():
    resp = _client(StubReader()).get("/read-tree", params={"url": AZURE_URL})

    assert resp.status_code == 200
    assert resp.json() == {
        "files": [
            {"path": "README.md", "size": 2},
            {"path": "docs/index.md", "size": 5},
        ]
    }


def test_read_tree_prefix_filters_files():
    resp = _client(StubReader()).get(
        "/read-tree", params={"url": AZURE_URL, "prefix": "docs/"}
    )

    assert [f["path"] for f in resp.json()["files"]] == ["docs/index.md"]


def test_readers_are_listed():
    resp = _client(StubReader()).get("/readers")

    assert resp.json() == {"readers": ["azure{host=dev.azure.com,authed=True}"]}


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (InvalidAzureUrlError(AZURE_URL, "bad"), 422),
        (NotFoundError("gone", url=AZURE_URL, derived_url="x", status_code=404), 404),
        (FetchError("boom", url=AZURE_URL, derived_url="x", status_code=203), 502),
    ],
)
def test_domain_errors_map_to_status(error, status):
    resp = _client(StubReader(error)).get("/read", params={"url": AZURE_URL})

    assert resp.status_code == status
    assert resp.json() == {"status": "error", "message": str(error)}


def test_unconfigured_host_is_forbidden():
    resp = _client(StubReader()).get("/read", params={"url": "https://github.com/o/r"})

    assert resp.status_code == 403
    assert resp.json()["status"] == "error"


def test_missing_url_is_validation_error():
    resp = _client(StubReader()).get("/read")

    assert resp.status_code == 422
    assert resp.json()["status"] == "error"
