from __future__ import annotations

import io
import zipfile

import httpx
import pytest
import pytest_asyncio

from azure_repo_reader.domain.entities import AzureIntegrationConfig
from azure_repo_reader.infrastructure.azure_url_reader import AzureUrlReader
from azure_repo_reader.infrastructure.zip_tree_response import ZipArchiveTreeResponseFactory


def make_zip(files: dict[str, bytes], dirs: tuple[str, ...] = ()) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for d in dirs:
            zf.writestr(d if d.endswith("/") else d + "/", b"")
        for path, content in files.items():
            zf.writestr(path, content)
    return buf.getvalue()


@pytest.fixture
def zip_bytes() -> bytes:
    return make_zip(
        {
            "README.md": b"# hello",
            "docs/index.md": b"index",
            "docs/guide/setup.md": b"setup",
        },
        dirs=("docs", "docs/guide"),
    )


@pytest_asyncio.fixture
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def tree_factory() -> ZipArchiveTreeResponseFactory:
    return ZipArchiveTreeResponseFactory()


@pytest.fixture
def reader(http_client, tree_factory) -> AzureUrlReader:
    return AzureUrlReader(
        AzureIntegrationConfig(host="dev.azure.com", token="my-pat"),
        http_client,
        tree_factory,
    )


@pytest.fixture
def anonymous_reader(http_client, tree_factory) -> AzureUrlReader:
    return AzureUrlReader(AzureIntegrationConfig(host="dev.azure.com"), http_client, tree_factory)
