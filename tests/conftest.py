from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from custom_proxy.api.deps import get_blob_store_factory, get_sql_runner
from custom_proxy.api.main import app
from custom_proxy.storage.blob_utils import BlobEntry, DownloadedBlob

CONNECTION_STRING = (
    "DefaultEndpointsProtocol=https;AccountName=devstore;"
    "AccountKey=a2V5;EndpointSuffix=core.windows.net"
)


class FakeBlobAccount:
    """
    In-memory storage account standing in for Azure.
    Every store opened from it shares the same blobs and call log.
    """

    def __init__(self):
        self.blobs: Dict[Tuple[str, str], Tuple[bytes, str, datetime]] = {}
        self.calls: List[str] = []
        self.opened: List[str] = []
        self.closed = 0
        self.error: Optional[Exception] = None

    def put(self, container: str, name: str, data: bytes, content_type: str = "text/plain"):
        stamp = datetime(2024, 5, 1, 12, 0, len(self.blobs) % 60, tzinfo=timezone.utc)
        self.blobs[(container, name)] = (data, content_type, stamp)

    def open(self, connection_string: str) -> "FakeBlobStore":
        self.opened.append(connection_string)
        return FakeBlobStore(self)


class FakeBlobStore:
    def __init__(self, account: FakeBlobAccount):
        self.account = account

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.account.closed += 1

    def _record(self, call: str):
        self.account.calls.append(call)
        if self.account.error is not None:
            raise self.account.error

    def list_blobs(self, container: str, prefix: str = "") -> List[BlobEntry]:
        self._record("list_blobs")
        return [
            BlobEntry(name=name, content_length=len(data), content_type=ctype, last_modified=stamp)
            for (c, name), (data, ctype, stamp) in sorted(self.account.blobs.items())
            if c == container and name.startswith(prefix)
        ]

    def exists(self, container: str, blob_name: str) -> bool:
        self._record("exists")
        return (container, blob_name) in self.account.blobs

    def download(self, container: str, blob_name: str) -> DownloadedBlob:
        self._record("download")
        data, ctype, _ = self.account.blobs[(container, blob_name)]
        return DownloadedBlob(name=blob_name, content=data, content_type=ctype, content_length=len(data))

    def upload(self, container: str, blob_name: str, data: bytes, content_type: str) -> str:
        self._record("upload")
        self.account.put(container, blob_name, data, content_type)
        return f"https://devstore.blob.core.windows.net/{container}/{blob_name}"


class CountingSqlRunner:
    def __init__(self, rows=None):
        self.rows = rows or []
        self.calls = []

    def __call__(self, connection_string: str, query: str):
        self.calls.append((connection_string, query))
        return self.rows


@pytest.fixture
def blob_account():
    return FakeBlobAccount()


@pytest.fixture
def client(blob_account):
    app.dependency_overrides[get_blob_store_factory] = lambda: blob_account.open
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sql_runner():
    runner = CountingSqlRunner()
    app.dependency_overrides[get_sql_runner] = lambda: runner
    yield runner
    app.dependency_overrides.pop(get_sql_runner, None)
