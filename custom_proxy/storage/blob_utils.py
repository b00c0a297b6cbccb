"""
Thin wrapper over azure-storage-blob used by the blob proxy endpoints.

One ``AzureBlobStore`` is opened per request from the caller's connection
string and closed when the request is done.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, ContextManager, List, Optional

from azure.storage.blob import BlobServiceClient, ContentSettings

logger = logging.getLogger(__name__)


@dataclass
class BlobEntry:
    name: str
    content_length: Optional[int]
    content_type: Optional[str]
    last_modified: Optional[datetime]


@dataclass
class DownloadedBlob:
    name: str
    content: bytes
    content_type: Optional[str]
    content_length: Optional[int]


class AzureBlobStore:
    def __init__(self, connection_string: str):
        self._service = BlobServiceClient.from_connection_string(connection_string)

    def __enter__(self) -> "AzureBlobStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._service.close()

    def list_blobs(self, container: str, prefix: str = "") -> List[BlobEntry]:
        """Return every blob whose name starts with ``prefix``, in service order."""
        container_client = self._service.get_container_client(container)
        entries = []
        for props in container_client.list_blobs(name_starts_with=prefix or None):
            settings = props.content_settings
            entries.append(
                BlobEntry(
                    name=props.name,
                    content_length=props.size,
                    content_type=settings.content_type if settings else None,
                    last_modified=props.last_modified,
                )
            )
        logger.debug("Listed %d blobs in '%s' (prefix=%r)", len(entries), container, prefix)
        return entries

    def exists(self, container: str, blob_name: str) -> bool:
        return self._service.get_blob_client(container, blob_name).exists()

    def download(self, container: str, blob_name: str) -> DownloadedBlob:
        """Read the whole blob into memory."""
        downloader = self._service.get_blob_client(container, blob_name).download_blob()
        data = downloader.readall()
        props = downloader.properties
        settings = props.content_settings
        return DownloadedBlob(
            name=blob_name,
            content=data,
            content_type=settings.content_type if settings else None,
            content_length=props.size,
        )

    def upload(self, container: str, blob_name: str, data: bytes, content_type: str) -> str:
        """Write ``data``, replacing any existing blob. Returns the blob URL."""
        blob_client = self._service.get_blob_client(container, blob_name)
        blob_client.upload_blob(
            data,
            overwrite=True,
            content_settings=ContentSettings(content_type=content_type),
        )
        return blob_client.url


BlobStoreFactory = Callable[[str], ContextManager[AzureBlobStore]]
