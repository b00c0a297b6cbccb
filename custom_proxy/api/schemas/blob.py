from datetime import datetime
from typing import ClassVar, Optional

from pydantic import Field

from custom_proxy.api.schemas.common import ProxyRequest, ProxyResponse

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class BlobListRequest(ProxyRequest):
    connection_string: Optional[str] = Field(None, alias="connectionString")
    container_name: Optional[str] = Field(None, alias="containerName")
    prefix: Optional[str] = None

    required_fields: ClassVar[tuple] = ("connection_string", "container_name")
    missing_message: ClassVar[str] = (
        "Please provide connectionString and containerName in the request body"
    )


class BlobListEntry(ProxyResponse):
    name: str
    content_length: Optional[int] = Field(None, alias="contentLength")
    content_type: Optional[str] = Field(None, alias="contentType")
    last_modified: Optional[datetime] = Field(None, alias="lastModified")


class BlobDownloadRequest(ProxyRequest):
    connection_string: Optional[str] = Field(None, alias="connectionString")
    container_name: Optional[str] = Field(None, alias="containerName")
    blob_name: Optional[str] = Field(None, alias="blobName")

    required_fields: ClassVar[tuple] = ("connection_string", "container_name", "blob_name")
    missing_message: ClassVar[str] = (
        "Please provide connectionString, containerName, and blobName in the request body"
    )


class BlobDownloadResult(ProxyResponse):
    name: str
    content_type: Optional[str] = Field(None, alias="contentType")
    content_length: Optional[int] = Field(None, alias="contentLength")
    content: str


class BlobUploadRequest(ProxyRequest):
    connection_string: Optional[str] = Field(None, alias="connectionString")
    container_name: Optional[str] = Field(None, alias="containerName")
    blob_name: Optional[str] = Field(None, alias="blobName")
    content: Optional[str] = None
    content_type: Optional[str] = Field(None, alias="contentType")

    required_fields: ClassVar[tuple] = (
        "connection_string",
        "container_name",
        "blob_name",
        "content",
    )
    missing_message: ClassVar[str] = (
        "Please provide connectionString, containerName, blobName, "
        "and content (base64) in the request body"
    )


class BlobUploadResult(ProxyResponse):
    name: str
    size: int
    url: str
