import base64
import binascii
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from custom_proxy.api.deps import get_blob_store_factory
from custom_proxy.api.errors import BlobNotFoundError, UpstreamError
from custom_proxy.api.schemas.blob import (
    DEFAULT_CONTENT_TYPE,
    BlobDownloadRequest,
    BlobDownloadResult,
    BlobListEntry,
    BlobListRequest,
    BlobUploadRequest,
    BlobUploadResult,
)
from custom_proxy.storage.blob_utils import BlobStoreFactory

logger = logging.getLogger(__name__)

router = APIRouter()


def _decode_base64(content: str) -> bytes:
    """Strict decode; whitespace is tolerated, anything else outside the alphabet is not."""
    try:
        return base64.b64decode("".join(content.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning("Rejected upload with malformed base64 content: %s", e)
        raise UpstreamError(f"The input is not a valid Base-64 string: {e}") from e


@router.post("/list", response_model=List[BlobListEntry])
def list_blobs(
    req: Optional[BlobListRequest] = None,
    open_store: BlobStoreFactory = Depends(get_blob_store_factory),
):
    logger.info("Blob list proxy processed a request")
    req = BlobListRequest.require(req)

    try:
        with open_store(req.connection_string) as store:
            entries = store.list_blobs(req.container_name, req.prefix or "")
    except Exception as e:
        logger.exception("Error listing blobs in container '%s'", req.container_name)
        raise UpstreamError(str(e)) from e

    return [
        BlobListEntry(
            name=e.name,
            content_length=e.content_length,
            content_type=e.content_type,
            last_modified=e.last_modified,
        )
        for e in entries
    ]


@router.post("/download", response_model=BlobDownloadResult)
def download_blob(
    req: Optional[BlobDownloadRequest] = None,
    open_store: BlobStoreFactory = Depends(get_blob_store_factory),
):
    logger.info("Blob download proxy processed a request")
    req = BlobDownloadRequest.require(req)

    try:
        with open_store(req.connection_string) as store:
            blob = None
            if store.exists(req.container_name, req.blob_name):
                blob = store.download(req.container_name, req.blob_name)
    except Exception as e:
        logger.exception("Error downloading blob '%s'", req.blob_name)
        raise UpstreamError(str(e)) from e

    if blob is None:
        raise BlobNotFoundError(
            f"Blob '{req.blob_name}' not found in container '{req.container_name}'"
        )

    # whole blob is returned inline; large blobs are not handled
    return BlobDownloadResult(
        name=req.blob_name,
        content_type=blob.content_type,
        content_length=blob.content_length,
        content=base64.b64encode(blob.content).decode("ascii"),
    )


@router.post("/upload", response_model=BlobUploadResult)
def upload_blob(
    req: Optional[BlobUploadRequest] = None,
    open_store: BlobStoreFactory = Depends(get_blob_store_factory),
):
    logger.info("Blob upload proxy processed a request")
    req = BlobUploadRequest.require(req)

    data = _decode_base64(req.content)
    content_type = req.content_type if req.content_type is not None else DEFAULT_CONTENT_TYPE

    try:
        with open_store(req.connection_string) as store:
            url = store.upload(req.container_name, req.blob_name, data, content_type)
    except Exception as e:
        logger.exception("Error uploading blob '%s'", req.blob_name)
        raise UpstreamError(str(e)) from e

    return BlobUploadResult(name=req.blob_name, size=len(data), url=url)
