import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from custom_proxy.config import API_ROUTE_PREFIX, configure_logging
from custom_proxy.db.db_utils import SqlRunner, run_query
from custom_proxy.storage.blob_utils import AzureBlobStore, BlobStoreFactory

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Nothing is shared between requests; only logging is set up here.
    """
    configure_logging()
    logger.info("Proxy API started; handlers mounted under '%s'", API_ROUTE_PREFIX or "/")
    yield
    logger.info("Proxy API stopped")


def get_blob_store_factory() -> BlobStoreFactory:
    """Callable that opens a store for a connection string. Overridden in tests."""
    return AzureBlobStore


def get_sql_runner() -> SqlRunner:
    """Callable that runs a query for a connection string. Overridden in tests."""
    return run_query
