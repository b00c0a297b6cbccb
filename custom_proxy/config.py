import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv


dotenv_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
API_ROUTE_PREFIX = os.getenv("API_ROUTE_PREFIX", "/api").rstrip("/")
SQL_ODBC_DRIVER = os.getenv("SQL_ODBC_DRIVER", "ODBC Driver 18 for SQL Server")


def _split_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


CORS_ALLOW_ORIGINS = _split_origins(os.getenv("CORS_ALLOW_ORIGINS", "*"))


def configure_logging() -> None:
    """Set up root logging once; the Functions host may already have handlers installed."""
    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(level)
    # the Azure SDK logs every HTTP round trip at INFO
    logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
