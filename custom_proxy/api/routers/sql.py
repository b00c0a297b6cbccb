import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from custom_proxy.api.deps import get_sql_runner
from custom_proxy.api.errors import UpstreamError
from custom_proxy.api.schemas.sql import SqlQueryRequest
from custom_proxy.db.db_utils import SqlRunner, encode_rows

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/SqlQueryProxy")
def sql_query(
    req: Optional[SqlQueryRequest] = None,
    run: SqlRunner = Depends(get_sql_runner),
):
    """
    Run the caller's query verbatim and return every row as a column -> value mapping.

    The query is neither parameterized nor restricted to reads; the endpoint is
    meant for trusted callers holding a function key.
    """
    logger.info("SQL query proxy processed a request")
    req = SqlQueryRequest.require(req)

    try:
        rows = encode_rows(run(req.connection_string, req.query))
    except Exception as e:
        logger.exception("Error executing SQL query")
        raise UpstreamError(str(e)) from e

    return JSONResponse(content=rows)
