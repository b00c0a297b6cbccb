import base64
import logging
import math
from collections import Counter
from decimal import Decimal
from typing import Any, Callable, Dict, List, Union

from fastapi.encoders import jsonable_encoder
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.pool import NullPool

from custom_proxy.config import SQL_ODBC_DRIVER

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
SqlRunner = Callable[[str, str], List[Row]]


class DuplicateColumnError(ValueError):
    pass


def to_sqlalchemy_url(connection_string: str) -> Union[str, URL]:
    """
    Accept either a SQLAlchemy URL or an ADO.NET/ODBC ``Key=Value;`` string.
    The latter is routed through mssql+pyodbc with a default driver when none is named.
    """
    value = connection_string.strip()
    if "://" in value:
        return value
    keys = {part.split("=", 1)[0].strip().lower() for part in value.split(";") if "=" in part}
    if "driver" not in keys:
        value = f"Driver={{{SQL_ODBC_DRIVER}}};{value}"
    return URL.create("mssql+pyodbc", query={"odbc_connect": value})


def get_engine(connection_string: str) -> Engine:
    # NullPool: every invocation opens and closes its own connection
    return create_engine(
        to_sqlalchemy_url(connection_string),
        poolclass=NullPool,
        future=True,
    )


def run_sql(engine: Engine, sql: str) -> List[Row]:
    """Execute ``sql`` verbatim and return list of dict rows ([] for statements without a result set)."""
    with engine.begin() as conn:
        result = conn.exec_driver_sql(sql)
        if not result.returns_rows:
            return []
        columns = list(result.keys())
        dupes = [name for name, count in Counter(columns).items() if count > 1]
        if dupes:
            raise DuplicateColumnError(
                f"Result set has duplicate column names: {', '.join(repr(d) for d in dupes)}"
            )
        rows = [dict(zip(columns, r)) for r in result]
    return rows


def run_query(connection_string: str, sql: str) -> List[Row]:
    engine = get_engine(connection_string)
    try:
        rows = run_sql(engine, sql)
    finally:
        engine.dispose()
    logger.debug("Query returned %d rows", len(rows))
    return rows


def _b64(value: Union[bytes, bytearray, memoryview]) -> str:
    return base64.b64encode(bytes(value)).decode("ascii")


def _decimal(value: Decimal) -> Union[int, str]:
    # integral values stay numbers; fractional ones keep every digit as text
    if value.is_finite() and value == value.to_integral_value():
        return int(value)
    return str(value)


def _float(value: float) -> Union[float, str]:
    # strict JSON has no NaN/Infinity literals
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return value


def encode_rows(rows: List[Row]) -> List[Row]:
    """Make driver values JSON-safe; binary columns become base64 text."""
    return jsonable_encoder(
        rows,
        custom_encoder={
            bytes: _b64,
            bytearray: _b64,
            memoryview: _b64,
            Decimal: _decimal,
            float: _float,
        },
    )
