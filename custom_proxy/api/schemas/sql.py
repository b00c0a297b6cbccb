from typing import ClassVar, Optional

from pydantic import Field

from custom_proxy.api.schemas.common import ProxyRequest


class SqlQueryRequest(ProxyRequest):
    connection_string: Optional[str] = Field(None, alias="connectionString")
    query: Optional[str] = None

    required_fields: ClassVar[tuple] = ("connection_string", "query")
    missing_message: ClassVar[str] = (
        "Please provide connectionString and query in the request body"
    )
