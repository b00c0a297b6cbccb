from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ProxyError(Exception):
    """Base error; rendered as {"error": message} with ``status_code``."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFieldsError(ProxyError):
    """A required request field is absent or empty. Raised before any external call."""
    status_code = 400


class BlobNotFoundError(ProxyError):
    status_code = 404


class UpstreamError(ProxyError):
    """Anything raised by the storage or database client, message kept verbatim."""
    status_code = 500


INVALID_BODY_MESSAGE = "Request body must be a JSON object with string fields"


async def _proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProxyError, _proxy_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
