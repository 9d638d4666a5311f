import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

logger = logging.getLogger(__name__)


class BlogAPIError(Exception):
    """Base class for errors that map onto an HTTP status."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class ValidationError(BlogAPIError):
    """Malformed client input: bad pagination, missing field or parameter."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class NotFoundError(BlogAPIError):
    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class DataAccessError(BlogAPIError):
    """A query or connection failure. `message` is the driver's text."""

    def __init__(self, message: str) -> None:
        super().__init__("Internal Server Error", HTTP_500_INTERNAL_SERVER_ERROR)
        self.message = message


async def blog_api_error_handler(request: Request, exc: BlogAPIError) -> JSONResponse:
    if isinstance(exc, DataAccessError):
        logger.error(f"Data access failure on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.status_code} on {request.url.path}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
