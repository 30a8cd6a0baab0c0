"""Map domain exceptions to structured HTTP error responses."""

import logging

import falcon
import falcon.asgi

from pdfvault.domain.exceptions import (
    DocumentConflict,
    NotFound,
    PayloadTooLarge,
    PdfVaultError,
    RangeNotSatisfiable,
    StoreUnavailable,
    StreamFailure,
    UnsupportedMediaType,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[PdfVaultError], str], ...] = (
    (NotFound, falcon.HTTP_404),
    (ValidationError, falcon.HTTP_400),
    (UnsupportedMediaType, falcon.HTTP_400),
    (DocumentConflict, falcon.HTTP_409),
    (PayloadTooLarge, falcon.HTTP_413),
    (RangeNotSatisfiable, falcon.HTTP_416),
    (StoreUnavailable, falcon.HTTP_500),
    (StreamFailure, falcon.HTTP_500),
)


def status_for(ex: PdfVaultError) -> str:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(ex, error_type):
            return status
    return falcon.HTTP_500


def error_body(code: str, message: str) -> dict:
    return {"error": message, "code": code}


async def handle_domain_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: PdfVaultError,
    params: dict,
) -> None:
    """Falcon error handler for PdfVaultError."""
    status = status_for(ex)
    if status == falcon.HTTP_500:
        logger.error("%s %s failed: %s", req.method, req.path, ex, exc_info=ex)
    else:
        logger.info("%s %s -> %s (%s)", req.method, req.path, status, ex.code)
    resp.status = status
    resp.media = error_body(ex.code, str(ex))
    if isinstance(ex, RangeNotSatisfiable) and ex.size is not None:
        resp.set_header("Content-Range", f"bytes */{ex.size}")


async def handle_unexpected_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: Exception,
    params: dict,
) -> None:
    """Last-resort handler: log the traceback, answer with a 500 payload."""
    logger.exception("Unhandled error in %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = error_body("internal_error", "Internal server error")
