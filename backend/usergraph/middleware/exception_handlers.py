"""JSON error envelope for failures outside GraphQL execution.

GraphQL operation errors are reported in the GraphQL response body. What
reaches these handlers is routing failures (unknown path, unsupported method
on ``/graphql``) and anything that escapes a route unhandled.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from usergraph.middleware.error_codes import ErrorCode, get_error_code

logger = logging.getLogger("usergraph.exception")


def error_envelope(request: Request, status_code: int, code: ErrorCode, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {
                "code": code.value,
                "message": message,
                "request_id": getattr(request.state, "request_id", None),
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors such as 404 for unknown paths and 405 for unsupported methods."""
    return error_envelope(request, exc.status_code, get_error_code(exc.status_code), str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception request_id=%s path=%s",
        getattr(request.state, "request_id", None),
        request.url.path,
    )
    return error_envelope(
        request,
        500,
        ErrorCode.INTERNAL_ERROR,
        "An unexpected error occurred. Please try again later.",
    )
