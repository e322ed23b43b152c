"""
Unified Error Handling Middleware for FastAPI.

Provides:
- Consistent JSON error responses for unhandled exceptions
- Error logging with request context
- Request ID tracking
"""

import logging
import traceback
import uuid
from typing import Callable, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ..utils.logging import RequestContext

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches all unhandled exceptions and returns
    consistent JSON error responses.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and handle any errors."""
        request_id = (
            getattr(request.state, "request_id", None)
            or RequestContext.get_request_id()
            or str(uuid.uuid4())[:8]
        )

        try:
            return await call_next(request)

        except HTTPException:
            # Let HTTP exceptions pass through to FastAPI's handler
            raise

        except Exception as e:
            logger.error(
                f"Unhandled exception [{request_id}]: {type(e).__name__}: {e}",
                exc_info=True,
                extra={"path": request.url.path, "method": request.method},
            )
            return JSONResponse(
                status_code=500,
                content=get_error_response(e, request_id, expose_message=False),
            )


def get_error_response(
    error: Exception,
    request_id: Optional[str] = None,
    include_traceback: bool = False,
    expose_message: bool = True,
) -> dict:
    """
    Build a standard error response dict.

    Args:
        error: The exception that occurred
        request_id: Optional request ID for tracking
        include_traceback: Whether to include full traceback (dev only)
        expose_message: Whether the exception text may be shown to the caller

    Returns:
        Error response dictionary
    """
    response = {
        "error": {
            "message": str(error) if expose_message else "Internal server error",
        },
    }

    if request_id:
        response["request_id"] = request_id

    if include_traceback:
        response["error"]["type"] = type(error).__name__
        response["error"]["traceback"] = traceback.format_exc()

    return response
