"""
Centralized error handling and request logging
Every error response is rendered as the {"error": ...} envelope and tagged with a trace ID.
"""

import json
import logging
import time
import traceback
import uuid
from datetime import datetime
from typing import Dict, Optional
from contextvars import ContextVar

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from users_api.models.user import ErrorResponse

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


def new_trace_id() -> str:
    return str(uuid.uuid4())[:8]


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the error envelope response"""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump()
    )


class StructuredLogger:
    """Structured error logging with request context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> str:
        """Log a structured error entry and return its trace ID"""
        trace_id = request_id_var.get('') or new_trace_id()

        log_entry = {
            "timestamp": datetime.utcnow().isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
        }

        if request:
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "client_ip": request.client.host if request.client else None,
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = extra_context

        logger.error(json.dumps(log_entry, default=str))
        return trace_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns a trace ID, logs every request and recovers from unhandled exceptions"""

    async def dispatch(self, request: Request, call_next):
        trace_id = new_trace_id()
        request_id_var.set(trace_id)
        request.state.trace_id = trace_id

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            response = await general_exception_handler(request, e)

        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Trace-ID"] = trace_id
        client = request.client.host if request.client else "-"
        logger.info(
            f"{client} {request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f}ms) [{trace_id}]"
        )
        return response


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP exceptions as error envelopes"""
    if exc.status_code >= 500:
        StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            include_traceback=False
        )
    else:
        logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")

    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures are client errors (400)"""
    details = "; ".join(
        f"{' -> '.join(str(loc) for loc in error.get('loc', []))}: {error.get('msg', 'invalid value')}"
        for error in exc.errors()
    )
    logger.warning(f"Request validation failed on {request.method} {request.url.path}: {details}")
    return error_response(400, f"failed to parse the request, {details}")


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internal details"""
    StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        include_traceback=True
    )
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def setup_error_handling(app):
    """Install request logging, recovery and exception handlers on the app"""
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    logger.info("Error handling and request logging initialized")
