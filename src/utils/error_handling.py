"""
Centralized Error Handling and Logging System
Every error leaving the API uses the failure envelope {success: false, error, details}.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Union
from contextvars import ContextVar

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    # Security settings
    SANITIZE_SENSITIVE_FIELDS = True
    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'key', 'secret', 'authorization',
        'auth', 'bearer', 'credential', 'api_key'
    ]

    # Logging settings
    LOG_REQUEST_BODIES = True
    LOG_HEADERS = True
    MAX_BODY_LOG_SIZE = 5000  # Truncate large bodies

    # Error response settings
    INCLUDE_TRACE_ID = True
    INCLUDE_TIMESTAMP = True

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        """Check if a field contains sensitive data"""
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Union[Dict, str, Any]) -> Any:
        """Recursively sanitize sensitive data from logs"""
        if not cls.SANITIZE_SENSITIVE_FIELDS:
            return data

        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(key) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, list):
            return [cls.sanitize_data(item) for item in data]
        elif isinstance(data, str) and len(data) > cls.MAX_BODY_LOG_SIZE:
            return data[:cls.MAX_BODY_LOG_SIZE] + "...[TRUNCATED]"
        else:
            return data

class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> str:
        """Log structured error with full context"""

        # Reuse the request's trace ID when there is one
        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": datetime.utcnow().isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": "ERROR"
        }

        if request:
            headers = dict(request.headers)
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": ErrorHandlingConfig.sanitize_data(headers) if ErrorHandlingConfig.LOG_HEADERS else {},
                "client_ip": request.client.host if request.client else None,
                "user_agent": headers.get("user-agent", "unknown")
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
                "module": getattr(exception, '__module__', 'unknown')
            }

            if include_traceback:
                log_entry["exception"]["traceback"] = traceback.format_exc()

        if extra_context:
            log_entry["context"] = ErrorHandlingConfig.sanitize_data(extra_context)

        logger.error(json.dumps(log_entry, indent=2, default=str))

        return trace_id

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to capture request context and add request IDs"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request_id_var.set(trace_id)

        # Store request body for potential error logging
        body = None
        if ErrorHandlingConfig.LOG_REQUEST_BODIES and request.method in ("POST", "PUT", "PATCH"):
            body = await request.body()

        request.state.captured_body = body
        request.state.trace_id = trace_id

        response = await call_next(request)
        # Add trace ID to response headers for client-side debugging
        response.headers["X-Trace-ID"] = trace_id
        return response

def _captured_body(request: Request) -> Optional[str]:
    body = getattr(request.state, 'captured_body', None)
    if not body:
        return None
    try:
        return body.decode('utf-8')
    except UnicodeDecodeError:
        return "DECODE_ERROR"

def _envelope(error: str, details: Any = None, trace_id: Optional[str] = None) -> Dict[str, Any]:
    content = {"success": False, "error": error}
    if details is not None:
        content["details"] = details
    if ErrorHandlingConfig.INCLUDE_TRACE_ID and trace_id:
        content["trace_id"] = trace_id
    if ErrorHandlingConfig.INCLUDE_TIMESTAMP:
        content["timestamp"] = datetime.utcnow().isoformat()
    return content

# Global Exception Handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with logging"""

    trace_id = None
    if exc.status_code >= 500:
        trace_id = StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            exception=exc,
            extra_context={"status_code": exc.status_code},
            include_traceback=False
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(f"HTTP {exc.status_code}", exc.detail, trace_id),
        headers=getattr(exc, "headers", None)
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI validation errors (HTTP 422)"""

    validation_details = []
    for error in exc.errors():
        validation_details.append({
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "unknown")
        })

    body_str = _captured_body(request)
    trace_id = StructuredLogger.log_error(
        "validation_error_422",
        f"Request validation failed: {len(validation_details)} validation errors",
        request=request,
        exception=exc,
        extra_context={
            "validation_errors": validation_details,
            "request_body": ErrorHandlingConfig.sanitize_data(body_str) if body_str else None
        },
        include_traceback=False
    )

    return JSONResponse(
        status_code=422,
        content=_envelope("Request validation failed", validation_details, trace_id)
    )

async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions"""

    body_str = _captured_body(request)
    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        extra_context={
            "request_body": ErrorHandlingConfig.sanitize_data(body_str) if body_str else None
        },
        include_traceback=True
    )

    # Don't expose internal details. This response is built outside the
    # request middleware, so the trace header is set here
    trace_id = getattr(request.state, "trace_id", None) or trace_id
    return JSONResponse(
        status_code=500,
        content=_envelope("Internal Server Error", "An unexpected error occurred", trace_id),
        headers={"X-Trace-ID": trace_id}
    )

def setup_error_handling(app):
    """Setup error handling for FastAPI app"""

    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling system initialized")
