"""
Centralized Error Handling and Logging System
Every failure leaves the API as a {success: false, message, error?} envelope,
with a structured log entry and a trace id for correlation.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, NoReturn, Optional, Union
from contextvars import ContextVar

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

# Context variables for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

AVAILABLE_ROUTES = [
    "GET /api/test",
    "GET /api/produtos",
    "POST /api/produtos",
    "DELETE /api/produtos/:id",
]

MSG_ROUTE_NOT_FOUND = "Rota não encontrada"
MSG_INTERNAL_ERROR = "Erro interno do servidor"
MSG_INVALID_REQUEST = "Dados da requisição inválidos"


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
        """Log structured error with full context and return its trace id"""

        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
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
        if ErrorHandlingConfig.LOG_REQUEST_BODIES:
            body = await request.body()

        request.state.captured_body = body
        request.state.trace_id = trace_id

        response = await call_next(request)
        response.headers["X-Trace-ID"] = trace_id
        return response


def _captured_body(request: Request) -> Optional[str]:
    body = getattr(request.state, 'captured_body', None)
    if not body:
        return None
    try:
        return ErrorHandlingConfig.sanitize_data(body.decode('utf-8'))
    except UnicodeDecodeError:
        return "DECODE_ERROR"


def envelope(success: bool, message: Optional[str] = None, **fields: Any) -> Dict[str, Any]:
    """Build the uniform {success, message?, ...} response body"""
    content: Dict[str, Any] = {"success": success}
    if message is not None:
        content["message"] = message
    content.update(fields)
    return content


def raise_api_error(status_code: int, message: str, error: Optional[str] = None) -> NoReturn:
    """Abort the current request with an error envelope"""
    detail: Dict[str, Any] = {"message": message}
    if error is not None:
        detail["error"] = error
    raise HTTPException(status_code=status_code, detail=detail)


# Global Exception Handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Turn HTTP exceptions into envelopes; unmatched routes list what is available"""

    if isinstance(exc.detail, dict):
        content = envelope(False, **exc.detail)
        status_code = exc.status_code
    elif exc.status_code in (404, 405):
        content = envelope(False, MSG_ROUTE_NOT_FOUND, availableRoutes=AVAILABLE_ROUTES)
        status_code = 404
    else:
        content = envelope(False, str(exc.detail))
        status_code = exc.status_code

    if status_code >= 500:
        StructuredLogger.log_error(
            f"http_{status_code}",
            f"HTTP {status_code}: {exc.detail}",
            request=request,
            exception=exc,
            extra_context={"request_body": _captured_body(request)},
            include_traceback=False
        )
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {content.get('message')}")

    return JSONResponse(status_code=status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are client errors like any other validation failure"""

    validation_details: List[str] = []
    for error in exc.errors():
        location = " -> ".join(str(loc) for loc in error.get("loc", []))
        validation_details.append(f"{location}: {error.get('msg', 'Unknown validation error')}")

    logger.warning(
        f"Request validation failed for {request.method} {request.url.path}: "
        f"{validation_details} body={_captured_body(request)}"
    )

    return JSONResponse(
        status_code=400,
        content=envelope(False, MSG_INVALID_REQUEST, error="; ".join(validation_details))
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions"""

    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        extra_context={"request_body": _captured_body(request)},
        include_traceback=True
    )

    return JSONResponse(
        status_code=500,
        content=envelope(False, MSG_INTERNAL_ERROR, error=str(exc)),
        headers={"X-Trace-ID": trace_id}
    )


def setup_error_handling(app):
    """Setup error handling for FastAPI app"""

    app.add_middleware(RequestContextMiddleware)

    # Starlette's HTTPException also covers FastAPI's and the router's 404/405
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")
