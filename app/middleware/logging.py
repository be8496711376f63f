import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

from app.utils.security import get_client_ip

log = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    One `http_request` event per call, tagged with a request id that is echoed
    back in X-Request-ID. An id sent by the upstream worker is reused so both
    sides can be correlated.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        clear_contextvars()

        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        # Read by the catch-all error handler, which runs outside this middleware.
        request.state.request_id = request_id

        bind_contextvars(
            request_id=request_id,
            http_method=request.method,
            path=request.url.path,
            client_ip=get_client_ip(request),
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            log.error(
                "http_request_failed",
                elapsed_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error_type=type(e).__name__,
            )
            raise

        elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
        level = "warning" if response.status_code >= 500 else "info"
        getattr(log, level)("http_request", status_code=response.status_code, elapsed_ms=elapsed_ms)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
