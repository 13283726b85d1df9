"""
Core middleware.
"""

import time
import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from apps.core.logging import bind_contextvars, clear_contextvars, get_logger

logger = get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware:
    """
    Binds a correlation ID to every log line emitted while handling a request.

    Reuses the caller's ``X-Correlation-ID`` header when present and echoes
    it on the response.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        clear_contextvars()
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or uuid.uuid4().hex
        bind_contextvars(
            correlation_id=correlation_id,
            **{"http.method": request.method, "http.url_details.path": request.path},
        )

        start = time.perf_counter()
        try:
            response = self.get_response(request)
            response[CORRELATION_ID_HEADER] = correlation_id
            logger.info(
                "request_finished",
                status_code=response.status_code,
                duration_ms=(time.perf_counter() - start) * 1000,
            )
        finally:
            clear_contextvars()
        return response
