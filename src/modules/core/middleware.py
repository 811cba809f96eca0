import re
import time
import uuid
from typing import Callable, Optional

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

logger = structlog.get_logger()


def _incoming_request_id(request: HttpRequest) -> Optional[str]:
    """Client-supplied id, ignored unless it is a short printable token."""
    raw = request.META.get("HTTP_X_REQUEST_ID", "").strip()
    return raw if _REQUEST_ID_PATTERN.match(raw) else None


class CorrelationIdMiddleware:
    """Tags every request with a correlation id.

    Reuses the client's ``X-Request-ID`` when it looks sane, otherwise
    generates a UUID4.  The id is bound into structlog's context vars so
    every log line of the request carries it, and is echoed back on the
    response.  Each request logs a start line and a finish line with the
    status code and duration; 5xx finishes are logged as warnings.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = _incoming_request_id(request) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        path = request.get_full_path()
        logger.info("request_started", method=request.method, path=path)

        start = time.monotonic()
        response = self.get_response(request)
        duration_ms = round((time.monotonic() - start) * 1000, 2)

        log_method = logger.warning if response.status_code >= 500 else logger.info
        log_method(
            "request_finished",
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        response[REQUEST_ID_HEADER] = cid
        return response
