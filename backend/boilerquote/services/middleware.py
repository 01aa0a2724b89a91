"""Request tracing middleware: request ids, timing and catalog health of quotes."""
import time
import uuid
import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("boilerquote-api.middleware")

SKIP_LOG_PATHS = {"/health", "/metrics"}
CATALOG_STATUS_HEADER = "X-Catalog-Status"


def catalog_status_of(request: Request) -> Optional[str]:
    """Catalog status a quote route left on the request, if it priced one."""
    return getattr(request.state, "catalog_status", None)


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that:
    - Assigns an X-Request-ID to every request/response (reusing the caller's
      header when one is sent).
    - Adds X-Process-Time (milliseconds) to every response.
    - Echoes the catalog status of a priced quote as X-Catalog-Status, so a
      client can spot fallback pricing without parsing the body.
    - Logs every request except /health and /metrics; quotes priced on a
      partial or unavailable catalog log at WARNING.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start_time = time.perf_counter()

        # Route handlers pass this to the quote engine for log correlation
        request.state.request_id = request_id

        response: Response = await call_next(request)

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        catalog_status = catalog_status_of(request)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(duration_ms)
        if catalog_status:
            response.headers[CATALOG_STATUS_HEADER] = catalog_status

        if request.url.path in SKIP_LOG_PATHS:
            return response

        extra = {
            "http_method": request.method,
            "http_path": request.url.path,
            "http_status": response.status_code,
            "request_id": request_id,
            "duration_ms": duration_ms,
        }
        if catalog_status:
            extra["catalog_status"] = catalog_status
        level = logging.WARNING if catalog_status not in (None, "ok") else logging.INFO
        logger.log(level, "request completed", extra=extra)
        return response
