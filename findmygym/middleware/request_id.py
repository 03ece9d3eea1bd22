from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger(__name__)


def _client_host(request: Request) -> str:
    return (request.client.host if request.client else None) or "-"


def _tag_sentry_scope(rid: str, request: Request) -> None:
    scope = sentry_sdk.get_current_scope()
    scope.set_tag("request_id", rid)
    scope.set_tag("path", request.url.path)
    scope.set_tag("method", request.method)


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Propagate X-Request-ID and emit one ``http_request`` access event.

    An inbound X-Request-ID is reused, otherwise a UUID4 is generated. The id,
    path and method are bound to structlog contextvars for the duration of the
    request so service-level events carry them too.
    """
    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(
        request_id=rid, path=request.url.path, method=request.method
    )
    _tag_sentry_scope(rid, request)

    start_ns = time.perf_counter_ns()
    try:
        response = await call_next(request)
    except Exception:
        logger.error(
            "http_request",
            status=500,
            duration_ms=round((time.perf_counter_ns() - start_ns) / 1_000_000.0, 3),
            client_ip=_client_host(request),
            exc_info=True,
        )
        structlog.contextvars.clear_contextvars()
        raise

    logger.info(
        "http_request",
        status=response.status_code,
        duration_ms=round((time.perf_counter_ns() - start_ns) / 1_000_000.0, 3),
        client_ip=_client_host(request),
    )
    response.headers[REQUEST_ID_HEADER] = rid
    structlog.contextvars.clear_contextvars()
    return response
