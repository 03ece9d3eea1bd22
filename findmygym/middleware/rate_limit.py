from __future__ import annotations

from collections.abc import Callable
from typing import TypedDict

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from limits import parse as parse_limit
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter
from slowapi import Limiter

from findmygym.core.config import get_settings


class RateLimitInfo(TypedDict, total=False):
    method: str
    ip: str
    limit: str


# slowapi supplies the RateLimitExceeded type handled in main; the per-method
# windows below go straight through "limits".
limiter = Limiter(key_func=lambda request: client_ip(request))

_storage = MemoryStorage()
_rate = MovingWindowRateLimiter(_storage)


def client_ip(request: Request) -> str:
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "local"


def _enabled() -> bool:
    settings = get_settings()
    if settings.rate_limit_enabled is not None:
        return settings.rate_limit_enabled
    return not settings.testing


def _limit_for_method(method: str) -> str | None:
    settings = get_settings()
    m = method.upper()
    if m in {"GET", "HEAD"}:
        return settings.rate_limit_read
    if m in {"POST", "PUT", "PATCH", "DELETE"}:
        return settings.rate_limit_write
    # OPTIONS (CORS preflight) is never limited
    return None


def rate_limited_response(info: RateLimitInfo) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"error": {"code": "rate_limited", "message": "Too Many Requests", "detail": info}},
    )


def reset_limits() -> None:
    _storage.reset()


async def rate_limit_middleware(request: Request, call_next: Callable) -> Response:
    if not _enabled():
        return await call_next(request)

    limit_str = _limit_for_method(request.method)
    if not limit_str:
        return await call_next(request)

    ip = client_ip(request)
    if not _rate.hit(parse_limit(limit_str), f"ip:{ip}|m:{request.method.upper()}"):
        info: RateLimitInfo = {"method": request.method.upper(), "ip": ip, "limit": limit_str}
        request.state.rate_limit_info = info
        return rate_limited_response(info)

    response = await call_next(request)
    response.headers.setdefault("X-RateLimit-Limit", limit_str)
    return response
