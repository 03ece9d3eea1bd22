import sentry_sdk
import structlog
from fastapi import FastAPI, Request
from sentry_sdk.integrations.starlette import StarletteIntegration
from slowapi.errors import RateLimitExceeded
from starlette.middleware.cors import CORSMiddleware

from findmygym.api import errors
from findmygym.api.routers.auth import router as auth_router
from findmygym.api.routers.bookings import router as bookings_router
from findmygym.api.routers.deals import router as deals_router
from findmygym.api.routers.favorites import router as favorites_router
from findmygym.api.routers.gyms import router as gyms_router
from findmygym.api.routers.healthz import router as healthz_router
from findmygym.api.routers.me_history import router as me_history_router
from findmygym.api.routers.readyz import router as readyz_router
from findmygym.api.routers.reviews import router as reviews_router
from findmygym.api.routers.user import router as user_router
from findmygym.core.config import get_settings
from findmygym.logging import setup_logging
from findmygym.middleware.rate_limit import (
    RateLimitInfo,
    client_ip,
    limiter,
    rate_limit_middleware,
    rate_limited_response,
)
from findmygym.middleware.request_id import request_id_middleware
from findmygym.middleware.security_headers import security_headers_middleware


def _init_sentry() -> None:
    settings = get_settings()
    if not settings.sentry_dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    traces_rate = max(0.0, min(0.2, settings.sentry_traces_rate))
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.app_env,
        release=settings.release,
        integrations=[StarletteIntegration()],
        traces_sample_rate=traces_rate,
        send_default_pii=False,
    )


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings=settings)
    _init_sentry()

    app = FastAPI(title="FindMyGym")
    app.state.limiter = limiter
    errors.install(app)

    # Registered innermost first: request_id wraps everything
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(request_id_middleware)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    app.include_router(auth_router)
    app.include_router(gyms_router)
    app.include_router(bookings_router)
    app.include_router(favorites_router)
    app.include_router(reviews_router)
    app.include_router(deals_router)
    app.include_router(user_router)
    app.include_router(me_history_router)
    app.include_router(healthz_router)
    app.include_router(readyz_router)

    @app.get("/health")
    def health():
        return {"status": "ok", "env": settings.app_env}

    @app.exception_handler(RateLimitExceeded)
    async def _rate_limit_handler(request: Request, exc: RateLimitExceeded):
        info = getattr(request.state, "rate_limit_info", None)
        if not isinstance(info, dict):
            info = RateLimitInfo(method=request.method, ip=client_ip(request), limit="-")
        return rate_limited_response(info)

    structlog.get_logger(__name__).info("app_startup", env=settings.app_env)
    return app


app = create_app()
