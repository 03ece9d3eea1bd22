from __future__ import annotations

import logging
import os

import structlog

from findmygym.core.config import Settings, get_settings


def _resolve_format(settings: Settings) -> str:
    if settings.log_format:
        return settings.log_format.lower()
    return "console" if settings.app_env == "dev" else "json"


def setup_logging(
    log_file: str | os.PathLike | None = None, *, settings: Settings | None = None
) -> None:
    """Route structlog and stdlib logging through one formatter.

    - JSON lines (ISO/UTC timestamp, level, event, bound fields) outside dev
    - Console renderer in dev unless LOG_FORMAT says otherwise
    - contextvars are merged so request_id/path/method reach service logs
    - Optional file handler from ``log_file`` or LOG_FILE
    """
    settings = settings or get_settings()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if _resolve_format(settings) == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    target = log_file or settings.log_file
    if target:
        os.makedirs(os.path.dirname(str(target)) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(str(target), encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )
