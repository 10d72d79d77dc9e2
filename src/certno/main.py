"""
Application entry point — logging setup, adapter wiring, server start.

Composition root: the only place concrete adapters are instantiated.
The codec and the assignment service depend on the DuplicateChecker
protocol, never on psycopg directly.

Responsibilities:
  1. Configure structlog
  2. Load and validate configuration from environment
  3. Create the PostgreSQL duplicate checker
  4. Serve certno.asgi:app with uvicorn
"""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn
from pydantic import ValidationError

from certno import __version__
from certno.adapters.repository import PsycopgDuplicateChecker
from certno.config import AppSettings


def configure_structlog(log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structlog.

    Console renderer for humans by default; JSON lines when `json_logs`
    is set. Unknown level names fall back to INFO.
    """
    renderer = (
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def create_duplicate_checker(settings: AppSettings) -> PsycopgDuplicateChecker:
    """Instantiate the uniqueness adapter from settings."""
    return PsycopgDuplicateChecker(dsn=settings.database.get_dsn())


def main() -> None:
    """Load settings and serve the HTTP API."""
    try:
        settings = AppSettings()
    except ValidationError as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level, settings.json_logs)
    log = structlog.get_logger()
    log.info(
        "app.starting",
        version=__version__,
        log_level=settings.log_level,
        host=settings.http.host,
        port=settings.http.port,
    )

    uvicorn.run(
        "certno.asgi:app",
        host=settings.http.host,
        port=settings.http.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
