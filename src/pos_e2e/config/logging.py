"""structlog setup for a test run.

Every event carries the API base URL so logs from parallel CI jobs against
different hosts stay distinguishable. httpx and httpcore log each request
through the standard library; ApiClient already emits its own request
events, so those loggers stay at WARNING unless DEBUG is on.
"""

import logging
import sys

import structlog

from pos_e2e.config.settings import Settings, get_settings

# Standard-library loggers that duplicate ApiClient's request events
NOISY_LOGGERS = ("httpx", "httpcore")


def _renderer(settings: Settings) -> structlog.typing.Processor:
    if settings.debug:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the standard-library loggers for the run."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(api=settings.base_url)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(name)s %(message)s", stream=sys.stdout, level=level)
    third_party_level = logging.DEBUG if settings.debug else max(level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)
