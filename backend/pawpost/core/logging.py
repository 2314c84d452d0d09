import logging
import sys
import structlog
from pawpost.core.config import settings


def _log_level() -> int:
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.INFO


def _add_service(logger, method_name, event_dict):
    """Tag every event with the project and environment it came from."""
    event_dict.setdefault("service", settings.PROJECT_NAME.lower())
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def setup_logging():
    """
    Configure structlog for PawPost.

    LOG_LEVEL filters structlog events and stdlib records alike. Production
    emits one JSON object per line; other environments get the console
    renderer without the service tags.
    """
    level = _log_level()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.ENVIRONMENT == "production":
        processors = shared_processors + [
            _add_service,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn, sqlalchemy and aiosqlite log through stdlib
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
