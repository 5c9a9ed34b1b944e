"""Logging for the Jobly API.

Stdlib loggers (``logging.getLogger(__name__)`` throughout the package, plus
uvicorn and SQLAlchemy) are rendered by structlog's ProcessorFormatter, so
every line carries the request's trace id once the trace middleware binds it.
"""

import logging
import sys

import structlog

# Library loggers that are too chatty at the application's level.
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.INFO,
}

_HANDLER_NAME = "jobly"


def _pre_chain() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]


def build_formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering JSON lines, or aligned console output for local runs."""
    if json_output:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def configure_logging(log_level: str = "info", json_output: bool = False) -> None:
    """Install the Jobly handler on the root logger.

    Calling this again swaps the Jobly handler and leaves handlers installed
    by anything else (pytest's capture, for one) in place.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(build_formatter(json_output))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    level = logging.getLevelName(log_level.upper())
    root.setLevel(level if isinstance(level, int) else logging.INFO)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def bind_request_context(trace_id: str, **fields: str | None) -> None:
    """Attach the trace id, and any non-empty extra fields, to log lines of this request."""
    structlog.contextvars.bind_contextvars(
        trace_id=trace_id, **{key: value for key, value in fields.items() if value}
    )


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
