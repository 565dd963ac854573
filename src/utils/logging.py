"""structlog setup for the sync and progress-audit commands.

Both commands print their result on stdout (the sync summary, the audit
report) and are meant to be piped, so every log line goes to **stderr**.
The same shared processor chain feeds one of two renderers:

- ``ConsoleRenderer`` for interactive runs, coloured only when stderr is a
  terminal so redirected logs stay free of escape codes;
- ``JSONRenderer`` for scheduled runs, selected by ``APP_ENV=production``
  or the ``--json-logs`` flag, one event per line.

Standard-library ``logging`` is routed through the same formatter.  httpx
logs every request at INFO, which would interleave a line per page fetch
with the sync events, so it is held at WARNING unless the run is at DEBUG.

Levels are validated up front: an unknown name (from ``--log-level`` or
``LOG_LEVEL``) raises :class:`ConfigurationError` instead of failing deep
inside structlog.
"""

import logging
import os
import sys

import structlog

from src.utils.errors import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def normalize_log_level(log_level: str) -> str:
    """Return *log_level* upper-cased, or raise if it is not a known level."""
    level = str(log_level).strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(
            f"Unknown log level {log_level!r}; expected one of {', '.join(LOG_LEVELS)}"
        )
    return level


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog for a command run.

    Args:
        log_level: One of ``LOG_LEVELS``, case-insensitive.
        json_output: Force JSON lines. Otherwise JSON is used only when
                     ``APP_ENV`` is ``production``.

    Returns:
        A configured structlog BoundLogger.

    Raises:
        ConfigurationError: If *log_level* is not a known level name.
    """
    level = normalize_log_level(log_level)
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        context_class=dict,
        # sys.stderr is looked up per logger so a redirected stream is honoured.
        logger_factory=lambda *args: structlog.PrintLogger(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *shared_processors,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("httpx").setLevel(logging.NOTSET if level == "DEBUG" else logging.WARNING)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a logger bound to *name*, configuring INFO console output first if needed."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
