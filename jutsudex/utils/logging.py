"""structlog setup shared by the CLI, the API server and the tests.

Every log line goes to stderr.  The CLI prints its localized answers on
stdout, so keeping logs off that stream lets ``jutsudex search 火遁 | ...``
pipe clean output.  Events render as coloured key/value pairs, or as JSON
lines when ``APP_ENV=production`` (or ``json_output=True``).

Library loggers that speak through stdlib ``logging`` (httpx for catalog
fetches, aiosqlite for the store, uvicorn for the server) are bridged into
the same renderer.  httpx and aiosqlite are held at WARNING unless the
application itself runs at DEBUG, since they log once per request/statement.
"""

import logging
import os
import sys

import structlog

# Per-request / per-statement chatter; only interesting while debugging.
_CHATTY_LIBRARIES = ("httpx", "httpcore", "aiosqlite")


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """Install the structlog pipeline and the stdlib bridge.

    Args:
        log_level: Minimum level for jutsudex events (DEBUG shows per-tier
                   ``tier_hit`` / ``tier_searched`` events).
        json_output: Force JSON lines; ``APP_ENV=production`` does the same.
    """
    level = log_level.upper()
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
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

    library_level = level if level == "DEBUG" else "WARNING"
    for name in _CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger tagged with ``logger_name=name``.

    Configures logging with defaults first if nobody has yet, so library
    use without the CLI or the app factory still logs somewhere sensible.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
