"""Structured logging setup using structlog.

One shared processor chain feeds a console renderer in development or a
JSON renderer when ``APP_ENV=production`` (or ``json_output=True``).

Output defaults to **stderr**: the MCP server speaks its protocol on
stdout, and the CLI prints tool results there.  Credentials passed to
``configure_and_test_embeddings`` must never reach a log line, so any
event key that looks like a secret is masked before rendering.

Stdlib ``logging`` is routed through the same formatter, so qdrant-client,
httpx and uvicorn records look like ours.
"""

import logging
import os
import sys
from typing import IO, Any

import structlog

REDACTED = "***"

_SECRET_KEYS = frozenset({"api_key", "apikey", "qdrant_api_key", "openai_api_key", "authorization"})

# Per-request chatter from the HTTP clients under qdrant-client and openai.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def redact_secrets(
    _logger: Any, _method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Mask credential values, including inside a logged ``arguments`` dict."""
    for key in list(event_dict):
        if key.lower() in _SECRET_KEYS and event_dict[key]:
            event_dict[key] = REDACTED
    arguments = event_dict.get("arguments")
    if isinstance(arguments, dict):
        event_dict["arguments"] = {
            k: (REDACTED if k.lower() in _SECRET_KEYS and v else v) for k, v in arguments.items()
        }
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: IO[str] | None = None,
) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR.
        json_output: Force JSON lines regardless of APP_ENV.
        stream: Destination for every log line; stderr when omitted.
    """
    stream = stream or sys.stderr
    level = log_level.upper()
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer: structlog.types.Processor
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
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

    # Library request logs only show up when we are debugging ourselves.
    library_level = level if level == "DEBUG" else "WARNING"
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
