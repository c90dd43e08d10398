"""Logging configuration using structlog.

Gateway modules log through ``structlog.get_logger(__name__)`` with keyword
fields. ``setup_logging`` wires those loggers into the standard library and
masks credentials before rendering.
"""

import structlog
import logging
from typing import Any, MutableMapping

REDACTED = "***"
SECRET_FIELDS = frozenset({"api_key", "riot_api_key", "x-riot-token", "token"})

# Libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask credential fields, including inside a logged ``headers`` mapping."""
    for key in list(event_dict):
        if key.lower() in SECRET_FIELDS and event_dict[key]:
            event_dict[key] = REDACTED

    headers = event_dict.get("headers")
    if isinstance(headers, dict):
        event_dict["headers"] = {
            name: REDACTED if name.lower() in SECRET_FIELDS else value
            for name, value in headers.items()
        }
    return event_dict


def setup_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure structlog for structured logging.

    :param log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :param json_output: Render JSON lines; console rendering otherwise
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_secrets,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a configured structlog logger.

    :param name: Logger name (usually __name__)
    :returns: Logger instance
    """
    return structlog.get_logger(name)
