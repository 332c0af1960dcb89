"""
Structured logging setup.

Every log line is an event name plus key/value context:

    log = get_logger("messages")
    log.info("message_created", team_id=3, channel="general")

Request-scoped values (request id, path) are bound by CorrelationMiddleware
through structlog's contextvars and merged into every event.
"""

import logging
import sys
from typing import Optional

import structlog


def setup_logging(log_level: str = "INFO", json_format: bool = False, service_name: str = "cnebl-api") -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    renderer = structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service(service_name),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _add_service(service_name: str):
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: Optional[str] = None):
    if name:
        return structlog.get_logger(name).bind(logger=name)
    return structlog.get_logger()
