"""Structured logging for the STP worker.

structlog renders both its own loggers and stdlib ``logging`` records, so
modules keep using ``logging.getLogger(__name__)`` with dotted event names
and ``extra=`` context:

    logger = logging.getLogger(__name__)
    logger.warning("process_message.failed", extra={"message_in_id": 42})

Output is JSON (log_format=json) or coloured console lines (log_format=console).
Raw payloads and connection strings never reach the output.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog.typing import EventDict, Processor

from tradehub.config.settings import Settings, get_settings

SERVICE_NAME = "trade-hub-stp"

# Keys whose values are replaced before rendering. raw_payload can carry
# counterparty LEIs and party ids from the venue.
REDACTED_KEYS = frozenset({
    "password",
    "secret",
    "token",
    "database_url",
    "redis_url",
    "celery_broker_url",
    "celery_result_backend",
    "raw_payload",
})

REDACTED = "[REDACTED]"


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            k: REDACTED if str(k).lower() in REDACTED_KEYS else _redact(v)
            for k, v in value.items()
        }
    return value


def redact_sensitive_values(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    return _redact(event_dict)


def add_utc_timestamp(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def service_context(settings: Settings) -> Processor:
    """Processor stamping service name and environment on every event."""

    def add_service_context(
        logger: logging.Logger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("environment", settings.environment)
        return event_dict

    return add_service_context


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the root stdlib logger.

    Call once per process (Celery ``worker_process_init``).

    Args:
        settings: Settings to read log_level / log_format from
            (default: ``get_settings()``).
    """
    settings = settings or get_settings()

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        add_utc_timestamp,
        service_context(settings),
        redact_sensitive_values,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        pre_chain.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.log_level))

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.db_echo else logging.WARNING
    )
    logging.getLogger("celery.worker.strategy").setLevel(logging.WARNING)
    logging.getLogger("celery.app.trace").setLevel(logging.WARNING)


def bind_message_context(message_in_id: int, **extra: Any) -> None:
    """Attach the message under processing to every log event until cleared.

    Args:
        message_in_id: Id of the inbound message.
        **extra: Further context (task id, parser name).
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(message_in_id=message_in_id, **extra)


def clear_message_context() -> None:
    structlog.contextvars.clear_contextvars()
