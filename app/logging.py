import logging
import sys
import structlog
from app.core.config import settings

REDACTED = "[redacted]"


def _field_name(name: str) -> str:
    return name.lower().replace("-", "_")


def redact_worker_secret(logger, method_name, event_dict):
    """
    Drops any field named after the secret header (or the secret setting)
    and masks the configured secret wherever it shows up inside a string value.
    """
    blocked = {_field_name(settings.SECRET_HEADER), "worker_secret"}
    secret = settings.WORKER_SECRET

    for key in list(event_dict):
        if _field_name(key) in blocked:
            del event_dict[key]
            continue
        value = event_dict[key]
        if secret and isinstance(value, str) and secret in value:
            event_dict[key] = value.replace(secret, REDACTED)
    return event_dict


def build_processors(json_output: bool) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        # After exc_info is rendered so tracebacks are scrubbed too.
        redact_worker_secret,
    ]
    if json_output:
        return processors + [structlog.processors.JSONRenderer()]
    return processors + [structlog.dev.ConsoleRenderer()]


def configure_logging():
    """
    Console output in development, JSON lines in production. Every event,
    including uvicorn's, passes through the secret redaction processor.
    """
    json_output = settings.ENV.lower() != "development"

    structlog.configure(
        processors=build_processors(json_output),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=settings.LOG_LEVEL.upper())

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True
