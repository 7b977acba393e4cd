"""
Structured logging configuration

Every event carries the service name and deployment environment so engine
logs can be told apart once shipped alongside other services.
"""
import structlog
import logging
import sys

from adcraft_engine.config import settings

SERVICE_NAME = "adcraft_engine"


def add_service_context(logger, method_name, event_dict):
    """Stamp service and environment onto every event"""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def setup_logging(level: int = None):
    """Configure structured JSON logging for the engine"""
    if level is None:
        level = logging.DEBUG if settings.DEBUG else logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_service_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger(SERVICE_NAME)


# Global logger instance
logger = setup_logging()
