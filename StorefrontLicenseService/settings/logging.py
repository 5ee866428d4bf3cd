"""
Logging configuration for structured JSON logging.

Every record is emitted as one JSON object on stdout.
"""

import sys

from pythonjsonlogger import jsonlogger

APP_LOGGERS = (
    "core",
    "api",
    "licenses",
    "activations",
    "payments",
    "subscriptions",
    "notifications",
    "reminders",
    "audit",
)


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that stamps the service name and level on every record."""

    def __init__(self, *args, service: str = "storefront-license-service", **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)
        log_record["service"] = self.service
        log_record["level"] = record.levelname


def get_logging_config(environment: str = "development") -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production, test)

    Returns:
        Django logging configuration dictionary
    """
    log_level = "DEBUG" if environment == "development" else "INFO"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d",
            },
            "simple": {
                "format": "{levelname} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": log_level,
        },
        "loggers": {
            "django": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "django.request": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            "django.db.backends": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            **{
                name: {"handlers": ["console"], "level": log_level, "propagate": False}
                for name in APP_LOGGERS
            },
        },
    }
