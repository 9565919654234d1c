"""
Logging configuration
"""

import logging
import logging.config
import json
import os
from datetime import datetime, timezone

from groove.config import settings


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Context attached through LoggerAdapter / extra={"context": {...}}
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            log_data.update(context)

        return json.dumps(log_data, default=str)


def setup_logging():
    """
    Configure application logging
    """
    app_handlers = ["console"] if settings.is_testing else ["console", "file"]

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "json" if settings.LOG_FORMAT == "json" else "default",
            "stream": "ext://sys.stdout"
        }
    }
    if not settings.is_testing:
        os.makedirs("logs", exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "json",
            "filename": "logs/app.log",
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5
        }

    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "json": {
                "()": JSONFormatter
            }
        },
        "handlers": handlers,
        "loggers": {
            "groove": {
                "level": settings.LOG_LEVEL,
                "handlers": app_handlers,
                "propagate": False
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False
            },
            "sqlalchemy": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False
            }
        },
        "root": {
            "level": settings.LOG_LEVEL,
            "handlers": ["console"]
        }
    }

    logging.config.dictConfig(log_config)


class LoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that attaches request/user context to every record
    """

    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        context = dict(self.extra or {})
        context.update(extra.get("context", {}))
        extra["context"] = context
        return msg, kwargs


def get_logger(name: str, **context) -> logging.LoggerAdapter:
    """
    Get a logger that tags records with the given context
    """
    return LoggerAdapter(logging.getLogger(name), context)
