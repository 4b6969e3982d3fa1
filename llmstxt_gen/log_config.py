"""Structured logging setup shared by the API and the Celery worker."""

import json
import logging
import sys
from datetime import datetime, timezone


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Outputs one JSON object per line so log platforms can parse levels
    and exceptions without regex scraping.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_data["extra"] = record.extra

        return json.dumps(log_data)


def configure_logging(level: str = "INFO") -> None:
    """Send root, app and Celery logs to stdout as JSON."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in ("llmstxt_gen", "celery"):
        named_logger = logging.getLogger(name)
        named_logger.handlers.clear()
        named_logger.addHandler(handler)
        named_logger.setLevel(level)
        named_logger.propagate = False
