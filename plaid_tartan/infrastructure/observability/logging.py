"""Structured JSON logging for API calls"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from plaid_tartan.config import settings

logger = logging.getLogger("plaid_tartan")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger"""
    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)

    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def log_request(
    product: str,
    operation: str,
    status_code: int | None,
    outcome: str,
    duration_ms: float,
) -> None:
    """Log the outcome of one API call. Never pass credentials here."""
    level = logging.INFO if status_code in (200, 201) else logging.WARNING
    logger.log(
        level,
        "Plaid request completed",
        extra={
            "product": product,
            "operation": operation,
            "status_code": status_code,
            "outcome": outcome,
            "duration_ms": round(duration_ms, 2),
        },
    )
