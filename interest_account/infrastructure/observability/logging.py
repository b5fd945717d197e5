"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from pythonjsonlogger.json import JsonFormatter

from interest_account.config import settings


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


JSON_LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Send account logs to ``stream`` (stdout by default) as JSON lines.

    The engine logs through the root logger, so that is where the handler
    goes. A host process may already have handlers there; only the one
    installed by an earlier call is replaced.

    Args:
        level: Root log level, defaults to ``settings.log_level``
        stream: Where the JSON lines are written

    Returns:
        The installed handler
    """
    root = logging.getLogger()
    root.setLevel(level or settings.log_level)

    for existing in [h for h in root.handlers if getattr(h, "interest_account_json", False)]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(CustomJsonFormatter(JSON_LOG_FORMAT))
    handler.interest_account_json = True
    root.addHandler(handler)
    return handler


def log_account_event(user_id: Optional[str], step: str, message: str, **fields: Any) -> None:
    """Log a single account state change"""
    logging.info(
        message,
        extra={"user_id": user_id, "step": step, **fields},
    )


def log_interest_run(
    user_id: str,
    days: int,
    steps: int,
    leap_year: bool,
    interest_posted: int,
    pending_interest: float,
) -> None:
    """Log the outcome of one interest calculation for analysis"""
    logging.info(
        "Interest calculated",
        extra={
            "user_id": user_id,
            "step": "interest_calculated",
            "days": days,
            "compounding_steps": steps,
            "leap_year": leap_year,
            "interest_posted": interest_posted,
            "pending_interest": pending_interest,
        },
    )
