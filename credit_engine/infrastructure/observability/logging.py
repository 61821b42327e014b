"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from credit_engine.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_score_calculation(
    request_id: str,
    score: int,
    grade: str,
    account_count: int,
    duration_ms: float,
) -> None:
    """Log structured score outcome for analysis"""
    logging.info(
        "Score calculated",
        extra={
            "request_id": request_id,
            "step": "score_complete",
            "score": score,
            "grade": grade,
            "account_count": account_count,
            "duration_ms": duration_ms,
        },
    )


def log_report_parsed(
    request_id: str,
    source: str,
    account_count: int,
    duration_ms: float,
) -> None:
    logging.info(
        "Report parsed",
        extra={
            "request_id": request_id,
            "step": "parse_complete",
            "source": source,
            "account_count": account_count,
            "duration_ms": duration_ms,
        },
    )
