"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Sequence
from pythonjsonlogger import jsonlogger

from budget_guard.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger.

    The library never calls this itself; the host service calls it once at startup.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_assessment(
    budget_id: str,
    department: str,
    score: int,
    risk_level: str,
    anomaly_kinds: Sequence[str],
    duration_ms: float,
) -> None:
    """Log structured assessment outcome for analysis"""
    logging.getLogger("budget_guard.assessment").info(
        "Risk assessment completed",
        extra={
            "budget_id": budget_id,
            "department": department,
            "step": "assessment_complete",
            "risk_score": score,
            "risk_level": risk_level,
            "anomalies": list(anomaly_kinds),
            "duration_ms": duration_ms,
        },
    )
