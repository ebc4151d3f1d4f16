"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

logger = logging.getLogger("finhealth.analysis")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "finhealth-gateway"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)


def logging_observer(stage: str, payload: Dict[str, Any]) -> None:
    """Analysis observer that writes each stage as a DEBUG record"""
    logger.debug("Analysis stage", extra={"step": stage, **payload})


def log_analysis(
    request_id: str,
    mode: str,
    overall_score: int,
    health_level: str,
    recommendation_count: int,
    duration_ms: float,
) -> None:
    """Log structured analysis outcome"""
    logger.info(
        "Analysis completed",
        extra={
            "request_id": request_id,
            "step": "analysis_complete",
            "mode": mode,
            "overall_health_score": overall_score,
            "health_level": health_level,
            "recommendation_count": recommendation_count,
            "duration_ms": duration_ms,
        },
    )
