"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from cashflow_gateway.config import settings


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

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_projection(
    request_id: str,
    business_id: int,
    scenario_id: int | None,
    months: int,
    final_balance: int,
    duration_ms: float,
) -> None:
    """Log structured projection outcome for analysis"""
    logging.info(
        "Projection completed",
        extra={
            "request_id": request_id,
            "business_id": business_id,
            "scenario_id": scenario_id,
            "step": "projection_complete",
            "outcome": "projected" if scenario_id is not None else "no_scenario",
            "months": months,
            "final_balance": final_balance,
            "duration_ms": duration_ms,
        },
    )
