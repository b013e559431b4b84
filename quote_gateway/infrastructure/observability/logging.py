"""Structured JSON logging for quote generation and lookups"""

import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "quote-gateway"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping UTC time, level and the emitting service"""

    def __init__(self, *args, service_name: str = SERVICE_NAME, **kwargs):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = SERVICE_NAME) -> None:
    """Route every root-logger record to stdout as one JSON object per line"""
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s", service_name=service_name)
    )
    logger.addHandler(handler)


def log_quote_generated(
    quote_id: str,
    vin: str,
    final_premium: Decimal,
    discount_count: int,
    duration_ms: float,
) -> None:
    """Log structured quote outcome for analysis"""
    logging.info(
        "Quote generated",
        extra={
            "quote_id": quote_id,
            "vin": vin,
            "step": "quote_complete",
            "final_premium": str(final_premium),
            "discount_count": discount_count,
            "duration_ms": duration_ms,
        },
    )


def log_quote_rejected(reason: str, message: str, vin: Optional[str] = None) -> None:
    """Log a request the service refused; reason matches the failure metric label"""
    logging.warning(
        f"Quote request rejected: {message}",
        extra={"step": "quote_rejected", "reason": reason, "vin": vin},
    )
