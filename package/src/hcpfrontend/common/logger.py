"""
Logging setup for the HCP frontend.
"""

import logging
import sys
import json
from datetime import datetime, timezone
from typing import Optional
from hcpfrontend.common.http_client import request_id_ctx


class JsonFormatter(logging.Formatter):
    """
    Format logs as JSON for structured logging in production.
    """
    def __init__(self, service_name: Optional[str] = None):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "request_id": request_id_ctx.get(),
            "name": record.name,
            "thread": record.threadName,
            "funcName": record.funcName,
            "line": record.lineno,
        }
        if self.service_name:
            log_record["service"] = self.service_name

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_record.update(record.extra_fields)

        return json.dumps(log_record)


class TracingFormatter(logging.Formatter):
    def format(self, record):
        record.request_id = request_id_ctx.get() or "no-request-id"
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    service_name: Optional[str] = None,
    use_json: bool = False,
):
    """
    Configure the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        service_name: Name of the service to include in logs
        use_json: Whether to use JSON formatting for production
    """
    root_logger = logging.getLogger()

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)

    stream_handler = logging.StreamHandler(sys.stdout)

    if use_json:
        formatter = JsonFormatter(service_name)
    else:
        format_str = (
            f"%(asctime)s - [%(request_id)s] - {service_name + ' - ' if service_name else ''}"
            "%(threadName)s - %(name)s - %(levelname)s - %(message)s"
        )
        formatter = TracingFormatter(format_str)

    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    logging.info(f"Logging initialized for {service_name or 'unknown service'} (level={level}, json={use_json})")
