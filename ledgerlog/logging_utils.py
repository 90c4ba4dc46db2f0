"""Structured JSON logging."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from .config import Settings


class LedgerJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that renders amounts, times and paths as plain strings."""

    def process_log_record(self, log_record: Dict[str, Any]) -> Dict[str, Any]:
        data = super().process_log_record(log_record)
        for key, value in list(data.items()):
            data[key] = self._plain_value(value)
        return data

    def _plain_value(self, value: Any) -> Any:
        if isinstance(value, Decimal):
            return format(value, "f")
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, Path):
            return str(value)
        if isinstance(value, dict):
            return {k: self._plain_value(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._plain_value(v) for v in value]
        return value


def configure_logging(settings: Settings) -> None:
    """Configure root logger with JSON output on stderr."""

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.captureWarnings(True)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler()
    fmt = LedgerJsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(fmt)
    root_logger.addHandler(handler)
