"""
Logging setup for bulk header parsing.

Only the bulk reader and the command-line interface log; the header parsers
never do. Records go to stderr, and optionally to a size-rotated file, either
as one JSON object per line or as text with the parse context appended.
"""

import json
import logging
import logging.handlers
import os
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

import psutil

from .config import LoggingConfig

# Attributes every LogRecord carries; anything else came in through ``extra``
_STANDARD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

# Set by ProcessMetricsFilter
_METRIC_ATTRIBUTES = ("process_id", "uptime_seconds", "cpu_percent", "memory_mb")

# Shown after the message in text output, in this order
_TEXT_CONTEXT_KEYS = ("source", "parse_source", "line_number", "header_format", "expected", "offset")


class ProcessMetricsFilter(logging.Filter):
    """Attach CPU, memory and uptime of the current process to each record."""

    def __init__(self):
        super().__init__()
        self._process = psutil.Process()
        self._started = time.monotonic()

    def filter(self, record):
        record.process_id = os.getpid()
        record.uptime_seconds = round(time.monotonic() - self._started, 3)

        try:
            with self._process.oneshot():
                record.cpu_percent = self._process.cpu_percent()
                record.memory_mb = round(self._process.memory_info().rss / (1024 * 1024), 1)
        except psutil.Error:
            record.cpu_percent = 0.0
            record.memory_mb = 0.0

        return True


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRIBUTES and key not in _METRIC_ATTRIBUTES
    }


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Fields passed through ``extra`` (source, line number, counters) are
    grouped under "extra" and process metrics, when the record went through
    ProcessMetricsFilter, under "process".
    """

    def __init__(self, include_metrics: bool = True):
        super().__init__()
        self.include_metrics = include_metrics

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        extra = _extra_fields(record)
        if extra:
            entry["extra"] = extra

        if self.include_metrics and hasattr(record, "cpu_percent"):
            entry["process"] = {key: getattr(record, key) for key in _METRIC_ATTRIBUTES}

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text output with the parse context of the record in brackets."""

    def __init__(self):
        super().__init__("%(asctime)s [%(levelname)s] %(name)s - %(message)s")

    def formatMessage(self, record):
        line = super().formatMessage(record)
        context = " ".join(
            f"{key}={getattr(record, key)}" for key in _TEXT_CONTEXT_KEYS
            if getattr(record, key, None) is not None
        )
        return f"{line} [{context}]" if context else line


def _build_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format.lower() == "json" and config.structured:
        return JSONFormatter()
    return TextFormatter()


def setup_logging(config: LoggingConfig) -> None:
    """
    Configure the root logger.

    Existing root handlers are replaced by a stderr handler and, when
    ``config.log_file`` is set, a file handler rotating at
    ``config.max_file_size_mb``.

    Args:
        config: Logging configuration object
    """
    level = getattr(logging, config.level.upper())
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            filename=config.log_file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8"
        ))

    metrics_filter = ProcessMetricsFilter()
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(metrics_filter)
        handler.setFormatter(_build_formatter(config))
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={"log_level": config.level, "log_format": config.format, "log_file": config.log_file}
    )


def log_performance_metrics(logger: logging.Logger, operation: str, duration: float, **metrics):
    """
    Log the duration of a finished operation.

    Args:
        logger: Logger instance
        operation: Operation name
        duration: Operation duration in seconds
        **metrics: Counters reported with the duration
    """
    logger.info(
        "Performance: %s completed in %.3fs", operation, duration,
        extra={
            "operation": operation,
            "duration_seconds": duration,
            "duration_ms": duration * 1000,
            **metrics
        }
    )


def log_parse_progress(logger: logging.Logger, source: str, progress: Dict[str, Any]):
    """Log the running header, record and error counts of a source."""
    logger.info(
        "Parse progress: %s, %s headers", source, progress.get("headers", 0),
        extra={"parse_source": source, "progress": progress}
    )
