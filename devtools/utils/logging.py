import logging
import logging.handlers
import os
import sys
import uuid
from typing import Any, Dict, Optional

import structlog

# Keys whose values never reach the log output
SENSITIVE_KEYS = {"image_data", "content", "source_bytes", "result_bytes"}


def drop_binary_payloads(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Replace raw image payloads with their size so logs stay readable."""
    for key, value in list(event_dict.items()):
        if key in SENSITIVE_KEYS or isinstance(value, (bytes, bytearray)):
            size = len(value) if isinstance(value, (bytes, bytearray)) else None
            event_dict[key] = f"<{size} bytes>" if size is not None else "***"
    return event_dict


def add_correlation_id(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add correlation ID to log entries."""
    if "correlation_id" not in event_dict:
        event_dict["correlation_id"] = structlog.contextvars.get_contextvars().get(
            "correlation_id", str(uuid.uuid4())
        )
    return event_dict


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    enable_file_logging: bool = False,
    log_dir: str = "./logs",
    max_log_size_mb: int = 10,
    backup_count: int = 3,
) -> None:
    """Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Use JSON format for logs
        enable_file_logging: Also write logs to a rotating file
        log_dir: Directory for log files
        max_log_size_mb: Maximum size of each log file in MB
        backup_count: Number of backup files to keep
    """
    level = getattr(logging, log_level.upper())
    handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    if enable_file_logging:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(log_dir, "devtools.log"),
            maxBytes=max_log_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        handlers.append(file_handler)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        add_correlation_id,
        drop_binary_payloads,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=level,
        force=True,
    )

    # Suppress noisy loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


class LoggingContext:
    """Context manager for adding context to logs."""

    def __init__(self, **kwargs) -> None:
        self.context = kwargs
        self.tokens = None

    def __enter__(self) -> "LoggingContext":
        self.tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.tokens:
            structlog.contextvars.reset_contextvars(**self.tokens)
