"""
LoggingService - Centralized structured logging for Voxgraph.

Wraps structlog configuration so every module emits the same
machine-readable event stream on stderr. Transcripts are spoken by real
people, so recognized text never reaches the log unredacted.

License: MIT
"""

import logging
import sys
import traceback
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

import structlog
from structlog.types import Processor

_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_FORMATS = ["json", "console"]

REDACTED = "[REDACTED]"

# Speech content and credentials.
DEFAULT_SENSITIVE_KEYS: FrozenSet[str] = frozenset(
    {"text", "transcript", "utterance", "password", "api_key", "token"}
)


@dataclass
class LoggingConfig:
    """
    Configuration for LoggingService.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" or "console")
        output_stream: Output destination (default: sys.stderr)
        sensitive_keys: Context keys whose values are replaced by REDACTED
    """

    level: str = "INFO"
    format: str = "json"
    output_stream: Any = sys.stderr
    sensitive_keys: set[str] = field(default_factory=lambda: set(DEFAULT_SENSITIVE_KEYS))


class LoggingService:
    """
    Centralized structured logging service using structlog.

    Example:
        LoggingService.configure_logging(level="INFO", format="json")
        logger = LoggingService.get_logger("voxgraph.cli")
        logger.info("transcript_replayed", lines=12, duration_ms=3.1)
    """

    _configured: bool = False
    _log_level: str = "INFO"
    _config: Optional[LoggingConfig] = None
    _loggers: dict[str, structlog.BoundLogger] = {}
    _sensitive_keys: set[str] = set()

    @classmethod
    def configure_logging(
        cls, level: str = "INFO", format: str = "json", config: Optional[LoggingConfig] = None
    ) -> None:
        """
        Configure global structured logging. Call once at startup.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            format: Output format ("json" or "console")
            config: Optional LoggingConfig overriding level/format

        Raises:
            ValueError: If level or format is invalid
            RuntimeError: If logging is already configured
        """
        if cls._configured:
            raise RuntimeError("Logging already configured")

        if config is not None:
            cfg = config
        else:
            level_upper = level.upper()
            if level_upper not in _LEVELS:
                raise ValueError(
                    f"Invalid log level: {level}. Must be one of: {', '.join(_LEVELS)}"
                )

            format_lower = format.lower()
            if format_lower not in _FORMATS:
                raise ValueError(f"Invalid format: {format}. Must be 'json' or 'console'")

            cfg = LoggingConfig(level=level_upper, format=format_lower)

        cls._config = cfg
        cls._log_level = cfg.level
        cls._sensitive_keys = cfg.sensitive_keys

        structlog.configure(
            processors=cls._setup_processors(),
            wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, cfg.level)),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=cfg.output_stream),
            cache_logger_on_first_use=True,
        )

        cls._configured = True

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def get_logger(cls, name: str) -> structlog.BoundLogger:
        """
        Get a cached module/component-specific logger.

        Raises:
            RuntimeError: If logging not configured yet
            ValueError: If name is empty or longer than 200 chars
        """
        if not cls._configured:
            raise RuntimeError("Logging not configured. Call configure_logging() first.")

        if not name:
            raise ValueError("Logger name cannot be empty")

        if len(name) > 200:
            raise ValueError("Logger name exceeds maximum length (200)")

        if name not in cls._loggers:
            cls._loggers[name] = structlog.get_logger(name)

        return cls._loggers[name]

    @classmethod
    def log_operation(
        cls,
        operation: str,
        correlation_id: str,
        metadata: Optional[dict[str, Any]] = None,
        logger_name: str = "voxgraph",
        level: str = "info",
    ) -> None:
        """
        Emit an event named after the operation, tagged with its correlation id.

        Raises:
            ValueError: If operation or correlation_id is empty
        """
        cls._require(operation=operation, correlation_id=correlation_id)
        cls._emit(
            logger_name,
            level,
            operation,
            {"operation": operation, "correlation_id": correlation_id},
            metadata,
        )

    @classmethod
    def log_error(
        cls,
        error: Exception,
        correlation_id: str,
        context: Optional[dict[str, Any]] = None,
        logger_name: str = "voxgraph",
        include_stack_trace: bool = True,
    ) -> None:
        """
        Emit "error_occurred" for an exception.

        VoxgraphError codes and details are carried into the event. The stack
        trace is only meaningful while the exception is being handled.

        Raises:
            ValueError: If correlation_id is empty
        """
        cls._require(correlation_id=correlation_id)

        fields: Dict[str, Any] = {
            "error_type": type(error).__name__,
            "error_message": str(error),
            "correlation_id": correlation_id,
        }
        error_code = getattr(error, "error_code", None)
        if error_code:
            fields["error_code"] = error_code

        extra = dict(getattr(error, "details", None) or {})
        extra.update(context or {})
        if include_stack_trace:
            fields["stack_trace"] = traceback.format_exc()

        cls._emit(logger_name, "error", "error_occurred", fields, extra)

    @classmethod
    def log_performance(
        cls,
        operation: str,
        duration_ms: float,
        correlation_id: str,
        metadata: Optional[dict[str, Any]] = None,
        logger_name: str = "voxgraph",
    ) -> None:
        """
        Emit "performance_metric" with the duration of an operation.

        Raises:
            ValueError: If operation/correlation_id empty or duration_ms < 0
        """
        cls._require(operation=operation, correlation_id=correlation_id)
        if duration_ms < 0:
            raise ValueError("duration_ms cannot be negative")

        cls._emit(
            logger_name,
            "info",
            "performance_metric",
            {
                "operation": operation,
                "duration_ms": round(duration_ms, 3),
                "correlation_id": correlation_id,
            },
            metadata,
        )

    @staticmethod
    def _require(**values: str) -> None:
        for name, value in values.items():
            if not value:
                raise ValueError(f"{name} cannot be empty")

    @classmethod
    def _emit(
        cls,
        logger_name: str,
        level: str,
        event: str,
        fields: Dict[str, Any],
        extra: Optional[dict[str, Any]],
    ) -> None:
        if extra:
            fields.update(cls._sanitize_metadata(extra))
        getattr(cls.get_logger(logger_name), level.lower())(event, **fields)

    @classmethod
    def _sanitize_metadata(cls, data: Any) -> Any:
        """Redact sensitive keys at any depth of nested dicts, lists and tuples."""
        if isinstance(data, dict):
            return {
                key: (
                    REDACTED
                    if str(key).lower() in cls._sensitive_keys
                    else cls._sanitize_metadata(value)
                )
                for key, value in data.items()
            }
        if isinstance(data, (list, tuple)):
            return [cls._sanitize_metadata(item) for item in data]
        return data

    @classmethod
    def _setup_processors(cls) -> list[Processor]:
        processors: list[Processor] = [
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if cls._config and cls._config.format == "console":
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.JSONRenderer())

        return processors
