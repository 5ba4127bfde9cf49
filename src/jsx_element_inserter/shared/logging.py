"""Correlation-aware logging for JSX element insertion.

Every record emitted through :class:`CorrelationLogger` carries the component
name and the correlation ID of the insertion it belongs to, so a single edit
can be followed from fragment parsing through to the final splice.
"""

import logging
from typing import Any, Dict, Optional


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name for structured logging
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def bind(self, correlation_id: Optional[str]) -> "CorrelationLogger":
        """Return a logger for the same component tied to another correlation ID."""
        return CorrelationLogger(self.logger.name, correlation_id, self.component)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self.logger.debug(message, extra=self._get_extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self.logger.info(message, extra=self._get_extra(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message with correlation info."""
        self.logger.warning(message, extra=self._get_extra(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log error message with correlation info."""
        self.logger.error(message, extra=self._get_extra(extra), exc_info=exc_info)

    def critical(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log critical message with correlation info."""
        self.logger.critical(message, extra=self._get_extra(extra), exc_info=exc_info)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log exception message with correlation info and traceback."""
        self.logger.exception(message, extra=self._get_extra(extra))


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def configure_logging(level: str = "INFO") -> None:
    """Install a basic root handler that prints component and correlation ID.

    Records that did not pass through :class:`CorrelationLogger` are given
    empty defaults so the format string never fails.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(levelname)s [%(component)s] %(message)s (correlation_id=%(correlation_id)s)"
    ))
    handler.addFilter(_ensure_correlation_fields)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)


def _ensure_correlation_fields(record: logging.LogRecord) -> bool:
    if not hasattr(record, "component"):
        record.component = record.name.split(".")[-1]
    if not hasattr(record, "correlation_id"):
        record.correlation_id = None
    return True
