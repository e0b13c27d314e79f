"""Structured logging utilities for the XML editor.

Every component logs through a :class:`CorrelationLogger`, which tags each
record with the component name and an optional correlation ID so that one
CLI invocation or API call can be followed across the scanner, the codec and
the analytics layers.
"""

import logging
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(component)s] %(message)s"


class _ComponentDefaults(logging.Filter):
    """Fill in the structured fields for records emitted by foreign loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name.split(".")[-1]
        if not hasattr(record, "correlation_id"):
            record.correlation_id = None
        return True


class CorrelationLogger:
    """Wraps a stdlib logger and stamps every record with its component and correlation ID.

    Only the levels the package emits are exposed; ``extra`` keys are merged
    over the two structured fields.
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]]) -> None:
        fields: Dict[str, Any] = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        fields.update(extra or {})
        self.logger.log(level, message, extra=fields)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, message, extra)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Logger for ``name`` tagged with ``component`` (defaults to the module's last segment)."""
    return CorrelationLogger(name, correlation_id, component)


def configure_logging(level: str = "WARNING") -> None:
    """Install a stderr handler on the package logger.

    Calling this more than once replaces the previously installed handler, so
    repeated CLI invocations inside one process do not duplicate output.
    """
    package_logger = logging.getLogger("xml_editor")
    for handler in list(package_logger.handlers):
        if getattr(handler, "_xml_editor_handler", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(_ComponentDefaults())
    handler._xml_editor_handler = True  # type: ignore[attr-defined]

    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level.upper()))
