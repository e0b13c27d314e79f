"""Result objects and diagnostic types for XML editor operations.

Every operation routed through :class:`xml_editor.api.XMLEditor` returns an
:class:`OperationResult`. The result carries its payload together with a
:class:`ResultKind` tag, so callers know whether to display the payload as text
or treat it as binary data without consulting any global state.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Union


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Structural problems that were reported or repaired
    ERROR = auto()      # Operation failures
    CRITICAL = auto()   # Unexpected failures


class ResultKind(Enum):
    """Payload kind of an operation result."""

    TEXT = auto()
    BINARY = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class PerformanceMetrics:
    """Performance metrics for a single operation."""

    processing_time_ms: float = 0.0
    memory_used_bytes: int = 0
    input_bytes: int = 0
    output_bytes: int = 0

    @property
    def bytes_per_second(self) -> float:
        """Calculate input bytes processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.input_bytes * 1000.0) / self.processing_time_ms

    @property
    def compression_ratio(self) -> float:
        """Output size relative to input size (1.0 when nothing was read)."""
        if self.input_bytes == 0:
            return 1.0
        return self.output_bytes / self.input_bytes


@dataclass
class OperationResult:
    """Outcome of one named editor operation.

    ``payload`` is ``None`` exactly when the operation failed, which keeps a
    failure distinguishable from a successful operation producing an empty
    string or zero-length byte sequence.

    ``summary`` holds human-readable text reported alongside the payload, such
    as the verification report of a pass-through ``verify`` run.
    """

    operation: str
    kind: ResultKind
    payload: Optional[Union[str, bytes]] = None
    error: Optional[str] = None
    summary: Optional[str] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    @property
    def success(self) -> bool:
        """Whether the operation produced a payload."""
        return self.payload is not None and self.error is None

    @property
    def is_binary(self) -> bool:
        """Whether the payload should be handled as raw bytes."""
        return self.kind is ResultKind.BINARY

    @property
    def text(self) -> str:
        """Payload as text; raises if the result is binary or failed."""
        if not self.success:
            raise ValueError(f"Operation '{self.operation}' failed: {self.error}")
        if self.kind is not ResultKind.TEXT:
            raise TypeError(f"Operation '{self.operation}' produced binary output")
        return self.payload  # type: ignore[return-value]

    @property
    def data(self) -> bytes:
        """Payload as bytes; text payloads are UTF-8 encoded."""
        if not self.success:
            raise ValueError(f"Operation '{self.operation}' failed: {self.error}")
        if isinstance(self.payload, str):
            return self.payload.encode("utf-8")
        return self.payload  # type: ignore[return-value]

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        **details: Any
    ) -> None:
        """Append a diagnostic entry tagged with this result's correlation ID."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                details=details or None,
                correlation_id=self.correlation_id,
            )
        )
