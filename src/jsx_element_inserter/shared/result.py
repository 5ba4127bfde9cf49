"""Diagnostic and metric types shared by the insertion components.

Recoverable conditions (an invalid logical index, an unknown position kind) are
never raised; they are recorded as :class:`DiagnosticEntry` objects on the
result of the operation that hit them.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Warnings about potential issues
    ERROR = auto()      # Error conditions that were recovered
    CRITICAL = auto()   # Contract violations that were recovered best-effort


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert diagnostic to a JSON-friendly dictionary."""
        result: Dict[str, Any] = {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
        }
        if self.details:
            result["details"] = dict(self.details)
        if self.correlation_id is not None:
            result["correlation_id"] = self.correlation_id
        return result


@dataclass
class PerformanceMetrics:
    """Timing and volume counters for a single insertion."""

    processing_time_ms: float = 0.0
    nodes_built: int = 0
    children_scanned: int = 0

    @property
    def nodes_per_second(self) -> float:
        """Calculate built nodes per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.nodes_built * 1000.0) / self.processing_time_ms
