"""Position resolution and splicing for element insertion.

Logical indexes count only element-like children (elements and fragments).
The resolver maps a logical index onto the physical child list so that text,
whitespace and expression children keep their places around the new node:
the new child is spliced immediately before the element-like child that
currently holds the requested logical index, or appended when there is none.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, assert_never

from jsx_element_inserter.insertion.requests import (
    Append,
    AtLogicalIndex,
    PositionSpec,
    Prepend,
    position_to_dict,
)
from jsx_element_inserter.shared.config import ResolverConfig
from jsx_element_inserter.shared.logging import get_logger
from jsx_element_inserter.shared.result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)
from jsx_element_inserter.tree.nodes import JSXNode, ParentNode
from jsx_element_inserter.tree.traversal import VisitSignal

MS_PER_SECOND = 1000
COMPONENT = "position_resolver"


@dataclass
class InsertionResult:
    """Outcome of one insertion.

    ``signal`` is always ``VisitSignal.STOP``: a traversal that applied an
    insertion must not visit any further nodes.
    """

    position: PositionSpec
    success: bool = True
    physical_index: Optional[int] = None
    logical_index: Optional[int] = None
    degraded: bool = False
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    signal: VisitSignal = VisitSignal.STOP
    correlation_id: Optional[str] = None

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )

    def summary(self) -> Dict[str, Any]:
        """Get a JSON-friendly summary of the insertion."""
        return {
            "success": self.success,
            "position": position_to_dict(self.position),
            "physical_index": self.physical_index,
            "logical_index": self.logical_index,
            "degraded": self.degraded,
            "has_errors": self.has_errors(),
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
            "processing_time_ms": self.performance.processing_time_ms,
            "nodes_built": self.performance.nodes_built,
            "correlation_id": self.correlation_id,
        }


class PositionResolver:
    """Applies a :data:`PositionSpec` to a parent's child list.

    ``Append`` and ``Prepend`` cannot fail. ``AtLogicalIndex`` with an invalid
    index is reported and degrades to ``Append``. A position kind outside the
    known set is reported, appended, and then rejected with ``assert_never``.
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the resolver.

        Args:
            config: Resolver configuration, defaults to ResolverConfig()
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ResolverConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, COMPONENT)

    def insert(
        self,
        parent: ParentNode,
        new_child: JSXNode,
        spec: PositionSpec
    ) -> InsertionResult:
        """Insert a detached node into ``parent`` at the given position.

        Args:
            parent: Element or fragment whose children are mutated in place
            new_child: Detached node to insert
            spec: Where to insert

        Returns:
            InsertionResult describing where the node landed

        Raises:
            NodeOwnershipError: If new_child already has a parent or is an
                ancestor of ``parent``
            AssertionError: If spec is not a known position kind (the node is
                appended before this is raised)
        """
        start_time = time.time()
        result = InsertionResult(position=spec, correlation_id=self.correlation_id)
        result.performance.children_scanned = len(parent.children)

        if isinstance(spec, Append):
            self._append(parent, new_child, result)
        elif isinstance(spec, Prepend):
            parent.prepend_child(new_child)
            result.physical_index = 0
        elif isinstance(spec, AtLogicalIndex):
            self._insert_at_logical_index(parent, new_child, spec, result)
        else:
            self._report(
                result,
                DiagnosticSeverity.CRITICAL,
                f"Unhandled position: {spec!r}",
                {"position_type": type(spec).__name__},
            )
            self._append(parent, new_child, result)
            result.degraded = True
            assert_never(spec)

        if new_child.is_element_like:
            result.logical_index = next(
                index for index, child in enumerate(parent.element_children())
                if child is new_child
            )
        result.performance.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND

        self.logger.info(
            "Inserted child",
            extra={
                "position": position_to_dict(spec),
                "physical_index": result.physical_index,
                "logical_index": result.logical_index,
                "degraded": result.degraded,
            },
        )
        return result

    def _append(self, parent: ParentNode, new_child: JSXNode, result: InsertionResult) -> None:
        parent.append_child(new_child)
        result.physical_index = len(parent.children) - 1

    def _insert_at_logical_index(
        self,
        parent: ParentNode,
        new_child: JSXNode,
        spec: AtLogicalIndex,
        result: InsertionResult
    ) -> None:
        if not spec.is_valid:
            self._report(
                result,
                DiagnosticSeverity.ERROR,
                f"Invalid index: {spec.index!r}",
                {"index": spec.index, "fallback": "append"},
            )
            self._append(parent, new_child, result)
            result.degraded = True
            return

        # Text, whitespace and expression children are skipped for counting only.
        element_children = parent.element_children()
        target_index = min(spec.index, len(element_children))  # type: ignore[type-var]

        if target_index != spec.index and self.config.report_clamped_index:
            self._report(
                result,
                DiagnosticSeverity.INFO,
                f"Index {spec.index} clamped to {target_index}",
                {"index": spec.index, "element_children": len(element_children)},
            )

        if target_index >= len(element_children):
            self._append(parent, new_child, result)
            return

        anchor = element_children[target_index]
        physical_index = parent.index_of(anchor)
        parent.insert_child(physical_index, new_child)
        result.physical_index = physical_index

    def _report(
        self,
        result: InsertionResult,
        severity: DiagnosticSeverity,
        message: str,
        details: Dict[str, Any]
    ) -> None:
        if severity is DiagnosticSeverity.CRITICAL:
            self.logger.critical(message, extra=details)
        elif severity is DiagnosticSeverity.ERROR:
            self.logger.error(message, extra=details)
        else:
            self.logger.info(message, extra=details)

        if self.config.record_diagnostics:
            result.add_diagnostic(severity, message, COMPONENT, details=details)
