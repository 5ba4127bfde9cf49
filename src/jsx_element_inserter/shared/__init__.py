"""Shared utilities for JSX element insertion.

This module provides the configuration objects, diagnostic types, exception
hierarchy and logging helpers used across the tree, parsing and insertion
layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)
from .config import (
    DEFAULT_SELF_CLOSING_TAGS,
    BuilderConfig,
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    InserterConfig,
    ResolverConfig,
)
from .errors import (
    AttributeSerializationError,
    InsertionError,
    NodeOwnershipError,
    ParseError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "DEFAULT_SELF_CLOSING_TAGS",
    "BuilderConfig",
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "InserterConfig",
    "ResolverConfig",
    "AttributeSerializationError",
    "InsertionError",
    "NodeOwnershipError",
    "ParseError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
