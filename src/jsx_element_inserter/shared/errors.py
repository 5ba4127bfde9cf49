"""Exception hierarchy for JSX element insertion.

Only conditions that abort an insertion before the tree is touched are
exceptions. Everything the resolver can recover from is reported as a
diagnostic instead (see :mod:`jsx_element_inserter.shared.result`).
"""

from typing import Any, Dict, Optional


class InsertionError(Exception):
    """Base exception for all insertion failures."""


class ParseError(InsertionError):
    """Raised when a code block is not exactly one well-formed JSX element."""

    def __init__(
        self,
        message: str,
        line: int = 1,
        column: int = 1,
        offset: int = 0
    ) -> None:
        super().__init__(f"{message} (line {line}, column {column})")
        self.reason = message
        self.line = line
        self.column = column
        self.offset = offset

    @property
    def position(self) -> Dict[str, int]:
        """Position of the failure in the parsed source."""
        return {"line": self.line, "column": self.column, "offset": self.offset}


class AttributeSerializationError(InsertionError):
    """Raised when an attribute value cannot be encoded as JSON."""

    def __init__(self, attribute: str, value: Any) -> None:
        super().__init__(
            f"Attribute '{attribute}' has a value of type "
            f"{type(value).__name__} that cannot be serialized to JSON"
        )
        self.attribute = attribute
        self.value = value


class NodeOwnershipError(InsertionError):
    """Raised when a node would end up with two parents or inside itself."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details = details or {}
