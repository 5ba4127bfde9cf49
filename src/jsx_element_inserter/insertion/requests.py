"""Insertion request and position types.

A request says *what* to insert (a code block to parse or a structured element
description) and *where* among the target's children (a :data:`PositionSpec`).
``from_dict`` accepts the camelCase wire form editors send, for example::

    {
        "tagName": "div",
        "attributes": {"className": "card", "tabIndex": 0},
        "textContent": "Hello",
        "children": [{"tagName": "img", "attributes": {"src": "a.png"}}],
        "location": {"position": "index", "index": 2}
    }
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

INVALID_INDEX = -1


class InsertPosition(Enum):
    """Wire names of the supported position kinds."""

    APPEND = "append"
    PREPEND = "prepend"
    INDEX = "index"


@dataclass(frozen=True)
class Append:
    """Insert after every existing child."""


@dataclass(frozen=True)
class Prepend:
    """Insert before every existing child."""


@dataclass(frozen=True)
class AtLogicalIndex:
    """Insert so the new node becomes the ``index``-th element-like child.

    ``index`` may be None or negative to carry an invalid index through to the
    resolver, which then falls back to appending.
    """

    index: Optional[int] = INVALID_INDEX

    @property
    def is_valid(self) -> bool:
        """Check whether the index is a usable non-negative integer."""
        return (
            isinstance(self.index, int)
            and not isinstance(self.index, bool)
            and self.index >= 0
        )


PositionSpec = Union[Append, Prepend, AtLogicalIndex]


def position_from_dict(data: Optional[Mapping[str, Any]]) -> PositionSpec:
    """Build a position spec from ``{"position": ..., "index": ...}``.

    A missing location means append.

    Raises:
        ValueError: If the position name is not one of the supported kinds
    """
    if not data:
        return Append()

    raw_position = data.get("position", InsertPosition.APPEND.value)
    try:
        position = InsertPosition(str(raw_position).lower())
    except ValueError:
        valid = [member.value for member in InsertPosition]
        raise ValueError(
            f"Unknown insert position '{raw_position}', expected one of {valid}"
        ) from None

    if position is InsertPosition.APPEND:
        return Append()
    if position is InsertPosition.PREPEND:
        return Prepend()
    return AtLogicalIndex(index=data.get("index", INVALID_INDEX))


def position_to_dict(spec: PositionSpec) -> Dict[str, Any]:
    """Convert a position spec to its wire form."""
    if isinstance(spec, AtLogicalIndex):
        return {"position": InsertPosition.INDEX.value, "index": spec.index}
    if isinstance(spec, Prepend):
        return {"position": InsertPosition.PREPEND.value}
    if isinstance(spec, Append):
        return {"position": InsertPosition.APPEND.value}
    return {"position": type(spec).__name__}


@dataclass(frozen=True)
class ElementDescription:
    """Structured description of an element to build.

    Attribute values that are ``str`` become string attributes; any other
    JSON-encodable value becomes an expression attribute.
    """

    tag_name: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    text_content: Optional[str] = None
    children: Tuple["ElementDescription", ...] = ()

    def __post_init__(self) -> None:
        """Validate description values."""
        if not self.tag_name or not isinstance(self.tag_name, str):
            raise ValueError("Element tag name cannot be empty")
        if self.text_content is not None and not isinstance(self.text_content, str):
            raise ValueError("Element text content must be a string")
        for name in self.attributes:
            if not name or not isinstance(name, str):
                raise ValueError("Attribute names must be non-empty strings")
        # Copy so later changes to the caller's containers cannot leak in.
        object.__setattr__(self, "attributes", dict(self.attributes))
        object.__setattr__(self, "children", tuple(self.children))
        for child in self.children:
            if not isinstance(child, ElementDescription):
                raise TypeError("Nested children must be ElementDescription instances")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ElementDescription":
        """Create a description from its camelCase wire form."""
        if "tagName" not in data:
            raise ValueError("Element description requires 'tagName'")
        return cls(
            tag_name=data["tagName"],
            attributes=dict(data.get("attributes") or {}),
            text_content=data.get("textContent"),
            children=tuple(cls.from_dict(child) for child in data.get("children") or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert description to its camelCase wire form."""
        result: Dict[str, Any] = {
            "tagName": self.tag_name,
            "attributes": dict(self.attributes),
        }
        if self.text_content is not None:
            result["textContent"] = self.text_content
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


@dataclass(frozen=True)
class InsertionRequest:
    """What to insert and where.

    ``code_block`` takes precedence over ``description`` when both are given.
    """

    description: Optional[ElementDescription] = None
    code_block: Optional[str] = None
    position: PositionSpec = field(default_factory=Append)

    def __post_init__(self) -> None:
        """Validate that there is something to insert."""
        if self.description is None and not self.code_block:
            raise ValueError("Insertion request needs a code block or an element description")

    @property
    def uses_code_block(self) -> bool:
        """Check whether the node will come from the fragment parser."""
        return bool(self.code_block)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InsertionRequest":
        """Create a request from its camelCase wire form."""
        description = ElementDescription.from_dict(data) if "tagName" in data else None
        return cls(
            description=description,
            code_block=data.get("codeBlock") or None,
            position=position_from_dict(data.get("location")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert request to its camelCase wire form."""
        result: Dict[str, Any] = {}
        if self.description is not None:
            result.update(self.description.to_dict())
        if self.code_block:
            result["codeBlock"] = self.code_block
        result["location"] = position_to_dict(self.position)
        return result
