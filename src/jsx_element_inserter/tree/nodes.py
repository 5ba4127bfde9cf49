"""JSX node model used by the builder, the parser and the position resolver.

The model keeps only what insertion needs: elements and fragments with an
ordered, heterogeneous child list, text, expression containers and the
attribute forms JSX allows. Nodes compare by identity so that locating a child
in its parent's list never confuses two structurally equal siblings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from jsx_element_inserter.shared.errors import NodeOwnershipError


class JSXNode:
    """Base class for every node that can appear in a child list."""

    parent: Optional["JSXNode"] = None

    @property
    def is_element_like(self) -> bool:
        """Check whether the node counts towards logical child indexes."""
        return False

    def iter_ancestors(self) -> Iterator["JSXNode"]:
        """Iterate from the direct parent up to the root."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        raise NotImplementedError


@dataclass(eq=False)
class StringLiteral:
    """A quoted string, used as an attribute value or expression body."""

    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "StringLiteral", "value": self.value}


@dataclass(eq=False)
class RawExpression:
    """Opaque JavaScript expression source kept verbatim."""

    source: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "RawExpression", "source": self.source}


Expression = Union[StringLiteral, RawExpression]


@dataclass(eq=False)
class JSXExpressionContainer(JSXNode):
    """``{expression}`` in child or attribute position.

    ``expression`` is None for an empty container such as ``{}``.
    """

    expression: Optional[Expression] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "JSXExpressionContainer",
            "expression": self.expression.to_dict() if self.expression else None,
        }


@dataclass(eq=False)
class JSXText(JSXNode):
    """Literal text between tags, whitespace included."""

    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "JSXText", "value": self.value}


AttributeValue = Union[StringLiteral, JSXExpressionContainer]


@dataclass(eq=False)
class JSXAttribute:
    """``name="value"``, ``name={expr}`` or a bare boolean ``name``."""

    name: str
    value: Optional[AttributeValue] = None

    def __post_init__(self) -> None:
        """Validate attribute name."""
        if not self.name:
            raise ValueError("Attribute name cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "JSXAttribute",
            "name": self.name,
            "value": self.value.to_dict() if self.value is not None else None,
        }


@dataclass(eq=False)
class JSXSpreadAttribute:
    """``{...expr}`` in attribute position."""

    argument: RawExpression

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "JSXSpreadAttribute", "argument": self.argument.to_dict()}


Attribute = Union[JSXAttribute, JSXSpreadAttribute]


class _ChildContainer(JSXNode):
    """Child list management shared by elements and fragments."""

    children: List[JSXNode]

    def _adopt_children(self) -> None:
        for child in self.children:
            child.parent = self

    def element_children(self) -> List[JSXNode]:
        """Get the element-like children in physical order."""
        return [child for child in self.children if child.is_element_like]

    def index_of(self, child: JSXNode) -> int:
        """Get the physical index of a child, compared by identity."""
        for index, existing in enumerate(self.children):
            if existing is child:
                return index
        raise ValueError("Node is not a child of this container")

    def append_child(self, child: JSXNode) -> None:
        """Add a child at the end of the child list."""
        self.insert_child(len(self.children), child)

    def prepend_child(self, child: JSXNode) -> None:
        """Add a child at the front of the child list."""
        self.insert_child(0, child)

    def insert_child(self, index: int, child: JSXNode) -> None:
        """Insert a detached child at a physical index.

        Raises:
            TypeError: If child is not a JSX node
            IndexError: If index is outside ``0..len(children)``
            NodeOwnershipError: If child already has a parent or is this
                container or one of its ancestors
        """
        if not isinstance(child, JSXNode):
            raise TypeError("Child must be a JSXNode instance")
        if not (0 <= index <= len(self.children)):
            raise IndexError("Child index out of range")
        if child.parent is not None:
            raise NodeOwnershipError(
                "Node already belongs to another parent",
                details={"node_type": type(child).__name__},
            )
        if child is self or any(ancestor is child for ancestor in self.iter_ancestors()):
            raise NodeOwnershipError(
                "Node cannot be inserted into itself or its own descendant",
                details={"node_type": type(child).__name__},
            )

        child.parent = self
        self.children.insert(index, child)

    def remove_child(self, child: JSXNode) -> bool:
        """Remove a child and clear its parent reference."""
        for index, existing in enumerate(self.children):
            if existing is child:
                del self.children[index]
                child.parent = None
                return True
        return False


@dataclass(eq=False)
class JSXElement(_ChildContainer):
    """A JSX element with attributes and an ordered child list."""

    name: str
    attributes: List[Attribute] = field(default_factory=list)
    children: List[JSXNode] = field(default_factory=list)
    self_closing: bool = False

    def __post_init__(self) -> None:
        """Validate element values and establish parent-child relationships."""
        if not self.name:
            raise ValueError("Element name cannot be empty")
        if self.self_closing and self.children:
            raise ValueError("Self-closing element cannot have children")
        self._adopt_children()

    @property
    def is_element_like(self) -> bool:
        return True

    def insert_child(self, index: int, child: JSXNode) -> None:
        super().insert_child(index, child)
        # An element with content needs a closing tag.
        self.self_closing = False

    def get_attribute(self, name: str) -> Optional[JSXAttribute]:
        """Get the last attribute with a given name, as JSX resolves duplicates."""
        found = None
        for attribute in self.attributes:
            if isinstance(attribute, JSXAttribute) and attribute.name == name:
                found = attribute
        return found

    def get_attribute_text(self, name: str) -> Optional[str]:
        """Get a string attribute value, or None for missing or expression values."""
        attribute = self.get_attribute(name)
        if attribute is None or not isinstance(attribute.value, StringLiteral):
            return None
        return attribute.value.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "JSXElement",
            "name": self.name,
            "attributes": [attribute.to_dict() for attribute in self.attributes],
            "self_closing": self.self_closing,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(eq=False)
class JSXFragment(_ChildContainer):
    """``<>...</>`` grouping without an element of its own."""

    children: List[JSXNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Establish parent-child relationships."""
        self._adopt_children()

    @property
    def is_element_like(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "JSXFragment",
            "children": [child.to_dict() for child in self.children],
        }


ParentNode = Union[JSXElement, JSXFragment]
ELEMENT_LIKE_TYPES: Tuple[type, ...] = (JSXElement, JSXFragment)


def is_element_like(node: Any) -> bool:
    """Check whether a node is a JSX element or fragment."""
    return isinstance(node, ELEMENT_LIKE_TYPES)
