"""JSX tree model, traversal and source generation.

Key Components:
    JSXElement, JSXFragment: Element-like nodes that own ordered child lists
    JSXText, JSXExpressionContainer: Non-element children kept in place
    traverse: Depth-first walk that halts on VisitSignal.STOP
    generate: Renders a node back to JSX source
"""

from .nodes import (
    ELEMENT_LIKE_TYPES,
    Attribute,
    AttributeValue,
    Expression,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXFragment,
    JSXNode,
    JSXSpreadAttribute,
    JSXText,
    ParentNode,
    RawExpression,
    StringLiteral,
    is_element_like,
)
from .traversal import NodePath, VisitSignal, Visitor, find_first, traverse
from .generator import generate

__all__ = [
    "ELEMENT_LIKE_TYPES",
    "Attribute",
    "AttributeValue",
    "Expression",
    "JSXAttribute",
    "JSXElement",
    "JSXExpressionContainer",
    "JSXFragment",
    "JSXNode",
    "JSXSpreadAttribute",
    "JSXText",
    "ParentNode",
    "RawExpression",
    "StringLiteral",
    "is_element_like",
    "NodePath",
    "VisitSignal",
    "Visitor",
    "find_first",
    "traverse",
    "generate",
]
