"""Render JSX nodes back to source text.

Output is compact: attributes are separated by single spaces, children are
written exactly as stored (text nodes keep their own whitespace) and
self-closing elements are written as ``<tag />``.

Text holding ``<``, ``>``, ``{`` or ``}`` cannot appear raw in JSX, so such a
text node is written as a string expression, ``{"a < b"}``, which renders
the same text.
"""

import json
from typing import List

from jsx_element_inserter.tree.nodes import (
    Attribute,
    Expression,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXFragment,
    JSXNode,
    JSXSpreadAttribute,
    JSXText,
    RawExpression,
    StringLiteral,
)

_JSX_TEXT_RESERVED = "<>{}"


def generate(node: JSXNode) -> str:
    """Render a node and its descendants as JSX source.

    Args:
        node: Any child-list node

    Returns:
        JSX source text

    Raises:
        TypeError: If the node type is not part of the JSX model
    """
    parts: List[str] = []
    _emit(node, parts)
    return "".join(parts)


def _emit(node: JSXNode, parts: List[str]) -> None:
    if isinstance(node, JSXText):
        if any(char in _JSX_TEXT_RESERVED for char in node.value):
            parts.append("{" + json.dumps(node.value, ensure_ascii=False) + "}")
        else:
            parts.append(node.value)
    elif isinstance(node, JSXExpressionContainer):
        parts.append(_container(node))
    elif isinstance(node, JSXFragment):
        parts.append("<>")
        for child in node.children:
            _emit(child, parts)
        parts.append("</>")
    elif isinstance(node, JSXElement):
        opening = node.name + "".join(" " + _attribute(a) for a in node.attributes)
        if node.self_closing and not node.children:
            parts.append(f"<{opening} />")
            return
        parts.append(f"<{opening}>")
        for child in node.children:
            _emit(child, parts)
        parts.append(f"</{node.name}>")
    else:
        raise TypeError(f"Cannot generate source for {type(node).__name__}")


def _expression(expression: Expression) -> str:
    if isinstance(expression, StringLiteral):
        return json.dumps(expression.value, ensure_ascii=False)
    if isinstance(expression, RawExpression):
        return expression.source
    raise TypeError(f"Cannot generate source for {type(expression).__name__}")


def _container(container: JSXExpressionContainer) -> str:
    if container.expression is None:
        return "{}"
    return "{" + _expression(container.expression) + "}"


def _attribute(attribute: Attribute) -> str:
    if isinstance(attribute, JSXSpreadAttribute):
        return "{..." + attribute.argument.source + "}"
    if not isinstance(attribute, JSXAttribute):
        raise TypeError(f"Cannot generate source for {type(attribute).__name__}")

    value = attribute.value
    if value is None:
        return attribute.name
    if isinstance(value, JSXExpressionContainer):
        return f"{attribute.name}={_container(value)}"

    # JSX attribute strings have no escapes; switch quotes or fall back to {"..."}.
    if '"' not in value.value:
        return f'{attribute.name}="{value.value}"'
    if "'" not in value.value:
        return f"{attribute.name}='{value.value}'"
    return f"{attribute.name}={{{_expression(value)}}}"
