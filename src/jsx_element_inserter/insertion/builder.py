"""Element construction for insertion requests.

Turns an :class:`InsertionRequest` into one detached node: code blocks go
through the fragment parser untouched, structured descriptions are built
recursively into fresh :class:`JSXElement` trees.
"""

import json
from typing import Any, Callable, List, Optional

from jsx_element_inserter.insertion.requests import ElementDescription, InsertionRequest
from jsx_element_inserter.parsing import parse_jsx_fragment
from jsx_element_inserter.shared.config import BuilderConfig
from jsx_element_inserter.shared.errors import AttributeSerializationError
from jsx_element_inserter.shared.logging import get_logger
from jsx_element_inserter.tree.nodes import (
    Attribute,
    AttributeValue,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXNode,
    JSXText,
    StringLiteral,
)

FragmentParserFunc = Callable[[str], JSXNode]


class ElementBuilder:
    """Builds detached nodes from insertion requests.

    The builder holds no state between calls besides its configuration and a
    counter of nodes created by the most recent :meth:`build`.
    """

    def __init__(
        self,
        config: Optional[BuilderConfig] = None,
        parser: Optional[FragmentParserFunc] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the builder.

        Args:
            config: Builder configuration, defaults to BuilderConfig()
            parser: Callable turning a code block into a node; defaults to
                :func:`parse_jsx_fragment`
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or BuilderConfig()
        self.correlation_id = correlation_id
        self.parser = parser or (
            lambda source: parse_jsx_fragment(source, correlation_id=correlation_id)
        )
        self.logger = get_logger(__name__, correlation_id, "element_builder")
        self.nodes_built = 0

    def build(self, request: InsertionRequest) -> JSXNode:
        """Build the node a request describes.

        Args:
            request: Insertion request

        Returns:
            A detached node ready to be inserted

        Raises:
            ParseError: If the request's code block does not parse
            AttributeSerializationError: If an attribute value is not JSON encodable
        """
        self.nodes_built = 0

        if request.uses_code_block:
            self.logger.debug(
                "Building node from code block",
                extra={"content_length": len(request.code_block or "")},
            )
            node = self.parser(request.code_block or "")
            self.nodes_built = 1
            return node

        if request.description is None:
            raise ValueError("Insertion request has nothing to build")
        self.logger.debug(
            "Building element from description",
            extra={"tag_name": request.description.tag_name},
        )
        return self.build_element(request.description)

    def build_element(self, description: ElementDescription) -> JSXElement:
        """Build an element tree from a structured description.

        Self-closing tags get no children even when the description has text
        or nested children.
        """
        attributes: List[Attribute] = [
            JSXAttribute(name=name, value=self.attribute_value(name, value))
            for name, value in description.attributes.items()
        ]
        self_closing = self.config.is_self_closing(description.tag_name)

        children: List[JSXNode] = []
        if not self_closing:
            if self._has_text(description.text_content):
                children.append(JSXText(description.text_content or ""))
            children.extend(self.build_element(child) for child in description.children)

        self.nodes_built += 1
        return JSXElement(
            name=description.tag_name,
            attributes=attributes,
            children=children,
            self_closing=self_closing,
        )

    def attribute_value(self, name: str, value: Any) -> AttributeValue:
        """Convert a description attribute value into a JSX attribute value.

        Strings stay string literals. Anything else is JSON encoded and wrapped
        as ``{"<json>"}``, which is how non-string props are written in markup.
        """
        if isinstance(value, str):
            return StringLiteral(value)

        try:
            encoded = json.dumps(
                value,
                separators=self.config.json_separators,
                ensure_ascii=self.config.json_ensure_ascii,
                allow_nan=False,
            )
        except (TypeError, ValueError) as e:
            raise AttributeSerializationError(name, value) from e
        return JSXExpressionContainer(expression=StringLiteral(encoded))

    def _has_text(self, text_content: Optional[str]) -> bool:
        if text_content is None:
            return False
        return bool(text_content) or not self.config.skip_empty_text
