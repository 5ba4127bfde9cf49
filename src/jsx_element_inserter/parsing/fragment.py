"""Parser that turns a JSX code block into a single detached node.

A code block must hold exactly one element or fragment, optionally surrounded
by whitespace. Anything else (several roots, stray text, unbalanced tags)
raises :class:`ParseError`; the parser never repairs input.
"""

import time
from typing import List, Optional

from jsx_element_inserter.shared.errors import ParseError
from jsx_element_inserter.shared.logging import get_logger
from jsx_element_inserter.tokenization import JSXTokenizer, Token, TokenType
from jsx_element_inserter.tree.nodes import (
    Attribute,
    AttributeValue,
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
)

MS_PER_SECOND = 1000
PREVIEW_LENGTH = 80


class FragmentParser:
    """Recursive-descent parser over :class:`JSXTokenizer` output."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the parser.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "fragment_parser")
        self.tokenizer = JSXTokenizer(correlation_id=correlation_id)
        self._tokens: List[Token] = []
        self._index = 0

    def parse(self, source: str) -> ParentNode:
        """Parse a code block into one element or fragment.

        Args:
            source: JSX source holding a single root element or fragment

        Returns:
            The root node, detached (its ``parent`` is None)

        Raises:
            ParseError: If the source is not exactly one well-formed element
        """
        start_time = time.time()
        self.logger.debug(
            "Starting fragment parse",
            extra={
                "content_length": len(source),
                "preview": (
                    source[:PREVIEW_LENGTH] + "..."
                    if len(source) > PREVIEW_LENGTH else source
                ),
            },
        )

        try:
            self._tokens = self.tokenizer.tokenize(source).tokens
            self._index = 0

            self._skip_blank_text()
            opening = self._expect(TokenType.TAG_OPEN, "Code block must start with a JSX element")
            root = self._parse_element(opening)
            self._skip_blank_text()
            if self._peek().type is not TokenType.EOF:
                raise self._error(
                    "Code block must contain a single JSX element", self._peek()
                )
        except ParseError as e:
            self.logger.warning(
                "Fragment parse failed",
                extra={"reason": e.reason, "position": e.position},
            )
            raise

        self.logger.debug(
            "Fragment parse completed",
            extra={
                "root_type": type(root).__name__,
                "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
            },
        )
        return root

    # Token cursor

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.type is not TokenType.EOF:
            self._index += 1
        return token

    def _expect(self, token_type: TokenType, message: str) -> Token:
        token = self._peek()
        if token.type is not token_type:
            raise self._error(message, token)
        return self._advance()

    def _error(self, message: str, token: Token) -> ParseError:
        return ParseError(
            message, token.position.line, token.position.column, token.position.offset
        )

    def _skip_blank_text(self) -> None:
        while self._peek().type is TokenType.TEXT and not self._peek().value.strip():
            self._advance()

    # Grammar

    def _parse_element(self, opening: Token) -> ParentNode:
        """Parse from just after ``<`` through the matching close."""
        if self._peek().type is TokenType.TAG_END:
            self._advance()
            fragment = JSXFragment(children=self._parse_children(opening))
            self._expect(TokenType.TAG_END, "Expected '>' to close fragment")
            return fragment

        name = self._expect(TokenType.TAG_NAME, "Expected element name").value
        attributes = self._parse_attributes()

        if self._peek().type is TokenType.SELF_CLOSE:
            self._advance()
            return JSXElement(name=name, attributes=attributes, self_closing=True)

        self._expect(TokenType.TAG_END, f"Expected '>' after <{name}")
        children = self._parse_children(opening)
        closing = self._peek()
        if closing.type is not TokenType.TAG_NAME or closing.value != name:
            raise self._error(f"Expected corresponding closing tag for <{name}>", closing)
        self._advance()
        self._expect(TokenType.TAG_END, f"Expected '>' after </{name}")
        return JSXElement(name=name, attributes=attributes, children=children)

    def _parse_attributes(self) -> List[Attribute]:
        attributes: List[Attribute] = []
        while True:
            token = self._peek()
            if token.type is TokenType.SPREAD:
                self._advance()
                if not token.value:
                    raise self._error("Spread attribute needs an argument", token)
                attributes.append(JSXSpreadAttribute(argument=RawExpression(token.value)))
            elif token.type is TokenType.ATTR_NAME:
                self._advance()
                value = self._parse_attribute_value()
                attributes.append(JSXAttribute(name=token.value, value=value))
            elif token.type in (TokenType.TAG_END, TokenType.SELF_CLOSE):
                return attributes
            else:
                raise self._error("Expected attribute or end of tag", token)

    def _parse_attribute_value(self) -> Optional[AttributeValue]:
        if self._peek().type is not TokenType.EQUALS:
            return None
        self._advance()

        token = self._advance()
        if token.type is TokenType.STRING:
            return StringLiteral(token.value)
        if token.type is TokenType.EXPRESSION:
            if not token.value.strip():
                raise self._error("Attribute expression cannot be empty", token)
            return JSXExpressionContainer(expression=RawExpression(token.value.strip()))
        raise self._error("Expected string or expression attribute value", token)

    def _parse_children(self, opening: Token) -> List[JSXNode]:
        """Parse children up to and including the ``</`` of the closing tag."""
        children: List[JSXNode] = []
        while True:
            token = self._advance()
            if token.type is TokenType.TEXT:
                children.append(JSXText(token.value))
            elif token.type is TokenType.EXPRESSION:
                body = token.value.strip()
                children.append(JSXExpressionContainer(
                    expression=RawExpression(body) if body else None
                ))
            elif token.type is TokenType.TAG_OPEN:
                children.append(self._parse_element(token))
            elif token.type is TokenType.CLOSING_TAG_OPEN:
                return children
            elif token.type is TokenType.EOF:
                raise self._error("Unclosed element", opening)
            else:
                raise self._error("Unexpected token in element children", token)


def parse_jsx_fragment(source: str, correlation_id: Optional[str] = None) -> ParentNode:
    """Parse a JSX code block into a single detached element or fragment.

    Args:
        source: JSX source holding exactly one root element or fragment
        correlation_id: Optional correlation ID for request tracking

    Returns:
        JSXElement or JSXFragment

    Raises:
        ParseError: If the source is malformed

    Examples:
        >>> node = parse_jsx_fragment('<div className="a">hi</div>')
        >>> node.name
        'div'
    """
    return FragmentParser(correlation_id=correlation_id).parse(source)
