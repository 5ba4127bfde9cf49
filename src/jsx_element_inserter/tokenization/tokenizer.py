"""Tokenizer for JSX source fragments.

JSX lexing depends on context: between tags everything up to ``<`` or ``{``
is text, while inside a tag whitespace separates names, strings and braces.
The tokenizer switches between the two states itself and scans expression
bodies as balanced brace blocks so that strings, template literals and
comments containing braces do not end an expression early.
"""

import bisect
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from jsx_element_inserter.shared.errors import ParseError
from jsx_element_inserter.shared.logging import get_logger

MS_PER_SECOND = 1000
_NAME_PUNCTUATION = "-.:"
# Characters after which "<" starts an operand, not a comparison.
_OPERAND_PRECEDERS = "{([,;=?:&|!>"


class TokenType(Enum):
    """JSX token types produced by the tokenizer."""

    TAG_OPEN = auto()           # "<" starting an opening tag or fragment
    CLOSING_TAG_OPEN = auto()   # "</" starting a closing tag or fragment close
    TAG_END = auto()            # ">" ending a tag
    SELF_CLOSE = auto()         # "/>" ending a self-closing tag
    TAG_NAME = auto()           # Element name, may be dotted or namespaced
    ATTR_NAME = auto()          # Attribute name
    EQUALS = auto()             # "=" between attribute name and value
    STRING = auto()             # Quoted attribute value, quotes removed
    EXPRESSION = auto()         # Body of a {...} block, braces removed
    SPREAD = auto()             # Argument of a {...expr} attribute
    TEXT = auto()               # Character content between tags
    EOF = auto()                # End of input


class TokenizerState(Enum):
    """Lexing context."""

    CHILDREN = auto()       # Between tags: text, expressions and tag starts
    TAG = auto()            # Inside <...> or </...>


@dataclass
class TokenPosition:
    """Position information for JSX tokens."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")


@dataclass
class Token:
    """Represents a single JSX token with its source position."""

    type: TokenType
    value: str
    position: TokenPosition


@dataclass
class TokenizationResult:
    """Result of tokenizing one source fragment."""

    tokens: List[Token] = field(default_factory=list)
    character_count: int = 0
    processing_time_ms: float = 0.0

    @property
    def token_count(self) -> int:
        """Get the number of tokens, EOF included."""
        return len(self.tokens)


class JSXTokenizer:
    """Context-switching tokenizer for a single JSX fragment.

    Raises :class:`ParseError` on unterminated strings, expressions, comments
    or tags, and on characters JSX does not allow in text.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the tokenizer.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "jsx_tokenizer")
        self._reset_state("")

    def _reset_state(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.state = TokenizerState.CHILDREN
        self.tokens: List[Token] = []
        self._expect_tag_name = False
        self._line_starts = [0] + [
            index + 1 for index, char in enumerate(source) if char == "\n"
        ]

    def tokenize(self, source: str) -> TokenizationResult:
        """Tokenize a JSX fragment.

        Args:
            source: JSX source text

        Returns:
            TokenizationResult whose last token is EOF
        """
        start_time = time.time()
        self._reset_state(source)

        while self.pos < len(self.source):
            if self.state is TokenizerState.CHILDREN:
                self._lex_children()
            else:
                self._lex_tag()

        if self.state is TokenizerState.TAG:
            raise self._error("Unterminated tag", len(self.source))
        self._emit(TokenType.EOF, "", len(self.source))

        result = TokenizationResult(
            tokens=self.tokens,
            character_count=len(source),
            processing_time_ms=(time.time() - start_time) * MS_PER_SECOND,
        )
        self.logger.debug(
            "Tokenization completed",
            extra={"token_count": result.token_count, "character_count": len(source)},
        )
        return result

    # Position helpers

    def _position(self, offset: int) -> TokenPosition:
        line_index = bisect.bisect_right(self._line_starts, offset) - 1
        return TokenPosition(
            line=line_index + 1,
            column=offset - self._line_starts[line_index] + 1,
            offset=offset,
        )

    def _emit(self, token_type: TokenType, value: str, offset: int) -> None:
        self.tokens.append(Token(token_type, value, self._position(offset)))

    def _error(self, message: str, offset: int) -> ParseError:
        position = self._position(min(offset, len(self.source)))
        return ParseError(message, position.line, position.column, position.offset)

    # Children context

    def _lex_children(self) -> None:
        source = self.source
        start = self.pos
        char = source[start]

        if char == "<":
            if source.startswith("</", start):
                self._emit(TokenType.CLOSING_TAG_OPEN, "</", start)
                self.pos = start + 2
            else:
                self._emit(TokenType.TAG_OPEN, "<", start)
                self.pos = start + 1
            self.state = TokenizerState.TAG
            self._expect_tag_name = True
            return

        if char == "{":
            end = self._scan_braces(start)
            self._emit(TokenType.EXPRESSION, source[start + 1:end], start)
            self.pos = end + 1
            return

        end = start
        while end < len(source) and source[end] not in "<{":
            if source[end] in ">}":
                raise self._error(f"Unexpected '{source[end]}' in JSX text", end)
            end += 1
        self._emit(TokenType.TEXT, source[start:end], start)
        self.pos = end

    # Tag context

    def _lex_tag(self) -> None:
        source = self.source
        start = self._skip_trivia(self.pos)
        self.pos = start
        if start >= len(source):
            return
        char = source[start]

        if char == ">":
            self._emit(TokenType.TAG_END, ">", start)
            self.pos = start + 1
            self.state = TokenizerState.CHILDREN
        elif source.startswith("/>", start):
            self._emit(TokenType.SELF_CLOSE, "/>", start)
            self.pos = start + 2
            self.state = TokenizerState.CHILDREN
        elif char == "=":
            self._emit(TokenType.EQUALS, "=", start)
            self.pos = start + 1
        elif char in "\"'":
            end = source.find(char, start + 1)
            if end == -1:
                raise self._error("Unterminated string literal", start)
            self._emit(TokenType.STRING, source[start + 1:end], start)
            self.pos = end + 1
        elif char == "{":
            end = self._scan_braces(start)
            body = source[start + 1:end]
            stripped = body.strip()
            if stripped.startswith("..."):
                self._emit(TokenType.SPREAD, stripped[3:].strip(), start)
            else:
                self._emit(TokenType.EXPRESSION, body, start)
            self.pos = end + 1
        elif char.isalpha() or char in "_$":
            end = start + 1
            while end < len(source) and (
                source[end].isalnum() or source[end] in "_$" + _NAME_PUNCTUATION
            ):
                end += 1
            token_type = TokenType.TAG_NAME if self._expect_tag_name else TokenType.ATTR_NAME
            self._emit(token_type, source[start:end], start)
            self.pos = end
        elif char == "<":
            raise self._error("Unexpected '<' inside tag", start)
        else:
            raise self._error(f"Unexpected character '{char}' inside tag", start)

        self._expect_tag_name = False

    def _skip_trivia(self, offset: int) -> int:
        """Skip whitespace and JavaScript comments inside a tag."""
        source = self.source
        while offset < len(source):
            if source[offset].isspace():
                offset += 1
            elif source.startswith("//", offset):
                newline = source.find("\n", offset)
                offset = len(source) if newline == -1 else newline + 1
            elif source.startswith("/*", offset):
                end = source.find("*/", offset + 2)
                if end == -1:
                    raise self._error("Unterminated comment", offset)
                offset = end + 2
            else:
                break
        return offset

    # Expression scanning

    def _scan_braces(self, start: int) -> int:
        """Return the offset of the ``}`` matching the ``{`` at ``start``."""
        source = self.source
        depth = 0
        offset = start
        while offset < len(source):
            char = source[offset]
            if char == "<" and self._starts_nested_jsx(start, offset):
                offset = self._skip_nested_jsx(offset)
                continue
            if char in "\"'":
                offset = self._skip_string(offset)
                continue
            if char == "`":
                offset = self._skip_template(offset)
                continue
            if source.startswith("//", offset):
                newline = source.find("\n", offset)
                if newline == -1:
                    break
                offset = newline + 1
                continue
            if source.startswith("/*", offset):
                end = source.find("*/", offset + 2)
                if end == -1:
                    raise self._error("Unterminated comment", offset)
                offset = end + 2
                continue
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return offset
            offset += 1
        raise self._error("Unterminated expression", start)

    def _starts_nested_jsx(self, expression_start: int, offset: int) -> bool:
        """Tell a JSX tag from a less-than operator inside an expression.

        ``<`` opens a tag only when a name or ``>`` follows it and it sits
        where an operand is expected, e.g. after ``&&``, ``(``, ``=>`` or
        at the start of the expression.
        """
        following = self.source[offset + 1:offset + 2]
        if not (following.isalpha() or following in ("_", "$", ">")):
            return False
        before = self.source[expression_start:offset].rstrip()
        return before[-1] in _OPERAND_PRECEDERS or before.endswith("return")

    def _skip_nested_jsx(self, start: int) -> int:
        """Return the offset just past the JSX element starting at ``start``.

        Text inside nested JSX follows JSX rules, so apostrophes and slashes
        there are plain characters.
        """
        source = self.source
        depth = 0
        offset = start
        while offset < len(source):
            char = source[offset]
            if char == "{":
                offset = self._scan_braces(offset) + 1
                continue
            if char != "<":
                offset += 1
                continue

            closing = source.startswith("</", offset)
            offset = self._skip_nested_tag(offset)
            if closing:
                depth -= 1
            elif not source.startswith("/>", offset - 2):
                depth += 1
            if depth == 0:
                return offset
        raise self._error("Unterminated JSX element inside expression", start)

    def _skip_nested_tag(self, start: int) -> int:
        source = self.source
        offset = start + 1
        while offset < len(source):
            char = source[offset]
            if char in "\"'":
                end = source.find(char, offset + 1)
                if end == -1:
                    raise self._error("Unterminated string literal", offset)
                offset = end + 1
            elif char == "{":
                offset = self._scan_braces(offset) + 1
            elif char == ">":
                return offset + 1
            else:
                offset += 1
        raise self._error("Unterminated tag", start)

    def _skip_string(self, start: int) -> int:
        source = self.source
        quote = source[start]
        offset = start + 1
        while offset < len(source):
            char = source[offset]
            if char == "\\":
                offset += 2
                continue
            if char == quote:
                return offset + 1
            if char == "\n":
                break
            offset += 1
        raise self._error("Unterminated string literal", start)

    def _skip_template(self, start: int) -> int:
        source = self.source
        offset = start + 1
        while offset < len(source):
            char = source[offset]
            if char == "\\":
                offset += 2
                continue
            if char == "`":
                return offset + 1
            if source.startswith("${", offset):
                offset = self._scan_braces(offset + 1) + 1
                continue
            offset += 1
        raise self._error("Unterminated template literal", start)
