"""Tokenization of JSX source fragments.

Key Components:
    JSXTokenizer: Context-switching tokenizer for one JSX fragment
    Token: Individual token with type, value and position
    TokenType: Enumeration of all token types
    TokenPosition: Line, column and offset of a token
    TokenizerState: Lexing contexts the tokenizer switches between
"""

from .tokenizer import (
    JSXTokenizer,
    Token,
    TokenizationResult,
    TokenizerState,
    TokenPosition,
    TokenType,
)

__all__ = [
    "JSXTokenizer",
    "Token",
    "TokenizationResult",
    "TokenizerState",
    "TokenPosition",
    "TokenType",
]
