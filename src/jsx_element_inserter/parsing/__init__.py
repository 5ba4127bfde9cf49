"""Parsing of JSX code blocks into detached tree nodes."""

from .fragment import FragmentParser, parse_jsx_fragment

__all__ = ["FragmentParser", "parse_jsx_fragment"]
