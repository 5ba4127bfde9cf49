"""JSX Element Inserter.

Inserts a newly built or newly parsed element into a JSX element's children at
an append, prepend or logical-index position, keeping the text, whitespace and
expression children that sit between elements exactly where they were.

Progressive API Disclosure:
- Level 1: insert_into_source() on JSX text
- Level 2: insert_element_to_node() / insert_into_first_match() on parsed trees
- Level 3: ElementBuilder and PositionResolver used directly
"""

__version__ = "0.1.0"
__author__ = "JSX Element Inserter Team"

from .insertion import (
    Append,
    AtLogicalIndex,
    ElementBuilder,
    ElementDescription,
    InsertionRequest,
    InsertionResult,
    PositionResolver,
    Prepend,
    insert_element_to_node,
    insert_into_first_match,
    insert_into_source,
    match_attribute,
    match_tag,
)
from .parsing import parse_jsx_fragment
from .shared import InserterConfig, ParseError
from .tree import JSXElement, JSXFragment, generate

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Source-to-source insertion
    "insert_into_source",

    # Level 2: Tree insertion
    "insert_element_to_node",
    "insert_into_first_match",
    "match_attribute",
    "match_tag",
    "parse_jsx_fragment",
    "generate",

    # Level 3: Components and request types
    "ElementBuilder",
    "PositionResolver",
    "InsertionRequest",
    "InsertionResult",
    "ElementDescription",
    "Append",
    "Prepend",
    "AtLogicalIndex",
    "JSXElement",
    "JSXFragment",

    # Configuration and errors
    "InserterConfig",
    "ParseError",
]
