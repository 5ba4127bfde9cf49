"""Element construction and positional insertion.

Key Components:
    ElementBuilder: Builds a detached node from an InsertionRequest
    PositionResolver: Splices a node into a parent at a PositionSpec
    InsertionResult: Where the node landed, diagnostics and the halt signal
    insert_element_to_node: Build and insert in one call
"""

from .requests import (
    INVALID_INDEX,
    Append,
    AtLogicalIndex,
    ElementDescription,
    InsertionRequest,
    InsertPosition,
    PositionSpec,
    Prepend,
    position_from_dict,
    position_to_dict,
)
from .builder import ElementBuilder
from .position import InsertionResult, PositionResolver
from .api import (
    insert_element_to_node,
    insert_into_first_match,
    insert_into_source,
    match_attribute,
    match_tag,
)

__all__ = [
    "INVALID_INDEX",
    "Append",
    "AtLogicalIndex",
    "ElementDescription",
    "InsertionRequest",
    "InsertPosition",
    "PositionSpec",
    "Prepend",
    "position_from_dict",
    "position_to_dict",
    "ElementBuilder",
    "InsertionResult",
    "PositionResolver",
    "insert_element_to_node",
    "insert_into_first_match",
    "insert_into_source",
    "match_attribute",
    "match_tag",
]
