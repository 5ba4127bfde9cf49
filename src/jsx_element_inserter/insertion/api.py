"""High-level insertion entry points.

Progressive disclosure:
- :func:`insert_element_to_node` inserts into one element the caller already holds.
- :func:`insert_into_first_match` walks a tree and inserts into the first
  element a predicate selects, then stops the walk.
- :func:`insert_into_source` does the same starting from and returning JSX text.
"""

import time
import uuid
from typing import Callable, Optional

from jsx_element_inserter.insertion.builder import ElementBuilder
from jsx_element_inserter.insertion.position import InsertionResult, PositionResolver
from jsx_element_inserter.insertion.requests import InsertionRequest
from jsx_element_inserter.parsing import parse_jsx_fragment
from jsx_element_inserter.shared.config import InserterConfig
from jsx_element_inserter.shared.logging import get_logger
from jsx_element_inserter.tree.generator import generate
from jsx_element_inserter.tree.nodes import (
    ELEMENT_LIKE_TYPES,
    JSXElement,
    JSXNode,
    ParentNode,
)
from jsx_element_inserter.tree.traversal import NodePath, VisitSignal, traverse

MS_PER_SECOND = 1000

ElementPredicate = Callable[[ParentNode], bool]


def _resolve_correlation_id(
    config: InserterConfig, correlation_id: Optional[str]
) -> Optional[str]:
    if correlation_id is None and config.global_.enable_correlation_tracking:
        return uuid.uuid4().hex
    return correlation_id


def insert_element_to_node(
    parent: ParentNode,
    request: InsertionRequest,
    config: Optional[InserterConfig] = None,
    correlation_id: Optional[str] = None
) -> InsertionResult:
    """Build the requested node and insert it into ``parent``.

    Args:
        parent: Element or fragment to insert into
        request: What to insert and where
        config: Optional configuration, defaults to InserterConfig()
        correlation_id: Optional correlation ID; generated when tracking is on

    Returns:
        InsertionResult with ``signal`` set to ``VisitSignal.STOP``

    Raises:
        ParseError: If the request's code block does not parse; the tree is
            left untouched

    Examples:
        >>> parent = parse_jsx_fragment('<ul><li>a</li></ul>')
        >>> request = InsertionRequest(code_block='<li>b</li>')
        >>> insert_element_to_node(parent, request).physical_index
        1
    """
    config = config or InserterConfig()
    correlation_id = _resolve_correlation_id(config, correlation_id)
    start_time = time.time()

    builder = ElementBuilder(config=config.builder, correlation_id=correlation_id)
    resolver = PositionResolver(config=config.resolver, correlation_id=correlation_id)

    new_child = builder.build(request)
    result = resolver.insert(parent, new_child, request.position)

    result.performance.nodes_built = builder.nodes_built
    result.performance.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
    return result


def insert_into_first_match(
    root: JSXNode,
    predicate: ElementPredicate,
    request: InsertionRequest,
    config: Optional[InserterConfig] = None,
    correlation_id: Optional[str] = None
) -> Optional[InsertionResult]:
    """Insert into the first node, in document order, that ``predicate`` accepts.

    The traversal halts as soon as the insertion has been applied, so at most
    one node is modified even when several match. Fragments are offered to
    ``predicate`` too; the helpers below only ever select elements.

    Returns:
        The InsertionResult, or None when no element matched
    """
    config = config or InserterConfig()
    correlation_id = _resolve_correlation_id(config, correlation_id)
    logger = get_logger(__name__, correlation_id, "insertion_api")
    results = []

    def visit(path: NodePath) -> VisitSignal:
        if not predicate(path.node):  # type: ignore[arg-type]
            return VisitSignal.CONTINUE
        result = insert_element_to_node(
            path.node, request, config=config, correlation_id=correlation_id  # type: ignore[arg-type]
        )
        results.append(result)
        return result.signal

    traverse(root, visit, node_types=ELEMENT_LIKE_TYPES)

    if not results:
        logger.warning("No element matched the insertion target")
        return None
    return results[0]


def insert_into_source(
    source: str,
    predicate: ElementPredicate,
    request: InsertionRequest,
    config: Optional[InserterConfig] = None,
    correlation_id: Optional[str] = None
) -> Optional[str]:
    """Parse JSX source, insert into the first matching element, render it back.

    Returns:
        The new source, or None when no element matched

    Raises:
        ParseError: If ``source`` or the request's code block does not parse
    """
    root = parse_jsx_fragment(source, correlation_id=correlation_id)
    result = insert_into_first_match(
        root, predicate, request, config=config, correlation_id=correlation_id
    )
    if result is None:
        return None
    return generate(root)


def match_tag(tag_name: str) -> ElementPredicate:
    """Predicate selecting elements by exact tag name."""
    return lambda node: isinstance(node, JSXElement) and node.name == tag_name


def match_attribute(name: str, value: Optional[str] = None) -> ElementPredicate:
    """Predicate selecting elements by attribute presence or string value."""
    def predicate(node: ParentNode) -> bool:
        if not isinstance(node, JSXElement):
            return False
        attribute = node.get_attribute(name)
        if attribute is None:
            return False
        return value is None or node.get_attribute_text(name) == value

    return predicate
