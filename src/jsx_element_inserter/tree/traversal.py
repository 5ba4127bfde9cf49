"""Single-pass traversal over a JSX tree with an explicit halt signal.

Visitors return a :class:`VisitSignal`. Returning ``STOP`` ends the whole walk
immediately, which is how an insertion guarantees it is applied to at most one
node per pass.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple, Type

from jsx_element_inserter.tree.nodes import JSXElement, JSXNode, ParentNode


class VisitSignal(Enum):
    """What the traversal should do after a visitor returns."""

    CONTINUE = auto()   # Visit this node's children, then its siblings
    SKIP = auto()       # Do not descend into this node's children
    STOP = auto()       # End the traversal now


@dataclass
class NodePath:
    """Location of a visited node within the tree."""

    node: JSXNode
    parent: Optional[ParentNode] = None
    index: Optional[int] = None
    depth: int = 0

    @property
    def is_root(self) -> bool:
        """Check whether the visited node is the traversal root."""
        return self.parent is None


Visitor = Callable[[NodePath], Optional[VisitSignal]]


def traverse(
    root: JSXNode,
    visitor: Visitor,
    node_types: Tuple[Type[JSXNode], ...] = (JSXElement,),
) -> bool:
    """Walk a tree depth-first in document order.

    Args:
        root: Node to start from; visited first
        visitor: Callable receiving a NodePath; a None return means CONTINUE
        node_types: Node classes passed to the visitor; other nodes are
            walked through but not visited

    Returns:
        True if a visitor returned ``VisitSignal.STOP``
    """
    stack: List[NodePath] = [NodePath(node=root)]

    while stack:
        path = stack.pop()
        signal = VisitSignal.CONTINUE
        if isinstance(path.node, node_types):
            signal = visitor(path) or VisitSignal.CONTINUE

        if signal is VisitSignal.STOP:
            return True
        if signal is VisitSignal.SKIP:
            continue

        children = getattr(path.node, "children", None)
        if not children:
            continue
        # Reverse so the first child is popped first.
        for index in range(len(children) - 1, -1, -1):
            stack.append(NodePath(
                node=children[index],
                parent=path.node,  # type: ignore[arg-type]
                index=index,
                depth=path.depth + 1,
            ))

    return False


def find_first(
    root: JSXNode,
    predicate: Callable[[JSXElement], bool],
) -> Optional[JSXElement]:
    """Find the first element in document order that matches a predicate."""
    found: List[JSXElement] = []

    def visit(path: NodePath) -> VisitSignal:
        if predicate(path.node):  # type: ignore[arg-type]
            found.append(path.node)  # type: ignore[arg-type]
            return VisitSignal.STOP
        return VisitSignal.CONTINUE

    traverse(root, visit)
    return found[0] if found else None
