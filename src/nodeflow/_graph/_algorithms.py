"""Graph algorithms for dependency traversal."""

from collections.abc import Callable, Hashable, Sequence
from typing import TypeVar

T = TypeVar("T", bound=Hashable)


class CycleError(ValueError):
    """Raised when a traversal reaches a node already on its own path."""

    def __init__(self, node: Hashable) -> None:
        self.node = node
        super().__init__(f"Cycle detected at node {node!r}")


def postorder(start: T, producers: Callable[[T], Sequence[T]]) -> list[T]:
    """List the nodes reachable from ``start`` with producers before consumers.

    The walk unfolds the graph into a tree: a node reachable along several
    paths is emitted once per path, so a value consumed twice is produced
    twice. Producers of the same node are emitted in the order
    ``producers`` returns them.

    Args:
        start: The node to start from; it is always the last element.
        producers: Returns the direct producers of a node.

    Returns:
        List of nodes in postorder.

    Raises:
        CycleError: If a node is reachable from itself.

    Example:
        >>> # c takes its value from b, b from a
        >>> postorder("c", {"a": [], "b": ["a"], "c": ["b"]}.__getitem__)
        ['a', 'b', 'c']

    """
    order: list[T] = []
    on_path: set[T] = set()
    stack: list[tuple[T, bool]] = [(start, False)]

    while stack:
        node, expanded = stack.pop()
        if expanded:
            on_path.discard(node)
            order.append(node)
            continue

        if node in on_path:
            raise CycleError(node)
        on_path.add(node)
        stack.append((node, True))
        # Reversed so the first producer is popped, and therefore emitted, first
        stack.extend((producer, False) for producer in reversed(producers(node)))

    return order
