"""Core evaluation engine for computation graphs."""

import logging
import math

from nodeflow._errors import EmptyGraphError, MalformedGraphError, NotFoundError
from nodeflow._graph import CycleError, GraphStore, postorder
from nodeflow._node import NodeId, NodeKind

from ._clock import Clock, MonotonicClock

logger = logging.getLogger(__name__)


def _take(stack: list[float], count: int, root_id: NodeId, node_id: NodeId, kind: NodeKind) -> list[float]:
    """Pop ``count`` operands off the stack, oldest first."""
    if len(stack) < count:
        msg = f"{kind} node {node_id} needs {count} value(s) but only {len(stack)} available"
        raise MalformedGraphError(root_id, msg)
    operands = stack[-count:]
    del stack[-count:]
    return operands


def evaluate_graph(store: GraphStore, root_id: NodeId, time_s: float) -> float:  # noqa: C901
    """Evaluate the graph feeding ``root_id`` and store the result in it.

    This function:
    1. Orders the nodes reachable from the root producers-first
    2. Folds the ordered nodes over a value stack
    3. Writes the sampled time into every TIME_SOURCE node visited and the
       result into the root

    Nothing is written back unless the whole evaluation succeeds.

    Args:
        store: The graph to evaluate.
        root_id: The node whose value is requested, usually the sink.
        time_s: The time reference pushed by TIME_SOURCE nodes.

    Returns:
        The value computed for the root.

    Raises:
        NotFoundError: If ``root_id`` is not a live node.
        MalformedGraphError: If the producers wired to a node do not match its
            operation, or the root reaches a cycle.
        EmptyGraphError: If the root has no producers and pushes no value of
            its own, or no value is produced for the root.

    Example:
        >>> store = GraphStore()
        >>> source = store.insert_node(NodeKind.CONST_SOURCE, value=0.5)
        >>> sink = store.insert_node(NodeKind.SINK)
        >>> _ = store.insert_edge(sink, source)
        >>> evaluate_graph(store, sink, time_s=0.0)
        0.5

    """
    if root_id not in store:
        raise NotFoundError("node", root_id)

    root = store.node(root_id)
    if store.num_edges_from(root_id) == 0 and not (root.kind.is_source or root.kind == NodeKind.INPUT):
        raise EmptyGraphError(root_id, f"{root.kind} root has no producers")

    try:
        order = postorder(root_id, store.producers)
    except CycleError as e:
        raise MalformedGraphError(root_id, f"cycle through node {e.node}") from e

    logger.debug("Evaluating root %d over %d node(s) in order", root_id, len(order))

    stack: list[float] = []
    time_sources: list[NodeId] = []

    for node_id in order:
        node = store.node(node_id)
        match node.kind:
            case NodeKind.ADD:
                lhs, rhs = _take(stack, 2, root_id, node_id, node.kind)
                stack.append(lhs + rhs)
            case NodeKind.MULTIPLY:
                lhs, rhs = _take(stack, 2, root_id, node_id, node.kind)
                stack.append(lhs * rhs)
            case NodeKind.SINE:
                (x,) = _take(stack, 1, root_id, node_id, node.kind)
                # Rectified on purpose: outputs stay in [0, 1]
                stack.append(abs(math.sin(x)))
            case NodeKind.CONST_SOURCE:
                stack.append(node.value)
            case NodeKind.TIME_SOURCE:
                stack.append(time_s)
                time_sources.append(node_id)
            case NodeKind.INPUT:
                # A driven input adds nothing: its producer already pushed
                if store.num_edges_from(node_id) == 0:
                    stack.append(node.value)
            case NodeKind.SINK:
                pass

        logger.debug("  %s node %d -> stack %r", node.kind, node_id, stack)

    if not stack:
        raise EmptyGraphError(root_id, "no value reaches the root")
    if len(stack) > 1:
        msg = f"{len(stack)} values left after evaluation, expected 1"
        raise MalformedGraphError(root_id, msg)

    (result,) = stack
    for node_id in time_sources:
        store.set_value(node_id, time_s)
    store.set_value(root_id, result)

    logger.debug("Result for root %d: %r", root_id, result)
    return result


class Evaluator:
    """Evaluates graphs against a clock.

    The clock is sampled once per :meth:`run`, so every TIME_SOURCE node in
    one evaluation sees the same time. No other state is carried between
    runs.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock: Clock = clock if clock is not None else MonotonicClock()

    def run(self, store: GraphStore, root_id: NodeId) -> float:
        """Evaluate the graph feeding ``root_id``; see :func:`evaluate_graph`."""
        return evaluate_graph(store, root_id, self.clock())
