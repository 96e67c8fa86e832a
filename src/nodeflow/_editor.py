"""Headless editor session over a graph store.

An editor presents the graph as compound nodes: an operation together with
the INPUT pins it reads from. The store knows nothing about compounds; the
session keeps that mapping and translates every edit into store calls.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum, auto

from nodeflow._errors import EditorError, EvalError, NotFoundError
from nodeflow._eval_engine import Evaluator
from nodeflow._graph import GraphStore
from nodeflow._node import EdgeId, EdgeRecord, NodeId, NodeKind

logger = logging.getLogger(__name__)

CONST_SOURCE_VALUE = 0.5


class CompoundKind(StrEnum):
    """The kinds of node a user can place in the editor."""

    ADD = auto()
    MULTIPLY = auto()
    SINE = auto()
    CONST_SOURCE = auto()
    TIME_SOURCE = auto()
    SINK = auto()


# (operation kind, number of input pins)
_LAYOUT: dict[CompoundKind, tuple[NodeKind, int]] = {
    CompoundKind.ADD: (NodeKind.ADD, 2),
    CompoundKind.MULTIPLY: (NodeKind.MULTIPLY, 2),
    CompoundKind.SINE: (NodeKind.SINE, 1),
    CompoundKind.CONST_SOURCE: (NodeKind.CONST_SOURCE, 0),
    CompoundKind.TIME_SOURCE: (NodeKind.TIME_SOURCE, 0),
    CompoundKind.SINK: (NodeKind.SINK, 1),
}


@dataclass(frozen=True, slots=True)
class CompoundNode:
    """A user-facing node made of one operation node and its input pins.

    Attributes:
        kind: What the user placed.
        id: The operation node; also the id of the compound's output.
        input_ids: The INPUT nodes acting as input pins, in pin order.

    """

    kind: CompoundKind
    id: NodeId
    input_ids: tuple[NodeId, ...] = ()

    @property
    def has_output(self) -> bool:
        """Whether other compounds can take their value from this one."""
        return self.kind != CompoundKind.SINK


class NodeEditor:
    """An editing session: compound nodes, links between them, and a root.

    The session allows at most one sink, which becomes the evaluation root.
    Each input pin accepts at most one link, so a wired graph always matches
    the arity of its operations.
    """

    def __init__(self, store: GraphStore | None = None, evaluator: Evaluator | None = None) -> None:
        self.store = store if store is not None else GraphStore()
        self.evaluator = evaluator if evaluator is not None else Evaluator()
        self._compounds: dict[NodeId, CompoundNode] = {}
        self._root_id: NodeId | None = None

    @property
    def root_id(self) -> NodeId | None:
        """The sink node evaluated on every tick, if one has been placed."""
        return self._root_id

    @property
    def output(self) -> float | None:
        """The value last stored at the root, if there is a root."""
        if self._root_id is None:
            return None
        return self.store.node(self._root_id).value

    def compounds(self) -> tuple[CompoundNode, ...]:
        """All compound nodes in placement order."""
        return tuple(self._compounds.values())

    def compound(self, node_id: NodeId) -> CompoundNode:
        """Get the compound whose operation node is ``node_id``.

        Raises:
            NotFoundError: If no compound has that id.

        """
        try:
            return self._compounds[node_id]
        except KeyError:
            raise NotFoundError("node", node_id) from None

    def add_node(self, kind: CompoundKind) -> CompoundNode:
        """Place a compound node.

        Raises:
            EditorError: If ``kind`` is SINK and the session already has one.

        """
        if kind == CompoundKind.SINK and self._root_id is not None:
            msg = f"Session already has a sink (node {self._root_id})"
            raise EditorError(msg)

        op_kind, n_inputs = _LAYOUT[kind]
        input_ids = tuple(self.store.insert_node(NodeKind.INPUT) for _ in range(n_inputs))
        value = CONST_SOURCE_VALUE if kind == CompoundKind.CONST_SOURCE else 0.0
        node_id = self.store.insert_node(op_kind, value=value)
        for input_id in input_ids:
            self.store.insert_edge(node_id, input_id)

        compound = CompoundNode(kind=kind, id=node_id, input_ids=input_ids)
        self._compounds[node_id] = compound
        if kind == CompoundKind.SINK:
            self._root_id = node_id

        logger.debug("Placed %s compound %d with pins %s", kind, node_id, input_ids)
        return compound

    def remove(self, node_id: NodeId) -> None:
        """Remove a compound node, its pins and every link touching them.

        Raises:
            NotFoundError: If no compound has that id.

        """
        compound = self.compound(node_id)
        self.store.erase_node(compound.id)
        for input_id in compound.input_ids:
            self.store.erase_node(input_id)

        del self._compounds[node_id]
        if node_id == self._root_id:
            self._root_id = None
        logger.debug("Removed %s compound %d", compound.kind, node_id)

    def _is_pin(self, node_id: NodeId) -> bool:
        return node_id in self.store and self.store.node(node_id).kind == NodeKind.INPUT

    def link(self, a: NodeId, b: NodeId) -> EdgeId:
        """Link an input pin to the output of a compound.

        The endpoints may be given in either order; the edge is always stored
        from the pin to the output it reads.

        Raises:
            EditorError: If the endpoints are not one pin and one output, or
                the pin is already driven.

        """
        if self._is_pin(b):
            a, b = b, a
        pin_id, output_id = a, b

        if not self._is_pin(pin_id) or self._is_pin(output_id):
            msg = f"A link must join one input pin and one output, got {a} and {b}"
            raise EditorError(msg)
        source = self._compounds.get(output_id)
        if source is None or not source.has_output:
            msg = f"Node {output_id} is not a compound output"
            raise EditorError(msg)
        if self.store.num_edges_from(pin_id) > 0:
            msg = f"Input pin {pin_id} is already linked"
            raise EditorError(msg)

        edge_id = self.store.insert_edge(pin_id, output_id)
        logger.debug("Linked pin %d to output %d (edge %d)", pin_id, output_id, edge_id)
        return edge_id

    def unlink(self, edge_id: EdgeId) -> None:
        """Remove a link.

        Raises:
            NotFoundError: If ``edge_id`` is not a live edge.

        """
        self.store.erase_edge(edge_id)

    def links(self) -> tuple[EdgeRecord, ...]:
        """User-visible links; edges from an operation to its own pins are internal."""
        return tuple(edge for edge in self.store.edges() if self._is_pin(edge.from_id))

    def set_input(self, pin_id: NodeId, value: float) -> None:
        """Set the value an unlinked input pin feeds to its operation.

        Raises:
            EditorError: If ``pin_id`` is not an input pin or is linked.

        """
        if not self._is_pin(pin_id):
            msg = f"Node {pin_id} is not an input pin"
            raise EditorError(msg)
        if self.store.num_edges_from(pin_id) > 0:
            msg = f"Input pin {pin_id} is linked; its value comes from the link"
            raise EditorError(msg)
        self.store.set_value(pin_id, value)

    def tick(self) -> float | None:
        """Evaluate the graph at the root, once per frame.

        Returns:
            The root's new value, or None when there is no root or the graph
            cannot be evaluated yet.

        """
        if self._root_id is None:
            return None
        try:
            return self.evaluator.run(self.store, self._root_id)
        except EvalError as e:
            logger.debug("Nothing to display: %s", e)
            return None
