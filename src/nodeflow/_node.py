"""Node and edge records stored in a graph."""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TypeAlias

NodeId: TypeAlias = int
EdgeId: TypeAlias = int


class NodeKind(StrEnum):
    """The operation a node performs during evaluation."""

    ADD = auto()
    MULTIPLY = auto()
    SINE = auto()
    INPUT = auto()  # Pin: forwards its producer, or its own value when undriven
    CONST_SOURCE = auto()
    TIME_SOURCE = auto()
    SINK = auto()

    @property
    def default_arity(self) -> int:
        """Number of producer edges this kind of node expects."""
        return _DEFAULT_ARITY[self]

    @property
    def is_source(self) -> bool:
        """Whether the node pushes a value without consuming any."""
        return self in (NodeKind.CONST_SOURCE, NodeKind.TIME_SOURCE)


_DEFAULT_ARITY: dict[NodeKind, int] = {
    NodeKind.ADD: 2,
    NodeKind.MULTIPLY: 2,
    NodeKind.SINE: 1,
    NodeKind.INPUT: 0,
    NodeKind.CONST_SOURCE: 0,
    NodeKind.TIME_SOURCE: 0,
    NodeKind.SINK: 1,
}


@dataclass(slots=True)
class NodeRecord:
    """A single computation unit.

    The record is mutable: the evaluator writes results into ``value``, and an
    editor writes user input into it while the node is not driven by an edge.

    Attributes:
        kind: The operation this node performs.
        arity: Expected number of producer edges. Informational only:
            evaluation never reads it and checks operand counts on the value
            stack instead.
        value: The node's latest output, or for an undriven ``INPUT`` node the
            fallback value supplied by the user.

    """

    kind: NodeKind
    arity: int
    value: float = 0.0


@dataclass(frozen=True, slots=True)
class EdgeRecord:
    """A directed dependency between two nodes.

    An edge ``from_id -> to_id`` means ``from_id`` takes its value from
    ``to_id``: ``to_id`` is evaluated first and its result flows to
    ``from_id``.

    Attributes:
        id: Identifier of the edge, never equal to a live node id.
        from_id: The dependent node.
        to_id: The node producing the value.

    """

    id: EdgeId
    from_id: NodeId
    to_id: NodeId
