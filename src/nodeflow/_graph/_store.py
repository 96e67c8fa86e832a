"""Node and edge storage with stable identifiers."""

import itertools
import logging

from nodeflow._errors import NotFoundError
from nodeflow._node import EdgeId, EdgeRecord, NodeId, NodeKind, NodeRecord

logger = logging.getLogger(__name__)


class GraphStore:
    """Owns every node and edge of a computation graph.

    Nodes and edges draw their ids from one monotonically increasing counter
    and ids are never reused, so an id cached by a caller either refers to the
    record it was issued for or to nothing at all.

    Every mutator validates its arguments before touching any state: a call
    that raises leaves the store exactly as it was.

    The store keeps, per node, the ids of the edges leaving and entering it so
    that adjacency queries and cascading erasure do not scan the edge set.
    """

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._nodes: dict[NodeId, NodeRecord] = {}
        self._edges: dict[EdgeId, EdgeRecord] = {}
        self._edges_from: dict[NodeId, list[EdgeId]] = {}
        self._edges_to: dict[NodeId, list[EdgeId]] = {}

    # --- nodes ---

    def insert_node(self, kind: NodeKind, arity: int | None = None, value: float = 0.0) -> NodeId:
        """Insert a node and return its id.

        Args:
            kind: The operation the node performs.
            arity: Expected number of producer edges. Defaults to the kind's
                default arity.
            value: Initial stored value.

        Returns:
            A fresh id, never issued before.

        """
        node_id = next(self._ids)
        if arity is None:
            arity = kind.default_arity
        self._nodes[node_id] = NodeRecord(kind=kind, arity=arity, value=float(value))
        self._edges_from[node_id] = []
        self._edges_to[node_id] = []
        logger.debug("Inserted %s node %d (arity=%d, value=%r)", kind, node_id, arity, value)
        return node_id

    def erase_node(self, node_id: NodeId) -> None:
        """Erase a node together with every edge touching it.

        Raises:
            NotFoundError: If ``node_id`` is not a live node.

        """
        if node_id not in self._nodes:
            raise NotFoundError("node", node_id)

        # A self-loop is listed on both sides; dict.fromkeys drops the repeat
        incident = dict.fromkeys(self._edges_from[node_id] + self._edges_to[node_id])
        for edge_id in incident:
            self._remove_edge(edge_id)

        del self._nodes[node_id]
        del self._edges_from[node_id]
        del self._edges_to[node_id]
        logger.debug("Erased node %d and %d incident edge(s)", node_id, len(incident))

    def node(self, node_id: NodeId) -> NodeRecord:
        """Get the live record of a node.

        The returned record is the stored one, so writes to it are visible to
        every later reader.

        Raises:
            NotFoundError: If ``node_id`` is not a live node.

        """
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NotFoundError("node", node_id) from None

    def set_value(self, node_id: NodeId, value: float) -> None:
        """Overwrite the stored value of a node.

        Raises:
            NotFoundError: If ``node_id`` is not a live node.

        """
        self.node(node_id).value = float(value)

    def nodes(self) -> tuple[tuple[NodeId, NodeRecord], ...]:
        """Snapshot of ``(id, record)`` pairs in insertion order."""
        return tuple(self._nodes.items())

    # --- edges ---

    def insert_edge(self, from_id: NodeId, to_id: NodeId) -> EdgeId:
        """Insert an edge meaning ``from_id`` takes its value from ``to_id``.

        Self-loops and repeated edges between the same nodes are accepted.

        Raises:
            NotFoundError: If either endpoint is not a live node.

        """
        for endpoint in (from_id, to_id):
            if endpoint not in self._nodes:
                raise NotFoundError("node", endpoint)

        edge_id = next(self._ids)
        self._edges[edge_id] = EdgeRecord(id=edge_id, from_id=from_id, to_id=to_id)
        self._edges_from[from_id].append(edge_id)
        self._edges_to[to_id].append(edge_id)
        logger.debug("Inserted edge %d: %d -> %d", edge_id, from_id, to_id)
        return edge_id

    def erase_edge(self, edge_id: EdgeId) -> None:
        """Erase a single edge.

        Raises:
            NotFoundError: If ``edge_id`` is not a live edge.

        """
        if edge_id not in self._edges:
            raise NotFoundError("edge", edge_id)
        self._remove_edge(edge_id)
        logger.debug("Erased edge %d", edge_id)

    def edge(self, edge_id: EdgeId) -> EdgeRecord:
        """Get a live edge.

        Raises:
            NotFoundError: If ``edge_id`` is not a live edge.

        """
        try:
            return self._edges[edge_id]
        except KeyError:
            raise NotFoundError("edge", edge_id) from None

    def edges(self) -> tuple[EdgeRecord, ...]:
        """Snapshot of all live edges in insertion order."""
        return tuple(self._edges.values())

    def _remove_edge(self, edge_id: EdgeId) -> None:
        edge = self._edges.pop(edge_id)
        self._edges_from[edge.from_id].remove(edge_id)
        self._edges_to[edge.to_id].remove(edge_id)

    # --- adjacency ---

    def num_edges_from(self, node_id: NodeId) -> int:
        """Count edges whose ``from_id`` is ``node_id``.

        A count of zero means the node is not driven by any producer. Unknown
        ids count as zero.
        """
        return len(self._edges_from.get(node_id, ()))

    def num_edges_to(self, node_id: NodeId) -> int:
        """Count edges whose ``to_id`` is ``node_id``; unknown ids count as zero."""
        return len(self._edges_to.get(node_id, ()))

    def producers(self, node_id: NodeId) -> tuple[NodeId, ...]:
        """Nodes that ``node_id`` takes its values from, in edge insertion order.

        Unknown ids have no producers.
        """
        return tuple(self._edges[edge_id].to_id for edge_id in self._edges_from.get(node_id, ()))

    def __contains__(self, node_id: object) -> bool:
        """Check if a node id is live."""
        return node_id in self._nodes

    def __len__(self) -> int:
        """Return the number of live nodes."""
        return len(self._nodes)
