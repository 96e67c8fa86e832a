"""Dataflow graphs of scalar nodes, evaluated on demand."""

__all__ = [
    "Clock",
    "CompoundKind",
    "CompoundNode",
    "EdgeId",
    "EdgeRecord",
    "EditorError",
    "EmptyGraphError",
    "EvalError",
    "Evaluator",
    "GraphStore",
    "MalformedGraphError",
    "ManualClock",
    "MonotonicClock",
    "NodeEditor",
    "NodeId",
    "NodeKind",
    "NodeRecord",
    "NodeflowError",
    "NotFoundError",
    "evaluate_graph",
]

from ._editor import CompoundKind, CompoundNode, NodeEditor
from ._errors import (
    EditorError,
    EmptyGraphError,
    EvalError,
    MalformedGraphError,
    NodeflowError,
    NotFoundError,
)
from ._eval_engine import Clock, Evaluator, ManualClock, MonotonicClock, evaluate_graph
from ._graph import GraphStore
from ._node import EdgeId, EdgeRecord, NodeId, NodeKind, NodeRecord
