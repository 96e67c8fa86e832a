"""Evaluation engine module for nodeflow.

This module provides the stack-based interpreter that folds a graph into a
single scalar.

Key types:
- evaluate_graph: Evaluate a graph at a given time and store the result
- Evaluator: Runs evaluate_graph against a clock
- MonotonicClock, ManualClock: Time references for TIME_SOURCE nodes
"""

from ._clock import Clock, ManualClock, MonotonicClock
from ._engine import Evaluator, evaluate_graph

__all__ = [
    "Clock",
    "Evaluator",
    "ManualClock",
    "MonotonicClock",
    "evaluate_graph",
]
