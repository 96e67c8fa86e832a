"""Graph module providing node storage and traversal.

This module contains:
- GraphStore: Stable-id arena of nodes and edges
- postorder: Algorithm for ordering nodes producers-first
"""

from ._algorithms import CycleError, postorder
from ._store import GraphStore

__all__ = ["CycleError", "GraphStore", "postorder"]
