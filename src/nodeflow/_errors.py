"""Exceptions raised by nodeflow."""

from typing import Literal


class NodeflowError(Exception):
    """Base class for every error raised by nodeflow."""


class NotFoundError(NodeflowError, LookupError):
    """Raised when an operation references a node or edge id that is not live."""

    def __init__(self, kind: Literal["node", "edge"], id: int) -> None:  # noqa: A002
        self.kind = kind
        self.id = id
        super().__init__(f"No live {kind} with id {id}")


class EvalError(NodeflowError):
    """Raised when a graph cannot be evaluated from the requested root."""

    def __init__(self, root_id: int, message: str) -> None:
        self.root_id = root_id
        super().__init__(f"Cannot evaluate root {root_id}: {message}")


class EmptyGraphError(EvalError):
    """Raised when evaluation leaves no value to report for the root."""


class MalformedGraphError(EvalError):
    """Raised when wired producers do not match the operations consuming them."""


class EditorError(NodeflowError):
    """Raised when the editor session refuses an editing request."""


class ConfigError(NodeflowError):
    """Error in nodeflow configuration."""
