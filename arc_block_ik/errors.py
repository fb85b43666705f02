"""
Exception types raised by arc_block_ik.

Invalid rail indices and degenerate arc directions are recovered inside the
controller and only logged; the exceptions here cover setup problems and
host lookups that cannot be recovered locally.

Classes:
    ArcBlockError: Base class for all package errors.
    MissingConsumerError: No IK effector / pose provider to work with.
    NodeNotFoundError: A rail endpoint node cannot be resolved.
"""

from __future__ import annotations


class ArcBlockError(Exception):
    """Base class for arc_block_ik errors."""


class MissingConsumerError(ArcBlockError, RuntimeError):
    """Raised when the controller has no IK effector or pose provider."""


class NodeNotFoundError(ArcBlockError, LookupError):
    """Raised by a pose provider for a node id it does not know.

    Attributes:
        node_id: The identifier that failed to resolve.
    """

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Unknown pose node: {node_id!r}")
        self.node_id = node_id
