"""
In-memory stand-ins for the host scene graph and IK effector.

Usable standalone for scripted runs and as the host side in tests: node
poses live in a plain dictionary and the effector simply records the last
target and weights it was given.

Classes:
    StaticPoseProvider: Dictionary-backed ``PoseProvider``.
    SimEffector: Recording ``IKEffector``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Mapping, Optional

import numpy as np
from scipy.spatial.transform import Rotation

from arc_block_ik.errors import NodeNotFoundError
from arc_block_ik.utils.helpers import VectorLike, as_vector3
from arc_block_ik.utils.transforms import Pose


@dataclass
class StaticPoseProvider:
    """A pose provider backed by a mutable ``{node_id: Pose}`` mapping.

    Attributes:
        poses: Current world pose of every known node.
    """

    poses: Dict[Hashable, Pose] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, poses: Mapping[Hashable, Pose]) -> "StaticPoseProvider":
        """Build a provider from any mapping of node ids to poses.

        Args:
            poses: Initial node poses.

        Returns:
            A new ``StaticPoseProvider`` holding a copy of the mapping.
        """
        return cls(poses=dict(poses))

    def get_pose(self, node_id: Hashable) -> Pose:
        """Return the stored pose for *node_id*.

        Args:
            node_id: Node identifier.

        Returns:
            The node's current ``Pose``.

        Raises:
            NodeNotFoundError: If the node is not registered.
        """
        try:
            return self.poses[node_id]
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    def set_pose(
        self, node_id: Hashable, position: VectorLike, rotation: Rotation
    ) -> None:
        """Create or move a node.

        Args:
            node_id: Node identifier.
            position: New world position.
            rotation: New world rotation.
        """
        self.poses[node_id] = Pose(as_vector3(position, "position"), rotation)

    def remove(self, node_id: Hashable) -> None:
        """Forget a node, as if it had been destroyed in the scene.

        Args:
            node_id: Node identifier; unknown ids are ignored.
        """
        self.poses.pop(node_id, None)


@dataclass
class SimEffector:
    """An IK effector that records what the controller writes to it.

    Attributes:
        position: Last target position written.
        rotation: Last target rotation written.
        position_weight: Last positional blend weight.
        rotation_weight: Last rotational blend weight.
        target_writes: Number of ``set_target`` calls received.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: Rotation = field(default_factory=Rotation.identity)
    position_weight: float = 0.0
    rotation_weight: float = 0.0
    target_writes: int = 0

    def set_target(self, position: np.ndarray, rotation: Rotation) -> None:
        """Store a copy of the target pose.

        Args:
            position: Target world position.
            rotation: Target world rotation.
        """
        self.position = np.array(position, dtype=np.float64)
        self.rotation = rotation
        self.target_writes += 1

    def set_weights(self, position_weight: float, rotation_weight: float) -> None:
        """Store the blend weights.

        Args:
            position_weight: Positional weight in [0, 1].
            rotation_weight: Rotational weight in [0, 1].
        """
        self.position_weight = position_weight
        self.rotation_weight = rotation_weight

    def current_pose(self) -> Optional[Pose]:
        """Return the effector's current target pose.

        Returns:
            The last written target as a ``Pose``.
        """
        return Pose(self.position, self.rotation)
