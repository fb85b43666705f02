"""
Host-side interfaces consumed by the arc controller.

The controller never talks to a scene graph or an IK solver directly.  The
host supplies a ``PoseProvider`` for rail endpoint nodes and an
``IKEffector`` that receives the follow pose and blend weights, so the
same controller can sit on top of any engine or solver.
"""

from __future__ import annotations

from typing import Hashable, Protocol

import numpy as np
from scipy.spatial.transform import Rotation

from arc_block_ik.utils.transforms import Pose


class PoseProvider(Protocol):
    def get_pose(self, node_id: Hashable) -> Pose:
        """Return the current world pose of *node_id*.

        Raises:
            NodeNotFoundError: If the node is unknown or no longer live.
        """
        ...


class IKEffector(Protocol):
    def set_target(self, position: np.ndarray, rotation: Rotation) -> None:
        ...

    def set_weights(self, position_weight: float, rotation_weight: float) -> None:
        ...
