"""
Rail geometry resolver.

Maps a (rail, delta) pair to a world-space hand pose.  The position is the
point a linear blend of the two endpoint positions would give, pushed out
(or pulled in) along its direction from the arc origin so it sits exactly
``radius`` away; delta therefore only controls the angle, never the reach.
The rotation is a spherical blend of the two endpoint rotations.

Delta is not clamped: values outside [0, 1] extrapolate past the endpoints.

Functions:
    get_delta_position: World position on a rail for a delta.
    get_delta_rotation: World rotation on a rail for a delta.
    resolve_rail_pose: Both of the above as a ``Pose``.
"""

from __future__ import annotations

from typing import NamedTuple, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from arc_block_ik.ik.interfaces import PoseProvider
from arc_block_ik.rails.rail import Rail
from arc_block_ik.utils.constants import DEFAULT_DIRECTION
from arc_block_ik.utils.helpers import VectorLike
from arc_block_ik.utils.transforms import (
    Pose,
    RigidTransform,
    lerp,
    safe_normalize,
    slerp,
)


class RailSample(NamedTuple):
    """Result of sampling a rail position.

    Attributes:
        position: World position on the arc.
        direction: Unit direction from the world origin to ``position``.
        degenerate: True when the blended point sat on the origin and the
            fallback direction was used.
    """

    position: np.ndarray
    direction: np.ndarray
    degenerate: bool


def _fallback_unit(fallback_direction: VectorLike) -> np.ndarray:
    """Normalize the caller's fallback, falling back again to +Z.

    Args:
        fallback_direction: Preferred direction for degenerate samples.

    Returns:
        A unit vector.
    """
    unit, ok = safe_normalize(fallback_direction)
    if ok:
        return unit
    return np.array(DEFAULT_DIRECTION, dtype=np.float64)


def get_delta_position(
    rail: Rail,
    delta: float,
    poses: PoseProvider,
    character: RigidTransform,
    fallback_direction: VectorLike = DEFAULT_DIRECTION,
) -> RailSample:
    """Return the world position on *rail* for *delta*.

    Args:
        rail: The rail to probe.
        delta: Normalized position along the rail (unclamped).
        poses: Provider resolving the rail's endpoint nodes.
        character: World transform the rail origin is local to.
        fallback_direction: Direction used if the blended point coincides
            with the arc origin.

    Returns:
        A ``RailSample`` with the position, the direction used, and whether
        the fallback was needed.

    Raises:
        NodeNotFoundError: If an endpoint node cannot be resolved.
    """
    start = poses.get_pose(rail.start_node)
    end = poses.get_pose(rail.end_node)
    origin = character.transform_point(rail.origin)
    blended = lerp(start.position, end.position, delta)
    direction, ok = safe_normalize(blended - origin)
    if not ok:
        direction = _fallback_unit(fallback_direction)
    return RailSample(origin + direction * rail.radius, direction, not ok)


def get_delta_rotation(rail: Rail, delta: float, poses: PoseProvider) -> Rotation:
    """Return the world rotation on *rail* for *delta*.

    Args:
        rail: The rail to probe.
        delta: Normalized position along the rail (unclamped).
        poses: Provider resolving the rail's endpoint nodes.

    Returns:
        Shortest-arc blend of the start and end node rotations.

    Raises:
        NodeNotFoundError: If an endpoint node cannot be resolved.
    """
    start = poses.get_pose(rail.start_node)
    end = poses.get_pose(rail.end_node)
    return slerp(start.rotation, end.rotation, delta)


def resolve_rail_pose(
    rail: Rail,
    delta: float,
    poses: PoseProvider,
    character: RigidTransform,
    fallback_direction: VectorLike = DEFAULT_DIRECTION,
) -> Tuple[Pose, RailSample]:
    """Resolve the full ideal hand pose for *rail* at *delta*.

    Args:
        rail: The rail to probe.
        delta: Normalized position along the rail (unclamped).
        poses: Provider resolving the rail's endpoint nodes.
        character: World transform the rail origin is local to.
        fallback_direction: Direction for degenerate samples.

    Returns:
        Tuple of (ideal ``Pose``, position ``RailSample``).
    """
    sample = get_delta_position(rail, delta, poses, character, fallback_direction)
    rotation = get_delta_rotation(rail, delta, poses)
    return Pose(sample.position, rotation), sample
