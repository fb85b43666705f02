"""
Pose types and interpolation math.

Rotations are ``scipy.spatial.transform.Rotation`` instances throughout;
positions are ``float64`` NumPy arrays of shape ``(3,)``.  Both ``lerp``
and ``slerp`` are unclamped, so parameters outside [0, 1] extrapolate.

Classes:
    Pose: World-space position and rotation.
    RigidTransform: A character's world transform (position, rotation, scale).

Functions:
    lerp: Componentwise linear interpolation of two points.
    slerp: Shortest-arc spherical interpolation of two rotations.
    safe_normalize: Normalize a vector, reporting degenerate input.
    rotation_angle: Angle in radians between two rotations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from arc_block_ik.utils.constants import DIRECTION_EPSILON
from arc_block_ik.utils.helpers import VectorLike, as_rotation, as_vector3


@dataclass(frozen=True, eq=False)
class Pose:
    """A world-space position and rotation.

    Attributes:
        position: Array of shape ``(3,)``.
        rotation: Unit-quaternion rotation.
    """

    position: np.ndarray
    rotation: Rotation

    def __post_init__(self) -> None:
        """Store a private copy of the position and check the rotation."""
        object.__setattr__(self, "position", as_vector3(self.position, "position"))
        object.__setattr__(self, "rotation", as_rotation(self.rotation, "rotation"))

    @classmethod
    def identity(cls) -> "Pose":
        """Return the pose at the world origin with no rotation."""
        return cls(np.zeros(3), Rotation.identity())

    def is_close(self, other: "Pose", atol: float = 1e-9) -> bool:
        """Return True when both position and rotation match within *atol*.

        Args:
            other: Pose to compare against.
            atol: Absolute tolerance on distance (units) and angle (radians).

        Returns:
            Whether the poses are equal within tolerance.
        """
        dist = float(np.linalg.norm(self.position - other.position))
        return dist <= atol and rotation_angle(self.rotation, other.rotation) <= atol


@dataclass(frozen=True, eq=False)
class RigidTransform:
    """World transform of the character that owns the rails.

    Attributes:
        position: World position of the character root.
        rotation: World rotation of the character root.
        scale: Per-axis local scale.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: Rotation = field(default_factory=Rotation.identity)
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        """Coerce position and scale to float64 vectors and check the rotation."""
        object.__setattr__(self, "position", as_vector3(self.position, "position"))
        object.__setattr__(self, "scale", as_vector3(self.scale, "scale"))
        object.__setattr__(self, "rotation", as_rotation(self.rotation, "rotation"))

    def transform_point(self, local: VectorLike) -> np.ndarray:
        """Map a point from the character's local space into world space.

        Args:
            local: Local-space point.

        Returns:
            World-space point of shape ``(3,)``.
        """
        scaled = self.scale * as_vector3(local, "local point")
        return self.position + self.rotation.apply(scaled)


def lerp(a: VectorLike, b: VectorLike, t: float) -> np.ndarray:
    """Linearly interpolate between points *a* and *b* without clamping *t*.

    Args:
        a: Point returned at ``t == 0``.
        b: Point returned at ``t == 1``.
        t: Interpolation parameter.

    Returns:
        ``a + (b - a) * t`` as a float64 array.
    """
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    return a_arr + (b_arr - a_arr) * t


def slerp(start: Rotation, end: Rotation, t: float) -> Rotation:
    """Spherically interpolate from *start* to *end* along the shortest arc.

    The relative rotation is taken in axis-angle form, whose angle SciPy
    keeps in [0, pi], so the path never takes the long way round.  *t* is
    not clamped.

    Args:
        start: Rotation returned at ``t == 0``.
        end: Rotation returned at ``t == 1``.
        t: Interpolation parameter.

    Returns:
        The interpolated rotation.
    """
    relative = start.inv() * end
    return start * Rotation.from_rotvec(relative.as_rotvec() * t)


def safe_normalize(vector: VectorLike) -> Tuple[np.ndarray, bool]:
    """Normalize *vector*, flagging zero-length or non-finite input.

    Args:
        vector: Vector to normalize.

    Returns:
        Tuple of (unit vector, ok).  When ``ok`` is False the returned
        vector is all zeros and must not be used.
    """
    arr = np.asarray(vector, dtype=np.float64)
    length = float(np.linalg.norm(arr))
    if not np.isfinite(length) or length < DIRECTION_EPSILON:
        return np.zeros(3), False
    return arr / length, True


def rotation_angle(a: Rotation, b: Rotation) -> float:
    """Return the angle in radians of the rotation taking *a* to *b*.

    Args:
        a: First rotation.
        b: Second rotation.

    Returns:
        Angle in [0, pi].
    """
    return float((a.inv() * b).magnitude())
