"""
Small stateless helpers used across the arc_block_ik package.

Provides numerical clamping, vector coercion and rotation validation.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from scipy.spatial.transform import Rotation

VectorLike = Union[Sequence[float], np.ndarray]


def clamp(value: float, lo: float, hi: float) -> float:
    """Return *value* clamped to the closed interval [*lo*, *hi*].

    Args:
        value: The scalar to clamp.
        lo: Lower bound (inclusive).
        hi: Upper bound (inclusive).

    Returns:
        The clamped scalar.
    """
    return max(lo, min(hi, value))


def as_vector3(value: VectorLike, name: str = "vector") -> np.ndarray:
    """Coerce *value* to a finite float64 array of shape ``(3,)``.

    Args:
        value: Any 3-element sequence or array.
        name: Label used in the error message.

    Returns:
        A fresh ``float64`` array of shape ``(3,)``.

    Raises:
        ValueError: If *value* does not have exactly three finite components.
    """
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have 3 components, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite, got {arr.tolist()}")
    return arr


def as_rotation(value: Rotation, name: str = "rotation") -> Rotation:
    """Check that *value* is a single ``scipy`` rotation.

    Args:
        value: Candidate rotation.
        name: Label used in the error message.

    Returns:
        *value* unchanged.

    Raises:
        TypeError: If *value* is not a ``Rotation``.
        ValueError: If *value* holds a stack of rotations.
    """
    if not isinstance(value, Rotation):
        raise TypeError(f"{name} must be a scipy Rotation, got {type(value).__name__}")
    if not value.single:
        raise ValueError(f"{name} must be a single rotation, got {len(value)}")
    return value
