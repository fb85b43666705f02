"""Tests for pose types and interpolation math."""
from __future__ import annotations

import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from arc_block_ik.utils.helpers import as_rotation, as_vector3, clamp
from arc_block_ik.utils.transforms import (
    Pose,
    RigidTransform,
    lerp,
    rotation_angle,
    safe_normalize,
    slerp,
)


# ── Helpers ────────────────────────────────────────────────────


class TestHelpers:
    def test_clamp(self) -> None:
        assert clamp(-0.5, 0.0, 1.0) == 0.0
        assert clamp(1.5, 0.0, 1.0) == 1.0
        assert clamp(0.25, 0.0, 1.0) == 0.25

    def test_as_vector3_rejects_wrong_shape(self) -> None:
        with pytest.raises(ValueError, match="3 components"):
            as_vector3((1.0, 2.0))

    def test_as_vector3_rejects_nan(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            as_vector3((1.0, float("nan"), 0.0))

    def test_as_vector3_copies(self) -> None:
        src = np.array([1.0, 2.0, 3.0])
        out = as_vector3(src)
        out[0] = 99.0
        assert src[0] == 1.0

    def test_as_rotation_rejects_quaternion_tuple(self) -> None:
        with pytest.raises(TypeError, match="rotation must be a scipy Rotation"):
            as_rotation((0.0, 0.0, 0.0, 1.0))

    def test_as_rotation_rejects_stack(self) -> None:
        with pytest.raises(ValueError, match="single rotation"):
            as_rotation(Rotation.from_euler("z", [10, 20], degrees=True))


# ── Lerp / Slerp ───────────────────────────────────────────────


class TestLerp:
    def test_midpoint(self) -> None:
        np.testing.assert_allclose(lerp((0, 0, 0), (2, 4, 6), 0.5), [1, 2, 3])

    def test_extrapolates_beyond_end(self) -> None:
        np.testing.assert_allclose(lerp((0, 0, 0), (1, 0, 0), 1.5), [1.5, 0, 0])

    def test_extrapolates_before_start(self) -> None:
        np.testing.assert_allclose(lerp((0, 0, 0), (1, 0, 0), -0.5), [-0.5, 0, 0])


class TestSlerp:
    def test_endpoints(self) -> None:
        a = Rotation.from_euler("x", 10, degrees=True)
        b = Rotation.from_euler("z", 70, degrees=True)
        assert rotation_angle(slerp(a, b, 0.0), a) < 1e-9
        assert rotation_angle(slerp(a, b, 1.0), b) < 1e-9

    def test_half_of_ninety_about_y(self) -> None:
        end = Rotation.from_euler("y", 90, degrees=True)
        mid = slerp(Rotation.identity(), end, 0.5)
        expected = Rotation.from_euler("y", 45, degrees=True)
        assert rotation_angle(mid, expected) < 1e-9

    def test_takes_shortest_arc(self) -> None:
        # 270 degrees about Y is the same orientation as -90
        end = Rotation.from_euler("y", 270, degrees=True)
        mid = slerp(Rotation.identity(), end, 0.5)
        expected = Rotation.from_euler("y", -45, degrees=True)
        assert rotation_angle(mid, expected) < 1e-9

    def test_negated_quaternion_is_same_orientation(self) -> None:
        flipped = Rotation.from_quat([0.0, 0.0, 0.0, -1.0])
        mid = slerp(Rotation.identity(), flipped, 0.5)
        assert rotation_angle(mid, Rotation.identity()) < 1e-9

    def test_extrapolation(self) -> None:
        end = Rotation.from_euler("y", 40, degrees=True)
        out = slerp(Rotation.identity(), end, 1.5)
        expected = Rotation.from_euler("y", 60, degrees=True)
        assert rotation_angle(out, expected) < 1e-9


# ── Normalization ──────────────────────────────────────────────


class TestSafeNormalize:
    def test_unit_result(self) -> None:
        unit, ok = safe_normalize((3.0, 0.0, 4.0))
        assert ok
        np.testing.assert_allclose(unit, [0.6, 0.0, 0.8])

    def test_zero_vector_flagged(self) -> None:
        unit, ok = safe_normalize((0.0, 0.0, 0.0))
        assert not ok
        assert np.all(np.isfinite(unit))

    def test_nan_flagged(self) -> None:
        _, ok = safe_normalize((float("nan"), 0.0, 0.0))
        assert not ok


# ── Pose / RigidTransform ──────────────────────────────────────


class TestPose:
    def test_identity(self) -> None:
        pose = Pose.identity()
        np.testing.assert_array_equal(pose.position, np.zeros(3))
        assert rotation_angle(pose.rotation, Rotation.identity()) == 0.0

    def test_is_close(self) -> None:
        a = Pose((1.0, 2.0, 3.0), Rotation.from_euler("y", 10, degrees=True))
        b = Pose((1.0, 2.0, 3.0), Rotation.from_euler("y", 10, degrees=True))
        c = Pose((1.0, 2.0, 3.5), Rotation.from_euler("y", 10, degrees=True))
        assert a.is_close(b)
        assert not a.is_close(c)

    def test_rejects_non_rotation(self) -> None:
        with pytest.raises(TypeError):
            Pose((0.0, 0.0, 0.0), (0.0, 0.0, 0.0, 1.0))


class TestRigidTransform:
    def test_identity_is_passthrough(self) -> None:
        np.testing.assert_allclose(
            RigidTransform().transform_point((0.1, 0.2, 0.3)), [0.1, 0.2, 0.3]
        )

    def test_scale_rotate_translate(self) -> None:
        xf = RigidTransform(
            position=(1.0, 2.0, 3.0),
            rotation=Rotation.from_euler("y", 90, degrees=True),
            scale=(2.0, 2.0, 2.0),
        )
        # (1,0,0) scaled to (2,0,0), turned onto -Z, then offset
        np.testing.assert_allclose(xf.transform_point((1.0, 0.0, 0.0)), [1.0, 2.0, 1.0], atol=1e-12)

    def test_rotation_angle_range(self) -> None:
        a = Rotation.from_euler("z", 170, degrees=True)
        b = Rotation.from_euler("z", -170, degrees=True)
        assert math.isclose(rotation_angle(a, b), math.radians(20), rel_tol=1e-9)
