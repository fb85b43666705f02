"""Shared fixtures: a quarter-circle rail around the world origin."""
from __future__ import annotations

import pytest
from scipy.spatial.transform import Rotation

from arc_block_ik.controller.arc_target import ArcTargetController
from arc_block_ik.ik.sim import SimEffector, StaticPoseProvider
from arc_block_ik.rails.rail import Rail, RailSet
from arc_block_ik.utils.transforms import RigidTransform


@pytest.fixture
def quarter_poses() -> StaticPoseProvider:
    # start straight ahead, end to the right turned 90 degrees about Y
    provider = StaticPoseProvider()
    provider.set_pose("start", (0.0, 0.0, 1.0), Rotation.identity())
    provider.set_pose("end", (1.0, 0.0, 0.0), Rotation.from_euler("y", 90, degrees=True))
    provider.set_pose("left", (-1.0, 0.0, 0.0), Rotation.identity())
    provider.set_pose("right", (1.0, 0.0, 0.0), Rotation.identity())
    return provider


@pytest.fixture
def quarter_rail() -> Rail:
    return Rail("start", "end", origin=(0.0, 0.0, 0.0), radius=1.0)


@pytest.fixture
def straight_rail() -> Rail:
    # passes straight through its own origin at delta 0.5
    return Rail("left", "right", origin=(0.0, 0.0, 0.0), radius=2.0)


@pytest.fixture
def rails(quarter_rail: Rail, straight_rail: Rail) -> RailSet:
    return RailSet([quarter_rail, straight_rail])


@pytest.fixture
def identity_character() -> RigidTransform:
    return RigidTransform()


@pytest.fixture
def effector() -> SimEffector:
    return SimEffector()


@pytest.fixture
def controller(
    rails: RailSet, quarter_poses: StaticPoseProvider, effector: SimEffector
) -> ArcTargetController:
    return ArcTargetController(rails, quarter_poses, effector, speed_multiplier=0.5)

