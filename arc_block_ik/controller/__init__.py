"""
Arc target controller, its configuration, and the factory.

Provides the rail-selecting, pose-smoothing controller that feeds an IK
effector, the dataclass configs it is built from, and a factory.
"""

from arc_block_ik.controller.arc_target import ArcTargetController
from arc_block_ik.controller.configs import (
    BlockControllerConfig,
    RailConfig,
    default_demo_config,
    default_demo_poses,
    load_config,
    save_config,
)
from arc_block_ik.controller.factory import make_block_controller

__all__ = [
    "ArcTargetController",
    "BlockControllerConfig",
    "RailConfig",
    "default_demo_config",
    "default_demo_poses",
    "load_config",
    "save_config",
    "make_block_controller",
]
