"""
Factory function for creating arc target controllers.

Callers hand over a config (or the name of a built-in one) together with
the host collaborators and receive a ready controller whose effector has
already been pointed at the initial follow pose.

Functions:
    make_block_controller: Build an ``ArcTargetController`` from config.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from arc_block_ik.controller.arc_target import ArcTargetController
from arc_block_ik.controller.configs import BlockControllerConfig, default_demo_config
from arc_block_ik.errors import MissingConsumerError
from arc_block_ik.ik.interfaces import IKEffector, PoseProvider
from arc_block_ik.utils.transforms import Pose, RigidTransform


# ---------------------------------------------------------------------------
# Config look-up table (name -> default config constructor)
# ---------------------------------------------------------------------------
_CONFIG_REGISTRY: Dict[str, Callable[[], BlockControllerConfig]] = {
    "demo": default_demo_config,
}


def _resolve_config(cfg: BlockControllerConfig | str) -> BlockControllerConfig:
    """Convert a string name to its built-in config, or pass a config through.

    Args:
        cfg: Either a ``BlockControllerConfig`` or a registered name.

    Returns:
        A concrete ``BlockControllerConfig`` instance.

    Raises:
        ValueError: If the string name is not in the registry.
    """
    if isinstance(cfg, BlockControllerConfig):
        return cfg
    if cfg not in _CONFIG_REGISTRY:
        raise ValueError(f"Unknown config '{cfg}'. Choose from {list(_CONFIG_REGISTRY)}")
    return _CONFIG_REGISTRY[cfg]()


def _validate_consumers(poses: Optional[PoseProvider], effector: Optional[IKEffector]) -> None:
    """Raise if either host collaborator is missing.

    Args:
        poses: Pose provider for rail endpoints.
        effector: IK effector receiving the follow pose.

    Raises:
        MissingConsumerError: When either argument is None.
    """
    if effector is None:
        raise MissingConsumerError("No IK effector supplied for the block controller")
    if poses is None:
        raise MissingConsumerError("No pose provider supplied for the block controller")


def make_block_controller(
    cfg: BlockControllerConfig | str,
    poses: Optional[PoseProvider],
    effector: Optional[IKEffector],
    character: Optional[RigidTransform] = None,
    initial_pose: Optional[Pose] = None,
) -> ArcTargetController:
    """Create an ``ArcTargetController`` for the given configuration.

    Args:
        cfg: A ``BlockControllerConfig`` or a built-in name (``'demo'``).
        poses: Provider resolving rail endpoint nodes.
        effector: IK effector the follow pose is written to.
        character: Character world transform; identity when *None*.
        initial_pose: Optional starting follow pose.

    Returns:
        An inactive controller with its effector weight at 1.

    Raises:
        MissingConsumerError: If *poses* or *effector* is None.
        ValueError: If *cfg* names no built-in config.
    """
    resolved = _resolve_config(cfg)
    _validate_consumers(poses, effector)
    return ArcTargetController(
        rails=resolved.build_rail_set(),
        poses=poses,
        effector=effector,
        character=character,
        speed_multiplier=resolved.speed_multiplier,
        initial_pose=initial_pose,
    )
