"""
Arc target controller for rail-constrained blocking poses.

The controller owns the active rail index and delta, the ideal hand pose
resolved from them, and a follow pose that eases toward the ideal pose on
every tick and is written to the host's IK effector.  The combat layer
picks the rail and delta for each attack; this class only places the hand.

Classes:
    ArcTargetController: Rail selection, smoothing, and IK weight control.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Optional

import numpy as np
from scipy.spatial.transform import Rotation

from arc_block_ik.errors import MissingConsumerError, NodeNotFoundError
from arc_block_ik.ik.interfaces import IKEffector, PoseProvider
from arc_block_ik.rails.rail import RailSet
from arc_block_ik.rails.resolver import RailSample, resolve_rail_pose
from arc_block_ik.utils.constants import (
    DEFAULT_DIRECTION,
    DEFAULT_SPEED_MULTIPLIER,
    NO_RAIL,
    REFERENCE_RATE,
    WEIGHT_MAX,
    WEIGHT_MIN,
)
from arc_block_ik.utils.helpers import VectorLike, as_rotation, as_vector3, clamp
from arc_block_ik.utils.transforms import Pose, RigidTransform, lerp, slerp

logger = logging.getLogger(__name__)


def _effector_pose(effector: IKEffector) -> Optional[Pose]:
    """Return the effector's current target pose if it can report one."""
    current = getattr(effector, "current_pose", None)
    if callable(current):
        return current()
    return None


class ArcTargetController:
    """Drives an IK effector toward poses on a set of rails.

    Typical use from a combat system::

        controller.set_target(hand_position, hand_rotation)  # snap first
        controller.select_rail(attack.rail, attack.delta)
        controller.activate()
        ...
        controller.tick(dt)  # once per frame, from the game loop

    The ideal pose is recomputed only when a rail is selected (or on an
    explicit ``refresh_target``), not every tick.  While inactive, ticks do
    nothing and the effector weight stays at zero.

    Attributes:
        character: World transform the rail origins are local to.
    """

    def __init__(
        self,
        rails: RailSet,
        poses: PoseProvider,
        effector: IKEffector,
        character: Optional[RigidTransform] = None,
        speed_multiplier: float = DEFAULT_SPEED_MULTIPLIER,
        initial_pose: Optional[Pose] = None,
    ) -> None:
        """Bind the controller to its rails and host collaborators.

        The effector target is set to the initial follow pose and its
        weight to 1, but the controller starts inactive; call ``activate``
        to start smoothing.

        Args:
            rails: Rails addressable by ``select_rail``.
            poses: Provider resolving rail endpoint nodes.
            effector: IK effector receiving the follow pose and weights.
            character: Character world transform; identity when *None*.
            speed_multiplier: Scale on the smoothing factor (>= 0).
            initial_pose: Starting follow pose.  Defaults to the effector's
                current pose when it exposes ``current_pose()``, else identity.

        Raises:
            MissingConsumerError: If *effector* or *poses* is None.
            ValueError: If *speed_multiplier* is negative.
        """
        if effector is None:
            raise MissingConsumerError("ArcTargetController requires an IK effector")
        if poses is None:
            raise MissingConsumerError("ArcTargetController requires a pose provider")
        self._rails = rails
        self._poses = poses
        self._effector: Optional[IKEffector] = effector
        self.character = character if character is not None else RigidTransform()
        self.speed_multiplier = speed_multiplier

        start = initial_pose or _effector_pose(effector) or Pose.identity()
        self._follow_position = start.position.copy()
        self._follow_rotation = start.rotation
        self._ideal_position = start.position.copy()
        self._ideal_rotation = start.rotation

        self._active_rail = NO_RAIL
        self._delta = 0.0
        self._active = False
        self._weight = WEIGHT_MIN
        self._last_direction: Dict[int, np.ndarray] = {}

        self._push_target()
        self.set_weight(WEIGHT_MAX)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def rails(self) -> RailSet:
        return self._rails

    @property
    def active(self) -> bool:
        return self._active

    @property
    def active_rail_index(self) -> int:
        """Index of the selected rail, or ``NO_RAIL`` before any selection."""
        return self._active_rail

    @property
    def delta(self) -> float:
        return self._delta

    @property
    def weight(self) -> float:
        """Weight most recently applied to the effector."""
        return self._weight

    @property
    def ideal_position(self) -> np.ndarray:
        return self._ideal_position.copy()

    @property
    def ideal_rotation(self) -> Rotation:
        return self._ideal_rotation

    @property
    def follow_position(self) -> np.ndarray:
        return self._follow_position.copy()

    @property
    def follow_rotation(self) -> Rotation:
        return self._follow_rotation

    @property
    def ideal_pose(self) -> Pose:
        return Pose(self._ideal_position, self._ideal_rotation)

    @property
    def follow_pose(self) -> Pose:
        return Pose(self._follow_position, self._follow_rotation)

    @property
    def speed_multiplier(self) -> float:
        return self._speed_multiplier

    @speed_multiplier.setter
    def speed_multiplier(self, value: float) -> None:
        value = float(value)
        if not math.isfinite(value) or value < 0.0:
            raise ValueError(f"speed_multiplier must be >= 0, got {value}")
        self._speed_multiplier = value

    # ------------------------------------------------------------------
    # Activation / weight
    # ------------------------------------------------------------------

    def activate(self) -> None:
        """Start smoothing and give the effector full influence."""
        self.set_weight(WEIGHT_MAX)
        self._active = True

    def deactivate(self) -> None:
        """Stop smoothing and hand the limb back to the base animation."""
        self.set_weight(WEIGHT_MIN)
        self._active = False

    def set_weight(self, value: float) -> None:
        """Set both positional and rotational effector weights.

        Args:
            value: Desired weight; clamped to [0, 1].
        """
        weight = clamp(float(value), WEIGHT_MIN, WEIGHT_MAX)
        self._require_effector().set_weights(weight, weight)
        self._weight = weight

    def set_target(self, position: VectorLike, rotation: Rotation) -> None:
        """Place the follow pose immediately, without smoothing.

        Use this to snap the target onto the current hand pose before
        selecting a new rail so the transition starts where the hand is.

        Args:
            position: World position.
            rotation: World rotation.

        Raises:
            ValueError: If *position* is not a finite 3-vector.
            TypeError: If *rotation* is not a ``Rotation``.
            MissingConsumerError: After ``close()``.
        """
        position = as_vector3(position, "position")
        rotation = as_rotation(rotation, "rotation")
        self._require_effector()
        self._follow_position = position
        self._follow_rotation = rotation
        self._push_target()

    # ------------------------------------------------------------------
    # Rail selection
    # ------------------------------------------------------------------

    def select_rail(self, rail_index: int, delta: float) -> bool:
        """Make *rail_index* the active rail and target *delta* along it.

        The ideal pose is recomputed; the follow pose is left alone and
        eases toward the new ideal on later ticks.  Invalid requests are
        logged and leave the previous rail, delta and ideal pose in place.

        Args:
            rail_index: Index into the rail set.
            delta: Normalized position along the rail (unclamped).

        Returns:
            True if the selection was applied.
        """
        if not self._rails.is_valid_index(rail_index):
            logger.warning("Rail index is not valid: %s", rail_index)
            return False
        delta = float(delta)
        if not math.isfinite(delta):
            logger.warning("Rail delta is not finite: %s", delta)
            return False
        return self._apply(int(rail_index), delta)

    def refresh_target(self) -> bool:
        """Recompute the ideal pose for the current rail and delta.

        Useful when the endpoint nodes move with the character's animation
        after a rail was selected.

        Returns:
            True if the ideal pose was recomputed; False when no rail is
            selected or an endpoint node could not be resolved.
        """
        if self._active_rail == NO_RAIL:
            return False
        return self._apply(self._active_rail, self._delta)

    def _apply(self, index: int, delta: float) -> bool:
        """Resolve the pose for (*index*, *delta*) and commit it atomically."""
        fallback = self._last_direction.get(index, DEFAULT_DIRECTION)
        try:
            pose, sample = resolve_rail_pose(
                self._rails[index], delta, self._poses, self.character, fallback
            )
        except NodeNotFoundError as exc:
            logger.warning("Rail %d cannot be sampled: %s", index, exc)
            return False
        self._record_direction(index, sample)
        self._active_rail = index
        self._delta = delta
        self._ideal_position = pose.position.copy()
        self._ideal_rotation = pose.rotation
        return True

    def _record_direction(self, index: int, sample: RailSample) -> None:
        if sample.degenerate:
            logger.debug(
                "Rail %d: blended point lies on the arc origin, reusing %s",
                index,
                sample.direction.tolist(),
            )
            return
        self._last_direction[index] = sample.direction

    # ------------------------------------------------------------------
    # Per-tick update
    # ------------------------------------------------------------------

    def smoothing_factor(self, delta_time: float) -> float:
        """Return the interpolation factor for a tick of *delta_time* seconds.

        Args:
            delta_time: Elapsed time since the previous tick.

        Returns:
            ``delta_time * REFERENCE_RATE * speed_multiplier`` clamped to
            [0, 1].
        """
        return clamp(delta_time * REFERENCE_RATE * self._speed_multiplier, 0.0, 1.0)

    def tick(self, delta_time: float) -> None:
        """Ease the follow pose toward the ideal pose and publish it.

        Does nothing while the controller is inactive.

        Args:
            delta_time: Elapsed time in seconds since the previous tick.
        """
        if not self._active:
            return
        delta_time = float(delta_time)
        if not math.isfinite(delta_time):
            logger.warning("Ignoring tick with non-finite delta_time: %s", delta_time)
            return
        t = self.smoothing_factor(delta_time)
        self._follow_position = lerp(self._follow_position, self._ideal_position, t)
        self._follow_rotation = slerp(self._follow_rotation, self._ideal_rotation, t)
        self._push_target()

    # ------------------------------------------------------------------
    # Effector plumbing
    # ------------------------------------------------------------------

    def _require_effector(self) -> IKEffector:
        if self._effector is None:
            raise MissingConsumerError("IK effector has been released")
        return self._effector

    def _push_target(self) -> None:
        self._require_effector().set_target(
            self._follow_position.copy(), self._follow_rotation
        )

    def close(self) -> None:
        """Zero the effector weights, then release the effector reference.

        The controller is unusable afterwards; calling ``close()`` again is
        harmless.
        """
        if self._effector is not None:
            self._effector.set_weights(WEIGHT_MIN, WEIGHT_MIN)
            self._weight = WEIGHT_MIN
        self._effector = None
        self._active = False
