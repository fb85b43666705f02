"""
Dataclass configurations for the arc block controller.

Rails are authored as plain data (node ids, a local origin offset and a
radius) so they can be stored as JSON and resolved against whatever scene
representation the host provides.

Classes:
    RailConfig: Configuration of a single rail.
    BlockControllerConfig: Rail list plus smoothing speed.

Functions:
    load_config: Read a ``BlockControllerConfig`` from a JSON file.
    save_config: Write a ``BlockControllerConfig`` to a JSON file.
    default_demo_config: Three-rail guard layout used by the demo CLI.
    default_demo_poses: Node poses matching ``default_demo_config``.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from scipy.spatial.transform import Rotation

from arc_block_ik.rails.rail import Rail, RailSet
from arc_block_ik.utils.constants import DEFAULT_SPEED_MULTIPLIER
from arc_block_ik.utils.helpers import as_vector3
from arc_block_ik.utils.transforms import Pose


def _reject_unknown_keys(cls: type, data: Dict[str, Any]) -> None:
    """Raise if *data* holds keys that are not fields of *cls*.

    Args:
        cls: Dataclass type being built.
        data: Raw mapping from JSON.

    Raises:
        ValueError: On unknown keys.
    """
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {unknown}")


@dataclass
class RailConfig:
    """Configuration for one rail.

    Attributes:
        start_node: Node id of the arc's start point.
        end_node: Node id of the arc's end point.
        origin: Arc centre in the character's local space.
        radius: Distance from the origin to the arc.
    """

    start_node: str
    end_node: str
    origin: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    radius: float = 1.0

    def __post_init__(self) -> None:
        """Normalise the origin to a float tuple and validate the radius.

        Raises:
            ValueError: If the origin is not 3-D or the radius is negative.
        """
        self.origin = tuple(float(v) for v in as_vector3(self.origin, "origin"))
        self.radius = float(self.radius)
        if not math.isfinite(self.radius) or self.radius < 0.0:
            raise ValueError(f"radius must be >= 0, got {self.radius}")

    def to_rail(self) -> Rail:
        """Build the runtime ``Rail`` for this config.

        Returns:
            A new ``Rail``.
        """
        return Rail(
            start_node=self.start_node,
            end_node=self.end_node,
            origin=self.origin,
            radius=self.radius,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RailConfig":
        """Build a ``RailConfig`` from a JSON-style mapping.

        Args:
            data: Mapping with ``start_node``, ``end_node`` and optional
                ``origin`` / ``radius``.

        Returns:
            A validated ``RailConfig``.

        Raises:
            ValueError: On unknown or missing keys, or invalid values.
        """
        _reject_unknown_keys(cls, data)
        missing = [k for k in ("start_node", "end_node") if k not in data]
        if missing:
            raise ValueError(f"RailConfig missing keys: {missing}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable mapping of this config."""
        return {
            "start_node": self.start_node,
            "end_node": self.end_node,
            "origin": list(self.origin),
            "radius": self.radius,
        }


@dataclass
class BlockControllerConfig:
    """Configuration for an ``ArcTargetController``.

    Attributes:
        rails: Rails in index order; attacks refer to them by position.
        speed_multiplier: Scale on the per-tick smoothing factor (>= 0).
    """

    rails: List[RailConfig] = field(default_factory=list)
    speed_multiplier: float = DEFAULT_SPEED_MULTIPLIER

    def __post_init__(self) -> None:
        """Validate the speed multiplier.

        Raises:
            ValueError: If the multiplier is negative or not finite.
        """
        self.speed_multiplier = float(self.speed_multiplier)
        if not math.isfinite(self.speed_multiplier) or self.speed_multiplier < 0.0:
            raise ValueError(
                f"speed_multiplier must be >= 0, got {self.speed_multiplier}"
            )

    def build_rail_set(self) -> RailSet:
        """Return the runtime ``RailSet`` for the configured rails."""
        return RailSet(rail_cfg.to_rail() for rail_cfg in self.rails)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BlockControllerConfig":
        """Build a config from a JSON-style mapping.

        Args:
            data: Mapping with ``rails`` (list of rail mappings) and optional
                ``speed_multiplier``.

        Returns:
            A validated ``BlockControllerConfig``.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        _reject_unknown_keys(cls, data)
        rails = [RailConfig.from_dict(r) for r in data.get("rails", [])]
        speed = data.get("speed_multiplier", DEFAULT_SPEED_MULTIPLIER)
        return cls(rails=rails, speed_multiplier=speed)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable mapping of this config."""
        return {
            "rails": [r.to_dict() for r in self.rails],
            "speed_multiplier": self.speed_multiplier,
        }


def load_config(path: Union[str, Path]) -> BlockControllerConfig:
    """Read a controller configuration from a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed ``BlockControllerConfig``.
    """
    with open(path, encoding="utf-8") as f:
        return BlockControllerConfig.from_dict(json.load(f))


def save_config(cfg: BlockControllerConfig, path: Union[str, Path]) -> None:
    """Write a controller configuration to a JSON file.

    Args:
        cfg: Configuration to write.
        path: Destination path; parent directories are created.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as f:
        json.dump(cfg.to_dict(), f, indent=2)


# ---------------------------------------------------------------------------
# Demo layout: high, middle and low guard arcs in front of the character
# ---------------------------------------------------------------------------


def default_demo_config() -> BlockControllerConfig:
    """Return the three-rail guard layout used by ``run_block.py``.

    Returns:
        A ``BlockControllerConfig`` with high, middle and low rails.
    """
    return BlockControllerConfig(
        rails=[
            RailConfig("high_left", "high_right", origin=(0.0, 1.4, 0.0), radius=0.6),
            RailConfig("mid_left", "mid_right", origin=(0.0, 1.25, 0.0), radius=0.55),
            RailConfig("low_left", "low_right", origin=(0.0, 1.1, 0.0), radius=0.6),
        ],
        speed_multiplier=0.15,
    )


def default_demo_poses() -> Dict[str, Pose]:
    """Return endpoint node poses matching ``default_demo_config``.

    Returns:
        Mapping of node id to world ``Pose`` for a character at the origin.
    """
    layout = {
        "high_left": ((-0.45, 1.85, 0.35), (0.0, -30.0, 80.0)),
        "high_right": ((0.45, 1.85, 0.35), (0.0, 30.0, 100.0)),
        "mid_left": ((-0.55, 1.25, 0.40), (0.0, -60.0, 0.0)),
        "mid_right": ((0.55, 1.25, 0.40), (0.0, 60.0, 0.0)),
        "low_left": ((-0.45, 0.70, 0.35), (0.0, -30.0, -80.0)),
        "low_right": ((0.45, 0.70, 0.35), (0.0, 30.0, -100.0)),
    }
    return {
        node: Pose(pos, Rotation.from_euler("xyz", euler, degrees=True))
        for node, (pos, euler) in layout.items()
    }
