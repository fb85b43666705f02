#!/usr/bin/env python3
"""
Main entry point for driving the arc block controller outside an engine.

Builds a controller from a JSON config (or the built-in guard layout),
feeds it a scripted sequence of incoming attacks as (rail, delta) pairs,
and ticks it at a fixed frame rate, either printing how quickly the hand
settles on each block pose or drawing it live.

Usage examples::

    # Print settling error for the scripted attacks
    python run_block.py --mode simulate

    # Live front view (requires pygame)
    python run_block.py --mode visualize --speed 0.1

    # Custom rail layout over the demo nodes (high_left, mid_right, ...)
    python run_block.py --config my_rails.json --log-level DEBUG
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from typing import List, Optional, Tuple

import numpy as np

from arc_block_ik.controller.arc_target import ArcTargetController
from arc_block_ik.controller.configs import (
    BlockControllerConfig,
    default_demo_config,
    default_demo_poses,
    load_config,
)
from arc_block_ik.controller.factory import make_block_controller
from arc_block_ik.ik.sim import SimEffector, StaticPoseProvider
from arc_block_ik.utils.transforms import rotation_angle

# Scripted attacks: (rail index, perfect-block delta).  Index 7 is invalid
# on purpose and must be rejected without disturbing the current block.
_ATTACKS: List[Tuple[int, float]] = [
    (1, 0.5),
    (0, 0.2),
    (2, 0.9),
    (7, 0.5),
    (1, 0.0),
    (0, 1.0),
]

# ======================================================================
# Builders
# ======================================================================


def _build_config(args: argparse.Namespace) -> BlockControllerConfig:
    """Load the config named on the command line, or the demo layout.

    Args:
        args: Parsed CLI arguments.

    Returns:
        A ``BlockControllerConfig`` with the ``--speed`` override applied.
    """
    cfg = load_config(args.config) if args.config else default_demo_config()
    if args.speed is not None:
        cfg = dataclasses.replace(cfg, speed_multiplier=args.speed)
    return cfg


def _build_controller(
    cfg: BlockControllerConfig,
) -> Tuple[ArcTargetController, StaticPoseProvider, SimEffector]:
    """Create the controller together with in-memory host collaborators.

    Args:
        cfg: Controller configuration.

    Returns:
        Tuple of (controller, pose provider, effector).
    """
    poses = StaticPoseProvider.from_mapping(default_demo_poses())
    effector = SimEffector()
    controller = make_block_controller(cfg, poses, effector)
    return controller, poses, effector


def _pose_error(controller: ArcTargetController) -> Tuple[float, float]:
    """Return (distance, angle in degrees) between follow and ideal pose."""
    dist = float(np.linalg.norm(controller.follow_position - controller.ideal_position))
    angle = np.degrees(rotation_angle(controller.follow_rotation, controller.ideal_rotation))
    return dist, float(angle)


# ======================================================================
# Mode runners
# ======================================================================


def _run_simulate(cfg: BlockControllerConfig, args: argparse.Namespace) -> None:
    """Tick through every scripted attack and print the settling error.

    Args:
        cfg: Controller configuration.
        args: Parsed CLI arguments.
    """
    controller, _, effector = _build_controller(cfg)
    controller.activate()
    dt = 1.0 / args.fps
    for rail, delta in _ATTACKS:
        accepted = controller.select_rail(rail, delta)
        status = "accepted" if accepted else "rejected"
        print(f"Attack rail={rail} delta={delta:.2f} -> {status}")
        for _ in range(args.ticks):
            controller.tick(dt)
        dist, angle = _pose_error(controller)
        print(
            f"  after {args.ticks} ticks: pos error {dist:.5f}, "
            f"rot error {angle:.3f} deg, writes {effector.target_writes}"
        )
    controller.deactivate()
    print(f"Deactivated: effector weight = {effector.position_weight:.1f}")


def _run_visualize(cfg: BlockControllerConfig, args: argparse.Namespace) -> None:
    """Play the scripted attacks in a live Pygame window.

    Args:
        cfg: Controller configuration.
        args: Parsed CLI arguments.
    """
    from arc_block_ik.visualization.visualizer import RailVisualizer

    controller, poses, _ = _build_controller(cfg)
    viz = RailVisualizer(fps=args.fps)
    controller.activate()
    dt = 1.0 / args.fps
    step = 0
    alive = True
    try:
        for rail, delta in _ATTACKS:
            controller.select_rail(rail, delta)
            for _ in range(args.ticks):
                controller.tick(dt)
                alive = viz.render(controller, poses, step=step)
                step += 1
                if not alive:
                    break
            if not alive:
                break
    finally:
        viz.close()


# ======================================================================
# CLI
# ======================================================================


def _positive_int(text: str) -> int:
    """argparse type for counts that must be at least 1."""
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list; ``sys.argv[1:]`` when *None*.

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(description="Arc block IK target driver")
    parser.add_argument("--mode", choices=["simulate", "visualize"], default="simulate")
    parser.add_argument("--config", default=None, help="JSON rail configuration")
    parser.add_argument("--speed", type=float, default=None)
    parser.add_argument("--fps", type=_positive_int, default=60)
    parser.add_argument("--ticks", type=_positive_int, default=30)
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


# Mapping from mode name to runner function
_MODE_DISPATCH = {
    "simulate": _run_simulate,
    "visualize": _run_visualize,
}


def main(argv: Optional[List[str]] = None) -> None:
    """Run the selected mode.

    Args:
        argv: Argument list; ``sys.argv[1:]`` when *None*.
    """
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s"
    )
    cfg = _build_config(args)
    print(f"Mode: {args.mode} | Rails: {len(cfg.rails)} | Speed: {cfg.speed_multiplier}")
    print("-" * 60)
    _MODE_DISPATCH[args.mode](cfg, args)


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------
if __name__ == "__main__":
    main()
