"""
Real-time front view of the rails and hand poses.

Provides a Pygame window that draws every rail as a sampled arc, marks the
active rail, and overlays the ideal and follow hand positions plus a small
telemetry HUD.  The view looks down the character's forward axis, so world
X maps to screen right and world Y to screen up.

Classes:
    RailVisualizer: Live rendering of an ``ArcTargetController``.

Functions:
    sample_rail_polyline: World points along a rail for drawing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import numpy as np

from arc_block_ik.controller.arc_target import ArcTargetController
from arc_block_ik.ik.interfaces import PoseProvider
from arc_block_ik.rails.rail import Rail
from arc_block_ik.rails.resolver import get_delta_position
from arc_block_ik.utils.constants import (
    COLOR_BACKGROUND,
    COLOR_CHARACTER,
    COLOR_FOLLOW,
    COLOR_IDEAL,
    COLOR_RAIL,
    COLOR_RAIL_ACTIVE,
    COLOR_TEXT,
)
from arc_block_ik.utils.transforms import RigidTransform


def sample_rail_polyline(
    rail: Rail,
    poses: PoseProvider,
    character: RigidTransform,
    segments: int = 24,
) -> np.ndarray:
    """Sample world positions along *rail* for delta in [0, 1].

    Args:
        rail: Rail to sample.
        poses: Provider resolving the rail's endpoint nodes.
        character: World transform the rail origin is local to.
        segments: Number of line segments (points = segments + 1).

    Returns:
        Array of shape ``(segments + 1, 3)``.
    """
    deltas = np.linspace(0.0, 1.0, segments + 1)
    return np.stack(
        [get_delta_position(rail, float(d), poses, character).position for d in deltas]
    )


@dataclass
class RailVisualizer:
    """Pygame-based front view of an ``ArcTargetController``.

    Call ``render`` once per tick; it returns False when the user closes
    the window.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        fps: Target frames per second.
        pixels_per_unit: World-to-screen scale.
        center: World (x, y) shown at the middle of the window.
        window_title: Caption displayed in the title bar.
    """

    width: int = 480
    height: int = 480
    fps: int = 60
    pixels_per_unit: float = 180.0
    center: Tuple[float, float] = (0.0, 1.25)
    window_title: str = "Arc Block IK"
    _screen: Optional[Any] = None
    _clock: Optional[Any] = None

    # ------------------------------------------------------------------
    # Initialisation / teardown
    # ------------------------------------------------------------------

    def init_display(self) -> None:
        """Create the Pygame window and clock.

        Raises:
            ImportError: If Pygame is not installed.
        """
        try:
            import pygame
        except ImportError as exc:
            raise ImportError("Pygame required: pip install pygame") from exc
        pygame.init()
        self._screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self.window_title)
        self._clock = pygame.time.Clock()

    def close(self) -> None:
        """Destroy the Pygame window if one was opened."""
        if self._screen is None:
            return
        import pygame

        pygame.quit()
        self._screen = None
        self._clock = None

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def world_to_screen(self, point: np.ndarray) -> Tuple[int, int]:
        """Project a world point onto the window (front view).

        Args:
            point: World position; only x and y are used.

        Returns:
            Integer pixel coordinates.
        """
        sx = self.width / 2 + (float(point[0]) - self.center[0]) * self.pixels_per_unit
        sy = self.height / 2 - (float(point[1]) - self.center[1]) * self.pixels_per_unit
        return int(round(sx)), int(round(sy))

    # ------------------------------------------------------------------
    # Live rendering
    # ------------------------------------------------------------------

    def _draw_rails(self, controller: ArcTargetController, poses: PoseProvider) -> None:
        import pygame

        for index, rail in enumerate(controller.rails):
            points = sample_rail_polyline(rail, poses, controller.character)
            pixels: List[Tuple[int, int]] = [self.world_to_screen(p) for p in points]
            is_active = index == controller.active_rail_index
            color = COLOR_RAIL_ACTIVE if is_active else COLOR_RAIL
            pygame.draw.lines(self._screen, color, False, pixels, 3 if is_active else 1)

    def _draw_marker(self, point: np.ndarray, color: Tuple[int, int, int], size: int) -> None:
        import pygame

        pygame.draw.circle(self._screen, color, self.world_to_screen(point), size)

    def _draw_hud_text(self, text: str, y_offset: int) -> None:
        import pygame

        font = pygame.font.SysFont("monospace", 16)
        rendered = font.render(text, True, COLOR_TEXT)
        self._screen.blit(rendered, (8, y_offset))

    def _draw_hud(self, controller: ArcTargetController, step: int) -> None:
        """Draw the telemetry overlay.

        Args:
            controller: Controller whose state is shown.
            step: Current tick number.
        """
        error = float(np.linalg.norm(controller.follow_position - controller.ideal_position))
        self._draw_hud_text(f"Tick: {step}", 4)
        self._draw_hud_text(
            f"Rail: {controller.active_rail_index}  delta: {controller.delta:.2f}", 22
        )
        self._draw_hud_text(f"Weight: {controller.weight:.2f}  error: {error:.4f}", 40)

    def render(
        self, controller: ArcTargetController, poses: PoseProvider, step: int = 0
    ) -> bool:
        """Draw one frame of the rails and hand poses.

        Args:
            controller: Controller to display.
            poses: Provider resolving rail endpoint nodes.
            step: Current tick (shown in HUD).

        Returns:
            True if still running, False if user closed the window.
        """
        if self._screen is None:
            self.init_display()
        self._screen.fill(COLOR_BACKGROUND)
        self._draw_rails(controller, poses)
        self._draw_marker(controller.character.position, COLOR_CHARACTER, 6)
        self._draw_marker(controller.ideal_position, COLOR_IDEAL, 7)
        self._draw_marker(controller.follow_position, COLOR_FOLLOW, 5)
        self._draw_hud(controller, step)
        return self._flip_display()

    def _pump_events(self) -> bool:
        """Process Pygame events and return False if user quit."""
        import pygame

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
        return True

    def _flip_display(self) -> bool:
        """Update the display, pump events, and tick the clock.

        Returns:
            True if still running, False if user closed the window.
        """
        import pygame

        pygame.display.flip()
        alive = self._pump_events()
        if self._clock is not None:
            self._clock.tick(self.fps)
        return alive
