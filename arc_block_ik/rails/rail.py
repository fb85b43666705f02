"""
Rail data model.

A rail is a circular arc around the character: two endpoint nodes give the
angular extent and the hand rotations at either end, while a local-space
origin and a radius fix the circle the hand is projected onto.

Classes:
    Rail: A single arc definition.
    RailSet: Ordered, immutable collection of rails addressed by index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable, Iterator, Tuple

import numpy as np

from arc_block_ik.utils.helpers import as_vector3


@dataclass(frozen=True, eq=False)
class Rail:
    """An arc the hand can follow.

    The rail only holds node ids; endpoint poses are looked up through a
    pose provider every time the rail is sampled.

    Attributes:
        start_node: Node id of the arc's start point.
        end_node: Node id of the arc's end point.
        origin: Arc centre in the character's local space.
        radius: Distance from the origin to the arc.
    """

    start_node: Hashable
    end_node: Hashable
    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    radius: float = 1.0

    def __post_init__(self) -> None:
        """Validate the radius and store the origin as a float64 vector.

        Raises:
            ValueError: If the radius is negative or not finite.
        """
        object.__setattr__(self, "origin", as_vector3(self.origin, "origin"))
        radius = float(self.radius)
        if not np.isfinite(radius) or radius < 0.0:
            raise ValueError(f"Rail radius must be >= 0, got {self.radius}")
        object.__setattr__(self, "radius", radius)


class RailSet:
    """An ordered, read-only sequence of rails.

    Insertion order is the index contract: attack definitions refer to
    rails by their position in this set.
    """

    def __init__(self, rails: Iterable[Rail] = ()) -> None:
        """Freeze *rails* into the set.

        Args:
            rails: Rails in index order.

        Raises:
            TypeError: If any member is not a ``Rail``.
        """
        items: Tuple[Rail, ...] = tuple(rails)
        for i, rail in enumerate(items):
            if not isinstance(rail, Rail):
                raise TypeError(f"RailSet item {i} is {type(rail).__name__}, not Rail")
        self._rails = items

    def __len__(self) -> int:
        return len(self._rails)

    def __getitem__(self, index: int) -> Rail:
        return self._rails[index]

    def __iter__(self) -> Iterator[Rail]:
        return iter(self._rails)

    def __repr__(self) -> str:
        return f"RailSet({len(self._rails)} rails)"

    def is_valid_index(self, index: object) -> bool:
        """Return True when *index* addresses a rail in this set.

        Negative indices are never valid (no wrap-around), and neither are
        booleans or non-integers.

        Args:
            index: Candidate rail index.

        Returns:
            Whether ``0 <= index < len(self)``.
        """
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            return False
        return 0 <= int(index) < len(self._rails)
