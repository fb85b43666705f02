"""Tests for the rail data model."""
from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from arc_block_ik.rails.rail import Rail, RailSet


class TestRail:
    def test_origin_stored_as_vector(self) -> None:
        rail = Rail("a", "b", origin=(0, 1, 2), radius=3)
        assert rail.origin.dtype == np.float64
        np.testing.assert_array_equal(rail.origin, [0.0, 1.0, 2.0])
        assert rail.radius == 3.0

    def test_zero_radius_allowed(self) -> None:
        assert Rail("a", "b", radius=0.0).radius == 0.0

    def test_negative_radius_rejected(self) -> None:
        with pytest.raises(ValueError, match="radius"):
            Rail("a", "b", radius=-0.1)

    def test_infinite_radius_rejected(self) -> None:
        with pytest.raises(ValueError):
            Rail("a", "b", radius=float("inf"))

    def test_frozen(self) -> None:
        rail = Rail("a", "b")
        with pytest.raises(dataclasses.FrozenInstanceError):
            rail.radius = 2.0  # type: ignore[misc]


class TestRailSet:
    def test_insertion_order_is_index(self) -> None:
        first, second = Rail("a", "b"), Rail("c", "d")
        rails = RailSet([first, second])
        assert len(rails) == 2
        assert rails[0] is first
        assert rails[1] is second
        assert list(rails) == [first, second]

    def test_valid_indices(self) -> None:
        rails = RailSet([Rail("a", "b"), Rail("c", "d")])
        assert rails.is_valid_index(0)
        assert rails.is_valid_index(1)
        assert rails.is_valid_index(np.int64(1))

    @pytest.mark.parametrize("index", [-1, 2, 100, True, 0.0, "0", None])
    def test_invalid_indices(self, index: object) -> None:
        rails = RailSet([Rail("a", "b"), Rail("c", "d")])
        assert not rails.is_valid_index(index)

    def test_empty_set_has_no_valid_index(self) -> None:
        assert not RailSet().is_valid_index(0)

    def test_rejects_non_rail_members(self) -> None:
        with pytest.raises(TypeError, match="item 1"):
            RailSet([Rail("a", "b"), ("c", "d")])  # type: ignore[list-item]
