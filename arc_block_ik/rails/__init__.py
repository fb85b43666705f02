"""
Rail definitions and arc geometry.

Provides the ``Rail`` / ``RailSet`` data model and the resolver that turns
a rail and a normalized delta into a world-space hand pose.
"""

from arc_block_ik.rails.rail import Rail, RailSet
from arc_block_ik.rails.resolver import (
    RailSample,
    get_delta_position,
    get_delta_rotation,
    resolve_rail_pose,
)

__all__ = [
    "Rail",
    "RailSet",
    "RailSample",
    "get_delta_position",
    "get_delta_rotation",
    "resolve_rail_pose",
]
