"""
Arc-constrained IK targets for melee blocking.

Drives a hand IK effector along predefined circular arcs ("rails") around a
character.  Each incoming attack names a rail and a normalized delta along
it; the controller resolves that to an ideal world pose and eases a follow
pose toward it every tick.

Modules:
    rails: Rail data model and the arc geometry resolver.
    controller: Rail selection, smoothing, weight control, and configs.
    ik: Host-side pose provider / IK effector protocols and in-memory sims.
    visualization: Optional top-down Pygame view of rails and poses.
    utils: Shared constants, transform math, and small helpers.
"""

__version__ = "0.1.0"
