"""
Host collaborator interfaces and in-memory implementations.

Defines the pose provider / IK effector protocols the controller depends
on, plus dictionary-backed stand-ins for scripted runs and tests.
"""

from arc_block_ik.ik.interfaces import IKEffector, PoseProvider
from arc_block_ik.ik.sim import SimEffector, StaticPoseProvider

__all__ = ["IKEffector", "PoseProvider", "SimEffector", "StaticPoseProvider"]
