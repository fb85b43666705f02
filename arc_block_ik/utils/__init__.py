"""
Shared constants, transform math, and helper utilities.

Centralizes the smoothing reference rate, direction fallbacks, pose types,
and small stateless helpers used across the arc_block_ik package.
"""
