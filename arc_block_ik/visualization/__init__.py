"""
Real-time rendering of rails and hand poses.

Provides a Pygame-based front view for inspecting rail layouts and the
follow pose converging on the ideal pose.
"""
