"""Sensor sampling, state estimation, depth and surface control, and binary logging for a small underwater robot."""

__version__ = "0.1.0"