"""Upstream signal utilities: curvature reconstruction, hotspots, path metrics."""

from .curvature import CurvatureSignal, densify
from .hotspot import PercentileHotspot
from .path import PathMetrics, TrajectoryPath

__all__ = ["CurvatureSignal", "densify", "PercentileHotspot", "PathMetrics", "TrajectoryPath"]
