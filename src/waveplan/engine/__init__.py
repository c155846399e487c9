"""Scheduling entry points that drive the core components end to end."""

from waveplan.engine.planner import BuildPlanner

__all__ = ["BuildPlanner"]
