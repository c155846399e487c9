# src/waveplan/core/dag/__init__.py
"""Dependency graph construction, reference resolution and wave scheduling."""

from waveplan.core.dag.graph import DependencyGraph
from waveplan.core.dag.models import (
    CyclicDependencyError,
    DependencyResolutionError,
    DuplicateUnitError,
    GraphNode,
    InconsistentGraphError,
    SchedulingError,
)
from waveplan.core.dag.resolver import ReferenceResolver, Resolution, ResolutionReport
from waveplan.core.dag.scheduler import BuildOrderScheduler, Schedule

__all__ = [
    "BuildOrderScheduler",
    "CyclicDependencyError",
    "DependencyGraph",
    "DependencyResolutionError",
    "DuplicateUnitError",
    "GraphNode",
    "InconsistentGraphError",
    "ReferenceResolver",
    "Resolution",
    "ResolutionReport",
    "Schedule",
    "SchedulingError",
]
