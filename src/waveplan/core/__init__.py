# src/waveplan/core/__init__.py
"""Core infrastructure: configuration, evaluation, compatibility, DAG, logging."""

from waveplan.core.compatibility import CompatibilityResolver
from waveplan.core.config import SchedulerSettings, load_settings
from waveplan.core.dag import (
    BuildOrderScheduler,
    CyclicDependencyError,
    DependencyGraph,
    DependencyResolutionError,
    DuplicateUnitError,
    GraphNode,
    InconsistentGraphError,
    ReferenceResolver,
    SchedulingError,
)
from waveplan.core.evaluator import EvaluationError, ProjectEvaluator, StaticEvaluator, evaluate_units
from waveplan.core.logging import configure_logging, get_logger
from waveplan.core.manifest import SolutionManifest, load_manifest

__all__ = [
    "BuildOrderScheduler",
    "CompatibilityResolver",
    "CyclicDependencyError",
    "DependencyGraph",
    "DependencyResolutionError",
    "DuplicateUnitError",
    "EvaluationError",
    "GraphNode",
    "InconsistentGraphError",
    "ProjectEvaluator",
    "ReferenceResolver",
    "SchedulerSettings",
    "SchedulingError",
    "SolutionManifest",
    "StaticEvaluator",
    "configure_logging",
    "evaluate_units",
    "get_logger",
    "load_manifest",
    "load_settings",
]
