# src/waveplan/engine/planner.py
"""BuildPlanner: one end-to-end scheduling request.

Flow:
    descriptors -> evaluate (all units, before anything else)
                -> compatibility filter (skips removed from the graph)
                -> reference resolution (all errors gathered, then abort)
                -> wave scheduling
                -> BuildPlan

The outcome is all-or-nothing: either a complete BuildPlan, or a
SchedulingError carrying every diagnostic gathered so far.
"""

from __future__ import annotations

from collections.abc import Sequence

from waveplan.contracts import BuildPlan, UnitDescriptor
from waveplan.core.compatibility import CompatibilityResolver
from waveplan.core.config import SchedulerSettings
from waveplan.core.dag import (
    BuildOrderScheduler,
    DependencyGraph,
    DependencyResolutionError,
    ReferenceResolver,
    SchedulingError,
)
from waveplan.core.evaluator import ProjectEvaluator, evaluate_units
from waveplan.core.logging import get_logger

logger = get_logger(__name__)


class BuildPlanner:
    """Computes the build plan for a list of units.

    Example:
        planner = BuildPlanner(evaluator, SchedulerSettings(base_directory=root))
        plan = planner.plan(units)
        for reference in plan.references:
            build(reference.item, reference.metadata())
    """

    def __init__(self, evaluator: ProjectEvaluator, settings: SchedulerSettings | None = None) -> None:
        self._evaluator = evaluator
        self._settings = settings if settings is not None else SchedulerSettings()

    @property
    def settings(self) -> SchedulerSettings:
        return self._settings

    def dependency_ordering_requested(self, units: Sequence[UnitDescriptor]) -> bool:
        """Structural ordering is forced on as soon as any unit declares DependsOn."""
        return self._settings.structural_references or any(unit.depends_on for unit in units)

    def plan(self, units: Sequence[UnitDescriptor]) -> BuildPlan:
        """Schedule units.

        Raises:
            DuplicateUnitError: Two units share an identity.
            DependencyResolutionError: Any declaration failed to resolve.
            CyclicDependencyError: The dependencies form a cycle.
            InconsistentGraphError: A unit could not be reached.
            EvaluationError: The evaluator failed for a unit.
        """
        ordered = self.dependency_ordering_requested(units)
        results = evaluate_units(
            units,
            self._evaluator,
            include_references=ordered,
            max_workers=self._settings.evaluation_workers,
        )

        graph = DependencyGraph.from_units(units, results)
        skipped = CompatibilityResolver().filter(graph)

        if ordered:
            report = ReferenceResolver(
                graph,
                base_directory=self._settings.base_directory,
                policy=self._settings.relative_path_policy,
            ).resolve()
            if not report.ok:
                errors = report.errors
                raise DependencyResolutionError(
                    f"{len(errors)} dependency declaration(s) could not be resolved",
                    [*skipped, *errors],
                )

        try:
            schedule = BuildOrderScheduler().schedule(graph)
        except SchedulingError as e:
            e.diagnostics = (*skipped, *e.diagnostics)
            raise

        plan = BuildPlan(
            references=schedule.references,
            dependency_ordered=schedule.leveled,
            diagnostics=tuple(skipped),
        )
        logger.info(
            "build_plan_ready",
            units=len(plan),
            skipped=len(skipped),
            waves=plan.wave_count,
            dependency_ordered=plan.dependency_ordered,
        )
        return plan
