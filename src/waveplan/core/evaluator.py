# src/waveplan/core/evaluator.py
"""Project evaluator capability and eager evaluation of all units.

The evaluator is the external collaborator that loads a unit definition
under a configuration/platform and reports its support and structural
references. The scheduler only depends on the ProjectEvaluator protocol,
so callers inject a real build engine and tests inject fakes.

Evaluation of every unit completes before compatibility filtering starts.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol, runtime_checkable

from waveplan.contracts import CompatibilityResult, UnitDescriptor, UnitID, normalize_identity
from waveplan.core.logging import get_logger

logger = get_logger(__name__)


class EvaluationError(RuntimeError):
    """Raised when the evaluator cannot report on a unit."""


@runtime_checkable
class ProjectEvaluator(Protocol):
    """Loads one unit and reports its configuration support and references.

    Implementations must be safe to call from worker threads when
    evaluation is parallelized; calls never depend on each other.
    """

    def evaluate(
        self,
        identity: UnitID,
        configuration: str,
        platform: str,
        properties: Mapping[str, str],
    ) -> CompatibilityResult: ...


class StaticEvaluator:
    """Evaluator backed by pre-computed results (batch evaluation).

    Structural reference paths are normalized against base_directory so
    they compare equal to unit identities.
    """

    def __init__(
        self,
        results: Mapping[str, CompatibilityResult],
        *,
        base_directory: str | None = None,
    ) -> None:
        self._results: dict[UnitID, CompatibilityResult] = {}
        for path, result in results.items():
            identity = normalize_identity(path, base_directory)
            references = tuple(normalize_identity(ref, base_directory) for ref in result.structural_references)
            self._results[identity] = CompatibilityResult(
                uses_modern_model=result.uses_modern_model,
                supported_configurations=result.supported_configurations,
                supported_platforms=result.supported_platforms,
                output_path_declared=result.output_path_declared,
                structural_references=references,
            )

    def evaluate(
        self,
        identity: UnitID,
        configuration: str,
        platform: str,
        properties: Mapping[str, str],
    ) -> CompatibilityResult:
        try:
            return self._results[identity]
        except KeyError:
            raise EvaluationError(f"No evaluation result for unit '{identity}'") from None


def evaluate_units(
    units: Sequence[UnitDescriptor],
    evaluator: ProjectEvaluator,
    *,
    include_references: bool,
    max_workers: int = 1,
) -> list[CompatibilityResult]:
    """Evaluate every unit, returning results aligned with units.

    Args:
        units: Descriptors in input order.
        evaluator: Injected project evaluator.
        include_references: Keep structural references (only needed when
            dependency ordering was requested).
        max_workers: Parallel evaluator calls. 1 evaluates sequentially.

    Returns:
        One result per unit, index-aligned with units.

    Raises:
        EvaluationError: Propagated from the first failing evaluation.
    """

    def _evaluate(unit: UnitDescriptor) -> CompatibilityResult:
        result = evaluator.evaluate(unit.identity, unit.configuration, unit.platform, unit.global_properties())
        return result if include_references else result.without_references()

    if max_workers <= 1 or len(units) <= 1:
        results = [_evaluate(unit) for unit in units]
    else:
        # map() yields in submission order: one slot per unit, written once
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(_evaluate, units))

    logger.debug("units_evaluated", count=len(results), workers=max_workers)
    return results
