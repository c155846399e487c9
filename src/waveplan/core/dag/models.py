# src/waveplan/core/dag/models.py
"""Types and exceptions for dependency graph operations.

Leaf module: no imports from the rest of the dag package.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from waveplan.contracts import CompatibilityResult, Diagnostic, UnitDescriptor, UnitID


class SchedulingError(ValueError):
    """Raised when a scheduling run cannot produce a complete plan.

    Carries every diagnostic gathered before the run was aborted.
    """

    def __init__(self, message: str, diagnostics: Iterable[Diagnostic] = ()) -> None:
        super().__init__(message)
        self.diagnostics: tuple[Diagnostic, ...] = tuple(diagnostics)


class DuplicateUnitError(SchedulingError):
    """Two input descriptors share the same identity."""


class DependencyResolutionError(SchedulingError):
    """One or more DependsOn expressions or structural references failed to resolve."""


class CyclicDependencyError(SchedulingError):
    """A unit would be scheduled again, or can never be scheduled, because of a cycle."""

    def __init__(self, unit_name: str, diagnostics: Iterable[Diagnostic] = ()) -> None:
        super().__init__(f"Cyclic dependency detected for project '{unit_name}'", diagnostics)
        self.unit_name = unit_name


class InconsistentGraphError(SchedulingError):
    """Internal invariant violation: a surviving unit was never reached."""


@dataclass(frozen=True, slots=True)
class GraphNode:
    """A surviving unit together with its evaluation result.

    has_dependencies seeds the first wave: it is True when the unit
    declares any DependsOn entry or structural reference, resolved or not.
    """

    unit: UnitDescriptor
    compatibility: CompatibilityResult

    @property
    def identity(self) -> UnitID:
        return self.unit.identity

    @property
    def name(self) -> str:
        return self.unit.name

    @property
    def original_order(self) -> int:
        return self.unit.original_order

    @property
    def has_dependencies(self) -> bool:
        return bool(self.unit.depends_on) or bool(self.compatibility.structural_references)
