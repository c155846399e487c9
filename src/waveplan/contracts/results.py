"""Output contracts of a scheduling run.

A BuildPlan is only ever complete: fatal conditions raise instead of
producing a partial plan.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby
from typing import Any

from waveplan.contracts.diagnostics import Diagnostic
from waveplan.contracts.units import UnitDescriptor


@dataclass(frozen=True, slots=True)
class ProjectReference:
    """One scheduled unit, with the metadata for its own build invocation."""

    item: Any
    unit: UnitDescriptor
    properties: str
    additional_properties: str
    build_order: str

    @classmethod
    def for_unit(cls, unit: UnitDescriptor, build_order: int) -> ProjectReference:
        return cls(
            item=unit.item,
            unit=unit,
            properties=f"Configuration={unit.configuration};Platform={unit.platform}",
            additional_properties=unit.additional_properties,
            build_order=str(build_order),
        )

    @property
    def wave(self) -> int:
        return int(self.build_order)

    def metadata(self) -> dict[str, str]:
        """Item metadata as the build driver consumes it."""
        return {
            "Properties": self.properties,
            "AdditionalProperties": self.additional_properties,
            "BuildOrder": self.build_order,
        }

    def to_dict(self) -> dict[str, Any]:
        return {"item": str(self.item), "name": self.unit.name, **self.metadata()}


@dataclass(frozen=True, slots=True)
class BuildPlan:
    """Ordered references plus the informational diagnostics of the run.

    dependency_ordered is False when the single-wave fast path was used.
    """

    references: tuple[ProjectReference, ...]
    dependency_ordered: bool
    diagnostics: tuple[Diagnostic, ...] = ()

    def __len__(self) -> int:
        return len(self.references)

    @property
    def wave_count(self) -> int:
        if not self.references:
            return 0
        return self.references[-1].wave + 1

    def waves(self) -> list[tuple[ProjectReference, ...]]:
        """References grouped by build order, in emission order."""
        return [tuple(group) for _, group in groupby(self.references, key=lambda ref: ref.wave)]

    @property
    def skipped(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if not d.is_error)
