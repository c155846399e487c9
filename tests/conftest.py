# tests/conftest.py
"""Shared test fixtures and helpers.

Test Helpers:
- make_unit: UnitDescriptor rooted under ROOT with Debug/AnyCPU defaults
- modern_result / legacy_result: CompatibilityResult shortcuts
- FakeEvaluator: deterministic ProjectEvaluator that records its calls

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
import threading
from collections.abc import Iterable, Mapping

import pytest
from hypothesis import Phase, Verbosity, settings

from waveplan.contracts import CompatibilityResult, UnitDescriptor, UnitID, normalize_identity
from waveplan.core.config import SchedulerSettings
from waveplan.engine import BuildPlanner

ROOT = os.path.normpath("/repo")


def unit_path(relative: str) -> UnitID:
    """Identity of a unit at ROOT/relative."""
    return normalize_identity(relative, ROOT)


def make_unit(
    relative: str,
    order: int,
    *,
    depends_on: str | Iterable[str] | None = None,
    configuration: str = "Debug",
    platform: str = "AnyCPU",
    additional_properties: str | None = None,
    name: str | None = None,
) -> UnitDescriptor:
    return UnitDescriptor.create(
        relative,
        order,
        configuration=configuration,
        platform=platform,
        additional_properties=additional_properties,
        depends_on=depends_on,
        name=name,
        base_directory=ROOT,
    )


def modern_result(
    configurations: Iterable[str] = ("Debug", "Release"),
    platforms: Iterable[str] = ("AnyCPU",),
    references: Iterable[str] = (),
) -> CompatibilityResult:
    return CompatibilityResult(
        uses_modern_model=True,
        supported_configurations=frozenset(configurations),
        supported_platforms=frozenset(platforms),
        structural_references=tuple(unit_path(ref) for ref in references),
    )


def legacy_result(*, output_path_declared: bool = True) -> CompatibilityResult:
    return CompatibilityResult(uses_modern_model=False, output_path_declared=output_path_declared)


class FakeEvaluator:
    """Deterministic evaluator keyed by identity.

    Units without an override get `default` (modern, Debug/Release, AnyCPU).
    """

    def __init__(
        self,
        overrides: Mapping[str, CompatibilityResult] | None = None,
        default: CompatibilityResult | None = None,
    ) -> None:
        self._overrides = {unit_path(key): value for key, value in (overrides or {}).items()}
        self._default = default if default is not None else modern_result()
        self._lock = threading.Lock()
        self.calls: list[tuple[UnitID, str, str, dict[str, str]]] = []

    def evaluate(
        self,
        identity: UnitID,
        configuration: str,
        platform: str,
        properties: Mapping[str, str],
    ) -> CompatibilityResult:
        with self._lock:
            self.calls.append((identity, configuration, platform, dict(properties)))
        return self._overrides.get(identity, self._default)


def plan_names(evaluator: FakeEvaluator, units: list[UnitDescriptor], **settings_kwargs: object) -> list[tuple[str, str]]:
    """Run a planner and return (name, build_order) pairs in emission order."""
    planner = BuildPlanner(evaluator, SchedulerSettings(base_directory=ROOT, **settings_kwargs))  # type: ignore[arg-type]
    plan = planner.plan(units)
    return [(reference.unit.name, reference.build_order) for reference in plan.references]


@pytest.fixture
def evaluator() -> FakeEvaluator:
    return FakeEvaluator()


@pytest.fixture
def planner(evaluator: FakeEvaluator) -> BuildPlanner:
    return BuildPlanner(evaluator, SchedulerSettings(base_directory=ROOT))


# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
