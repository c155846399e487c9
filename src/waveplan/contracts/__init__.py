"""Shared data contracts: leaf modules with no dependency on core or engine."""

from waveplan.contracts.diagnostics import Diagnostic
from waveplan.contracts.enums import DiagnosticCode, RelativePathPolicy, Severity
from waveplan.contracts.results import BuildPlan, ProjectReference
from waveplan.contracts.types import UnitID, UnitName
from waveplan.contracts.units import (
    CompatibilityResult,
    UnitDescriptor,
    normalize_identity,
    parse_additional_properties,
    split_property_list,
)

__all__ = [
    "BuildPlan",
    "CompatibilityResult",
    "Diagnostic",
    "DiagnosticCode",
    "ProjectReference",
    "RelativePathPolicy",
    "Severity",
    "UnitDescriptor",
    "UnitID",
    "UnitName",
    "normalize_identity",
    "parse_additional_properties",
    "split_property_list",
]
