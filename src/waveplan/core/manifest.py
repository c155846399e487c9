# src/waveplan/core/manifest.py
"""Solution manifest: the ordered unit list plus pre-computed evaluations.

A manifest is what the CLI schedules. Each unit carries its requested
configuration/platform, its DependsOn declarations and the evaluation
the host build engine produced for it.

Example YAML:
    base_directory: .
    units:
      - path: src/Lib/Lib.csproj
        configuration: Debug
        platform: AnyCPU
        evaluation:
          configurations: [Debug, Release]
          platforms: [AnyCPU]
      - path: src/App/App.csproj
        configuration: Debug
        platform: AnyCPU
        depends_on: Lib
        evaluation:
          configurations: Debug;Release
          platforms: AnyCPU
          references: [../Lib/Lib.csproj]
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from waveplan.contracts import CompatibilityResult, UnitDescriptor, normalize_identity, split_property_list
from waveplan.core.evaluator import StaticEvaluator


def _as_list(value: Any) -> Any:
    """Accept either a YAML list or a semicolon-separated string."""
    if isinstance(value, str):
        return list(split_property_list(value))
    return value


class EvaluationEntry(BaseModel):
    """Evaluator output recorded for one unit.

    references are relative to the unit's own directory unless absolute.
    """

    model_config = {"frozen": True}

    modern: bool = Field(default=True, description="Unit uses the modern (SDK-style) build model")
    configurations: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    output_path_declared: bool = Field(default=True, description="Legacy units without an output path are skipped")
    references: list[str] = Field(default_factory=list)

    @field_validator("configurations", "platforms", "references", mode="before")
    @classmethod
    def split_lists(cls, v: Any) -> Any:
        return _as_list(v)


class UnitEntry(BaseModel):
    """One build unit as listed in the manifest."""

    model_config = {"frozen": True}

    path: str = Field(min_length=1)
    name: str | None = None
    configuration: str
    platform: str
    additional_properties: str = ""
    depends_on: str | list[str] = ""
    evaluation: EvaluationEntry = Field(default_factory=EvaluationEntry)


class SolutionManifest(BaseModel):
    """The ordered list of units to schedule."""

    model_config = {"frozen": True}

    base_directory: Path = Field(default_factory=Path.cwd)
    units: list[UnitEntry] = Field(default_factory=list)

    def descriptors(self) -> list[UnitDescriptor]:
        """Unit descriptors in manifest order."""
        return [
            UnitDescriptor.create(
                entry.path,
                index,
                configuration=entry.configuration,
                platform=entry.platform,
                additional_properties=entry.additional_properties,
                depends_on=entry.depends_on,
                name=entry.name,
                item=entry.path,
                base_directory=self.base_directory,
            )
            for index, entry in enumerate(self.units)
        ]

    def evaluator(self) -> StaticEvaluator:
        """Evaluator serving the recorded evaluation of every unit."""
        results: dict[str, CompatibilityResult] = {}
        for entry in self.units:
            identity = normalize_identity(entry.path, self.base_directory)
            unit_directory = os.path.dirname(identity)
            evaluation = entry.evaluation
            results[identity] = CompatibilityResult(
                uses_modern_model=evaluation.modern,
                supported_configurations=frozenset(evaluation.configurations),
                supported_platforms=frozenset(evaluation.platforms),
                output_path_declared=evaluation.output_path_declared,
                structural_references=tuple(normalize_identity(ref.replace("\\", "/"), unit_directory) for ref in evaluation.references),
            )
        return StaticEvaluator(results)


def load_manifest(manifest_path: Path) -> SolutionManifest:
    """Load and validate a manifest file.

    A relative base_directory is taken relative to the manifest's own
    directory; a missing one defaults to that directory.

    Raises:
        FileNotFoundError: If the manifest does not exist
        yaml.YAMLError: If the file is not valid YAML
        ValidationError: If the content fails Pydantic validation
    """
    if not manifest_path.exists():
        raise FileNotFoundError(f"Manifest not found: {manifest_path}")

    raw = yaml.safe_load(manifest_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Manifest must be a mapping, got {type(raw).__name__}")

    manifest_dir = manifest_path.resolve().parent
    base = raw.get("base_directory")
    raw["base_directory"] = manifest_dir / base if base else manifest_dir
    return SolutionManifest(**raw)
