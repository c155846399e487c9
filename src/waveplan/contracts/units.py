"""Build unit input records and evaluator results.

UnitDescriptor is created once per scheduling request from the ordered
input list. CompatibilityResult is what the project evaluator reports for
a unit under its requested configuration and platform.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from waveplan.contracts.types import UnitID, UnitName

PROPERTY_SEPARATOR = ";"


def normalize_identity(path: str | os.PathLike[str], base_directory: str | os.PathLike[str] | None = None) -> UnitID:
    """Return the canonical identity for a unit path.

    Relative paths are resolved against base_directory (or the current
    working directory when it is None). A relative base_directory is itself
    taken from the current working directory, so the result is always absolute.
    """
    raw = os.fspath(path)
    if not os.path.isabs(raw):
        base = os.fspath(base_directory) if base_directory is not None else os.getcwd()
        raw = os.path.join(base, raw)
    return UnitID(os.path.abspath(raw))


def split_property_list(value: str | None) -> tuple[str, ...]:
    """Split a semicolon-separated list, trimming entries and dropping empties."""
    if not value:
        return ()
    entries = (entry.strip() for entry in value.split(PROPERTY_SEPARATOR))
    return tuple(entry for entry in entries if entry)


def parse_additional_properties(value: str | None) -> tuple[tuple[str, str], ...]:
    """Parse 'Key=Value;Other=1' into ordered (key, value) pairs.

    An entry without '=' becomes a key with an empty value.
    """
    pairs: list[tuple[str, str]] = []
    for entry in split_property_list(value):
        key, sep, prop_value = entry.partition("=")
        pairs.append((key.strip(), prop_value.strip() if sep else ""))
    return tuple(pairs)


@dataclass(frozen=True, slots=True)
class UnitDescriptor:
    """Immutable input record for one build unit.

    identity is the unique key for the whole run: two descriptors with the
    same identity describe the same unit. original_order is only used as a
    stable tie-break within a wave.
    """

    identity: UnitID
    original_order: int
    name: UnitName
    configuration: str
    platform: str
    additional_properties: str = ""
    depends_on: tuple[str, ...] = ()
    item: Any = field(default=None, compare=False)

    @classmethod
    def create(
        cls,
        path: str | os.PathLike[str],
        original_order: int,
        *,
        configuration: str,
        platform: str,
        additional_properties: str | None = None,
        depends_on: str | Iterable[str] | None = None,
        name: str | None = None,
        item: Any = None,
        base_directory: str | os.PathLike[str] | None = None,
    ) -> UnitDescriptor:
        """Build a descriptor from raw input metadata.

        depends_on accepts either the raw semicolon-separated string or an
        already split sequence of expressions.
        """
        identity = normalize_identity(path, base_directory)
        if depends_on is None or isinstance(depends_on, str):
            dependencies = split_property_list(depends_on)
        else:
            dependencies = tuple(entry.strip() for entry in depends_on if entry.strip())
        unit_name = name if name else os.path.splitext(os.path.basename(identity))[0]
        return cls(
            identity=identity,
            original_order=original_order,
            name=UnitName(unit_name),
            configuration=configuration,
            platform=platform,
            additional_properties=(additional_properties or "").strip(),
            depends_on=dependencies,
            item=item if item is not None else identity,
        )

    @property
    def property_overrides(self) -> tuple[tuple[str, str], ...]:
        """Parsed AdditionalProperties pairs, in declaration order."""
        return parse_additional_properties(self.additional_properties)

    def global_properties(self) -> dict[str, str]:
        """Property bag handed to the project evaluator."""
        properties = {"Configuration": self.configuration, "Platform": self.platform}
        for key, value in self.property_overrides:
            properties[key] = value
        return properties


@dataclass(frozen=True, slots=True)
class CompatibilityResult:
    """What the project evaluator reports about one unit.

    structural_references is only populated when structural ordering was
    requested; otherwise it stays empty.
    """

    uses_modern_model: bool
    supported_configurations: frozenset[str] = frozenset()
    supported_platforms: frozenset[str] = frozenset()
    output_path_declared: bool = True
    structural_references: tuple[UnitID, ...] = ()

    def should_skip(self, configuration: str, platform: str) -> bool:
        """Whether the unit cannot be built under configuration/platform.

        Legacy units are buildable unless they declare no output path.
        Modern units must list both values (case-insensitive).
        """
        if not self.uses_modern_model:
            return not self.output_path_declared

        configurations = {value.casefold() for value in self.supported_configurations}
        platforms = {value.casefold() for value in self.supported_platforms}
        return configuration.casefold() not in configurations or platform.casefold() not in platforms

    def without_references(self) -> CompatibilityResult:
        """Copy of this result with structural references dropped."""
        return CompatibilityResult(
            uses_modern_model=self.uses_modern_model,
            supported_configurations=self.supported_configurations,
            supported_platforms=self.supported_platforms,
            output_path_declared=self.output_path_declared,
        )
