# tests/unit/contracts/test_unit_descriptor.py
"""Tests for UnitDescriptor creation, property parsing and compatibility checks."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from waveplan.contracts import (
    CompatibilityResult,
    UnitDescriptor,
    normalize_identity,
    parse_additional_properties,
    split_property_list,
)
from tests.conftest import ROOT, legacy_result, make_unit, modern_result


class TestPropertyParsing:
    """Semicolon-separated metadata parsing."""

    def test_split_trims_and_drops_empty_entries(self) -> None:
        assert split_property_list(" A ; ;B;; C ") == ("A", "B", "C")

    def test_split_empty_and_none(self) -> None:
        assert split_property_list("") == ()
        assert split_property_list(None) == ()

    def test_additional_properties_pairs_in_order(self) -> None:
        assert parse_additional_properties("Foo = 1; Bar=two") == (("Foo", "1"), ("Bar", "two"))

    def test_entry_without_equals_has_empty_value(self) -> None:
        assert parse_additional_properties("Flag;Key=V") == (("Flag", ""), ("Key", "V"))

    def test_value_may_contain_equals(self) -> None:
        assert parse_additional_properties("Define=A=B") == (("Define", "A=B"),)


class TestUnitDescriptor:
    """UnitDescriptor.create normalizes its input."""

    def test_identity_is_normalized_against_base_directory(self) -> None:
        unit = make_unit("src/./App/../App/App.csproj", 0)
        assert unit.identity == os.path.normpath(os.path.join(ROOT, "src/App/App.csproj"))

    def test_name_defaults_to_file_stem(self) -> None:
        assert make_unit("src/Company.Core/Company.Core.csproj", 0).name == "Company.Core"

    def test_explicit_name_wins(self) -> None:
        assert make_unit("src/App/App.csproj", 0, name="Main").name == "Main"

    def test_depends_on_string_is_split(self) -> None:
        unit = make_unit("A.proj", 0, depends_on=" B ;;C;")
        assert unit.depends_on == ("B", "C")

    def test_depends_on_sequence_is_trimmed(self) -> None:
        unit = make_unit("A.proj", 0, depends_on=[" B", "", "C "])
        assert unit.depends_on == ("B", "C")

    def test_item_defaults_to_identity(self) -> None:
        unit = make_unit("A.proj", 3)
        assert unit.item == unit.identity
        assert unit.original_order == 3

    def test_descriptor_is_immutable(self) -> None:
        unit = make_unit("A.proj", 0)
        with pytest.raises(AttributeError):
            unit.identity = "other"  # type: ignore[misc]

    def test_global_properties_merge_overrides(self) -> None:
        unit = make_unit("A.proj", 0, additional_properties="Foo=1;Platform=x64", platform="AnyCPU")
        assert unit.global_properties() == {"Configuration": "Debug", "Platform": "x64", "Foo": "1"}

    def test_additional_properties_passthrough_is_trimmed(self) -> None:
        assert make_unit("A.proj", 0, additional_properties="  Foo=1 ").additional_properties == "Foo=1"

    def test_absolute_path_ignores_base_directory(self) -> None:
        absolute = os.path.join(os.path.abspath(os.sep), "elsewhere", "X.proj")
        unit = UnitDescriptor.create(absolute, 0, configuration="Debug", platform="AnyCPU", base_directory=ROOT)
        assert unit.identity == normalize_identity(absolute)

    def test_relative_base_directory_yields_absolute_identity(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        identity = normalize_identity("a/Lib.proj", "sol")

        assert os.path.isabs(identity)
        assert identity == os.path.join(os.getcwd(), "sol", "a", "Lib.proj")


class TestCompatibilityResult:
    """Derived skip flag."""

    def test_modern_unit_supporting_configuration_is_kept(self) -> None:
        assert not modern_result().should_skip("Debug", "AnyCPU")

    def test_membership_is_case_insensitive(self) -> None:
        assert not modern_result().should_skip("debug", "anycpu")

    def test_unsupported_configuration_skips(self) -> None:
        assert modern_result(configurations=["Release"]).should_skip("Debug", "AnyCPU")

    def test_unsupported_platform_skips(self) -> None:
        assert modern_result(platforms=["x64"]).should_skip("Debug", "AnyCPU")

    def test_legacy_unit_with_output_path_is_kept(self) -> None:
        assert not legacy_result().should_skip("Anything", "Whatever")

    def test_legacy_unit_without_output_path_skips(self) -> None:
        assert legacy_result(output_path_declared=False).should_skip("Debug", "AnyCPU")

    def test_without_references_drops_only_references(self) -> None:
        result = modern_result(references=["B.proj"])
        stripped = result.without_references()
        assert stripped.structural_references == ()
        assert stripped.supported_configurations == result.supported_configurations
        assert isinstance(stripped, CompatibilityResult)
