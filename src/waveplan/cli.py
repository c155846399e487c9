# src/waveplan/cli.py
"""waveplan Command Line Interface.

Entry point for the waveplan CLI tool.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
import yaml
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from waveplan import __version__
from waveplan.contracts import BuildPlan, Diagnostic
from waveplan.core.config import SchedulerSettings, load_settings
from waveplan.core.dag import SchedulingError
from waveplan.core.evaluator import EvaluationError
from waveplan.core.manifest import SolutionManifest, load_manifest
from waveplan.engine import BuildPlanner

__all__ = ["app"]

app = typer.Typer(
    name="waveplan",
    help="waveplan: dependency-aware build ordering for solution builds.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"waveplan version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """waveplan: dependency-aware build ordering for solution builds."""
    from waveplan.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")


def _format_error(title: str, message: str, details: list[str] | None = None) -> None:
    typer.secho(f"{title}: {message}", fg=typer.colors.RED, err=True)
    for detail in details or []:
        typer.echo(f"  - {detail}", err=True)


def _load_inputs(manifest: Path, settings: Path | None, structural_references: bool) -> tuple[SolutionManifest, SchedulerSettings]:
    """Load manifest and settings, exiting with a readable message on failure."""
    manifest_path = manifest.expanduser()
    settings_path = settings.expanduser() if settings is not None else None
    try:
        config = load_settings(settings_path)
        solution = load_manifest(manifest_path)
    except FileNotFoundError as e:
        _format_error("File Not Found", str(e))
        raise typer.Exit(1) from None
    except (YamlParserError, YamlScannerError) as e:
        # Settings files are parsed by Dynaconf's vendored YAML loader
        name = settings_path.name if settings_path is not None else "settings"
        _format_error("YAML Syntax Error", f"Failed to parse {name}", [str(e)])
        raise typer.Exit(1) from None
    except yaml.YAMLError as e:
        _format_error("YAML Syntax Error", f"Failed to parse {manifest_path.name}", [str(e)])
        raise typer.Exit(1) from None
    except ValidationError as e:
        # Must be caught before ValueError: ValidationError inherits from it
        details = [f"{'.'.join(str(x) for x in error['loc'])}: {error['msg']}" for error in e.errors()]
        _format_error("Configuration Validation Failed", "Invalid input", details)
        raise typer.Exit(1) from None
    except ValueError as e:
        _format_error("Configuration Error", str(e))
        raise typer.Exit(1) from None

    updates: dict[str, object] = {}
    if structural_references:
        updates["structural_references"] = True
    if config.base_directory is None:
        updates["base_directory"] = solution.base_directory
    if updates:
        config = config.model_copy(update=updates)
    return solution, config


def _compute_plan(solution: SolutionManifest, config: SchedulerSettings) -> BuildPlan:
    planner = BuildPlanner(solution.evaluator(), config)
    try:
        return planner.plan(solution.descriptors())
    except SchedulingError as e:
        errors = [d for d in e.diagnostics if d.is_error]
        _format_error("Scheduling Failed", str(e), [d.message for d in errors])
        raise typer.Exit(1) from None
    except EvaluationError as e:
        _format_error("Evaluation Failed", str(e))
        raise typer.Exit(1) from None


def _echo_skips(diagnostics: tuple[Diagnostic, ...]) -> None:
    for diagnostic in diagnostics:
        typer.echo(diagnostic.message, err=True)


@app.command()
def plan(
    manifest: Path = typer.Argument(..., help="Path to the solution manifest YAML file."),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    structural_references: bool = typer.Option(
        False,
        "--structural-references",
        help="Order units by their structural references.",
    ),
    output_format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: 'text' (waves) or 'json' (items).",
    ),
) -> None:
    """Compute the build order for a solution manifest."""
    if output_format not in ("text", "json"):
        _format_error("Invalid Option", f"Unknown format '{output_format}', use 'text' or 'json'")
        raise typer.Exit(1)

    solution, config = _load_inputs(manifest, settings, structural_references)
    build_plan = _compute_plan(solution, config)

    if output_format == "json":
        payload = {
            "dependency_ordered": build_plan.dependency_ordered,
            "references": [reference.to_dict() for reference in build_plan.references],
            "diagnostics": [diagnostic.to_dict() for diagnostic in build_plan.diagnostics],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    _echo_skips(build_plan.diagnostics)
    for wave in build_plan.waves():
        typer.echo(f"Wave {wave[0].build_order}:")
        for reference in wave:
            extra = f" [{reference.additional_properties}]" if reference.additional_properties else ""
            typer.echo(f"  {reference.unit.name} ({reference.properties}){extra}")


@app.command()
def validate(
    manifest: Path = typer.Argument(..., help="Path to the solution manifest YAML file."),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    structural_references: bool = typer.Option(
        False,
        "--structural-references",
        help="Order units by their structural references.",
    ),
) -> None:
    """Check that a solution manifest can be scheduled, without printing the order."""
    solution, config = _load_inputs(manifest, settings, structural_references)
    build_plan = _compute_plan(solution, config)

    _echo_skips(build_plan.diagnostics)
    mode = "dependency-ordered" if build_plan.dependency_ordered else "single wave"
    typer.echo(f"Build plan valid: {len(build_plan)} units, {build_plan.wave_count} waves ({mode}).")


if __name__ == "__main__":
    app()
