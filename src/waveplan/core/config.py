# src/waveplan/core/config.py
"""
Configuration schema and loading for waveplan.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from waveplan.contracts import RelativePathPolicy

ENVVAR_PREFIX = "WAVEPLAN"


class SchedulerSettings(BaseModel):
    """Settings for one scheduling run.

    Example YAML:
        structural_references: true
        relative_path_policy: suffix
        evaluation_workers: 4
        base_directory: ./solution
    """

    model_config = {"frozen": True}

    structural_references: bool = Field(
        default=False,
        description="Order units by their structural references even when no DependsOn is declared",
    )
    relative_path_policy: RelativePathPolicy = Field(
        default=RelativePathPolicy.SUFFIX,
        description="How relative DependsOn paths are matched: exact, or exact then suffix",
    )
    evaluation_workers: int = Field(
        default=1,
        ge=1,
        description="Parallel project evaluator calls (1 = sequential)",
    )
    base_directory: Path | None = Field(
        default=None,
        description="Directory relative DependsOn paths are resolved against",
    )

    @field_validator("relative_path_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v: object) -> object:
        """Accept policy names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


def load_settings(config_path: Path | None = None) -> SchedulerSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (WAVEPLAN_*) - highest priority
    2. Config file (if given)
    3. Defaults from Pydantic schema - lowest priority

    Args:
        config_path: Path to YAML configuration file, or None for
            environment + defaults only.

    Returns:
        Validated SchedulerSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENVVAR_PREFIX,
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    settings = SchedulerSettings(**raw_config)
    if config_path is not None and settings.base_directory is not None and not settings.base_directory.is_absolute():
        settings = settings.model_copy(update={"base_directory": (config_path.parent / settings.base_directory).resolve()})
    return settings
