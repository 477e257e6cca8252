"""Configuration loading and management for Depend Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.depend-insight.toml)
    3. Project config (./depend-insight.toml)
    4. Explicit config file
    5. Environment variables (DEPEND_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(packages=["library"], workers=4)
    >>> config.packages
    ['library']
    >>> config.build_filters()
    FilterCollection([PackageFilter(['library'])])
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .code.filters import FilterCollection, PackageFilter
from .exceptions import ConfigurationError, InvalidConfigError
from .exceptions.taxonomy import ConfigError, ErrorCode
from .logging_config import get_logger

logger = get_logger(__name__)

Verbosity = Literal["quiet", "normal", "verbose"]


@dataclass(frozen=True)
class InheritanceConfig:
    """Aggregation conventions for the inheritance analyzer.

    Attributes:
        andc_denominator: "parents" averages NOC over classes with at least
            one child; "classes" divides total NOC by all accepted classes
        ahh_reference: "classes" averages DIT over all accepted classes;
            "roots" averages the deepest DIT found under each hierarchy root
    """

    andc_denominator: Literal["parents", "classes"] = "parents"
    ahh_reference: Literal["classes", "roots"] = "classes"

    def __post_init__(self) -> None:
        if self.andc_denominator not in ("parents", "classes"):
            raise InvalidConfigError(
                "andc_denominator", self.andc_denominator, "expected 'parents' or 'classes'"
            )
        if self.ahh_reference not in ("classes", "roots"):
            raise InvalidConfigError(
                "ahh_reference", self.ahh_reference, "expected 'classes' or 'roots'"
            )


# PHP_Depend's conventions for ANDC and AHH
PDEPEND_INHERITANCE = InheritanceConfig(andc_denominator="classes", ahh_reference="roots")


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        packages: Package whitelist; empty means no package filter
        workers: Threads for the per-class visiting phase (None = sequential)
        timeout_seconds: Per-analyzer time limit (None = unlimited)
        verbosity: Logging verbosity level
        inheritance: Aggregation conventions (nested [inheritance] table)
    """

    packages: list[str] = field(default_factory=list)
    workers: Optional[int] = None
    timeout_seconds: Optional[int] = None
    verbosity: Verbosity = "normal"
    inheritance: InheritanceConfig = field(default_factory=InheritanceConfig)

    def __post_init__(self) -> None:
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.timeout_seconds is not None and self.timeout_seconds < 1:
            raise InvalidConfigError("timeout_seconds", self.timeout_seconds, "must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet/normal/verbose")
        if isinstance(self.packages, str) or not all(isinstance(p, str) for p in self.packages):
            raise InvalidConfigError("packages", self.packages, "expected a list of package names")

    @property
    def andc_denominator(self) -> str:
        return self.inheritance.andc_denominator

    @property
    def ahh_reference(self) -> str:
        return self.inheritance.ahh_reference

    def build_filters(self) -> FilterCollection:
        """Filter chain for this configuration."""
        filters = FilterCollection()
        if self.packages:
            filters.add_filter(PackageFilter(self.packages))
        return filters


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); None values
            are ignored so unset CLI options don't mask file settings

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".depend-insight.toml"
    if global_config.exists():
        _merge(merged, _load_toml_file(global_config), str(global_config))

    project_config = Path.cwd() / "depend-insight.toml"
    if project_config.exists():
        _merge(merged, _load_toml_file(project_config), str(project_config))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge(merged, _load_toml_file(config_file), str(config_file))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update({k: v for k, v in overrides.items() if v is not None})

    inheritance = merged.pop("inheritance", None)
    if isinstance(inheritance, dict):
        try:
            merged["inheritance"] = InheritanceConfig(**inheritance)
        except TypeError as e:
            raise ConfigurationError(f"Invalid [inheritance] config: {e}")
    elif isinstance(inheritance, InheritanceConfig):
        merged["inheritance"] = inheritance

    for key in sorted(set(merged) - set(AnalysisConfig.__dataclass_fields__)):
        error = ConfigError(
            message=f"Unknown configuration key '{key}'",
            code=ErrorCode.DI501,
            context={"key": key},
            recovery_hint="Key ignored",
        )
        logger.warning(str(error))
        del merged[key]

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge(merged: dict, loaded: dict, source: str) -> None:
    # [inheritance] tables merge key by key across files
    inheritance = loaded.pop("inheritance", None)
    if inheritance is not None:
        if not isinstance(inheritance, dict):
            raise ConfigurationError(f"Invalid config '{source}': [inheritance] must be a table")
        merged["inheritance"] = {**merged.get("inheritance", {}), **inheritance}
    merged.update(loaded)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DEPEND_* environment variables.

    Supported environment variables:
        DEPEND_PACKAGES: comma-separated package names
        DEPEND_WORKERS: int
        DEPEND_TIMEOUT_SECONDS: int
        DEPEND_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any DEPEND_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}
    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"DEPEND_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list:
        return [part.strip() for part in value.split(",") if part.strip()]

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli is unavailable or parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for older interpreters
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")


default_config = AnalysisConfig()
