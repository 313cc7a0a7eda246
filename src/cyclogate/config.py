"""Configuration loading and management for cyclogate.

Configuration sources are merged in priority order:
    1. Defaults (defined in CyclogateConfig)
    2. Global config (~/.cyclogate.toml)
    3. Project config (./cyclogate.toml)
    4. Explicit config file
    5. Environment variables (CYCLOGATE_* prefix)
    6. Keyword overrides

Example:
    >>> config = load_config(output_path="build/results.cy", quiet=True)
    >>> config.output_path
    'build/results.cy'
    >>> config.verbosity
    'quiet'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

DEFAULT_OUTPUT_PATH = "results.cy"
DEFAULT_HEADER_SUFFIXES = (".h", ".hpp")
DEFAULT_SYSTEM_PREFIXES = ("/usr/include", "/usr/local/include", "/usr/lib")

_VERBOSITY_LEVELS = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class CyclogateConfig:
    """Configuration for a complexity pass.

    Attributes:
        Output:
            output_path: Destination of the report artifact
            sort_entries: Persist report lines in function-name order
            persist: Write the report artifact at the end of a pass
            emit_notices: Send one remark per scored function

        Scoping:
            header_suffixes: File name suffixes that mark a header
            system_prefixes: Directory prefixes that mark a system location

        Execution:
            workers: Parallel workers for multi-unit runs (None = auto-detect)
            verbosity: Logging verbosity level
            log_file: Also append log records to this file (None = stderr only)
    """

    output_path: str = DEFAULT_OUTPUT_PATH
    sort_entries: bool = True
    persist: bool = True
    emit_notices: bool = True

    header_suffixes: tuple[str, ...] = DEFAULT_HEADER_SUFFIXES
    system_prefixes: tuple[str, ...] = DEFAULT_SYSTEM_PREFIXES

    workers: Optional[int] = None
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.output_path:
            raise InvalidConfigError("output_path", self.output_path, "must not be empty")

        # TOML arrays arrive as lists; keep the frozen instance hashable
        object.__setattr__(self, "header_suffixes", tuple(self.header_suffixes))
        object.__setattr__(self, "system_prefixes", tuple(self.system_prefixes))

        for suffix in self.header_suffixes:
            if not suffix.startswith("."):
                raise InvalidConfigError("header_suffixes", suffix, "suffixes must start with '.'")

        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")

        if self.log_file is not None and not self.log_file:
            raise InvalidConfigError("log_file", self.log_file, "must not be empty")

        if self.verbosity not in _VERBOSITY_LEVELS:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITY_LEVELS)}"
            )

    @property
    def output_file(self) -> Path:
        """Get the artifact destination as a Path."""
        return Path(self.output_path)


DEFAULT_CONFIG = CyclogateConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> CyclogateConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides; ``verbose``/``quiet`` booleans are
            mapped onto ``verbosity``

    Returns:
        Validated CyclogateConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable, or a key is unknown
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".cyclogate.toml"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / "cyclogate.toml"
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    try:
        return CyclogateConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _read_config_file(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")
    # Settings may live at the top level or under a [cyclogate] table
    section = data.get("cyclogate")
    if isinstance(section, dict):
        return dict(section)
    return data


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CYCLOGATE_* environment variables.

    Supported environment variables:
        CYCLOGATE_OUTPUT_PATH: str
        CYCLOGATE_SORT_ENTRIES: bool (true/false/1/0)
        CYCLOGATE_PERSIST: bool
        CYCLOGATE_EMIT_NOTICES: bool
        CYCLOGATE_HEADER_SUFFIXES: comma-separated list
        CYCLOGATE_SYSTEM_PREFIXES: os.pathsep-separated list
        CYCLOGATE_WORKERS: int
        CYCLOGATE_VERBOSITY: quiet/normal/verbose
        CYCLOGATE_LOG_FILE: str
    """
    type_hints = get_type_hints(CyclogateConfig)

    result: dict[str, Any] = {}

    for field_name in CyclogateConfig.__dataclass_fields__:
        env_key = f"CYCLOGATE_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint, field_name)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any, field_name: str) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is tuple:
        separator = os.pathsep if field_name == "system_prefixes" else ","
        return tuple(part.strip() for part in value.split(separator) if part.strip())

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If neither tomllib nor tomli is available
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
