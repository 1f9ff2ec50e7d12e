"""
Pydantic Settings for gitversion-build configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .exceptions import ConfigFileError
from .models.config import LoggingConfig, PublishConfig, SourceConfig

CONFIG_FILE_NAME = ".gitversion-build.toml"
PYPROJECT_TABLE = "gitversion-build"


def _get_logger():
    from ..services.logging import NullLogger
    from .di import resolve_or_default
    from .interfaces.logger import ILogger

    return resolve_or_default(ILogger, NullLogger)


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find .gitversion-build.toml by walking up from start_dir (or cwd).

    A pyproject.toml with a [tool.gitversion-build] table also counts.

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            try:
                with open(pyproject, "rb") as f:
                    data = tomllib.load(f)
                if PYPROJECT_TABLE in data.get("tool", {}):
                    return pyproject
            except tomllib.TOMLDecodeError as e:
                _get_logger().debug("Failed to parse pyproject.toml at %s: %s", pyproject, e)
            except OSError as e:
                _get_logger().debug("Failed to read pyproject.toml at %s: %s", pyproject, e)

    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Load the gitversion-build table from a config file.

    Raises:
        ConfigFileError: If the file cannot be read or parsed.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError("Failed to parse config file", file_path=str(path), cause=e) from e
    except OSError as e:
        raise ConfigFileError("Failed to read config file", file_path=str(path), cause=e) from e

    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get(PYPROJECT_TABLE, {})
    return data


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        # An explicit path must load; a discovered one is best-effort
        if self._config_path is not None:
            self._data = read_config_file(self._config_path)
            return self._data

        path = find_config_file(self._start_dir)
        if path is None:
            return self._data

        try:
            self._data = read_config_file(path)
        except ConfigFileError as e:
            _get_logger().warning("Ignoring config file %s: %s", path, e)

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        field_value = data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return self._load_toml()


class GitVersionBuildSettings(BaseSettings):
    """gitversion-build settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (GVBUILD_<section>__<field>)
    3. TOML config file (.gitversion-build.toml or [tool.gitversion-build])
    4. Model defaults

    The GVBUILD_ prefix is kept apart from the published GITVERSION_ keys
    so that published values are never read back as configuration.
    """

    model_config = {
        "env_prefix": "GVBUILD_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    out_dir: Path | None = None
    out_dir_env: str = "OUT_DIR"
    filename: str = "gitversion.py"
    strict_consistency: bool = False

    source: SourceConfig = SourceConfig()
    publish: PublishConfig = PublishConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        The config location cannot be passed through here, so it travels
        via module-level variables set by load_settings().
        """
        toml_source = TomlConfigSource(
            settings_cls,
            config_path=_current_config_path,
            start_dir=_current_start_dir,
        )
        return (
            init_settings,
            env_settings,
            toml_source,
        )


# Module-level variables for passing to settings_customise_sources
_current_config_path: Path | None = None
_current_start_dir: str | None = None


def load_settings(
    config_path: Path | None = None,
    start_dir: str | None = None,
    **overrides: Any,
) -> GitVersionBuildSettings:
    """Load settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)
        **overrides: Init values that take precedence over every other source

    Returns:
        GitVersionBuildSettings instance with all sources merged

    Raises:
        ConfigFileError: If config_path is given but cannot be loaded.
    """
    global _current_config_path, _current_start_dir

    _current_config_path = config_path
    _current_start_dir = start_dir

    try:
        return GitVersionBuildSettings(**overrides)
    finally:
        _current_config_path = None
        _current_start_dir = None
