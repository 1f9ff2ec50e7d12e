"""
gitversion-build: publish GitVersion facts to a build and bake them into code.

Build scripts call build() once per build. It runs ``dotnet-gitversion``,
prints one GITVERSION_* value per fact on stdout, writes
``$OUT_DIR/gitversion.py`` (only if its content changed) and returns the
decoded GitVersion:

    import gitversion_build

    version = gitversion_build.build()
    print(version.semver)
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _dist_version
from pathlib import Path
from typing import Any

from .core.exceptions import (
    ArtifactIOError,
    ConfigError,
    ConfigFileError,
    DecodeError,
    GitVersionBuildError,
    MissingConfigError,
    SubprocessUnavailableError,
)
from .core.models.version import VERSION_FIELDS, FieldSpec, GitVersion
from .services.schema import decode

try:
    __version__ = _dist_version("gitversion-build")
except PackageNotFoundError:
    __version__ = "0.1.0"


def _generator(**overrides: Any):
    from .core.bootstrap import bootstrap, reset
    from .core.settings import load_settings
    from .services.generator import GeneratorService
    from .services.publisher import create_publishers

    settings = load_settings(**overrides)
    # Each build starts from a fresh container
    reset()
    bootstrap(settings)
    return GeneratorService(settings, publishers=create_publishers(settings.publish))


def build(**overrides: Any) -> GitVersion:
    """
    Run the pipeline against the build environment.

    The generated module is written to ``$OUT_DIR/gitversion.py`` unless
    the settings say otherwise.

    Args:
        **overrides: Setting values that take precedence over environment
            variables and config files (e.g. ``out_dir=...``)

    Returns:
        The decoded GitVersion

    Raises:
        MissingConfigError: If no output directory is configured.
        DecodeError: If the version tool printed an invalid document.
        ArtifactIOError: If the generated module cannot be written.
    """
    return _generator(**overrides).run()


def write_version_file(path: str | Path, **overrides: Any) -> GitVersion:
    """Run the pipeline, writing the generated module to path."""
    return _generator(**overrides).run(Path(path))


__all__ = [
    "VERSION_FIELDS",
    "ArtifactIOError",
    "ConfigError",
    "ConfigFileError",
    "DecodeError",
    "FieldSpec",
    "GitVersion",
    "GitVersionBuildError",
    "MissingConfigError",
    "SubprocessUnavailableError",
    "__version__",
    "build",
    "decode",
    "write_version_file",
]
