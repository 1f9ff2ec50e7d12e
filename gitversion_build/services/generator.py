"""
The generation pipeline.

GeneratorService wires the pieces together for a single build invocation:

    resolve destination -> fetch payload -> decode -> publish -> render -> write

Destination resolution happens first so that a missing OUT_DIR aborts the
step before the version tool is spawned or any file is touched. Decode
errors and filesystem errors propagate; an unavailable version tool only
degrades the result to the all-defaults GitVersion.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..core.exceptions import DecodeError, MissingConfigError
from ..core.interfaces.logger import ILogger
from ..core.interfaces.publisher import IPublisher
from ..core.interfaces.source import IVersionSource
from ..core.models.version import GitVersion
from ..core.settings import GitVersionBuildSettings
from .publisher import published_values
from .renderer import render_module
from .schema import decode_or_default
from .writer import write_if_changed


@dataclass
class GenerationResult:
    """Outcome of one pipeline run."""

    version: GitVersion
    path: Path
    written: bool
    published: list[tuple[str, str]] = field(default_factory=list)


class GeneratorService:
    """
    Runs the gitversion-build pipeline.

    Usage:
        service = GeneratorService(settings, source=source, publishers=[...])
        version = service.run()
    """

    def __init__(
        self,
        settings: GitVersionBuildSettings,
        source: IVersionSource | None = None,
        publishers: Sequence[IPublisher] = (),
        logger: ILogger | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """
        Args:
            settings: Loaded settings
            source: Version source (default: resolved from the container,
                or built from settings.source)
            publishers: Receivers of the GITVERSION_* pairs
            logger: Diagnostics logger (default: resolved from the container)
            environ: Build environment to read OUT_DIR from (default: os.environ)
        """
        self._settings = settings
        self._source = source
        self._publishers = list(publishers)
        self._logger = logger
        self._environ = environ

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            from ..core.di import resolve_or_default
            from .logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    @property
    def source(self) -> IVersionSource:
        if self._source is None:
            from ..core.di import resolve_or_default
            from .source import create_version_source

            self._source = resolve_or_default(
                IVersionSource,  # type: ignore[type-abstract]
                lambda: create_version_source(self._settings.source),
            )
        return self._source

    def resolve_destination(self, destination: Path | None = None) -> Path:
        """
        Work out where the generated module goes.

        An explicit destination wins, then the out_dir setting, then the
        directory named by the out_dir_env variable (OUT_DIR by default).

        Raises:
            MissingConfigError: If none of them is available.
        """
        if destination is not None:
            return Path(destination)

        out_dir = self._settings.out_dir
        if out_dir is None:
            environ = os.environ if self._environ is None else self._environ
            env_value = environ.get(self._settings.out_dir_env)
            if not env_value:
                raise MissingConfigError(
                    "Output directory is not set",
                    key="out_dir",
                    env_var=self._settings.out_dir_env,
                )
            out_dir = Path(env_value)

        return Path(out_dir) / self._settings.filename

    def load_version(self) -> GitVersion:
        """
        Fetch and decode the version payload.

        Raises:
            DecodeError: If the payload is invalid, or inconsistent while
                strict_consistency is enabled.
        """
        payload = self.source.fetch()
        if payload is None:
            self.logger.info("No payload from %s, using empty document", self.source.name)

        version = decode_or_default(payload)

        issues = version.consistency_issues()
        if issues and self._settings.strict_consistency:
            raise DecodeError("Inconsistent version payload", payload=payload, errors=issues)
        for issue in issues:
            self.logger.warning("Inconsistent version payload: %s", issue)

        return version

    def generate(self, destination: Path | None = None) -> GenerationResult:
        """
        Run the whole pipeline and report what happened.

        Raises:
            MissingConfigError: If the destination cannot be determined.
            DecodeError: If the payload cannot be decoded.
            ArtifactIOError: If the artifact cannot be read or written.
        """
        path = self.resolve_destination(destination)
        version = self.load_version()

        pairs = published_values(version)
        for publisher in self._publishers:
            publisher.publish(pairs)

        written = write_if_changed(path, render_module(version))
        if written:
            self.logger.info("Wrote %s (%s)", path, version.semver or "no version")
        else:
            self.logger.debug("%s is up to date", path)

        return GenerationResult(version=version, path=path, written=written, published=pairs)

    def run(self, destination: Path | None = None) -> GitVersion:
        """Run the pipeline and return the decoded GitVersion."""
        return self.generate(destination).version
