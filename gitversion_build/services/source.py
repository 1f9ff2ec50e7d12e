"""
Version sources.

GitVersionToolSource runs ``dotnet-gitversion`` once and hands back its JSON
output. PayloadFileSource reads a document GitVersion wrote earlier (for
example with ``/output file``). Neither ever raises: any failure is logged
and reported as "no payload".
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from ..core.exceptions import SubprocessUnavailableError
from ..core.interfaces.logger import ILogger
from ..core.interfaces.source import IVersionSource
from ..core.models.config import DEFAULT_TOOL_COMMAND, SourceConfig


def _get_logger() -> ILogger:
    from ..core.di import resolve_or_default
    from .logging import NullLogger

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]


class GitVersionToolSource(IVersionSource):
    """
    Runs the GitVersion executable as a subprocess.

    The default command passes /nofetch so GitVersion never contacts a
    remote during a local build. stdin is closed, stdout is captured as the
    payload, stderr is captured only so it can be logged.
    """

    def __init__(
        self,
        command: Sequence[str] = tuple(DEFAULT_TOOL_COMMAND),
        timeout: float | None = 120.0,
        cwd: Path | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self._command = list(command)
        self._timeout = timeout
        self._cwd = cwd
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = _get_logger()
        return self._logger

    @property
    def name(self) -> str:
        return Path(self._command[0]).name

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def fetch(self) -> str | None:
        """Run the tool once; return its trimmed stdout or None."""
        try:
            return self._run()
        except SubprocessUnavailableError as e:
            self.logger.warning("Version tool unavailable, using defaults: %s", e)
            return None

    def _run(self) -> str | None:
        self.logger.debug("Running version tool: %s", " ".join(self._command))
        try:
            result = subprocess.run(
                self._command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                cwd=self._cwd,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise SubprocessUnavailableError(
                f"Version tool timed out after {self._timeout}s",
                command=self._command,
                cause=e,
            ) from e
        except OSError as e:
            raise SubprocessUnavailableError(
                "Version tool could not be started",
                command=self._command,
                cause=e,
            ) from e

        if result.stderr:
            self.logger.debug(
                "Version tool stderr: %s", result.stderr.decode("utf-8", errors="replace").strip()
            )

        if result.returncode != 0:
            raise SubprocessUnavailableError(
                "Version tool exited with an error",
                command=self._command,
                returncode=result.returncode,
            )

        try:
            payload = result.stdout.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise SubprocessUnavailableError(
                "Version tool output is not valid UTF-8",
                command=self._command,
                cause=e,
            ) from e

        if not payload:
            raise SubprocessUnavailableError("Version tool printed nothing", command=self._command)

        self.logger.debug("Version tool returned %d characters", len(payload))
        return payload


class PayloadFileSource(IVersionSource):
    """Reads a pre-computed GitVersion JSON document from disk."""

    def __init__(self, path: Path, logger: ILogger | None = None) -> None:
        self._path = Path(path)
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = _get_logger()
        return self._logger

    @property
    def name(self) -> str:
        return "file"

    @property
    def path(self) -> Path:
        return self._path

    def fetch(self) -> str | None:
        try:
            payload = self._path.read_bytes().decode("utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning("Cannot read version payload %s, using defaults: %s", self._path, e)
            return None
        return payload or None


def create_version_source(config: SourceConfig) -> IVersionSource:
    """Build the source described by the [source] settings section.

    A configured payload file takes precedence over running the tool.
    """
    if config.payload_file is not None:
        return PayloadFileSource(config.payload_file)
    return GitVersionToolSource(
        command=config.tool,
        timeout=config.timeout,
        cwd=config.cwd,
    )
