"""
Publishing of version facts as build-visible GITVERSION_* values.

published_values() turns a GitVersion into ordered (key, value) pairs, one
per field of the version table. Absent optional fields produce no pair;
empty strings do. Publishers then deliver the pairs:

- StreamPublisher: KEY=VALUE lines on stdout for the orchestrator, either
  dotenv style or as ``cargo:rustc-env=KEY=VALUE`` directives
- EnvironPublisher: into os.environ (or any mapping) for in-process use
- EnvFilePublisher: into a dotenv file, rewritten only when it changes
"""

from __future__ import annotations

import os
import sys
from collections.abc import MutableMapping, Sequence
from pathlib import Path
from typing import ClassVar, TextIO

from ..core.interfaces.publisher import IPublisher
from ..core.models.config import PublishConfig
from ..core.models.version import VERSION_FIELDS, GitVersion
from .writer import write_if_changed


def published_values(version: GitVersion) -> list[tuple[str, str]]:
    """Build the GITVERSION_* pairs for version, in field-table order."""
    pairs = []
    for spec in VERSION_FIELDS:
        value = getattr(version, spec.name)
        if value is None:
            continue
        pairs.append((spec.env_key, str(value)))
    return pairs


def _escape_line_breaks(value: str) -> str:
    return value.replace("\r", "\\r").replace("\n", "\\n")


class StreamPublisher(IPublisher):
    """Writes one line per pair to a text stream (stdout by default).

    Line breaks inside a value are written as ``\\n`` and ``\\r`` so every
    pair stays on its own line.
    """

    LINE_FORMATS: ClassVar[dict[str, str]] = {
        "dotenv": "{key}={value}",
        "cargo": "cargo:rustc-env={key}={value}",
    }

    def __init__(self, stream: TextIO | None = None, style: str = "dotenv") -> None:
        if style not in self.LINE_FORMATS:
            raise ValueError(f"Unknown publish style: {style!r}")
        self._stream = stream
        self._line_format = self.LINE_FORMATS[style]

    def publish(self, pairs: Sequence[tuple[str, str]]) -> None:
        stream = self._stream or sys.stdout
        for key, value in pairs:
            line = self._line_format.format(key=key, value=_escape_line_breaks(value))
            stream.write(line + "\n")
        stream.flush()


class EnvironPublisher(IPublisher):
    """Sets the pairs into a mapping, os.environ unless told otherwise."""

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self._environ = environ

    def publish(self, pairs: Sequence[tuple[str, str]]) -> None:
        environ = os.environ if self._environ is None else self._environ
        environ.update(pairs)


class EnvFilePublisher(IPublisher):
    """Writes the pairs to a dotenv file.

    Values are double-quoted with backslashes, quotes and line breaks
    escaped. The file keeps its mtime when the content is unchanged.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self.written: bool | None = None

    @staticmethod
    def _quote(value: str) -> str:
        escaped = _escape_line_breaks(value.replace("\\", "\\\\").replace('"', '\\"'))
        return f'"{escaped}"'

    def render(self, pairs: Sequence[tuple[str, str]]) -> str:
        return "".join(f"{key}={self._quote(value)}\n" for key, value in pairs)

    def publish(self, pairs: Sequence[tuple[str, str]]) -> None:
        self.written = write_if_changed(self._path, self.render(pairs))


def create_publishers(config: PublishConfig, stream: TextIO | None = None) -> list[IPublisher]:
    """Build the publishers described by the [publish] settings section."""
    publishers: list[IPublisher] = []
    if config.style != "none":
        publishers.append(StreamPublisher(stream=stream, style=config.style))
    if config.environ:
        publishers.append(EnvironPublisher())
    if config.env_file is not None:
        publishers.append(EnvFilePublisher(config.env_file))
    return publishers
