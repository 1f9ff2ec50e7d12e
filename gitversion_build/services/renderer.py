"""
Rendering of the generated ``gitversion.py`` module.

The module declares a frozen ``GitVersion`` dataclass whose attribute
defaults are the decoded values, plus a ``GIT_VERSION`` instance. ``str()``
of that instance is the semantic version, ``repr()`` the informational
version. Output depends only on the GitVersion passed in (no timestamps),
which is what lets the writer skip unchanged files.
"""

from __future__ import annotations

import textwrap

from ..core.models.version import VERSION_FIELDS, FieldSpec, GitVersion

MODULE_HEADER = textwrap.dedent('''\
    # Generated by gitversion-build. Do not edit.
    """Version facts for this build, computed by GitVersion."""

    from __future__ import annotations

    from dataclasses import dataclass
    from typing import Optional


    @dataclass(frozen=True, repr=False)
    class GitVersion:
        """Version facts describing the commit this build was produced from.

        ``str()`` gives the semantic version and ``repr()`` the
        informational version.
        """

    ''')

MODULE_FOOTER = textwrap.dedent('''\

        def __str__(self) -> str:
            return self.semver

        def __repr__(self) -> str:
            return self.informational_version


    #: The version facts of this build.
    GIT_VERSION = GitVersion()

    __all__ = ["GIT_VERSION", "GitVersion"]
    ''')

INDENT = " " * 4


def _literal(value: int | str | None) -> str:
    # repr() yields a valid, deterministic Python literal for all three
    return repr(value)


def _render_field(spec: FieldSpec, value: int | str | None) -> list[str]:
    doc = spec.doc
    if spec.deprecated:
        doc = f"Deprecated. {doc}"
    return [
        f"{INDENT}#: {doc}",
        f"{INDENT}{spec.name}: {spec.type_hint} = {_literal(value)}",
    ]


def render_module(version: GitVersion) -> str:
    """
    Render the generated module for version.

    Args:
        version: Decoded version facts

    Returns:
        Python source text, newline-terminated
    """
    lines: list[str] = []
    for spec in VERSION_FIELDS:
        lines.extend(_render_field(spec, getattr(version, spec.name)))
    return MODULE_HEADER + "\n".join(lines) + "\n" + MODULE_FOOTER
