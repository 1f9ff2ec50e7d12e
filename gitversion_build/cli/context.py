"""
Click context extension for the gitversion-build CLI.

Provides BuildContext, which holds the options given to the command group
and turns them, together with per-command options, into loaded settings.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.bootstrap import bootstrap, reset
from ..core.settings import GitVersionBuildSettings, load_settings


def _prune(values: dict[str, Any]) -> dict[str, Any]:
    """Drop unset options, recursing into sections; empty sections go too."""
    pruned: dict[str, Any] = {}
    for key, value in values.items():
        if isinstance(value, dict):
            value = _prune(value)
            if not value:
                continue
        elif value is None:
            continue
        pruned[key] = value
    return pruned


@dataclass
class BuildContext:
    """Extended context passed through the Click command chain.

    Attributes:
        cwd: Directory config discovery starts from
        config_path: Explicit config file (--config)
        verbose: Whether debug diagnostics were requested (-v)
    """

    cwd: Path
    config_path: Path | None = None
    verbose: bool = False

    @classmethod
    def create(
        cls,
        config_path: Path | None = None,
        verbose: bool = False,
        cwd: Path | None = None,
    ) -> BuildContext:
        return cls(cwd=cwd or Path.cwd(), config_path=config_path, verbose=verbose)

    def load_settings(self, overrides: dict[str, Any]) -> GitVersionBuildSettings:
        """Load settings, with command-line options taking precedence.

        Options left at None do not override anything.
        """
        values = _prune(overrides)
        if self.verbose:
            values.setdefault("logging", {})["level"] = "debug"
        return load_settings(config_path=self.config_path, start_dir=str(self.cwd), **values)

    def bootstrap(self, settings: GitVersionBuildSettings) -> None:
        """Register services for this invocation, discarding earlier ones."""
        reset()
        bootstrap(settings)
