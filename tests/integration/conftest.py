"""
Integration test fixtures.

- gitversion_build_cli: runs ``python -m gitversion_build`` in a subprocess
"""

import os
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def build_env(tmp_path: Path) -> dict[str, str]:
    """Environment for the CLI: OUT_DIR set, no GVBUILD_ settings leaking in."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("GVBUILD_")}
    env["OUT_DIR"] = str(tmp_path / "out")
    return env


@pytest.fixture
def gitversion_build_cli(
    tmp_path: Path, build_env: dict[str, str]
) -> Callable[..., subprocess.CompletedProcess]:
    """
    Provide a helper function to run gitversion-build commands.

    Returns:
        A callable that runs the CLI and returns CompletedProcess
    """

    def run_cli(*args: str, check: bool = True) -> subprocess.CompletedProcess:
        """
        Run a gitversion-build command.

        Args:
            *args: Arguments to pass (e.g., "generate", "--style", "none")
            check: Whether to raise on non-zero exit code

        Returns:
            CompletedProcess with stdout/stderr as strings
        """
        return subprocess.run(
            [sys.executable, "-m", "gitversion_build", *args],
            cwd=tmp_path,
            env=build_env,
            capture_output=True,
            text=True,
            check=check,
            timeout=60,
        )

    return run_cli
