"""
Shared pytest fixtures for gitversion-build tests.

- gitversion_document: a realistic dotnet-gitversion JSON document
- scenario_payload: the minimal stable-release payload used across tests
- fake_tool: builds a stand-in version tool runnable via sys.executable
- load_generated: imports a generated gitversion.py from disk
"""

import importlib.util
import json
import sys
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path
from types import ModuleType

import pytest

from gitversion_build.core.bootstrap import reset

SCENARIO_PAYLOAD = json.dumps(
    {
        "Major": 1,
        "Minor": 2,
        "Patch": 3,
        "SemVer": "1.2.3",
        "FullSemVer": "1.2.3",
        "InformationalVersion": "1.2.3+0.Branch.main.Sha.abc1234",
    }
)


@pytest.fixture(autouse=True)
def reset_container() -> Iterator[None]:
    """Give every test a fresh service container."""
    reset()
    yield
    reset()


@pytest.fixture
def scenario_payload() -> str:
    return SCENARIO_PAYLOAD


@pytest.fixture
def gitversion_document() -> dict:
    """Output of dotnet-gitversion on a release branch, three betas in."""
    sha = "0123456789abcdef0123456789abcdef01234567"
    return {
        "Major": 1,
        "Minor": 4,
        "Patch": 0,
        "PreReleaseTag": "beta.3",
        "PreReleaseTagWithDash": "-beta.3",
        "PreReleaseLabel": "beta",
        "PreReleaseLabelWithDash": "-beta",
        "PreReleaseNumber": 3,
        "WeightedPreReleaseNumber": 30003,
        "BuildMetaData": 7,
        "BuildMetaDataPadded": "0007",
        "FullBuildMetaData": f"7.Branch.release-1.4.Sha.{sha}",
        "MajorMinorPatch": "1.4.0",
        "SemVer": "1.4.0-beta.3",
        "LegacySemVer": "1.4.0-beta3",
        "LegacySemVerPadded": "1.4.0-beta0003",
        "AssemblySemVer": "1.4.0.0",
        "AssemblySemFileVer": "1.4.0.0",
        "FullSemVer": "1.4.0-beta.3+7",
        "InformationalVersion": f"1.4.0-beta.3+7.Branch.release-1.4.Sha.{sha}",
        "BranchName": "release/1.4",
        "EscapedBranchName": "release-1.4",
        "Sha": sha,
        "ShortSha": sha[:7],
        "NuGetVersionV2": "1.4.0-beta0003",
        "NuGetVersion": "1.4.0-beta0003",
        "NuGetPreReleaseTagV2": "beta0003",
        "NuGetPreReleaseTag": "beta0003",
        "VersionSourceSha": "fedcba9876543210fedcba9876543210fedcba98",
        "CommitsSinceVersionSource": 7,
        "CommitsSinceVersionSourcePadded": "0007",
        "UncommittedChanges": 2,
        "CommitDate": "2024-03-18",
    }


@pytest.fixture
def payload_file(tmp_path: Path, gitversion_document: dict) -> Path:
    """gitversion_document written to disk, as `dotnet-gitversion /output file` would."""
    path = tmp_path / "gitversion.json"
    path.write_text(json.dumps(gitversion_document, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def fake_tool(tmp_path: Path) -> Callable[..., list[str]]:
    """
    Factory for a fake version tool.

    Returns a command list that, when run, writes the given bytes to
    stdout and exits with the given code.
    """
    counter = iter(range(1000))

    def _make(stdout: bytes | str, returncode: int = 0) -> list[str]:
        n = next(counter)
        data = stdout.encode("utf-8") if isinstance(stdout, str) else stdout
        data_path = tmp_path / f"fake_tool_{n}.out"
        data_path.write_bytes(data)
        script = tmp_path / f"fake_tool_{n}.py"
        script.write_text(
            textwrap.dedent(
                f"""\
                import sys
                with open({str(data_path)!r}, "rb") as f:
                    sys.stdout.buffer.write(f.read())
                sys.stdout.flush()
                sys.exit({returncode})
                """
            ),
            encoding="utf-8",
        )
        return [sys.executable, str(script)]

    return _make


@pytest.fixture
def load_generated() -> Iterator[Callable[[Path], ModuleType]]:
    """Import a generated module from a path; cleaned out of sys.modules afterwards."""
    names: list[str] = []

    def _load(path: Path) -> ModuleType:
        name = f"_generated_gitversion_{len(names)}"
        spec = importlib.util.spec_from_file_location(name, path)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        names.append(name)
        spec.loader.exec_module(module)
        return module

    yield _load

    for name in names:
        sys.modules.pop(name, None)
