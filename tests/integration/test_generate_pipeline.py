"""
End-to-end runs of the generate pipeline.

A small Python script stands in for dotnet-gitversion, so these run
anywhere the package is installed.
"""

import json
import shlex

import pytest

import gitversion_build

pytestmark = pytest.mark.integration


def test_generate_with_fake_tool(
    gitversion_build_cli, fake_tool, scenario_payload, tmp_path, load_generated
):
    tool = shlex.join(fake_tool(scenario_payload))

    result = gitversion_build_cli("generate", "--tool", tool)

    lines = result.stdout.splitlines()
    assert "GITVERSION_MAJOR=1" in lines
    assert "GITVERSION_SEMVER=1.2.3" in lines
    assert "(wrote)" in result.stderr

    module = load_generated(tmp_path / "out" / "gitversion.py")
    assert str(module.GIT_VERSION) == "1.2.3"
    assert repr(module.GIT_VERSION) == "1.2.3+0.Branch.main.Sha.abc1234"


def test_second_run_leaves_module_alone(
    gitversion_build_cli, fake_tool, scenario_payload, tmp_path
):
    tool = shlex.join(fake_tool(scenario_payload))
    gitversion_build_cli("generate", "--tool", tool, "--style", "none")
    path = tmp_path / "out" / "gitversion.py"
    mtime = path.stat().st_mtime_ns

    result = gitversion_build_cli("generate", "--tool", tool, "--style", "none")

    assert "(unchanged)" in result.stderr
    assert path.stat().st_mtime_ns == mtime


def test_failing_tool_degrades_to_defaults(gitversion_build_cli, fake_tool, tmp_path):
    tool = shlex.join(fake_tool('{"Major": 9}', returncode=3))

    result = gitversion_build_cli("generate", "--tool", tool)

    assert result.returncode == 0
    assert "GITVERSION_MAJOR=0" in result.stdout.splitlines()
    assert "unavailable" in result.stderr
    assert "semver: str = ''" in (tmp_path / "out" / "gitversion.py").read_text()


def test_missing_tool_degrades_to_defaults(gitversion_build_cli, tmp_path):
    result = gitversion_build_cli("generate", "--tool", "no-such-gitversion-tool /nofetch")

    assert result.returncode == 0
    assert (tmp_path / "out" / "gitversion.py").exists()


def test_malformed_output_fails_the_build(gitversion_build_cli, fake_tool, tmp_path):
    tool = shlex.join(fake_tool("<html>not json</html>"))

    result = gitversion_build_cli("generate", "--tool", tool, check=False)

    assert result.returncode == 1
    assert result.stdout == ""
    assert not (tmp_path / "out").exists()


def test_missing_out_dir_fails_the_build(
    gitversion_build_cli, build_env, fake_tool, scenario_payload
):
    del build_env["OUT_DIR"]
    tool = shlex.join(fake_tool(scenario_payload))

    result = gitversion_build_cli("generate", "--tool", tool, check=False)

    assert result.returncode == 1
    assert "OUT_DIR" in result.stderr


def test_show_json(gitversion_build_cli, payload_file, gitversion_document):
    result = gitversion_build_cli("show", "--payload-file", str(payload_file), "--json")

    assert json.loads(result.stdout) == gitversion_document


def test_library_api(tmp_path, payload_file, monkeypatch, load_generated):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "pkg" / "_version.py"

    version = gitversion_build.write_version_file(
        path,
        source={"payload_file": payload_file},
        publish={"style": "none"},
        logging={"console": False},
    )

    assert version.semver == "1.4.0-beta.3"
    assert load_generated(path).GIT_VERSION.nuget_version == "1.4.0-beta0003"


def test_build_reads_out_dir(tmp_path, payload_file, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OUT_DIR", str(tmp_path / "out"))

    version = gitversion_build.build(
        source={"payload_file": payload_file}, logging={"console": False}
    )

    assert version.major == 1
    assert (tmp_path / "out" / "gitversion.py").exists()
    assert "GITVERSION_FULL_SEMVER=1.4.0-beta.3+7" in capsys.readouterr().out.splitlines()
