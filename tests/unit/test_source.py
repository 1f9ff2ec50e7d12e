"""
Unit tests for the version sources.
"""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from gitversion_build.core.models.config import SourceConfig
from gitversion_build.services.source import (
    GitVersionToolSource,
    PayloadFileSource,
    create_version_source,
)

RUN = "gitversion_build.services.source.subprocess.run"


def _completed(stdout: bytes = b"", returncode: int = 0, stderr: bytes = b"") -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


@pytest.fixture
def source():
    return GitVersionToolSource(logger=MagicMock())


class TestGitVersionToolSource:
    @patch(RUN)
    def test_returns_trimmed_stdout(self, mock_run, source):
        mock_run.return_value = _completed(b'\n  {"Major": 1}  \r\n')

        assert source.fetch() == '{"Major": 1}'

    @patch(RUN)
    def test_runs_without_remote_fetch_or_stdin(self, mock_run, source):
        mock_run.return_value = _completed(b"{}")

        source.fetch()

        args, kwargs = mock_run.call_args
        assert args[0] == ["dotnet-gitversion", "/nofetch"]
        assert kwargs["stdin"] is subprocess.DEVNULL
        assert kwargs["capture_output"] is True
        assert kwargs["timeout"] == 120.0

    @patch(RUN)
    def test_custom_command_timeout_and_cwd(self, mock_run, tmp_path):
        mock_run.return_value = _completed(b"{}")
        source = GitVersionToolSource(
            command=["gitversion", "/nofetch", "/nocache"],
            timeout=5,
            cwd=tmp_path,
            logger=MagicMock(),
        )

        source.fetch()

        args, kwargs = mock_run.call_args
        assert args[0] == ["gitversion", "/nofetch", "/nocache"]
        assert kwargs["timeout"] == 5
        assert kwargs["cwd"] == tmp_path
        assert source.name == "gitversion"

    @patch(RUN)
    def test_tool_not_found(self, mock_run, source):
        mock_run.side_effect = FileNotFoundError("dotnet-gitversion")

        assert source.fetch() is None
        source.logger.warning.assert_called_once()

    @patch(RUN)
    def test_permission_denied(self, mock_run, source):
        mock_run.side_effect = PermissionError("denied")

        assert source.fetch() is None

    @patch(RUN)
    def test_nonzero_exit(self, mock_run, source):
        mock_run.return_value = _completed(b'{"Major": 1}', returncode=1, stderr=b"boom")

        assert source.fetch() is None
        message = str(source.logger.warning.call_args[0][1])
        assert "returncode=1" in message

    @patch(RUN)
    def test_timeout(self, mock_run, source):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="dotnet-gitversion", timeout=120)

        assert source.fetch() is None

    @patch(RUN)
    def test_invalid_utf8(self, mock_run, source):
        mock_run.return_value = _completed(b'{"SemVer": "\xff\xfe"}')

        assert source.fetch() is None

    @patch(RUN)
    def test_empty_output(self, mock_run, source):
        mock_run.return_value = _completed(b"   \n")

        assert source.fetch() is None

    @patch(RUN)
    def test_stderr_is_only_logged(self, mock_run, source):
        mock_run.return_value = _completed(b"{}", stderr=b"INFO [03/18/24] Working directory")

        assert source.fetch() == "{}"
        debug_messages = [c[0][0] for c in source.logger.debug.call_args_list]
        assert "Version tool stderr: %s" in debug_messages

    @patch(RUN)
    def test_no_validation_at_this_layer(self, mock_run, source):
        mock_run.return_value = _completed(b"definitely not json")

        assert source.fetch() == "definitely not json"

    @patch(RUN)
    def test_single_attempt(self, mock_run, source):
        mock_run.side_effect = FileNotFoundError()

        source.fetch()

        assert mock_run.call_count == 1


class TestPayloadFileSource:
    def test_reads_file(self, payload_file):
        source = PayloadFileSource(payload_file, logger=MagicMock())

        payload = source.fetch()

        assert payload is not None
        assert payload.startswith("{")
        assert payload.endswith("}")
        assert source.name == "file"

    def test_missing_file(self, tmp_path: Path):
        source = PayloadFileSource(tmp_path / "missing.json", logger=MagicMock())

        assert source.fetch() is None
        source.logger.warning.assert_called_once()

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.json"
        path.write_text("\n")

        assert PayloadFileSource(path, logger=MagicMock()).fetch() is None

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_bytes(b"\xff\xfe{}")

        assert PayloadFileSource(path, logger=MagicMock()).fetch() is None


class TestCreateVersionSource:
    def test_default_is_tool(self):
        source = create_version_source(SourceConfig())

        assert isinstance(source, GitVersionToolSource)
        assert source.command == ["dotnet-gitversion", "/nofetch"]

    def test_payload_file_wins(self, tmp_path: Path):
        source = create_version_source(
            SourceConfig(tool="gitversion /nofetch", payload_file=tmp_path / "v.json")
        )

        assert isinstance(source, PayloadFileSource)
        assert source.path == tmp_path / "v.json"

    def test_tool_string_is_split(self):
        source = create_version_source(SourceConfig(tool='"/opt/Git Version/gitversion" /nofetch'))

        assert source.command == ["/opt/Git Version/gitversion", "/nofetch"]
