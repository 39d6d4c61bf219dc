"""Tests for the xynginc CLI."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from xynginc.cli import CLIRunner, build_parser, main
from xynginc.cli.exit_codes import (
    EXIT_BOOTSTRAP_FAILURE,
    EXIT_CHECK_FAILED,
    EXIT_ENGINE_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
)
from xynginc.core.errors import DownloadError, EngineNotFoundError

BINARY = Path("/usr/local/bin/xynginc")


def _completed(returncode: int = 0, stdout: str = "", stderr: str = ""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def resolved():
    with patch("xynginc.cli.commands.resolve_binary", return_value=BINARY) as mock_resolve:
        yield mock_resolve


class TestParser:
    def test_global_flags(self) -> None:
        args = build_parser().parse_args(
            ["--binary", "/opt/x", "--no-download", "--engine-version", "v1.4.5", "--no-sudo", "list"]
        )
        assert args.binary == "/opt/x"
        assert args.no_download is True
        assert args.engine_version == "v1.4.5"
        assert args.no_sudo is True
        assert args.command == "list"

    def test_add_arguments(self) -> None:
        args = build_parser().parse_args(
            ["add", "a.com", "3000", "--ssl", "--email", "x@a.com", "--max-body-size", "50M"]
        )
        assert (args.domain, args.port, args.ssl) == ("a.com", 3000, True)
        assert args.email == "x@a.com"
        assert args.max_body_size == "50M"

    def test_fetch_tag(self) -> None:
        args = build_parser().parse_args(["fetch", "--tag", "v1.4.5"])
        assert args.release == "v1.4.5"
        assert args.version is False


class TestRunner:
    def test_every_command_documents_execute(self) -> None:
        runner = CLIRunner()
        undocumented = [
            name for name, cmd in runner.commands.items() if not type(cmd).execute.__doc__
        ]
        assert undocumented == []

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture) -> None:
        assert main([]) == EXIT_SUCCESS
        assert "usage:" in capsys.readouterr().out

    def test_version(self, capsys: pytest.CaptureFixture) -> None:
        from xynginc import __version__

        with patch("xynginc.cli.version", return_value=__version__):
            assert main(["--version"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == __version__


class TestEngineCommands:
    def test_list(self, resolved, capsys: pytest.CaptureFixture) -> None:
        mock_run = AsyncMock(return_value=_completed(0, "a.com - 80\nb.com - 443\nnotice: ok\n"))
        with patch("xynginc.engine.client.run_captured", mock_run):
            assert main(["list"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.splitlines() == ["a.com", "b.com"]
        assert mock_run.call_args[0][0] == ["sudo", str(BINARY), "list"]

    def test_global_flags_reach_resolver(self, resolved) -> None:
        mock_run = AsyncMock(return_value=_completed(0))
        with patch("xynginc.engine.client.run_captured", mock_run):
            main(["--binary", "/opt/x", "--no-download", "--engine-version", "v2", "--no-sudo", "reload"])
        resolved.assert_called_once_with("/opt/x", False, "v2")
        assert mock_run.call_args[0][0] == [str(BINARY), "reload"]

    def test_add(self, resolved) -> None:
        mock_run = AsyncMock(return_value=_completed(0, "added\n"))
        with patch("xynginc.engine.client.run_captured", mock_run):
            assert main(["add", "a.com", "3000"]) == EXIT_SUCCESS
        assert mock_run.call_args[0][0][2:] == ["add", "--domain", "a.com", "--port", "3000"]

    def test_check_failed(self, resolved, capsys: pytest.CaptureFixture) -> None:
        with patch("xynginc.engine.client.run_captured", AsyncMock(return_value=_completed(1))):
            assert main(["check"]) == EXIT_CHECK_FAILED
        assert "not satisfied" in capsys.readouterr().out

    def test_nginx_test_passed(self, resolved, capsys: pytest.CaptureFixture) -> None:
        with patch("xynginc.engine.client.run_captured", AsyncMock(return_value=_completed(0))):
            assert main(["test"]) == EXIT_SUCCESS
        assert "valid" in capsys.readouterr().out

    def test_status_verbatim(self, resolved, capsys: pytest.CaptureFixture) -> None:
        text = "a.com  active\n"
        with patch("xynginc.engine.client.run_captured", AsyncMock(return_value=_completed(0, text))):
            assert main(["status"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == text

    def test_clean_dry_run(self, resolved) -> None:
        mock_run = AsyncMock(return_value=_completed(0))
        with patch("xynginc.engine.client.run_captured", mock_run):
            assert main(["clean", "--dry-run"]) == EXIT_SUCCESS
        assert mock_run.call_args[0][0][2:] == ["clean", "--dry-run"]

    def test_install(self, resolved) -> None:
        mock_interactive = AsyncMock(return_value=0)
        with patch("xynginc.engine.client.run_interactive", mock_interactive):
            assert main(["install"]) == EXIT_SUCCESS
        mock_interactive.assert_awaited_once_with(["sudo", str(BINARY), "install"])

    def test_engine_failure_exit_code(self, resolved) -> None:
        mock_run = AsyncMock(return_value=_completed(1, "", "no such backup"))
        with patch("xynginc.engine.client.run_captured", mock_run):
            assert main(["restore", "20240101"]) == EXIT_ENGINE_ERROR

    @pytest.mark.parametrize(
        "error",
        [EngineNotFoundError("Binary not found"), DownloadError("Failed to download: HTTP 404")],
    )
    def test_bootstrap_failure_exit_code(self, error: Exception) -> None:
        with patch("xynginc.cli.commands.resolve_binary", side_effect=error):
            assert main(["reload"]) == EXIT_BOOTSTRAP_FAILURE


class TestApplyCommand:
    @pytest.fixture
    def options_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "xynginc.yml"
        path.write_text(
            "auto_reload: false\n"
            "binary_path: /opt/xynginc\n"
            "domains:\n"
            "  - domain: a.com\n"
            "    port: 3000\n"
        )
        return path

    def test_applies_file(self, options_file: Path, capsys: pytest.CaptureFixture) -> None:
        mock_run = AsyncMock(return_value=_completed(0, "Configuration applied\n"))
        with patch(
            "xynginc.cli.commands.apply.resolve_binary", return_value=BINARY
        ) as mock_resolve, patch("xynginc.engine.client.run_captured", mock_run):
            assert main(["apply", "--config", str(options_file), "--no-backup"]) == EXIT_SUCCESS

        mock_resolve.assert_called_once_with("/opt/xynginc", True, "latest")
        apply_call = mock_run.call_args_list[-1]
        assert apply_call[0][0][2:] == ["apply", "--config", "-", "--no-backup"]
        assert apply_call[1]["input_text"] == (
            '{"auto_reload":false,"domains":[{"domain":"a.com","port":3000,'
            '"ssl":false,"host":"localhost","max_body_size":"20M"}]}'
        )
        assert "Configuration applied" in capsys.readouterr().out

    def test_flags_override_file(self, options_file: Path) -> None:
        mock_run = AsyncMock(return_value=_completed(0))
        with patch(
            "xynginc.cli.commands.apply.resolve_binary", return_value=BINARY
        ) as mock_resolve, patch("xynginc.engine.client.run_captured", mock_run):
            main(
                [
                    "--binary", "/usr/bin/xynginc", "--no-download", "--engine-version", "v1.4.5",
                    "--no-sudo", "apply", "--config", str(options_file),
                ]
            )
        mock_resolve.assert_called_once_with("/usr/bin/xynginc", False, "v1.4.5")
        assert mock_run.call_args[0][0][0] == str(BINARY)

    def test_discovers_file_in_cwd(
        self, options_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(options_file.parent)
        with patch("xynginc.cli.commands.apply.resolve_binary", return_value=BINARY), patch(
            "xynginc.engine.client.run_captured", AsyncMock(return_value=_completed(0))
        ):
            assert main(["apply"]) == EXIT_SUCCESS

    def test_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert main(["apply"]) == EXIT_INVALID_USAGE

    def test_invalid_options(self, tmp_path: Path) -> None:
        path = tmp_path / "xynginc.yml"
        path.write_text("domains:\n  - domain: a.com\n    port: 70000\n")
        with patch("xynginc.cli.commands.apply.resolve_binary") as mock_resolve:
            assert main(["apply", "--config", str(path)]) == EXIT_INVALID_USAGE
        mock_resolve.assert_not_called()

    def test_engine_rejection(self, options_file: Path) -> None:
        results = [_completed(0), _completed(1, "", "port conflict")]
        with patch("xynginc.cli.commands.apply.resolve_binary", return_value=BINARY), patch(
            "xynginc.engine.client.run_captured", AsyncMock(side_effect=results)
        ):
            assert main(["apply", "--config", str(options_file)]) == EXIT_ENGINE_ERROR


class TestBinaryCommands:
    def test_locate_present(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        monkeypatch.setenv("XYNGINC_HOME", str(tmp_path))
        binary = tmp_path / "xynginc"
        binary.write_text("#!/bin/sh\n")
        binary.chmod(0o755)

        with patch("xynginc.cli.commands.binary.resolve_binary", return_value=binary):
            assert main(["locate"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert f"Binary: {binary}" in out
        assert "Status: present" in out
        assert f"Cache: {tmp_path / 'bin'}" in out

    def test_locate_not_executable(self, tmp_path: Path) -> None:
        binary = tmp_path / "xynginc"
        binary.write_text("")
        binary.chmod(0o644)
        with patch("xynginc.cli.commands.binary.resolve_binary", return_value=binary):
            assert main(["locate"]) == EXIT_BOOTSTRAP_FAILURE

    def test_fetch(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        monkeypatch.setenv("XYNGINC_HOME", str(tmp_path))
        target = tmp_path / "bin" / "xynginc"
        with patch(
            "xynginc.cli.commands.binary.fetch_binary", return_value=target
        ) as mock_fetch:
            assert main(["--engine-version", "v1", "fetch", "--tag", "v2"]) == EXIT_SUCCESS
        mock_fetch.assert_called_once_with("v2", tmp_path / "bin")
        assert f"Downloaded {target}" in capsys.readouterr().out

    def test_fetch_unsupported_platform(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XYNGINC_HOME", str(tmp_path))
        with patch(
            "xynginc.cli.commands.binary.fetch_binary",
            side_effect=DownloadError("Unsupported platform: darwin. Only Linux is supported."),
        ):
            assert main(["fetch"]) == EXIT_BOOTSTRAP_FAILURE
