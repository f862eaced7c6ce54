"""Tests for the pi-line command line entry point."""

from __future__ import annotations

from click.testing import CliRunner

from pi.line.cli import main


class TestCli:
    def test_echoes_submitted_lines(self) -> None:
        result = CliRunner().invoke(main, [], input="hello\nexit\n")
        assert result.exit_code == 0
        assert "Buffer: hello" in result.output
        assert "Buffer: exit" not in result.output

    def test_custom_prompt(self) -> None:
        result = CliRunner().invoke(main, ["--prompt", "%% "], input="exit\n")
        assert result.exit_code == 0
        assert "%% " in result.output

    def test_history_size_must_be_positive(self) -> None:
        result = CliRunner().invoke(main, ["--history-size", "0"])
        assert result.exit_code != 0

    def test_log_file_receives_debug_output(self, tmp_path) -> None:
        log_file = tmp_path / "line.log"
        result = CliRunner().invoke(main, ["--log-file", str(log_file)], input="a\nexit\n")
        assert result.exit_code == 0
        assert log_file.exists()
