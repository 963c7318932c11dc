"""Unit tests for tmux_executor module."""

import logging
from unittest.mock import Mock, patch

import pytest

from sessionizer.exceptions import ProcessError
from sessionizer.tmux_executor import CommandExecutor, CommandResult, SubprocessExecutor


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self):
        assert CommandResult(b"", b"", 0).success is True
        assert CommandResult(b"", b"", 1).success is False

    def test_stdout_text(self):
        assert CommandResult("héllo\n".encode(), b"", 0).stdout_text() == "héllo\n"

    def test_stdout_text_invalid_utf8(self):
        result = CommandResult(b"\xff\xfe", b"", 0)
        with pytest.raises(ProcessError, match="not valid UTF-8"):
            result.stdout_text()

    def test_get_output_combines_streams(self):
        result = CommandResult(b"out\n", b"err\n", 1)
        assert result.get_output() == "out\nerr"

    def test_get_output_single_stream(self):
        assert CommandResult(b"", b"no server running\n", 1).get_output() == "no server running"
        assert CommandResult(b"", b"", 0).get_output() == ""


class TestSubprocessExecutor:
    """Tests for SubprocessExecutor."""

    def test_satisfies_protocol(self):
        assert isinstance(SubprocessExecutor(), CommandExecutor)

    @patch("sessionizer.tmux_executor.subprocess.run")
    def test_execute_captures_output(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout=b"ok\n", stderr=b"")

        result = SubprocessExecutor().execute("tmux", ["has-session", "-t", "dev"])

        assert result == CommandResult(stdout=b"ok\n", stderr=b"", exit_status=0)
        args, kwargs = mock_run.call_args
        assert args[0] == ["tmux", "has-session", "-t", "dev"]
        assert kwargs["capture_output"] is True
        assert kwargs["check"] is False
        assert "shell" not in kwargs

    @patch("sessionizer.tmux_executor.subprocess.run")
    def test_non_zero_exit_is_not_an_error(self, mock_run):
        mock_run.return_value = Mock(returncode=1, stdout=b"", stderr=b"can't find session")

        result = SubprocessExecutor().execute("tmux", ["has-session", "-t", "nope"])

        assert result.exit_status == 1
        assert not result.success

    @patch("sessionizer.tmux_executor.subprocess.run")
    def test_missing_program_raises(self, mock_run):
        mock_run.side_effect = FileNotFoundError("No such file or directory: 'tmux'")

        with pytest.raises(ProcessError, match="Failed to execute 'tmux list-sessions'"):
            SubprocessExecutor().execute("tmux", ["list-sessions"])

    @patch("sessionizer.tmux_executor.subprocess.run")
    def test_verbose_logs_command_at_info(self, mock_run, caplog):
        mock_run.return_value = Mock(returncode=0, stdout=b"", stderr=b"")

        with caplog.at_level(logging.INFO, logger="sessionizer.tmux_executor"):
            SubprocessExecutor().execute("tmux", ["new-session", "-s", "my proj"], verbose=True)

        assert "Executing cmd: 'tmux new-session -s 'my proj''" in caplog.text

    @patch("sessionizer.tmux_executor.subprocess.run")
    def test_quiet_does_not_log_at_info(self, mock_run, caplog):
        mock_run.return_value = Mock(returncode=0, stdout=b"", stderr=b"")

        with caplog.at_level(logging.INFO, logger="sessionizer.tmux_executor"):
            SubprocessExecutor().execute("tmux", ["list-sessions"])

        assert "Executing cmd" not in caplog.text

    def test_runs_real_process(self):
        """Test against a real program that exists on every POSIX system."""
        result = SubprocessExecutor().execute("sh", ["-c", "echo out; echo err >&2; exit 3"])
        assert result.stdout == b"out\n"
        assert result.stderr == b"err\n"
        assert result.exit_status == 3
