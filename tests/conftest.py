"""
Shared test fixtures and configuration for tmux-sessionizer tests.

This module provides common fixtures used across all test modules:
- Environment isolation (HOME, XDG_CONFIG_HOME, TMUX)
- A recording command executor standing in for tmux and pgrep
- Temporary config files and project directories
- CLI result assertion helpers
"""

from pathlib import Path

import pytest

from sessionizer.tmux_client import Tmux
from sessionizer.tmux_executor import CommandResult

# ============================================================================
# ENVIRONMENT FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, tmp_path_factory, monkeypatch):
    """Keep tests away from the real home, config and tmux session.

    HOME and XDG_CONFIG_HOME point into the test's temporary directory and
    TMUX is removed, so every test starts outside of tmux with no config.
    """
    home_dir = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("TMUX", raising=False)
    return home_dir


@pytest.fixture
def temp_home_dir(isolated_env):
    """Temporary home directory the HOME variable points to."""
    return isolated_env


@pytest.fixture
def config_file(tmp_path):
    """Write a config file and return its path.

    Usage:
        def test_load(config_file):
            path = config_file('default_dir = "/tmp"')
    """

    def _write(content: str, name: str = "sessionizer.toml") -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def projects_dir(tmp_path):
    """Directory with three project subdirectories and one plain file."""
    root = tmp_path / "projects"
    root.mkdir()
    for name in ("api", "web", "node_modules"):
        (root / name).mkdir()
    (root / "README.md").write_text("not a project")
    return root


# ============================================================================
# COMMAND EXECUTOR FIXTURES
# ============================================================================


class RecordingExecutor:
    """Command executor that records calls and replays configured results.

    Responses are matched against the joined command line; the longest
    matching pattern wins. Unmatched commands succeed with no output.
    """

    def __init__(self):
        self.calls: list[list[str]] = []
        self._responses: dict[str, CommandResult] = {}
        self._failures: dict[str, Exception] = {}

    def respond(
        self, pattern: str, exit_status: int = 0, stdout: str | bytes = "", stderr: str = ""
    ):
        """Configure the result for commands containing ``pattern``."""
        if isinstance(stdout, str):
            stdout = stdout.encode("utf-8")
        self._responses[pattern] = CommandResult(
            stdout=stdout,
            stderr=stderr.encode("utf-8"),
            exit_status=exit_status,
        )

    def fail(self, pattern: str, error: Exception):
        """Raise ``error`` for commands containing ``pattern``."""
        self._failures[pattern] = error

    def execute(self, program: str, args: list[str], verbose: bool = False) -> CommandResult:
        cmd = [program, *args]
        self.calls.append(cmd)
        cmd_str = " ".join(cmd)
        for pattern, error in self._failures.items():
            if pattern in cmd_str:
                raise error
        for pattern in sorted(self._responses, key=len, reverse=True):
            if pattern in cmd_str:
                return self._responses[pattern]
        return CommandResult(stdout=b"", stderr=b"", exit_status=0)

    @property
    def tmux_calls(self) -> list[list[str]]:
        """tmux argument lists, without the program name."""
        return [cmd[1:] for cmd in self.calls if cmd[0] == "tmux"]

    def assert_called_with_command(self, command: str):
        """Assert that some recorded command line contains ``command``."""
        for cmd in self.calls:
            if command in " ".join(cmd):
                return
        raise AssertionError(f"Expected command '{command}' not found in {self.calls}")

    def assert_not_called_with_command(self, command: str):
        """Assert that no recorded command line contains ``command``."""
        for cmd in self.calls:
            if command in " ".join(cmd):
                raise AssertionError(f"Unexpected command '{command}' was called")


@pytest.fixture
def executor():
    """Recording executor; tmux server reported down and no sessions."""
    fake = RecordingExecutor()
    fake.respond("pgrep tmux", exit_status=1)
    fake.respond("tmux list-sessions", exit_status=1, stderr="no server running")
    return fake


@pytest.fixture
def running_executor(executor):
    """Recording executor with a running server and two live sessions."""
    executor.respond("pgrep tmux", exit_status=0, stdout="4242\n")
    executor.respond(
        "tmux list-sessions",
        stdout=(
            "dotfiles: 2 windows (created Thu Oct 10 10:00:00 2024)\n"
            "scratch: 1 windows (created Thu Oct 10 11:00:00 2024) (attached)\n"
        ),
    )
    return executor


@pytest.fixture
def tmux(executor):
    """Tmux wrapper driving the recording executor."""
    return Tmux(executor=executor)


# ============================================================================
# CLI TEST HELPERS
# ============================================================================


def assert_command_succeeds(result):
    """Assert that a command executed successfully (exit code 0).

    Args:
        result: Click CliRunner result object
    """
    assert result.exit_code == 0, (
        f"Expected successful execution (exit_code=0), "
        f"but got exit_code={result.exit_code}: {result.output}"
    )


def assert_command_fails(result, expected_error: str | None = None):
    """Assert that a command failed with non-zero exit code.

    Args:
        result: Click CliRunner result object
        expected_error: Optional substring to look for in error output
    """
    assert result.exit_code != 0, (
        f"Expected command to fail (non-zero exit code), but got exit_code=0: {result.output}"
    )

    if expected_error:
        assert expected_error.lower() in result.output.lower(), (
            f"Expected error containing '{expected_error}', but got: {result.output}"
        )


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for testing CLI commands.

    Returns:
        CliRunner: Configured Click test runner
    """
    from click.testing import CliRunner

    return CliRunner()
