"""
Pytest configuration and shared fixtures for mini-shell tests.

This module provides reusable test fixtures for:
- A fabricated CommandContext rooted in a temporary directory
- In-memory output streams
- A private PATH directory with executable scripts
"""

import os
import stat

import pytest

from mini_shell.context import CommandContext
from mini_shell.dispatcher import Dispatcher
from mini_shell.history import HistoryStore
from mini_shell.streams import ErrorStream, OutputStream


# ============================================================================
# Helpers
# ============================================================================

def make_executable(directory, name: str, body: str = "#!/bin/sh\nexit 0\n"):
    """
    Create an executable script.

    Args:
        directory: pathlib.Path to create the script in
        name: File name
        body: Script contents

    Returns:
        pathlib.Path: Path to the script
    """
    directory.mkdir(parents=True, exist_ok=True)
    script = directory / name
    script.write_text(body)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


def get_stdout(stream) -> str:
    """Get stream content as string."""
    return stream.get_value().decode('utf-8', errors='replace')


def get_stderr(stream) -> str:
    """Get stream content as string."""
    return stream.get_value().decode('utf-8', errors='replace')


# ============================================================================
# Pytest Fixtures
# ============================================================================

@pytest.fixture
def bin_dir(tmp_path):
    """
    Provides an empty directory used as the only PATH entry.

    Returns:
        pathlib.Path: Directory on the fabricated PATH
    """
    directory = tmp_path / "bin"
    directory.mkdir()
    return directory


@pytest.fixture
def home_dir(tmp_path):
    """Provides the fabricated HOME directory."""
    directory = tmp_path / "home"
    directory.mkdir()
    return directory


@pytest.fixture
def work_dir(tmp_path):
    """Provides the fabricated working directory."""
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


@pytest.fixture
def context(work_dir, bin_dir, home_dir):
    """
    Provides a CommandContext that never touches the real process state.

    Example:
        def test_cwd(context):
            assert context.cwd.endswith('work')
    """
    return CommandContext(
        cwd=str(work_dir),
        env={
            'PATH': str(bin_dir),
            'HOME': str(home_dir),
        },
    )


@pytest.fixture
def capture_output():
    """
    Provides in-memory streams for capturing command output.

    Returns:
        tuple: (stdout, stderr) streams backed by BytesIO
    """
    return OutputStream.to_buffer(), ErrorStream.to_buffer()


@pytest.fixture
def history():
    """Provides an empty HistoryStore."""
    return HistoryStore()


@pytest.fixture
def dispatcher(context, history, capture_output):
    """
    Provides a Dispatcher wired to the fabricated context and captured streams.
    """
    stdout, stderr = capture_output
    return Dispatcher(context, history, stdout=stdout, stderr=stderr)


@pytest.fixture
def sh_available():
    """Skip tests that spawn shell scripts when /bin/sh is missing."""
    if not os.path.exists('/bin/sh'):
        pytest.skip("/bin/sh is required")
