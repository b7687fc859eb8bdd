"""
Tests for the Dispatcher.

Tests cover:
- Builtin dispatch and redirection of builtin output
- Command-not-found reporting
- External commands: arguments, argv[0], exit status, stream wiring
- Parse errors and redirection failures
"""

import os
import subprocess

import pytest

from mini_shell.exceptions import ExitShell

from conftest import get_stderr, get_stdout, make_executable


ARGS_SCRIPT = """#!/bin/sh
echo "Program was passed $# args."
echo "Arg #1: $1"
echo "Arg #2: $2"
"""


class TestBuiltinDispatch:
    """Tests for lines that run builtins."""

    def test_echo_quoted_arguments(self, dispatcher, capture_output):
        """Test quoted arguments print as one line."""
        stdout, stderr = capture_output
        assert dispatcher.dispatch("echo 'a b' \"c d\"") == 0
        assert get_stdout(stdout) == "a b c d\n"
        assert get_stderr(stderr) == ""

    def test_empty_line_is_noop(self, dispatcher, capture_output):
        """Test empty and blank lines do nothing."""
        stdout, stderr = capture_output
        assert dispatcher.dispatch("") == 0
        assert dispatcher.dispatch("   ") == 0
        assert get_stdout(stdout) == ""
        assert get_stderr(stderr) == ""

    def test_redirect_builtin_stdout(self, dispatcher, capture_output, work_dir):
        """Test > sends builtin output to the file, not the shell."""
        stdout, _ = capture_output
        assert dispatcher.dispatch("echo 'Hello Alice' > out.txt") == 0
        assert (work_dir / "out.txt").read_text() == "Hello Alice\n"
        assert get_stdout(stdout) == ""

    def test_redirect_overwrites(self, dispatcher, work_dir):
        """Test > truncates an existing file."""
        (work_dir / "out.txt").write_text("old contents\n")
        dispatcher.dispatch("echo new > out.txt")
        assert (work_dir / "out.txt").read_text() == "new\n"

    def test_redirect_appends(self, dispatcher, work_dir):
        """Test >> twice appends rather than truncates."""
        dispatcher.dispatch("echo first >> log.txt")
        dispatcher.dispatch("echo second >> log.txt")
        assert (work_dir / "log.txt").read_text() == "first\nsecond\n"

    def test_redirect_builtin_stderr(self, dispatcher, capture_output, work_dir):
        """Test 2> captures builtin diagnostics."""
        _, stderr = capture_output
        assert dispatcher.dispatch("cd /nowhere-at-all 2> err.txt") == 1
        assert (work_dir / "err.txt").read_text() == "cd: /nowhere-at-all: No such file or directory\n"
        assert get_stderr(stderr) == ""

    def test_stdout_redirect_keeps_diagnostics_visible(self, dispatcher, capture_output, work_dir):
        """Test redirecting stdout does not swallow errors."""
        _, stderr = capture_output
        dispatcher.dispatch("cd /nowhere-at-all > out.txt")
        assert (work_dir / "out.txt").read_text() == ""
        assert "No such file or directory" in get_stderr(stderr)

    def test_last_redirect_wins(self, dispatcher, work_dir):
        """Test only the last target for a stream is opened."""
        dispatcher.dispatch("echo hi > a.txt > b.txt")
        assert (work_dir / "b.txt").read_text() == "hi\n"
        assert not (work_dir / "a.txt").exists()

    def test_redirect_relative_to_context_cwd(self, dispatcher, context, tmp_path):
        """Test targets resolve against the shell's cwd after cd."""
        (tmp_path / "sub").mkdir()
        dispatcher.dispatch(f"cd {tmp_path / 'sub'}")
        dispatcher.dispatch("pwd > where.txt")
        assert (tmp_path / "sub" / "where.txt").read_text() == f"{tmp_path / 'sub'}\n"

    def test_redirect_open_failure(self, dispatcher, capture_output, work_dir):
        """Test an unopenable target aborts the command."""
        stdout, stderr = capture_output
        status = dispatcher.dispatch("cd .. > missing/out.txt")
        assert status == 1
        assert get_stderr(stderr) == "mini-shell: missing/out.txt: No such file or directory\n"
        assert dispatcher.context.cwd == str(work_dir)

    def test_exit_propagates(self, dispatcher):
        """Test exit raises out of the dispatcher."""
        with pytest.raises(ExitShell) as exc_info:
            dispatcher.dispatch("exit 4")
        assert exc_info.value.status == 4

    def test_history_builtin_sees_store(self, dispatcher, capture_output, history):
        """Test the history builtin uses the dispatcher's store."""
        stdout, _ = capture_output
        history.extend(["echo one", "history"])
        dispatcher.dispatch("history")
        assert get_stdout(stdout) == "    1  echo one\n    2  history\n"


class TestParseErrors:
    """Tests for lines that fail to tokenize."""

    def test_unterminated_quote(self, dispatcher, capture_output):
        """Test an unterminated quote is reported and nothing runs."""
        stdout, stderr = capture_output
        assert dispatcher.dispatch("echo 'abc") == 2
        assert get_stdout(stdout) == ""
        assert get_stderr(stderr) == "mini-shell: unexpected EOF while looking for matching `''\n"

    def test_missing_redirect_target(self, dispatcher, capture_output):
        """Test a dangling operator is reported."""
        _, stderr = capture_output
        assert dispatcher.dispatch("echo hi >") == 2
        assert "syntax error near unexpected token `newline'" in get_stderr(stderr)


class TestCommandNotFound:
    """Tests for unknown commands."""

    def test_not_found(self, dispatcher, capture_output):
        """Test unknown commands report 127 on stderr."""
        stdout, stderr = capture_output
        assert dispatcher.dispatch("doesnotexist123 arg") == 127
        assert get_stderr(stderr) == "doesnotexist123: command not found\n"
        assert get_stdout(stdout) == ""

    def test_not_found_does_not_create_redirect_target(self, dispatcher, work_dir):
        """Test nothing is opened for a command that cannot run."""
        dispatcher.dispatch("doesnotexist123 > out.txt")
        assert not (work_dir / "out.txt").exists()

    def test_dispatcher_continues(self, dispatcher, capture_output):
        """Test later lines still run after a failure."""
        stdout, _ = capture_output
        dispatcher.dispatch("invalid_command_1")
        assert dispatcher.dispatch("echo still here") == 0
        assert get_stdout(stdout) == "still here\n"


@pytest.mark.usefixtures("sh_available")
class TestExternalCommands:
    """Tests for programs found on PATH."""

    def test_runs_with_arguments(self, dispatcher, capture_output, bin_dir):
        """Test arguments reach the program."""
        stdout, _ = capture_output
        make_executable(bin_dir, "custom_exe", ARGS_SCRIPT)
        assert dispatcher.dispatch("custom_exe David Emily") == 0
        assert get_stdout(stdout) == "Program was passed 2 args.\nArg #1: David\nArg #2: Emily\n"

    def test_quoted_arguments_stay_whole(self, dispatcher, capture_output, bin_dir):
        """Test quoting controls argument boundaries."""
        stdout, _ = capture_output
        make_executable(bin_dir, "custom_exe", ARGS_SCRIPT)
        dispatcher.dispatch("custom_exe 'one two' three\\ four")
        assert "Arg #1: one two\nArg #2: three four\n" in get_stdout(stdout)

    def test_quoted_command_name(self, dispatcher, capture_output, bin_dir, work_dir):
        """Test a command name with spaces."""
        stdout, _ = capture_output
        make_executable(bin_dir, "exe  with  space", '#!/bin/sh\nread line < "$1"\necho "$line"\n')
        (work_dir / "f1").write_text("blueberry orange.\n")
        dispatcher.dispatch("'exe  with  space' f1")
        assert get_stdout(stdout) == "blueberry orange.\n"

    def test_argv0_is_name_as_typed(self, dispatcher, capture_output, bin_dir):
        """Test argv[0] is the typed name rather than the resolved path."""
        stdout, _ = capture_output
        os.symlink('/bin/sh', bin_dir / "mysh")
        dispatcher.dispatch("mysh -c 'echo $0'")
        assert get_stdout(stdout) == "mysh\n"

    def test_exit_status_propagates(self, dispatcher, bin_dir):
        """Test the child's status is the line's status."""
        make_executable(bin_dir, "fail3", "#!/bin/sh\nexit 3\n")
        assert dispatcher.dispatch("fail3") == 3

    def test_killed_by_signal(self, dispatcher, bin_dir):
        """Test a child killed by signal N reports 128 + N."""
        make_executable(bin_dir, "suicide", "#!/bin/sh\nkill -9 $$\n")
        assert dispatcher.dispatch("suicide") == 137

    def test_stdout_redirect(self, dispatcher, capture_output, bin_dir, work_dir):
        """Test > connects the child's stdout to the file."""
        stdout, _ = capture_output
        make_executable(bin_dir, "greet", "#!/bin/sh\necho hello\n")
        dispatcher.dispatch("greet > out.txt")
        dispatcher.dispatch("greet >> out.txt")
        assert (work_dir / "out.txt").read_text() == "hello\nhello\n"
        assert get_stdout(stdout) == ""

    def test_stderr_redirect(self, dispatcher, capture_output, bin_dir, work_dir):
        """Test 2> and 2>> connect the child's stderr to the file."""
        stdout, stderr = capture_output
        make_executable(bin_dir, "warn", '#!/bin/sh\necho "warn: $1" >&2\necho out\n')
        dispatcher.dispatch("warn one 2> err.txt")
        dispatcher.dispatch("warn two 2>> err.txt")
        assert (work_dir / "err.txt").read_text() == "warn: one\nwarn: two\n"
        assert get_stdout(stdout) == "out\nout\n"
        assert get_stderr(stderr) == ""

    def test_child_runs_in_context_cwd(self, dispatcher, capture_output, bin_dir, tmp_path):
        """Test the child starts in the shell's directory."""
        stdout, _ = capture_output
        make_executable(bin_dir, "where", "#!/bin/sh\npwd\n")
        (tmp_path / "elsewhere").mkdir()
        dispatcher.dispatch(f"cd {tmp_path / 'elsewhere'}")
        dispatcher.dispatch("where")
        assert get_stdout(stdout) == f"{tmp_path / 'elsewhere'}\n"

    def test_child_gets_context_env(self, dispatcher, capture_output, bin_dir, context):
        """Test the child sees the context environment."""
        stdout, _ = capture_output
        context.env['GREETING'] = 'hi there'
        make_executable(bin_dir, "show", '#!/bin/sh\necho "$GREETING"\n')
        dispatcher.dispatch("show")
        assert get_stdout(stdout) == "hi there\n"

    def test_path_edit_takes_effect(self, dispatcher, context, tmp_path):
        """Test commands added to PATH mid-session are found."""
        make_executable(tmp_path / "late", "latecomer")
        assert dispatcher.dispatch("latecomer") == 127
        context.env['PATH'] += os.pathsep + str(tmp_path / "late")
        assert dispatcher.dispatch("latecomer") == 0

    def test_direct_path(self, dispatcher, capture_output, work_dir):
        """Test ./script runs without a PATH lookup."""
        stdout, _ = capture_output
        make_executable(work_dir, "local.sh", "#!/bin/sh\necho local\n")
        assert dispatcher.dispatch("./local.sh") == 0
        assert get_stdout(stdout) == "local\n"


class TestSpawnFailure:
    """Tests for programs that resolve but cannot start."""

    def test_permission_error(self, dispatcher, capture_output, bin_dir, work_dir, monkeypatch):
        """Test a spawn failure is reported with status 126."""
        _, stderr = capture_output
        make_executable(bin_dir, "tool")

        def fail(*args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(subprocess, "run", fail)
        assert dispatcher.dispatch("tool > out.txt") == 126
        assert get_stderr(stderr) == "tool: Permission denied\n"
        assert (work_dir / "out.txt").exists()

    def test_vanished_executable(self, dispatcher, capture_output, bin_dir, monkeypatch):
        """Test a file removed before spawn reports status 127."""
        _, stderr = capture_output
        make_executable(bin_dir, "tool")

        def fail(*args, **kwargs):
            raise FileNotFoundError(2, "No such file or directory")

        monkeypatch.setattr(subprocess, "run", fail)
        assert dispatcher.dispatch("tool") == 127
        assert get_stderr(stderr) == "tool: No such file or directory\n"
