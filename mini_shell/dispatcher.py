"""
Dispatcher: runs one command line.

Each line goes through Parse -> Resolve -> Execute -> Report:
- Parse: tokenize into argv and redirections
- Resolve: builtin first, then the search path
- Execute: open redirections, run the builtin in-process or spawn the
  executable, and close the redirections again
- Report: return the exit status
"""

import errno
import subprocess
from typing import BinaryIO, List, Optional

from loguru import logger

from .commands import get_builtin
from .context import CommandContext
from .exceptions import (
    CommandNotFoundError,
    ExitShell,
    ParsingError,
    ShellError,
    SpawnError,
    describe_os_error,
)
from .exit_codes import (
    EXIT_CODE_CANNOT_EXECUTE,
    EXIT_CODE_COMMAND_NOT_FOUND,
    EXIT_CODE_SIGNAL_BASE,
    EXIT_CODE_SUCCESS,
)
from .history import HistoryStore
from .lexer import ParsedCommand, tokenize
from .path_resolver import PathResolver
from .process import Process
from .redirection import open_redirections
from .streams import ErrorStream, OutputStream

SHELL_NAME = 'mini-shell'


class Dispatcher:
    """
    Resolves and runs command lines against a CommandContext.

    Attributes:
        context: Working directory and environment
        history: Session history, shared with the history builtin
        stdout: The shell's own stdout (used when not redirected)
        stderr: The shell's own stderr (used when not redirected)
    """

    def __init__(
        self,
        context: CommandContext,
        history: Optional[HistoryStore] = None,
        stdout: Optional[OutputStream] = None,
        stderr: Optional[ErrorStream] = None,
    ):
        self.context = context
        self.history = history if history is not None else HistoryStore()
        self.stdout = stdout or OutputStream.to_stdout()
        self.stderr = stderr or ErrorStream.to_stderr()
        self.resolver = PathResolver(context)

    def report(self, message: str):
        """Write a diagnostic line to the shell's stderr"""
        self.stderr.write(f"{message}\n")

    def dispatch(self, line: str) -> int:
        """
        Parse and run one command line.

        Args:
            line: Raw input line

        Returns:
            Exit status of the line

        Raises:
            ExitShell: When the exit builtin runs
        """
        try:
            parsed = tokenize(line)
        except ParsingError as e:
            self.report(f"{SHELL_NAME}: {e}")
            return e.exit_code

        return self.run(parsed)

    def run(self, parsed: ParsedCommand) -> int:
        """Run an already tokenized command"""
        if not parsed.argv:
            return EXIT_CODE_SUCCESS

        try:
            exit_code = self._execute(parsed)
        except ExitShell:
            raise
        except ShellError as e:
            prefix = '' if isinstance(e, (CommandNotFoundError, SpawnError)) else f"{SHELL_NAME}: "
            self.report(f"{prefix}{e}")
            exit_code = e.exit_code

        logger.debug("{} exited with {}", parsed.command, exit_code)
        return exit_code

    def _execute(self, parsed: ParsedCommand) -> int:
        name = parsed.command
        executor = get_builtin(name)
        executable = None
        if executor is None:
            executable = self.resolver.resolve(name)
            if executable is None:
                raise CommandNotFoundError(name)

        with open_redirections(parsed.redirections, self.context.resolve_path) as (out, err):
            if executor is not None:
                process = Process(
                    command=name,
                    args=parsed.args,
                    stdout=OutputStream(out) if out is not None else self.stdout,
                    stderr=ErrorStream(err) if err is not None else self.stderr,
                    executor=executor,
                    context=self.context,
                    history=self.history,
                    resolver=self.resolver,
                )
                return process.execute()

            return self._spawn(executable, parsed.argv, out, err)

    def _spawn(
        self,
        executable: str,
        argv: List[str],
        out: Optional[BinaryIO],
        err: Optional[BinaryIO],
    ) -> int:
        """
        Run an external program and wait for it.

        argv[0] stays the name as typed; the resolved path is only used to
        locate the program.
        """
        stdout_target = out if out is not None else self._child_stream(self.stdout)
        stderr_target = err if err is not None else self._child_stream(self.stderr)

        self.stdout.flush()
        self.stderr.flush()
        logger.debug("spawning {} as {}", executable, argv)

        try:
            completed = subprocess.run(
                argv,
                executable=executable,
                cwd=self.context.cwd,
                env=self.context.env,
                stdout=stdout_target,
                stderr=stderr_target,
            )
        except OSError as e:
            exit_code = (
                EXIT_CODE_COMMAND_NOT_FOUND if e.errno == errno.ENOENT else EXIT_CODE_CANNOT_EXECUTE
            )
            raise SpawnError(argv[0], describe_os_error(e), exit_code=exit_code) from e

        if stdout_target is subprocess.PIPE:
            self.stdout.write(completed.stdout)
        if stderr_target is subprocess.PIPE:
            self.stderr.write(completed.stderr)

        if completed.returncode < 0:
            return EXIT_CODE_SIGNAL_BASE - completed.returncode
        return completed.returncode

    @staticmethod
    def _child_stream(stream: OutputStream):
        """Inherit streams with a descriptor; capture in-memory ones"""
        fileno = stream.fileno()
        if fileno is None:
            return subprocess.PIPE
        return fileno
