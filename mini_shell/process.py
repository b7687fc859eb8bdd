"""Process class for running a builtin command in-process"""

from typing import List, Optional, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .history import HistoryStore
    from .path_resolver import PathResolver

from .context import CommandContext
from .exceptions import ExitShell, ShellError
from .exit_codes import EXIT_CODE_COMMAND_NOT_FOUND, EXIT_CODE_GENERAL_ERROR
from .streams import OutputStream, ErrorStream


class Process:
    """Represents a single builtin invocation"""

    def __init__(
        self,
        command: str,
        args: List[str],
        stdout: Optional[OutputStream] = None,
        stderr: Optional[ErrorStream] = None,
        executor: Optional[Callable] = None,
        context: Optional[CommandContext] = None,
        history: Optional['HistoryStore'] = None,
        resolver: Optional['PathResolver'] = None,
    ):
        """
        Initialize a process

        Args:
            command: Command name
            args: Command arguments
            stdout: Output stream (redirection target or the shell's stdout)
            stderr: Error stream (redirection target or the shell's stderr)
            executor: Callable that executes the command
            context: CommandContext with cwd and environment
            history: Session history, for the history builtin
            resolver: Path resolver, for the type builtin
        """
        self.command = command
        self.args = args
        self.stdout = stdout or OutputStream.to_buffer()
        self.stderr = stderr or ErrorStream.to_buffer()
        self.executor = executor
        self.context = context if context is not None else CommandContext()
        self.history = history
        self.resolver = resolver
        self.exit_code = 0

    @property
    def cwd(self) -> str:
        return self.context.cwd

    def execute(self) -> int:
        """
        Execute the process

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        if self.executor is None:
            self.stderr.write(f"{self.command}: command not found\n")
            self.exit_code = EXIT_CODE_COMMAND_NOT_FOUND
            return self.exit_code

        try:
            self.exit_code = self.executor(self)
        except (KeyboardInterrupt, ExitShell):
            raise
        except ShellError as e:
            self.stderr.write(f"{e}\n")
            self.exit_code = e.exit_code
        except Exception as e:
            self.stderr.write(f"{self.command}: {e}\n")
            self.exit_code = EXIT_CODE_GENERAL_ERROR

        self.stdout.flush()
        self.stderr.flush()

        return self.exit_code

    def get_stdout(self) -> bytes:
        """Get stdout contents"""
        return self.stdout.get_value()

    def get_stderr(self) -> bytes:
        """Get stderr contents"""
        return self.stderr.get_value()

    def __repr__(self):
        args_str = ' '.join(self.args) if self.args else ''
        return f"Process({self.command} {args_str})"
