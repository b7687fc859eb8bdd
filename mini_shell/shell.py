"""Interactive shell: history bookkeeping and the read-eval loop"""

from typing import Optional

from loguru import logger

from .completer import ShellCompleter
from .config import ShellSettings
from .context import CommandContext
from .dispatcher import SHELL_NAME, Dispatcher
from .exceptions import ExitShell, HistoryFileError
from .exit_codes import EXIT_CODE_SIGNAL_BASE
from .history import HistoryStore
from .streams import ErrorStream, OutputStream

# Status reported when a command is interrupted with Ctrl-C (128 + SIGINT)
EXIT_CODE_INTERRUPTED = EXIT_CODE_SIGNAL_BASE + 2


class Shell:
    """Simple interactive shell"""

    def __init__(
        self,
        context: Optional[CommandContext] = None,
        settings: Optional[ShellSettings] = None,
        stdout: Optional[OutputStream] = None,
        stderr: Optional[ErrorStream] = None,
    ):
        """
        Initialize the shell

        Args:
            context: Working directory and environment (default: the real process)
            settings: Shell settings (default: read from MINI_SHELL_* variables)
            stdout: Stream builtins write to when not redirected
            stderr: Stream diagnostics are written to
        """
        self.settings = settings or ShellSettings()
        self.context = context if context is not None else CommandContext.from_environment()
        self.history = HistoryStore(index_width=self.settings.history_width)
        self.dispatcher = Dispatcher(self.context, self.history, stdout=stdout, stderr=stderr)
        self.last_status = 0
        self.running = True

        self.load_history()

    @property
    def stdout(self) -> OutputStream:
        return self.dispatcher.stdout

    @property
    def stderr(self) -> ErrorStream:
        return self.dispatcher.stderr

    def load_history(self):
        """Load $HISTFILE, if set, before any interactive entries"""
        path = self.context.histfile
        if path is None:
            return
        try:
            self.history.load(path)
        except HistoryFileError as e:
            self.dispatcher.report(f"{SHELL_NAME}: {e}")

    def flush_history(self):
        """Append unsaved entries to $HISTFILE, if set"""
        path = self.context.histfile
        if path is None:
            return
        try:
            self.history.append_file(path)
        except HistoryFileError as e:
            self.dispatcher.report(f"{SHELL_NAME}: {e}")

    def execute(self, line: str) -> int:
        """
        Record a line in history and run it

        Blank lines are neither recorded nor run. Lines that fail to parse
        or run are still recorded.

        Returns:
            Exit status of the line

        Raises:
            ExitShell: When the exit builtin runs
        """
        if not line.strip():
            return self.last_status

        self.history.add(line)
        self.last_status = self.dispatcher.dispatch(line)
        return self.last_status

    def run_exit(self, status: int) -> int:
        """Flush history and stop the shell; returns the final status"""
        logger.debug("exiting with status {}", status)
        self.flush_history()
        self.running = False
        return status

    def _sync_readline_history(self):
        try:
            import readline
        except ImportError:
            return
        for entry in self.history.entries:
            readline.add_history(entry.line)

    def repl(self) -> int:
        """
        Run the interactive loop until exit or end of input

        Returns:
            The shell's final exit status
        """
        completer = ShellCompleter(self.context, prompt=lambda: self.settings.prompt)
        if completer.install():
            self._sync_readline_history()

        while self.running:
            try:
                line = input(self.settings.prompt)
            except EOFError:
                # Ctrl-D or end of piped input
                self.stdout.write('\n')
                return self.run_exit(self.last_status)
            except KeyboardInterrupt:
                # Ctrl-C while typing discards the line
                self.stdout.write('\n')
                continue

            try:
                self.execute(line)
            except ExitShell as e:
                return self.run_exit(e.status)
            except KeyboardInterrupt:
                self.stdout.write('\n')
                self.last_status = EXIT_CODE_INTERRUPTED

        return self.last_status
