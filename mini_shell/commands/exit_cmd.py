"""
EXIT command - leave the shell.

Note: Module name is exit_cmd.py to avoid shadowing the exit() builtin.
"""

from ..exceptions import ExitShell
from ..exit_codes import EXIT_CODE_SYNTAX_ERROR
from ..process import Process
from .base import write_error


def cmd_exit(process: Process) -> int:
    """
    Exit the shell with an optional status

    Usage: exit [n]

    The status is taken modulo 256. History is flushed by the shell
    before the process terminates.

    Examples:
        exit            # Exit with status 0
        exit 3          # Exit with status 3
    """
    status = 0
    if process.args:
        value = process.args[0]
        try:
            status = int(value) & 0xFF
        except ValueError:
            write_error(process, f"{value}: numeric argument required")
            status = EXIT_CODE_SYNTAX_ERROR

    raise ExitShell(status)
