"""
ECHO command - print arguments.
"""

from ..process import Process


def cmd_echo(process: Process) -> int:
    """
    Print arguments separated by single spaces, followed by a newline

    Usage: echo [arg ...]
    """
    process.stdout.write(' '.join(process.args) + '\n')
    return 0
