"""
PWD command - print working directory.
"""

from ..process import Process


def cmd_pwd(process: Process) -> int:
    """
    Print working directory

    Usage: pwd

    Note:
        Prints process.context.cwd, which cd keeps up to date.
    """
    process.stdout.write(f"{process.context.cwd}\n")
    return 0
