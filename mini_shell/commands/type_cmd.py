"""
TYPE command - describe how a command name would be interpreted.

Note: Module name is type_cmd.py because 'type' is a Python builtin.
"""

from ..path_resolver import PathResolver
from ..process import Process


def cmd_type(process: Process) -> int:
    """
    Report whether each name is a builtin or an executable on PATH

    Usage: type name [name ...]

    Builtins take precedence over executables of the same name.

    Examples:
        type echo       # echo is a shell builtin
        type ls         # ls is /bin/ls
        type nothing    # nothing: not found
    """
    from . import is_builtin

    resolver = process.resolver or PathResolver(process.context)
    exit_code = 0

    for name in process.args:
        if is_builtin(name):
            process.stdout.write(f"{name} is a shell builtin\n")
            continue

        path = resolver.resolve(name)
        if path is not None:
            process.stdout.write(f"{name} is {path}\n")
        else:
            process.stdout.write(f"{name}: not found\n")
            exit_code = 1

    return exit_code
