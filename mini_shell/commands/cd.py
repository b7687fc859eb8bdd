"""
CD command - change the working directory.
"""

import os

from loguru import logger

from ..process import Process
from .base import validate_arg_count, write_error


def cmd_cd(process: Process) -> int:
    """
    Change the current working directory

    Usage: cd [dir]

    With no argument, or with ~, changes to $HOME. ~/path is expanded
    against $HOME. Relative paths are resolved against the current
    directory, with . and .. normalized.

    Examples:
        cd /tmp
        cd ../src
        cd ~/projects
    """
    validate_arg_count(process, max_args=1)

    context = process.context
    target = process.args[0] if process.args else '~'

    if target == '~' or target.startswith('~/'):
        if context.home is None:
            write_error(process, "HOME not set")
            return 1
        path = context.expand_home(target)
    else:
        path = target

    new_cwd = context.resolve_path(path)
    if not os.path.isdir(new_cwd):
        write_error(process, f"{target}: No such file or directory")
        return 1

    logger.debug("cd {} -> {}", context.cwd, new_cwd)
    context.cwd = new_cwd
    context.set_variable('PWD', new_cwd)
    return 0
