"""
Builtin command registry for mini-shell.

The builtin set is closed: every builtin is a member of the Builtin enum and
is bound to its executor in a read-only table built at import time. Each
command is implemented in a separate module file under this directory.
"""

from enum import Enum
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

from ..process import Process


class Builtin(Enum):
    """Commands implemented inside the shell process"""
    CD = 'cd'
    ECHO = 'echo'
    EXIT = 'exit'
    HISTORY = 'history'
    PWD = 'pwd'
    TYPE = 'type'

    @classmethod
    def lookup(cls, name: str) -> Optional['Builtin']:
        try:
            return cls(name)
        except ValueError:
            return None


def is_builtin(name: str) -> bool:
    """Check whether name refers to a builtin"""
    return Builtin.lookup(name) is not None


def builtin_names() -> List[str]:
    """Return all builtin names, sorted"""
    return sorted(builtin.value for builtin in Builtin)


from .cd import cmd_cd  # noqa: E402
from .echo import cmd_echo  # noqa: E402
from .exit_cmd import cmd_exit  # noqa: E402
from .history_cmd import cmd_history  # noqa: E402
from .pwd import cmd_pwd  # noqa: E402
from .type_cmd import cmd_type  # noqa: E402

BUILTINS: Mapping[Builtin, Callable[[Process], int]] = MappingProxyType({
    Builtin.CD: cmd_cd,
    Builtin.ECHO: cmd_echo,
    Builtin.EXIT: cmd_exit,
    Builtin.HISTORY: cmd_history,
    Builtin.PWD: cmd_pwd,
    Builtin.TYPE: cmd_type,
})


def get_builtin(command: str) -> Optional[Callable[[Process], int]]:
    """
    Get a builtin command executor by name.

    Args:
        command: The command name to look up

    Returns:
        The command function, or None if not found

    Example:
        >>> executor = get_builtin('echo')
        >>> if executor:
        ...     executor(process)
    """
    builtin = Builtin.lookup(command)
    if builtin is None:
        return None
    return BUILTINS[builtin]


__all__ = ['Builtin', 'BUILTINS', 'get_builtin', 'is_builtin', 'builtin_names']
