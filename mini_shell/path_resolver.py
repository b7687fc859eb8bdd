"""Executable lookup on the search path for mini-shell.

This module provides:
- resolve(): find the executable a command name refers to
- iter_executables(): list every executable visible on a search path
- PathResolver: both of the above bound to a CommandContext
"""

import os
from typing import Iterable, Iterator, List, Optional, TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from .context import CommandContext


def is_executable_file(path: str) -> bool:
    """Check that path is a regular file the current user may execute."""
    return os.path.isfile(path) and os.access(path, os.X_OK)


def resolve(name: str, search_path: Iterable[str], cwd: Optional[str] = None) -> Optional[str]:
    """Find the absolute location of an executable.

    A name containing a path separator is checked directly (relative to
    cwd) without consulting the search path. Otherwise the directories are
    scanned in order and the first match wins.

    Args:
        name: Command name as typed
        search_path: Ordered directories to scan
        cwd: Directory relative names are resolved against (default: process cwd)

    Returns:
        Absolute path of the executable, or None if there is no match

    Examples:
        resolve('ls', ['/usr/local/bin', '/bin']) -> '/bin/ls'
        resolve('./run.sh', [], cwd='/work') -> '/work/run.sh'
        resolve('missing', ['/bin']) -> None
    """
    if not name:
        return None

    cwd = cwd or os.getcwd()

    if os.sep in name or (os.altsep and os.altsep in name):
        candidate = os.path.normpath(os.path.join(cwd, name))
        if is_executable_file(candidate):
            return candidate
        return None

    for directory in search_path:
        candidate = os.path.join(cwd, directory, name)
        if is_executable_file(candidate):
            return os.path.normpath(candidate)
    return None


def iter_executables(search_path: Iterable[str], cwd: Optional[str] = None) -> Iterator[str]:
    """Yield basenames of executables in every search path directory.

    Missing or unreadable directories are skipped. Names found in more
    than one directory are yielded once per directory.
    """
    cwd = cwd or os.getcwd()
    for directory in search_path:
        directory = os.path.join(cwd, directory)
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    try:
                        if entry.is_file() and os.access(entry.path, os.X_OK):
                            yield entry.name
                    except OSError:
                        continue
        except OSError as e:
            logger.debug("skipping search path entry {}: {}", directory, e)


class PathResolver:
    """Executable lookup bound to a CommandContext.

    PATH is read from the context on every call, so changes to it during a
    session take effect immediately.

    Attributes:
        context: Context supplying PATH and the current working directory
    """

    def __init__(self, context: 'CommandContext'):
        self.context = context

    def resolve(self, name: str) -> Optional[str]:
        """Resolve a command name against the context's PATH.

        Returns:
            Absolute path of the executable, or None
        """
        path = resolve(name, self.context.search_path(), cwd=self.context.cwd)
        logger.debug("resolved {!r} -> {}", name, path)
        return path

    def executables(self) -> List[str]:
        """Return every executable basename on the context's PATH."""
        return list(iter_executables(self.context.search_path(), cwd=self.context.cwd))
