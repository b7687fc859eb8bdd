"""
Redirection model and scoped opening of redirection targets.

A command line may redirect stdout, stderr, or both. Each stream has at most
one target; when the same stream is redirected twice the later operator wins.
"""

import contextlib
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Iterator, Optional, Tuple

from loguru import logger

from .exceptions import RedirectionError, describe_os_error


class RedirectMode(Enum):
    """How a redirection target is opened"""
    OVERWRITE = "overwrite"
    APPEND = "append"

    @property
    def file_mode(self) -> str:
        return 'ab' if self is RedirectMode.APPEND else 'wb'


class RedirectStream(Enum):
    """Stream a redirection applies to"""
    STDOUT = 1
    STDERR = 2


# operator text -> (stream, mode)
OPERATORS = {
    '>': (RedirectStream.STDOUT, RedirectMode.OVERWRITE),
    '>>': (RedirectStream.STDOUT, RedirectMode.APPEND),
    '1>': (RedirectStream.STDOUT, RedirectMode.OVERWRITE),
    '1>>': (RedirectStream.STDOUT, RedirectMode.APPEND),
    '2>': (RedirectStream.STDERR, RedirectMode.OVERWRITE),
    '2>>': (RedirectStream.STDERR, RedirectMode.APPEND),
}


@dataclass(frozen=True)
class Redirection:
    """A single redirection target"""
    path: str
    mode: RedirectMode = RedirectMode.OVERWRITE


@dataclass
class RedirectionSpec:
    """
    Redirection targets parsed from one command line.

    Example:
        >>> spec = RedirectionSpec()
        >>> spec.add('>', 'a.txt')
        >>> spec.add('>>', 'b.txt')
        >>> spec.stdout
        Redirection(path='b.txt', mode=<RedirectMode.APPEND: 'append'>)
    """
    stdout: Optional[Redirection] = None
    stderr: Optional[Redirection] = None

    def add(self, operator: str, path: str) -> None:
        """Record a redirection, replacing any earlier one for the same stream"""
        stream, mode = OPERATORS[operator]
        if stream is RedirectStream.STDOUT:
            self.stdout = Redirection(path, mode)
        else:
            self.stderr = Redirection(path, mode)

    def is_empty(self) -> bool:
        return self.stdout is None and self.stderr is None


def open_target(redirection: Redirection, resolve_path) -> BinaryIO:
    """
    Open a redirection target in binary mode.

    Args:
        redirection: Target to open
        resolve_path: Callable mapping the user path to an absolute path

    Raises:
        RedirectionError: If the file cannot be opened
    """
    real_path = resolve_path(redirection.path)
    try:
        handle = open(real_path, redirection.mode.file_mode)
    except OSError as e:
        raise RedirectionError(redirection.path, describe_os_error(e)) from e
    logger.debug("opened {} for {}", real_path, redirection.mode.value)
    return handle


@contextlib.contextmanager
def open_redirections(
    spec: RedirectionSpec, resolve_path
) -> Iterator[Tuple[Optional[BinaryIO], Optional[BinaryIO]]]:
    """
    Open stdout/stderr targets for the duration of one command.

    Both handles are closed on every exit path, including when opening the
    second target fails after the first succeeded.

    Yields:
        (stdout_handle, stderr_handle); either may be None
    """
    with contextlib.ExitStack() as stack:
        out = err = None
        if spec.stdout is not None:
            out = stack.enter_context(open_target(spec.stdout, resolve_path))
        if spec.stderr is not None:
            err = stack.enter_context(open_target(spec.stderr, resolve_path))
        yield out, err
