"""
Base utilities for builtin implementations.

This module provides common helper functions that command modules can use
to reduce code duplication and maintain consistency.
"""

from typing import Optional

from ..exceptions import InvalidArgumentError, NumericArgumentError
from ..process import Process


def write_error(process: Process, message: str, prefix_command: bool = True):
    """
    Write an error message to stderr.

    Args:
        process: The process object
        message: The error message
        prefix_command: If True, prefix message with command name
    """
    if prefix_command:
        process.stderr.write(f"{process.command}: {message}\n")
    else:
        process.stderr.write(f"{message}\n")


def validate_arg_count(process: Process, min_args: int = 0, max_args: Optional[int] = None):
    """
    Validate the number of arguments.

    Args:
        process: The process object
        min_args: Minimum required arguments
        max_args: Maximum allowed arguments (None = unlimited)

    Raises:
        InvalidArgumentError: If the count is out of range
    """
    arg_count = len(process.args)

    if arg_count < min_args:
        raise InvalidArgumentError(process.command, "missing operand")

    if max_args is not None and arg_count > max_args:
        raise InvalidArgumentError(process.command, "too many arguments")


def parse_count(process: Process, value: str) -> int:
    """
    Parse a non-negative integer argument.

    Raises:
        NumericArgumentError: If value is not a non-negative integer

    Example:
        >>> parse_count(process, '10')
        10
    """
    if not value.isdigit():
        raise NumericArgumentError(process.command, value)
    return int(value)


__all__ = [
    'write_error',
    'validate_arg_count',
    'parse_count',
]
