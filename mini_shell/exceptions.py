"""
Custom exception hierarchy for mini-shell.

This module defines a structured exception hierarchy that provides:
- Clear error categorization
- Consistent error messages
- Proper exit codes

Usage:
    from mini_shell.exceptions import ShellError

    try:
        dispatcher.dispatch(line)
    except ShellError as e:
        stderr.write(f"{e}\\n")
        return e.exit_code
"""

from typing import Optional

from .exit_codes import (
    EXIT_CODE_CANNOT_EXECUTE,
    EXIT_CODE_COMMAND_NOT_FOUND,
    EXIT_CODE_GENERAL_ERROR,
    EXIT_CODE_SYNTAX_ERROR,
)


class ShellError(Exception):
    """
    Base class for all shell errors.

    Attributes:
        message: Error message
        exit_code: Suggested exit code (default: 1)
    """

    def __init__(self, message: str, exit_code: int = EXIT_CODE_GENERAL_ERROR):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def __str__(self):
        return self.message


class ExitShell(Exception):
    """
    Raised by the ``exit`` builtin to stop the REPL.

    Not a ShellError: it must pass through error reporting untouched.
    """

    def __init__(self, status: int = 0):
        super().__init__(status)
        self.status = status


# =============================================================================
# Parsing Errors
# =============================================================================

class ParsingError(ShellError):
    """
    Base class for parsing-related errors.

    Raised when tokenizing shell input fails.
    """

    def __init__(self, message: str, line: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message, exit_code=EXIT_CODE_SYNTAX_ERROR)
        self.line = line
        self.position = position


class UnmatchedQuoteError(ParsingError):
    """
    Raised when quotes are not properly matched.

    Example:
        raise UnmatchedQuoteError("echo 'hello", quote_char="'", position=5)
    """

    def __init__(self, line: str, quote_char: str = '"', position: Optional[int] = None):
        message = f"unexpected EOF while looking for matching `{quote_char}'"
        super().__init__(message, line=line, position=position)
        self.quote_char = quote_char


class MissingRedirectTargetError(ParsingError):
    """
    Raised when a redirection operator has no target word.

    Example:
        raise MissingRedirectTargetError("echo hi >", "newline")
    """

    def __init__(self, line: str, unexpected: str, position: Optional[int] = None):
        message = f"syntax error near unexpected token `{unexpected}'"
        super().__init__(message, line=line, position=position)
        self.unexpected = unexpected


# =============================================================================
# Command Errors
# =============================================================================

class CommandError(ShellError):
    """
    Base class for command-related errors.

    Raised when command execution fails.
    """

    def __init__(self, command: str, message: str, exit_code: int = EXIT_CODE_GENERAL_ERROR):
        super().__init__(message, exit_code)
        self.command = command


class CommandNotFoundError(CommandError):
    """
    Raised when a command is neither a builtin nor on the search path.

    Example:
        raise CommandNotFoundError("nonexistent")
    """

    def __init__(self, command: str):
        message = f"{command}: command not found"
        super().__init__(command, message, exit_code=EXIT_CODE_COMMAND_NOT_FOUND)


class InvalidArgumentError(CommandError):
    """
    Raised when invalid arguments are provided to a builtin.

    Example:
        raise InvalidArgumentError("cd", "too many arguments")
    """

    def __init__(self, command: str, details: str, exit_code: int = EXIT_CODE_GENERAL_ERROR):
        message = f"{command}: {details}"
        super().__init__(command, message, exit_code=exit_code)
        self.details = details


class NumericArgumentError(InvalidArgumentError):
    """
    Raised when a builtin expects a number and gets something else.

    Example:
        raise NumericArgumentError("history", "abc")
    """

    def __init__(self, command: str, argument: str, exit_code: int = EXIT_CODE_GENERAL_ERROR):
        super().__init__(command, f"{argument}: numeric argument required", exit_code=exit_code)
        self.argument = argument


class SpawnError(CommandError):
    """
    Raised when a resolved executable cannot be started.

    Example:
        raise SpawnError("tool", "Permission denied", exit_code=126)
    """

    def __init__(self, command: str, reason: str, exit_code: int = EXIT_CODE_CANNOT_EXECUTE):
        super().__init__(command, f"{command}: {reason}", exit_code=exit_code)
        self.reason = reason


# =============================================================================
# File Errors
# =============================================================================

class RedirectionError(ShellError):
    """
    Raised when a redirection target cannot be opened.

    Example:
        raise RedirectionError("/missing/dir/out.txt", "No such file or directory")
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}", exit_code=EXIT_CODE_GENERAL_ERROR)
        self.path = path
        self.reason = reason


class HistoryFileError(ShellError):
    """
    Raised when the history file cannot be read or written.

    Example:
        raise HistoryFileError("/root/.history", "Permission denied")
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}", exit_code=EXIT_CODE_GENERAL_ERROR)
        self.path = path
        self.reason = reason


def describe_os_error(error: OSError) -> str:
    """
    Return the user-facing reason for an OSError.

    Example:
        >>> describe_os_error(FileNotFoundError(2, 'No such file or directory'))
        'No such file or directory'
    """
    return error.strerror or str(error)
