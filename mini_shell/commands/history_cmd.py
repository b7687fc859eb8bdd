"""
HISTORY command - list, load and save the session history.
"""

from ..exceptions import HistoryFileError
from ..process import Process
from .base import parse_count, validate_arg_count, write_error

FILE_FLAGS = ('-r', '-w', '-a')


def cmd_history(process: Process) -> int:
    """
    List or persist command history

    Usage: history [n]
           history -r|-w|-a [file]

    Options:
        -r    Read the file and append its lines to the history
        -w    Write the whole history to the file, replacing it
        -a    Append entries not yet saved to the file

    Without a file, -r/-w/-a use $HISTFILE.

    Examples:
        history           # All entries
        history 5         # Last five entries
        history -w ~/.mini_shell_history
    """
    validate_arg_count(process, max_args=2)
    store = process.history
    if store is None:
        write_error(process, "history is not available")
        return 1

    if not process.args:
        process.stdout.write(store.format(store.entries))
        return 0

    flag = process.args[0]
    if flag not in FILE_FLAGS:
        validate_arg_count(process, max_args=1)
        count = parse_count(process, flag)
        process.stdout.write(store.format(store.tail(count)))
        return 0

    if len(process.args) > 1:
        path = process.context.resolve_path(process.context.expand_home(process.args[1]))
    else:
        path = process.context.histfile
    if path is None:
        write_error(process, f"{flag}: option requires an argument")
        return 1

    try:
        if flag == '-r':
            store.read_file(path)
        elif flag == '-w':
            store.write_file(path)
        else:
            store.append_file(path)
    except HistoryFileError as e:
        write_error(process, str(e))
        return 1
    return 0
