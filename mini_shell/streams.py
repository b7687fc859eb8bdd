"""Byte-oriented output streams handed to builtins"""

import io
import sys
from typing import BinaryIO, Optional, Union


class OutputStream:
    """
    Wraps a binary file object for builtin output.

    Accepts both str and bytes; text is encoded as UTF-8. Writes to a
    terminal or pipe are flushed immediately so builtin output interleaves
    correctly with external commands writing to the same descriptor.
    """

    def __init__(self, target: BinaryIO, autoflush: bool = True):
        self.target = target
        self.autoflush = autoflush

    @classmethod
    def to_buffer(cls) -> 'OutputStream':
        """Create a stream backed by an in-memory buffer"""
        return cls(io.BytesIO(), autoflush=False)

    @classmethod
    def to_stdout(cls) -> 'OutputStream':
        return cls(sys.stdout.buffer)

    def write(self, data: Union[str, bytes]) -> int:
        if isinstance(data, str):
            data = data.encode('utf-8')
        written = self.target.write(data)
        if self.autoflush:
            self.flush()
        return written if written is not None else len(data)

    def flush(self):
        self.target.flush()

    def fileno(self) -> Optional[int]:
        """
        Return the underlying descriptor, or None for in-memory targets.

        Children can only inherit a stream that has a real descriptor.
        """
        try:
            return self.target.fileno()
        except (AttributeError, OSError, io.UnsupportedOperation):
            return None

    def get_value(self) -> bytes:
        """Get buffer contents (in-memory targets only)"""
        if isinstance(self.target, io.BytesIO):
            return self.target.getvalue()
        return b''


class ErrorStream(OutputStream):
    """Output stream for diagnostics"""

    @classmethod
    def to_stderr(cls) -> 'ErrorStream':
        return cls(sys.stderr.buffer)
