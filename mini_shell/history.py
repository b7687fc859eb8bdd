"""
Session history for mini-shell.

History entries are numbered from 1 in the order they were added. The
numbers exist only at runtime; the history file holds one command line per
line and nothing else.

A watermark remembers the last entry already flushed to a history file, so
``history -a`` and the flush on exit append only what is new.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from loguru import logger

from .exceptions import HistoryFileError, describe_os_error


@dataclass(frozen=True)
class HistoryEntry:
    """One recorded command line"""
    index: int
    line: str


class HistoryStore:
    """
    Append-only, in-memory history with file load/save.

    Attributes:
        watermark: Index of the last entry flushed by append/write or loaded at startup

    Example:
        >>> store = HistoryStore()
        >>> store.add('echo one')
        HistoryEntry(index=1, line='echo one')
        >>> store.add('history')
        HistoryEntry(index=2, line='history')
        >>> store.format(store.tail(1))
        '    2  history\\n'
    """

    def __init__(self, index_width: int = 5):
        self._entries: List[HistoryEntry] = []
        self.watermark = 0
        self.index_width = index_width

    def __len__(self):
        return len(self._entries)

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    @property
    def last_index(self) -> int:
        return self._entries[-1].index if self._entries else 0

    def add(self, line: str) -> HistoryEntry:
        """Record a command line under the next index"""
        entry = HistoryEntry(self.last_index + 1, line)
        self._entries.append(entry)
        return entry

    def extend(self, lines: Iterable[str]) -> int:
        """Record several lines; returns how many were added"""
        count = 0
        for line in lines:
            self.add(line)
            count += 1
        return count

    def tail(self, count: Optional[int] = None) -> List[HistoryEntry]:
        """Return the last ``count`` entries (all of them when count is None)"""
        if count is None:
            return self.entries
        if count <= 0:
            return []
        return self._entries[-count:]

    def format(self, entries: Iterable[HistoryEntry]) -> str:
        """Render entries with right-aligned indices"""
        return ''.join(f"{entry.index:>{self.index_width}}  {entry.line}\n" for entry in entries)

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------

    @staticmethod
    def _read_lines(path: str) -> List[str]:
        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                return [line for line in f.read().splitlines() if line.strip()]
        except OSError as e:
            raise HistoryFileError(path, describe_os_error(e)) from e

    def _write_lines(self, path: str, entries: List[HistoryEntry], mode: str):
        try:
            with open(path, mode, encoding='utf-8') as f:
                for entry in entries:
                    f.write(entry.line + '\n')
        except OSError as e:
            raise HistoryFileError(path, describe_os_error(e)) from e

    def load(self, path: str) -> int:
        """
        Load a history file at startup.

        Loaded entries count as already saved: the watermark moves past
        them. A missing file is not an error.

        Returns:
            Number of entries loaded
        """
        try:
            lines = self._read_lines(path)
        except HistoryFileError as e:
            if isinstance(e.__cause__, FileNotFoundError):
                logger.debug("history file {} does not exist yet", path)
                return 0
            raise
        count = self.extend(lines)
        self.watermark = self.last_index
        logger.debug("loaded {} history entries from {}", count, path)
        return count

    def read_file(self, path: str) -> int:
        """
        Append a file's lines as new entries (history -r).

        The watermark is left alone.

        Returns:
            Number of entries read
        """
        count = self.extend(self._read_lines(path))
        logger.debug("read {} history entries from {}", count, path)
        return count

    def write_file(self, path: str) -> int:
        """
        Overwrite a file with the whole history (history -w).

        Returns:
            Number of entries written
        """
        self._write_lines(path, self._entries, 'w')
        self.watermark = self.last_index
        logger.debug("wrote {} history entries to {}", len(self._entries), path)
        return len(self._entries)

    def append_file(self, path: str) -> int:
        """
        Append entries added since the last flush (history -a, exit).

        Returns:
            Number of entries appended
        """
        pending = [entry for entry in self._entries if entry.index > self.watermark]
        self._write_lines(path, pending, 'a')
        self.watermark = self.last_index
        logger.debug("appended {} history entries to {}", len(pending), path)
        return len(pending)
