"""
CommandContext - Encapsulates the process-wide state commands run against.

The working directory and environment are held here instead of being read
from the real process, so tests can fabricate both without touching
os.environ or calling os.chdir.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import os


@dataclass
class CommandContext:
    """
    Encapsulates all context needed for command execution.

    This provides commands with access to:
    - Current working directory
    - Environment variables (PATH, HOME, HISTFILE, ...)

    Example:
        >>> ctx = CommandContext(cwd='/tmp', env={'PATH': '/bin:/usr/bin'})
        >>> ctx.search_path()
        ['/bin', '/usr/bin']
        >>> ctx.resolve_path('file.txt')
        '/tmp/file.txt'
    """

    cwd: str = '/'
    env: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_environment(cls) -> 'CommandContext':
        """Build a context from the real process cwd and environment"""
        return cls(cwd=os.getcwd(), env=dict(os.environ))

    def resolve_path(self, path: str) -> str:
        """
        Resolve relative paths to absolute paths.

        Args:
            path: Path to resolve (relative or absolute)

        Returns:
            Absolute path normalized

        Examples:
            >>> ctx = CommandContext(cwd='/home/user')
            >>> ctx.resolve_path('../data')
            '/home/data'
        """
        if not path:
            return self.cwd
        if os.path.isabs(path):
            return os.path.normpath(path)
        return os.path.normpath(os.path.join(self.cwd, path))

    def get_variable(self, name: str) -> Optional[str]:
        """Get an environment variable, None if unset"""
        return self.env.get(name)

    def set_variable(self, name: str, value: str):
        self.env[name] = value

    def search_path(self) -> List[str]:
        """
        Split PATH into its directories.

        PATH is read on every call so edits take effect immediately.
        An empty entry stands for the current directory.
        """
        path = self.env.get('PATH', '')
        if not path:
            return []
        return [entry or self.cwd for entry in path.split(os.pathsep)]

    @property
    def home(self) -> Optional[str]:
        return self.env.get('HOME') or None

    def expand_home(self, path: str) -> str:
        """
        Expand a leading ~ (exactly "~" or "~/...") using HOME.

        Examples:
            >>> CommandContext(env={'HOME': '/home/alice'}).expand_home('~/docs')
            '/home/alice/docs'
        """
        home = self.home
        if home is None:
            return path
        if path == '~':
            return home
        if path.startswith('~/'):
            return os.path.join(home, path[2:])
        return path

    @property
    def histfile(self) -> Optional[str]:
        """HISTFILE resolved to an absolute path, None if unset"""
        histfile = self.env.get('HISTFILE')
        if not histfile:
            return None
        return self.resolve_path(self.expand_home(histfile))

    def __repr__(self):
        return f"CommandContext(cwd={self.cwd!r}, env_vars={len(self.env)})"
