"""
Tab completion for command names.

complete() is the stateless engine: builtins plus PATH executables that
start with a prefix. ShellCompleter plugs it into GNU readline, which keeps
track of repeated Tab presses itself:
- one candidate: inserted with a trailing space
- several: the common prefix is inserted and the bell rings; a second Tab
  shows every candidate
"""

import sys
from typing import Callable, List, Optional

from loguru import logger

from .commands import builtin_names
from .context import CommandContext
from .path_resolver import PathResolver


def complete(partial: str, context: CommandContext) -> List[str]:
    """
    Return command names starting with ``partial``.

    Args:
        partial: Text typed so far for the command word
        context: Context supplying PATH

    Returns:
        Sorted, de-duplicated candidates (matching is case-sensitive)

    Example:
        >>> complete('ec', CommandContext(env={'PATH': ''}))
        ['echo']
    """
    names = set(builtin_names())
    names.update(PathResolver(context).executables())
    return sorted(name for name in names if name.startswith(partial))


class ShellCompleter:
    """
    readline completer for the command word.

    Arguments after the command are not completed.
    """

    def __init__(self, context: CommandContext, prompt: Callable[[], str] = lambda: '$ '):
        self.context = context
        self.prompt = prompt
        self.matches: List[str] = []

    def _line_before(self) -> str:
        """Text preceding the word being completed"""
        try:
            import readline
        except ImportError:
            return ''
        return readline.get_line_buffer()[:readline.get_begidx()]

    def complete(self, text: str, state: int) -> Optional[str]:
        """readline completer: return the state-th candidate for text"""
        if state == 0:
            if self._line_before().strip():
                self.matches = []
            else:
                self.matches = complete(text, self.context)
                if len(self.matches) == 1:
                    self.matches = [self.matches[0] + ' ']
            logger.debug("completion for {!r}: {}", text, self.matches)

        if state < len(self.matches):
            return self.matches[state]
        return None

    def display_matches(self, substitution: str, matches: List[str], longest_match_length: int):
        """Show all candidates on one line, then redraw the prompt"""
        import readline
        sys.stdout.write('\n' + '  '.join(match.strip() for match in matches) + '\n')
        sys.stdout.write(self.prompt() + readline.get_line_buffer())
        sys.stdout.flush()

    def install(self):
        """Register with readline; a no-op when readline is unavailable"""
        try:
            import readline
        except ImportError:
            return False

        readline.set_completer(self.complete)
        readline.set_completer_delims(' \t\n')
        readline.set_completion_display_matches_hook(self.display_matches)
        if 'libedit' in (readline.__doc__ or ''):
            readline.parse_and_bind("bind ^I rl_complete")
        else:
            readline.parse_and_bind("tab: complete")
        return True
