"""
Shell lexer: turns a raw command line into argv tokens and redirections.

Quoting rules:
- Unquoted spaces and tabs separate words; runs of them collapse
- '...' keeps every character literally, backslash included
- "..." keeps characters literally except that a backslash escapes
  one of  "  \\  $  `  (a backslash before anything else stays)
- An unquoted backslash makes the next character literal
- Adjacent quoted and unquoted fragments join into a single word
- Unquoted >, >>, 1>, 1>>, 2>, 2>> are redirection operators
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from loguru import logger

from .exceptions import MissingRedirectTargetError, UnmatchedQuoteError
from .redirection import RedirectionSpec

WHITESPACE = ' \t'

# Characters a backslash escapes inside double quotes
DOUBLE_QUOTE_ESCAPABLE = '"\\$`\n'

# A word made only of one of these raw digits right before '>' is a file descriptor
FD_PREFIXES = ('1', '2')


class TokenType(Enum):
    """Token types produced by ShellLexer"""
    WORD = "word"
    REDIRECT = "redirect"
    EOF = "eof"


class Token:
    """A lexed token with its starting offset in the source line"""

    def __init__(self, type: TokenType, value: str, position: int = 0):
        self.type = type
        self.value = value
        self.position = position

    def __repr__(self):
        return f"Token({self.type.value}, {self.value!r}, {self.position})"

    def __eq__(self, other):
        if not isinstance(other, Token):
            return False
        return self.type == other.type and self.value == other.value


@dataclass
class ParsedCommand:
    """Result of tokenizing one command line"""
    argv: List[str] = field(default_factory=list)
    redirections: RedirectionSpec = field(default_factory=RedirectionSpec)

    @property
    def command(self) -> str:
        return self.argv[0] if self.argv else ''

    @property
    def args(self) -> List[str]:
        return self.argv[1:]


class ShellLexer:
    """
    Single-pass scanner over one command line.

    Example:
        >>> ShellLexer("echo 'a b' > out").tokenize()
        [Token(word, 'echo', 0), Token(word, 'a b', 5), Token(redirect, '>', 11), Token(word, 'out', 13), Token(eof, '', 16)]
    """

    def __init__(self, line: str):
        self.line = line
        self.pos = 0
        self.tokens: List[Token] = []
        self._reset_word()

    def _reset_word(self):
        self._chars: List[str] = []
        self._in_word = False
        # True while the word holds only plain unquoted, unescaped characters
        self._raw = True
        self._word_start = self.pos

    def _start_word(self):
        if not self._in_word:
            self._in_word = True
            self._word_start = self.pos

    def _flush_word(self):
        if self._in_word:
            self.tokens.append(Token(TokenType.WORD, ''.join(self._chars), self._word_start))
        self._reset_word()

    def tokenize(self) -> List[Token]:
        """
        Scan the whole line.

        Returns:
            Tokens ending with an EOF token

        Raises:
            UnmatchedQuoteError: If a quote is opened and never closed
        """
        line = self.line
        while self.pos < len(line):
            char = line[self.pos]
            if char in WHITESPACE:
                self._flush_word()
                self.pos += 1
            elif char == "'":
                self._read_single_quoted()
            elif char == '"':
                self._read_double_quoted()
            elif char == '\\':
                self._read_escape()
            elif char == '>':
                self._read_redirect()
            else:
                self._start_word()
                self._chars.append(char)
                self.pos += 1

        self._flush_word()
        self.tokens.append(Token(TokenType.EOF, '', len(line)))
        return self.tokens

    def _read_single_quoted(self):
        start = self.pos
        end = self.line.find("'", start + 1)
        if end < 0:
            raise UnmatchedQuoteError(self.line, "'", position=start)
        self._start_word()
        self._raw = False
        self._chars.append(self.line[start + 1:end])
        self.pos = end + 1

    def _read_double_quoted(self):
        line = self.line
        start = self.pos
        self._start_word()
        self._raw = False
        self.pos += 1
        while True:
            if self.pos >= len(line):
                raise UnmatchedQuoteError(line, '"', position=start)
            char = line[self.pos]
            if char == '"':
                self.pos += 1
                return
            if char == '\\' and self.pos + 1 < len(line) and line[self.pos + 1] in DOUBLE_QUOTE_ESCAPABLE:
                escaped = line[self.pos + 1]
                if escaped != '\n':
                    self._chars.append(escaped)
                self.pos += 2
                continue
            self._chars.append(char)
            self.pos += 1

    def _read_escape(self):
        self._start_word()
        self._raw = False
        if self.pos + 1 < len(self.line):
            escaped = self.line[self.pos + 1]
            if escaped != '\n':
                self._chars.append(escaped)
        self.pos += 2

    def _read_redirect(self):
        pending = ''.join(self._chars)
        if self._in_word and self._raw and pending in FD_PREFIXES:
            operator = pending + '>'
            start = self._word_start
            self._reset_word()
        else:
            self._flush_word()
            operator = '>'
            start = self.pos
        self.pos += 1
        if self.pos < len(self.line) and self.line[self.pos] == '>':
            operator += '>'
            self.pos += 1
        self.tokens.append(Token(TokenType.REDIRECT, operator, start))
        self._reset_word()


def tokenize(line: str) -> ParsedCommand:
    """
    Tokenize a command line into argv and a redirection spec.

    Args:
        line: Raw input line

    Returns:
        ParsedCommand with the unescaped argv and redirections

    Raises:
        UnmatchedQuoteError: Unterminated ' or "
        MissingRedirectTargetError: Redirection operator without a target

    Examples:
        >>> tokenize("echo 'foo''bar'baz").argv
        ['echo', 'foobarbaz']
        >>> parsed = tokenize('echo hi > out.txt')
        >>> parsed.argv, parsed.redirections.stdout.path
        (['echo', 'hi'], 'out.txt')
    """
    tokens = ShellLexer(line).tokenize()
    parsed = ParsedCommand()

    i = 0
    while tokens[i].type is not TokenType.EOF:
        token = tokens[i]
        if token.type is TokenType.REDIRECT:
            target = tokens[i + 1]
            if target.type is not TokenType.WORD:
                unexpected = 'newline' if target.type is TokenType.EOF else target.value
                raise MissingRedirectTargetError(line, unexpected, position=target.position)
            parsed.redirections.add(token.value, target.value)
            i += 2
            continue
        parsed.argv.append(token.value)
        i += 1

    logger.debug("tokenized {!r} -> argv={} redirections={}", line, parsed.argv, parsed.redirections)
    return parsed
