"""
Command Parser Module

Splits an input line into a command name and its arguments.

Tokens are separated by runs of whitespace. There is no quoting, no
escaping and no operator syntax: `echo "a b"` yields the two arguments
`"a` and `b"`.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class CommandLine:
    """A single tokenized input line."""
    raw: str
    text: str = ""
    tokens: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    @property
    def name(self) -> Optional[str]:
        """The command name, or None for a blank line."""
        return self.tokens[0] if self.tokens else None

    @property
    def args(self) -> Tuple[str, ...]:
        return self.tokens[1:]


class CommandParser:
    """
    Parses shell command lines.

    Example:
        >>> parser = CommandParser()
        >>> line = parser.parse("echo   a   b\\n")
        >>> line.name, line.args
        ('echo', ('a', 'b'))
    """

    def parse(self, line: str) -> CommandLine:
        """
        Parse a command line.

        Args:
            line: Raw line as read, trailing newline included

        Returns:
            CommandLine; blank lines produce an empty token sequence
        """
        text = line.strip()
        return CommandLine(raw=line, text=text, tokens=tuple(text.split()))
