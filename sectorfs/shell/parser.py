"""
Command Parser Module

Splits interpreter input lines into a command and its arguments.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Optional, List


@dataclass
class ParsedCommand:
    """A parsed command line."""
    command: str
    args: List[str] = field(default_factory=list)
    raw: str = ""


class CommandParser:
    """
    Parses interpreter command lines.

    Handles:
    - Whitespace separated words
    - Single and double quoted strings
    - Backslash escapes outside single quotes
    - ``#`` comment lines

    Example:
        >>> parser = CommandParser()
        >>> cmd = parser.parse('write /notes.txt "hello world"')
        >>> cmd.args
        ['/notes.txt', 'hello world']
    """

    def __init__(self, history_size: int = 1000):
        self._history: List[str] = []
        self._history_size = history_size

    def parse(self, line: str) -> Optional[ParsedCommand]:
        """
        Parse a command line.

        Args:
            line: Command line string

        Returns:
            ParsedCommand or None if the line is empty or a comment

        Raises:
            ValueError: If a quote is left open
        """
        line = line.strip()

        if not line or line.startswith('#'):
            return None

        self._remember(line)

        words = self._tokenize(line)
        if not words:
            return None

        return ParsedCommand(command=words[0], args=words[1:], raw=line)

    def _remember(self, line: str) -> None:
        if self._history_size == 0:
            return
        self._history.append(line)
        if len(self._history) > self._history_size:
            del self._history[:-self._history_size]

    def _tokenize(self, line: str) -> List[str]:
        """Convert a line into words."""
        words: List[str] = []
        current = ""
        has_word = False
        in_quote = None
        i = 0

        while i < len(line):
            char = line[i]

            if char in ('"', "'") and in_quote is None:
                in_quote = char
                has_word = True
                i += 1
                continue

            if char == in_quote:
                in_quote = None
                i += 1
                continue

            # Escapes are literal inside single quotes; an escaped 'n'
            # is kept as the two characters so commands can expand it
            if char == '\\' and in_quote != "'" and i + 1 < len(line):
                following = line[i + 1]
                current += '\\n' if following == 'n' else following
                has_word = True
                i += 2
                continue

            if in_quote:
                current += char
                i += 1
                continue

            if char.isspace():
                if has_word:
                    words.append(current)
                    current = ""
                    has_word = False
                i += 1
                continue

            current += char
            has_word = True
            i += 1

        if in_quote:
            raise ValueError(f"unterminated {in_quote} quote")

        if has_word:
            words.append(current)

        return words

    def get_history(self) -> List[str]:
        """Get command history."""
        return list(self._history)

    def clear_history(self) -> None:
        """Clear command history."""
        self._history.clear()
