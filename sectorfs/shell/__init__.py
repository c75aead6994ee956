"""
SectorFS Shell Module

Interactive command interpreter:
- Command parsing
- Built-in file commands
- REPL loop
"""

from .parser import CommandParser, ParsedCommand
from .builtins import BuiltinCommands
from .shell import Shell, create_shell

__all__ = [
    'CommandParser',
    'ParsedCommand',
    'BuiltinCommands',
    'Shell',
    'create_shell',
]
