"""
SectorFS Shell Module

The interactive command interpreter for the virtual file system.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional

from .parser import CommandParser
from .builtins import BuiltinCommands
from sectorfs.core.config_loader import get_config
from sectorfs.logger import Logger, get_logger


class Shell:
    """
    Line-oriented interpreter.

    Reads one command per line, runs it against the file system and
    keeps going after errors until ``exit`` or end of input.

    Example:
        >>> shell = Shell(vfs)
        >>> shell.run()
    """

    def __init__(self, vfs=None):
        config = get_config()

        self._vfs = vfs
        self._logger = get_logger('shell')
        self._parser = CommandParser(history_size=config.shell.history_size)
        self._builtins = BuiltinCommands(self)
        self._prompt = config.shell.prompt
        self._running = False
        self._exiting = False

    @property
    def vfs(self):
        return self._vfs

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def logger(self) -> Logger:
        return self._logger

    def run(self) -> None:
        """
        Run the interactive interpreter.

        This is the main REPL loop.
        """
        self._running = True
        self._exiting = False

        print("Type 'help' for a list of commands.")

        while self._running and not self._exiting:
            try:
                try:
                    line = input(self._prompt)
                except EOFError:
                    print()
                    break
                except KeyboardInterrupt:
                    print("^C")
                    continue

                self.execute_line(line)

            except Exception as e:
                self._logger.exception("Shell error", exc=e)
                print(f"shell: error: {e}")

        self._running = False

    def execute_line(self, line: str) -> int:
        """
        Execute a command line.

        Args:
            line: Command line string

        Returns:
            Exit code
        """
        try:
            cmd = self._parser.parse(line)
        except ValueError as e:
            print(f"shell: {e}")
            return 2

        if cmd is None:
            return 0

        if not self._builtins.is_builtin(cmd.command):
            print(f"{cmd.command}: command not found")
            return 127

        if self._vfs is None and cmd.command not in ('help', 'exit', 'quit', 'history'):
            print(f"{cmd.command}: filesystem not available")
            return 1

        return self._builtins.execute(cmd.command, cmd.args)

    def request_exit(self) -> None:
        """Request the interpreter to exit."""
        self._exiting = True

    def run_script(self, script: str) -> int:
        """
        Run a script (multiple commands).

        Args:
            script: Script content

        Returns:
            Last exit code
        """
        exit_code = 0
        self._exiting = False

        for line in script.split('\n'):
            if self._exiting:
                break
            try:
                exit_code = self.execute_line(line)
            except Exception as e:
                self._logger.exception("Script error", exc=e, context={'line': line})
                print(f"shell: error: {e}")
                exit_code = 1

        return exit_code


def create_shell(vfs=None) -> Shell:
    """Factory function to create a shell."""
    return Shell(vfs)
