"""
Shell Built-in Commands

Implements the interpreter commands on top of the virtual file
operations.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Callable, List

from sectorfs.exceptions import VfsException


class BuiltinCommands:
    """
    Built-in interpreter commands.

    Every command takes the argument list and returns an exit code.
    File system errors are printed as ``<command>: <error>`` and
    reported with exit code 1.
    """

    def __init__(self, shell):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._commands: dict[str, Callable[[List[str]], int]] = {
            'help': self.cmd_help,
            'exit': self.cmd_exit,
            'quit': self.cmd_exit,
            'ls': self.cmd_ls,
            'cat': self.cmd_cat,
            'touch': self.cmd_touch,
            'write': self.cmd_write,
            'rm': self.cmd_rm,
            'exists': self.cmd_exists,
            'sector': self.cmd_sector,
            'isdir': self.cmd_isdir,
            'stats': self.cmd_stats,
            'history': self.cmd_history,
        }

    def get_commands(self) -> dict[str, Callable[[List[str]], int]]:
        """Get all built-in commands."""
        return self._commands

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, name: str, args: List[str]) -> int:
        """
        Execute a built-in command.

        Returns:
            Exit code, 127 if the command is unknown
        """
        cmd = self._commands.get(name)
        if cmd is None:
            return 127

        try:
            return cmd(args)
        except VfsException as e:
            self._shell.logger.debug(f"{name} failed", context={'error': e.message})
            print(f"{name}: {e}")
            return 1

    @property
    def _vfs(self):
        return self._shell.vfs

    # Command implementations

    def cmd_help(self, args: List[str]) -> int:
        """Display help information."""
        help_text = """
SectorFS Interpreter - Commands

Files:
  ls [-r] [dir]          List a directory (-r lists every descendant)
  cat <path>             Display file contents
  touch [-n] <path>...   Create empty files (-n refuses to overwrite)
  write <path> <text>    Replace file contents (\\n starts a new line)
  rm <path>...           Delete files

Lookups:
  exists <path>          Print whether a file exists
  sector <path>          Print the sector a file is stored in
  isdir <path>           Print whether a path names a directory
  stats                  Display index statistics

Interpreter:
  help                   Display this help
  history                Display command history
  exit                   Exit the interpreter
"""
        print(help_text)
        return 0

    def cmd_exit(self, args: List[str]) -> int:
        """Exit the interpreter."""
        self._shell.request_exit()
        return 0

    def cmd_ls(self, args: List[str]) -> int:
        """List directory contents."""
        recursive = '-r' in args
        paths = [arg for arg in args if arg != '-r']
        directory = paths[0] if paths else '/'

        for entry in self._vfs.list(directory, recursive=recursive):
            print(entry)
        return 0

    def cmd_cat(self, args: List[str]) -> int:
        """Display file contents."""
        if not args:
            print("cat: missing file operand")
            return 1

        for path in args:
            print(self._vfs.read(path), end='')
        return 0

    def cmd_touch(self, args: List[str]) -> int:
        """Create empty files."""
        overwrite = '-n' not in args
        paths = [arg for arg in args if arg != '-n']
        if not paths:
            print("touch: missing file operand")
            return 1

        for path in paths:
            sector_id = self._vfs.create(path, overwrite=overwrite)
            print(sector_id)
        return 0

    def cmd_write(self, args: List[str]) -> int:
        """Replace the contents of a file."""
        if not args:
            print("write: missing file operand")
            return 1

        text = ' '.join(args[1:]).replace('\\n', '\n')
        print(self._vfs.write(args[0], text))
        return 0

    def cmd_rm(self, args: List[str]) -> int:
        """Delete files."""
        if not args:
            print("rm: missing operand")
            return 1

        for path in args:
            self._vfs.delete(path)
        return 0

    def cmd_exists(self, args: List[str]) -> int:
        """Print whether a file exists."""
        if not args:
            print("exists: missing operand")
            return 1

        print('true' if self._vfs.exists(args[0]) else 'false')
        return 0

    def cmd_sector(self, args: List[str]) -> int:
        """Print the sector of a file."""
        if not args:
            print("sector: missing operand")
            return 1

        sector_id = self._vfs.sector_of(args[0])
        if sector_id is None:
            print(f"sector: {args[0]}: not found")
            return 1

        print(sector_id)
        return 0

    def cmd_isdir(self, args: List[str]) -> int:
        """Print whether a path names a directory."""
        if not args:
            print("isdir: missing operand")
            return 1

        print('true' if self._vfs.is_directory(args[0]) else 'false')
        return 0

    def cmd_stats(self, args: List[str]) -> int:
        """Display index statistics."""
        for key, value in self._vfs.get_stats().items():
            print(f"{key}: {value}")
        return 0

    def cmd_history(self, args: List[str]) -> int:
        """Display command history."""
        for number, line in enumerate(self._shell.parser.get_history(), start=1):
            print(f"{number:5d}  {line}")
        return 0
