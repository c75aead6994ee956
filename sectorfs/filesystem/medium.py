"""
Sector Medium Module

Access to the host directory that holds the index file and one
file per sector, named by its decimal sector id.

Author: YSNRFD
Version: 1.0.0
"""

import os
from pathlib import Path
from typing import Iterable, List

from sectorfs.exceptions import CannotOpenFile

from .index_store import SectorId


class SectorMedium:
    """
    Raw sector I/O on a host directory.

    Sector files are text; every stored line ends with the medium's
    line terminator.
    """

    def __init__(
        self,
        root_path: Path,
        index_file: str = 'index.txt',
        line_terminator: str = '\n'
    ):
        self._root = Path(root_path)
        self._index_file = index_file
        self._line_terminator = line_terminator

    @property
    def index_path(self) -> Path:
        return self._root / self._index_file

    @property
    def line_terminator(self) -> str:
        return self._line_terminator

    def is_available(self) -> bool:
        """Check that the medium is present and writable."""
        return self._root.is_dir() and os.access(self._root, os.W_OK)

    def sector_path(self, sector_id: SectorId) -> Path:
        return self._root / str(sector_id)

    def truncate(self, sector_id: SectorId, path: str = '') -> None:
        """
        Create the sector file, or empty it if it exists.

        Args:
            sector_id: Sector to truncate
            path: Virtual path, used in error reports

        Raises:
            CannotOpenFile: If the sector file cannot be opened
        """
        self.write_lines(sector_id, [], path=path)

    def write_lines(
        self,
        sector_id: SectorId,
        lines: Iterable[str],
        path: str = ''
    ) -> None:
        """
        Overwrite a sector with ``lines``, each followed by a terminator.

        Raises:
            CannotOpenFile: If the sector file cannot be opened
        """
        target = self.sector_path(sector_id)
        try:
            with open(target, 'w', encoding='utf-8', newline='') as f:
                for line in lines:
                    f.write(line + self._line_terminator)
        except (OSError, UnicodeEncodeError) as e:
            raise CannotOpenFile(
                path or str(target), sector=str(sector_id), mode="write"
            ) from e

    def read_lines(self, sector_id: SectorId, path: str = '') -> List[str]:
        """
        Read a sector as a list of lines without terminators.

        Lines end at ``\\n`` only, so a bare ``\\r`` stays inside its line.

        Raises:
            CannotOpenFile: If the sector file cannot be opened or is
                not valid UTF-8
        """
        target = self.sector_path(sector_id)
        try:
            with open(target, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise CannotOpenFile(
                path or str(target), sector=str(sector_id), mode="read"
            ) from e

        try:
            text = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise CannotOpenFile(
                path or str(target), sector=str(sector_id), mode="decode"
            ) from e

        lines = text.split('\n')
        if lines[-1] == '':
            lines.pop()

        return [line[:-1] if line.endswith('\r') else line for line in lines]
