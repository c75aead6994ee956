"""
Virtual File System (VFS) Module

Hierarchical named files on top of a medium that only addresses
numbered sectors:
- Path lookups through the index
- Sector allocation on create
- Create, read, write and delete of virtual files
- Directory listing reconstructed from path prefixes

The index file is the single source of truth: every operation
re-reads it and nothing is cached between calls.

Author: YSNRFD
Version: 1.0.0
"""

import threading
from pathlib import Path
from typing import Optional, List

from .allocator import AllocationPolicy, SectorAllocator
from .index_store import IndexRecord, IndexStore, SectorId
from .medium import SectorMedium
from .path_resolver import PathResolver
from sectorfs.core.config_loader import Config, get_config
from sectorfs.exceptions import FileAlreadyExists, FileNotFound, InvalidPathError
from sectorfs.logger import get_logger


class VfsService:
    """
    Virtual file operations over one index and one sector medium.

    All public operations hold a re-entrant lock for their whole
    duration, so a single instance may be shared between threads.
    Separate instances (or processes) on the same medium are not
    coordinated.

    Example:
        >>> vfs = VfsService.from_config()
        >>> vfs.write('/logs/run.txt', 'hello')
        >>> vfs.read('/logs/run.txt')
        'hello\\n'
    """

    def __init__(
        self,
        medium: SectorMedium,
        store: Optional[IndexStore] = None,
        allocator: Optional[SectorAllocator] = None
    ):
        self._medium = medium
        self._store = store or IndexStore(medium.index_path, medium.line_terminator)
        self._allocator = allocator or SectorAllocator()
        self._lock = threading.RLock()
        self._logger = get_logger('vfs')

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'VfsService':
        """Build a service from the storage section of ``config``."""
        config = config or get_config()
        storage = config.storage
        medium = SectorMedium(
            Path(storage.root_path),
            index_file=storage.index_file,
            line_terminator=storage.line_terminator
        )
        allocator = SectorAllocator(AllocationPolicy(storage.allocation_policy))
        return cls(medium, allocator=allocator)

    @property
    def medium(self) -> SectorMedium:
        return self._medium

    @property
    def store(self) -> IndexStore:
        return self._store

    # Lookups

    @staticmethod
    def _find(records: List[IndexRecord], path: str) -> Optional[SectorId]:
        for record in records:
            if record.path == path:
                return record.sector_id
        return None

    def sector_of(self, path: str) -> Optional[SectorId]:
        """
        Get the sector a file is stored in.

        Returns:
            The sector id, or None if the path is not indexed
        """
        resolved = PathResolver.normalize(path)
        with self._lock:
            sector_id = self._find(self._store.load(), resolved)

        if sector_id is None:
            self._logger.debug("File not found", context={'path': resolved})
        return sector_id

    def exists(self, path: str) -> bool:
        """Check if a path is indexed."""
        resolved = PathResolver.normalize(path)
        with self._lock:
            return self._find(self._store.load(), resolved) is not None

    def is_directory(self, path: str) -> bool:
        """Check if a path names a directory (ends with a slash)."""
        return PathResolver.is_directory(path)

    def list(self, directory: str, recursive: bool = False) -> List[str]:
        """
        List the entries under a directory.

        Every indexed path containing ``directory`` contributes the
        text after the first occurrence of it. Without ``recursive``,
        anything below a sub-directory is folded into a single
        ``name/`` entry. Entries are unique and keep index order.

        Args:
            directory: Directory path
            recursive: List every descendant instead of folding

        Returns:
            List of entry names relative to ``directory``
        """
        resolved = PathResolver.normalize(directory)
        with self._lock:
            records = self._store.load()

        entries: List[str] = []
        seen = set()
        for record in records:
            position = record.path.find(resolved)
            if position < 0:
                continue

            name = record.path[position + len(resolved):]
            if not recursive and '/' in name:
                name = name[:name.index('/')] + '/'

            if name not in seen:
                seen.add(name)
                entries.append(name)

        return entries

    # Mutations

    def create(self, path: str, overwrite: bool = True) -> SectorId:
        """
        Create an empty file.

        Args:
            path: Path for the new file
            overwrite: Replace an existing file instead of failing

        Returns:
            Sector id the file was allocated

        Raises:
            CannotOpenIndex: If the index cannot be opened
            FileAlreadyExists: If the file exists and overwrite is False
            CannotOpenFile: If the sector cannot be created
            InvalidPathError: If the path cannot be stored in the index
        """
        resolved = PathResolver.normalize(path)
        self._check_storable(resolved)

        with self._lock:
            self._store.ensure_appendable()

            if self.exists(resolved):
                if not overwrite:
                    raise FileAlreadyExists(resolved)
                self.delete(resolved)

            sector_id = self._allocator.allocate(self._store.load())
            # Sector first, so a failure leaves nothing indexed
            self._medium.truncate(sector_id, path=resolved)
            self._store.append(IndexRecord(path=resolved, sector_id=sector_id))

        self._logger.debug(
            "Created file",
            context={'path': resolved, 'sector': str(sector_id)}
        )
        return sector_id

    def delete(self, path: str) -> None:
        """
        Delete a file.

        The sector is emptied rather than removed and becomes free
        for the next allocation.

        Raises:
            FileNotFound: If the path is not indexed
            CannotOpenFile: If the sector cannot be emptied
            CannotOpenIndex: If the index cannot be rewritten
        """
        resolved = PathResolver.normalize(path)

        with self._lock:
            records = self._store.load()
            sector_id = self._find(records, resolved)
            if sector_id is None:
                raise FileNotFound(resolved)

            self._medium.truncate(sector_id, path=resolved)
            self._store.rewrite(r for r in records if r.path != resolved)

        self._logger.debug(
            "Deleted file",
            context={'path': resolved, 'sector': str(sector_id)}
        )

    def write(self, path: str, data: str) -> SectorId:
        """
        Replace the contents of a file, creating it if needed.

        ``data`` is split on newlines; each line is stored with the
        medium's terminator.

        Returns:
            Sector id the data was written to

        Raises:
            CannotOpenFile: If the sector cannot be opened
            CannotOpenIndex: If the file had to be created and the
                index cannot be opened
            InvalidPathError: If the file had to be created and the
                path cannot be stored in the index
        """
        resolved = PathResolver.normalize(path)

        with self._lock:
            sector_id = self._find(self._store.load(), resolved)
            if sector_id is None:
                sector_id = self.create(resolved)

            lines = self._split_lines(data)
            self._medium.write_lines(sector_id, lines, path=resolved)

        self._logger.debug(
            "Wrote file",
            context={'path': resolved, 'sector': str(sector_id), 'lines': len(lines)}
        )
        return sector_id

    def read(self, path: str) -> str:
        """
        Read a file.

        Every line comes back terminated by ``\\n``, including the
        last one, whatever the original data ended with.

        Raises:
            FileNotFound: If the path is not indexed
            CannotOpenFile: If the sector cannot be opened
        """
        resolved = PathResolver.normalize(path)

        with self._lock:
            sector_id = self._find(self._store.load(), resolved)
            if sector_id is None:
                raise FileNotFound(resolved)
            lines = self._medium.read_lines(sector_id, path=resolved)

        return ''.join(line + '\n' for line in lines)

    @staticmethod
    def _check_storable(path: str) -> None:
        if '\n' in path:
            raise InvalidPathError(path, reason='contains a line break')
        try:
            path.encode('utf-8')
        except UnicodeEncodeError as e:
            raise InvalidPathError(path, reason='not encodable as UTF-8') from e

    @staticmethod
    def _split_lines(data: str) -> List[str]:
        """Split text the way a line reader would, dropping CRs."""
        if not data:
            return []

        lines = data.split('\n')
        if lines[-1] == '':
            lines.pop()

        return [line[:-1] if line.endswith('\r') else line for line in lines]

    def get_stats(self) -> dict:
        """Get index statistics."""
        with self._lock:
            records = self._store.load()

        sectors = {record.sector_id for record in records}
        return {
            'files': len(records),
            'distinct_sectors': len(sectors),
            'highest_sector': str(max(sectors)) if sectors else None,
            'allocation_policy': self._allocator.policy.value,
            'index': str(self._store.index_path),
        }
