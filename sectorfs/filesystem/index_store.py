"""
Index Store Module

Persists the ordered mapping from virtual path to sector id.

The index is a line-oriented text file with one ``<path>/<sector>``
line per record. The sector id is everything after the *last* slash
of the line, so paths may themselves contain slashes. Every operation
opens and closes the file; no handle is kept between calls.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from sectorfs.exceptions import CannotOpenIndex, IndexFormatError, VfsInitFailed
from sectorfs.logger import get_logger


@dataclass(frozen=True, order=True)
class SectorId:
    """
    Identifier of a physical sector.

    Held as an integer; the decimal text form only appears in the
    index file and in sector file names.
    """

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Sector id must be an int, got {type(self.value).__name__}")
        if self.value < 0:
            raise ValueError(f"Sector id cannot be negative: {self.value}")

    @classmethod
    def parse(cls, text: str) -> 'SectorId':
        """
        Parse the canonical decimal form of a sector id.

        Leading zeros, signs and whitespace are rejected so that two
        ids are equal exactly when their stored texts are equal.

        Raises:
            ValueError: If ``text`` is not a canonical decimal
        """
        if not text or not (text.isascii() and text.isdigit()):
            raise ValueError(f"Not a sector id: {text!r}")
        if len(text) > 1 and text[0] == '0':
            raise ValueError(f"Sector id has leading zeros: {text!r}")
        return cls(int(text))

    def next(self) -> 'SectorId':
        return SectorId(self.value + 1)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class IndexRecord:
    """A single path to sector mapping."""

    path: str
    sector_id: SectorId

    def to_line(self) -> str:
        """Render the record without its line terminator."""
        return f"{self.path}/{self.sector_id}"

    @classmethod
    def from_line(cls, line: str) -> 'IndexRecord':
        """
        Parse one index line (without terminator).

        Raises:
            ValueError: If the line has no slash or no valid sector id
        """
        path, separator, sector = line.rpartition('/')
        if not separator:
            raise ValueError("expected <path>/<sector>")
        try:
            sector_id = SectorId.parse(sector)
        except ValueError as e:
            raise ValueError(f"invalid sector id {sector!r}") from e
        return cls(path=path, sector_id=sector_id)


class IndexStore:
    """
    Owner of the persisted index file.

    Example:
        >>> store = IndexStore(Path('/media/sd/index.txt'))
        >>> store.append(IndexRecord('/a.txt', SectorId(0)))
        >>> store.load()
        [IndexRecord(path='/a.txt', sector_id=SectorId(value=0))]
    """

    def __init__(self, index_path: Path, line_terminator: str = '\n'):
        self._index_path = Path(index_path)
        self._line_terminator = line_terminator
        self._logger = get_logger('index')

    @property
    def index_path(self) -> Path:
        return self._index_path

    def exists(self) -> bool:
        """Check whether the index file is present."""
        return self._index_path.is_file()

    def initialize(self) -> bool:
        """
        Create the index file if it is absent.

        Returns:
            True if the file was created, False if it already existed

        Raises:
            VfsInitFailed: If the file cannot be created
        """
        if self.exists():
            return False

        try:
            with open(self._index_path, 'a', encoding='utf-8'):
                pass
        except OSError as e:
            raise VfsInitFailed(str(self._index_path), reason=e.strerror) from e

        self._logger.info("Created index file", context={'index': str(self._index_path)})
        return True

    def load(self) -> List[IndexRecord]:
        """
        Read every record in stored order.

        Lines end at ``\\n`` only; a ``\\r`` before it is part of the
        terminator, a ``\\r`` anywhere else belongs to the path.

        Raises:
            CannotOpenIndex: If the file is missing or unreadable
            IndexFormatError: If a non-blank line cannot be parsed
        """
        try:
            with open(self._index_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise CannotOpenIndex(str(self._index_path), mode="read") from e

        records: List[IndexRecord] = []

        for line_number, raw_line in enumerate(data.split(b'\n'), start=1):
            if raw_line.endswith(b'\r'):
                raw_line = raw_line[:-1]
            if not raw_line:
                continue
            try:
                line = raw_line.decode('utf-8')
                records.append(IndexRecord.from_line(line))
            except ValueError as e:
                # UnicodeDecodeError included
                raise IndexFormatError(
                    str(self._index_path),
                    line_number=line_number,
                    line=raw_line.decode('utf-8', errors='replace'),
                    reason=str(e)
                ) from e

        return records

    def append(self, record: IndexRecord) -> None:
        """
        Add one record at the end of the index.

        Raises:
            CannotOpenIndex: If the file cannot be opened for append
        """
        try:
            with open(self._index_path, 'a', encoding='utf-8', newline='') as f:
                f.write(record.to_line() + self._line_terminator)
        except OSError as e:
            raise CannotOpenIndex(str(self._index_path), mode="append") from e

        self._logger.debug(
            "Appended record",
            context={'path': record.path, 'sector': str(record.sector_id)}
        )

    def rewrite(self, records: Iterable[IndexRecord]) -> None:
        """
        Replace the whole index with ``records``, in the given order.

        Raises:
            CannotOpenIndex: If the file cannot be opened for writing
        """
        lines = [record.to_line() + self._line_terminator for record in records]

        try:
            with open(self._index_path, 'w', encoding='utf-8', newline='') as f:
                f.writelines(lines)
        except OSError as e:
            raise CannotOpenIndex(str(self._index_path), mode="rewrite") from e

        self._logger.debug("Rewrote index", context={'records': len(lines)})

    def ensure_appendable(self) -> None:
        """
        Check that the index can be opened for append.

        Raises:
            CannotOpenIndex: If it cannot
        """
        try:
            with open(self._index_path, 'a', encoding='utf-8'):
                pass
        except OSError as e:
            raise CannotOpenIndex(str(self._index_path), mode="append") from e
