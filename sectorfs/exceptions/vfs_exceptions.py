"""
Virtual File System Exceptions

Exceptions raised by the index store, the sector medium and the
virtual file operations built on top of them.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class VfsException(Exception):
    """
    Base exception for all virtual file system errors.

    Attributes:
        message: Human-readable error description
        path: Virtual path or host path associated with the error
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 2000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base


class VfsInitFailed(VfsException):
    """
    The index resource could not be created during initialization.

    Example:
        >>> raise VfsInitFailed("/media/sd/index.txt", reason="read-only")
    """

    def __init__(
        self,
        index_path: str,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"Could not initialize index: {index_path}",
            path=index_path,
            error_code=2001,
            context=ctx
        )
        self.reason = reason


class CannotOpenIndex(VfsException):
    """
    The index resource could not be opened.

    Raised on read, append and rewrite of the index file.

    Example:
        >>> raise CannotOpenIndex("index.txt", mode="append")
    """

    def __init__(
        self,
        index_path: str,
        mode: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if mode:
            ctx["mode"] = mode
        super().__init__(
            message=f"Could not open index file: {index_path}",
            path=index_path,
            error_code=2002,
            context=ctx
        )
        self.mode = mode


class CannotOpenFile(VfsException):
    """
    A sector file could not be opened for reading or writing.

    Example:
        >>> raise CannotOpenFile("/logs/run.txt", sector="3", mode="write")
    """

    def __init__(
        self,
        path: str,
        sector: Optional[str] = None,
        mode: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if sector is not None:
            ctx["sector"] = sector
        if mode:
            ctx["mode"] = mode
        super().__init__(
            message=f"Could not open file: {path}",
            path=path,
            error_code=2003,
            context=ctx
        )
        self.sector = sector
        self.mode = mode


class FileNotFound(VfsException):
    """
    The virtual path has no entry in the index.

    Example:
        >>> raise FileNotFound("/path/to/file")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File does not exist: {path}",
            path=path,
            error_code=2004,
            context=context
        )


class FileAlreadyExists(VfsException):
    """
    The virtual path is already indexed and overwriting was refused.

    Example:
        >>> raise FileAlreadyExists("/path/to/file")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"File already exists: {path}",
            path=path,
            error_code=2005,
            context=context
        )


class IndexFormatError(VfsException):
    """
    A line of the index file could not be parsed.

    Example:
        >>> raise IndexFormatError("index.txt", line_number=4, line="garbage")
    """

    def __init__(
        self,
        index_path: str,
        line_number: int,
        line: str,
        reason: str = "expected <path>/<sector>",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx.update({"line_number": line_number, "line": line})
        super().__init__(
            message=f"Malformed index line {line_number}: {reason}",
            path=index_path,
            error_code=2006,
            context=ctx
        )
        self.line_number = line_number
        self.line = line
        self.reason = reason


class MediumUnavailableError(VfsException):
    """
    The storage medium holding the sectors is not available.

    Example:
        >>> raise MediumUnavailableError("/media/sd")
    """

    def __init__(
        self,
        root_path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"Storage medium not available: {root_path}",
            path=root_path,
            error_code=2007,
            context=context
        )


class InvalidPathError(VfsException):
    """
    A path cannot be stored as an index record.

    Example:
        >>> raise InvalidPathError("/a\\nb", reason="contains a line break")
    """

    def __init__(
        self,
        path: str,
        reason: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(
            message=f"Invalid path {path!r}: {reason}",
            error_code=2008,
            context=ctx
        )
        self.path = path
        self.reason = reason
