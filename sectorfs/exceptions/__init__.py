"""
SectorFS Exception Hierarchy

Architecture:
    BootException (Base)
    ├── BootFailureError
    └── ConfigValidationError

    VfsException (Base)
    ├── VfsInitFailed
    ├── CannotOpenIndex
    ├── CannotOpenFile
    ├── FileNotFound
    ├── FileAlreadyExists
    ├── IndexFormatError
    ├── MediumUnavailableError
    └── InvalidPathError
"""

from .boot_exceptions import (
    BootException,
    BootFailureError,
    ConfigValidationError,
)

from .vfs_exceptions import (
    VfsException,
    VfsInitFailed,
    CannotOpenIndex,
    CannotOpenFile,
    FileNotFound,
    FileAlreadyExists,
    IndexFormatError,
    MediumUnavailableError,
    InvalidPathError,
)

__all__ = [
    # Boot exceptions
    "BootException",
    "BootFailureError",
    "ConfigValidationError",
    # VFS exceptions
    "VfsException",
    "VfsInitFailed",
    "CannotOpenIndex",
    "CannotOpenFile",
    "FileNotFound",
    "FileAlreadyExists",
    "IndexFormatError",
    "MediumUnavailableError",
    "InvalidPathError",
]
