"""
SectorFS - A virtual file system for sector-addressed storage

Named, hierarchical paths on top of a medium that can only open
files by a small integer id, with a text index mapping one to the
other. Implemented in Python 3.10+ using only the standard library.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

# Import main components for convenience
from .filesystem.vfs import VfsService
from .core.bootloader import Bootloader, boot_system
from .shell.shell import Shell, create_shell

__all__ = [
    'VfsService',
    'Bootloader',
    'boot_system',
    'Shell',
    'create_shell',
]
