"""
SectorFS Virtual File System Module

Provides named, hierarchical files on a sector-addressed medium:
- Path normalization
- Index persistence
- Sector allocation
- File operations
"""

from .path_resolver import PathResolver
from .index_store import IndexStore, IndexRecord, SectorId
from .allocator import SectorAllocator, AllocationPolicy
from .medium import SectorMedium
from .vfs import VfsService

__all__ = [
    # Paths
    'PathResolver',
    # Index
    'IndexStore',
    'IndexRecord',
    'SectorId',
    # Allocation
    'SectorAllocator',
    'AllocationPolicy',
    # Medium
    'SectorMedium',
    # VFS
    'VfsService',
]
