"""
Sector Allocator Module

Chooses the sector id for a newly created file from the current
index contents.

Two policies are available:

- ``scan``: one pass over the records in stored order, bumping a
  candidate id every time a record holds exactly the candidate. This
  yields the smallest free id only when the index happens to be in
  ascending sector order; after out-of-order deletes it can return an
  id that is still in use further down the index. It is the default
  because existing media were populated with it.
- ``first_gap``: the smallest non-negative id held by no record.

Author: YSNRFD
Version: 1.0.0
"""

from enum import Enum
from typing import Iterable

from .index_store import IndexRecord, SectorId


class AllocationPolicy(Enum):
    """Sector allocation strategies."""
    SCAN = "scan"
    FIRST_GAP = "first_gap"


class SectorAllocator:
    """
    Computes the next sector id for an index.

    Example:
        >>> allocator = SectorAllocator()
        >>> str(allocator.allocate([]))
        '0'
    """

    def __init__(self, policy: AllocationPolicy = AllocationPolicy.SCAN):
        self._policy = AllocationPolicy(policy)

    @property
    def policy(self) -> AllocationPolicy:
        return self._policy

    def allocate(self, records: Iterable[IndexRecord]) -> SectorId:
        """
        Pick a sector id for a new record.

        Args:
            records: Index records in stored order

        Returns:
            The allocated sector id
        """
        if self._policy is AllocationPolicy.FIRST_GAP:
            return self._allocate_first_gap(records)
        return self._allocate_scan(records)

    @staticmethod
    def _allocate_scan(records: Iterable[IndexRecord]) -> SectorId:
        candidate = SectorId(0)
        for record in records:
            if record.sector_id == candidate:
                candidate = candidate.next()
        return candidate

    @staticmethod
    def _allocate_first_gap(records: Iterable[IndexRecord]) -> SectorId:
        used = sorted({record.sector_id.value for record in records})
        candidate = 0
        for value in used:
            if value != candidate:
                break
            candidate += 1
        return SectorId(candidate)
