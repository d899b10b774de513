"""Fixed-capacity slot table shared by every replacement engine."""

from typing import Dict, Hashable, Iterator, Optional, Tuple

from .errors import InternalInvariantViolation


class SlotTable:
    """
    An ordered row of ``capacity`` slots, each empty (None) or holding one entry.

    The table keeps a reverse index from entry to slot so residency checks
    are O(1). Its length is fixed for the lifetime of a run.
    """

    __slots__ = ('_slots', '_where')

    def __init__(self, capacity: int):
        self._slots = [None] * capacity
        self._where: Dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> Optional[Hashable]:
        return self._slots[index]

    def __contains__(self, page: Hashable) -> bool:
        return page in self._where

    def __iter__(self) -> Iterator[Optional[Hashable]]:
        return iter(self._slots)

    @property
    def is_full(self) -> bool:
        return len(self._where) == len(self._slots)

    def find(self, page: Hashable) -> Optional[int]:
        """Return the slot holding ``page``, or None if it is not resident."""
        return self._where.get(page)

    def first_empty(self) -> Optional[int]:
        """Return the lowest-indexed empty slot, or None when full."""
        if self.is_full:
            return None
        return self._slots.index(None)

    def put(self, index: int, page: Hashable) -> Optional[Hashable]:
        """
        Store ``page`` in slot ``index`` and return the previous occupant.

        Raises:
            InternalInvariantViolation: If ``page`` already sits in a slot
        """
        if page in self._where:
            raise InternalInvariantViolation(
                f"entry {page!r} already resident in slot {self._where[page]}"
            )
        previous = self._slots[index]
        if previous is not None:
            del self._where[previous]
        self._slots[index] = page
        self._where[page] = index
        return previous

    def snapshot(self) -> Tuple[Optional[Hashable], ...]:
        return tuple(self._slots)
