"""
Replacement engines: FIFO, LRU, OPT and CLOCK.

Every engine follows the same per-reference decision shape:

1. Hit:   the entry is resident. Update the policy's bookkeeping, evict nothing.
2. Fault: the entry is not resident.
   a. An empty slot exists: insert into the lowest-indexed empty slot.
   b. The table is full: pick a victim slot by the policy's rule, evict its
      occupant and insert the new entry there.

Only the victim rule (2b) and the bookkeeping differ between policies, so the
shape lives in Engine.step() and each subclass carries just the state its own
algorithm needs:

- FIFO:  circular pointer, advanced only on eviction
- LRU:   entry -> index of its most recent reference
- OPT:   nothing; rescans the remaining references on every full-table fault
- CLOCK: one reference bit per slot plus a circular hand

Ties in LRU and OPT go to the lowest slot index, because slots are scanned in
ascending order and a candidate only replaces the current best when it is
strictly better.
"""

import logging
import math
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

from .errors import InternalInvariantViolation
from .slots import SlotTable
from .trace import ClockState, SimulationResult, StepRecord, Summary

logger = logging.getLogger(__name__)

POLICIES: Dict[str, Tuple[type, str]] = {}  # name -> (engine class, description)

POLICY_ORDER = ("FIFO", "LRU", "OPT", "CLOCK")


def register(name: str, desc: str = ""):
    """Decorator to register an engine under its canonical name."""
    def decorator(cls):
        cls.name = name.upper()
        POLICIES[cls.name] = (cls, desc)
        return cls
    return decorator


def available_policies() -> List[Tuple[str, str]]:
    """Return (name, description) pairs in comparison order."""
    return [(name, POLICIES[name][1]) for name in POLICY_ORDER]


class Engine:
    """
    One simulation run of a replacement policy.

    An engine is built for a single (capacity, references) pair, consumed by
    run() and then thrown away. Inputs are assumed valid; see core.simulate().
    """

    __slots__ = ('capacity', 'references', 'table')

    name = ""

    def __init__(self, capacity: int, references: Sequence[Hashable]):
        self.capacity = capacity
        self.references = references
        self.table = SlotTable(capacity)

    def run(self) -> SimulationResult:
        """Process every reference in order and return the full trace."""
        trace = []
        hits = 0
        for i, page in enumerate(self.references):
            record = self.step(i, page)
            if record.hit:
                hits += 1
            trace.append(record)
        return SimulationResult(tuple(trace), Summary(hits, len(trace) - hits))

    def step(self, i: int, page: Hashable) -> StepRecord:
        """Apply reference ``i`` and return its record."""
        slot = self.table.find(page)
        if slot is not None:
            self.on_hit(i, page, slot)
            return self._record(i, page, True, self.hit_note(i, page, slot))

        empty = self.table.first_empty()
        if empty is not None:
            self.table.put(empty, page)
            self.on_insert(i, page, empty)
            return self._record(
                i, page, False,
                f"FAULT: empty slot {empty} used, inserted {page}."
            )

        victim, reason = self.choose_victim(i)
        evicted = self.table.put(victim, page)
        self.on_evict(evicted)
        self.on_insert(i, page, victim)
        return self._record(
            i, page, False,
            f"FAULT: {self.name} replaced {evicted} in slot {victim} ({reason}).",
            evicted=evicted,
            evicted_slot=victim,
        )

    def _record(self, i, page, hit, note, evicted=None, evicted_slot=None):
        return StepRecord(
            index=i,
            page=page,
            slots=self.table.snapshot(),
            hit=hit,
            evicted=evicted,
            evicted_slot=evicted_slot,
            note=note,
            aux=self.aux(),
        )

    # Hooks. Subclasses override the ones their algorithm needs.

    def hit_note(self, i: int, page: Hashable, slot: int) -> str:
        return f"HIT: {page} already resident in slot {slot}."

    def on_hit(self, i: int, page: Hashable, slot: int) -> None:
        pass

    def on_insert(self, i: int, page: Hashable, slot: int) -> None:
        pass

    def on_evict(self, page: Hashable) -> None:
        pass

    def choose_victim(self, i: int) -> Tuple[int, str]:
        """Return (victim slot, reason) for a fault on a full table."""
        raise NotImplementedError

    def aux(self) -> Optional[ClockState]:
        return None


@register("FIFO", "First-In-First-Out - evict in insertion order")
class FIFO(Engine):
    """Evicts the slot under a circular pointer; hits never touch it."""

    __slots__ = ('pointer',)

    def __init__(self, capacity, references):
        super().__init__(capacity, references)
        self.pointer = 0

    def choose_victim(self, i):
        victim = self.pointer
        self.pointer = (self.pointer + 1) % self.capacity
        return victim, "oldest resident"


@register("LRU", "Least Recently Used - evict the stalest reference")
class LRU(Engine):
    """Tracks the index of each resident entry's latest reference."""

    __slots__ = ('last_used',)

    def __init__(self, capacity, references):
        super().__init__(capacity, references)
        self.last_used: Dict[Hashable, int] = {}

    def hit_note(self, i, page, slot):
        return f"HIT: {page} found in slot {slot}, last use updated to step {i}."

    def on_hit(self, i, page, slot):
        self.last_used[page] = i

    def on_insert(self, i, page, slot):
        self.last_used[page] = i

    def on_evict(self, page):
        del self.last_used[page]

    def choose_victim(self, i):
        victim = 0
        oldest = math.inf
        for slot, page in enumerate(self.table):
            stamp = self.last_used[page]
            if stamp < oldest:
                oldest = stamp
                victim = slot
        return victim, f"least recently used at step {oldest}"


@register("OPT", "Belady's optimal - evict the entry needed farthest ahead")
class OPT(Engine):
    """
    Looks ahead through the remaining references on every full-table fault.

    Costs O(capacity * remaining) per eviction.
    """

    __slots__ = ()

    def next_use(self, page: Hashable, i: int) -> float:
        """Index of the first reference to ``page`` after ``i``, or inf."""
        for j in range(i + 1, len(self.references)):
            ref = self.references[j]
            if ref is page or ref == page:
                return j
        return math.inf

    def choose_victim(self, i):
        victim = 0
        farthest = -1
        for slot, page in enumerate(self.table):
            upcoming = self.next_use(page, i)
            if upcoming > farthest:
                farthest = upcoming
                victim = slot
        if farthest == math.inf:
            return victim, "not used again"
        return victim, f"used farthest in future at step {farthest}"


@register("CLOCK", "Second chance - reference bits swept by a circular hand")
class CLOCK(Engine):
    """
    Approximates LRU with one reference bit per slot.

    A full-table fault sweeps the hand forward, clearing set bits, until it
    lands on a clear bit. Every inspected set bit is cleared before the hand
    moves on, so a victim turns up within two revolutions; going further means
    the engine is broken.
    """

    __slots__ = ('ref_bits', 'hand', 'scans')

    def __init__(self, capacity, references):
        super().__init__(capacity, references)
        self.ref_bits = [0] * capacity
        self.hand = 0
        self.scans = 0

    def step(self, i, page):
        self.scans = 0
        return super().step(i, page)

    def hit_note(self, i, page, slot):
        return f"HIT: {page} found in slot {slot}, reference bit set to 1."

    def on_hit(self, i, page, slot):
        self.ref_bits[slot] = 1

    def on_insert(self, i, page, slot):
        self.ref_bits[slot] = 1

    def choose_victim(self, i):
        limit = 2 * self.capacity
        while self.scans < limit:
            self.scans += 1
            slot = self.hand
            self.hand = (self.hand + 1) % self.capacity
            if self.ref_bits[slot] == 0:
                return slot, f"reference bit 0 after {self.scans} scan(s)"
            # second chance
            self.ref_bits[slot] = 0

        logger.error(
            "CLOCK sweep found no victim after %d scans at step %d (bits=%s)",
            self.scans, i, self.ref_bits,
        )
        raise InternalInvariantViolation(
            f"CLOCK sweep exceeded {limit} scans at step {i}"
        )

    def aux(self):
        return ClockState(tuple(self.ref_bits), self.hand, self.scans)
