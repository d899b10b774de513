"""
Trace records produced by a simulation run.

Every reference yields one StepRecord holding a full snapshot of the slots
after the decision was applied, so any step can be inspected on its own
without replaying the ones before it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, NamedTuple, Optional, Tuple


@dataclass(frozen=True)
class ClockState:
    """Reference bits and hand position of the CLOCK engine after a step."""

    ref_bits: Tuple[int, ...]
    hand: int
    scans: int = 0  # hand inspections spent choosing a victim


@dataclass(frozen=True)
class StepRecord:
    """
    Outcome of a single reference.

    Attributes:
        index: Position of the reference in the sequence (0-based)
        page: The requested entry
        slots: Slot contents after the step, None marks an empty slot
        hit: True if the entry was already resident
        evicted: Entry displaced by this step, or None
        evicted_slot: Slot the evicted entry occupied, or None
        note: Human-readable rationale for the decision
        aux: Policy-specific state after the step (CLOCK only)
    """

    index: int
    page: Hashable
    slots: Tuple[Optional[Hashable], ...]
    hit: bool
    evicted: Optional[Hashable] = None
    evicted_slot: Optional[int] = None
    note: str = ""
    aux: Optional[ClockState] = None

    @property
    def fault(self) -> bool:
        return not self.hit

    @property
    def inserted_slot(self) -> int:
        """Slot holding the requested entry once the step has been applied."""
        return self.slots.index(self.page)

    def to_dict(self) -> Dict[str, Any]:
        """Return the record as plain data (lists, ints, strings)."""
        data = {
            'index': self.index,
            'page': self.page,
            'slots': list(self.slots),
            'hit': self.hit,
            'fault': self.fault,
            'evicted': self.evicted,
            'evicted_slot': self.evicted_slot,
            'note': self.note,
            'aux': None,
        }
        if self.aux is not None:
            data['aux'] = {
                'ref_bits': list(self.aux.ref_bits),
                'hand': self.aux.hand,
                'scans': self.aux.scans,
            }
        return data


@dataclass(frozen=True)
class Summary:
    """Aggregate hit/fault counts of one run."""

    hits: int
    faults: int

    @property
    def total(self) -> int:
        return self.hits + self.faults

    @property
    def hit_ratio(self) -> float:
        return self.hits / self.total if self.total else 0.0

    @property
    def fault_ratio(self) -> float:
        return self.faults / self.total if self.total else 0.0


class SimulationResult(NamedTuple):
    """
    Complete trace and summary of a run.

    Unpacks as ``trace, summary = simulate(...)``.
    """

    trace: Tuple[StepRecord, ...]
    summary: Summary
