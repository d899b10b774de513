"""Run every policy over the same input and rank the outcomes."""

from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Tuple

from .core import check_capacity, simulate, validate
from .policies import POLICY_ORDER


@dataclass(frozen=True)
class PolicyComparison:
    """One policy's row in a comparison, ``rank`` starting at 1."""

    policy: str
    hits: int
    faults: int
    hit_ratio: float
    fault_ratio: float
    rank: int = 0


def compare_all(capacity: int,
                references: Iterable[Hashable]) -> List[PolicyComparison]:
    """
    Simulate FIFO, LRU, OPT and CLOCK on identical input.

    Rows are ordered by fewest faults, then most hits. Equal rows keep the
    order of POLICY_ORDER.
    """
    refs = validate(capacity, references)
    total = len(refs)

    rows = []
    for name in POLICY_ORDER:
        summary = simulate(name, capacity, refs).summary
        rows.append((name, summary.hits, summary.faults))

    rows.sort(key=lambda r: (r[2], -r[1]))
    return [
        PolicyComparison(
            policy=name,
            hits=hits,
            faults=faults,
            hit_ratio=hits / total,
            fault_ratio=faults / total,
            rank=rank,
        )
        for rank, (name, hits, faults) in enumerate(rows, 1)
    ]


def fault_curve(policy: str, references: Iterable[Hashable],
                capacities: Iterable[int]) -> Dict[int, int]:
    """Return {capacity: faults} for one policy across several capacities."""
    refs = tuple(references)
    caps = list(capacities)
    for cap in caps:
        check_capacity(cap)
    return {
        cap: simulate(policy, cap, refs).summary.faults
        for cap in sorted(set(caps))
    }


def belady_anomalies(policy: str, references: Iterable[Hashable],
                     capacities: Iterable[int]) -> List[Tuple[int, int]]:
    """
    Find capacity steps where adding slots increased the fault count.

    Returns (smaller, larger) pairs of neighbouring capacities in the sweep.
    Stack policies (LRU, OPT) never produce any; FIFO can.
    """
    curve = fault_curve(policy, references, capacities)
    caps = list(curve)
    return [
        (small, large)
        for small, large in zip(caps, caps[1:])
        if curve[large] > curve[small]
    ]
