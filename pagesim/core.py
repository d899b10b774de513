"""
Dispatcher: validates a run's inputs and hands them to one engine.

Usage:
    from pagesim import simulate

    trace, summary = simulate("LRU", 3, [7, 0, 1, 2, 0, 3])
    summary.faults  # -> 5
"""

import logging
from typing import Hashable, Iterable, Tuple

from .errors import (
    EmptyReferenceSequence,
    InvalidCapacity,
    InvalidReference,
    UnknownPolicy,
)
from .policies import POLICIES
from .trace import SimulationResult

logger = logging.getLogger(__name__)

MIN_CAPACITY = 1
MAX_CAPACITY = 50


def resolve_policy(name: str) -> type:
    """Return the engine class registered under exactly ``name``."""
    try:
        return POLICIES[name][0]
    except (KeyError, TypeError):
        raise UnknownPolicy(name) from None


def check_capacity(capacity: int) -> None:
    """Raise InvalidCapacity unless ``capacity`` is an int (not bool) in range."""
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidCapacity(
            f"capacity must be an integer, got {type(capacity).__name__}"
        )
    if not MIN_CAPACITY <= capacity <= MAX_CAPACITY:
        raise InvalidCapacity(
            f"capacity must be between {MIN_CAPACITY} and {MAX_CAPACITY}, "
            f"got {capacity}"
        )


def validate(capacity: int, references: Iterable[Hashable]) -> Tuple[Hashable, ...]:
    """
    Check capacity and references, returning the references as a tuple.

    Args:
        capacity: Number of slots, an int in [MIN_CAPACITY, MAX_CAPACITY]
        references: Non-empty sequence of hashable, non-None entries

    Raises:
        InvalidCapacity: If capacity is not an int or out of range
        EmptyReferenceSequence: If there are no references
        InvalidReference: If an entry is None or unhashable
    """
    check_capacity(capacity)

    refs = tuple(references)
    if not refs:
        raise EmptyReferenceSequence("reference sequence cannot be empty")

    for i, page in enumerate(refs):
        if page is None:
            raise InvalidReference(f"reference {i} is None")
        try:
            hash(page)
        except TypeError:
            raise InvalidReference(
                f"reference {i} is not hashable: {page!r}"
            ) from None
    return refs


def simulate(policy: str, capacity: int,
             references: Iterable[Hashable]) -> SimulationResult:
    """
    Run one replacement policy over a reference sequence.

    Every input is checked before the first reference is processed, so a
    failure never leaves a partial trace behind.

    Args:
        policy: One of "FIFO", "LRU", "OPT", "CLOCK"
        capacity: Number of slots (1-50)
        references: Ordered entries to request

    Returns:
        SimulationResult(trace, summary)

    Raises:
        InvalidCapacity, EmptyReferenceSequence, InvalidReference, UnknownPolicy
    """
    refs = validate(capacity, references)
    engine_cls = resolve_policy(policy)

    logger.debug(
        "simulating %s with capacity=%d over %d references",
        engine_cls.name, capacity, len(refs),
    )
    result = engine_cls(capacity, refs).run()
    logger.debug(
        "%s finished: hits=%d faults=%d",
        engine_cls.name, result.summary.hits, result.summary.faults,
    )
    return result
