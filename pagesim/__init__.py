"""
pagesim - Deterministic page-replacement simulator (FIFO, LRU, OPT, CLOCK)

Usage:
    from pagesim import simulate, compare_all

    trace, summary = simulate("CLOCK", capacity=3, references=[1, 2, 3, 1, 4])
    for step in trace:
        print(step.index, step.slots, "HIT" if step.hit else "FAULT")

    ranking = compare_all(3, [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5])
"""

import logging

from .compare import PolicyComparison, belady_anomalies, compare_all, fault_curve
from .core import MAX_CAPACITY, MIN_CAPACITY, simulate, validate
from .errors import (
    EmptyReferenceSequence,
    InternalInvariantViolation,
    InvalidCapacity,
    InvalidReference,
    SimulationError,
    UnknownPolicy,
)
from .policies import POLICY_ORDER, available_policies
from .trace import ClockState, SimulationResult, StepRecord, Summary

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    "simulate",
    "validate",
    "compare_all",
    "fault_curve",
    "belady_anomalies",
    "available_policies",
    "PolicyComparison",
    "StepRecord",
    "ClockState",
    "Summary",
    "SimulationResult",
    "SimulationError",
    "InvalidCapacity",
    "EmptyReferenceSequence",
    "InvalidReference",
    "UnknownPolicy",
    "InternalInvariantViolation",
    "POLICY_ORDER",
    "MIN_CAPACITY",
    "MAX_CAPACITY",
]
