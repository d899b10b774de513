"""Exceptions raised by pagesim."""


class SimulationError(Exception):
    """Base class for rejected simulation inputs."""


class InvalidCapacity(SimulationError, ValueError):
    """Capacity is not an integer or lies outside the allowed range."""


class EmptyReferenceSequence(SimulationError, ValueError):
    """The reference sequence holds no entries."""


class InvalidReference(SimulationError, ValueError):
    """A reference is None (the empty-slot marker) or is not hashable."""


class UnknownPolicy(SimulationError, KeyError):
    """No replacement policy is registered under the requested name."""

    def __init__(self, name):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"unknown policy: {self.name!r}"


class InternalInvariantViolation(RuntimeError):
    """
    An engine reached a state its algorithm can never produce.

    Not a SimulationError: callers that handle bad input must not catch it.
    """
