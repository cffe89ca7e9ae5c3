"""Exception types raised by the planning core.

A search that cannot reach its goal is *not* an error: planners report it
as an empty plan. The exceptions below cover malformed input and broken
internal invariants.
"""

from __future__ import annotations


class GoapError(Exception):
    """Base class for planner errors."""


class WorldStateMismatchError(GoapError, ValueError):
    """World-state vectors of different lengths were combined."""


class UnknownDimensionError(GoapError, KeyError):
    """A world-state dimension name is not registered in the catalog."""


class UnknownActionError(GoapError, KeyError):
    """An action id or name is not registered in the catalog."""


class PlanReconstructionError(GoapError, RuntimeError):
    """A predecessor could not be found while walking back from the goal."""


class PlanValidationError(GoapError, ValueError):
    """A plan does not replay against the catalog it was made from."""
