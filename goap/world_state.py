"""World-state vectors and the shared planning heuristic.

A world state is a fixed-length vector of signed integers, one slot per
dimension registered in the action catalog. When a vector is used as a
goal, a slot holding :data:`DONT_CARE` leaves that dimension unconstrained.
"""

from __future__ import annotations

from typing import Final, Iterable, Optional

import numpy as np
import structlog

from goap.errors import WorldStateMismatchError

log = structlog.get_logger(__name__)

# --- Type Aliases ---
WorldState = np.ndarray  # 1-D, int32, read-only

# --- Constants ---
DONT_CARE: Final[int] = -1
STATE_DTYPE: Final[type] = np.int32


def make_world_state(values: Iterable[int]) -> WorldState:
    """Return a read-only ``int32`` world-state vector built from ``values``."""
    state = np.array(list(values), dtype=STATE_DTYPE)
    if state.ndim != 1:
        raise ValueError(f"World state must be one-dimensional, got shape {state.shape}")
    state.setflags(write=False)
    return state


def freeze(state: np.ndarray) -> WorldState:
    """Mark ``state`` read-only in place and return it."""
    state.setflags(write=False)
    return state


def states_equal(a: WorldState, b: WorldState) -> bool:
    """Element-wise exact match."""
    return a.shape == b.shape and bool(np.array_equal(a, b))


def heuristic(from_state: WorldState, to_state: WorldState) -> float:
    """Sum of absolute differences over the goal's constrained slots.

    Any negative slot in ``to_state`` (normally :data:`DONT_CARE`) is
    unconstrained and contributes nothing. The estimate stays admissible as
    long as no action moves a slot by more than one unit per unit of cost.
    """
    mask = to_state >= 0
    diff = np.abs(to_state[mask].astype(np.int64) - from_state[mask])
    return float(diff.sum())


def satisfies(state: WorldState, goal: WorldState) -> bool:
    """True when every constrained slot of ``goal`` matches ``state``."""
    return heuristic(state, goal) == 0


def check_compatible(*states: WorldState, size: Optional[int] = None) -> int:
    """Ensure all ``states`` share one length, optionally equal to ``size``.

    Returns the common length. Raises :class:`WorldStateMismatchError`
    otherwise; vectors are never truncated or padded.
    """
    lengths = {int(s.shape[0]) for s in states}
    if size is not None:
        lengths.add(int(size))
    if len(lengths) > 1:
        log.error(
            "World state length mismatch",
            lengths=[int(s.shape[0]) for s in states],
            expected=size,
        )
        raise WorldStateMismatchError(
            f"World states have mismatched lengths: {sorted(lengths)}"
        )
    return lengths.pop() if lengths else 0


__all__ = [
    "DONT_CARE",
    "WorldState",
    "check_compatible",
    "freeze",
    "heuristic",
    "make_world_state",
    "satisfies",
    "states_equal",
]
