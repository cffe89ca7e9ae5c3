"""Iterative-deepening A* (IDA*) plan search.

Each pass is a depth-first search that prunes every branch whose
``f = g + h`` exceeds the current bound. The smallest pruned ``f`` becomes
the bound of the next pass. Only the current path is kept in memory; a
state already on that path is not revisited, but other branches may reach
it again.

The depth-first walk keeps its own frame stack next to the path, so plan
length is not limited by the interpreter's recursion depth.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple

import structlog

from goap.catalog import ActionCatalogProtocol
from goap.plan import ROOT_ACTION, Plan, PlanStep
from goap.world_state import WorldState, check_compatible, heuristic

log = structlog.get_logger(__name__)

INFINITE_BOUND = math.inf


@dataclass
class _Frame:
    """One level of the depth-first walk, parallel to a path entry."""

    state: WorldState
    g: float
    actions: Iterator[int]
    next_bound: float = INFINITE_BOUND


def _search(
    catalog: ActionCatalogProtocol,
    path: Plan,
    bound: float,
    to_state: WorldState,
) -> Tuple[bool, float]:
    """Bounded depth-first search from the last step of ``path``.

    Returns ``(True, f)`` once the goal is reached, leaving the solution in
    ``path``. Otherwise returns ``(False, t)`` where ``t`` is the smallest
    ``f`` that exceeded ``bound`` (:data:`INFINITE_BOUND` if none did).
    """
    state = path[-1].world_state
    h = heuristic(state, to_state)
    if h > bound:
        return False, h
    if h == 0:
        return True, h

    on_path: Set[bytes] = {step.world_state.tobytes() for step in path}
    frames: List[_Frame] = [
        _Frame(state, 0.0, iter(catalog.valid_actions(state)))
    ]
    while frames:
        frame = frames[-1]
        action_id = next(frame.actions, None)
        if action_id is None:
            # Exhausted: hand the smallest pruned f to the parent frame.
            frames.pop()
            if not frames:
                return False, frame.next_bound
            on_path.discard(path.pop().world_state.tobytes())
            parent = frames[-1]
            if frame.next_bound < parent.next_bound:
                parent.next_bound = frame.next_bound
            continue

        successor = catalog.apply_action(action_id, frame.state)
        key = successor.tobytes()
        if key in on_path:
            continue
        g = frame.g + catalog.action_cost(action_id)
        h = heuristic(successor, to_state)
        f = g + h
        if f > bound:
            if f < frame.next_bound:
                frame.next_bound = f
            continue

        path.append(PlanStep(action_id, successor))
        if h == 0:
            return True, f
        on_path.add(key)
        frames.append(_Frame(successor, g, iter(catalog.valid_actions(successor))))
    return False, INFINITE_BOUND


def plan_iterative_deepening(
    catalog: ActionCatalogProtocol,
    from_state: WorldState,
    to_state: WorldState,
    *,
    max_iterations: Optional[int] = None,
) -> Plan:
    """Search for a plan with IDA*.

    The returned plan starts with the synthetic root step
    ``PlanStep(ROOT_ACTION, from_state)`` followed by one step per action.
    An empty list means no plan exists (or ``max_iterations`` bound
    escalations were used up). Use :func:`goap.plan.plan_cost` to recover
    the cost.
    """
    check_compatible(from_state, to_state, size=getattr(catalog, "size", None))

    bound = heuristic(from_state, to_state)
    path: Plan = [PlanStep(ROOT_ACTION, from_state)]
    iterations = 0
    while True:
        found, t = _search(catalog, path, bound, to_state)
        iterations += 1
        if found:
            log.info(
                "Plan found",
                algorithm="ida_star",
                cost=t,
                steps=len(path) - 1,
                iterations=iterations,
            )
            return path
        if t == INFINITE_BOUND:
            log.info("No plan found", algorithm="ida_star", iterations=iterations)
            return []
        if max_iterations is not None and iterations >= max_iterations:
            log.warning(
                "IDA* search stopped at iteration cap",
                max_iterations=max_iterations,
                bound=bound,
            )
            return []
        bound = t
        log.debug("new bound", bound=bound, iteration=iterations)


__all__ = ["INFINITE_BOUND", "plan_iterative_deepening"]
