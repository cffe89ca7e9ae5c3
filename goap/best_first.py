"""Weighted best-first (A*-style) plan search.

The frontier is kept as a plain list and scanned linearly for the node with
the smallest ``g + h``; the first node encountered wins ties, which makes
the returned plan depend only on catalog order. Search nodes are identified
by their world state, so a state reached twice shares one node whose cost
and predecessor are relaxed in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import structlog

from goap.catalog import ActionCatalogProtocol
from goap.errors import PlanReconstructionError
from goap.plan import ROOT_ACTION, Plan, PlanStep, plan_cost
from goap.world_state import WorldState, check_compatible, heuristic

log = structlog.get_logger(__name__)


@dataclass
class SearchNode:
    """Frontier bookkeeping for one world state."""

    world_state: WorldState
    prev_state: WorldState
    g: float
    h: float
    action_id: Optional[int] = ROOT_ACTION

    @property
    def f(self) -> float:
        return self.g + self.h


def _key(state: WorldState) -> bytes:
    return state.tobytes()


def _pop_best(open_list: List[SearchNode]) -> SearchNode:
    """Remove and return the first node with minimal ``f``."""
    best_index = 0
    best_f = open_list[0].f
    for index in range(1, len(open_list)):
        f = open_list[index].f
        if f < best_f:
            best_f = f
            best_index = index
    return open_list.pop(best_index)


def _reconstruct(
    goal_node: SearchNode,
    closed: Dict[bytes, SearchNode],
    open_index: Dict[bytes, SearchNode],
) -> Plan:
    plan: Plan = []
    node = goal_node
    limit = len(closed) + len(open_index) + 1
    while node.action_id is not ROOT_ACTION:
        plan.append(PlanStep(node.action_id, node.world_state))
        prev_key = _key(node.prev_state)
        prev = closed.get(prev_key) or open_index.get(prev_key)
        if prev is None:
            raise PlanReconstructionError(
                f"No search node for predecessor state {node.prev_state.tolist()}"
            )
        if len(plan) > limit:
            raise PlanReconstructionError("Predecessor chain does not reach the root")
        node = prev
    plan.reverse()
    return plan


def plan_best_first(
    catalog: ActionCatalogProtocol,
    from_state: WorldState,
    to_state: WorldState,
    *,
    reopen_closed: bool = False,
    max_expansions: Optional[int] = None,
) -> Tuple[float, Plan]:
    """Search for the cheapest plan turning ``from_state`` into ``to_state``.

    Parameters
    ----------
    reopen_closed:
        When a cheaper path to an already expanded state is found, the node
        is always relaxed in place. With ``False`` it stays closed, so its
        descendants keep their old costs and the plan can be suboptimal.
        ``True`` moves it back to the frontier for re-expansion.
    max_expansions:
        Stop and report failure after this many node expansions.

    Returns
    -------
    ``(cost, plan)``. ``plan`` excludes the start state and ``cost`` is the
    sum of its action costs; ``(0.0, [])`` when no plan exists. A start
    state that already satisfies the goal also yields ``(0.0, [])``.
    """
    check_compatible(from_state, to_state, size=getattr(catalog, "size", None))

    root = SearchNode(from_state, from_state, 0.0, heuristic(from_state, to_state))
    open_list: List[SearchNode] = [root]
    open_index: Dict[bytes, SearchNode] = {_key(from_state): root}
    closed: Dict[bytes, SearchNode] = {}
    expansions = 0

    while open_list:
        node = _pop_best(open_list)
        node_key = _key(node.world_state)
        del open_index[node_key]

        if node.h == 0:
            plan = _reconstruct(node, closed, open_index)
            cost = plan_cost(catalog, plan)
            log.info(
                "Plan found",
                algorithm="best_first",
                cost=cost,
                steps=len(plan),
                expansions=expansions,
            )
            return cost, plan

        if max_expansions is not None and expansions >= max_expansions:
            log.warning(
                "Best-first search stopped at expansion cap",
                max_expansions=max_expansions,
                open=len(open_list) + 1,
                closed=len(closed),
            )
            return 0.0, []

        closed[node_key] = node
        expansions += 1

        for action_id in catalog.valid_actions(node.world_state):
            successor = catalog.apply_action(action_id, node.world_state)
            score = node.g + catalog.action_cost(action_id)
            succ_key = _key(successor)
            open_node = open_index.get(succ_key)
            closed_node = closed.get(succ_key)

            if open_node is not None and open_node.g > score:
                open_node.g = score
                open_node.prev_state = node.world_state
                open_node.action_id = action_id

            if closed_node is not None and closed_node.g > score:
                closed_node.g = score
                closed_node.prev_state = node.world_state
                closed_node.action_id = action_id
                if reopen_closed:
                    del closed[succ_key]
                    open_list.append(closed_node)
                    open_index[succ_key] = closed_node

            if open_node is None and closed_node is None:
                new_node = SearchNode(
                    successor,
                    node.world_state,
                    score,
                    heuristic(successor, to_state),
                    action_id,
                )
                open_list.append(new_node)
                open_index[succ_key] = new_node

    log.info("No plan found", algorithm="best_first", expansions=expansions)
    return 0.0, []


__all__ = ["SearchNode", "plan_best_first"]
