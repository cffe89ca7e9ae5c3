"""Plan steps and helpers for replaying a plan against its catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, NamedTuple, Optional, Sequence, Tuple

from goap.errors import PlanValidationError
from goap.world_state import WorldState, satisfies, states_equal

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from goap.catalog import ActionCatalogProtocol

# Action id carried by the synthetic first step of an iterative-deepening plan.
ROOT_ACTION = None


class PlanStep(NamedTuple):
    """One step of a plan: the action taken and the state it produced."""

    action_id: Optional[int]
    world_state: WorldState

    @property
    def is_root(self) -> bool:
        return self.action_id is ROOT_ACTION


Plan = List[PlanStep]


def plan_cost(catalog: "ActionCatalogProtocol", plan: Sequence[PlanStep]) -> float:
    """Sum of action costs along ``plan``, ignoring root steps."""
    return sum(
        (catalog.action_cost(step.action_id) for step in plan if not step.is_root),
        0.0,
    )


def simulate_plan(
    catalog: "ActionCatalogProtocol", start: WorldState, plan: Sequence[PlanStep]
) -> WorldState:
    """Replay ``plan`` from ``start`` and return the final state.

    Raises :class:`PlanValidationError` if an action is not valid where it
    is applied or produces a state other than the one recorded in the step.
    """
    state = start
    for index, step in enumerate(plan):
        if step.is_root:
            if not states_equal(step.world_state, state):
                raise PlanValidationError(f"Step {index}: root step does not match start state")
            continue
        if step.action_id not in catalog.valid_actions(state):
            raise PlanValidationError(
                f"Step {index}: action {catalog.action_name(step.action_id)!r} "
                f"is not valid in state {state.tolist()}"
            )
        state = catalog.apply_action(step.action_id, state)
        if not states_equal(state, step.world_state):
            raise PlanValidationError(
                f"Step {index}: expected {step.world_state.tolist()}, got {state.tolist()}"
            )
    return state


def validate_plan(
    catalog: "ActionCatalogProtocol",
    start: WorldState,
    goal: WorldState,
    plan: Sequence[PlanStep],
) -> Tuple[bool, Optional[str]]:
    """Check that ``plan`` replays from ``start`` and reaches ``goal``.

    Returns:
        (success, error_message)
    """
    try:
        final = simulate_plan(catalog, start, plan)
    except PlanValidationError as e:
        return False, str(e)
    if not satisfies(final, goal):
        return False, "Final state does not satisfy goal"
    return True, None


__all__ = [
    "Plan",
    "PlanStep",
    "ROOT_ACTION",
    "plan_cost",
    "simulate_plan",
    "validate_plan",
]
