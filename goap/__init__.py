"""Goal-oriented action planning (GOAP) for AI agents.

Given an action catalog, a start world state and a goal, the planners in
this package compute an ordered list of actions that reaches the goal:

* :func:`plan_best_first` - A*-style search over open/closed node sets.
* :func:`plan_iterative_deepening` - IDA* with bound escalation.

Both share :func:`heuristic` and return lists of :class:`PlanStep`.
"""

from __future__ import annotations

from .best_first import plan_best_first
from .catalog import Action, ActionCatalog, ActionCatalogProtocol, catalog_from_dict, load_catalog
from .config import PlannerSettings, load_settings
from .errors import (
    GoapError,
    PlanReconstructionError,
    PlanValidationError,
    UnknownActionError,
    UnknownDimensionError,
    WorldStateMismatchError,
)
from .iterative_deepening import plan_iterative_deepening
from .plan import ROOT_ACTION, PlanStep, plan_cost, simulate_plan, validate_plan
from .report import ReportCatalog, format_plan, print_plan
from .world_state import DONT_CARE, WorldState, heuristic, make_world_state, satisfies, states_equal

__all__ = [
    "Action",
    "ActionCatalog",
    "ActionCatalogProtocol",
    "DONT_CARE",
    "GoapError",
    "PlanReconstructionError",
    "PlanStep",
    "PlanValidationError",
    "PlannerSettings",
    "ROOT_ACTION",
    "ReportCatalog",
    "UnknownActionError",
    "UnknownDimensionError",
    "WorldState",
    "WorldStateMismatchError",
    "catalog_from_dict",
    "format_plan",
    "heuristic",
    "load_catalog",
    "load_settings",
    "make_world_state",
    "plan_best_first",
    "plan_cost",
    "plan_iterative_deepening",
    "print_plan",
    "satisfies",
    "simulate_plan",
    "states_equal",
    "validate_plan",
]
