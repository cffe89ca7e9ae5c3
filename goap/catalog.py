"""Action catalog used by the planners.

The planners only need four lookups from a catalog (see
:class:`ActionCatalogProtocol`). :class:`ActionCatalog` is the concrete
implementation used by the game: a table of named world-state dimensions
plus a list of actions, each with precondition, effect and delta vectors.
Catalogs can be authored in code or loaded from YAML.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

import numpy as np
import structlog

from goap.config import load_yaml_config
from goap.errors import UnknownActionError, UnknownDimensionError
from goap.world_state import (
    DONT_CARE,
    STATE_DTYPE,
    WorldState,
    check_compatible,
    freeze,
    make_world_state,
)

log = structlog.get_logger(__name__)


class ActionCatalogProtocol(Protocol):
    """Lookups the planners perform against an action catalog."""

    def valid_actions(self, state: WorldState) -> Sequence[int]:
        """Return ids of actions whose preconditions hold in ``state``."""

    def apply_action(self, action_id: int, state: WorldState) -> WorldState:
        """Return the state produced by applying ``action_id`` to ``state``."""

    def action_cost(self, action_id: int) -> float:
        """Return the non-negative cost of ``action_id``."""

    def action_name(self, action_id: int) -> str:
        """Return a human-readable name for diagnostics."""


@dataclass(frozen=True, eq=False)
class Action:
    """A costed state transformation.

    ``preconditions`` and ``effects`` hold :data:`DONT_CARE` where a
    dimension is not tested or not overwritten. ``deltas`` are added after
    the effects have been applied.
    """

    action_id: int
    name: str
    cost: float
    preconditions: np.ndarray
    effects: np.ndarray
    deltas: np.ndarray

    def is_applicable(self, state: WorldState) -> bool:
        mask = self.preconditions >= 0
        return bool(np.array_equal(state[mask], self.preconditions[mask]))

    def apply(self, state: WorldState) -> WorldState:
        result = np.array(state, dtype=STATE_DTYPE, copy=True)
        mask = self.effects >= 0
        result[mask] = self.effects[mask]
        result += self.deltas
        return freeze(result)


class ActionCatalog:
    """Concrete, in-memory action catalog.

    Parameters
    ----------
    dimensions:
        Ordered world-state dimension names. The order fixes the layout of
        every world-state vector used with this catalog.
    """

    def __init__(self, dimensions: Sequence[str]) -> None:
        self._dimensions: Dict[str, int] = {}
        for name in dimensions:
            if name in self._dimensions:
                raise ValueError(f"Duplicate world-state dimension: {name!r}")
            self._dimensions[name] = len(self._dimensions)
        self._actions: List[Action] = []
        self._by_name: Dict[str, int] = {}

    # --- Dimensions ---
    @property
    def size(self) -> int:
        return len(self._dimensions)

    @property
    def dimension_names(self) -> List[str]:
        return list(self._dimensions)

    def dimension_index(self, name: str) -> int:
        try:
            return self._dimensions[name]
        except KeyError:
            raise UnknownDimensionError(name) from None

    def make_state(
        self,
        values: Optional[Mapping[str, int]] = None,
        default: int = 0,
        **kwargs: int,
    ) -> WorldState:
        """Build a world state from named values.

        Dimensions not named take ``default``; pass ``default=DONT_CARE``
        to build a goal.
        """
        slots = [default] * self.size
        merged = dict(values or {})
        merged.update(kwargs)
        for name, value in merged.items():
            slots[self.dimension_index(name)] = int(value)
        return make_world_state(slots)

    def make_goal(self, values: Optional[Mapping[str, int]] = None, **kwargs: int) -> WorldState:
        return self.make_state(values, default=DONT_CARE, **kwargs)

    # --- Authoring ---
    def _vector(self, values: Optional[Mapping[str, int]], fill: int) -> np.ndarray:
        vec = np.full(self.size, fill, dtype=STATE_DTYPE)
        for name, value in (values or {}).items():
            vec[self.dimension_index(name)] = int(value)
        return freeze(vec)

    def add_action(
        self,
        name: str,
        cost: float = 1.0,
        preconditions: Optional[Mapping[str, int]] = None,
        effects: Optional[Mapping[str, int]] = None,
        deltas: Optional[Mapping[str, int]] = None,
    ) -> int:
        """Register an action and return its id."""
        if name in self._by_name:
            raise ValueError(f"Duplicate action name: {name!r}")
        cost = float(cost)
        if cost < 0:
            raise ValueError(f"Action {name!r} has negative cost {cost}")
        action_id = len(self._actions)
        self._actions.append(
            Action(
                action_id=action_id,
                name=name,
                cost=cost,
                preconditions=self._vector(preconditions, DONT_CARE),
                effects=self._vector(effects, DONT_CARE),
                deltas=self._vector(deltas, 0),
            )
        )
        self._by_name[name] = action_id
        log.debug("Action registered", action=name, action_id=action_id, cost=cost)
        return action_id

    def _replace(self, name: str, **changes: Any) -> None:
        action_id = self.action_id(name)
        self._actions[action_id] = replace(self._actions[action_id], **changes)

    def _set_slot(self, vector: np.ndarray, dimension: str, value: int) -> np.ndarray:
        updated = np.array(vector, copy=True)
        updated[self.dimension_index(dimension)] = int(value)
        return freeze(updated)

    def set_precondition(self, action: str, dimension: str, value: int) -> None:
        current = self._actions[self.action_id(action)].preconditions
        self._replace(action, preconditions=self._set_slot(current, dimension, value))

    def set_effect(self, action: str, dimension: str, value: int) -> None:
        current = self._actions[self.action_id(action)].effects
        self._replace(action, effects=self._set_slot(current, dimension, value))

    def set_delta(self, action: str, dimension: str, value: int) -> None:
        current = self._actions[self.action_id(action)].deltas
        self._replace(action, deltas=self._set_slot(current, dimension, value))

    def set_cost(self, action: str, cost: float) -> None:
        if cost < 0:
            raise ValueError(f"Action {action!r} has negative cost {cost}")
        self._replace(action, cost=float(cost))

    # --- Lookups used by the planners ---
    def __len__(self) -> int:
        return len(self._actions)

    @property
    def actions(self) -> List[Action]:
        return list(self._actions)

    def get_action(self, action_id: int) -> Action:
        if not 0 <= action_id < len(self._actions):
            raise UnknownActionError(action_id)
        return self._actions[action_id]

    def action_id(self, name: str) -> int:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownActionError(name) from None

    def valid_actions(self, state: WorldState) -> List[int]:
        return [a.action_id for a in self._actions if a.is_applicable(state)]

    def apply_action(self, action_id: int, state: WorldState) -> WorldState:
        return self.get_action(action_id).apply(state)

    def action_cost(self, action_id: int) -> float:
        return self.get_action(action_id).cost

    def action_name(self, action_id: int) -> str:
        return self.get_action(action_id).name

    def check_state(self, *states: WorldState) -> None:
        check_compatible(*states, size=self.size)

    def __repr__(self) -> str:
        return f"ActionCatalog(dimensions={self.size}, actions={len(self._actions)})"


def catalog_from_dict(data: Mapping[str, Any]) -> ActionCatalog:
    """Build a catalog from a parsed YAML/TOML mapping.

    Expected layout::

        dimensions: [has_wood, has_tool]
        actions:
          - name: chop
            cost: 1
            pre: {has_tool: 1}
            add: {has_wood: 1}
    """
    dimensions = data.get("dimensions")
    if not dimensions:
        raise ValueError("Catalog definition has no 'dimensions' list")
    catalog = ActionCatalog(dimensions)
    for entry in data.get("actions", []) or []:
        if "name" not in entry:
            raise ValueError(f"Action entry without a name: {entry!r}")
        catalog.add_action(
            entry["name"],
            cost=entry.get("cost", 1.0),
            preconditions=entry.get("pre"),
            effects=entry.get("set"),
            deltas=entry.get("add"),
        )
    log.info("Action catalog built", dimensions=catalog.size, actions=len(catalog))
    return catalog


def load_catalog(path: Path) -> ActionCatalog:
    """Load a catalog from a YAML file."""
    return catalog_from_dict(load_yaml_config(Path(path), "Action catalog"))


__all__ = [
    "Action",
    "ActionCatalog",
    "ActionCatalogProtocol",
    "catalog_from_dict",
    "load_catalog",
]
