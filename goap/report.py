"""Column-aligned plan traces for debugging."""

from __future__ import annotations

from typing import List, Protocol, Sequence

from goap.plan import PlanStep
from goap.world_state import WorldState, states_equal

LABEL_WIDTH = 15


class ReportCatalog(Protocol):
    """What the reporter reads from a catalog: column names and action labels."""

    @property
    def dimension_names(self) -> Sequence[str]: ...

    def action_name(self, action_id: int) -> str: ...


def _row(label: str, values: Sequence[int], widths: Sequence[int]) -> str:
    cells = "".join(f"|{int(v):>{w}d}|" for v, w in zip(values, widths))
    return f"{label:>{LABEL_WIDTH}}: {cells}"


def format_plan(
    catalog: ReportCatalog, initial: WorldState, plan: Sequence[PlanStep]
) -> str:
    """Render ``plan`` as a table with one column per world-state dimension.

    The first two rows hold the dimension names and ``initial``. Root steps,
    and any step that leaves the world in ``initial``, are skipped.
    """
    names = catalog.dimension_names
    widths = [len(name) for name in names]
    lines: List[str] = [
        f"{'':>{LABEL_WIDTH}}: " + "".join(f"|{name}|" for name in names),
        _row("", initial, widths),
    ]
    for step in plan:
        if step.is_root or states_equal(step.world_state, initial):
            continue
        lines.append(_row(catalog.action_name(step.action_id), step.world_state, widths))
    return "\n".join(lines)


def print_plan(
    catalog: ReportCatalog, initial: WorldState, plan: Sequence[PlanStep]
) -> None:
    print(format_plan(catalog, initial, plan))


__all__ = ["ReportCatalog", "format_plan", "print_plan"]
