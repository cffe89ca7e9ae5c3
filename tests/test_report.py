from goap.best_first import plan_best_first
from goap.catalog import ActionCatalog
from goap.iterative_deepening import plan_iterative_deepening
from goap.plan import PlanStep
from goap.report import format_plan, print_plan
from goap.world_state import DONT_CARE, make_world_state

EXPECTED = "\n".join(
    [
        "               : |has_wood||has_tool|",
        "               : |       0||       1|",
        "           chop: |       1||       1|",
        "           chop: |       2||       1|",
    ]
)


def chop_catalog():
    catalog = ActionCatalog(["has_wood", "has_tool"])
    catalog.add_action("chop", cost=1, preconditions={"has_tool": 1}, deltas={"has_wood": 1})
    return catalog


def test_format_best_first_plan():
    catalog = chop_catalog()
    start = make_world_state([0, 1])
    _, plan = plan_best_first(catalog, start, make_world_state([2, DONT_CARE]))
    assert format_plan(catalog, start, plan) == EXPECTED


def test_format_skips_root_step_of_ida_plan():
    catalog = chop_catalog()
    start = make_world_state([0, 1])
    plan = plan_iterative_deepening(catalog, start, make_world_state([2, DONT_CARE]))
    assert plan[0].is_root
    assert format_plan(catalog, start, plan) == EXPECTED


def test_format_empty_plan_has_header_only():
    catalog = chop_catalog()
    lines = format_plan(catalog, make_world_state([0, 0]), []).splitlines()
    assert len(lines) == 2


def test_print_plan(capsys):
    catalog = chop_catalog()
    start = make_world_state([0, 1])
    _, plan = plan_best_first(catalog, start, make_world_state([2, DONT_CARE]))
    capsys.readouterr()  # drop planner log output
    print_plan(catalog, start, plan)
    assert capsys.readouterr().out == EXPECTED + "\n"


class NamesOnlyCatalog:
    """Just the two lookups the reporter needs, no search support."""

    dimension_names = ["has_wood", "has_tool"]

    def action_name(self, action_id):
        return {0: "chop"}[action_id]


def test_format_accepts_any_catalog_with_names():
    plan = [
        PlanStep(0, make_world_state([1, 1])),
        PlanStep(0, make_world_state([2, 1])),
    ]
    assert format_plan(NamesOnlyCatalog(), make_world_state([0, 1]), plan) == EXPECTED
