# main.py
"""Command-line demo: load an action catalog and print a plan for it.

Example::

    python main.py --catalog config/actions.yaml --goal has_wood=3
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import structlog
import yaml

from goap.catalog import ActionCatalog, catalog_from_dict
from goap.config import PlannerSettings, load_settings, load_yaml_config
from goap.best_first import plan_best_first
from goap.iterative_deepening import plan_iterative_deepening
from goap.plan import plan_cost
from goap.report import format_plan
from goap.world_state import WorldState, satisfies
from utils.logging_utils import setup_logging

log = structlog.get_logger()

# --- Paths relative to this script's location ---
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_DIR = SCRIPT_DIR / "config"
CATALOG_FILE = CONFIG_DIR / "actions.yaml"
SETTINGS_FILE = CONFIG_DIR / "settings.toml"


def parse_assignments(pairs: Optional[List[str]]) -> Dict[str, int]:
    """Turn ``["name=3", ...]`` into ``{"name": 3, ...}``."""
    values: Dict[str, int] = {}
    for pair in pairs or []:
        name, sep, raw = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {pair!r}")
        values[name.strip()] = int(raw)
    return values


def build_states(
    catalog: ActionCatalog,
    definition: Mapping[str, Any],
    start_overrides: Mapping[str, int],
    goal_overrides: Mapping[str, int],
) -> tuple[WorldState, WorldState]:
    start = dict(definition.get("start") or {})
    start.update(start_overrides)
    goal = dict(definition.get("goal") or {})
    goal.update(goal_overrides)
    return catalog.make_state(start), catalog.make_goal(goal)


def run(
    catalog: ActionCatalog,
    start: WorldState,
    goal: WorldState,
    settings: PlannerSettings,
) -> int:
    if settings.algorithm == "ida_star":
        plan = plan_iterative_deepening(
            catalog, start, goal, max_iterations=settings.max_iterations
        )
        cost = plan_cost(catalog, plan)
    else:
        cost, plan = plan_best_first(
            catalog,
            start,
            goal,
            reopen_closed=settings.reopen_closed,
            max_expansions=settings.max_expansions,
        )

    if not plan and not satisfies(start, goal):
        print("No plan found.")
        return 1

    print(format_plan(catalog, start, plan))
    print(f"Total cost: {cost:g}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compute a GOAP plan for an action catalog.")
    parser.add_argument("--catalog", type=Path, default=CATALOG_FILE, help="Action catalog YAML file.")
    parser.add_argument("--settings", type=Path, default=SETTINGS_FILE, help="Planner settings TOML file.")
    parser.add_argument(
        "--algorithm",
        choices=["best_first", "ida_star"],
        default=None,
        help="Override the planner algorithm from the settings file.",
    )
    parser.add_argument("--start", nargs="*", metavar="NAME=VALUE", help="Start state overrides.")
    parser.add_argument("--goal", nargs="*", metavar="NAME=VALUE", help="Goal state overrides.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level (defaults to the settings file).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    settings = load_settings(args.settings)
    if args.algorithm:
        settings.algorithm = args.algorithm
    if args.verbose:
        log_level = logging.DEBUG
    elif args.log_level:
        log_level = getattr(logging, args.log_level)
    else:
        log_level = settings.logging_level
    setup_logging(log_level)

    try:
        definition = load_yaml_config(args.catalog, "Action catalog")
        catalog = catalog_from_dict(definition)
        start, goal = build_states(
            catalog,
            definition,
            parse_assignments(args.start),
            parse_assignments(args.goal),
        )
    except (OSError, ValueError, KeyError, yaml.YAMLError) as e:
        log.error("Could not prepare planning problem", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2

    log.info(
        "Planning",
        algorithm=settings.algorithm,
        start=start.tolist(),
        goal=goal.tolist(),
    )
    return run(catalog, start, goal, settings)


if __name__ == "__main__":
    sys.exit(main())
