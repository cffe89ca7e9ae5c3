# goap/config.py
"""Config loading helpers and planner settings."""

from __future__ import annotations

import logging
import tomllib  # Standard in Python 3.11+
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml

log = structlog.get_logger(__name__)

ALGORITHMS = ("best_first", "ida_star")


def load_toml_config(config_path: Path, config_name: str) -> Dict[str, Any]:
    """Reads planner settings from TOML.

    Settings are optional, so a missing or unreadable file falls back to
    ``{}`` (the built-in defaults) after logging why.
    """
    if not config_path.is_file():
        log.warning(
            "Settings file missing, using planner defaults",
            config=config_name,
            path=str(config_path),
        )
        return {}
    try:
        with config_path.open("rb") as f:  # tomllib requires bytes mode
            config_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        log.error(
            "Settings file is not valid TOML, using planner defaults",
            config=config_name,
            path=str(config_path),
            error=str(e),
        )
        return {}
    except OSError as e:
        log.error(
            "Settings file unreadable, using planner defaults",
            config=config_name,
            path=str(config_path),
            error=str(e),
        )
        return {}
    log.info("Settings loaded", config=config_name, path=str(config_path))
    return config_data


def load_yaml_config(config_path: Path, config_name: str) -> Dict[str, Any]:
    """Reads an action catalog definition from YAML.

    A planner cannot run without its catalog, so missing files and parse
    errors propagate to the caller. An empty file yields ``{}``.
    """
    if not config_path.is_file():
        log.error("Catalog file not found", config=config_name, path=str(config_path))
        raise FileNotFoundError(f"{config_name} file not found: {config_path}")
    try:
        with config_path.open("r") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(
            "Catalog file is not valid YAML",
            config=config_name,
            path=str(config_path),
            error=str(e),
        )
        raise
    if config_data is None:
        log.warning("Catalog file is empty", config=config_name, path=str(config_path))
        return {}
    log.info("Catalog loaded", config=config_name, path=str(config_path))
    return config_data


@dataclass
class PlannerSettings:
    """Tunables read from the ``[planner]`` table of ``settings.toml``.

    ``max_expansions`` and ``max_iterations`` of ``None`` (or ``0`` in the
    file) mean the search runs until it finds a plan or exhausts the graph.
    """

    algorithm: str = "best_first"
    reopen_closed: bool = False
    max_expansions: Optional[int] = None
    max_iterations: Optional[int] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.algorithm not in ALGORITHMS:
            raise ValueError(
                f"Unknown planner algorithm {self.algorithm!r}; expected one of {ALGORITHMS}"
            )
        # 0 in TOML disables a cap.
        if not self.max_expansions:
            self.max_expansions = None
        if not self.max_iterations:
            self.max_iterations = None

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlannerSettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            log.warning("Ignoring unknown planner settings", keys=unknown)
        return cls(**{k: v for k, v in data.items() if k in known})


def load_settings(config_path: Path) -> PlannerSettings:
    """Read :class:`PlannerSettings` from a TOML file; defaults if unavailable."""
    config = load_toml_config(Path(config_path), "Planner settings")
    return PlannerSettings.from_dict(config.get("planner", {}))


__all__ = [
    "ALGORITHMS",
    "PlannerSettings",
    "load_settings",
    "load_toml_config",
    "load_yaml_config",
]
