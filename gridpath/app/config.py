# gridpath/app/config.py
"""
Viewer settings.

Resolution order (later wins): defaults -> environment -> command line.
- ENV: GRIDPATH_COLS, GRIDPATH_ROWS, GRIDPATH_CELL_SIZE, GRIDPATH_SPEED,
       GRIDPATH_ALGO, GRIDPATH_SELECTION, GRIDPATH_LOG_LEVEL
- CLI: --cols=25 --rows=20 --cell-size=25 --speed=8 --algo=A* --selection=heap
       --log-level=INFO
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, fields
from typing import Dict, Mapping, Optional, Sequence

from gridpath.core.heuristics import ALGORITHMS
from gridpath.core.search_state import SELECTIONS


@dataclass
class ViewerConfig:
    cols: int = 25
    rows: int = 20
    cell_size: int = 25
    steps_per_sec: int = 8
    algo: str = "A*"
    selection: str = "heap"
    log_level: str = "WARNING"


# key -> (env var, cli flag)
_SOURCES: Dict[str, tuple] = {
    "cols":          ("GRIDPATH_COLS",       "--cols="),
    "rows":          ("GRIDPATH_ROWS",       "--rows="),
    "cell_size":     ("GRIDPATH_CELL_SIZE",  "--cell-size="),
    "steps_per_sec": ("GRIDPATH_SPEED",      "--speed="),
    "algo":          ("GRIDPATH_ALGO",       "--algo="),
    "selection":     ("GRIDPATH_SELECTION",  "--selection="),
    "log_level":     ("GRIDPATH_LOG_LEVEL",  "--log-level="),
}

_INT_KEYS = ("cols", "rows", "cell_size", "steps_per_sec")


def resolve_config(argv: Optional[Sequence[str]] = None,
                   environ: Optional[Mapping[str, str]] = None) -> ViewerConfig:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    raw: Dict[str, str] = {}
    for key, (env, flag) in _SOURCES.items():
        if env in environ:
            raw[key] = environ[env]
        for arg in argv:
            if arg.startswith(flag):
                raw[key] = arg.split("=", 1)[1]

    cfg = ViewerConfig()
    for key, value in raw.items():
        if key in _INT_KEYS:
            try:
                parsed = int(value)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {value!r}") from None
            if parsed <= 0:
                raise ValueError(f"{key} must be positive, got {parsed}")
            setattr(cfg, key, parsed)
        else:
            setattr(cfg, key, value.strip())

    cfg.log_level = cfg.log_level.upper()
    if cfg.algo not in ALGORITHMS:
        raise ValueError(f"algo must be one of {sorted(ALGORITHMS)}, got {cfg.algo!r}")
    if cfg.selection not in SELECTIONS:
        raise ValueError(f"selection must be one of {SELECTIONS}, got {cfg.selection!r}")
    if not isinstance(logging.getLevelName(cfg.log_level), int):
        raise ValueError(f"log_level must be a logging level name, got {cfg.log_level!r}")
    return cfg


def as_dict(cfg: ViewerConfig) -> Dict[str, object]:
    return {f.name: getattr(cfg, f.name) for f in fields(cfg)}
