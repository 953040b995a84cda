#!/usr/bin/env python3
"""
Command-line front end for the navigation engine.

Loads a grid from a text file and prints query results as JSON. Each
non-empty line is one row: whitespace-separated tags if the line contains
whitespace, otherwise one tag per character.

Examples:
    gravnav level.txt stats
    gravnav level.txt path --start 0 1 DOWN --goal 9 1
    gravnav level.txt reach --start 0 1 DOWN --limit 50
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .exceptions import NavigationError
from .graph.navigation_types import State
from .graph.gravity import GravityDirection
from .nav_config import NavigationConfig
from . import navigation

logger = logging.getLogger(__name__)

ACTIONS = ("stats", "path", "states", "reach", "jumps", "closest")


def load_grid(path: Path) -> List[List[str]]:
    """Read a grid text file into rows of tags."""
    rows = []
    for line in path.read_text().splitlines():
        if not line.strip():
            continue
        if any(ch.isspace() for ch in line.strip()):
            rows.append(line.split())
        else:
            rows.append(list(line.strip()))
    return rows


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for the navigation CLI.

    Returns:
        Configured ArgumentParser instance
    """
    defaults = NavigationConfig()
    parser = argparse.ArgumentParser(
        description="Query the gravity-aware navigation engine."
    )
    parser.add_argument("grid", type=Path, help="Grid text file.")
    parser.add_argument("action", choices=ACTIONS, help="Query to run.")
    parser.add_argument(
        "--solid",
        nargs="+",
        default=["#"],
        help="Tile kinds treated as solid (default: #).",
    )
    parser.add_argument(
        "--start",
        nargs=3,
        metavar=("X", "Y", "GRAVITY"),
        help="Start state for path, reach, jumps and closest.",
    )
    parser.add_argument(
        "--goal",
        nargs="+",
        metavar="X Y [GRAVITY]",
        help="Goal cell for path and closest, optionally with gravity.",
    )
    parser.add_argument(
        "--filter-y",
        type=int,
        default=None,
        help="Only list states on this row (states action).",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=100,
        help="Maximum number of states/cells listed in the output (default: 100).",
    )
    parser.add_argument(
        "--sample-size",
        type=int,
        default=None,
        help="Starts sampled for the mean reachable fraction (stats action).",
    )

    # Jump profile
    parser.add_argument(
        "--gravity-accel",
        type=float,
        default=defaults.gravity_accel,
        help=f"Acceleration along gravity in cells/step² (default: {defaults.gravity_accel}).",
    )
    parser.add_argument(
        "--jump-strengths",
        type=float,
        nargs="+",
        default=list(defaults.jump_strengths),
        help="Launch speeds against gravity in cells/step.",
    )
    parser.add_argument(
        "--lateral-speeds",
        type=float,
        nargs="+",
        default=list(defaults.lateral_speeds),
        help="Sideways speeds in cells/step.",
    )
    parser.add_argument(
        "--max-fall-speed",
        type=float,
        default=defaults.max_fall_speed,
        help=f"Terminal velocity in cells/step (default: {defaults.max_fall_speed}).",
    )
    parser.add_argument(
        "--max-jump-steps",
        type=int,
        default=defaults.max_jump_steps,
        help=f"Simulation steps before an arc is abandoned (default: {defaults.max_jump_steps}).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING).",
    )
    return parser


def _parse_start(parser: argparse.ArgumentParser, args) -> State:
    if args.start is None:
        parser.error(f"--start is required for the {args.action} action")
    x, y, gravity = args.start
    try:
        return State(int(x), int(y), GravityDirection.parse(gravity))
    except ValueError as e:
        parser.error(f"Invalid --start: {e}")


def _parse_goal(parser: argparse.ArgumentParser, args) -> dict:
    if args.goal is None or len(args.goal) not in (2, 3):
        parser.error(f"--goal X Y [GRAVITY] is required for the {args.action} action")
    try:
        goal = {"x": int(args.goal[0]), "y": int(args.goal[1])}
    except ValueError as e:
        parser.error(f"Invalid --goal: {e}")
    if len(args.goal) == 3:
        goal["gravity"] = args.goal[2]
    return goal


def run(args, parser: argparse.ArgumentParser) -> dict:
    """Execute the requested action and return a JSON-serialisable result."""
    config = NavigationConfig.from_args(args)
    grid = navigation.build_grid(load_grid(args.grid), args.solid)

    if args.action == "stats":
        stats = navigation.get_navigation_stats(
            grid, args.solid, config=config, sample_size=args.sample_size
        )
        return {"stats": stats.to_dict()}

    if args.action == "states":
        states = navigation.get_all_valid_states(grid, args.solid)
        filtered = (
            [s for s in states if s.y == args.filter_y]
            if args.filter_y is not None
            else states
        )
        by_gravity = {g.value: 0 for g in GravityDirection}
        for state in states:
            by_gravity[state.gravity.value] += 1
        return {
            "count": len(states),
            "filtered": len(filtered),
            "sample": [s.to_dict() for s in filtered[: args.limit]],
            "byGravity": by_gravity,
        }

    start = _parse_start(parser, args)

    if args.action == "path":
        goal = _parse_goal(parser, args)
        path = navigation.find_path(grid, args.solid, start, goal, config=config)
        if path is None:
            return {"found": False, "message": navigation.describe_path(None)}
        return {
            "found": True,
            "steps": len(path),
            "cost": path.total_cost,
            "path": path.to_dict(),
            "description": navigation.describe_path(path),
        }

    if args.action == "reach":
        cells = navigation.calculate_reachable_cells(
            start.x, start.y, start.gravity, grid, args.solid, config=config
        )
        return {
            "count": len(cells),
            "cells": [
                {**cell.state.to_dict(), "cost": cell.cost, "moves": len(cell.path)}
                for cell in cells[: args.limit]
            ],
        }

    if args.action == "jumps":
        moves = navigation.get_jump_trajectories(
            start.x, start.y, start.gravity, grid, args.solid, config=config
        )
        return {"count": len(moves), "jumps": [move.to_dict() for move in moves]}

    goal = _parse_goal(parser, args)
    closest = navigation.find_closest_reachable(
        start.x, start.y, start.gravity, goal["x"], goal["y"],
        grid, args.solid, config=config,
    )
    return {
        "distance": closest.distance,
        "cell": closest.cell.to_dict() if closest.cell is not None else None,
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.grid.exists():
        parser.error(f"Grid file does not exist: {args.grid}")

    try:
        result = run(args, parser)
    except NavigationError as e:
        logger.error(f"Query rejected: {e}")
        print(json.dumps({"error": type(e).__name__, "message": str(e)}))
        return 2
    except ValueError as e:
        # Invalid jump profile values
        parser.error(str(e))

    logger.info(f"Completed {args.action} query on {args.grid}")
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
