"""
Diagnostics for navigation results.

Human-readable path descriptions and level-wide statistics used to sanity
check level designs. Nothing here is needed for live pathing.
"""

import logging
from typing import Dict, List, Optional

import networkx as nx
import numpy as np

from ..graph.gravity import GRAVITY_ORDER, SURFACE_NAMES
from ..graph.navigation_types import Move, MoveKind, NavigationStats, Path, State
from ..graph.reachability.reachability_analyzer import ReachabilityAnalyzer
from ..graph.reachability.state_graph import StateGraph
from ..graph.reachability.trajectory_simulator import launch_velocity

logger = logging.getLogger(__name__)

NO_PATH_TEXT = "No path found"


def _screen_direction(dx: float, dy: float) -> str:
    """Screen-space name of a direction, vertical part first ("up-left")."""
    parts = []
    if dy < 0:
        parts.append("up")
    elif dy > 0:
        parts.append("down")
    if dx < 0:
        parts.append("left")
    elif dx > 0:
        parts.append("right")
    return "-".join(parts) or "in place"


def describe_move(move: Move) -> str:
    """One-line description of a move."""
    target = move.to_state
    where = f"({target.x}, {target.y})"

    if move.kind is MoveKind.WALK:
        dx = target.x - move.from_state.x
        dy = target.y - move.from_state.y
        return f"walk {_screen_direction(dx, dy)} to {where}"

    if move.kind is MoveKind.FALL:
        gx, gy = move.from_state.gravity.vector
        fallen = (target.x - move.from_state.x) * gx + (target.y - move.from_state.y) * gy
        return f"fall {fallen} to {where}"

    if move.variant is not None:
        direction = _screen_direction(
            *launch_velocity(move.from_state.gravity, move.variant)
        )
    else:
        direction = _screen_direction(
            target.x - move.from_state.x, target.y - move.from_state.y
        )
    surface = SURFACE_NAMES[target.gravity]
    return f"jump {direction} landing on {surface} at {where}"


def describe_path(path: Optional[Path]) -> str:
    """
    Render a path as numbered steps.

    ``None`` (no path) and an empty path (already at the goal) produce
    different texts so callers can never confuse the two.
    """
    if path is None:
        return NO_PATH_TEXT

    start = path.start
    if len(path) == 0:
        return (
            f"Already at ({start.x}, {start.y}) with gravity "
            f"{start.gravity.value}: no movement needed"
        )

    lines = [f"Start at ({start.x}, {start.y}) with gravity {start.gravity.value}"]
    for index, move in enumerate(path, start=1):
        lines.append(f"{index}. {describe_move(move)}")
    lines.append(f"Total cost: {path.total_cost}")
    return "\n".join(lines)


def _sample_starts(states: List[State], sample_size: Optional[int]) -> List[State]:
    """Evenly spaced subset of ``states``; all of them if sample_size is None."""
    if sample_size is None or sample_size >= len(states):
        return list(states)
    if sample_size <= 0:
        return []
    indices = np.linspace(0, len(states) - 1, num=sample_size).round().astype(int)
    return [states[i] for i in dict.fromkeys(indices.tolist())]


def get_navigation_stats(
    graph: StateGraph, sample_size: Optional[int] = None
) -> NavigationStats:
    """
    Aggregate statistics of a level's navigation graph.

    Runs the reachability engine from the canonical start (first standing
    state in row-major order) and from a sample of standing states, and
    measures strongly connected components of the full state graph.

    Args:
        graph: State graph of the level
        sample_size: Number of starts to sample for the mean reachable
            fraction; every standing state if None

    Returns:
        NavigationStats
    """
    states = graph.all_valid_states()
    by_gravity: Dict[str, int] = {gravity.value: 0 for gravity in GRAVITY_ORDER}
    for state in states:
        by_gravity[state.gravity.value] += 1
    walkable_area = len({state.position for state in states})
    grid_size = (graph.grid.width, graph.grid.height)

    if not states:
        logger.warning("Grid has no standing states")
        return NavigationStats(
            total_states=0,
            by_gravity=by_gravity,
            walkable_area=0,
            canonical_start=None,
            reachable_from_start=0,
            reachable_fraction=0.0,
            sampled_starts=0,
            mean_reachable_fraction=0.0,
            component_count=0,
            largest_component=0,
            grid_size=grid_size,
        )

    analyzer = ReachabilityAnalyzer(graph.grid, graph.config, state_graph=graph)
    total = len(states)
    canonical_start = states[0]
    reachable_from_start = len(analyzer.analyze(canonical_start))

    samples = _sample_starts(states, sample_size)
    fractions = [len(analyzer.analyze(start)) / total for start in samples]
    mean_fraction = float(np.mean(fractions)) if fractions else 0.0

    components = list(nx.strongly_connected_components(graph.to_networkx(states)))
    largest = max((len(component) for component in components), default=0)

    logger.debug(
        f"Navigation stats: {total} states, {len(components)} components, "
        f"{reachable_from_start} reachable from {canonical_start}"
    )
    return NavigationStats(
        total_states=total,
        by_gravity=by_gravity,
        walkable_area=walkable_area,
        canonical_start=canonical_start,
        reachable_from_start=reachable_from_start,
        reachable_fraction=reachable_from_start / total,
        sampled_starts=len(samples),
        mean_reachable_fraction=mean_fraction,
        component_count=len(components),
        largest_component=largest,
        grid_size=grid_size,
    )
