"""
Tests for the reachability engine and its cache.
"""

import networkx as nx
import pytest

from gravnav.exceptions import InvalidState
from gravnav.graph.gravity import GravityDirection
from gravnav.graph.navigation_types import State
from gravnav.graph.reachability import (
    ReachabilityAnalyzer,
    ReachabilityCache,
    StateGraph,
)
from gravnav.graph.tile_grid import GridModel
from gravnav.nav_config import NavigationConfig

DOWN = GravityDirection.DOWN

TEST_PROFILE = NavigationConfig(
    gravity_accel=0.125,
    jump_strengths=(0.5,),
    lateral_speeds=(-0.25, 0.0, 0.25),
    max_fall_speed=1.0,
    max_jump_steps=32,
)

GAP = ("..........", "..........", "#####.####")
ISLAND = (
    "..........",
    "........#.",
    "..........",
    "..........",
    "##########",
)
ROOM = (
    "########",
    "#......#",
    "#..##..#",
    "#......#",
    "#.#....#",
    "########",
)


def make_grid(lines, solid=("#",)):
    return GridModel([list(line) for line in lines], solid)


class TestReachabilityAnalyzer:
    """Dijkstra exploration of the state graph."""

    def setup_method(self):
        self.grid = make_grid(GAP)
        self.analyzer = ReachabilityAnalyzer(self.grid, TEST_PROFILE)

    def test_start_included_with_zero_cost(self):
        result = self.analyzer.analyze(State(0, 1, DOWN))
        first = result.as_list()[0]
        assert first.state == State(0, 1, DOWN)
        assert first.cost == 0
        assert len(first.path) == 0

    def test_costs_across_gap(self):
        result = self.analyzer.analyze(State(0, 1, DOWN))
        assert len(result) == 9
        assert result.cost_to(State(4, 1, DOWN)) == 4
        assert result.cost_to(State(6, 1, DOWN)) == 12
        assert result.cost_to(State(9, 1, DOWN)) == 15
        assert not result.is_position_reachable((5, 1))

    def test_paths_match_costs(self):
        result = self.analyzer.analyze(State(0, 1, DOWN))
        for cell in result.as_list():
            assert cell.path.start == result.start
            assert cell.path.end == cell.state
            assert cell.path.total_cost == cell.cost

    def test_finalised_in_cost_order(self):
        costs = [cell.cost for cell in self.analyzer.analyze(State(9, 1, DOWN)).as_list()]
        assert costs == sorted(costs)

    def test_invalid_start(self):
        with pytest.raises(InvalidState):
            self.analyzer.analyze(State(5, 1, DOWN))
        with pytest.raises(InvalidState):
            self.analyzer.analyze(State(12, 1, DOWN))

    def test_repeated_analysis_is_identical(self):
        first = self.analyzer.analyze(State(0, 1, DOWN))
        second = ReachabilityAnalyzer(self.grid, TEST_PROFILE).analyze(State(0, 1, DOWN))
        assert first.as_list() == second.as_list()

    def test_island_is_unreachable(self):
        analyzer = ReachabilityAnalyzer(make_grid(ISLAND))
        result = analyzer.analyze(State(0, 3, DOWN))
        assert not result.is_state_reachable(State(8, 0, DOWN))
        assert result.reachable_positions == {(x, 3) for x in range(10)}
        assert result.is_position_reachable((8, 3))
        assert not result.is_position_reachable((8, 0))

    def test_costs_are_shortest_paths(self):
        grid = make_grid(ROOM)
        graph = StateGraph(grid)
        analyzer = ReachabilityAnalyzer(grid, state_graph=graph)
        start = State(2, 3, DOWN)

        result = analyzer.analyze(start)
        expected = nx.single_source_dijkstra_path_length(
            graph.to_networkx(), start, weight="weight"
        )
        assert {cell.state: cell.cost for cell in result.as_list()} == expected


class TestReachabilityCache:
    """Caller-owned LRU cache of results."""

    def setup_method(self):
        self.grid = make_grid(GAP)
        self.cache = ReachabilityCache(max_size=2)
        self.analyzer = ReachabilityAnalyzer(self.grid, TEST_PROFILE, cache=self.cache)

    def test_hit_returns_cached_result(self):
        first = self.analyzer.analyze(State(0, 1, DOWN))
        second = self.analyzer.analyze(State(0, 1, DOWN))
        assert first is second
        stats = self.cache.get_statistics()
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_cached_result_is_read_only(self):
        first = self.analyzer.analyze(State(0, 1, DOWN))
        with pytest.raises(TypeError):
            first.cells.clear()
        with pytest.raises(TypeError):
            first.cells[State(5, 1, DOWN)] = None
        with pytest.raises(AttributeError):
            first.start = State(1, 1, DOWN)

        second = self.analyzer.analyze(State(0, 1, DOWN))
        assert len(second) == 9
        assert second.cost_to(State(9, 1, DOWN)) == 15

    def test_invalid_start_is_not_cached(self):
        with pytest.raises(InvalidState):
            self.analyzer.analyze(State(5, 1, DOWN))
        assert len(self.cache) == 0

    def test_profile_is_part_of_the_key(self):
        self.analyzer.analyze(State(0, 1, DOWN))
        other = ReachabilityAnalyzer(self.grid, NavigationConfig(), cache=self.cache)
        other.analyze(State(0, 1, DOWN))
        assert len(self.cache) == 2
        assert self.cache.hit_count == 0

    def test_solid_set_is_part_of_the_key(self):
        self.analyzer.analyze(State(0, 1, DOWN))
        relabelled = make_grid(GAP, solid=["#", "x"])
        assert self.cache.get(relabelled, TEST_PROFILE, State(0, 1, DOWN)) is None

    def test_lru_eviction(self):
        for x in (0, 1, 2):
            self.analyzer.analyze(State(x, 1, DOWN))
        assert len(self.cache) == 2
        assert self.cache.get(self.grid, TEST_PROFILE, State(0, 1, DOWN)) is None

    def test_invalidate_grid(self):
        self.analyzer.analyze(State(0, 1, DOWN))
        other = make_grid(ISLAND)
        assert self.cache.invalidate(other) == 0
        assert self.cache.invalidate(self.grid) == 1
        assert len(self.cache) == 0

    def test_clear(self):
        self.analyzer.analyze(State(0, 1, DOWN))
        self.analyzer.analyze(State(1, 1, DOWN))
        self.cache.clear()
        assert len(self.cache) == 0
        assert self.cache.invalidation_count == 2

    def test_rejects_bad_size(self):
        with pytest.raises(ValueError):
            ReachabilityCache(max_size=0)


class TestStateGraph:
    """Lazy successor generation and enumeration."""

    def test_successors_are_memoised(self):
        graph = StateGraph(make_grid(GAP), TEST_PROFILE)
        first = graph.successors(State(4, 1, DOWN))
        assert graph.successors(State(4, 1, DOWN)) is first
        assert graph.expanded_count == 1

    def test_all_valid_states_order(self):
        graph = StateGraph(make_grid(ISLAND))
        states = graph.all_valid_states()
        assert states[:3] == [
            State(8, 0, DOWN),
            State(7, 1, GravityDirection.RIGHT),
            State(9, 1, GravityDirection.LEFT),
        ]
        assert len(states) == 14

    def test_to_networkx_keeps_cheapest_edge(self):
        graph = StateGraph(make_grid(("###", "...", "###")), TEST_PROFILE)
        digraph = graph.to_networkx()
        edge = digraph.get_edge_data(State(1, 1, DOWN), State(1, 1, GravityDirection.UP))
        assert edge["weight"] == 2
