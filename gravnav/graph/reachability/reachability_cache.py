"""
Explicit caching for reachability analysis.

This module provides an LRU cache of reachability results keyed by grid
content, solid set, jump profile and start state. The cache is owned and
invalidated by the caller; the engine keeps no global state.
"""

import logging
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from .reachability_types import ReachabilityResult
from ..navigation_types import State
from ..tile_grid import GridModel
from ...constants.physics_constants import DEFAULT_CACHE_SIZE
from ...nav_config import NavigationConfig

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str, Tuple, State]


class ReachabilityCache:
    """
    LRU cache for reachability analysis results.

    Features:
    - LRU eviction with a configurable size limit
    - Invalidation of everything cached for one grid, or all entries
    - Hit/miss tracking
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        """
        Initialize the reachability cache.

        Args:
            max_size: Maximum number of results to keep
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.cache: "OrderedDict[CacheKey, ReachabilityResult]" = OrderedDict()

        self.hit_count = 0
        self.miss_count = 0
        self.invalidation_count = 0

    @staticmethod
    def make_key(grid: GridModel, config: NavigationConfig, start: State) -> CacheKey:
        grid_hash, solid_hash = grid.fingerprint
        return grid_hash, solid_hash, config.profile_key, start

    def get(
        self, grid: GridModel, config: NavigationConfig, start: State
    ) -> Optional[ReachabilityResult]:
        """Cached result or None."""
        key = self.make_key(grid, config, start)
        result = self.cache.get(key)
        if result is None:
            self.miss_count += 1
            return None
        self.cache.move_to_end(key)
        self.hit_count += 1
        return result

    def put(
        self,
        grid: GridModel,
        config: NavigationConfig,
        start: State,
        result: ReachabilityResult,
    ) -> None:
        key = self.make_key(grid, config, start)
        self.cache[key] = result
        self.cache.move_to_end(key)
        while len(self.cache) > self.max_size:
            self.cache.popitem(last=False)

    def invalidate(self, grid: Optional[GridModel] = None) -> int:
        """
        Drop cached results.

        Args:
            grid: Only drop results for this grid's content (any solid set);
                drop everything if None

        Returns:
            Number of entries removed
        """
        if grid is None:
            removed = len(self.cache)
            self.cache.clear()
        else:
            grid_hash = grid.tiles.fingerprint
            stale = [key for key in self.cache if key[0] == grid_hash]
            for key in stale:
                del self.cache[key]
            removed = len(stale)

        self.invalidation_count += removed
        logger.debug(f"Invalidated {removed} cached reachability results")
        return removed

    def clear(self) -> None:
        self.invalidate()

    def get_statistics(self) -> Dict[str, Any]:
        total = self.hit_count + self.miss_count
        return {
            "size": len(self.cache),
            "max_size": self.max_size,
            "hits": self.hit_count,
            "misses": self.miss_count,
            "hit_rate": self.hit_count / total if total else 0.0,
            "invalidations": self.invalidation_count,
        }

    def __len__(self) -> int:
        return len(self.cache)
