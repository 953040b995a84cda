from .navigation_diagnostics import describe_move, describe_path, get_navigation_stats

__all__ = ["describe_move", "describe_path", "get_navigation_stats"]
