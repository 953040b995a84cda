"""
Centralized physics constants for the gravity-aware navigation engine.
All simulation defaults should be defined here to avoid duplication.

Units are grid cells and simulation steps: a speed of 0.25 moves the agent a
quarter of a cell per step.
"""

# === MOVEMENT COSTS ===
WALK_COST = 1  # One cell along the surface

# === JUMP ARC DEFAULTS ===
GRAVITY_ACCEL = 0.125  # Acceleration along gravity, cells/step²
JUMP_STRENGTHS = (0.5,)  # Initial speed against gravity, cells/step
LATERAL_SPEEDS = (-0.5, -0.25, 0.0, 0.25, 0.5)  # Gravity-relative sideways speed
MAX_FALL_SPEED = 1.0  # Terminal velocity along gravity, cells/step
MAX_JUMP_STEPS = 64  # Arcs still airborne after this many steps are discarded

# === AGENT GEOMETRY ===
CELL_CENTER_OFFSET = 0.5  # Agent is a point at the centre of its cell

# === CACHING ===
DEFAULT_CACHE_SIZE = 128  # Reachability results kept by ReachabilityCache
