"""Configuration for navigation queries."""

from dataclasses import dataclass
from typing import List, Tuple

from .constants.physics_constants import (
    GRAVITY_ACCEL,
    JUMP_STRENGTHS,
    LATERAL_SPEEDS,
    MAX_FALL_SPEED,
    MAX_JUMP_STEPS,
)
from .graph.navigation_types import JumpVariant


@dataclass(frozen=True)
class NavigationConfig:
    """Jump profile and search options shared by every query."""

    # Jump arc integration
    gravity_accel: float = GRAVITY_ACCEL
    jump_strengths: Tuple[float, ...] = JUMP_STRENGTHS
    lateral_speeds: Tuple[float, ...] = LATERAL_SPEEDS
    max_fall_speed: float = MAX_FALL_SPEED
    max_jump_steps: int = MAX_JUMP_STEPS

    def __post_init__(self):
        """Validate configuration after initialization."""
        # Normalise list inputs so the config stays hashable
        object.__setattr__(self, "jump_strengths", tuple(self.jump_strengths))
        object.__setattr__(self, "lateral_speeds", tuple(self.lateral_speeds))

        if self.gravity_accel <= 0:
            raise ValueError("gravity_accel must be positive")
        if self.max_fall_speed <= 0:
            raise ValueError("max_fall_speed must be positive")
        if self.max_jump_steps < 1:
            raise ValueError("max_jump_steps must be at least 1")
        if any(strength < 0 for strength in self.jump_strengths):
            raise ValueError("jump_strengths must be non-negative")

    def jump_variants(self) -> List[JumpVariant]:
        """All (strength, lateral) combinations, strengths outermost."""
        return [
            JumpVariant(strength=strength, lateral=lateral)
            for strength in self.jump_strengths
            for lateral in self.lateral_speeds
        ]

    @property
    def profile_key(self) -> Tuple:
        """Hashable identity of everything that changes the move set."""
        return (
            self.gravity_accel,
            self.jump_strengths,
            self.lateral_speeds,
            self.max_fall_speed,
            self.max_jump_steps,
        )

    @classmethod
    def from_args(cls, args=None) -> "NavigationConfig":
        config = cls()
        if args is None:
            return config
        return cls(
            gravity_accel=getattr(args, "gravity_accel", config.gravity_accel),
            jump_strengths=tuple(
                getattr(args, "jump_strengths", None) or config.jump_strengths
            ),
            lateral_speeds=tuple(
                getattr(args, "lateral_speeds", None) or config.lateral_speeds
            ),
            max_fall_speed=getattr(args, "max_fall_speed", config.max_fall_speed),
            max_jump_steps=getattr(args, "max_jump_steps", config.max_jump_steps),
        )


DEFAULT_CONFIG = NavigationConfig()
