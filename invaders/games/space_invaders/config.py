"""
Space Invaders game configuration.
"""

from dataclasses import dataclass, fields
from typing import Dict, Any


@dataclass
class SpaceInvadersConfig:
    """Configuration for Space Invaders game.

    Coordinates use a y-up playfield with the origin at the bottom left.
    Entity positions are the centres of their bounding boxes.
    """

    # Playfield dimensions
    width: float = 768.0
    height: float = 1024.0

    # Formation layout
    invader_rows: int = 5
    invader_cols: int = 10
    invader_width: float = 24.0
    invader_height: float = 16.0
    invader_spacing_x: float = 12.0
    invader_spacing_y: float = 16.0
    formation_origin_x: float = 1 / 3  # Fraction of playfield width
    formation_origin_y: float = 1 / 1.35  # Fraction of playfield height

    # Formation movement
    march_step: float = 10.0
    drop_distance: float = 10.0
    initial_move_interval: float = 1.0  # Seconds between lockstep moves
    speed_up_factor: float = 0.8  # Applied to the interval on every edge turn
    edge_margin: float = 1.0
    floor_height: float = 32.0  # Invader lower edge at or below this = breach

    # Player ship
    ship_width: float = 30.0
    ship_height: float = 16.0
    ship_y: float = 8.0
    ship_speed_factor: float = 4.0  # Units per tick at full joystick deflection

    # Bullets
    bullet_width: float = 4.0
    bullet_height: float = 8.0
    invader_bullet_duration: float = 2.0
    ship_bullet_duration: float = 1.0
    invader_fire_enabled: bool = True

    # Scoring
    invader_kill_points: int = 100

    def __post_init__(self) -> None:
        if self.invader_rows < 1 or self.invader_cols < 1:
            raise ValueError(
                f"Formation needs at least one row and column, "
                f"got {self.invader_rows}x{self.invader_cols}"
            )
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid playfield size {self.width}x{self.height}")
        if self.initial_move_interval <= 0:
            raise ValueError("initial_move_interval must be positive")
        if self.invader_bullet_duration <= 0 or self.ship_bullet_duration <= 0:
            raise ValueError("Bullet travel durations must be positive")
        if self.speed_up_factor <= 0:
            raise ValueError("speed_up_factor must be positive")

    @property
    def total_invaders(self) -> int:
        """Number of invaders in a freshly spawned formation."""
        return self.invader_rows * self.invader_cols

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpaceInvadersConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
