"""
Bubble Shooter game configuration.
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class BubbleShooterConfig:
    """Configuration for the Bubble Shooter game.

    Distances are world units (the board is ~45 wide, 100 tall, y grows
    downward), times are milliseconds, speeds are units per millisecond.
    """

    # Board geometry
    level_width: float = 45.0
    level_height: float = 100.0
    ball_radius: float = 4.0
    palette_size: int = 8
    base_colors: int = 3  # Colours at difficulty 0, one more per level
    last_row: int = 5  # Rows run from -difficulty up to (not including) this

    # Adjacency
    neighbour_factor: float = 1.25
    collision_factor: float = 0.9
    match_size: int = 3

    # Projectile
    launch_x: float = 0.0
    launch_y: float = 95.0
    aim_origin_y: float = 100.0
    projectile_speed: float = 0.05

    # Board motion
    fall_speed_base: float = 0.0005
    fall_speed_growth: float = 1.1
    pull_down_speed: float = 0.01
    pull_down_limit: float = 50.0

    # Boundaries
    danger_line: float = 90.0

    # Frame timing
    max_delta_time: float = 1000.0 / 30.0
    step_delta_time: float = 1000.0 / 60.0
    max_settle_frames: int = 1200

    # Visual effects
    particle_count: int = 10
    particle_speed: float = 0.025
    particle_lifetime: float = 250.0
    falling_lifetime: float = 5000.0
    exploding_lifetime: float = 200.0
    explode_delay_per_unit: float = 5.0
    explosion_growth: float = 1.05
    gravity: float = 0.000002
    falling_drift: float = 0.001
    magnet_range: float = 30.0
    magnet_strength: float = 25.0

    # Discrete actions for agents
    aim_actions: int = 15

    # Rewards
    reward_per_point: float = 1.0
    reward_win: float = 50.0
    reward_fail: float = -50.0
    reward_shot: float = -0.1

    def validate(self) -> None:
        """Raise ValueError for settings the engine cannot run with."""
        if self.ball_radius <= 0:
            raise ValueError(f"ball_radius must be positive, got {self.ball_radius}")
        if self.palette_size < 1:
            raise ValueError(f"palette_size must be at least 1, got {self.palette_size}")
        if self.level_width <= 2 * self.ball_radius:
            raise ValueError("level_width must fit at least one ball")
        if self.aim_origin_y <= self.launch_y:
            raise ValueError("aim_origin_y must lie below launch_y")
        if self.aim_actions < 1:
            raise ValueError(f"aim_actions must be at least 1, got {self.aim_actions}")

    def get_reward_config(self) -> Dict[str, float]:
        """Get reward configuration dictionary."""
        return {
            "per_point": self.reward_per_point,
            "win": self.reward_win,
            "fail": self.reward_fail,
            "shot": self.reward_shot,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "level_width": self.level_width,
            "level_height": self.level_height,
            "ball_radius": self.ball_radius,
            "palette_size": self.palette_size,
            "base_colors": self.base_colors,
            "last_row": self.last_row,
            "neighbour_factor": self.neighbour_factor,
            "collision_factor": self.collision_factor,
            "match_size": self.match_size,
            "launch_x": self.launch_x,
            "launch_y": self.launch_y,
            "aim_origin_y": self.aim_origin_y,
            "projectile_speed": self.projectile_speed,
            "fall_speed_base": self.fall_speed_base,
            "fall_speed_growth": self.fall_speed_growth,
            "pull_down_speed": self.pull_down_speed,
            "pull_down_limit": self.pull_down_limit,
            "danger_line": self.danger_line,
            "max_delta_time": self.max_delta_time,
            "step_delta_time": self.step_delta_time,
            "max_settle_frames": self.max_settle_frames,
            "particle_count": self.particle_count,
            "particle_speed": self.particle_speed,
            "particle_lifetime": self.particle_lifetime,
            "falling_lifetime": self.falling_lifetime,
            "exploding_lifetime": self.exploding_lifetime,
            "explode_delay_per_unit": self.explode_delay_per_unit,
            "explosion_growth": self.explosion_growth,
            "gravity": self.gravity,
            "falling_drift": self.falling_drift,
            "magnet_range": self.magnet_range,
            "magnet_strength": self.magnet_strength,
            "aim_actions": self.aim_actions,
            "rewards": self.get_reward_config(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BubbleShooterConfig":
        """Create config from dictionary. Unknown keys are ignored."""
        defaults = cls()
        rewards = data.get("rewards", {})
        values = {
            key: data.get(key, value)
            for key, value in defaults.to_dict().items()
            if key != "rewards"
        }
        return cls(
            **values,
            reward_per_point=rewards.get("per_point", defaults.reward_per_point),
            reward_win=rewards.get("win", defaults.reward_win),
            reward_fail=rewards.get("fail", defaults.reward_fail),
            reward_shot=rewards.get("shot", defaults.reward_shot),
        )
