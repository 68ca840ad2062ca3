"""
Board state for one Bubble Shooter session.

``BoardState`` is the single owner of everything that lives on the board:
the entity list, the ceiling-anchored first layer, the projectile, the next
projectile colour, difficulty and score. Update and resolution functions
receive it explicitly instead of reaching for module globals.
"""

import random
from typing import List, Optional, Set, Tuple

from .config import BubbleShooterConfig
from .connectivity import get_linked_balls_of_same_type
from .entities import (
    BEHAVIOURS,
    Entity,
    EntityKind,
    make_ball,
    make_projectile,
)
from .vecmath import dot2, normalize


def get_ball_at(balls: List[Entity], x: float, y: float) -> Optional[Entity]:
    """First ball whose centre is within ~1.1 radii of (x, y)."""
    for ball in balls:
        if dot2(x - ball.x, y - ball.y) < 1.25 * ball.radius * ball.radius:
            return ball
    return None


def raycast_ball(
    balls: List[Entity],
    x: float,
    y: float,
    dx: float,
    dy: float,
    radius: float,
    level_width: float,
    max_steps: int = 128,
) -> Optional[Entity]:
    """
    March a ray across the board, reflecting off the side walls.

    Args:
        balls: Balls the ray can hit
        x, y: Ray origin
        dx, dy: Unit direction
        radius: Ball radius; the ray advances half of it per step
        level_width: Board width, walls sit at +/- half of it
        max_steps: Give up after this many steps

    Returns:
        The first ball hit, or None
    """
    half_width = level_width / 2
    for _ in range(max_steps):
        ball = get_ball_at(balls, x, y)
        if ball is not None:
            return ball

        x += dx * radius / 2
        y += dy * radius / 2

        if x - radius < -half_width or x + radius > half_width:
            dx = -dx

    return None


class BoardState:
    """
    Live entities plus level progress.

    Removals are deferred: ``remove`` only queues an entity and
    ``apply_removals`` filters the entity list and the first layer together
    once per frame, so ``first_layer`` stays a subset of the live balls.
    """

    def __init__(
        self,
        config: Optional[BubbleShooterConfig] = None,
        difficulty: int = 1,
        score: int = 0,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize an empty board. Call ``build_level`` to populate it.

        Args:
            config: Game configuration (defaults used when omitted)
            difficulty: Level number, drives row count and colour count
            score: Starting score, also the first checkpoint
            seed: Optional seed for the board's random generator
            rng: Shared random generator, takes precedence over seed
        """
        self.config = config or BubbleShooterConfig()
        self.rng = rng or random.Random(seed)

        self.entities: List[Entity] = []
        self.first_layer: List[Entity] = []
        self.projectile: Optional[Entity] = None
        self.next_projectile_type: int = 0

        self.difficulty = difficulty
        self.score = score
        self.level_start_score = score
        self.fall_speed: float = 0.0

        self.removal_queue: Set[Entity] = set()
        self.pending_respawn: bool = False

    # Entity bookkeeping

    def balls(self) -> List[Entity]:
        """Live grid balls (not the projectile, not debris)."""
        return [e for e in self.entities if e.kind == EntityKind.BALL]

    def board_entity_count(self) -> int:
        """Number of entities that keep the level from being won."""
        return sum(1 for e in self.entities if BEHAVIOURS[e.kind].counts_as_board)

    def ball_types_on_board(self) -> List[int]:
        return sorted({ball.color for ball in self.balls()})

    def spawn(self, entity: Entity) -> None:
        self.entities.append(entity)

    def remove(self, entity: Entity) -> None:
        """Queue an entity for removal at the end of the frame."""
        self.removal_queue.add(entity)

    def apply_removals(self) -> None:
        if not self.removal_queue:
            return
        queue = self.removal_queue
        self.entities = [e for e in self.entities if e not in queue]
        self.first_layer = [e for e in self.first_layer if e not in queue]
        if self.projectile is not None and self.projectile in queue:
            self.projectile = None
        self.removal_queue = set()

    def credit(self, ball: Entity) -> int:
        """Add a ball's score value to the running score."""
        self.score += ball.score
        return ball.score

    # Level construction

    def color_count(self) -> int:
        """Number of colours in play at the current difficulty."""
        return min(self.difficulty + self.config.base_colors, self.config.palette_size)

    def build_level(self) -> None:
        """
        Replace the grid with a fresh level for the current difficulty.

        Rows run from ``-difficulty`` down to ``last_row``; even rows hold five
        balls and odd rows four, shifted by one radius so the rows interlock.
        The top row becomes the first layer. Debris already in flight is left
        alone.
        """
        config = self.config
        radius = config.ball_radius

        self.entities = [e for e in self.entities if e.kind != EntityKind.BALL]
        self.first_layer = []
        self.removal_queue = set()

        self.fall_speed = config.fall_speed_base * config.fall_speed_growth ** self.difficulty
        colors = self.color_count()

        min_row = -self.difficulty
        for row in range(min_row, config.last_row):
            odd = row % 2 == 1
            for col in range(-2, 2 if odd else 3):
                ball = make_ball(
                    2 * radius * col + (radius if odd else 0),
                    radius + 2 * radius * row,
                    radius,
                    0.0,
                    self.fall_speed,
                    self.rng.randrange(colors),
                )
                self.spawn(ball)
                if row == min_row:
                    self.first_layer.append(ball)

        print(f"[Level] Built level {self.difficulty}: "
              f"{len(self.balls())} balls, {colors} colours")

        self.respawn_projectile()

    # Projectile

    def next_projectile_candidates(self) -> List[int]:
        """
        Colours weighted toward groups the player can actually reach.

        Twenty rays fan out from just above the launch point. Each ball they
        hit adds its colour once per ball in its same-colour group, so big
        reachable groups are the likeliest next colour.
        """
        config = self.config
        balls = self.balls()
        found: List[Entity] = []
        for x0 in range(-10, 10):
            dx, dy = normalize(x0, -5)
            ball = raycast_ball(
                balls, config.launch_x, config.danger_line, dx, dy,
                config.ball_radius, config.level_width,
            )
            if ball is not None and ball not in found:
                found.append(ball)

        candidates: List[int] = []
        for ball in found:
            linked_count = len(get_linked_balls_of_same_type(
                self.entities, ball, config.neighbour_factor))
            candidates.extend([ball.color] * linked_count)
        return candidates

    def predict_next_type(self) -> int:
        candidates = self.next_projectile_candidates()
        if candidates:
            return self.rng.choice(candidates)

        types_on_board = self.ball_types_on_board()
        if types_on_board:
            return self.rng.choice(types_on_board)

        return 0

    def respawn_projectile(self) -> Entity:
        """Swap a fresh projectile in at the launch position."""
        if self.projectile is not None:
            self.entities = [e for e in self.entities if e is not self.projectile]

        types_on_board = self.ball_types_on_board()
        if self.next_projectile_type in types_on_board:
            current_type = self.next_projectile_type
        else:
            current_type = self.predict_next_type()
        self.next_projectile_type = self.predict_next_type()

        config = self.config
        self.projectile = make_projectile(
            config.launch_x, config.launch_y, config.ball_radius, current_type)
        self.spawn(self.projectile)
        self.pending_respawn = False
        return self.projectile

    def swap_projectile(self) -> None:
        """Exchange the loaded colour with the next one."""
        if self.projectile is None:
            return
        self.projectile.color, self.next_projectile_type = (
            self.next_projectile_type, self.projectile.color)

    def predict_trajectory(
        self,
        aim_x: float,
        aim_y: float,
        max_steps: int = 1000,
        dot_every: int = 50,
    ) -> List[Tuple[float, float]]:
        """
        Dots along the path a shot at (aim_x, aim_y) would take.

        The path reflects off the walls and stops at the first ball.
        """
        if self.projectile is None:
            return []

        config = self.config
        dx, dy = aim_direction(config, aim_x, aim_y)
        x, y = self.projectile.x, self.projectile.y
        radius = self.projectile.radius
        half_width = config.level_width / 2
        balls = self.balls()

        points: List[Tuple[float, float]] = []
        for i in range(1, max_steps + 1):
            x += dx / 10
            y += dy / 10

            if x - radius < -half_width or x + radius > half_width:
                dx = -dx

            if i % dot_every == 0:
                for ball in balls:
                    if dot2(x - ball.x, y - ball.y) < 1.5 * config.ball_radius ** 2:
                        return points
                points.append((x, y))

        return points

    # Board motion

    def lowest_ball_edge(self) -> float:
        """Largest ``y + radius`` over the grid balls (0 when empty)."""
        return max((ball.y + ball.radius for ball in self.balls()), default=0.0)

    def pull_down(self, dt: float, top: float = 0.0) -> bool:
        """
        Slide the grid into view when it has drifted off the top.

        Returns:
            True if the balls were moved
        """
        balls = self.balls()
        if not balls:
            return False

        max_y = max(ball.y for ball in balls)
        if max_y < top + 4 * self.config.ball_radius and max_y < self.config.pull_down_limit:
            for ball in balls:
                ball.y += dt * self.config.pull_down_speed
            return True
        return False


def aim_direction(config: BubbleShooterConfig, aim_x: float, aim_y: float) -> Tuple[float, float]:
    """
    Unit firing direction toward a world-space aim point.

    The aim point is clamped to the launch height and measured from an
    origin below the launcher, so the direction always points upward and is
    never zero-length.
    """
    offset_x = aim_x - config.launch_x
    offset_y = min(aim_y, config.launch_y) - config.aim_origin_y
    return normalize(offset_x, offset_y)
