"""
Entity model for the Bubble Shooter board.

Every object on the board is one ``Entity`` record tagged with an
``EntityKind``. Behaviour is looked up per kind in ``BEHAVIOURS`` instead of
being spread over subclasses, since the set of kinds is closed:

- BALL: a ball resting in the grid, drifting down with the board
- PROJECTILE: the single ball the player fires
- PARTICLE: a spark from a popped ball
- FALLING_BALL: a ball that lost its support and drops off the board
- EXPLODING_BALL: a matched ball playing its pop animation

Entities are never removed while the board is being iterated. Update rules
call ``board.remove(entity)`` which queues the removal, and new entities are
added through ``board.spawn(entity)``.
"""

import itertools
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional

from .vecmath import dot2, normalize


class EntityKind(IntEnum):
    """Closed set of entity variants."""
    BALL = 0
    PROJECTILE = 1
    PARTICLE = 2
    FALLING_BALL = 3
    EXPLODING_BALL = 4


# Score value per colour type
BALL_SCORES: List[int] = [1, 2, 3, 4, 5, 6, 7, 8]

BALL_COLOR_NAMES: List[str] = [
    "red", "orange", "blue", "green", "purple", "yellow", "cyan", "pink",
]

_ids = itertools.count(1)


@dataclass(eq=False)
class Entity:
    """Shared payload of every entity variant.

    Equality and hashing are by identity so entities can live in sets while
    their positions change.
    """
    kind: EntityKind
    x: float
    y: float
    radius: float
    vx: float = 0.0
    vy: float = 0.0
    color: int = 0
    offset_x: float = 0.0  # Magnet wobble, cosmetic only
    offset_y: float = 0.0
    angle: float = 0.0
    lifetime: float = 0.0
    max_lifetime: float = 0.0
    explode_after: float = 0.0
    spawned_burst: bool = False
    id: int = field(default_factory=lambda: next(_ids))

    @property
    def score(self) -> int:
        """Points awarded when this ball leaves the board."""
        return BALL_SCORES[self.color % len(BALL_SCORES)]

    @property
    def alpha(self) -> float:
        if not BEHAVIOURS[self.kind].fades or self.max_lifetime <= 0:
            return 1.0
        return max(0.0, min(1.0, self.lifetime / self.max_lifetime))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "kind": int(self.kind),
            "x": self.x,
            "y": self.y,
            "radius": self.radius,
            "vx": self.vx,
            "vy": self.vy,
            "color": self.color,
            "offset_x": self.offset_x,
            "offset_y": self.offset_y,
            "angle": self.angle,
            "alpha": self.alpha,
            "layer": BEHAVIOURS[self.kind].layer,
        }


@dataclass
class FrameContext:
    """Per-frame flags every update rule reads."""
    suspended: bool = False  # Paused or hidden: nothing moves
    playing: bool = True  # Board balls drift only while a level is in play
    shot_in_flight: bool = False
    on_bounce: Optional[Callable[[], None]] = None


@dataclass(frozen=True)
class EntityBehaviour:
    """Behaviour table entry for one entity kind."""
    update: Callable[[Entity, float, Any, FrameContext], None]
    counts_as_board: bool  # Keeps the level from being won while present
    fades: bool  # Draw alpha follows the remaining lifetime
    layer: int  # Draw order, lower first


def make_ball(x: float, y: float, radius: float, vx: float = 0.0, vy: float = 0.0,
              color: int = 0) -> Entity:
    return Entity(EntityKind.BALL, x, y, radius, vx, vy, color)


def make_projectile(x: float, y: float, radius: float, color: int) -> Entity:
    return Entity(EntityKind.PROJECTILE, x, y, radius, 0.0, 0.0, color)


def make_particle(x: float, y: float, radius: float, vx: float, vy: float,
                  color: int, lifetime: float) -> Entity:
    return Entity(EntityKind.PARTICLE, x, y, radius, vx, vy, color,
                  lifetime=lifetime, max_lifetime=lifetime)


def make_falling_ball(x: float, y: float, radius: float, vx: float, vy: float,
                      color: int, lifetime: float = 5000.0) -> Entity:
    return Entity(EntityKind.FALLING_BALL, x, y, radius, vx, vy, color,
                  lifetime=lifetime, max_lifetime=lifetime)


def make_exploding_ball(x: float, y: float, radius: float, vx: float, vy: float,
                        color: int, explode_after: float = 0.0,
                        lifetime: float = 200.0) -> Entity:
    return Entity(EntityKind.EXPLODING_BALL, x, y, radius, vx, vy, color,
                  lifetime=lifetime, max_lifetime=lifetime,
                  explode_after=explode_after)


def _integrate(entity: Entity, dt: float) -> None:
    entity.x += entity.vx * dt
    entity.y += entity.vy * dt


def _apply_wobble(entity: Entity, board: Any, frame: FrameContext) -> None:
    """Push the ball away from a nearby projectile, then let it settle back."""
    config = board.config
    projectile = board.projectile
    if projectile is not None and frame.shot_in_flight:
        dx = projectile.x - entity.x
        dy = projectile.y - entity.y
        dist_sq = dot2(dx, dy)
        if 0.0 < dist_sq < config.magnet_range * config.magnet_range:
            nx, ny = normalize(dx, dy)
            push = -config.magnet_strength / dist_sq
            entity.offset_x = 0.9 * entity.offset_x + 0.1 * push * nx
            entity.offset_y = 0.9 * entity.offset_y + 0.1 * push * ny
            return
    entity.offset_x *= 0.975
    entity.offset_y *= 0.975


def _update_ball(entity: Entity, dt: float, board: Any, frame: FrameContext) -> None:
    if frame.playing:
        _integrate(entity, dt)
    _apply_wobble(entity, board, frame)


def _update_projectile(entity: Entity, dt: float, board: Any, frame: FrameContext) -> None:
    if frame.playing:
        _integrate(entity, dt)

    half_width = board.config.level_width / 2
    hit_left = entity.x - entity.radius < -half_width and entity.vx < 0
    hit_right = entity.x + entity.radius > half_width and entity.vx > 0
    if hit_left or hit_right:
        entity.vx = -entity.vx
        if frame.on_bounce is not None:
            frame.on_bounce()

    if frame.shot_in_flight:
        entity.angle += dt / 100


def _expire(entity: Entity, dt: float, board: Any) -> None:
    entity.lifetime -= dt
    if entity.lifetime <= 0 or entity.y - entity.radius > board.config.level_height:
        board.remove(entity)


def _update_debris(entity: Entity, dt: float, board: Any, frame: FrameContext) -> None:
    """Particles and falling balls: ballistic motion until they expire."""
    _integrate(entity, dt)
    entity.vy += board.config.gravity * dt * dt
    _expire(entity, dt, board)


def _update_exploding(entity: Entity, dt: float, board: Any, frame: FrameContext) -> None:
    _integrate(entity, dt)

    if entity.explode_after > 0:
        entity.explode_after -= dt
        return

    if not entity.spawned_burst:
        entity.spawned_burst = True
        for particle in burst_particles(entity, board):
            board.spawn(particle)

    entity.radius *= board.config.explosion_growth
    _expire(entity, dt, board)


def burst_particles(entity: Entity, board: Any) -> List[Entity]:
    """Sparks flying outward from a popped ball in random directions."""
    config = board.config
    rng = board.rng
    particles = []
    for _ in range(config.particle_count):
        nx, ny = normalize(2 * rng.random() - 1, 2 * rng.random() - 1)
        particles.append(make_particle(
            entity.x,
            entity.y,
            config.ball_radius * 0.25,
            nx * config.particle_speed,
            ny * config.particle_speed,
            entity.color,
            config.particle_lifetime * rng.random(),
        ))
    return particles


BEHAVIOURS: Dict[EntityKind, EntityBehaviour] = {
    EntityKind.BALL: EntityBehaviour(_update_ball, counts_as_board=True, fades=False, layer=1),
    EntityKind.PROJECTILE: EntityBehaviour(_update_projectile, counts_as_board=False, fades=False, layer=3),
    EntityKind.PARTICLE: EntityBehaviour(_update_debris, counts_as_board=True, fades=False, layer=2),
    EntityKind.FALLING_BALL: EntityBehaviour(_update_debris, counts_as_board=True, fades=True, layer=0),
    EntityKind.EXPLODING_BALL: EntityBehaviour(_update_exploding, counts_as_board=True, fades=True, layer=2),
}


def update_entity(entity: Entity, dt: float, board: Any, frame: FrameContext) -> None:
    """Advance one entity by dt milliseconds."""
    if frame.suspended:
        return
    BEHAVIOURS[entity.kind].update(entity, dt, board, frame)