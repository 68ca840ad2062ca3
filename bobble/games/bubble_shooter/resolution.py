"""
Turn resolution: what happens when the projectile lands.

One resolution pass, in order:

1. snap the projectile to a lattice slot next to the ball it hit
2. place a new ball of the projectile's colour there
3. flood-fill the same-colour group around it; fewer than three ends the turn
4. pop the group (score, exploding balls staggered by distance)
5. drop every group that no longer reaches the first layer
6. drop first-layer balls left with nothing attached
7. ask for a new projectile on the next frame

All removals go through the board's queue, so nothing leaves the entity
list until the frame finishes.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from .board import BoardState
from .connectivity import get_linked_balls, get_linked_balls_of_same_type, get_neighbours, is_match
from .entities import Entity, make_ball, make_exploding_ball, make_falling_ball
from .vecmath import distance


@dataclass
class TurnResult:
    """Outcome of one resolution pass."""
    placed: Entity
    matched: List[Entity] = field(default_factory=list)
    detached: List[Entity] = field(default_factory=list)
    orphans: List[Entity] = field(default_factory=list)
    score_gained: int = 0

    @property
    def is_match(self) -> bool:
        return bool(self.matched)

    @property
    def removed_count(self) -> int:
        return len(self.matched) + len(self.detached) + len(self.orphans)


def find_collision(board: BoardState) -> Optional[Entity]:
    """First grid ball the projectile visibly overlaps, if any."""
    projectile = board.projectile
    if projectile is None:
        return None

    factor = board.config.collision_factor
    for ball in board.balls():
        if distance(projectile.x, projectile.y, ball.x, ball.y) < factor * (ball.radius + projectile.radius):
            return ball
    return None


def attachment_point(struck: Entity, projectile: Entity) -> Tuple[float, float]:
    """
    Lattice slot next to ``struck`` on the side the projectile came from.

    A mostly vertical approach lands one radius to the side and one row
    below; a mostly horizontal approach lands one diameter to the side.
    """
    offset_x = projectile.x - struck.x
    offset_y = projectile.y - struck.y
    side = 1 if offset_x > 0 else -1

    if offset_y * offset_y > offset_x * offset_x:
        return struck.x + side * struck.radius, struck.y + 2 * struck.radius
    return struck.x + side * 2 * struck.radius, struck.y


def resolve_turn(board: BoardState, struck: Entity) -> TurnResult:
    """
    Run one full resolution pass for a projectile that hit ``struck``.

    Args:
        board: Board to mutate
        struck: Grid ball the projectile collided with

    Returns:
        TurnResult describing what was placed and removed

    Raises:
        ValueError: If the board has no projectile
    """
    config = board.config
    projectile = board.projectile
    if projectile is None:
        raise ValueError("resolve_turn needs a projectile on the board")

    x, y = attachment_point(struck, projectile)
    placed = make_ball(x, y, struck.radius, struck.vx, struck.vy, projectile.color)
    board.spawn(placed)
    result = TurnResult(placed=placed)

    group = get_linked_balls_of_same_type(board.entities, placed, config.neighbour_factor)
    if is_match(group, config.match_size):
        _pop_matched(board, group, placed, result)
        removed: Set[Entity] = set(group)

        result.detached = _find_detached(board, group)
        removed.update(result.detached)
        for ball in result.detached:
            board.remove(ball)
            result.score_gained += board.credit(ball)
            drift = (2 * board.rng.random() - 1) * config.falling_drift
            board.spawn(make_falling_ball(
                ball.x, ball.y, config.ball_radius, drift, ball.vy, ball.color,
                config.falling_lifetime))

        result.orphans = _find_orphans(board, removed)
        for ball in result.orphans:
            board.remove(ball)
            result.score_gained += board.credit(ball)
            board.spawn(make_falling_ball(
                ball.x, ball.y, config.ball_radius, ball.vx, ball.vy, ball.color,
                config.falling_lifetime))

    board.pending_respawn = True
    return result


def _pop_matched(board: BoardState, group: List[Entity], placed: Entity, result: TurnResult) -> None:
    config = board.config
    for ball in group:
        board.remove(ball)
        result.score_gained += board.credit(ball)
        explode_after = config.explode_delay_per_unit * distance(placed.x, placed.y, ball.x, ball.y)
        board.spawn(make_exploding_ball(
            ball.x, ball.y, config.ball_radius, ball.vx, ball.vy, ball.color,
            explode_after, config.exploding_lifetime))
    result.matched = list(group)


def _find_detached(board: BoardState, matched: List[Entity]) -> List[Entity]:
    """Balls that no longer reach the first layer once ``matched`` is gone."""
    factor = board.config.neighbour_factor
    matched_set = set(matched)
    anchors = {ball for ball in board.first_layer if ball not in matched_set}

    candidates: List[Entity] = []
    for ball in matched:
        for neighbour in get_neighbours(board.entities, ball, factor):
            if neighbour not in matched_set and neighbour not in candidates:
                candidates.append(neighbour)

    detached: List[Entity] = []
    seen: Set[Entity] = set()
    for candidate in candidates:
        if candidate in seen:
            continue
        component = get_linked_balls(board.entities, candidate, matched_set, factor)
        seen.update(component)
        if not any(ball in anchors for ball in component):
            detached.extend(component)
    return detached


def _find_orphans(board: BoardState, removed: Set[Entity]) -> List[Entity]:
    """First-layer balls left hanging alone after the removals."""
    factor = board.config.neighbour_factor
    orphans = []
    for ball in board.first_layer:
        if ball in removed:
            continue
        if len(get_linked_balls(board.entities, ball, removed, factor)) == 1:
            orphans.append(ball)
    return orphans
