"""
Adjacency and connectivity over the live balls on the board.

Two balls are neighbours when their centres are closer than
``factor * (r1 + r2)``. The factor is a little above 1 so that hex-packed
balls, including the diagonal ones on staggered rows, link up despite float
drift.

The neighbour graph is never stored: every query scans the current
positions, so results are always fresh. A spatial index can replace the
linear scan in ``get_neighbours`` without touching the callers.
"""

from collections import deque
from typing import Collection, Iterable, List

from .entities import Entity, EntityKind
from .vecmath import distance

NEIGHBOUR_FACTOR = 1.25


def are_neighbours(a: Entity, b: Entity, factor: float = NEIGHBOUR_FACTOR) -> bool:
    return distance(a.x, a.y, b.x, b.y) < factor * (a.radius + b.radius)


def get_neighbours(
    entities: Iterable[Entity],
    ball: Entity,
    factor: float = NEIGHBOUR_FACTOR,
) -> List[Entity]:
    """
    Find the grid balls touching a ball.

    Only BALL entities are considered; the projectile, debris and the ball
    itself never count as neighbours.

    Args:
        entities: All live entities on the board
        ball: Ball to find neighbours of
        factor: Tolerance applied to the sum of radii

    Returns:
        Neighbouring balls in board order
    """
    return [
        other for other in entities
        if other.kind == EntityKind.BALL
        and other is not ball
        and are_neighbours(ball, other, factor)
    ]


def _flood_fill(
    entities: List[Entity],
    seed: Entity,
    same_color: bool,
    exclude: Collection[Entity],
    factor: float,
) -> List[Entity]:
    linked = [seed]
    visited = {seed}
    queue = deque([seed])

    while queue:
        current = queue.popleft()
        for neighbour in get_neighbours(entities, current, factor):
            if neighbour in visited or neighbour in exclude:
                continue
            visited.add(neighbour)
            if same_color and neighbour.color != seed.color:
                continue
            linked.append(neighbour)
            queue.append(neighbour)

    return linked


def get_linked_balls_of_same_type(
    entities: Iterable[Entity],
    seed: Entity,
    factor: float = NEIGHBOUR_FACTOR,
) -> List[Entity]:
    """
    Connected group of same-coloured balls containing ``seed``.

    This is the match set for a freshly placed ball. The seed is always the
    first element, so the result is never empty.
    """
    return _flood_fill(list(entities), seed, True, frozenset(), factor)


def get_linked_balls(
    entities: Iterable[Entity],
    seed: Entity,
    exclude: Collection[Entity] = (),
    factor: float = NEIGHBOUR_FACTOR,
) -> List[Entity]:
    """
    Connected group of balls of any colour containing ``seed``.

    Balls in ``exclude`` are treated as already gone: the search never steps
    onto them, which lets callers ask what would still hang together after a
    removal that has only been queued.
    """
    return _flood_fill(list(entities), seed, False, set(exclude), factor)


def is_match(group: Collection[Entity], match_size: int = 3) -> bool:
    return len(group) >= match_size
