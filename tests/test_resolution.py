"""
Tests for turn resolution: placement, matching, detachment and orphans.

The fixture layout (lattice columns/rows, radius 4):

    row 2:  F1(-2, blue)  R1(-1, red)  R2(0, red)        <- first layer
    row 3:  G(-3, blue)   [slot (-12, 28) for the shot]  H(0, green)
    row 4:                                  D(0, purple)

A red shot landing under R1 snaps to (-12, 28) and pops R1 + R2 + itself.
H and D hang from R2 only, so they detach. F1 survives through G.
"""

import pytest

RED, ORANGE, BLUE, GREEN, PURPLE = 0, 1, 2, 3, 4


@pytest.fixture
def layout(empty_board, place_ball):
    from bobble.games.bubble_shooter.entities import make_projectile

    board = empty_board
    balls = {
        "F1": place_ball(board, -2, 2, BLUE, first_layer=True),
        "R1": place_ball(board, -1, 2, RED, first_layer=True),
        "R2": place_ball(board, 0, 2, RED, first_layer=True),
        "G": place_ball(board, -3, 3, BLUE),
        "H": place_ball(board, 0, 3, GREEN),
        "D": place_ball(board, 0, 4, PURPLE),
    }
    board.projectile = make_projectile(-9, 27, 4, RED)
    board.spawn(board.projectile)
    return board, balls


class TestCollision:
    """Tests for collision detection and the attachment slot."""

    def test_find_collision_threshold(self, mock_pygame_module, empty_board, place_ball):
        from bobble.games.bubble_shooter.entities import make_projectile
        from bobble.games.bubble_shooter.resolution import find_collision

        ball = place_ball(empty_board, 0, 2)
        empty_board.projectile = make_projectile(0, 20 + 7.5, 4, 0)
        assert find_collision(empty_board) is None

        empty_board.projectile.y = 20 + 7.0
        assert find_collision(empty_board) is ball

    def test_no_projectile_no_collision(self, mock_pygame_module, empty_board, place_ball):
        from bobble.games.bubble_shooter.resolution import find_collision

        place_ball(empty_board, 0, 2)

        assert find_collision(empty_board) is None

    def test_attachment_from_below(self, mock_pygame_module):
        from bobble.games.bubble_shooter.entities import make_ball, make_projectile
        from bobble.games.bubble_shooter.resolution import attachment_point

        struck = make_ball(0, 20, 4)

        assert attachment_point(struck, make_projectile(1, 27, 4, 0)) == (4, 28)
        assert attachment_point(struck, make_projectile(-1, 27, 4, 0)) == (-4, 28)

    def test_attachment_from_side(self, mock_pygame_module):
        from bobble.games.bubble_shooter.entities import make_ball, make_projectile
        from bobble.games.bubble_shooter.resolution import attachment_point

        struck = make_ball(0, 20, 4)

        assert attachment_point(struck, make_projectile(7, 21, 4, 0)) == (8, 20)
        assert attachment_point(struck, make_projectile(-7, 19, 4, 0)) == (-8, 20)


class TestResolveTurn:
    """Tests for one full resolution pass."""

    def test_missing_projectile_raises(self, mock_pygame_module, empty_board, place_ball):
        from bobble.games.bubble_shooter.resolution import resolve_turn

        struck = place_ball(empty_board, 0, 2, BLUE, first_layer=True)

        with pytest.raises(ValueError):
            resolve_turn(empty_board, struck)
        assert empty_board.balls() == [struck]

    def test_no_match_attaches_ball(self, mock_pygame_module, empty_board, place_ball):
        from bobble.games.bubble_shooter.entities import make_projectile
        from bobble.games.bubble_shooter.resolution import resolve_turn

        struck = place_ball(empty_board, 0, 2, BLUE, first_layer=True)
        empty_board.projectile = make_projectile(1, 27, 4, RED)

        result = resolve_turn(empty_board, struck)
        empty_board.apply_removals()

        assert not result.is_match
        assert result.score_gained == 0
        assert len(empty_board.balls()) == 2
        assert result.placed.color == RED
        assert (result.placed.x, result.placed.y) == (4, 28)
        assert empty_board.pending_respawn is True

    def test_two_of_a_kind_is_not_a_match(self, mock_pygame_module, empty_board, place_ball):
        from bobble.games.bubble_shooter.entities import make_projectile
        from bobble.games.bubble_shooter.resolution import resolve_turn

        struck = place_ball(empty_board, 0, 2, RED, first_layer=True)
        empty_board.projectile = make_projectile(1, 27, 4, RED)

        result = resolve_turn(empty_board, struck)
        empty_board.apply_removals()

        assert not result.is_match
        assert len(empty_board.balls()) == 2

    def test_match_pops_group(self, mock_pygame_module, layout):
        from bobble.games.bubble_shooter.entities import EntityKind
        from bobble.games.bubble_shooter.resolution import resolve_turn

        board, balls = layout

        result = resolve_turn(board, balls["R1"])
        board.apply_removals()

        assert (result.placed.x, result.placed.y) == (-12, 28)
        assert set(result.matched) == {result.placed, balls["R1"], balls["R2"]}
        exploding = [e for e in board.entities if e.kind == EntityKind.EXPLODING_BALL]
        assert len(exploding) == 3
        assert min(e.explode_after for e in exploding) == 0.0

    def test_detached_balls_fall(self, mock_pygame_module, layout):
        from bobble.games.bubble_shooter.entities import EntityKind
        from bobble.games.bubble_shooter.resolution import resolve_turn

        board, balls = layout

        result = resolve_turn(board, balls["R1"])
        board.apply_removals()

        assert set(result.detached) == {balls["H"], balls["D"]}
        assert result.orphans == []
        assert set(board.balls()) == {balls["F1"], balls["G"]}
        falling = [e for e in board.entities if e.kind == EntityKind.FALLING_BALL]
        assert sorted(f.color for f in falling) == [GREEN, PURPLE]

    def test_score_counts_matched_and_detached(self, mock_pygame_module, layout):
        from bobble.games.bubble_shooter.resolution import resolve_turn

        board, balls = layout

        result = resolve_turn(board, balls["R1"])

        # Three reds (1 each), green (4), purple (5)
        assert result.score_gained == 3 + 4 + 5
        assert board.score == result.score_gained
        assert result.removed_count == 5

    def test_lonely_first_layer_ball_is_orphaned(self, mock_pygame_module, layout):
        from bobble.games.bubble_shooter.resolution import resolve_turn

        board, balls = layout
        board.entities.remove(balls["G"])

        result = resolve_turn(board, balls["R1"])
        board.apply_removals()

        assert result.orphans == [balls["F1"]]
        assert board.balls() == []
        assert board.first_layer == []
        assert result.score_gained == 3 + 4 + 5 + 3

    def test_first_layer_invariant(self, mock_pygame_module, layout):
        from bobble.games.bubble_shooter.connectivity import get_linked_balls
        from bobble.games.bubble_shooter.resolution import resolve_turn

        board, balls = layout

        resolve_turn(board, balls["R1"])
        board.apply_removals()

        assert set(board.first_layer) <= set(board.balls())
        anchors = set(board.first_layer)
        for ball in board.balls():
            component = get_linked_balls(board.entities, ball)
            assert anchors.intersection(component)

    def test_projectile_stays_until_respawn(self, mock_pygame_module, layout):
        from bobble.games.bubble_shooter.resolution import resolve_turn

        board, balls = layout
        projectile = board.projectile

        resolve_turn(board, balls["R1"])
        board.apply_removals()

        assert board.projectile is projectile
        board.respawn_projectile()
        assert projectile not in board.entities
