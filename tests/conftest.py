"""
Pytest configuration and fixtures for Bobble tests.

This module sets up pygame mocking so the renderer and audio backends can be
imported without a display or sound card, and provides small board-building
helpers for the engine tests.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest


# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "scripts"))


def create_mock_pygame():
    """Create a mock of the pygame module."""
    mock_pygame = MagicMock()

    # Basic initialization
    mock_pygame.init.return_value = (6, 0)  # (success, fail) count
    mock_pygame.quit.return_value = None

    # Display
    mock_surface = MagicMock()
    mock_surface.get_width.return_value = 450
    mock_surface.get_height.return_value = 1000
    mock_surface.fill.return_value = None
    mock_surface.blit.return_value = None
    mock_pygame.display.set_mode.return_value = mock_surface
    mock_pygame.display.set_caption.return_value = None
    mock_pygame.display.flip.return_value = None

    # Fonts
    mock_font = MagicMock()
    mock_font.render.return_value = MagicMock()  # Returns a surface
    mock_font.size.return_value = (100, 30)  # (width, height)
    mock_pygame.font.Font.return_value = mock_font
    mock_pygame.font.init.return_value = None

    # Drawing
    mock_pygame.draw.rect.return_value = None
    mock_pygame.draw.line.return_value = None
    mock_pygame.draw.circle.return_value = None

    # Mixer
    mock_pygame.mixer.init.return_value = None
    mock_pygame.mixer.pause.return_value = None
    mock_pygame.mixer.unpause.return_value = None

    # Events
    mock_pygame.event.get.return_value = []

    # Constants
    mock_pygame.QUIT = 256
    mock_pygame.KEYDOWN = 768
    mock_pygame.MOUSEBUTTONDOWN = 1025
    mock_pygame.MOUSEBUTTONUP = 1026
    mock_pygame.MOUSEMOTION = 1024
    mock_pygame.VIDEORESIZE = 16
    mock_pygame.RESIZABLE = 16
    mock_pygame.WINDOWFOCUSLOST = 32781
    mock_pygame.WINDOWFOCUSGAINED = 32780
    mock_pygame.K_ESCAPE = 27
    mock_pygame.K_p = 112
    mock_pygame.K_m = 109

    # Time
    mock_clock = MagicMock()
    mock_clock.tick.return_value = 16  # ~60fps
    mock_clock.get_fps.return_value = 60.0
    mock_pygame.time.Clock.return_value = mock_clock

    # Rect
    mock_pygame.Rect = MagicMock(side_effect=lambda *args: MagicMock(
        x=args[0] if args else 0,
        y=args[1] if len(args) > 1 else 0,
        width=args[2] if len(args) > 2 else 0,
        height=args[3] if len(args) > 3 else 0,
    ))

    # Surface creation
    mock_pygame.Surface.return_value = mock_surface

    return mock_pygame


@pytest.fixture(scope="session", autouse=True)
def mock_pygame_module():
    """
    Session-scoped fixture that mocks pygame before any imports.

    This runs automatically for all tests and ensures pygame
    is mocked before any renderer or audio modules are imported.
    """
    mock_pygame = create_mock_pygame()

    # Store original module if it exists
    original_pygame = sys.modules.get('pygame')

    # Install mock
    sys.modules['pygame'] = mock_pygame

    yield mock_pygame

    # Restore original (or remove mock)
    if original_pygame:
        sys.modules['pygame'] = original_pygame
    else:
        del sys.modules['pygame']


@pytest.fixture
def mock_screen(mock_pygame_module):
    """Provide a mock pygame screen surface."""
    screen = MagicMock()
    screen.get_width.return_value = 450
    screen.get_height.return_value = 1000
    screen.fill.return_value = None
    screen.blit.return_value = None
    return screen


def grid_position(col: int, row: int, radius: float = 4.0):
    """World position of a lattice slot (odd rows are shifted by one radius)."""
    odd = row % 2 == 1
    return 2 * radius * col + (radius if odd else 0), radius + 2 * radius * row


@pytest.fixture
def place_ball():
    """
    Factory that adds a resting ball to a board at a lattice slot.

    Usage: ``place_ball(board, col, row, color, first_layer=False)``
    """
    from bobble.games.bubble_shooter.entities import make_ball

    def _place(board, col, row, color=0, first_layer=False):
        x, y = grid_position(col, row, board.config.ball_radius)
        ball = make_ball(x, y, board.config.ball_radius, 0.0, 0.0, color)
        board.spawn(ball)
        if first_layer:
            board.first_layer.append(ball)
        return ball

    return _place


@pytest.fixture
def empty_board():
    """A board with no balls and no projectile."""
    from bobble.games.bubble_shooter.board import BoardState

    return BoardState(seed=1234)


@pytest.fixture
def recording_platform():
    """Platform double that records every call."""
    from bobble.core.services import PlatformInterface

    class RecordingPlatform(PlatformInterface):
        def __init__(self):
            self.scores = []
            self.events = []
            self.interstitials = []
            self.show_ads = False

        def submit_score(self, board_id, score):
            self.scores.append((board_id, score))

        def record_progression_event(self, kind, level_id, score):
            self.events.append((kind, level_id, score))

        def show_interstitial(self, on_close):
            self.interstitials.append(on_close)
            return self.show_ads

    return RecordingPlatform()


@pytest.fixture
def recording_audio():
    """Audio double that records played handles."""
    from bobble.core.services import AudioInterface

    class RecordingAudio(AudioInterface):
        def __init__(self):
            self.played = []
            self.suspended = False

        def play(self, handle, loop=False, delay_ms=0.0):
            self.played.append((handle, delay_ms))

        def suspend(self):
            self.suspended = True

        def resume(self):
            self.suspended = False

    return RecordingAudio()
