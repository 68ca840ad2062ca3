"""
Bubble Shooter Game Core - Pure game logic implementing GameInterface.

Frame-driven: a host calls ``update(dt_ms)`` once per display refresh and
forwards pointer events in screen coordinates. Agents can instead use
``step(action)``, which fires at one of a fixed set of aim angles and runs
frames until the board settles.
"""

import math
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...core.game_interface import GameInterface, GameMetadata
from ...core.services import (
    AudioInterface,
    MemoryPersistence,
    NullPlatform,
    PersistenceInterface,
    PlatformInterface,
)
from .board import BoardState, aim_direction
from .config import BubbleShooterConfig
from .entities import BEHAVIOURS, EntityKind, FrameContext, update_entity
from .resolution import TurnResult, find_collision, resolve_turn
from .sounds import SoundBank
from .viewport import Viewport


class GamePhase(IntEnum):
    """Top-level game phases."""
    START = 0  # "Press to start" splash
    MENU = 1   # Continue / new game
    IDLE = 2   # Waiting for the player to aim and fire
    SHOT = 3   # Projectile in flight
    WIN = 4    # Level cleared
    FAIL = 5   # A ball crossed the danger line


PLAYING_PHASES = (GamePhase.IDLE, GamePhase.SHOT)

PRIMARY_BUTTON = 0
SECONDARY_BUTTON = 2

LEADERBOARD = "puzzlebobble"


@dataclass
class Button:
    """Clickable world-space rectangle."""
    name: str
    x: float
    y: float
    width: float
    height: float

    def contains(self, x: float, y: float) -> bool:
        return self.x < x <= self.x + self.width and self.y < y <= self.y + self.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


def level_id(difficulty: int) -> str:
    return f"level_{difficulty:03d}"


class BubbleShooterGame(GameInterface):
    """
    Core Bubble Shooter logic implementing GameInterface.

    The player fires coloured balls into a hex-packed grid hanging from the
    ceiling. Three or more connected balls of one colour pop, and anything
    left without a path to the top row falls. The level is won when the
    board is empty and lost when a ball drifts past the danger line.
    """

    @classmethod
    def get_metadata(cls) -> GameMetadata:
        """Return metadata about the Bubble Shooter game."""
        return GameMetadata(
            name="Bubble Shooter",
            id="bubble_shooter",
            description="Pop groups of three or more same-coloured balls before the board reaches the bottom",
            version="1.0.0",
            min_players=1,
            max_players=1,
            supports_human=True,
        )

    def __init__(
        self,
        config: Optional[BubbleShooterConfig] = None,
        audio: Optional[AudioInterface] = None,
        persistence: Optional[PersistenceInterface] = None,
        platform: Optional[PlatformInterface] = None,
        viewport: Optional[Viewport] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the game.

        Args:
            config: Game configuration (defaults used when omitted)
            audio: Sound backend; silent when omitted
            persistence: Progress storage; in-memory when omitted
            platform: Leaderboard/analytics/ads hooks; none when omitted
            viewport: Screen transform used for pointer events
            seed: Seed for level layout and colour picks
        """
        self.config = config or BubbleShooterConfig()
        self.config.validate()

        self.sounds = SoundBank(audio)
        self.persistence = persistence or MemoryPersistence()
        self.platform = platform or NullPlatform()
        self.viewport = viewport or Viewport(world_height=self.config.level_height)
        self.rng = random.Random(seed)

        half_width = self.config.level_width / 2
        self.menu_buttons: List[Button] = [
            Button("continue", -0.9 * half_width, 35, 0.9 * self.config.level_width, 8),
            Button("new_game", -0.9 * half_width, 45, 0.9 * self.config.level_width, 8),
        ]
        self.hud_buttons: List[Button] = [
            Button("menu", -0.9 * half_width, 2, 8, 8),
            Button("pause", -0.9 * half_width + 10, 2, 8, 8),
            Button("mute", -0.9 * half_width + 20, 2, 8, 8),
        ]

        # Game state (initialized in reset)
        self.board = BoardState(self.config, rng=self.rng)
        self.phase = GamePhase.START
        self.paused = False
        self.hidden = False
        self.show_trajectory = False
        self.cursor: Tuple[float, float] = (self.config.launch_x, 0.0)
        self.last_result: Optional[TurnResult] = None
        self.frame_count = 0
        self._points_since_step = 0

        # For replay recording
        self.history: List[Dict[str, Any]] = []
        self.recording: bool = False

        self.reset()

    @property
    def action_space_size(self) -> int:
        """Aim angles plus one colour swap."""
        return self.config.aim_actions + 1

    @property
    def swap_action(self) -> int:
        return self.config.aim_actions

    @property
    def action_names(self) -> List[str]:
        """Human-readable action names."""
        names = [f"Aim {round(math.degrees(self._aim_angle(a)))}deg"
                 for a in range(self.config.aim_actions)]
        return names + ["Swap"]

    @property
    def muted(self) -> bool:
        return self.sounds.muted

    def reset(self) -> Dict[str, Any]:
        """
        Reset to a fresh session, resuming saved progress if there is any.

        Returns:
            Dictionary containing the initial game state
        """
        last_difficulty = self._call_service(self.persistence, "get_last_difficulty", default=0)
        last_score = self._call_service(self.persistence, "get_last_score", default=0)

        self.board = BoardState(self.config, rng=self.rng)
        if last_difficulty > 1:
            self.board.difficulty = last_difficulty
            self.phase = GamePhase.MENU
        else:
            self.phase = GamePhase.START

        if last_score > 0:
            self.board.score = last_score
            self.board.level_start_score = last_score

        self.paused = False
        self.show_trajectory = False
        self.last_result = None
        self.frame_count = 0
        self._points_since_step = 0
        self.board.build_level()

        self.history = []
        if self.recording:
            self._record_frame()

        return self.get_state()

    # Frame loop

    def update(self, dt: float) -> None:
        """
        Advance the simulation by one frame.

        Args:
            dt: Milliseconds since the previous frame (clamped)
        """
        dt = max(0.0, min(dt, self.config.max_delta_time))
        self.frame_count += 1
        board = self.board

        if board.pending_respawn:
            board.respawn_projectile()
            self.show_trajectory = False

        suspended = self.paused or self.hidden
        frame = FrameContext(
            suspended=suspended,
            playing=self.phase in PLAYING_PHASES,
            shot_in_flight=self.phase == GamePhase.SHOT,
            on_bounce=self._on_bounce,
        )
        for entity in list(board.entities):
            update_entity(entity, dt, board, frame)

        if suspended:
            return

        if self.phase in PLAYING_PHASES:
            top = self.viewport.screen_to_world(0, 0)[1]
            board.pull_down(dt, top)

        if self.phase == GamePhase.SHOT:
            struck = find_collision(board)
            if struck is not None:
                self._resolve(struck)
            elif self._projectile_left_board():
                board.pending_respawn = True
                self.phase = GamePhase.IDLE

        board.apply_removals()

        if self.phase == GamePhase.IDLE:
            self._check_fail()
        if self.phase == GamePhase.IDLE:
            self._check_win()

        if self.recording:
            self._record_frame()

    def _projectile_left_board(self) -> bool:
        projectile = self.board.projectile
        if projectile is None:
            return False
        return projectile.y < 0 or projectile.y > self.config.level_height

    def _resolve(self, struck) -> TurnResult:
        self.sounds.play_impact()
        self.sounds.play_meow()

        result = resolve_turn(self.board, struck)
        if result.is_match:
            offset = 0.0
            for _ in range(min(len(result.matched), 3)):
                offset += 75 + self.rng.random() * 50
                self.sounds.play_meow(offset)

        self.last_result = result
        self._points_since_step += result.score_gained
        self.phase = GamePhase.IDLE
        return result

    def _on_bounce(self) -> None:
        self.sounds.play_impact()
        self.sounds.play_meow()

    def _check_fail(self) -> None:
        board = self.board
        for ball in board.balls():
            if ball.y + ball.radius > self.config.danger_line:
                board.score = board.level_start_score
                self.phase = GamePhase.FAIL
                self.show_trajectory = False
                print(f"[Game] Level {board.difficulty} failed, score back to {board.score}")
                self._call_service(self.platform, "record_progression_event",
                                   "Fail", level_id(board.difficulty), board.score)
                return

    def _check_win(self) -> None:
        board = self.board
        if board.board_entity_count() > 0:
            return

        board.difficulty += 1
        board.level_start_score = board.score
        self.phase = GamePhase.WIN
        self.show_trajectory = False
        print(f"[Game] Level cleared, advancing to level {board.difficulty} with score {board.score}")

        self._call_service(self.persistence, "save_progress", board.difficulty, board.score)
        self._call_service(self.platform, "submit_score", LEADERBOARD, board.score)
        self._call_service(self.platform, "record_progression_event",
                           "Complete", level_id(board.difficulty), board.score)

    def _call_service(self, service: Any, method: str, *args: Any, default: Any = None) -> Any:
        """Call an optional collaborator; failures are reported, never raised."""
        try:
            return getattr(service, method)(*args)
        except Exception as e:
            if isinstance(service, PersistenceInterface):
                tag = "Persistence"
            elif isinstance(service, AudioInterface):
                tag = "Audio"
            else:
                tag = "Platform"
            print(f"[{tag}] {type(service).__name__}.{method} failed: {e}")
            return default

    # Phase transitions

    def start_level(self) -> None:
        """Leave the start splash and begin play."""
        if self.phase != GamePhase.START:
            return
        self.phase = GamePhase.IDLE
        self._call_service(self.platform, "record_progression_event",
                           "Start", level_id(self.board.difficulty), self.board.score)

    def continue_game(self) -> None:
        """Resume saved progress from the menu."""
        if self.phase == GamePhase.MENU:
            self.phase = GamePhase.IDLE

    def new_game(self) -> None:
        """Start over from level 1 with no score."""
        board = self.board
        board.difficulty = 1
        board.score = 0
        board.level_start_score = 0
        self.show_trajectory = False
        board.build_level()
        self.phase = GamePhase.IDLE

    def open_menu(self) -> None:
        if self.phase == GamePhase.IDLE:
            self.phase = GamePhase.MENU
            self.show_trajectory = False

    def confirm_result(self) -> None:
        """
        Dismiss the win/fail screen: rebuild the level and return to START.

        If the platform shows an interstitial ad, play stays paused until it
        is closed.
        """
        if self.phase not in (GamePhase.WIN, GamePhase.FAIL):
            return

        def finish() -> None:
            self.board.build_level()
            self.paused = False
            self.phase = GamePhase.START
            self._sync_audio()

        self.paused = True
        self._sync_audio()
        shown = self._call_service(self.platform, "show_interstitial", finish, default=False)
        if not shown:
            finish()

    def toggle_pause(self) -> None:
        self.paused = not self.paused
        self._sync_audio()

    def toggle_mute(self) -> None:
        self.sounds.muted = not self.sounds.muted
        self._sync_audio()

    def set_hidden(self, hidden: bool) -> None:
        """Mark the window as backgrounded (freezes play like a pause)."""
        self.hidden = hidden
        self._sync_audio()

    def _sync_audio(self) -> None:
        audio = self.sounds.audio
        if self.hidden or self.paused or self.sounds.muted:
            self._call_service(audio, "suspend")
        else:
            self._call_service(audio, "resume")

    # Aiming

    def can_fire(self) -> bool:
        return (
            self.phase == GamePhase.IDLE
            and not self.paused
            and not self.hidden
            and not self.board.pending_respawn
            and self.board.projectile is not None
        )

    def fire_at(self, world_x: float, world_y: float) -> bool:
        """
        Launch the projectile toward a world-space aim point.

        Returns:
            True if a shot was fired
        """
        if not self.can_fire():
            return False

        dx, dy = aim_direction(self.config, world_x, world_y)
        projectile = self.board.projectile
        projectile.vx = dx * self.config.projectile_speed
        projectile.vy = dy * self.config.projectile_speed
        self.phase = GamePhase.SHOT
        self.show_trajectory = False
        return True

    def swap(self) -> bool:
        """Exchange the loaded colour with the next one."""
        if not self.can_fire():
            return False
        self.board.swap_projectile()
        return True

    def trajectory(self) -> List[Tuple[float, float]]:
        """Aim preview dots, empty unless the player is aiming."""
        if not self.show_trajectory or self.phase != GamePhase.IDLE:
            return []
        return self.board.predict_trajectory(*self.cursor)

    # Pointer input (screen coordinates)

    def _hit_button(self, buttons: List[Button], x: float, y: float) -> Optional[Button]:
        for button in buttons:
            if button.contains(x, y):
                return button
        return None

    def _visible_buttons(self) -> List[Button]:
        if self.phase == GamePhase.MENU:
            return self.menu_buttons
        if self.phase in PLAYING_PHASES:
            return self.hud_buttons
        return []

    def _track_pointer(self, x: float, y: float, aiming: bool) -> None:
        if self.paused or self.hidden or self.phase == GamePhase.SHOT:
            return
        wx, wy = self.viewport.screen_to_world(x, y)
        if self._hit_button(self._visible_buttons(), wx, wy) is not None:
            return
        self.cursor = (wx, wy)
        self.show_trajectory = (
            aiming and self.phase == GamePhase.IDLE and wy < self.config.danger_line
        )

    def pointer_down(self, x: float, y: float, button: int = PRIMARY_BUTTON) -> None:
        self._track_pointer(x, y, button == PRIMARY_BUTTON)

    def pointer_move(self, x: float, y: float, buttons: int = 0) -> None:
        """``buttons`` is a bit mask; 1 means the primary button is held."""
        self._track_pointer(x, y, buttons == 1)

    def pointer_up(self, x: float, y: float, button: int = PRIMARY_BUTTON) -> None:
        wx, wy = self.viewport.screen_to_world(x, y)
        self.click(wx, wy, button)

    def click(self, wx: float, wy: float, button: int = PRIMARY_BUTTON) -> None:
        """Handle a released pointer at a world-space position."""
        self.show_trajectory = False

        clicked = self._hit_button(self._visible_buttons(), wx, wy)
        if clicked is not None and button == PRIMARY_BUTTON:
            self._press(clicked.name)
            return

        if self.paused or self.hidden:
            return

        if self.phase == GamePhase.START:
            self.start_level()
        elif self.phase in (GamePhase.WIN, GamePhase.FAIL):
            self.confirm_result()
        elif self.phase == GamePhase.IDLE:
            self.cursor = (wx, wy)
            in_strip = wy >= self.config.danger_line
            if button == PRIMARY_BUTTON and not in_strip:
                self.fire_at(wx, wy)
            elif button == SECONDARY_BUTTON or (button == PRIMARY_BUTTON and in_strip):
                self.swap()

    def _press(self, name: str) -> None:
        actions: Dict[str, Callable[[], None]] = {
            "continue": self.continue_game,
            "new_game": self.new_game,
            "menu": self.open_menu,
            "pause": self.toggle_pause,
            "mute": self.toggle_mute,
        }
        actions[name]()

    # Agent interface

    def _aim_angle(self, action: int) -> float:
        """Angle above the horizontal for an aim action, 10..170 degrees."""
        count = self.config.aim_actions
        if count == 1:
            return math.pi / 2
        return math.pi * (0.1 + 0.8 * action / (count - 1))

    def aim_point(self, action: int) -> Tuple[float, float]:
        """World-space aim point that fires along the action's angle."""
        angle = self._aim_angle(action)
        reach = 50.0
        return (
            self.config.launch_x + reach * math.cos(angle),
            self.config.aim_origin_y - reach * math.sin(angle),
        )

    def _board_settled(self) -> bool:
        if self.phase != GamePhase.IDLE or self.board.pending_respawn:
            return False
        return not any(
            BEHAVIOURS[e.kind].counts_as_board and e.kind != EntityKind.BALL
            for e in self.board.entities
        )

    def run_until_settled(self) -> int:
        """
        Run fixed-length frames until the shot resolves and debris is gone.

        Returns:
            Number of frames simulated
        """
        frames = 0
        while frames < self.config.max_settle_frames:
            self.update(self.config.step_delta_time)
            frames += 1
            if self.phase in (GamePhase.WIN, GamePhase.FAIL) or self._board_settled():
                break
        return frames

    def step(self, action: int) -> Tuple[Dict[str, Any], float, bool, Dict[str, Any]]:
        """
        Execute one agent decision.

        Outside of play any action just advances the screen (start, menu,
        win/fail). In play, aim actions fire and run until the board settles;
        the swap action exchanges colours without firing.

        Args:
            action: 0..aim_actions-1 to fire, aim_actions to swap

        Returns:
            Tuple of (state, reward, done, info)
        """
        if not self.is_valid_action(action):
            raise ValueError(f"Invalid action {action} for {self.action_space_size} actions")

        self._points_since_step = 0
        reward = 0.0

        if self.phase in (GamePhase.WIN, GamePhase.FAIL):
            self.confirm_result()
        if self.phase == GamePhase.MENU:
            self.continue_game()
        if self.phase == GamePhase.START:
            self.start_level()

        if self.phase == GamePhase.IDLE:
            if action == self.swap_action:
                self.swap()
            elif self.fire_at(*self.aim_point(action)):
                reward += self.config.reward_shot
                self.run_until_settled()

        reward += self._points_since_step * self.config.reward_per_point
        if self.phase == GamePhase.WIN:
            reward += self.config.reward_win
        elif self.phase == GamePhase.FAIL:
            reward += self.config.reward_fail

        done = self.phase in (GamePhase.WIN, GamePhase.FAIL)
        info = {
            "score": self.board.score,
            "difficulty": self.board.difficulty,
            "phase": self.phase.name,
            "points": self._points_since_step,
        }
        return self.get_state(), reward, done, info

    def is_valid_action(self, action: int) -> bool:
        """Check if an action is valid."""
        return 0 <= action < self.action_space_size

    def start_recording(self) -> None:
        """Start recording game history for replay."""
        self.recording = True
        self.history = []
        self._record_frame()

    def stop_recording(self) -> List[Dict[str, Any]]:
        """Stop recording and return the history."""
        self.recording = False
        return self.history

    def _record_frame(self) -> None:
        """Record the current frame to history."""
        self.history.append(self.get_state())

    def get_state(self) -> Dict[str, Any]:
        """Get current game state for rendering or AI."""
        board = self.board
        entities = sorted(board.entities, key=lambda e: BEHAVIOURS[e.kind].layer)
        show_buttons = self._visible_buttons()
        return {
            "phase": int(self.phase),
            "phase_name": self.phase.name,
            "entities": [e.to_dict() for e in entities],
            "first_layer": [ball.id for ball in board.first_layer],
            "projectile": board.projectile.to_dict() if board.projectile else None,
            "next_projectile_type": board.next_projectile_type,
            "trajectory": [list(point) for point in self.trajectory()],
            "score": board.score,
            "level_start_score": board.level_start_score,
            "difficulty": board.difficulty,
            "balls_remaining": len(board.balls()),
            "paused": self.paused,
            "hidden": self.hidden,
            "muted": self.sounds.muted,
            "buttons": [b.to_dict() for b in show_buttons],
            "level_width": self.config.level_width,
            "level_height": self.config.level_height,
            "ball_radius": self.config.ball_radius,
            "danger_line": self.config.danger_line,
            "launch": [self.config.launch_x, self.config.launch_y],
            "frame": self.frame_count,
        }

    def get_score(self) -> int:
        """Get current game score."""
        return self.board.score
