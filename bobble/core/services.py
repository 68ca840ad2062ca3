"""
Abstract service interfaces for collaborators outside the game core.

Games talk to audio, save data and platform features (leaderboards,
analytics, ads) only through these interfaces. Every one of them is
optional: the Null implementations do nothing, and a game must keep running
when a service is missing or fails.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Tuple


class AudioInterface(ABC):
    """Fire-and-forget sound playback."""

    @abstractmethod
    def play(self, handle: str, loop: bool = False, delay_ms: float = 0.0) -> None:
        """
        Play a loaded sound.

        Args:
            handle: Name of the sound to play
            loop: Repeat until stopped
            delay_ms: Start this many milliseconds from now
        """
        pass

    def suspend(self) -> None:
        """Silence all output (pause, hidden window, mute)."""
        pass

    def resume(self) -> None:
        """Undo ``suspend``."""
        pass


class PersistenceInterface(ABC):
    """Key-value storage for progress between sessions."""

    @abstractmethod
    def get_last_difficulty(self) -> int:
        pass

    @abstractmethod
    def get_last_score(self) -> int:
        pass

    @abstractmethod
    def save_progress(self, difficulty: int, score: int) -> None:
        pass


class PlatformInterface(ABC):
    """Leaderboard, analytics and ad hooks of a hosting platform."""

    def submit_score(self, board_id: str, score: int) -> None:
        """Post a score to a leaderboard."""
        pass

    def record_progression_event(self, kind: str, level_id: str, score: int) -> None:
        """
        Report level progress to analytics.

        Args:
            kind: "Start", "Fail" or "Complete"
            level_id: Zero-padded level id such as "level_003"
            score: Score at the time of the event
        """
        pass

    def show_interstitial(self, on_close: Callable[[], None]) -> bool:
        """
        Show a full-screen ad.

        Returns:
            True if an ad is showing and ``on_close`` will be called when it
            is dismissed; False if no ad was shown (``on_close`` is not called)
        """
        return False


class NullAudio(AudioInterface):
    """Audio that plays nothing."""

    def play(self, handle: str, loop: bool = False, delay_ms: float = 0.0) -> None:
        pass


class NullPlatform(PlatformInterface):
    """Platform with no leaderboard, analytics or ads."""
    pass


class MemoryPersistence(PersistenceInterface):
    """Progress kept in memory for the lifetime of the process."""

    def __init__(self, difficulty: int = 0, score: int = 0):
        self._data: Dict[str, int] = {"last_difficulty": difficulty, "last_score": score}

    def get_last_difficulty(self) -> int:
        return self._data["last_difficulty"]

    def get_last_score(self) -> int:
        return self._data["last_score"]

    def save_progress(self, difficulty: int, score: int) -> None:
        self._data["last_difficulty"] = difficulty
        self._data["last_score"] = score

    def snapshot(self) -> Tuple[int, int]:
        return self._data["last_difficulty"], self._data["last_score"]
