"""
pygame.mixer backed audio for Bubble Shooter.
"""

import threading
from pathlib import Path
from typing import Dict, Optional, Union

import pygame

from ...core.services import AudioInterface

SOUND_EXTENSIONS = (".ogg", ".wav", ".mp3")


class PygameAudio(AudioInterface):
    """
    Plays sound files from an assets directory through pygame.mixer.

    Sounds are keyed by file stem (``meow3.ogg`` -> ``"meow3"``). If the mixer
    cannot start or the directory is missing, every call is a no-op.
    Delayed sounds are started from short-lived timer threads.
    """

    def __init__(self, assets_dir: Union[str, Path] = "assets", volume: float = 0.2):
        self.assets_dir = Path(assets_dir)
        self.volume = volume
        self.available = False
        self.suspended = False
        self.sounds: Dict[str, "pygame.mixer.Sound"] = {}

        try:
            pygame.mixer.init()
            self.available = True
        except pygame.error as e:
            print(f"[Audio] Mixer unavailable, running silent: {e}")
            return

        self._load_sounds()

    def _load_sounds(self) -> None:
        if not self.assets_dir.is_dir():
            print(f"[Audio] No sound directory at {self.assets_dir}")
            return

        for path in sorted(self.assets_dir.iterdir()):
            if path.suffix.lower() not in SOUND_EXTENSIONS:
                continue
            try:
                sound = pygame.mixer.Sound(str(path))
            except pygame.error as e:
                print(f"[Audio] Skipping {path.name}: {e}")
                continue
            sound.set_volume(self.volume)
            self.sounds[path.stem] = sound

        print(f"[Audio] Loaded {len(self.sounds)} sounds")

    def play(self, handle: str, loop: bool = False, delay_ms: float = 0.0) -> None:
        sound: Optional["pygame.mixer.Sound"] = self.sounds.get(handle)
        if not self.available or self.suspended or sound is None:
            return

        loops = -1 if loop else 0
        if delay_ms > 0:
            timer = threading.Timer(delay_ms / 1000.0, self._play_later, args=(sound, loops))
            timer.daemon = True
            timer.start()
        else:
            sound.play(loops=loops)

    def _play_later(self, sound: "pygame.mixer.Sound", loops: int) -> None:
        # Suspended while the timer was pending
        if self.suspended:
            return
        sound.play(loops=loops)

    def suspend(self) -> None:
        self.suspended = True
        if self.available:
            pygame.mixer.pause()

    def resume(self) -> None:
        self.suspended = False
        if self.available:
            pygame.mixer.unpause()
