"""
Round-robin sound pools for game events.
"""

from typing import Dict, List, Optional, Sequence

from ...core.services import AudioInterface, NullAudio

IMPACT_SOUNDS = [f"impactGlass_light_{i:03d}" for i in range(5)] + \
    [f"impactGlass_medium_{i:03d}" for i in range(5)]
MEOW_SOUNDS = [f"meow{i}" for i in range(1, 20)]


class SoundPool:
    """Cycles through a list of sound handles."""

    def __init__(self, handles: Sequence[str]):
        self.handles: List[str] = list(handles)
        self._next = 0

    def next_handle(self) -> Optional[str]:
        if not self.handles:
            return None
        handle = self.handles[self._next % len(self.handles)]
        self._next += 1
        return handle


class SoundBank:
    """
    Picks the next sound from each pool and hands it to the audio backend.

    Muted banks and empty pools silently do nothing.
    """

    def __init__(
        self,
        audio: Optional[AudioInterface] = None,
        pools: Optional[Dict[str, Sequence[str]]] = None,
    ):
        self.audio = audio or NullAudio()
        if pools is None:
            pools = {"impact": IMPACT_SOUNDS, "meow": MEOW_SOUNDS}
        self.pools: Dict[str, SoundPool] = {name: SoundPool(h) for name, h in pools.items()}
        self.muted = False

    def play(self, pool: str, delay_ms: float = 0.0) -> Optional[str]:
        """
        Play the next sound of a pool.

        Returns:
            The handle played, or None if nothing was played
        """
        if self.muted or pool not in self.pools:
            return None
        handle = self.pools[pool].next_handle()
        if handle is not None:
            self.audio.play(handle, False, delay_ms)
        return handle

    def play_impact(self, delay_ms: float = 0.0) -> Optional[str]:
        return self.play("impact", delay_ms)

    def play_meow(self, delay_ms: float = 0.0) -> Optional[str]:
        return self.play("meow", delay_ms)
