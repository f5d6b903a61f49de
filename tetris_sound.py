"""Fire-and-forget sound effects and background music on pygame.mixer"""
import logging
import os
import threading
from typing import Dict, Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

log = logging.getLogger(__name__)

BACKGROUND = "background"

SOUND_FILES: Dict[str, str] = {
    BACKGROUND: "background_sound_01.wav",
    "soft-drop": "soft_drop_2.wav",
    "hard-drop": "hard_drop.wav",
    "lock": "lock_piece.wav",
    "line-clear": "line_clear.wav",
    "tetris-clear": "4lines_clear.wav",
    "level-up": "level_up.wav",
    "game-over": "game_over.wav",
}


class SoundTrigger:
    """Plays effects by event name. Never blocks and never raises.

    Events: background-start, background-stop, and every key of SOUND_FILES.
    A missing audio device or file just disables that sound.
    """

    def __init__(self, sound_dir: str, enabled: bool = True, level_up_delay: float = 1.0):
        self.sound_dir = sound_dir
        self.enabled = enabled
        self.level_up_delay = level_up_delay
        self._sounds: Dict[str, Optional[pygame.mixer.Sound]] = {}
        self._mixer_ok: Optional[bool] = None
        self._closed = False

    def _mixer(self) -> bool:
        if self._mixer_ok is None:
            try:
                pygame.mixer.init()
                self._mixer_ok = True
            except pygame.error as e:
                log.warning("audio disabled, mixer init failed: %s", e)
                self._mixer_ok = False
        return self._mixer_ok

    def _sound(self, name: str) -> Optional[pygame.mixer.Sound]:
        if name not in self._sounds:
            path = os.path.join(self.sound_dir, SOUND_FILES[name])
            try:
                self._sounds[name] = pygame.mixer.Sound(path)
            except (pygame.error, OSError) as e:
                log.warning("cannot load sound %s: %s", path, e)
                self._sounds[name] = None
        return self._sounds[name]

    def _play_now(self, name: str, loops: int = 0) -> None:
        # A level-up timer can fire after close()
        if self._closed or not self._mixer():
            return
        sound = self._sound(name)
        if sound is not None:
            sound.play(loops=loops)

    def play(self, event: str) -> None:
        if not self.enabled:
            return
        if event == "background-start":
            self._play_now(BACKGROUND, loops=-1)
        elif event == "background-stop":
            sound = self._sounds.get(BACKGROUND)
            if sound is not None:
                sound.stop()
        elif event == "level-up":
            # Delayed so it doesn't overlap the line clear effect
            timer = threading.Timer(self.level_up_delay, self._play_now, args=(event,))
            timer.daemon = True
            timer.start()
        elif event in SOUND_FILES:
            self._play_now(event)
        else:
            log.debug("unknown sound event %r", event)

    def close(self) -> None:
        self.play("background-stop")
        self._closed = True
        if self._mixer_ok:
            pygame.mixer.quit()
            self._mixer_ok = None
            self._sounds.clear()
