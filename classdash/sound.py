"""Sound effects and music playback."""

from __future__ import annotations

import enum
import functools
import logging
import os
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

logger = logging.getLogger(__name__)

DEFAULT_ASSET_DIR = Path("../assets/audio")
MIXER_CHANNELS = 16


class SoundError(RuntimeError):
    """Raised when the audio mixer cannot be started."""


class SoundEffect(enum.Enum):
    JUMP = 0
    SHOOT = 1
    BUTTON_SWITCH = 2
    BUTTON_SELECT = 3
    LEVEL_COMPLETE = 4
    LEVEL_LOSE = 5
    CLOCK_TICK = 6
    POWERUP = 7
    DAMAGE = 8


class MusicTrack(enum.Enum):
    TITLE_THEME = 0
    LEVEL_1 = 1
    LEVEL_2 = 2
    LEVEL_3 = 3
    LEVEL_4 = 4
    LEVEL_5 = 5
    FINALE = 6


SOUND_FILES = {
    SoundEffect.JUMP: "jump.wav",
    SoundEffect.SHOOT: "shoot.wav",
    SoundEffect.BUTTON_SWITCH: "button-switch.wav",
    SoundEffect.BUTTON_SELECT: "button-select.wav",
    SoundEffect.LEVEL_COMPLETE: "level-complete.wav",
    SoundEffect.LEVEL_LOSE: "level-lose.wav",
    SoundEffect.CLOCK_TICK: "clock-tick.wav",
    SoundEffect.POWERUP: "powerup.mp3",
    SoundEffect.DAMAGE: "attack_damage.mp3",
}

MUSIC_FILES = {
    MusicTrack.TITLE_THEME: "alma-mater.mp3",
    MusicTrack.LEVEL_1: "Level-1.mp3",
    MusicTrack.LEVEL_2: "Level-2.mp3",
    MusicTrack.LEVEL_3: "Level-3.mp3",
    MusicTrack.LEVEL_4: "Level-4.mp3",
    MusicTrack.LEVEL_5: "Level-5.mp3",
    MusicTrack.FINALE: "Finale.mp3",
}


class SoundManager:
    """Owns loaded sounds and music; without a started mixer it only tracks state."""

    def __init__(self, asset_dir=DEFAULT_ASSET_DIR):
        self.asset_dir = Path(asset_dir)
        self.sound_effects = {}
        self.music_tracks = {}
        self.current_music = MusicTrack.TITLE_THEME
        self.music_playing = False
        self.initialized = False

    def initialize(self):
        """Start the mixer and load every sound and track that can be found."""
        try:
            pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=2048)
        except pygame.error as exc:
            raise SoundError(f"mixer could not initialize: {exc}") from exc
        pygame.mixer.set_num_channels(MIXER_CHANNELS)
        self.initialized = True
        self._load_sounds()

    def _load_sounds(self):
        for effect, name in SOUND_FILES.items():
            path = self.asset_dir / name
            try:
                self.sound_effects[effect] = pygame.mixer.Sound(str(path))
            except (pygame.error, FileNotFoundError) as exc:
                logger.warning("failed to load sound effect %s: %s", path, exc)

        for track, name in MUSIC_FILES.items():
            path = self.asset_dir / name
            if path.is_file():
                self.music_tracks[track] = str(path)
            else:
                logger.warning("failed to load music %s", path)

    def play_sound(self, effect, loop=False):
        """Play ``effect`` once, or forever if ``loop``; unknown effects are ignored."""
        sound = self.sound_effects.get(effect)
        if sound is not None:
            sound.play(loops=-1 if loop else 0)

    def play_music(self, track, loop=True):
        """Switch to ``track`` unless it is already playing."""
        if self.current_music == track and self.music_playing:
            return
        path = self.music_tracks.get(track)
        if path is not None:
            pygame.mixer.music.stop()
            pygame.mixer.music.load(path)
            pygame.mixer.music.play(loops=-1 if loop else 0)
            self.current_music = track
        self.music_playing = True

    def stop_music(self):
        """Stop the music and every sound effect channel."""
        if self.initialized:
            pygame.mixer.music.stop()
            pygame.mixer.stop()
        self.music_playing = False

    def pause_music(self):
        if not self.initialized:
            return
        if pygame.mixer.music.get_busy():
            pygame.mixer.music.pause()
        if pygame.mixer.get_busy():
            pygame.mixer.pause()

    def resume_music(self):
        if not self.initialized:
            return
        pygame.mixer.music.unpause()
        pygame.mixer.unpause()

    def cleanup(self):
        """Forget all loaded audio and shut the mixer down."""
        self.sound_effects.clear()
        self.music_tracks.clear()
        if self.initialized:
            pygame.mixer.quit()
            self.initialized = False


@functools.cache
def get_instance():
    """The shared sound manager."""
    return SoundManager()