"""Game state: the active level, the player, the clock and saved progress."""

from __future__ import annotations

import enum
import logging
import re
import threading
from pathlib import Path

from classdash.characters import ENEMY_HEIGHT, Corgi, Enemy, EnemyFire, Powerup
from classdash.layer import LevelData
from classdash.mathutils import WINDOW_WIDTH, clamp
from classdash.player import Player
from classdash.timekeeper import TimeKeeper

logger = logging.getLogger(__name__)

LEVEL_COUNT = 5
DEFAULT_SAVE_PATH = Path("levels.txt")
SMALL_ENTITY_HALF_HEIGHT = 32 / 2
LEVEL_FILES = (
    "../assets/visual/SunkenGardenLevel.tmx",
    "../assets/visual/Level2.tmx",
    "../assets/visual/Level3.tmx",
    "../assets/visual/Level4.tmx",
    "../assets/visual/Level5.tmx",
)

_LEADING_INT = re.compile(r"[+-]?\d+")


class GameState(enum.Enum):
    INACTIVE = enum.auto()
    ACTIVE = enum.auto()
    PAUSED = enum.auto()
    FINISHED = enum.auto()


def _parse_levels_completed(text):
    """Number of completed levels from saved text; 0 if it holds no number."""
    tokens = text.split()
    if not tokens:
        return 0
    match = _LEADING_INT.match(tokens[0])
    if match is None:
        return 0
    return int(clamp(int(match.group()), 0, LEVEL_COUNT))


def _rest_on_ground(entity, level, start_pos, half_height):
    ground = level.ground_level_below(entity.hitbox + start_pos, half_height)
    if ground is not None:
        entity.ground_level = ground


def spawn_entities(game_logic, level):
    """Create the enemies, corgis and powerups described by ``level``'s data.

    Every entity is placed to rest on the first solid tile below its spawn
    point. All enemies share a single pool of projectiles.
    """
    fire = EnemyFire()
    level.enemies.clear()
    level.corgis.clear()
    level.powerups.clear()

    for data in level.enemy_data:
        enemy = Enemy(
            level,
            data.start_pos,
            data.track_start,
            data.track_end,
            data.can_shoot,
            data.is_biker,
            fire=fire,
        )
        _rest_on_ground(enemy, level, data.start_pos, ENEMY_HEIGHT / 2)
        level.enemies.append(enemy)

    for data in level.corgi_data:
        corgi = Corgi(data.start_pos, data.track_start, data.track_end)
        _rest_on_ground(corgi, level, data.start_pos, SMALL_ENTITY_HALF_HEIGHT)
        level.corgis.append(corgi)

    for data in level.powerup_data:
        powerup = Powerup(data.start_pos, data.track_start, data.track_end)
        _rest_on_ground(powerup, level, data.start_pos, SMALL_ENTITY_HALF_HEIGHT)
        level.powerups.append(powerup)


class GameLogic:
    """Runs the level being played and keeps track of saved progress.

    With ``threaded_timer`` the level clock runs on a background thread, as in
    play; without it the clock only advances when stepped by the caller.
    """

    def __init__(self, save_path=DEFAULT_SAVE_PATH, sound_manager=None,
                 threaded_timer=True):
        self.save_path = Path(save_path)
        self.sound_manager = sound_manager
        self.threaded_timer = threaded_timer
        self.level_data = [LevelData(path) for path in LEVEL_FILES]
        self.levels_completed = 0
        self.level_index = 0
        self.state = GameState.INACTIVE
        self.level = None
        self.player = None
        self.timer = None

    @property
    def is_level_active(self):
        return self.state == GameState.ACTIVE

    @property
    def is_level_paused(self):
        return self.state == GameState.PAUSED

    @property
    def is_no_level_active(self):
        return self.state == GameState.INACTIVE

    @property
    def is_level_finished(self):
        return self.state == GameState.FINISHED

    def init(self):
        """Load the number of completed levels from the save file."""
        try:
            text = self.save_path.read_text(encoding="utf-8")
        except OSError:
            text = ""
        self.levels_completed = _parse_levels_completed(text)

    def run_tick(self, ms):
        """Advance everything in the active level by ``ms`` milliseconds."""
        if not self.is_level_active:
            return
        level = self.level
        self.player.move(ms)

        for enemy in list(level.enemies):
            if not enemy.can_shoot:
                enemy.move_on_track(ms)
            enemy.update_projectiles(ms)
            if enemy.detect_player(self.player, ms):
                enemy.shoot()

        for corgi in level.corgis:
            corgi.move_on_track(ms)
        for powerup in level.powerups:
            powerup.animate()

        level.remove_dead_enemies()
        level.remove_collected_powerups()

    def scroll_offset(self):
        """Horizontal camera offset keeping the player centred within the level."""
        level_width = self.level.dimensions.x
        return clamp(
            self.player.position.x - WINDOW_WIDTH / 2, 0, level_width - WINDOW_WIDTH
        )

    def _start_timer(self):
        if self.threaded_timer:
            threading.Thread(target=self.timer.begin_timer, daemon=True).start()

    def activate(self, level):
        """Start playing ``level``, a loaded level with its spawn data."""
        self.level = level
        self.timer = TimeKeeper(sound_manager=self.sound_manager)
        self._start_timer()
        spawn_entities(self, level)
        self.player = Player(self, level.player_spawn, sound_manager=self.sound_manager)
        self.state = GameState.ACTIVE

    def pause(self):
        self.player.stop_moving()
        self.state = GameState.PAUSED
        self.timer.pause_timer()

    def resume(self):
        self.state = GameState.ACTIVE
        self._start_timer()

    def quit_level(self):
        self.state = GameState.INACTIVE
        if self.timer is not None:
            self.timer.pause_timer()

    def set_levels_completed(self, levels):
        self.levels_completed = levels
        self.save_levels_completed()

    def save_levels_completed(self):
        self.save_path.write_text(str(self.levels_completed), encoding="utf-8")

    def stop_level_reached_end(self):
        """Freeze the level once the player reaches its end point."""
        self.player.stop_moving()
        self.timer.pause_timer()
        self.state = GameState.FINISHED

    def end_level(self):
        """Leave the finished level, recording it as completed."""
        logger.debug("end level")
        self.state = GameState.INACTIVE
        if self.level_index >= self.levels_completed:
            self.set_levels_completed(self.level_index + 1)