"""The player character: movement, jumping, shooting and collisions."""

from __future__ import annotations

import logging
import math

from classdash.bounding_box import BoundingBox
from classdash.characters import GRAVITY, Character
from classdash.mathutils import TILE_SIZE, WINDOW_HEIGHT
from classdash.projectiles import MoveDirection, Projectile
from classdash.sound import SoundEffect, get_instance
from classdash.vector2 import Vector2

logger = logging.getLogger(__name__)

PLAYER_WIDTH = 32
PLAYER_HEIGHT = 64
NORMAL_SPEED = 200.0
REDUCED_SPEED = 100.0
INCREASED_SPEED = 300.0
JUMP_VELOCITY = -500
PROJECTILE_VELOCITY = 300
MAX_PROJECTILES = 3
PROJECTILE_DELAY = 500
INVINCIBILITY_FRAMES = 1000
SPEED_FRAMES = 3000
OFF_MAP_HEIGHT = WINDOW_HEIGHT + 100
FALL_RESPAWN_PENALTY = 10
ENEMY_HIT_PENALTY = 5
RESPAWN_SHIFT = 10
FLIPPED_HITBOX_X = -12
NO_FALL_HEIGHT = -1000
GROUND_TOLERANCE = 4
SCAN_STEP = TILE_SIZE // 2


def _steps(start, stop, step=SCAN_STEP):
    """Values from ``start`` up to and including ``stop`` in increments of ``step``."""
    value = start
    while value <= stop:
        yield value
        value += step


def _cell(x, y):
    return Vector2(math.floor(x / TILE_SIZE), math.floor(y / TILE_SIZE))


class Player(Character):
    """The character controlled by the person playing.

    Timed effects (shot cooldown, invincibility, speed changes) count down in
    game time: :meth:`move` advances them, as does :meth:`update_timers`.
    """

    base_hitbox = BoundingBox(
        Vector2(-4, -PLAYER_HEIGHT / 2), Vector2(16, PLAYER_HEIGHT)
    )

    def __init__(self, game_logic, position, sound_manager=None):
        super().__init__(position)
        self.game_logic = game_logic
        self._sound_manager = sound_manager
        self.on_ground = False
        self.is_jumping = False
        self.falling = False
        self.buffered_jump = False
        self.fall_direction = MoveDirection.NONE
        self.fall_height = NO_FALL_HEIGHT
        self.respawn_pos = position
        self.projectiles = []
        self.is_slowed = False
        self.is_fast = False
        self.restore_speed_when_land = False
        self.invincible = False
        self.projectile_cooldown_ms = None
        self.invincibility_ms = None
        self.slow_ms = None
        self.fast_ms = None

    @property
    def level(self):
        return self.game_logic.level

    @property
    def sound(self):
        return self._sound_manager or get_instance()

    @property
    def projectile_timer_active(self):
        return self.projectile_cooldown_ms is not None

    @property
    def hitbox(self):
        """The hitbox, shifted when the sprite is drawn facing left."""
        if self.last_direction == MoveDirection.RIGHT:
            return self.base_hitbox
        return BoundingBox(
            Vector2(FLIPPED_HITBOX_X, self.base_hitbox.offset.y), self.base_hitbox.size
        )

    def current_animation_offset(self):
        """Sprite frame of the walking animation."""
        return (self.animation_ticks % 40) // 10

    def update_timers(self, ms):
        """Count down the timed effects by ``ms`` milliseconds."""
        if self.projectile_cooldown_ms is not None:
            self.projectile_cooldown_ms -= ms
            if self.projectile_cooldown_ms <= 0:
                self.projectile_cooldown_ms = None
        if self.invincibility_ms is not None:
            self.invincibility_ms -= ms
            if self.invincibility_ms <= 0:
                self.invincibility_ms = None
                self.invincible = False
        if self.slow_ms is not None:
            self.slow_ms -= ms
            if self.slow_ms <= 0:
                self.slow_ms = None
                self.restore_speed()
        if self.fast_ms is not None:
            self.fast_ms -= ms
            if self.fast_ms <= 0:
                self.fast_ms = None
                self.restore_speed()

    def move(self, ms):
        """Advance the player and its projectiles by ``ms`` milliseconds."""
        self.update_timers(ms)
        seconds = ms / 1000

        if not self.on_ground:
            self.velocity = Vector2(self.velocity.x, self.velocity.y + GRAVITY * seconds)
            if self.is_jumping and self.velocity.y > 0:
                self.falling = True

        self.position = self.position + self.velocity * seconds

        if self.current_direction != MoveDirection.NONE:
            self.animation_ticks += 1

        self.handle_collisions()
        self.check_for_fall_respawn()

        survivors = []
        for projectile in self.projectiles:
            if projectile.active:
                projectile.move(ms)
                survivors.append(projectile)
        self.projectiles = survivors

    def check_for_fall_respawn(self):
        """Remember safe ground, and respawn if the player fell off the map."""
        if self.on_ground:
            self.respawn_pos = self.position
        if self.position.y > OFF_MAP_HEIGHT:
            self.sound.play_sound(SoundEffect.JUMP)
            self.respawn()

    def _start_invincibility(self):
        self.invincible = True
        self.invincibility_ms = INVINCIBILITY_FRAMES

    def respawn(self):
        """Put the player back on the last safe ground, at a time penalty."""
        if self.fall_direction == MoveDirection.RIGHT:
            self.respawn_pos = Vector2(self.respawn_pos.x - RESPAWN_SHIFT, self.respawn_pos.y)
        elif self.fall_direction == MoveDirection.LEFT:
            self.respawn_pos = Vector2(self.respawn_pos.x + RESPAWN_SHIFT, self.respawn_pos.y)

        self.game_logic.timer.subtract_time(FALL_RESPAWN_PENALTY)
        self._start_invincibility()

        self.position = self.respawn_pos
        self.velocity = Vector2(0, 0)
        self.on_ground = True
        logger.debug("player respawned at %s", self.position)

    def shoot(self):
        """Fire a projectile in the facing direction unless on cooldown."""
        if self.projectile_timer_active:
            return

        self.sound.play_sound(SoundEffect.SHOOT)
        projectile = Projectile(self.level, self.position, self.current_direction)

        if self.current_direction == MoveDirection.LEFT:
            projectile.set_starting_position(MoveDirection.LEFT)
            projectile.set_velocity(-PROJECTILE_VELOCITY, 0)
        elif self.current_direction == MoveDirection.RIGHT:
            projectile.set_starting_position(MoveDirection.RIGHT)
            projectile.set_velocity(PROJECTILE_VELOCITY, 0)
        elif self.last_direction == MoveDirection.LEFT:
            projectile.set_starting_position(MoveDirection.LEFT)
            projectile.set_velocity(-PROJECTILE_VELOCITY, 0)
        else:
            projectile.set_starting_position(MoveDirection.RIGHT)
            projectile.set_velocity(PROJECTILE_VELOCITY, 0)

        if len(self.projectiles) < MAX_PROJECTILES:
            self.projectiles.append(projectile)

        self.projectile_cooldown_ms = PROJECTILE_DELAY

    def stop_moving(self):
        self.velocity = Vector2(0, self.velocity.y)
        self.current_direction = MoveDirection.NONE
        self.animation_ticks = 0

    def move_left(self):
        self.velocity = Vector2(-self.current_speed(), self.velocity.y)
        self.current_direction = MoveDirection.LEFT
        self.last_direction = MoveDirection.LEFT

    def move_right(self):
        self.velocity = Vector2(self.current_speed(), self.velocity.y)
        self.current_direction = MoveDirection.RIGHT
        self.last_direction = MoveDirection.RIGHT

    def jump(self):
        """Jump if standing still vertically; otherwise buffer the jump."""
        if self.velocity.y == 0:
            self.sound.play_sound(SoundEffect.JUMP)
            self.velocity = Vector2(self.velocity.x, JUMP_VELOCITY)
            self.position = self.position - Vector2(0, 1)
            self.buffered_jump = False
            self.on_ground = False
            self.is_jumping = True
            self.falling = False
            self.fall_direction = self.current_direction
            self.fall_height = NO_FALL_HEIGHT
        else:
            self.buffered_jump = True

    def hitbox_center(self):
        return self.position + self.base_hitbox.offset + self.base_hitbox.size / 2.0

    def _set_horizontal_speed(self, speed):
        if self.velocity.x > 0:
            self.velocity = Vector2(speed, self.velocity.y)
        elif self.velocity.x < 0:
            self.velocity = Vector2(-speed, self.velocity.y)

    def reduce_speed(self):
        """Slow the player down for a while; a repeat hit restarts the timer."""
        if not self.is_slowed:
            logger.debug("reducing speed")
            self._set_horizontal_speed(REDUCED_SPEED)
            self.is_slowed = True
        self.slow_ms = SPEED_FRAMES

    def increase_speed(self):
        """Speed the player up for a while; a repeat pickup restarts the timer."""
        if not self.is_fast:
            logger.debug("increasing speed")
            self._set_horizontal_speed(INCREASED_SPEED)
            self.is_fast = True
        self.fast_ms = SPEED_FRAMES

    def restore_speed(self):
        """Return to normal speed now if grounded, otherwise on landing."""
        if self.on_ground:
            self.is_slowed = False
            self.is_fast = False
        else:
            self.restore_speed_when_land = True

    def current_speed(self):
        if self.is_fast:
            return INCREASED_SPEED
        if self.is_slowed:
            return REDUCED_SPEED
        return NORMAL_SPEED

    def _handle_floor_collisions(self):
        box = self.hitbox + self.position
        level = self.level
        bottom = box.bottom_y

        if self.on_ground:
            still_on_ground = False
            for x in _steps(box.left_x, box.right_x):
                tile = level.world_collision_object(_cell(x, bottom))
                if tile is not None:
                    if tile.type == "Obstacle":
                        self.reduce_speed()
                    if abs(tile.y - bottom) <= GROUND_TOLERANCE:
                        still_on_ground = True
                    break
            if not still_on_ground:
                self.on_ground = False
                self.falling = True
                self.fall_direction = self.current_direction
                self.fall_height = bottom
            return

        for x in _steps(box.left_x, box.right_x):
            cell = _cell(x, bottom)
            tile = level.world_collision_object(cell)
            if tile is None:
                continue
            if tile.x >= box.right_x or tile.x + tile.w <= box.left_x:
                continue
            part_of_wall = level.world_collision_object(Vector2(cell.x, cell.y - 1))

            if self.falling and tile.y == self.fall_height:
                continue
            if self.is_jumping and not self.falling:
                continue
            if self.buffered_jump:
                self.jump()

            if part_of_wall is None:
                self.position = Vector2(self.position.x, tile.y - PLAYER_HEIGHT // 2)
                self.velocity = Vector2(self.velocity.x, 0)
                self.is_jumping = False
                self.on_ground = True
                self.falling = False
                if self.restore_speed_when_land:
                    self.is_slowed = False
                    self.is_fast = False
                    self.restore_speed_when_land = False
                break

    def _handle_ceiling_collisions(self):
        box = self.hitbox + self.position
        start = box.left_x + 4 if self.current_direction == MoveDirection.LEFT else box.left_x
        stop = box.right_x - 8 if self.current_direction == MoveDirection.RIGHT else box.right_x
        for x in _steps(start, stop):
            tile = self.level.world_collision_object(_cell(x, box.top_y))
            if tile is None:
                continue
            if tile.x >= box.right_x or tile.x + tile.w <= box.left_x:
                continue
            self.position = Vector2(self.position.x, tile.y + tile.h + PLAYER_HEIGHT // 2 + 1)
            self.velocity = Vector2(self.velocity.x, 0.1)
            self.falling = True
            break

    def _handle_right_collisions(self):
        box = self.hitbox + self.position
        for y in _steps(box.top_y, box.bottom_y - 1):
            tile = self.level.world_collision_object(_cell(box.right_x, y))
            if tile is None:
                continue
            if tile.y >= box.bottom_y or tile.y + tile.h <= box.top_y:
                continue
            self.position = Vector2(tile.x - PLAYER_WIDTH // 2 - 1, self.position.y)
            self.velocity = Vector2(0, self.velocity.y)
            break

    def _handle_left_collisions(self):
        box = self.hitbox + self.position
        if box.left_x < 0:
            self.position = Vector2(PLAYER_WIDTH // 2 + 1, self.position.y)
        for y in _steps(box.top_y, box.bottom_y - 1):
            tile = self.level.world_collision_object(_cell(box.left_x, y))
            if tile is None:
                continue
            if tile.y >= box.bottom_y or tile.y + tile.h <= box.top_y:
                continue
            self.position = Vector2(tile.x + tile.w + PLAYER_WIDTH // 2 + 1, self.position.y)
            self.velocity = Vector2(0, self.velocity.y)

    def _handle_enemy_collisions(self):
        enemies = list(self.level.enemies)
        for enemy in enemies:
            if (self.hitbox + self.position).overlaps(enemy.hitbox + enemy.position):
                self.game_logic.timer.subtract_time(ENEMY_HIT_PENALTY)
                self._start_invincibility()
                break

        for enemy in enemies:
            for projectile in enemy.projectiles:
                if (self.hitbox + self.position).overlaps(projectile.hitbox + projectile.position):
                    self.reduce_speed()
                    self.sound.play_sound(SoundEffect.DAMAGE)
                    projectile.active = False

    def _handle_powerup_collisions(self):
        for powerup in list(self.level.powerups):
            if (self.hitbox + self.position).overlaps(powerup.hitbox + powerup.position):
                self.increase_speed()
                self.sound.play_sound(SoundEffect.POWERUP)
                powerup.deactivate()

    def handle_collisions(self):
        """Resolve collisions with the world, enemies, powerups and the level end."""
        self._handle_floor_collisions()

        if self.velocity.y < 0:
            self._handle_ceiling_collisions()

        if self.velocity.x > 0:
            self._handle_right_collisions()
        elif self.velocity.x < 0:
            self._handle_left_collisions()

        if not self.invincible:
            self._handle_enemy_collisions()
        self._handle_powerup_collisions()

        if self.position.x >= self.level.level_end_pos:
            self.game_logic.stop_level_reached_end()