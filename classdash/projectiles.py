"""Projectiles fired by the player and by enemies."""

from __future__ import annotations

import enum
import math

from classdash.bounding_box import BoundingBox
from classdash.mathutils import TILE_SIZE
from classdash.vector2 import Vector2

PROJECTILE_SPEED = 300
PROJECTILE_RANGE = 500
STARTING_OFFSET = 20
PROJECTILE_HITBOX = BoundingBox(Vector2(-4, -4), Vector2(8, 8))


class MoveDirection(enum.Enum):
    """Horizontal direction a character or projectile is heading in."""

    NONE = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()


def _hits_wall(level, box):
    """True if ``box`` overlaps a world collision tile under one of its corners."""
    for x in (box.left_x, box.right_x):
        for y in (box.top_y, box.bottom_y):
            tile = level.world_collision_object(
                Vector2(math.floor(x / TILE_SIZE), math.floor(y / TILE_SIZE))
            )
            if tile is not None and box.overlaps(
                BoundingBox(Vector2(tile.x, tile.y), Vector2(tile.w, tile.h))
            ):
                return True
    return False


class Projectile:
    """A shot fired by the player, travelling horizontally."""

    hitbox = PROJECTILE_HITBOX

    def __init__(self, level, position, direction=MoveDirection.NONE):
        self.level = level
        self.direction = direction
        self.position = position
        self.starting_position = position
        self.velocity = Vector2()
        self.active = True

    def move(self, ms):
        """Advance by ``ms`` milliseconds, stopping at walls, enemies or range."""
        seconds = ms / 1000
        self.position = Vector2(
            self.position.x + self.velocity.x * seconds, self.position.y
        )

        if abs(self.position.x - self.starting_position.x) > PROJECTILE_RANGE:
            self.active = False

        box = self.hitbox + self.position
        if _hits_wall(self.level, box):
            self.active = False
            return

        for enemy in list(self.level.enemies):
            if box.overlaps(enemy.hitbox + enemy.position):
                self.active = False
                enemy.decrement_health()
                break

    def set_starting_position(self, direction):
        """Shift the launch point a little ahead of the shooter in ``direction``."""
        if direction == MoveDirection.LEFT:
            shift = -STARTING_OFFSET
        elif direction == MoveDirection.RIGHT:
            shift = STARTING_OFFSET
        else:
            return
        self.starting_position = Vector2(
            self.starting_position.x + shift, self.starting_position.y
        )
        self.position = Vector2(self.starting_position.x, self.position.y)

    def set_velocity(self, x, y):
        self.velocity = Vector2(x, y)


class EnemyProjectile:
    """A shot fired by an enemy straight at where the player stood."""

    hitbox = PROJECTILE_HITBOX

    def __init__(self, level, player_position, enemy_position):
        self.level = level
        self.position = enemy_position
        self.direction = (player_position - enemy_position).normal() * PROJECTILE_SPEED
        self.traveled = 0.0
        self.active = True

    def move(self, ms):
        """Advance by ``ms`` milliseconds, stopping at walls or after its range."""
        seconds = ms / 1000
        self.position = self.position + self.direction * seconds
        self.traveled += PROJECTILE_SPEED * seconds

        if self.traveled >= PROJECTILE_RANGE:
            self.active = False

        if _hits_wall(self.level, self.hitbox + self.position):
            self.active = False