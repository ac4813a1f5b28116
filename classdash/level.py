"""The playable level: tile layers, collision objects and spawned entities."""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, field, replace

from classdash.layer import EnemyData, Layer
from classdash.mathutils import TILE_SIZE, WINDOW_HEIGHT
from classdash.vector2 import Vector2

DEFAULT_LEVEL_END = 1000000


@dataclass(frozen=True, slots=True)
class CollisionObject:
    """A solid rectangle with the class and name given to it in the map editor."""

    x: int
    y: int
    w: int
    h: int
    type: str = ""
    name: str = ""

    def translated(self, dx, dy):
        """Return the same object moved by (dx, dy)."""
        return replace(self, x=self.x + dx, y=self.y + dy)

    @property
    def tile(self):
        """Grid cell holding the object's top-left corner."""
        return (_trunc_div(self.x, TILE_SIZE), _trunc_div(self.y, TILE_SIZE))


@dataclass(frozen=True)
class MapObject:
    """An object placed on an object layer of a map."""

    name: str = ""
    type: str = ""
    x: float = 0.0
    y: float = 0.0
    properties: dict = field(default_factory=dict)


def _trunc_div(value, divisor):
    """Integer division rounding toward zero."""
    return int(value / divisor)


def _tile_parts(tile):
    """Split a tile entry into (id, flip_flags); a bare int has no flip flags."""
    if isinstance(tile, int):
        return tile, 0
    tile_id, flip_flags = tile
    return tile_id, flip_flags


@dataclass
class Level:
    """Tiles, collisions and entities of the level being played."""

    dimensions: Vector2 = Vector2()
    blocks: list = field(default_factory=list)
    ids: list = field(default_factory=list)
    layers: list = field(default_factory=list)
    hitbox_ids: set = field(default_factory=set)
    collision_objects: list = field(default_factory=list)
    tile_collisions: dict = field(default_factory=lambda: defaultdict(list))
    enemies: list = field(default_factory=list)
    corgis: list = field(default_factory=list)
    powerups: list = field(default_factory=list)
    enemy_data: list = field(default_factory=list)
    corgi_data: list = field(default_factory=list)
    powerup_data: list = field(default_factory=list)
    level_end_pos: float = DEFAULT_LEVEL_END
    player_spawn: Vector2 = Vector2()
    enemy_spawns: list = field(default_factory=list)

    def get_id(self, block):
        """Global ID of the tile at ``block`` in the last tile layer added, or 0."""
        for (position, _flip), gid in zip(self.blocks, self.ids):
            if position == block:
                return gid
        return 0

    def register_tile_collisions(self, gid, objects):
        """Attach collision objects, in tile-local coordinates, to tile ``gid``."""
        self.tile_collisions.setdefault(gid, []).extend(objects)

    def add_hitbox_gid(self, gid):
        self.hitbox_ids.add(gid)

    def add_tile_layer(self, name, tiles, width, opacity):
        """Add a tile layer from its tiles in row-major order and return it.

        Each tile is a global ID or an ``(id, flip_flags)`` pair; ID 0 is empty.
        Collision objects of placed tiles are added in world coordinates.
        """
        if width <= 0:
            raise ValueError("layer width must be positive")
        blocks = []
        ids = []
        for index, tile in enumerate(tiles):
            tile_id, flip_flags = _tile_parts(tile)
            if tile_id == 0:
                continue
            y, x = divmod(index, width)
            for template in self.tile_collisions.get(tile_id, ()):
                self.collision_objects.append(
                    template.translated(x * TILE_SIZE, y * TILE_SIZE)
                )
            blocks.append((Vector2(x, y), 1 if flip_flags else 0))
            ids.append(tile_id)
        self.blocks = blocks
        self.ids = ids
        layer = Layer(blocks, ids, name, opacity if opacity else 1.0)
        self.layers.append(layer)
        return layer

    def add_object(self, obj):
        """Record spawn points, entity data and the end point from a map object."""
        spawn = Vector2(obj.x, obj.y - 1)
        props = obj.properties

        if obj.name == "Player":
            self.player_spawn = spawn

        if obj.type == "EnemySpawn":
            self.enemy_spawns.append(spawn)
            self.enemy_data.append(
                EnemyData(
                    spawn,
                    float(props.get("trackStart", 0.0)),
                    float(props.get("trackEnd", 0.0)),
                    bool(props.get("shoots", False)),
                    bool(props.get("biker", False)),
                )
            )

        if obj.type == "CorgiSpawn":
            self.corgi_data.append(
                EnemyData(
                    spawn,
                    float(props.get("trackStart", 0.0)),
                    float(props.get("trackEnd", 0.0)),
                    False,
                    False,
                )
            )

        if obj.name == "Endpoint":
            self.level_end_pos = obj.x

        if obj.type == "Powerup":
            self.powerup_data.append(EnemyData(spawn, obj.x, obj.x, False, False))

    def is_hitbox_gid(self, gid):
        return gid in self.hitbox_ids

    def is_collision_gid(self, gid):
        """True if tile ``gid`` has collision objects attached."""
        return gid in self.tile_collisions

    def local_collision_object(self, position):
        """First tile-local collision object of a colliding tile at ``position``."""
        for layer in self.layers:
            gid = layer.get_id(position)
            if self.is_collision_gid(gid) and self.tile_collisions[gid]:
                return self.tile_collisions[gid][0]
        return None

    def _world_object_at(self, tile_x, tile_y):
        for obj in self.collision_objects:
            if obj.tile == (tile_x, tile_y):
                return obj
        return None

    def world_collision_object(self, position):
        """World collision object in the tile cell ``position``, or None."""
        for layer in self.layers:
            if self.is_collision_gid(layer.get_id(position)):
                found = self._world_object_at(int(position.x), int(position.y))
                if found is not None:
                    return found
        return None

    def collider_tile_at(self, position):
        """True if a colliding tile occupies the tile cell ``position``."""
        return self.world_collision_object(position) is not None

    def ground_level_below(self, hitbox, half_height):
        """Y coordinate at which an entity with ``hitbox`` rests on the ground below.

        Searches straight down from the bottom of the hitbox at its centre and
        returns None if no solid tile lies above the bottom of the window.
        """
        center_x = (hitbox.left_x + hitbox.right_x) / 2.0
        y = hitbox.bottom_y
        while y <= WINDOW_HEIGHT:
            tile = self.world_collision_object(
                Vector2(math.floor(center_x / TILE_SIZE), math.floor(y / TILE_SIZE))
            )
            if tile is not None:
                return tile.y - half_height
            y += TILE_SIZE // 2
        return None

    def remove_dead_enemies(self):
        self.enemies[:] = [enemy for enemy in self.enemies if enemy.is_alive]

    def remove_collected_powerups(self):
        self.powerups[:] = [powerup for powerup in self.powerups if powerup.active]