from types import SimpleNamespace

import pytest

from classdash.bounding_box import BoundingBox
from classdash.level import DEFAULT_LEVEL_END, CollisionObject, Level, MapObject
from classdash.mathutils import TILE_SIZE
from classdash.vector2 import Vector2

GRASS = 5
DECOR = 9


def make_level():
    level = Level()
    level.register_tile_collisions(GRASS, [CollisionObject(0, 0, 32, 32, "Ground", "grass")])
    # width 4, three rows; grass at (1, 2) and (2, 2), decoration at (0, 0)
    tiles = [DECOR, 0, 0, 0,
             0, 0, 0, 0,
             0, GRASS, GRASS, 0]
    level.add_tile_layer("ground", tiles, 4, 1.0)
    return level


def test_get_id_finds_placed_tiles():
    level = make_level()
    assert level.get_id(Vector2(1, 2)) == GRASS
    assert level.get_id(Vector2(0, 0)) == DECOR
    assert level.get_id(Vector2(3, 2)) == 0


def test_empty_tiles_are_not_blocks():
    level = make_level()
    assert len(level.blocks) == 3
    assert level.ids == [DECOR, GRASS, GRASS]


def test_world_objects_are_placed_in_their_tile():
    level = make_level()
    assert len(level.collision_objects) == 2
    obj = level.world_collision_object(Vector2(2, 2))
    assert obj is not None
    assert obj.tile == (2, 2)
    assert obj.type == "Ground"
    assert (obj.w, obj.h) == (32, 32)


def test_world_collision_object_none_for_non_colliding_tiles():
    level = make_level()
    assert level.world_collision_object(Vector2(0, 0)) is None
    assert level.world_collision_object(Vector2(3, 1)) is None


def test_collider_tile_at():
    level = make_level()
    assert level.collider_tile_at(Vector2(1, 2)) is True
    assert level.collider_tile_at(Vector2(0, 0)) is False


def test_local_collision_object_returns_template():
    level = make_level()
    obj = level.local_collision_object(Vector2(1, 2))
    assert obj == CollisionObject(0, 0, 32, 32, "Ground", "grass")
    assert level.local_collision_object(Vector2(0, 0)) is None


def test_collision_and_hitbox_gids():
    level = make_level()
    level.add_hitbox_gid(DECOR)
    assert level.is_collision_gid(GRASS)
    assert not level.is_collision_gid(DECOR)
    assert level.is_hitbox_gid(DECOR)
    assert not level.is_hitbox_gid(GRASS)


def test_register_tile_collisions_accumulates():
    level = Level()
    level.register_tile_collisions(1, [CollisionObject(0, 0, 1, 1)])
    level.register_tile_collisions(1, [CollisionObject(2, 2, 1, 1)])
    assert len(level.tile_collisions[1]) == 2


def test_flip_flags_are_recorded():
    level = Level()
    layer = level.add_tile_layer("l", [(3, 0), (4, 0x8)], 2, 0.5)
    assert layer.blocks == ((Vector2(0, 0), 0), (Vector2(1, 0), 1))
    assert layer.opacity == 0.5


def test_zero_opacity_becomes_opaque():
    layer = Level().add_tile_layer("l", [1], 1, 0.0)
    assert layer.opacity == 1.0


def test_layer_width_must_be_positive():
    with pytest.raises(ValueError):
        Level().add_tile_layer("l", [1], 0, 1.0)


def test_player_spawn_sits_one_pixel_up():
    level = Level()
    level.add_object(MapObject(name="Player", x=100, y=200))
    assert level.player_spawn == Vector2(100, 199)


def test_enemy_spawn_reads_properties():
    level = Level()
    props = {"trackStart": 10.0, "trackEnd": 90.0, "shoots": True, "biker": False}
    level.add_object(MapObject(type="EnemySpawn", x=50, y=60, properties=props))
    assert level.enemy_spawns == [Vector2(50, 59)]
    data = level.enemy_data[0]
    assert (data.track_start, data.track_end) == (10.0, 90.0)
    assert data.can_shoot is True
    assert data.is_biker is False


def test_corgi_never_shoots():
    level = Level()
    level.add_object(MapObject(type="CorgiSpawn", x=5, y=5, properties={"trackStart": 1.0, "trackEnd": 2.0}))
    data = level.corgi_data[0]
    assert (data.track_start, data.track_end) == (1.0, 2.0)
    assert not data.can_shoot and not data.is_biker


def test_endpoint_and_powerup():
    level = Level()
    assert level.level_end_pos == DEFAULT_LEVEL_END == 1000000
    level.add_object(MapObject(name="Endpoint", x=2000, y=0))
    level.add_object(MapObject(type="Powerup", x=300, y=400))
    assert level.level_end_pos == 2000
    data = level.powerup_data[0]
    assert data.track_start == data.track_end == 300


def test_ground_level_below_finds_tile():
    level = make_level()
    hitbox = BoundingBox(Vector2(40, 0), Vector2(16, 20))
    tile = level.world_collision_object(Vector2(1, 2))
    assert level.ground_level_below(hitbox, 16) == tile.y - 16


def test_ground_level_below_none_without_ground():
    level = make_level()
    hitbox = BoundingBox(Vector2(3 * TILE_SIZE, 0), Vector2(16, 20))
    assert level.ground_level_below(hitbox, 16) is None


def test_remove_dead_enemies_keeps_list_identity():
    level = Level()
    alive = SimpleNamespace(is_alive=True)
    dead = SimpleNamespace(is_alive=False)
    enemies = level.enemies
    enemies.extend([dead, alive, dead])
    level.remove_dead_enemies()
    assert level.enemies is enemies
    assert level.enemies == [alive]


def test_remove_collected_powerups():
    level = Level()
    kept = SimpleNamespace(active=True)
    level.powerups.extend([SimpleNamespace(active=False), kept])
    level.remove_collected_powerups()
    assert level.powerups == [kept]