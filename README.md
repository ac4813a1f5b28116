# classdash

The game logic behind Class Dash, a side-scrolling platformer in which the
player races across a level against the clock, dodging enemies and their
shots and picking up speed power-ups. The package holds the parts of the
game that do not draw to the screen: vector and bounding-box physics, tile
levels with collision objects, the player, enemies, corgis and power-ups,
projectiles, the countdown timer, sound handling and the overall game state.

## Installation

```
pip install .
```

Sound playback uses `pygame`'s mixer. To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `classdash.mathutils`: `is_between`, `clamp`, `floor_interval`, and the
  constants `WINDOW_WIDTH` (1024), `WINDOW_HEIGHT` (768) and `TILE_SIZE` (32).
- `classdash.vector2`: `Vector2`, an immutable 2D vector with `+`, `-`,
  `*`, `/`, negation, `magnitude()` and `normal()`.
- `classdash.bounding_box`: `BoundingBox` (offset and size), moved by adding
  a `Vector2`, with `overlaps()`; touching edges count as overlapping.
- `classdash.tmxfuncs`: helpers for Tiled map data: `decompress` (inflates a
  zlib stream, raising `DecompressionError` on bad input),
  `is_absolute_file_path`, `resolve_file_path` and `read_file_into_string`.
- `classdash.layer`: `EnemyData`, `LevelData` and the tile `Layer`, with
  `get_id()`, `id_at()` and `has_flip_flag()`.
- `classdash.level`: `Level`, `CollisionObject` and `MapObject`. A level is
  built with `register_tile_collisions()`, `add_tile_layer()` and
  `add_object()`, and queried with `world_collision_object()`,
  `local_collision_object()`, `collider_tile_at()` and
  `ground_level_below()`.
- `classdash.characters`: `Character`, `Corgi`, `Powerup`, `Enemy`, and
  `EnemyFire`, the projectile pool and shot cooldown shared by enemies.
- `classdash.player`: `Player`, with movement, jumping, shooting, speed
  effects, fall respawn and collision handling. Timed effects count down in
  game time through `move()` or `update_timers()`.
- `classdash.projectiles`: `Projectile`, `EnemyProjectile` and
  `MoveDirection`.
- `classdash.timekeeper`: `TimeKeeper`, the 60-second level countdown;
  `begin_timer()` runs it in real time until `pause_timer()`, and `step()`
  advances it by one 50 ms tick.
- `classdash.sound`: `SoundManager`, `SoundEffect`, `MusicTrack` and
  `get_instance()` for the shared manager. Audio files are looked up in
  `../assets/audio` by default; missing files are logged and skipped.
- `classdash.game_logic`: `GameLogic`, `GameState` and `spawn_entities()`,
  which tie it all together.

## Examples

```python
from classdash.vector2 import Vector2
from classdash.bounding_box import BoundingBox

v = Vector2(3.0, 4.0)
print(v.magnitude())   # 5.0
print(v.normal())      # (0.6, 0.8)

a = BoundingBox(Vector2(0, 0), Vector2(10, 10))
b = BoundingBox(Vector2(5, 5), Vector2(10, 10))
print(a.overlaps(b))   # True
```

Building a level by hand: tiles are given in row-major order, 0 is empty,
and collision objects registered for a tile ID are placed in world
coordinates wherever that tile appears.

```python
from classdash.level import CollisionObject, Level
from classdash.vector2 import Vector2

level = Level(dimensions=Vector2(2048, 768))
level.register_tile_collisions(1, [CollisionObject(0, 0, 32, 32, type="Ground")])
level.add_tile_layer("ground", [0, 1, 1], width=3, opacity=1.0)

print(level.collider_tile_at(Vector2(1, 0)))  # True
print(level.collider_tile_at(Vector2(0, 0)))  # False
```

The level clock:

```python
from classdash.timekeeper import TimeKeeper

timer = TimeKeeper()
print(timer.get_time())   # 01:00
for _ in range(20):
    timer.step()
print(timer.get_time())   # 00:59
```

`GameLogic.activate(level)` starts play on a prepared `Level`, spawning its
enemies, corgis and power-ups and placing the player at the level's spawn
point; `run_tick(ms)` then advances the game. Pass `threaded_timer=False` to
keep the clock from running on a background thread.

Progress through the levels is saved to `levels.txt` in the working
directory (or the `save_path` given to `GameLogic`) by
`save_levels_completed()` and read back by `init()`.

## What this package does not do

- It opens no window and draws nothing: there are no screens, menus,
  sprites or rendering, and no command that starts the game.
- It does not read `.tmx` map files into a `Level`. Levels are assembled
  through the `Level` methods above; `classdash.tmxfuncs` provides only the
  path and decompression helpers.
- The game's image, font and audio assets are not included.