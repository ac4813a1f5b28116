"""Moving characters: the base body, corgis, powerups and enemies."""

from __future__ import annotations

from classdash.bounding_box import BoundingBox
from classdash.mathutils import WINDOW_HEIGHT
from classdash.projectiles import EnemyProjectile, MoveDirection
from classdash.vector2 import Vector2

GRAVITY = 1000.0
WALK_SPEED = 120
ENEMY_HEIGHT = 64
ENEMY_HEALTH = 3
ENEMY_PROJECTILE_DELAY = 1000
MAX_ENEMY_PROJECTILES = 5
DETECT_RANGE = 300
FOLLOW_STOP_DISTANCE = 50
TRACK_END_TOLERANCE = 5
FLIPPED_HITBOX_X = -12
POWERUP_FRAMES = 7
POWERUP_TICKS_PER_FRAME = 5


class Character:
    """A body that moves with its velocity and falls under gravity."""

    base_hitbox = BoundingBox(Vector2(-16, -16), Vector2(32, 32))

    def __init__(self, position=Vector2(), velocity=Vector2()):
        self.position = position
        self.velocity = velocity
        self.current_direction = MoveDirection.NONE
        self.last_direction = MoveDirection.RIGHT
        self.animation_ticks = 0

    @property
    def hitbox(self):
        return self.base_hitbox

    def move(self, ms):
        """Apply gravity, then move by the velocity for ``ms`` milliseconds."""
        seconds = ms / 1000
        self.velocity = Vector2(self.velocity.x, self.velocity.y + GRAVITY * seconds)
        self.position = self.position + self.velocity * seconds


class _TrackWalker(Character):
    """A character pacing back and forth between two x positions."""

    def __init__(self, start_pos, track_start, track_end):
        super().__init__(start_pos)
        self.track_start = track_start
        self.track_end = track_end
        self.ground_level = WINDOW_HEIGHT
        self.move_right()

    def move_left(self):
        self._walk(MoveDirection.LEFT)

    def move_right(self):
        self._walk(MoveDirection.RIGHT)

    def _walk(self, direction):
        speed = -WALK_SPEED if direction == MoveDirection.LEFT else WALK_SPEED
        self.velocity = Vector2(speed, self.velocity.y)
        self.current_direction = direction
        self.last_direction = direction

    def _turn_at_track_ends(self):
        if self.position.x <= self.track_start:
            self.move_right()
        elif self.position.x >= self.track_end:
            self.move_left()

    def _rest_on_ground(self):
        if self.position.y >= self.ground_level:
            self.velocity = Vector2(self.velocity.x, 0)
            self.position = Vector2(self.position.x, self.ground_level)


class Corgi(_TrackWalker):
    """A harmless dog walking along its track."""

    def move_on_track(self, ms):
        self._turn_at_track_ends()
        self._rest_on_ground()
        self.move(ms)
        self.animation_ticks += 1

    def move_left(self):
        self._walk(MoveDirection.LEFT)

    def move_right(self):
        self._walk(MoveDirection.RIGHT)


class Powerup(Character):
    """A collectable that speeds the player up."""

    def __init__(self, start_pos, track_start, track_end):
        super().__init__(start_pos)
        self.track_start = track_start
        self.track_end = track_end
        self.ground_level = WINDOW_HEIGHT
        self.active = True

    def animate(self):
        self.animation_ticks += 1

    def deactivate(self):
        self.active = False

    def current_animation_offset(self):
        """Sprite frame, bouncing forwards and backwards through the frames."""
        tick = self.animation_ticks % (POWERUP_FRAMES * POWERUP_TICKS_PER_FRAME)
        frame = tick // POWERUP_TICKS_PER_FRAME
        return frame if frame <= 3 else 6 - frame


class EnemyFire:
    """Projectiles in flight from enemies, and the cooldown between shots."""

    def __init__(self, max_projectiles=MAX_ENEMY_PROJECTILES, delay_ms=ENEMY_PROJECTILE_DELAY):
        self.max_projectiles = max_projectiles
        self.delay_ms = delay_ms
        self.projectiles = []
        self.cooldown_ms = 0.0

    def update(self, ms):
        """Count down the cooldown, move live projectiles and drop spent ones."""
        self.cooldown_ms = max(0.0, self.cooldown_ms - ms)
        survivors = []
        for projectile in self.projectiles:
            if projectile.active:
                projectile.move(ms)
                survivors.append(projectile)
        self.projectiles = survivors


class Enemy(_TrackWalker):
    """A patrolling enemy that, if it can shoot, chases and fires at the player.

    Enemies given the same ``fire`` share one pool of projectiles and one cooldown.
    """

    base_hitbox = BoundingBox(Vector2(-4, -ENEMY_HEIGHT / 2), Vector2(16, ENEMY_HEIGHT))

    def __init__(self, level, start_pos, track_start, track_end,
                 can_shoot=False, is_biker=False, fire=None):
        super().__init__(start_pos, track_start, track_end)
        self.level = level
        self.can_shoot = can_shoot
        self.is_biker = is_biker
        self.fire = EnemyFire() if fire is None else fire
        self.health = ENEMY_HEALTH
        self.player_loc = Vector2()
        self.moving = True

    @property
    def hitbox(self):
        """The hitbox, shifted when the sprite is drawn facing left."""
        if self.last_direction == MoveDirection.RIGHT:
            return self.base_hitbox
        return BoundingBox(
            Vector2(FLIPPED_HITBOX_X, self.base_hitbox.offset.y), self.base_hitbox.size
        )

    @property
    def projectiles(self):
        return self.fire.projectiles

    @property
    def is_alive(self):
        return self.health > 0

    def decrement_health(self):
        self.health -= 1

    def move_left(self):
        self._walk(MoveDirection.LEFT)

    def move_right(self):
        self._walk(MoveDirection.RIGHT)

    def _halt(self):
        self.current_direction = MoveDirection.NONE
        self.velocity = Vector2(0, self.velocity.y)
        self.moving = False

    def shoot(self):
        """Fire at the last seen player position unless on cooldown."""
        if not self.can_shoot or self.fire.cooldown_ms > 0:
            return
        if len(self.fire.projectiles) < self.fire.max_projectiles:
            self.fire.projectiles.append(
                EnemyProjectile(self.level, self.player_loc, self.position)
            )
        self.fire.cooldown_ms = self.fire.delay_ms

    def move_on_track(self, ms):
        if self.current_direction == MoveDirection.NONE:
            self.velocity = Vector2(0, self.velocity.y)
            self.moving = False
            return
        self._turn_at_track_ends()
        self._rest_on_ground()
        self.move(ms)
        if self.moving:
            self.animation_ticks += 1

    def move_to_player(self, player):
        """Walk towards the last seen player position, staying on the track."""
        if abs(self.player_loc.x - self.position.x) <= FOLLOW_STOP_DISTANCE:
            self._halt()
        elif self.player_loc.x <= self.position.x:
            if abs(self.position.x - self.track_start) <= TRACK_END_TOLERANCE:
                self._halt()
            else:
                self.move_left()
                self.moving = True
        elif abs(self.position.x - self.track_end) <= TRACK_END_TOLERANCE:
            self._halt()
        else:
            self.move_right()
            self.moving = True

    def detect_player(self, player, ms):
        """Chase and shoot if the player is in range; otherwise keep patrolling."""
        if not self.can_shoot:
            return False
        self.player_loc = player.position
        difference = self.player_loc - self.position
        if (-DETECT_RANGE <= difference.x < DETECT_RANGE
                and -DETECT_RANGE <= difference.y < DETECT_RANGE):
            self.move_to_player(player)
            self.shoot()
            return True
        self.move_on_track(ms)
        return False

    def update_projectiles(self, ms):
        self.fire.update(ms)