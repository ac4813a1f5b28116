"""Level data records and drawable tile layers."""

from __future__ import annotations

from dataclasses import dataclass, field

from classdash.vector2 import Vector2

H_FLIP = 0x80000000


@dataclass(frozen=True)
class EnemyData:
    """Placement of an enemy-like entity within a level."""

    start_pos: Vector2
    track_start: float
    track_end: float
    can_shoot: bool
    is_biker: bool


@dataclass
class LevelData:
    """Path of a level file plus data that the map itself does not carry."""

    file_path: str = ""
    enemies: list = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Layer:
    """One tile layer: block positions with flip markers, and their tile IDs."""

    blocks: tuple
    ids: tuple
    name: str
    opacity: float
    _lookup: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        blocks = tuple(tuple(block) for block in self.blocks)
        ids = tuple(self.ids)
        if len(blocks) != len(ids):
            raise ValueError("every block needs exactly one tile ID")
        lookup = {}
        for (position, _flip), gid in zip(blocks, ids):
            lookup.setdefault(position, gid)
        object.__setattr__(self, "blocks", blocks)
        object.__setattr__(self, "ids", ids)
        object.__setattr__(self, "_lookup", lookup)

    def get_id(self, block):
        """Global ID of the tile at ``block``, or 0 if the layer has none there."""
        return self._lookup.get(block, 0)

    def id_at(self, index):
        """Global ID of the tile at position ``index`` in the layer."""
        return self.ids[index]

    def has_flip_flag(self, index):
        """True if the tile at ``index`` is flipped horizontally."""
        return (self.id_at(index) & H_FLIP) != 0