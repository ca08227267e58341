"""Procedural level layout, the hub and the boss arena."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NamedTuple

ROOM_SIZE = 32
TILE_SIZE = 32.0

HUB_HALF_EXTENT = 4
BOSS_HALF_EXTENT = 8
HUB_CLEAR_COLOR = (69 / 255.0, 35 / 255.0, 13 / 255.0)

HUB_FLOOR_TEXTURE = "textures/t_floor_hub.png"
HUB_WALL_TEXTURE = "textures/t_wall_hub.png"
HUB_WALL_TOP_TEXTURE = "textures/t_wall_top_hub.png"
SHADOW_TEXTURE = "textures/t_shadow.png"

# Down, left, up, right.
_DIRECTIONS: tuple[tuple[float, float], ...] = (
    (0.0, -1.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (1.0, 0.0),
)


class TileType(Enum):
    """What occupies a cell of the level grid."""

    WALL = auto()
    FLOOR = auto()
    EMPTY = auto()


@dataclass
class Tile:
    """A cell of the level map and the number of static mobs standing on it."""

    tiletype: TileType
    mob_count: int = 0


@dataclass
class Walker:
    """A digger that carves floor as it wanders over the grid."""

    direction: tuple[float, float]
    pos: tuple[float, float]


@dataclass
class LevelGenerator:
    """Random-walk level generator filling a square room with floor and walls."""

    grid: list[list[TileType]] = field(default_factory=list)
    room_height: int = 0
    room_width: int = 0
    walkers: list[Walker] = field(default_factory=list)
    chance_walker_change_dir: float = 0.5
    chance_walker_spawn: float = 0.05
    chance_walker_destroy: float = 0.05
    chance_walker_spawn_obstacle: float = 0.05
    obstacles: list[tuple[float, float]] = field(default_factory=list)
    max_walkers: int = 16
    percent_to_fill: float = 0.1
    max_iterations: int = 100_000
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def start(self) -> None:
        """Generate a fresh layout: floors, surrounding walls, then cleanup."""
        self._setup()
        self._create_floors()
        self._create_walls()
        self._remove_single_walls()

    def number_of_floors(self) -> int:
        """How many cells of the grid are floor."""
        return sum(tile is TileType.FLOOR for column in self.grid for tile in column)

    def tile_map(self) -> dict[tuple[int, int], Tile]:
        """Every cell of the grid as a map tile keyed by (x, y)."""
        return {
            (x, y): Tile(tile)
            for x, column in enumerate(self.grid)
            for y, tile in enumerate(column)
        }

    def _random_direction(self) -> tuple[float, float]:
        # Five outcomes over four directions: right is picked twice as often.
        return _DIRECTIONS[min(self.rng.randint(0, 4), 3)]

    def _setup(self) -> None:
        self.room_height = ROOM_SIZE
        self.room_width = ROOM_SIZE
        self.grid = [
            [TileType.EMPTY] * self.room_height for _ in range(self.room_width)
        ]
        spawn_pos = (
            float(round(self.room_width / 2.0)),
            float(round(self.room_height / 2.0)),
        )
        self.walkers = [Walker(self._random_direction(), spawn_pos)]
        self.obstacles = []

    def _create_floors(self) -> None:
        rng = self.rng
        target = ROOM_SIZE * ROOM_SIZE * self.percent_to_fill
        upper_x = float(self.room_width - 2)
        upper_y = float(self.room_height - 2)

        for _ in range(self.max_iterations):
            for walker in self.walkers:
                x, y = walker.pos
                self.grid[int(x)][int(y)] = TileType.FLOOR

            for index in range(len(self.walkers)):
                if (
                    rng.random() < self.chance_walker_destroy
                    and len(self.walkers) > 1
                ):
                    del self.walkers[index]
                    break

            for walker in self.walkers:
                if rng.random() > self.chance_walker_change_dir:
                    walker.direction = self._random_direction()

            for parent in self.walkers[: len(self.walkers)]:
                if (
                    rng.random() < self.chance_walker_spawn
                    and len(self.walkers) < self.max_walkers
                ):
                    self.walkers.append(Walker(self._random_direction(), parent.pos))

            for walker in self.walkers:
                if rng.random() < self.chance_walker_spawn_obstacle:
                    if walker.pos not in self.obstacles:
                        self.obstacles.append(walker.pos)

            for walker in self.walkers:
                x, y = walker.pos
                dx, dy = walker.direction
                walker.pos = (
                    min(max(x + dx, 1.0), upper_x),
                    min(max(y + dy, 1.0), upper_y),
                )

            if self.number_of_floors() > target:
                break

    def _create_walls(self) -> None:
        grid = self.grid
        for x in range(self.room_width - 1):
            for y in range(self.room_height - 1):
                if grid[x][y] is not TileType.FLOOR:
                    continue
                for nx, ny in ((x, y + 1), (x, y - 1), (x + 1, y), (x - 1, y)):
                    if grid[nx][ny] is TileType.EMPTY:
                        grid[nx][ny] = TileType.WALL

    def _remove_single_walls(self) -> None:
        grid = self.grid
        for x in range(self.room_width - 1):
            for y in range(self.room_height - 1):
                if grid[x][y] is not TileType.WALL:
                    continue
                neighbours = [
                    (x + dx, y + dy)
                    for dx, dy in _DIRECTIONS
                    if 0 <= x + dx < self.room_width and 0 <= y + dy < self.room_height
                ]
                if all(grid[int(nx)][int(ny)] is TileType.FLOOR for nx, ny in neighbours):
                    grid[x][y] = TileType.FLOOR


def wall_texture(grid: list[list[TileType]], x: int, y: int, chapter: int) -> str:
    """Texture of the wall at (x, y): walls with floor below show their top."""
    if y > 0 and grid[x][y - 1] is TileType.FLOOR:
        return f"textures/t_wall_top_{chapter}.png"
    return f"textures/t_wall_{chapter}.png"


def obstacle_kind(height: float) -> tuple[str, float]:
    """Texture and y-sort offset of an obstacle placed at noise ``height``."""
    if height >= 0.3:
        return "textures/obstacles/claypot.png", 4.0
    return "textures/obstacles/crate.png", 0.0


class _RoomCell(NamedTuple):
    tiletype: TileType
    texture: str
    shadow: bool


def build_enclosed_room(half_extent: int) -> dict[tuple[int, int], _RoomCell]:
    """A square walled room centred in the level, keyed by tile (x, y).

    Border cells are walls; inner cells are floor, and the floor row just
    below the top wall carries a shadow.
    """
    if not 1 <= half_extent <= ROOM_SIZE // 2:
        raise ValueError(
            f"half extent must be in 1..{ROOM_SIZE // 2}, got {half_extent}"
        )
    lower = ROOM_SIZE // 2 - half_extent
    upper = ROOM_SIZE // 2 + half_extent

    cells: dict[tuple[int, int], _RoomCell] = {}
    for x in range(lower, upper + 1):
        for y in range(lower, upper + 1):
            if x in (lower, upper) or y in (lower, upper):
                top = y > lower and y == upper and lower < x < upper
                texture = HUB_WALL_TOP_TEXTURE if top else HUB_WALL_TEXTURE
                cells[(x, y)] = _RoomCell(TileType.WALL, texture, False)
            else:
                cells[(x, y)] = _RoomCell(
                    TileType.FLOOR, HUB_FLOOR_TEXTURE, y == upper - 1
                )
    return cells


_HUB_LOWER = ROOM_SIZE // 2 - HUB_HALF_EXTENT
_HUB_UPPER = ROOM_SIZE // 2 + HUB_HALF_EXTENT

HUB_PORTAL_POS = (
    (_HUB_UPPER - 1) * TILE_SIZE,
    (_HUB_LOWER + 1) * TILE_SIZE,
    1.0,
)


def hub_item_slots() -> list[tuple[float, float, float]]:
    """World positions where the hub lays out items offered to the player."""
    row_y = (_HUB_UPPER - 3) * TILE_SIZE
    return [
        (i * TILE_SIZE, row_y, 1.0)
        for i in range(_HUB_LOWER + 2, _HUB_UPPER - 1, 2)
    ]