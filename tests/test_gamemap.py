import random

import pytest

from elementfall.gamemap import (
    BOSS_HALF_EXTENT,
    HUB_HALF_EXTENT,
    HUB_PORTAL_POS,
    ROOM_SIZE,
    TILE_SIZE,
    LevelGenerator,
    Tile,
    TileType,
    build_enclosed_room,
    hub_item_slots,
    obstacle_kind,
    wall_texture,
)


@pytest.fixture
def generated():
    gen = LevelGenerator(rng=random.Random(7))
    gen.start()
    return gen


def test_grid_is_room_sized(generated):
    assert len(generated.grid) == ROOM_SIZE
    assert all(len(column) == ROOM_SIZE for column in generated.grid)


def test_floor_count_reaches_fill_target(generated):
    target = ROOM_SIZE * ROOM_SIZE * generated.percent_to_fill
    assert generated.number_of_floors() > target


def test_number_of_floors_matches_grid(generated):
    counted = [t for column in generated.grid for t in column].count(TileType.FLOOR)
    assert generated.number_of_floors() == counted


def test_empty_generator_has_no_floors():
    assert LevelGenerator().number_of_floors() == 0


def test_border_is_never_floor(generated):
    last = ROOM_SIZE - 1
    border = set()
    for i in range(ROOM_SIZE):
        for x, y in ((0, i), (last, i), (i, 0), (i, last)):
            border.add(generated.grid[x][y])
    assert TileType.FLOOR not in border
    assert border <= {TileType.WALL, TileType.EMPTY}


def test_floors_are_enclosed(generated):
    grid = generated.grid
    neighbours = set()
    for x in range(ROOM_SIZE):
        for y in range(ROOM_SIZE):
            if grid[x][y] is TileType.FLOOR:
                for nx, ny in ((x, y + 1), (x, y - 1), (x + 1, y), (x - 1, y)):
                    neighbours.add(grid[nx][ny])
    assert TileType.WALL in neighbours
    assert neighbours <= {TileType.FLOOR, TileType.WALL}


def test_walkers_stay_inside_and_are_bounded(generated):
    assert 1 <= len(generated.walkers) <= generated.max_walkers
    for walker in generated.walkers:
        x, y = walker.pos
        assert 1.0 <= x <= ROOM_SIZE - 2
        assert 1.0 <= y <= ROOM_SIZE - 2


def test_obstacles_are_unique_and_inside(generated):
    assert len(set(generated.obstacles)) == len(generated.obstacles)
    for x, y in generated.obstacles:
        assert 1.0 <= x <= ROOM_SIZE - 2
        assert 1.0 <= y <= ROOM_SIZE - 2


def test_same_seed_gives_same_layout():
    first = LevelGenerator(rng=random.Random(42))
    second = LevelGenerator(rng=random.Random(42))
    first.start()
    second.start()
    assert first.grid == second.grid
    assert first.obstacles == second.obstacles


def test_tile_map_mirrors_grid(generated):
    tiles = generated.tile_map()
    assert len(tiles) == ROOM_SIZE * ROOM_SIZE
    for (x, y), tile in tiles.items():
        assert tile == Tile(generated.grid[x][y], 0)


def test_wall_texture_top_when_floor_below():
    grid = [[TileType.FLOOR, TileType.WALL], [TileType.EMPTY, TileType.WALL]]
    assert wall_texture(grid, 0, 1, 2) == "textures/t_wall_top_2.png"
    assert wall_texture(grid, 1, 1, 2) == "textures/t_wall_2.png"
    assert wall_texture(grid, 0, 0, 3) == "textures/t_wall_3.png"


def test_obstacle_kind_threshold():
    assert obstacle_kind(0.3) == ("textures/obstacles/claypot.png", 4.0)
    assert obstacle_kind(0.29) == ("textures/obstacles/crate.png", 0.0)


@pytest.mark.parametrize("half", [HUB_HALF_EXTENT, BOSS_HALF_EXTENT])
def test_enclosed_room_border_and_floor(half):
    cells = build_enclosed_room(half)
    lower = ROOM_SIZE // 2 - half
    upper = ROOM_SIZE // 2 + half
    assert len(cells) == (upper - lower + 1) ** 2
    for (x, y), cell in cells.items():
        on_border = x in (lower, upper) or y in (lower, upper)
        assert (cell.tiletype is TileType.WALL) == on_border
        assert cell.shadow == (cell.tiletype is TileType.FLOOR and y == upper - 1)


def test_enclosed_room_wall_textures():
    cells = build_enclosed_room(HUB_HALF_EXTENT)
    lower = ROOM_SIZE // 2 - HUB_HALF_EXTENT
    upper = ROOM_SIZE // 2 + HUB_HALF_EXTENT
    assert cells[(lower + 1, upper)].texture == "textures/t_wall_top_hub.png"
    assert cells[(lower, upper)].texture == "textures/t_wall_hub.png"
    assert cells[(lower + 1, lower)].texture == "textures/t_wall_hub.png"
    assert cells[(lower + 1, lower + 1)].texture == "textures/t_floor_hub.png"


@pytest.mark.parametrize("half", [0, ROOM_SIZE // 2 + 1])
def test_enclosed_room_rejects_bad_extent(half):
    with pytest.raises(ValueError):
        build_enclosed_room(half)


def _tile_of(pos):
    return int(pos[0] // TILE_SIZE), int(pos[1] // TILE_SIZE)


def test_hub_item_slots_lie_on_floor_in_one_row():
    slots = hub_item_slots()
    cells = build_enclosed_room(HUB_HALF_EXTENT)
    assert len(slots) == 3
    assert len({pos[1] for pos in slots}) == 1
    for pos in slots:
        assert cells[_tile_of(pos)].tiletype is TileType.FLOOR
        assert pos[2] == 1.0
    xs = [pos[0] for pos in slots]
    assert xs == sorted(xs)


def test_hub_portal_lies_on_floor():
    cells = build_enclosed_room(HUB_HALF_EXTENT)
    assert cells[_tile_of(HUB_PORTAL_POS)].tiletype is TileType.FLOOR
    assert _tile_of(HUB_PORTAL_POS) not in {_tile_of(p) for p in hub_item_slots()}