from cave_quest.simulation.abilities import AbilitySet
from cave_quest.simulation.grid import Cell, TerrainGrid, TerrainKind
from cave_quest.simulation.reachability import (
    is_adjacent,
    neighbors,
    reachable,
    shortest_path,
)

GRASS = {TerrainKind.GRASS}

LAKE = TerrainGrid.from_rows(
    [
        "......",
        "..~~..",
        "..~~..",
        "~~~~~~",
        "......",
    ]
)


def grass_only(kind):
    return kind == TerrainKind.GRASS


def test_start_is_always_reachable():
    grid = TerrainGrid.from_rows(["~~", "~~"])
    assert reachable(grid, Cell(0, 0), GRASS) == {Cell(0, 0)}


def test_start_outside_walkable_kinds_still_expands():
    grid = TerrainGrid.from_rows(["~..", "~~~"])
    assert reachable(grid, Cell(0, 0), GRASS) == {Cell(0, 0), Cell(1, 0), Cell(2, 0)}


def test_water_splits_grass_regions():
    top = reachable(LAKE, Cell(0, 0), GRASS)
    assert Cell(5, 2) in top
    assert Cell(0, 4) not in top
    assert len(top) == 14


def test_extra_kinds_join_regions():
    both = reachable(LAKE, Cell(0, 0), {TerrainKind.GRASS, TerrainKind.WATER})
    assert len(both) == LAKE.width * LAKE.height


def test_fill_never_leaves_bounds():
    grid = TerrainGrid.from_rows(["...", "...", "..."])
    region = reachable(grid, Cell(1, 1), GRASS)
    assert region == set(grid.cells())


def test_fill_is_capped():
    grid = TerrainGrid.from_rows(["." * 50] * 50)
    region = reachable(grid, Cell(25, 25), GRASS, max_visited=100)
    assert 100 <= len(region) < 104


def test_neighbors_and_adjacency():
    origin = Cell(0, 0)
    assert set(neighbors(origin)) == {Cell(1, 0), Cell(-1, 0), Cell(0, 1), Cell(0, -1)}
    assert len(set(neighbors(origin, diagonal=True))) == 8
    assert is_adjacent(origin, Cell(0, 1))
    assert not is_adjacent(origin, Cell(1, 1))
    assert is_adjacent(origin, Cell(1, 1), diagonal=True)
    assert not is_adjacent(origin, origin, diagonal=True)
    assert not is_adjacent(origin, Cell(2, 0), diagonal=True)


def test_path_to_self_is_single_cell():
    assert shortest_path(LAKE, Cell(1, 1), Cell(1, 1), grass_only) == [Cell(1, 1)]


def test_unreachable_goal_gives_empty_path():
    assert shortest_path(LAKE, Cell(0, 0), Cell(0, 4), grass_only) == []


def test_path_endpoints_and_adjacency():
    path = shortest_path(LAKE, Cell(0, 0), Cell(5, 2), grass_only)
    assert path[0] == Cell(0, 0)
    assert path[-1] == Cell(5, 2)
    for a, b in zip(path, path[1:]):
        assert is_adjacent(a, b)
        assert LAKE.get(b) == TerrainKind.GRASS


def test_path_is_shortest_on_open_grid():
    grid = TerrainGrid.from_rows(["." * 8] * 8)
    path = shortest_path(grid, Cell(1, 2), Cell(6, 7), grass_only)
    assert len(path) == 5 + 5 + 1


def test_path_detours_around_wall():
    grid = TerrainGrid.from_rows(
        [
            ".^...",
            ".^.^.",
            "...^.",
        ]
    )
    path = shortest_path(grid, Cell(0, 0), Cell(4, 0), grass_only)
    assert path == [
        Cell(0, 0),
        Cell(0, 1),
        Cell(0, 2),
        Cell(1, 2),
        Cell(2, 2),
        Cell(2, 1),
        Cell(2, 0),
        Cell(3, 0),
        Cell(4, 0),
    ]


def test_abilities_open_water():
    sailor = AbilitySet(can_sail=True)
    path = shortest_path(LAKE, Cell(0, 0), Cell(0, 4), sailor.can_enter)
    assert path[0] == Cell(0, 0)
    assert path[-1] == Cell(0, 4)
    assert len(path) == 5
