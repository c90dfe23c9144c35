import pytest

from cave_quest.simulation.abilities import AbilitySet
from cave_quest.simulation.grid import Cell, TerrainGrid, TerrainKind
from cave_quest.simulation.mining import MiningTool

MINER = AbilitySet(can_mine=True)


@pytest.fixture
def quarry():
    return TerrainGrid.from_rows(
        [
            "^^^",
            "^.^",
            "^~^",
        ]
    )


def test_requires_pickaxe(quarry):
    tool = MiningTool(quarry)
    assert not tool.try_mine(Cell(1, 0), Cell(1, 1), AbilitySet(can_climb=True))
    assert quarry.get(Cell(1, 0)) == TerrainKind.MOUNTAIN


def test_adjacent_mountain_becomes_grass(quarry, fake_surface):
    tool = MiningTool(quarry, fake_surface)
    assert tool.try_mine(Cell(1, 0), Cell(1, 1), MINER)
    assert quarry.get(Cell(1, 0)) == TerrainKind.GRASS
    assert fake_surface.writes == [(Cell(1, 0), TerrainKind.GRASS)]


def test_only_mountains_can_be_mined(quarry):
    tool = MiningTool(quarry)
    assert not tool.try_mine(Cell(1, 2), Cell(1, 1), MINER)
    assert quarry.get(Cell(1, 2)) == TerrainKind.WATER


def test_far_cells_are_out_of_range(quarry):
    tool = MiningTool(quarry)
    assert not tool.try_mine(Cell(0, 0), Cell(2, 2), MINER)


def test_diagonal_needs_flag(quarry):
    assert not MiningTool(quarry).try_mine(Cell(0, 0), Cell(1, 1), MINER)
    assert MiningTool(quarry, allow_diagonal=True).try_mine(Cell(0, 0), Cell(1, 1), MINER)
    assert quarry.get(Cell(0, 0)) == TerrainKind.GRASS


def test_current_tile_needs_flag():
    grid = TerrainGrid.from_rows(["^^", "^^"])
    here = Cell(0, 0)
    assert not MiningTool(grid).try_mine(here, here, MINER)
    assert MiningTool(grid, allow_current_tile=True).try_mine(here, here, MINER)
    assert grid.get(here) == TerrainKind.GRASS


def test_mined_cell_cannot_be_mined_again(quarry):
    tool = MiningTool(quarry)
    assert tool.try_mine(Cell(0, 1), Cell(1, 1), MINER)
    assert not tool.try_mine(Cell(0, 1), Cell(1, 1), MINER)
