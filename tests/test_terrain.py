import numpy as np
import pytest

from cave_quest.config import MapConfig
from cave_quest.simulation.grid import Cell, TerrainKind
from cave_quest.simulation.terrain import NoiseTerrainGenerator


@pytest.mark.parametrize(
    "width,height,water,mountain,border",
    [
        (3, 3, 0.35, 0.62, True),
        (25, 12, 0.35, 0.62, False),
        (40, 30, 0.2, 0.8, True),
        (10, 40, 0.5, 0.51, False),
    ],
)
def test_every_cell_is_concrete(width, height, water, mountain, border):
    gen = NoiseTerrainGenerator(
        width, height, water_threshold=water, mountain_threshold=mountain, border_mountains=border
    )
    grid = gen.generate(seed=42)
    assert grid.is_complete()
    assert (grid.width, grid.height) == (width, height)


def test_same_seed_same_map():
    params = dict(width=30, height=20, noise_scale=0.1)
    first = NoiseTerrainGenerator(**params).generate(seed=1234)
    second = NoiseTerrainGenerator(**params).generate(seed=1234)
    assert first == second


def test_seed_offsets_noise_field():
    gen = NoiseTerrainGenerator(30, 20, border_mountains=False)
    gen.generate(seed=1)
    first = gen.heightmap.copy()
    gen.generate(seed=500)
    assert not np.array_equal(first, gen.heightmap)


def test_border_is_mountain_regardless_of_noise():
    # Every interior cell would be water
    gen = NoiseTerrainGenerator(
        12, 9, water_threshold=1.0, mountain_threshold=1.5, border_mountains=True
    )
    grid = gen.generate(seed=7)
    for cell in grid.cells():
        if grid.is_border(cell):
            assert grid.get(cell) == TerrainKind.MOUNTAIN
        else:
            assert grid.get(cell) == TerrainKind.WATER


def test_thresholds_can_produce_all_grass():
    gen = NoiseTerrainGenerator(
        20, 20, water_threshold=0.0, mountain_threshold=1.0, border_mountains=False
    )
    grid = gen.generate(seed=1)
    assert grid.count(TerrainKind.GRASS) == 400


def test_samples_are_in_unit_interval():
    gen = NoiseTerrainGenerator(10, 10, octaves=3)
    for x in range(10):
        for y in range(10):
            value = gen.sample(x, y, seed=99)
            assert 0.0 <= value < 1.0


def test_classification_uses_thresholds():
    gen = NoiseTerrainGenerator(5, 5, water_threshold=0.3, mountain_threshold=0.7)
    assert gen.classify(0.1) == TerrainKind.WATER
    assert gen.classify(0.3) == TerrainKind.GRASS
    assert gen.classify(0.7) == TerrainKind.GRASS
    assert gen.classify(0.9) == TerrainKind.MOUNTAIN


def test_generated_kinds_match_heightmap():
    gen = NoiseTerrainGenerator(20, 15, border_mountains=False)
    grid = gen.generate(seed=3)
    for cell in grid.cells():
        assert grid.get(cell) == gen.classify(float(gen.heightmap[cell.y, cell.x]))


def test_from_config():
    config = MapConfig(width=8, height=6, cell_size=2.0)
    grid = NoiseTerrainGenerator.from_config(config).generate(seed=0)
    assert (grid.width, grid.height, grid.cell_size) == (8, 6, 2.0)
    assert grid.get(Cell(0, 0)) == TerrainKind.MOUNTAIN
