import pytest

from cave_quest.errors import ConfigurationError
from cave_quest.renderer.colors import (
    GRASS_COLOR,
    TILE_PALETTE,
    relief_height,
    shade_tile,
    validate_palette,
)
from cave_quest.simulation.grid import TerrainKind
from cave_quest.simulation.terrain import NoiseTerrainGenerator

GEN = NoiseTerrainGenerator(5, 5, water_threshold=0.35, mountain_threshold=0.62)


def test_natural_grass_keeps_its_relief():
    assert relief_height(TerrainKind.GRASS, 0.5, GEN.classify) == 0.5
    assert relief_height(TerrainKind.WATER, 0.1, GEN.classify) == 0.1


def test_mined_mountain_is_drawn_flat():
    # Sampled above the mountain threshold, but grass after mining
    assert relief_height(TerrainKind.GRASS, 0.8, GEN.classify) is None
    # Border cells are stored at full height
    assert relief_height(TerrainKind.GRASS, 1.0, GEN.classify) is None


def test_mountains_and_missing_heightmap_are_flat():
    assert relief_height(TerrainKind.MOUNTAIN, 0.9, GEN.classify) is None
    assert relief_height(TerrainKind.GRASS, None, GEN.classify) is None


def test_flat_tile_uses_palette_color():
    assert shade_tile(TerrainKind.GRASS, None) == GRASS_COLOR
    custom = dict(TILE_PALETTE)
    custom[TerrainKind.GRASS] = (10, 20, 30)
    assert shade_tile(TerrainKind.GRASS, None, custom) == (10, 20, 30)


def test_low_tiles_are_darker():
    low = shade_tile(TerrainKind.GRASS, 0.36)
    high = shade_tile(TerrainKind.GRASS, 0.6)
    assert sum(low) < sum(high)


def test_palette_must_cover_terrain():
    validate_palette(TILE_PALETTE)
    incomplete = {kind: color for kind, color in TILE_PALETTE.items() if kind != TerrainKind.WATER}
    with pytest.raises(ConfigurationError):
        validate_palette(incomplete)
