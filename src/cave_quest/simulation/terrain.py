"""Noise terrain generation - fills a TerrainGrid from coherent noise."""

from __future__ import annotations

import logging

import numpy as np
from noise import snoise2

from .grid import Cell, TerrainGrid, TerrainKind

logger = logging.getLogger(__name__)

# Largest float below 1.0, so sampled noise stays in [0, 1)
_NOISE_CEILING = float(np.nextafter(1.0, 0.0))


class NoiseTerrainGenerator:
    """
    Generates grass/water/mountain maps from simplex noise.

    The seed offsets the sampling coordinates instead of reseeding the noise
    function, so the same seed and parameters always reproduce the same map.
    """

    def __init__(
        self,
        width: int,
        height: int,
        noise_scale: float = 0.12,
        water_threshold: float = 0.35,
        mountain_threshold: float = 0.62,
        border_mountains: bool = True,
        octaves: int = 1,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
        cell_size: float = 1.0,
    ):
        """
        Initialize the generator.

        Args:
            width: Grid width in cells
            height: Grid height in cells
            noise_scale: Noise frequency (lower = larger features)
            water_threshold: Noise value below which a cell is water (0-1)
            mountain_threshold: Noise value above which a cell is mountain (0-1)
            border_mountains: Force the outer ring of cells to mountain
            octaves: Number of noise octaves summed per sample
            persistence: Amplitude falloff per octave
            lacunarity: Frequency growth per octave
            cell_size: World units per cell of the produced grid
        """
        self.width = width
        self.height = height
        self.noise_scale = noise_scale
        self.water_level = water_threshold
        self.mountain_level = mountain_threshold
        self.border_mountains = border_mountains
        self.octaves = octaves
        self.persistence = persistence
        self.lacunarity = lacunarity
        self.cell_size = cell_size

        # Last sampled noise field, kept for elevation shading
        self.heightmap: np.ndarray | None = None

    @classmethod
    def from_config(cls, config) -> NoiseTerrainGenerator:
        """Build a generator from a MapConfig."""
        return cls(
            width=config.width,
            height=config.height,
            noise_scale=config.noise_scale,
            water_threshold=config.water_threshold,
            mountain_threshold=config.mountain_threshold,
            border_mountains=config.border_mountains,
            octaves=config.octaves,
            persistence=config.persistence,
            lacunarity=config.lacunarity,
            cell_size=config.cell_size,
        )

    def sample(self, x: int, y: int, seed: int) -> float:
        """
        Sample the noise field for a cell.

        Returns:
            Noise value in [0, 1)
        """
        noise_val = 0.0
        amplitude = 1.0
        frequency = self.noise_scale
        max_amplitude = 0.0

        for _ in range(self.octaves):
            noise_val += amplitude * snoise2((x + seed) * frequency, (y + seed) * frequency)
            max_amplitude += amplitude
            amplitude *= self.persistence
            frequency *= self.lacunarity

        # Normalize to 0-1 range
        noise_val = (noise_val / max_amplitude + 1) / 2
        return min(max(noise_val, 0.0), _NOISE_CEILING)

    def classify(self, value: float) -> TerrainKind:
        """Map a noise value to a terrain kind using the thresholds."""
        if value < self.water_level:
            return TerrainKind.WATER
        if value > self.mountain_level:
            return TerrainKind.MOUNTAIN
        return TerrainKind.GRASS

    def generate(self, seed: int) -> TerrainGrid:
        """
        Generate a fully populated grid.

        Args:
            seed: Offset applied to the noise sampling coordinates

        Returns:
            A TerrainGrid with a concrete kind in every cell
        """
        grid = TerrainGrid(self.width, self.height, self.cell_size)
        heightmap = np.zeros((self.height, self.width), dtype=np.float64)

        for y in range(self.height):
            for x in range(self.width):
                cell = Cell(x, y)
                if self.border_mountains and grid.is_border(cell):
                    heightmap[y, x] = 1.0
                    grid.set(cell, TerrainKind.MOUNTAIN)
                    continue

                value = self.sample(x, y, seed)
                heightmap[y, x] = value
                grid.set(cell, self.classify(value))

        self.heightmap = heightmap
        logger.info(
            "map generated: seed=%s size=%sx%s grass=%s water=%s mountain=%s",
            seed,
            self.width,
            self.height,
            grid.count(TerrainKind.GRASS),
            grid.count(TerrainKind.WATER),
            grid.count(TerrainKind.MOUNTAIN),
        )
        return grid
