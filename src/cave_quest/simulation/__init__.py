"""Simulation module - pure logic, no rendering."""

from .abilities import Ability, AbilitySet, ItemKind
from .grid import Cell, TerrainGrid, TerrainKind
from .interfaces import EntitySpawner, TerrainSurface
from .mining import MiningTool
from .navigator import Navigator
from .placement import Level, PlacementEngine, PlacementRecord, Scenario
from .reachability import reachable, shortest_path
from .terrain import NoiseTerrainGenerator
from .world import Actor, World, WorldStats

__all__ = [
    "Ability",
    "AbilitySet",
    "Actor",
    "Cell",
    "EntitySpawner",
    "ItemKind",
    "Level",
    "MiningTool",
    "Navigator",
    "NoiseTerrainGenerator",
    "PlacementEngine",
    "PlacementRecord",
    "Scenario",
    "TerrainGrid",
    "TerrainKind",
    "TerrainSurface",
    "World",
    "WorldStats",
    "reachable",
    "shortest_path",
]
