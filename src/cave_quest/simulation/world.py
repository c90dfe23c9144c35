"""World - a play session on a generated level."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Hashable

from ..errors import ConfigurationError
from .abilities import Ability, AbilitySet, ItemKind
from .grid import Cell, TerrainGrid
from .interfaces import EntitySpawner, TerrainSurface
from .mining import MiningTool
from .navigator import Navigator
from .placement import SEED_RANGE, Level, PlacementEngine

if TYPE_CHECKING:
    from ..config import Config

logger = logging.getLogger(__name__)


@dataclass
class WorldStats:
    """Statistics about the current session."""

    tick: int = 0
    regenerations: int = 0
    items_collected: int = 0
    tiles_mined: int = 0
    won: bool = False


@dataclass
class Actor:
    """The player: a world position plus the abilities collected so far."""

    x: float
    y: float
    abilities: AbilitySet = field(default_factory=AbilitySet)

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def grant(self, ability: Ability) -> bool:
        """Unlock an ability, returning True if it is new."""
        newly_granted = self.abilities.grant(ability)
        if newly_granted:
            logger.info("player gained %s ability", ability.name.lower())
        return newly_granted


class World:
    """
    The play session.

    Owns the authoritative terrain grid of the current level, the player,
    and the remaining items. Renderers and other presentation layers are
    optional collaborators kept in sync as projections.
    """

    def __init__(
        self,
        config: Config,
        surface: TerrainSurface | None = None,
        spawner: EntitySpawner | None = None,
        on_goal_reached: Callable[[], None] | None = None,
    ):
        """
        Initialize the world.

        Args:
            config: Full configuration (validated here)
            surface: Terrain projection to keep in sync
            spawner: Presentation layer for the player and items
            on_goal_reached: Called once when the player reaches the goal

        Raises:
            ConfigurationError: If the config or a collaborator is invalid
        """
        config.validate()
        if surface is not None and not isinstance(surface, TerrainSurface):
            raise ConfigurationError(f"{type(surface).__name__} is not a TerrainSurface")
        if spawner is not None and not isinstance(spawner, EntitySpawner):
            raise ConfigurationError(f"{type(spawner).__name__} is not an EntitySpawner")

        self.config = config
        self.surface = surface
        self.spawner = spawner
        self.on_goal_reached = on_goal_reached

        # Seeded random number generator for reproducibility
        if config.spawn.seed is not None:
            self.seed = config.spawn.seed
        else:
            self.seed = random.randrange(SEED_RANGE)
        self.rng = random.Random(self.seed)
        self.engine = PlacementEngine.from_config(config, self.rng)

        self.level: Level | None = None
        self.grid: TerrainGrid | None = None
        self.player: Actor | None = None
        self.navigator: Navigator | None = None
        self.mining: MiningTool | None = None

        # Items still lying on the map, by cell
        self.items: dict[Cell, ItemKind] = {}
        self.collected: list[ItemKind] = []
        self._handles: dict[ItemKind | None, Hashable] = {}

        self.stats = WorldStats()

    def initialize(self) -> Level:
        """Generate a level for the current seed and populate the session."""
        self._despawn_all()

        level = self.engine.generate(self.seed)
        self.level = level
        self.seed = level.seed
        self.grid = level.grid

        self.player = Actor(*self.grid.cell_center(level.player))
        self.navigator = Navigator(
            self.grid,
            move_speed=self.config.player.move_speed,
            arrive_epsilon=self.config.player.arrive_epsilon,
        )
        self.mining = MiningTool(
            self.grid,
            self.surface,
            allow_diagonal=self.config.mining.allow_diagonal,
            allow_current_tile=self.config.mining.allow_current_tile,
        )

        self.items = {record.cell: record.kind for record in level.items.values()}
        self.collected = []

        self.stats = WorldStats(regenerations=self.stats.regenerations + self.engine.regenerations)

        self._project_terrain()
        self._spawn_entities()
        return level

    def regenerate(self) -> Level:
        """Throw away the current level and build a new one with a fresh seed."""
        self.seed = self.rng.randrange(SEED_RANGE)
        self.stats.regenerations += 1
        logger.info("regenerating world with seed %s", self.seed)
        return self.initialize()

    def _project_terrain(self) -> None:
        if self.surface is None:
            return
        self.surface.clear_all()
        for cell in self.grid.cells():
            self.surface.set_tile(cell, self.grid.get(cell))

    def _spawn_entities(self) -> None:
        if self.spawner is None:
            return
        self._handles[None] = self.spawner.spawn(None, self.player.position)
        for cell, kind in self.items.items():
            self._handles[kind] = self.spawner.spawn(kind, self.grid.cell_center(cell))

    def _despawn_all(self) -> None:
        if self.spawner is not None:
            for handle in self._handles.values():
                self.spawner.despawn(handle)
        self._handles.clear()

    def _require_level(self) -> None:
        if self.level is None:
            raise RuntimeError("world is not initialized, call initialize() first")

    @property
    def player_cell(self) -> Cell:
        self._require_level()
        return self.grid.world_to_cell(self.player.x, self.player.y)

    @property
    def is_won(self) -> bool:
        return self.stats.won

    def request_path(self, x: float, y: float) -> list[tuple[float, float]]:
        """
        Path the player toward a world position (primary click).

        Returns:
            The new waypoints; empty when unreachable, leaving the player put
        """
        self._require_level()
        if self.stats.won:
            return []
        return self.navigator.request(self.player.position, (x, y), self.player.abilities)

    def request_mine(self, x: float, y: float) -> bool:
        """Try to mine the cell at a world position (secondary click)."""
        self._require_level()
        if self.stats.won:
            return False
        target = self.grid.world_to_cell(x, y)
        mined = self.mining.try_mine(target, self.player_cell, self.player.abilities)
        if mined:
            self.stats.tiles_mined += 1
        return mined

    def step(self, dt: float) -> None:
        """
        Advance the session by ``dt`` seconds.

        This:
        1. Moves the player along the current path
        2. Collects any item on the player's cell
        3. Ends the session when the goal is reached
        """
        self._require_level()
        self.stats.tick += 1
        if self.stats.won:
            return

        self.player.x, self.player.y = self.navigator.advance(self.player.position, dt)
        self._collect(self.player_cell)

    def _collect(self, cell: Cell) -> None:
        kind = self.items.get(cell)
        if kind is None:
            return

        if kind is ItemKind.GOAL:
            self._reach_goal()
            return

        del self.items[cell]
        self.collected.append(kind)
        self.stats.items_collected += 1
        self.player.grant(kind.ability)
        logger.debug("picked up %s at %s", kind.name, cell)

        handle = self._handles.pop(kind, None)
        if handle is not None and self.spawner is not None:
            self.spawner.despawn(handle)

    def _reach_goal(self) -> None:
        self.stats.won = True
        self.navigator.clear()
        logger.info("goal reached after %s ticks", self.stats.tick)
        if self.on_goal_reached is not None:
            self.on_goal_reached()
