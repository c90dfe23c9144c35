"""Placement engine - generates a map and places player, items and goal.

One generation attempt runs these stages in a fixed order, each later
stage simulating the abilities granted by earlier ones:

1. player spawn on grass with a large enough grass-only region
2. goat and boat, in an order picked per attempt (see ``Scenario``)
3. pickaxe on reachable grass
4. goal on a far cell reachable with every ability, water or mountain
   preferred

A failed player spawn (or an empty item candidate pool) discards the whole
attempt and regenerates the map with a fresh seed. Failing to place an
individual item is only logged.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable

from ..errors import GenerationError
from .abilities import AbilitySet, ItemKind
from .grid import Cell, TerrainGrid, TerrainKind
from .reachability import reachable
from .terrain import NoiseTerrainGenerator

if TYPE_CHECKING:
    from ..config import Config, SpawnConfig

logger = logging.getLogger(__name__)

# Terrain seeds are drawn from [0, SEED_RANGE)
SEED_RANGE = 1_000_000

# Walkable kinds for the abilities simulated at each placement stage
GRASS_ONLY = AbilitySet().walkable_kinds()
GRASS_AND_MOUNTAIN = AbilitySet(can_climb=True).walkable_kinds()
ALL_TERRAIN = AbilitySet(can_sail=True, can_climb=True, can_mine=True).walkable_kinds()

CHALLENGING = frozenset({TerrainKind.WATER, TerrainKind.MOUNTAIN})


class Scenario(Enum):
    """Which traversal ability the player is steered to acquire first."""

    GOAT_FIRST = auto()  # goat on grass, boat up in the mountains
    BOAT_FIRST = auto()  # boat and goat both on grass


@dataclass(frozen=True)
class PlacementRecord:
    """Where an item was placed and the terrain under it at the time."""

    kind: ItemKind
    cell: Cell
    terrain: TerrainKind


@dataclass
class Level:
    """Result of a successful generation attempt."""

    grid: TerrainGrid
    seed: int
    player: Cell
    scenario: Scenario
    items: dict[ItemKind, PlacementRecord] = field(default_factory=dict)
    used_cells: set[Cell] = field(default_factory=set)
    attempts: int = 1

    @property
    def goal(self) -> PlacementRecord | None:
        return self.items.get(ItemKind.GOAL)

    def item_at(self, cell: Cell) -> ItemKind | None:
        """Get the kind of item placed at a cell, if any."""
        for record in self.items.values():
            if record.cell == cell:
                return record.kind
        return None


class _RestartGeneration(Exception):
    """Signal that the current attempt must be discarded."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass
class _Attempt:
    """Mutable state of a single generation attempt."""

    grid: TerrainGrid
    seed: int
    player: Cell | None = None
    used: set[Cell] = field(default_factory=set)
    items: dict[ItemKind, PlacementRecord] = field(default_factory=dict)


class PlacementEngine:
    """
    Generates solvable levels.

    All randomness (terrain seeds, spawn draws, scenario choice) comes from
    the single ``rng`` passed in, so a given rng state always yields the
    same level.
    """

    def __init__(
        self,
        generator: NoiseTerrainGenerator,
        spawn: SpawnConfig,
        rng: random.Random,
    ):
        """
        Initialize the engine.

        Args:
            generator: Terrain generator used for every attempt
            spawn: Placement rules
            rng: Random source threaded through generation and placement
        """
        self.generator = generator
        self.spawn = spawn
        self.rng = rng

        # Regenerations performed by the last call to generate()
        self.regenerations = 0

    @classmethod
    def from_config(cls, config: Config, rng: random.Random) -> PlacementEngine:
        return cls(NoiseTerrainGenerator.from_config(config.map), config.spawn, rng)

    def generate(self, seed: int) -> Level:
        """
        Generate terrain and place every entity, regenerating on failure.

        Args:
            seed: Terrain seed for the first attempt

        Returns:
            The first level that passed validation

        Raises:
            GenerationError: If ``max_regenerations`` is exceeded
        """
        self.regenerations = 0
        attempts = 0
        limit = self.spawn.max_regenerations

        while True:
            attempts += 1
            try:
                level = self._attempt(seed)
            except _RestartGeneration as restart:
                if limit is not None and self.regenerations >= limit:
                    raise GenerationError(attempts, restart.reason) from None
                self.regenerations += 1
                seed = self.rng.randrange(SEED_RANGE)
                logger.warning("%s - regenerating with seed %s", restart.reason, seed)
                continue

            level.attempts = attempts
            self.log_summary(level)
            return level

    def _attempt(self, seed: int) -> Level:
        """Run one full generation attempt."""
        state = _Attempt(grid=self.generator.generate(seed), seed=seed)

        player = self._place_player(state)
        candidates = self._item_candidates(state.grid, player)

        scenario = Scenario.GOAT_FIRST if self.rng.randrange(2) == 0 else Scenario.BOAT_FIRST
        if self.spawn.scenario is not None:
            scenario = self.spawn.scenario
        logger.info("item placement scenario: %s", scenario.name)

        if scenario is Scenario.GOAT_FIRST:
            self._place_goat_first(state, candidates)
        else:
            self._place_boat_first(state, candidates)

        self._place_pickaxe(state, candidates)
        self._place_goal(state)

        return Level(
            grid=state.grid,
            seed=seed,
            player=player,
            scenario=scenario,
            items=state.items,
            used_cells=state.used,
        )

    def _place_player(self, state: _Attempt) -> Cell:
        """Pick a grass cell whose grass-only region is large enough."""
        grass = state.grid.cells_of(TerrainKind.GRASS)
        if not grass:
            raise _RestartGeneration("no grass on map")

        for _ in range(self.spawn.max_tries):
            cell = self.rng.choice(grass)
            region = reachable(state.grid, cell, GRASS_ONLY)
            if len(region) >= self.spawn.min_reachable:
                state.player = cell
                state.used.add(cell)
                logger.info("player spawned at %s (region of %s cells)", cell, len(region))
                return cell

        raise _RestartGeneration("no valid player spawn")

    def _far_enough(self, cell: Cell, player: Cell, distance: float) -> bool:
        return cell.distance_sq(player) >= distance * distance

    def _item_candidates(self, grid: TerrainGrid, player: Cell) -> list[Cell]:
        """Grass cells reachable on foot and at least min_item_distance away."""
        region = reachable(grid, player, GRASS_ONLY)
        candidates = [
            cell
            for cell in grid.cells_of(TerrainKind.GRASS)
            if cell in region
            and self._far_enough(cell, player, self.spawn.min_item_distance)
        ]
        if not candidates:
            raise _RestartGeneration("no reachable grass for items")
        return candidates

    def _pick_cell(
        self,
        candidates: list[Cell],
        ok: Callable[[Cell], bool],
        used: set[Cell],
    ) -> Cell | None:
        """
        Draw random candidates until one is acceptable and unused.

        Rejected candidates are removed from the pool. The chosen cell is
        claimed in ``used``.
        """
        for _ in range(self.spawn.pick_attempts):
            if not candidates:
                break
            idx = self.rng.randrange(len(candidates))
            cell = candidates[idx]
            if ok(cell) and cell not in used:
                used.add(cell)
                return cell
            candidates.pop(idx)
        return None

    def _record(self, state: _Attempt, kind: ItemKind, cell: Cell) -> PlacementRecord:
        record = PlacementRecord(kind=kind, cell=cell, terrain=state.grid.get(cell))
        state.used.add(cell)
        state.items[kind] = record
        logger.debug("%s placed at %s (tile=%s)", kind.name, cell, record.terrain.name)
        return record

    def _is_kind(self, grid: TerrainGrid, kind: TerrainKind) -> Callable[[Cell], bool]:
        return lambda cell: grid.get(cell) == kind

    def _place_on_grass(self, state: _Attempt, kind: ItemKind, candidates: list[Cell]) -> bool:
        cell = self._pick_cell(candidates, self._is_kind(state.grid, TerrainKind.GRASS), state.used)
        if cell is None:
            logger.warning("could not place %s on reachable grass", kind.name)
            return False
        self._record(state, kind, cell)
        return True

    def _place_goat_first(self, state: _Attempt, candidates: list[Cell]) -> None:
        """Goat on grass; boat on a mountain only reachable by climbing."""
        self._place_on_grass(state, ItemKind.GOAT, candidates)

        grid = state.grid
        with_goat = reachable(grid, state.player, GRASS_AND_MOUNTAIN)
        mountains = [
            cell
            for cell in grid.cells_of(TerrainKind.MOUNTAIN)
            if cell in with_goat
            and self._far_enough(cell, state.player, self.spawn.min_item_distance)
        ]

        cell = None
        if mountains:
            cell = self._pick_cell(mountains, self._is_kind(grid, TerrainKind.MOUNTAIN), state.used)
        if cell is not None:
            self._record(state, ItemKind.BOAT, cell)
            return

        logger.debug("no reachable mountain for BOAT, falling back to grass")
        self._place_on_grass(state, ItemKind.BOAT, candidates)

    def _place_boat_first(self, state: _Attempt, candidates: list[Cell]) -> None:
        """Boat and goat both on reachable grass (never on water)."""
        self._place_on_grass(state, ItemKind.BOAT, candidates)
        self._place_on_grass(state, ItemKind.GOAT, candidates)

    def _place_pickaxe(self, state: _Attempt, candidates: list[Cell]) -> None:
        """Place the pickaxe on grass, re-checking the tile after claiming it."""
        is_grass = self._is_kind(state.grid, TerrainKind.GRASS)

        for _ in range(self.spawn.pickaxe_attempts):
            if not candidates:
                break
            cell = self._pick_cell(candidates, is_grass, state.used)
            if cell is None:
                continue
            # Only an outside write to the grid can change the tile after the draw
            if is_grass(cell):
                self._record(state, ItemKind.PICKAXE, cell)
                return
            logger.warning("PICKAXE tile changed under %s, retrying", cell)
            state.used.discard(cell)

        logger.warning("could not place PICKAXE after %s attempts", self.spawn.pickaxe_attempts)

    def _pick_unused(self, pool: list[Cell], used: set[Cell]) -> Cell | None:
        unused = [cell for cell in pool if cell not in used]
        if not unused:
            return None
        return self.rng.choice(unused)

    def _place_goal(self, state: _Attempt) -> None:
        """Place the goal far away, preferring water or mountain cells."""
        grid = state.grid
        region = reachable(grid, state.player, ALL_TERRAIN)

        far = [
            cell
            for cell in grid.cells()
            if cell in region
            and self._far_enough(cell, state.player, self.spawn.min_goal_distance)
        ]
        challenging = [cell for cell in far if grid.get(cell) in CHALLENGING]

        cell = self._pick_unused(challenging, state.used)
        if cell is None:
            cell = self._pick_unused(far, state.used)

        if cell is None:
            if self.spawn.require_goal:
                raise _RestartGeneration("no cell for goal")
            logger.warning("could not place GOAL without overlap")
            return

        self._record(state, ItemKind.GOAL, cell)

    def log_summary(self, level: Level) -> None:
        """Log where each item ended up."""
        logger.info(
            "level ready: seed=%s attempts=%s scenario=%s player=%s",
            level.seed,
            level.attempts,
            level.scenario.name,
            level.player,
        )
        for kind in ItemKind:
            record = level.items.get(kind)
            if record is None:
                logger.info("  %-7s -> NOT PLACED", kind.name)
            else:
                logger.info("  %-7s -> %s (%s)", kind.name, record.cell, record.terrain.name)
