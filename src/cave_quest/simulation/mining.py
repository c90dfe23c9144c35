"""Mining - turning mountain cells next to the player into grass."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .abilities import AbilitySet
from .grid import Cell, TerrainGrid, TerrainKind
from .reachability import is_adjacent

if TYPE_CHECKING:
    from .interfaces import TerrainSurface

logger = logging.getLogger(__name__)


class MiningTool:
    """Applies the mine ability to the grid and its rendered projection."""

    def __init__(
        self,
        grid: TerrainGrid,
        surface: TerrainSurface | None = None,
        allow_diagonal: bool = False,
        allow_current_tile: bool = False,
    ):
        self.grid = grid
        self.surface = surface
        self.allow_diagonal = allow_diagonal
        self.allow_current_tile = allow_current_tile

    def in_range(self, target: Cell, actor_cell: Cell) -> bool:
        """Check if ``target`` is close enough to the actor to be mined."""
        if target == actor_cell:
            return self.allow_current_tile
        return is_adjacent(target, actor_cell, diagonal=self.allow_diagonal)

    def try_mine(self, target: Cell, actor_cell: Cell, abilities: AbilitySet) -> bool:
        """
        Attempt to mine ``target``.

        Returns:
            True if a mountain cell was converted to grass
        """
        if not abilities.can_mine:
            return False

        if not self.in_range(target, actor_cell):
            logger.debug("cell %s is out of mining range of %s", target, actor_cell)
            return False

        if self.grid.get(target) != TerrainKind.MOUNTAIN:
            logger.debug("cell %s is %s, not mountain", target, self.grid.get(target).name)
            return False

        self.grid.set(target, TerrainKind.GRASS)
        if self.surface is not None:
            self.surface.set_tile(target, TerrainKind.GRASS)
        logger.info("mined mountain at %s", target)
        return True
