"""Abilities granted by items and the terrain they unlock."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .grid import TerrainKind


class Ability(Enum):
    """A traversal or interaction capability."""

    SAIL = auto()  # enter water
    CLIMB = auto()  # enter mountain
    MINE = auto()  # turn mountain into grass


class ItemKind(Enum):
    """Entities placed on the map by the placement engine."""

    BOAT = auto()
    GOAT = auto()
    PICKAXE = auto()
    GOAL = auto()

    @property
    def ability(self) -> Ability | None:
        """Ability granted on pickup (None for the goal)."""
        return _ITEM_ABILITIES.get(self)


_ITEM_ABILITIES = {
    ItemKind.BOAT: Ability.SAIL,
    ItemKind.GOAT: Ability.CLIMB,
    ItemKind.PICKAXE: Ability.MINE,
}


@dataclass
class AbilitySet:
    """
    The player's unlocked capabilities.

    Grass is always enterable. Abilities are only ever added during a
    session, never revoked.
    """

    can_sail: bool = False
    can_climb: bool = False
    can_mine: bool = False

    def grant(self, ability: Ability) -> bool:
        """
        Unlock an ability.

        Returns:
            True if the ability was not held before
        """
        attr = _ABILITY_ATTRS[ability]
        newly_granted = not getattr(self, attr)
        setattr(self, attr, True)
        return newly_granted

    def can_enter(self, kind: TerrainKind) -> bool:
        """Walkability predicate for pathfinding."""
        if kind == TerrainKind.GRASS:
            return True
        if kind == TerrainKind.WATER:
            return self.can_sail
        if kind == TerrainKind.MOUNTAIN:
            return self.can_climb
        return False

    def walkable_kinds(self) -> frozenset[TerrainKind]:
        """Terrain kinds this ability set may enter."""
        return frozenset(kind for kind in TerrainKind if self.can_enter(kind))


_ABILITY_ATTRS = {
    Ability.SAIL: "can_sail",
    Ability.CLIMB: "can_climb",
    Ability.MINE: "can_mine",
}
