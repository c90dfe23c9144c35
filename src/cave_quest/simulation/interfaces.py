"""Protocols for the collaborators the simulation talks to."""

from __future__ import annotations

from typing import Hashable, Protocol, runtime_checkable

from .abilities import ItemKind
from .grid import Cell, TerrainKind


@runtime_checkable
class TerrainSurface(Protocol):
    """A rendered projection of the terrain grid."""

    def set_tile(self, cell: Cell, kind: TerrainKind) -> None: ...

    def clear_all(self) -> None: ...

    def get_tile(self, cell: Cell) -> TerrainKind: ...


@runtime_checkable
class EntitySpawner(Protocol):
    """Creates and destroys the presentation of placed entities.

    ``kind`` is an ItemKind, or None for the player.
    """

    def spawn(self, kind: ItemKind | None, position: tuple[float, float]) -> Hashable: ...

    def despawn(self, handle: Hashable) -> None: ...
