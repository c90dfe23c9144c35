"""Reachability and shortest paths over the terrain grid."""

from __future__ import annotations

from collections import deque
from typing import Callable, Collection, Iterator

from .grid import Cell, TerrainGrid, TerrainKind

# Ceiling on visited cells for the set variant
MAX_VISITED = 10_000

DIRECTIONS_4 = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIRECTIONS_8 = DIRECTIONS_4 + ((1, 1), (1, -1), (-1, 1), (-1, -1))


def neighbors(cell: Cell, diagonal: bool = False) -> Iterator[Cell]:
    """Yield the 4 (or 8) cells adjacent to ``cell``."""
    for dx, dy in DIRECTIONS_8 if diagonal else DIRECTIONS_4:
        yield Cell(cell.x + dx, cell.y + dy)


def is_adjacent(a: Cell, b: Cell, diagonal: bool = False) -> bool:
    """Check 4-adjacency (or 8-adjacency with ``diagonal``)."""
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    if diagonal:
        return max(dx, dy) == 1
    return dx + dy == 1


def reachable(
    grid: TerrainGrid,
    start: Cell,
    walkable: Collection[TerrainKind],
    max_visited: int = MAX_VISITED,
) -> set[Cell]:
    """
    Flood fill from ``start`` over 4-connected cells whose kind is walkable.

    ``start`` is always part of the result, whatever its own kind. The fill
    stops once ``max_visited`` cells have been seen, so a result of that size
    means "at least this many", not the full component.

    Args:
        grid: Terrain to explore
        start: Cell the fill starts from
        walkable: Terrain kinds that may be entered
        max_visited: Visit ceiling

    Returns:
        Set of reachable cells
    """
    walkable = frozenset(walkable)
    seen = {start}
    queue = deque([start])

    while queue and len(seen) < max_visited:
        current = queue.popleft()
        for nxt in neighbors(current):
            if nxt in seen:
                continue
            if grid.get(nxt) in walkable:
                seen.add(nxt)
                queue.append(nxt)

    return seen


def shortest_path(
    grid: TerrainGrid,
    start: Cell,
    goal: Cell,
    is_walkable: Callable[[TerrainKind], bool],
) -> list[Cell]:
    """
    Breadth-first shortest path (by cell count) from ``start`` to ``goal``.

    Returns:
        The path including both ends, ``[start]`` when start equals goal,
        or an empty list when the goal cannot be reached.
    """
    if start == goal:
        return [start]

    came_from: dict[Cell, Cell] = {}
    seen = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        if current == goal:
            break
        for nxt in neighbors(current):
            if nxt in seen:
                continue
            if not is_walkable(grid.get(nxt)):
                continue
            seen.add(nxt)
            came_from[nxt] = current
            queue.append(nxt)

    if goal not in came_from:
        return []

    path = [goal]
    cell = goal
    while cell != start:
        cell = came_from[cell]
        path.append(cell)
    path.reverse()
    return path
