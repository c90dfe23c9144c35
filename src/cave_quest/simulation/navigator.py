"""Navigator - ability-gated pathfinding and waypoint following."""

from __future__ import annotations

import logging
import math
from collections import deque

from .abilities import AbilitySet
from .grid import TerrainGrid
from .reachability import shortest_path

logger = logging.getLogger(__name__)

Point = tuple[float, float]


def move_towards(current: Point, target: Point, max_delta: float) -> Point:
    """Move ``current`` toward ``target`` by at most ``max_delta``."""
    dx = target[0] - current[0]
    dy = target[1] - current[1]
    dist = math.sqrt(dx * dx + dy * dy)
    if dist <= max_delta or dist == 0:
        return target
    return (current[0] + dx / dist * max_delta, current[1] + dy / dist * max_delta)


class Navigator:
    """
    Computes shortest paths for the player and walks them.

    A path is a queue of cell-center waypoints. The movement loop heads for
    the first waypoint and drops it once within ``arrive_epsilon``.
    """

    def __init__(self, grid: TerrainGrid, move_speed: float = 3.0, arrive_epsilon: float = 0.01):
        """
        Initialize the navigator.

        Args:
            grid: Terrain the paths are computed on
            move_speed: World units travelled per second
            arrive_epsilon: Distance at which a waypoint counts as reached
        """
        self.grid = grid
        self.move_speed = move_speed
        self.arrive_epsilon = arrive_epsilon
        self.waypoints: deque[Point] = deque()

    def find_path(self, start: Point, goal: Point, abilities: AbilitySet) -> list[Point]:
        """
        Shortest path between two world positions.

        Returns:
            Cell-center waypoints from the start cell to the goal cell, or an
            empty list if no route exists with the given abilities
        """
        start_cell = self.grid.world_to_cell(*start)
        goal_cell = self.grid.world_to_cell(*goal)

        cells = shortest_path(self.grid, start_cell, goal_cell, abilities.can_enter)
        if not cells:
            logger.warning("no path found from %s to %s", start_cell, goal_cell)
            return []

        logger.debug("path from %s to %s: %s cells", start_cell, goal_cell, len(cells))
        return [self.grid.cell_center(cell) for cell in cells]

    def request(self, start: Point, goal: Point, abilities: AbilitySet) -> list[Point]:
        """Replace any in-flight path with a new one toward ``goal``."""
        path = self.find_path(start, goal, abilities)
        self.waypoints = deque(path)
        return path

    def clear(self) -> None:
        self.waypoints.clear()

    @property
    def target(self) -> Point | None:
        """The waypoint currently being walked to."""
        return self.waypoints[0] if self.waypoints else None

    @property
    def is_moving(self) -> bool:
        return bool(self.waypoints)

    def advance(self, position: Point, dt: float) -> Point:
        """
        Move along the path for ``dt`` seconds.

        Args:
            position: Current world position
            dt: Elapsed time in seconds

        Returns:
            The new world position (unchanged when there is no path)
        """
        target = self.target
        if target is None:
            return position

        position = move_towards(position, target, self.move_speed * dt)
        if math.dist(position, target) < self.arrive_epsilon:
            self.waypoints.popleft()
            logger.debug("reached waypoint, %s remaining", len(self.waypoints))
        return position
