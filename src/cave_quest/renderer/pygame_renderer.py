"""Pygame-CE renderer for playing a generated level."""

from __future__ import annotations

import itertools
import logging
import math
from typing import TYPE_CHECKING

import pygame

from ..config import RendererConfig
from ..simulation.abilities import ItemKind
from ..simulation.grid import Cell, TerrainKind
from . import colors
from .ui import UI_COLORS, Button, TextPanel

if TYPE_CHECKING:
    from ..simulation.world import World

logger = logging.getLogger(__name__)

INSTRUCTIONS = [
    "Left click: walk to a tile",
    "Right click: mine an adjacent mountain",
    "Boat lets you sail water",
    "Goat lets you climb mountains",
    "Pickaxe lets you mine mountains",
    "Reach the gold star to win",
    "",
    "H: toggle this help   R: new map",
    "ESC: quit",
]


class PygameRenderer:
    """
    Pygame-based renderer for the game.

    Acts as the terrain surface (a cached projection of the grid) and the
    entity spawner for the world, and turns mouse clicks into path and
    mining requests.
    """

    def __init__(
        self,
        config: RendererConfig,
        grid_width: int,
        grid_height: int,
        palette: dict[TerrainKind, tuple[int, int, int]] | None = None,
    ):
        """
        Initialize the renderer.

        Args:
            config: Renderer configuration
            grid_width: Map width in cells
            grid_height: Map height in cells
            palette: Tile colors per terrain kind

        Raises:
            ConfigurationError: If the config is invalid or the palette lacks a terrain kind
        """
        config.validate()
        self.palette = palette if palette is not None else colors.TILE_PALETTE
        colors.validate_palette(self.palette)

        self.config = config
        self.tile_size = config.tile_size
        self.sidebar_width = config.sidebar_width
        self.map_width = grid_width * self.tile_size
        self.map_height = grid_height * self.tile_size
        self.window_width = self.sidebar_width + self.map_width
        self.window_height = max(self.map_height, 360)

        # Initialize Pygame
        pygame.init()
        pygame.display.set_caption("Cave Quest")

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        self.clock = pygame.time.Clock()

        # Fonts
        self.font_large = pygame.font.Font(None, 36)
        self.font_medium = pygame.font.Font(None, 22)
        self.font_small = pygame.font.Font(None, 18)

        self._map_surface = pygame.Surface((self.map_width, self.map_height))
        self._sidebar_surface = pygame.Surface((self.sidebar_width, self.window_height))

        # Terrain projection and spawned entities
        self._tiles: dict[Cell, TerrainKind] = {}
        self._entities: dict[int, tuple[ItemKind | None, tuple[float, float]]] = {}
        self._handle_ids = itertools.count(1)

        self.instructions = TextPanel("How to play", INSTRUCTIONS, visible=config.show_instructions)
        self.win_panel = TextPanel(
            "You win!", ["Press R for a new map"], title_color=colors.WIN_ACCENT
        )

        self._world: World | None = None
        self.btn_new_map = Button(
            12, 0, self.sidebar_width - 24, 26, "New map", on_click=self._new_map, hotkey="R"
        )

    # Terrain surface

    def set_tile(self, cell: Cell, kind: TerrainKind) -> None:
        self._tiles[cell] = kind

    def clear_all(self) -> None:
        self._tiles.clear()

    def get_tile(self, cell: Cell) -> TerrainKind:
        return self._tiles.get(cell, TerrainKind.EMPTY)

    # Entity spawner

    def spawn(self, kind: ItemKind | None, position: tuple[float, float]) -> int:
        handle = next(self._handle_ids)
        self._entities[handle] = (kind, position)
        return handle

    def despawn(self, handle: int) -> None:
        self._entities.pop(handle, None)

    # Session notifier

    def show_win(self) -> None:
        """Show the win panel (goal reached callback)."""
        self.win_panel.visible = True

    def _new_map(self) -> None:
        if self._world is not None:
            self.win_panel.visible = False
            self._world.regenerate()

    def screen_to_world(self, world: World, screen_pos: tuple[int, int]) -> tuple[float, float] | None:
        """Convert a screen position to world coordinates (None outside the map)."""
        px = screen_pos[0] - self.sidebar_width
        py = screen_pos[1]
        if not (0 <= px < self.map_width and 0 <= py < self.map_height):
            return None
        scale = world.grid.cell_size / self.tile_size
        return (px * scale, py * scale)

    def world_to_screen(self, world: World, position: tuple[float, float]) -> tuple[int, int]:
        """Convert world coordinates to map-surface pixels."""
        scale = self.tile_size / world.grid.cell_size
        return (int(position[0] * scale), int(position[1] * scale))

    def handle_events(self, world: World) -> bool:
        """
        Handle Pygame events.

        Returns:
            False if the window should close, True otherwise.
        """
        self._world = world
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key == pygame.K_h:
                    self.instructions.toggle()
                elif event.key == pygame.K_r:
                    self._new_map()
                continue

            if self.btn_new_map.handle_event(event):
                continue

            if event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                target = self.screen_to_world(world, event.pos)
                if target is None:
                    continue
                if event.button == 1:
                    world.request_path(*target)
                else:
                    world.request_mine(*target)

        return True

    def render(self, world: World) -> None:
        """Render the current state of the world."""
        self.screen.fill(colors.BG_DARK)

        self._render_map(world)
        self._render_sidebar(world)

        self.screen.blit(self._map_surface, (self.sidebar_width, 0))
        self.screen.blit(self._sidebar_surface, (0, 0))

        self.instructions.render(self.screen, self.font_large, self.font_medium, colors.PANEL_BG)
        self.win_panel.render(self.screen, self.font_large, self.font_medium, colors.PANEL_BG)

        pygame.display.flip()

    def _render_map(self, world: World) -> None:
        """Render tiles, the current path, items and the player."""
        self._map_surface.fill(colors.EMPTY_COLOR)
        generator = world.engine.generator
        heightmap = generator.heightmap
        size = self.tile_size

        for cell, kind in self._tiles.items():
            sampled = float(heightmap[cell.y, cell.x]) if heightmap is not None else None
            height = colors.relief_height(kind, sampled, generator.classify)
            color = colors.shade_tile(kind, height, self.palette)
            pygame.draw.rect(self._map_surface, color, (cell.x * size, cell.y * size, size, size))

        # Remaining path
        if world.navigator is not None and world.navigator.waypoints:
            points = [self.world_to_screen(world, world.player.position)]
            points.extend(self.world_to_screen(world, p) for p in world.navigator.waypoints)
            if len(points) >= 2:
                pygame.draw.lines(self._map_surface, colors.PATH_COLOR, False, points, 2)

        for kind, position in self._entities.values():
            if kind is None:
                continue
            self._draw_item(kind, self.world_to_screen(world, position))

        if world.player is not None:
            center = self.world_to_screen(world, world.player.position)
            radius = max(3, size // 2 - 2)
            pygame.draw.circle(self._map_surface, colors.PLAYER_COLOR, center, radius)
            pygame.draw.circle(self._map_surface, colors.PLAYER_OUTLINE, center, radius, width=2)

    def _draw_item(self, kind: ItemKind, center: tuple[int, int]) -> None:
        color = colors.ITEM_COLORS[kind]
        radius = max(3, self.tile_size // 2 - 3)
        if kind is ItemKind.GOAL:
            # Five-pointed star
            points = []
            for i in range(10):
                angle = -math.pi / 2 + i * math.pi / 5
                r = radius + 2 if i % 2 == 0 else radius // 2
                points.append((center[0] + r * math.cos(angle), center[1] + r * math.sin(angle)))
            pygame.draw.polygon(self._map_surface, color, points)
            return

        rect = pygame.Rect(0, 0, radius * 2, radius * 2)
        rect.center = center
        pygame.draw.rect(self._map_surface, color, rect, border_radius=3)
        label = self.font_small.render(kind.name[0], True, colors.PLAYER_OUTLINE)
        self._map_surface.blit(
            label, (center[0] - label.get_width() // 2, center[1] - label.get_height() // 2)
        )

    def _render_sidebar(self, world: World) -> None:
        """Render the sidebar with level info and abilities."""
        self._sidebar_surface.fill(colors.BG_SIDEBAR)
        pygame.draw.line(
            self._sidebar_surface,
            colors.DIVIDER,
            (self.sidebar_width - 1, 0),
            (self.sidebar_width - 1, self.window_height),
            2,
        )

        padding = 12
        y = 12

        title = self.font_large.render("Cave Quest", True, colors.TEXT_PRIMARY)
        self._sidebar_surface.blit(title, (padding, y))
        y += 36

        self.btn_new_map.rect.y = y
        self.btn_new_map.render(self._sidebar_surface, self.font_small)
        y += 38

        lines = [f"Seed: {world.seed}", f"Regenerations: {world.stats.regenerations}"]
        if world.level is not None:
            lines.append(f"Scenario: {world.level.scenario.name.replace('_', ' ').lower()}")
        for line in lines:
            surface = self.font_small.render(line, True, colors.TEXT_SECONDARY)
            self._sidebar_surface.blit(surface, (padding, y))
            y += 18

        y = self._render_divider(y, padding)
        header = self.font_small.render("ABILITIES", True, UI_COLORS.accent)
        self._sidebar_surface.blit(header, (padding, y))
        y += 22

        if world.player is not None:
            abilities = world.player.abilities
            for label, held in (
                ("Sail (boat)", abilities.can_sail),
                ("Climb (goat)", abilities.can_climb),
                ("Mine (pickaxe)", abilities.can_mine),
            ):
                color = colors.TEXT_PRIMARY if held else colors.TEXT_SECONDARY
                mark = "[x]" if held else "[ ]"
                surface = self.font_medium.render(f"{mark} {label}", True, color)
                self._sidebar_surface.blit(surface, (padding, y))
                y += 22

        y = self._render_divider(y, padding)
        stats = [
            f"Items collected: {world.stats.items_collected}",
            f"Tiles mined: {world.stats.tiles_mined}",
        ]
        for line in stats:
            surface = self.font_small.render(line, True, colors.TEXT_SECONDARY)
            self._sidebar_surface.blit(surface, (padding, y))
            y += 18

        y = self._render_divider(y, padding)
        for hint in ("H help", "R new map", "ESC quit"):
            surface = self.font_small.render(hint, True, colors.TEXT_SECONDARY)
            self._sidebar_surface.blit(surface, (padding, y))
            y += 16

    def _render_divider(self, y: int, padding: int) -> int:
        y += 6
        pygame.draw.line(
            self._sidebar_surface, colors.DIVIDER, (padding, y), (self.sidebar_width - padding, y)
        )
        return y + 8

    def tick(self) -> float:
        """
        Advance the renderer clock and return delta time.

        Returns:
            Time elapsed since last tick in seconds.
        """
        return self.clock.tick(self.config.target_fps) / 1000.0

    def cleanup(self) -> None:
        """Clean up Pygame resources."""
        pygame.quit()
