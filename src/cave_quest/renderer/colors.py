"""Color definitions for the renderer."""

from typing import Callable

from ..errors import ConfigurationError
from ..simulation.abilities import ItemKind
from ..simulation.grid import CONCRETE_KINDS, TerrainKind

# Background
BG_DARK = (28, 28, 32)
BG_SIDEBAR = (38, 38, 45)

# Terrain tiles
GRASS_COLOR = (96, 156, 72)
WATER_COLOR = (30, 110, 190)
MOUNTAIN_COLOR = (110, 98, 86)
EMPTY_COLOR = (20, 20, 24)

# Entities
PLAYER_COLOR = (240, 240, 245)
PLAYER_OUTLINE = (30, 30, 36)
PATH_COLOR = (255, 230, 120)

# UI
TEXT_PRIMARY = (240, 240, 245)
TEXT_SECONDARY = (160, 160, 170)
DIVIDER = (60, 60, 70)
PANEL_BG = (20, 22, 30, 220)
WIN_ACCENT = (255, 205, 80)

TILE_PALETTE: dict[TerrainKind, tuple[int, int, int]] = {
    TerrainKind.EMPTY: EMPTY_COLOR,
    TerrainKind.GRASS: GRASS_COLOR,
    TerrainKind.WATER: WATER_COLOR,
    TerrainKind.MOUNTAIN: MOUNTAIN_COLOR,
}

ITEM_COLORS: dict[ItemKind, tuple[int, int, int]] = {
    ItemKind.BOAT: (200, 120, 60),  # Wooden brown
    ItemKind.GOAT: (235, 235, 220),  # Off-white
    ItemKind.PICKAXE: (170, 180, 195),  # Steel
    ItemKind.GOAL: (255, 205, 80),  # Gold
}


def validate_palette(palette: dict[TerrainKind, tuple[int, int, int]]) -> None:
    """Raise ConfigurationError unless every concrete terrain kind has a color."""
    missing = [kind.name for kind in CONCRETE_KINDS if kind not in palette]
    if missing:
        raise ConfigurationError(f"tile palette is missing colors for: {', '.join(missing)}")


def lerp_color(
    color1: tuple[int, int, int],
    color2: tuple[int, int, int],
    t: float,
) -> tuple[int, int, int]:
    """Linearly interpolate between two colors."""
    t = max(0.0, min(1.0, t))
    return (
        int(color1[0] + (color2[0] - color1[0]) * t),
        int(color1[1] + (color2[1] - color1[1]) * t),
        int(color1[2] + (color2[2] - color1[2]) * t),
    )


def shade_tile(
    kind: TerrainKind,
    height: float | None,
    palette: dict[TerrainKind, tuple[int, int, int]] = TILE_PALETTE,
) -> tuple[int, int, int]:
    """
    Get a tile color, shaded by the sampled noise height when known.

    Lower cells are drawn slightly darker so the noise relief stays visible.
    """
    base = palette.get(kind, EMPTY_COLOR)
    if height is None:
        return base
    dark = (base[0] // 2, base[1] // 2, base[2] // 2)
    return lerp_color(dark, base, 0.6 + height * 0.4)


def relief_height(
    kind: TerrainKind,
    sampled: float | None,
    classify: Callable[[float], TerrainKind],
) -> float | None:
    """
    Pick the noise height a tile is shaded with, or None to draw it flat.

    Mountains are drawn flat. So are tiles whose kind no longer matches
    their sampled height, such as mined mountains that are grass now.
    """
    if sampled is None or kind == TerrainKind.MOUNTAIN:
        return None
    if classify(sampled) != kind:
        return None
    return sampled
