"""UI widgets for the game renderer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame


@dataclass
class UIColors:
    """Color scheme for UI elements."""

    # Background
    bg: tuple[int, int, int] = (30, 32, 40)
    bg_hover: tuple[int, int, int] = (45, 48, 58)
    bg_active: tuple[int, int, int] = (55, 58, 70)

    # Accents
    accent: tuple[int, int, int] = (100, 180, 255)
    accent_dim: tuple[int, int, int] = (60, 100, 140)

    # Text
    text: tuple[int, int, int] = (220, 225, 235)
    text_dim: tuple[int, int, int] = (140, 145, 155)


UI_COLORS = UIColors()


class Button:
    """A clickable button with an optional keyboard shortcut label."""

    def __init__(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        text: str,
        on_click: Callable[[], None] | None = None,
        hotkey: str | None = None,
    ):
        """
        Initialize a button.

        Args:
            x: X position
            y: Y position
            width: Button width
            height: Button height
            text: Button text
            on_click: Callback when clicked
            hotkey: Key name drawn dimmed at the right edge
        """
        self.rect = pygame.Rect(x, y, width, height)
        self.text = text
        self.on_click = on_click
        self.hotkey = hotkey
        self.hovered = False
        self.pressed = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle pygame events.

        Returns:
            True if event was consumed
        """
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.pressed = True
                return True

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self.pressed and self.rect.collidepoint(event.pos):
                if self.on_click:
                    self.on_click()
                self.pressed = False
                return True
            self.pressed = False

        elif event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)

        return False

    def render(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        """Render the button."""
        if self.pressed:
            bg_color = UI_COLORS.bg_active
        elif self.hovered:
            bg_color = UI_COLORS.bg_hover
        else:
            bg_color = UI_COLORS.bg

        pygame.draw.rect(surface, bg_color, self.rect, border_radius=4)
        pygame.draw.rect(surface, UI_COLORS.accent_dim, self.rect, width=1, border_radius=4)

        text_surface = font.render(self.text, True, UI_COLORS.text)
        text_x = self.rect.x + (self.rect.width - text_surface.get_width()) // 2
        text_y = self.rect.y + (self.rect.height - text_surface.get_height()) // 2
        surface.blit(text_surface, (text_x, text_y))

        if self.hotkey:
            key_surface = font.render(self.hotkey, True, UI_COLORS.text_dim)
            surface.blit(key_surface, (self.rect.right - key_surface.get_width() - 6, text_y))


class TextPanel:
    """A centered, semi-transparent panel of text lines that can be toggled."""

    def __init__(
        self,
        title: str,
        lines: list[str],
        title_color: tuple[int, int, int] = UI_COLORS.accent,
        visible: bool = False,
    ):
        self.title = title
        self.lines = lines
        self.title_color = title_color
        self.visible = visible

    def toggle(self) -> None:
        self.visible = not self.visible

    def render(
        self,
        surface: pygame.Surface,
        title_font: pygame.font.Font,
        font: pygame.font.Font,
        bg_color: tuple[int, int, int, int],
    ) -> None:
        """Render the panel centered on ``surface`` if visible."""
        if not self.visible:
            return

        padding = 16
        line_height = font.get_linesize()
        title_surface = title_font.render(self.title, True, self.title_color)
        line_surfaces = [font.render(line, True, UI_COLORS.text) for line in self.lines]

        width = max([title_surface.get_width()] + [s.get_width() for s in line_surfaces])
        width += padding * 2
        height = title_surface.get_height() + padding * 3 + line_height * len(line_surfaces)

        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        pygame.draw.rect(panel, bg_color, panel.get_rect(), border_radius=8)
        pygame.draw.rect(panel, self.title_color, panel.get_rect(), width=2, border_radius=8)

        panel.blit(title_surface, ((width - title_surface.get_width()) // 2, padding))
        y = title_surface.get_height() + padding * 2
        for line_surface in line_surfaces:
            panel.blit(line_surface, (padding, y))
            y += line_height

        x = (surface.get_width() - width) // 2
        y = (surface.get_height() - height) // 2
        surface.blit(panel, (x, y))
