"""Renderer module - visualization layer."""

from .pygame_renderer import PygameRenderer
from .ui import Button, TextPanel

__all__ = [
    "Button",
    "PygameRenderer",
    "TextPanel",
]
