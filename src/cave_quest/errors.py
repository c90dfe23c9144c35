"""Exceptions raised by cave_quest."""

from __future__ import annotations


class CaveQuestError(Exception):
    """Base class for all cave_quest errors."""


class ConfigurationError(CaveQuestError, ValueError):
    """A required setting or collaborator is missing or inconsistent.

    Raised once at startup; the world refuses to generate rather than
    producing a corrupt map.
    """


class GenerationError(CaveQuestError):
    """Map generation gave up after exhausting the regeneration ceiling."""

    def __init__(self, attempts: int, last_reason: str):
        super().__init__(
            f"map generation failed after {attempts} attempts (last: {last_reason})"
        )
        self.attempts = attempts
        self.last_reason = last_reason
