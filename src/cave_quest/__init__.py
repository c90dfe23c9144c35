"""Cave Quest - procedurally generated tile worlds with ability-gated progression."""

__version__ = "0.1.0"
