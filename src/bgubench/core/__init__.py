"""Core data containers for bgubench."""

from bgubench.core.buffer import ImageBuffer


__all__ = ["ImageBuffer"]
