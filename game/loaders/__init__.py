"""Game file loaders for TwixT."""

from .notation_loader import NotationLoader

__all__ = ["NotationLoader"]
