"""Game format converters for TwixT."""

from .notation_formatter import NotationFormatter

__all__ = ["NotationFormatter"]
