"""A tile-based puzzle game: maps, movement, XPM textures and a pygame front end."""

__version__ = "0.1.0"
__all__ = ["app", "colors", "game", "grid", "xpm"]