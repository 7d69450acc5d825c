"""A small 2D game engine (collision, layered rendering, highscores, text input) and arcade games for a 160x128 canvas."""

__version__ = "0.1.0"