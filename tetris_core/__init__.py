"""Tetris engine with SRS rotation, lock delay and a pygame frontend."""

__version__ = "0.1.0"
