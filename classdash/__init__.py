"""Game logic for Class Dash, a side-scrolling platformer: physics, levels, characters, timer and sound."""

__version__ = "0.1.0"