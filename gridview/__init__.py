"""Input, cursor animation, geometry and settings logic for a grid-based editor front end."""

__version__ = "0.1.0"