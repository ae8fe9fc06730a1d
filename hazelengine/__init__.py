"""Layers, timing, cameras, 2D vertex batching, scenes and YAML scene files for a small game engine."""

__version__ = "0.1.0"