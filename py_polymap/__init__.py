"""Procedural polygon map generation."""

from .core import Map, MapOptions, generate_map

__version__ = "0.1.0"

__all__ = ['Map', 'MapOptions', 'generate_map']
