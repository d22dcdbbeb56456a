"""
Core map generation functionality.
"""

from .options import MapOptions
from .voronoi_graph import Center, Corner, Edge, Graph, generate_planar_graph
from .landmass import make_landmass
from .peninsulas import Region, detect_peninsulas
from .lakes import generate_lakes
from .map_generator import Map, generate_map

__all__ = ['MapOptions', 'Center', 'Corner', 'Edge', 'Graph', 'generate_planar_graph',
           'make_landmass', 'Region', 'detect_peninsulas', 'generate_lakes',
           'Map', 'generate_map']
