"""
Map generation pipeline.

Runs the stages in order on a single graph:
1. Planar graph (sampling, relaxation, linking)
2. Landmass classification
3. Peninsula detection
4. Lake carving
"""

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

import structlog

from .lakes import generate_lakes
from .landmass import make_landmass
from .noise import NoiseField
from .options import MapOptions
from .peninsulas import Region, detect_peninsulas
from .voronoi_graph import Graph, generate_planar_graph
from ..utils.random import RandomNumberGenerator

logger = structlog.get_logger()

LANDMASS_NOISE_SUFFIX = "landmass"


@dataclass(frozen=True)
class Map:
    """
    A finished map, shared read-only with renderers.

    Only the top level is frozen. ``graph`` and the ``regions`` members are
    plain dataclasses and must be treated as read-only by consumers; use
    ``to_dict`` for a detached copy that is safe to modify.
    """

    width: float
    height: float
    seed: str
    graph: Graph
    regions: Tuple[Region, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible representation."""
        return {
            "width": self.width,
            "height": self.height,
            "seed": self.seed,
            "graph": asdict(self.graph),
            "regions": [asdict(region) for region in self.regions],
        }


def generate_map(options: MapOptions) -> Map:
    """
    Generate a complete map from the given options.

    Identical options (including the seed) always produce an identical map.
    When no seed is given, a fresh one is drawn and recorded on the result.

    Args:
        options: Validated map options

    Returns:
        The finished map
    """
    start_time = time.time()
    rng = RandomNumberGenerator(options.seed)
    logger.info("Generating map", seed=rng.seed, num_polygons=options.num_polygons)

    graph = generate_planar_graph(options, rng)

    noise = NoiseField(rng.fork(LANDMASS_NOISE_SUFFIX))
    make_landmass(graph, options, noise)

    regions = detect_peninsulas(graph, options)
    generate_lakes(graph, regions, options, rng)

    logger.info(
        "Map generated",
        seed=rng.seed,
        centers=len(graph.centers),
        regions=len(regions),
        elapsed_seconds=round(time.time() - start_time, 3),
    )

    return Map(
        width=options.width,
        height=options.height,
        seed=rng.seed,
        graph=graph,
        regions=tuple(regions),
    )
