"""
Land, ocean and coastline classification.

This module handles:
- Radial, noise-perturbed water seeding
- Ocean detection by flood fill from the map edge
- Removal of inland puddles
- Mainland detection by flood fill from the map center
- Coastline marking on corners, centers and edges
"""

import structlog

from .geometry import distance_from_map_center, map_center
from .noise import NoiseField
from .options import MapOptions
from .voronoi_graph import Graph, closest_center, flood_fill, touches_map_edge

logger = structlog.get_logger()

RATIO_THRESHOLD = 0.4
RATIO_NOISE_SCALING = 0.15
CORNERS_REQUIRED_THRESHOLD = 0.5


def make_landmass(graph: Graph, options: MapOptions, noise: NoiseField):
    """
    Classify every cell of the graph as ocean, land or mainland.

    Args:
        graph: Graph built by the planar graph stage
        options: Map options
        noise: Noise field reserved for the landmass outline
    """
    radial_water(graph, options, noise)
    fill_oceans(graph, options)
    remove_lakes(graph)
    mark_water_edges(graph)
    fill_mainland(graph, options)
    mark_coastal(graph)

    logger.info(
        "Landmass classified",
        ocean=sum(1 for c in graph.centers if c.ocean),
        land=sum(1 for c in graph.centers if not c.water),
        mainland=sum(1 for c in graph.centers if c.mainland),
        coastal=sum(1 for c in graph.centers if c.coastal),
    )


def radial_water(graph: Graph, options: MapOptions, noise: NoiseField):
    """Seed water from the distance to the map center plus noise."""
    scale = min(options.width, options.height)
    water_corners = []
    for corner in graph.corners:
        ratio = distance_from_map_center(corner.x, corner.y, options.width, options.height) / scale
        ratio += noise.sample(corner.x, corner.y) * RATIO_NOISE_SCALING
        water_corners.append(ratio > RATIO_THRESHOLD)

    for i, center in enumerate(graph.centers):
        # Cells on the map edge always form the outer ocean ring
        if touches_map_edge(graph, i, options.width, options.height):
            center.water = True
            continue
        if not center.corners:
            center.water = False
            continue
        num_water = sum(1 for c in center.corners if water_corners[c])
        center.water = num_water / len(center.corners) > CORNERS_REQUIRED_THRESHOLD


def fill_oceans(graph: Graph, options: MapOptions):
    """Flag every water cell connected to the map edge as ocean."""
    start = next(
        (
            i
            for i in range(len(graph.centers))
            if touches_map_edge(graph, i, options.width, options.height)
        ),
        None,
    )
    if start is None:
        logger.debug("No center touches the map edge, skipping ocean fill")
        return

    visited = flood_fill(graph, start, lambda i: graph.centers[i].water)
    for i, reached in enumerate(visited):
        if reached:
            graph.centers[i].ocean = True


def remove_lakes(graph: Graph):
    """Turn water cells that are not ocean back into land."""
    for center in graph.centers:
        if center.water and not center.ocean:
            center.water = False


def mark_water_edges(graph: Graph):
    """An edge is water on the map boundary or between two water cells."""
    for edge in graph.edges:
        edge.water = not edge.d_edge or (
            graph.centers[edge.d0].water and graph.centers[edge.d1].water
        )


def fill_mainland(graph: Graph, options: MapOptions):
    """Flag the landmass connected to the map's central cell as mainland."""
    start = closest_center(graph, *map_center(options.width, options.height))
    if start is None or graph.centers[start].ocean:
        logger.debug("Central cell is missing or ocean, no mainland")
        return

    visited = flood_fill(graph, start, lambda i: not graph.centers[i].ocean)
    for i, reached in enumerate(visited):
        if reached:
            graph.centers[i].mainland = True


def mark_coastal(graph: Graph):
    """Mark corners, centers and edges where land meets the ocean."""
    for corner in graph.corners:
        ocean_found = False
        land_found = False
        for i in corner.touches:
            center = graph.centers[i]
            if center.ocean:
                ocean_found = True
            elif not center.water:
                land_found = True
        corner.coastal = ocean_found and land_found

    for center in graph.centers:
        center.coastal = any(graph.corners[c].coastal for c in center.corners)

    for edge in graph.edges:
        edge.coastal = (
            graph.corners[edge.v0].coastal
            and graph.corners[edge.v1].coastal
            and edge.d_edge
            and graph.centers[edge.d0].water != graph.centers[edge.d1].water
        )
