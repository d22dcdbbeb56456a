"""
Lake carving.

Grows a few randomized lakes on interior mainland cells, then repairs any
land that the new lakes cut off and marks lakeshores.
"""

from typing import List, Sequence

import structlog

from .geometry import distance, distance_from_map_center, max_distance
from .landmass import mark_water_edges
from .options import MapOptions
from .peninsulas import Region
from .voronoi_graph import Graph, flood_fill
from ..utils.random import RandomNumberGenerator

logger = structlog.get_logger()

MIN_NUM_LAKES = 1
MAX_NUM_LAKES = 4
MIN_LAKE_SIZE = 1000
MAX_LAKE_SIZE = 4000
MINIMUM_DISTANCE_FROM_OCEAN = 50
MINIMUM_DISTANCE_FROM_MAP_CENTER = 100


def generate_lakes(
    graph: Graph,
    regions: Sequence[Region],
    options: MapOptions,
    rng: RandomNumberGenerator,
) -> List[List[int]]:
    """
    Carve lakes into the mainland.

    Args:
        graph: Classified graph
        regions: Peninsula regions to keep lakes out of
        options: Map options
        rng: Seeded generator

    Returns:
        The cells of each carved lake
    """
    valid_positions = find_valid_lake_positions(graph, regions, options)
    num_lakes = rng.integer(MIN_NUM_LAKES, MAX_NUM_LAKES)

    logger.debug(
        "Carving lakes", requested=num_lakes, valid_positions=len(valid_positions)
    )

    lakes = []
    for _ in range(num_lakes):
        target_area = rng.integer(MIN_LAKE_SIZE, MAX_LAKE_SIZE)
        lake = grow_lake(graph, valid_positions, target_area, rng)
        if not lake:
            continue

        for j in lake:
            graph.centers[j].water = True

        # Keep the next lake at least two cells away from this one
        too_close = set()
        for j in lake:
            for k in graph.centers[j].neighbours:
                too_close.add(k)
                too_close.update(graph.centers[k].neighbours)
        valid_positions = [j for j in valid_positions if j not in too_close]

        lakes.append(lake)

    flooded = remove_islands(graph, regions)
    mark_lakeshore(graph)
    mark_water_edges(graph)

    logger.info(
        "Lakes generated",
        lakes=len(lakes),
        lake_cells=sum(len(lake) for lake in lakes),
        flooded_pockets=flooded,
    )
    return lakes


def find_valid_lake_positions(
    graph: Graph, regions: Sequence[Region], options: MapOptions
) -> List[int]:
    """Interior mainland cells far enough from the coast and the map center."""
    peninsula_cells = set()
    for region in regions:
        if region.peninsula:
            peninsula_cells.update(region.centers)

    coastal_corners = [c for c in graph.corners if c.coastal]
    fallback = max_distance(options.width, options.height)

    valid = []
    for i, center in enumerate(graph.centers):
        if not center.mainland or center.coastal or i in peninsula_cells:
            continue
        distance_from_ocean = min(
            (distance(center.x, center.y, c.x, c.y) for c in coastal_corners),
            default=fallback,
        )
        if distance_from_ocean < MINIMUM_DISTANCE_FROM_OCEAN:
            continue
        if (
            distance_from_map_center(center.x, center.y, options.width, options.height)
            < MINIMUM_DISTANCE_FROM_MAP_CENTER
        ):
            continue
        valid.append(i)
    return valid


def grow_lake(
    graph: Graph,
    valid_positions: List[int],
    target_area: float,
    rng: RandomNumberGenerator,
) -> List[int]:
    """
    Pick random frontier cells until the lake reaches its target area.

    Chosen cells are removed from ``valid_positions`` in place.
    """
    lake: List[int] = []
    available = list(valid_positions)
    area = 0.0

    while area < target_area and available:
        next_index = rng.choice(available)
        lake.append(next_index)
        valid_positions.remove(next_index)
        area += graph.centers[next_index].area

        remaining = set(valid_positions)
        available = []
        for j in lake:
            for k in graph.centers[j].neighbours:
                if k in remaining and k not in available:
                    available.append(k)

    return lake


def remove_islands(graph: Graph, regions: Sequence[Region] = ()) -> int:
    """
    Flood any mainland pocket that lakes have cut off from the coast.

    Returns:
        Number of cells turned into water
    """
    coastal_mainland = [
        i for i, c in enumerate(graph.centers) if c.coastal and c.mainland and not c.water
    ]
    if not coastal_mainland:
        return 0

    peninsula_cells = set()
    for region in regions:
        if region.peninsula:
            peninsula_cells.update(region.centers)
    start = next((i for i in coastal_mainland if i not in peninsula_cells), coastal_mainland[0])

    visited = flood_fill(
        graph,
        start,
        lambda i: graph.centers[i].mainland and not graph.centers[i].water,
    )

    flooded = 0
    for i, center in enumerate(graph.centers):
        if not visited[i] and center.mainland and not center.water:
            center.water = True
            flooded += 1
    return flooded


def mark_lakeshore(graph: Graph):
    """Mark corners, centers and edges where land meets a lake."""
    for corner in graph.corners:
        lake_found = False
        land_found = False
        for i in corner.touches:
            center = graph.centers[i]
            if center.water and not center.ocean:
                lake_found = True
            elif not center.water:
                land_found = True
        corner.lakeshore = lake_found and land_found

    for center in graph.centers:
        center.lakeshore = any(graph.corners[c].lakeshore for c in center.corners)

    for edge in graph.edges:
        edge.lakeshore = (
            graph.corners[edge.v0].lakeshore
            and graph.corners[edge.v1].lakeshore
            and edge.d_edge
            and graph.centers[edge.d0].water != graph.centers[edge.d1].water
        )


def distance_from_nearest_lakeshore(
    graph: Graph, x: float, y: float, width: float, height: float
) -> float:
    """Distance to the closest lakeshore corner, or the map diagonal if none."""
    return min(
        (distance(x, y, c.x, c.y) for c in graph.corners if c.lakeshore),
        default=max_distance(width, height),
    )
