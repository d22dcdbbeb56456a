"""
Peninsula detection.

Finds long, narrow stretches of the mainland that are nearly surrounded by
ocean. Lakes are kept out of them, and renderers may style them apart.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

import structlog

from .geometry import distance, map_center
from .options import MapOptions
from .voronoi_graph import Graph, closest_center, connected_components, flood_fill

logger = structlog.get_logger()

COASTAL_NEIGHBOUR_THRESHOLD = 3
MINIMUM_POLYGONS_THRESHOLD = 3
MAX_MOUTH_WIDTH = 150
MAX_MOUTH_TO_AREA_RATIO = 0.02
ADD_NEARLY_SURROUNDED_POLYGONS_ITERATIONS = 2


@dataclass
class Region:
    """A group of centers, kept in discovery order."""

    centers: List[int] = field(default_factory=list)
    peninsula: bool = False

    def __contains__(self, center_index: int) -> bool:
        return center_index in self.centers

    def __len__(self) -> int:
        return len(self.centers)


def is_part_of_region(index: int, regions: Sequence[Region]) -> bool:
    return any(index in region for region in regions)


def region_area(graph: Graph, region: Region) -> float:
    return sum(graph.centers[i].area for i in region.centers)


def detect_peninsulas(graph: Graph, options: MapOptions) -> List[Region]:
    """
    Segment the mainland into peninsulas and the core landmass.

    Args:
        graph: Graph with mainland and coastal flags populated
        options: Map options

    Returns:
        Peninsula regions that pass the mouth-width filters
    """
    part_of_peninsula = initial_candidates(graph)
    flood_fill_peninsulas(graph, options, part_of_peninsula)
    remove_low_polygon_peninsulas(graph, part_of_peninsula)

    candidates = [
        Region(centers=component, peninsula=True)
        for component in connected_components(graph, part_of_peninsula)
    ]

    peninsulas = []
    for region in candidates:
        mouth_width = peninsula_mouth_width(graph, region)
        area = region_area(graph, region)
        if area <= 0:
            continue
        if mouth_width <= MAX_MOUTH_WIDTH and mouth_width / area <= MAX_MOUTH_TO_AREA_RATIO:
            peninsulas.append(region)

    for _ in range(ADD_NEARLY_SURROUNDED_POLYGONS_ITERATIONS):
        add_nearly_surrounded_polygons(graph, peninsulas)

    logger.info(
        "Peninsulas detected",
        candidates=len(candidates),
        peninsulas=len(peninsulas),
        cells=sum(len(p) for p in peninsulas),
    )
    return peninsulas


def initial_candidates(graph: Graph) -> List[bool]:
    """Coastal mainland cells whose neighbourhood is mostly coast."""
    candidates = []
    for center in graph.centers:
        if not center.coastal or not center.mainland:
            candidates.append(False)
            continue

        coastal_neighbours = 0
        non_coastal_neighbours = 0
        for j in center.neighbours:
            neighbour = graph.centers[j]
            if neighbour.coastal and neighbour.mainland:
                coastal_neighbours += 1
            elif neighbour.mainland:
                non_coastal_neighbours += 1

        candidates.append(
            coastal_neighbours >= COASTAL_NEIGHBOUR_THRESHOLD
            or non_coastal_neighbours == 0
            or coastal_neighbours > non_coastal_neighbours
        )
    return candidates


def flood_fill_peninsulas(graph: Graph, options: MapOptions, part_of_peninsula: List[bool]):
    """Every mainland cell the core body cannot reach becomes a candidate."""
    start = closest_center(graph, *map_center(options.width, options.height))
    if start is None:
        return

    visited = flood_fill(
        graph,
        start,
        lambda i: not part_of_peninsula[i] and graph.centers[i].mainland,
    )
    for i, center in enumerate(graph.centers):
        part_of_peninsula[i] = not visited[i] and center.mainland


def remove_low_polygon_peninsulas(graph: Graph, part_of_peninsula: List[bool]):
    for component in connected_components(graph, part_of_peninsula):
        if len(component) < MINIMUM_POLYGONS_THRESHOLD:
            for j in component:
                part_of_peninsula[j] = False


def peninsula_mouth_width(graph: Graph, region: Region) -> float:
    """
    Distance across the peninsula's neck.

    The neck is spanned by the coastal corners where ocean, the peninsula and
    the rest of the land all meet. Fewer than two such corners give 0.
    """
    members = set(region.centers)
    mouth_corners: List[int] = []

    for i in region.centers:
        for j in graph.centers[i].corners:
            corner = graph.corners[j]
            if not corner.coastal or j in mouth_corners:
                continue
            water_found = False
            peninsula_found = False
            non_peninsula_found = False
            for k in corner.touches:
                if graph.centers[k].ocean:
                    water_found = True
                elif k in members:
                    peninsula_found = True
                else:
                    non_peninsula_found = True
            if water_found and peninsula_found and non_peninsula_found:
                mouth_corners.append(j)

    if len(mouth_corners) < 2:
        return 0.0

    a = graph.corners[mouth_corners[0]]
    b = graph.corners[mouth_corners[1]]
    return distance(a.x, a.y, b.x, b.y)


def add_nearly_surrounded_polygons(graph: Graph, peninsulas: List[Region]):
    """Pull in mainland neighbours that are at least half enclosed by a peninsula."""
    for peninsula in peninsulas:
        members = set(peninsula.centers)
        # Only the members present at the start of the pass are expanded
        for i in list(peninsula.centers):
            to_add = []
            for j in graph.centers[i].neighbours:
                if j in members or not graph.centers[j].mainland:
                    continue
                num_peninsula = 0
                num_non_peninsula = 0
                for k in graph.centers[j].neighbours:
                    if k in members:
                        num_peninsula += 1
                    else:
                        num_non_peninsula += 1
                if num_peninsula >= num_non_peninsula:
                    to_add.append(j)
            peninsula.centers.extend(to_add)
            members.update(to_add)
