"""
Voronoi graph generation.

Builds the dual planar graph the rest of the pipeline works on: one Center
per Voronoi cell, one Corner per distinct cell vertex and one Edge per cell
boundary segment. All cross references are indices into the three lists.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import structlog
from scipy.spatial import Voronoi

from .geometry import Point, approximate_centroid, distance, is_on_map_edge, polygon_area
from .options import MapOptions
from ..utils.random import RandomNumberGenerator

logger = structlog.get_logger()

# Helper sites sit this many map spans away so every real cell is finite
HELPER_SITE_SPAN = 10


@dataclass
class Center:
    """A Voronoi cell site and its terrain flags."""

    x: float
    y: float
    neighbours: List[int] = field(default_factory=list)  # center indices
    borders: List[int] = field(default_factory=list)  # edge indices
    corners: List[int] = field(default_factory=list)  # corner indices, polygon order
    water: bool = False
    ocean: bool = False
    mainland: bool = False
    coastal: bool = False
    lakeshore: bool = False
    area: float = 0.0


@dataclass
class Corner:
    """A Voronoi vertex shared by every cell meeting there."""

    x: float
    y: float
    touches: List[int] = field(default_factory=list)  # center indices
    protrudes: List[int] = field(default_factory=list)  # edge indices
    adjacent: List[int] = field(default_factory=list)  # corner indices
    coastal: bool = False
    lakeshore: bool = False


@dataclass
class Edge:
    """A Voronoi boundary segment and its dual Delaunay link, if any."""

    v0: int  # corner index
    v1: int  # corner index
    d0: int  # center index
    d1: int = -1  # center index, -1 on the map boundary
    d_edge: bool = False
    water: bool = False
    coastal: bool = False
    lakeshore: bool = False


@dataclass
class Graph:
    """Owns all centers, corners and edges of a map."""

    centers: List[Center] = field(default_factory=list)
    corners: List[Corner] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)


def sample_points(options: MapOptions, rng: RandomNumberGenerator) -> np.ndarray:
    """Sample ``num_polygons`` sites uniformly inside the map rectangle."""
    points = np.zeros((options.num_polygons, 2), dtype=np.float64)
    for i in range(options.num_polygons):
        points[i, 0] = rng.uniform(0, options.width)
        points[i, 1] = rng.uniform(0, options.height)
    return points


def get_helper_points(width: float, height: float) -> np.ndarray:
    """
    Four far-away sites enclosing the map.

    With these added, no real site lies on the convex hull, so every real
    Voronoi region is bounded and can be clipped to the map rectangle.
    """
    span = HELPER_SITE_SPAN * max(width, height)
    cx, cy = width / 2, height / 2
    return np.array(
        [
            [cx - span, cy - span],
            [cx + span, cy - span],
            [cx + span, cy + span],
            [cx - span, cy + span],
        ]
    )


def _intersect(a: Point, b: Point, axis: int, value: float) -> Point:
    # Endpoints are ordered first so both cells sharing a ridge get
    # bit-identical intersection coordinates.
    if b < a:
        a, b = b, a
    t = (value - a[axis]) / (b[axis] - a[axis])
    if axis == 0:
        return (value, a[1] + t * (b[1] - a[1]))
    return (a[0] + t * (b[0] - a[0]), value)


def _clip_half_plane(polygon: List[Point], axis: int, value: float, keep_above: bool) -> List[Point]:
    """One Sutherland-Hodgman pass against the line ``coord[axis] == value``."""

    def inside(p: Point) -> bool:
        return p[axis] >= value if keep_above else p[axis] <= value

    clipped: List[Point] = []
    n = len(polygon)
    for i in range(n):
        current = polygon[i]
        previous = polygon[i - 1]
        if inside(current):
            if not inside(previous):
                clipped.append(_intersect(previous, current, axis, value))
            clipped.append(current)
        elif inside(previous):
            clipped.append(_intersect(previous, current, axis, value))
    return clipped


def clip_to_rectangle(polygon: List[Point], width: float, height: float) -> List[Point]:
    """Clip a convex polygon to [0, width] x [0, height]."""
    for axis, value, keep_above in (
        (0, 0.0, True),
        (0, float(width), False),
        (1, 0.0, True),
        (1, float(height), False),
    ):
        if not polygon:
            break
        polygon = _clip_half_plane(polygon, axis, value, keep_above)

    # Drop repeated vertices left where the polygon touched a clip line
    deduped: List[Point] = []
    for p in polygon:
        if not deduped or deduped[-1] != p:
            deduped.append(p)
    while len(deduped) > 1 and deduped[0] == deduped[-1]:
        deduped.pop()
    return deduped


def _order_counter_clockwise(vertices: np.ndarray) -> List[Point]:
    mean = vertices.mean(axis=0)
    angles = np.arctan2(vertices[:, 1] - mean[1], vertices[:, 0] - mean[0])
    order = np.argsort(angles, kind="stable")
    return [(float(vertices[k, 0]), float(vertices[k, 1])) for k in order]


def compute_cell_polygons(points: np.ndarray, width: float, height: float) -> List[List[Point]]:
    """
    Voronoi cell polygon of every site, clipped to the map rectangle.

    Args:
        points: Site coordinates, shape (n, 2)
        width: Map width
        height: Map height

    Returns:
        One ordered vertex list per site
    """
    n_points = len(points)
    if n_points == 0:
        return []

    all_points = np.vstack([points, get_helper_points(width, height)])
    vor = Voronoi(all_points)

    polygons: List[List[Point]] = []
    for i in range(n_points):
        region_idx = vor.point_region[i]
        region = vor.regions[region_idx] if region_idx >= 0 else []
        if not region or -1 in region:
            polygons.append([])
            continue
        ordered = _order_counter_clockwise(vor.vertices[region])
        polygons.append(clip_to_rectangle(ordered, width, height))
    return polygons


def relax_points(points: np.ndarray, width: float, height: float) -> np.ndarray:
    """
    One Lloyd-style relaxation pass.

    Moves each site to the vertex mean of its clipped cell, taken over the
    closed ring, so the first vertex is counted twice.
    """
    relaxed = points.copy()
    for i, polygon in enumerate(compute_cell_polygons(points, width, height)):
        if polygon:
            relaxed[i] = approximate_centroid(closed_ring(polygon))
    return relaxed


def closed_ring(polygon: List[Point]) -> List[Point]:
    """The polygon with its first vertex repeated at the end."""
    return polygon + [polygon[0]] if polygon else []


class _GraphBuilder:
    """Accumulates corners and edges while cells are walked one by one."""

    def __init__(self, points: np.ndarray):
        self.graph = Graph(centers=[Center(x=float(x), y=float(y)) for x, y in points])
        self.corner_lookup: Dict[Point, int] = {}
        self.edge_lookup: Dict[Tuple[int, int], int] = {}

    def corner_index(self, p: Point) -> int:
        index = self.corner_lookup.get(p)
        if index is None:
            self.graph.corners.append(Corner(x=p[0], y=p[1]))
            index = len(self.graph.corners) - 1
            self.corner_lookup[p] = index
        return index

    def add_cell(self, center_index: int, polygon: List[Point]):
        center = self.graph.centers[center_index]
        corner_indices: List[int] = []
        for p in polygon:
            corner_index = self.corner_index(p)
            if corner_index in corner_indices:
                continue
            corner_indices.append(corner_index)
            center.corners.append(corner_index)
            self.graph.corners[corner_index].touches.append(center_index)

        if len(corner_indices) < 3:
            return
        for k in range(len(corner_indices)):
            self.add_edge(corner_indices[k - 1], corner_indices[k], center_index)

    def add_edge(self, a: int, b: int, center_index: int):
        graph = self.graph
        key = (min(a, b), max(a, b))
        edge_index = self.edge_lookup.get(key)

        if edge_index is None:
            graph.edges.append(Edge(v0=a, v1=b, d0=center_index))
            edge_index = len(graph.edges) - 1
            self.edge_lookup[key] = edge_index
            graph.corners[a].protrudes.append(edge_index)
            graph.corners[b].protrudes.append(edge_index)
            graph.corners[a].adjacent.append(b)
            graph.corners[b].adjacent.append(a)
            graph.centers[center_index].borders.append(edge_index)
            return

        # Second visit comes from the cell on the other side
        edge = graph.edges[edge_index]
        if edge.d0 == center_index or edge.d1 != -1:
            return
        edge.d1 = center_index
        edge.d_edge = True
        graph.centers[center_index].borders.append(edge_index)

        other = graph.centers[edge.d0]
        this = graph.centers[center_index]
        if edge.d0 not in this.neighbours:
            this.neighbours.append(edge.d0)
        if center_index not in other.neighbours:
            other.neighbours.append(center_index)


def build_graph(points: np.ndarray, width: float, height: float) -> Graph:
    """
    Build the linked center/corner/edge graph for the given sites.

    Corners are deduplicated on exact coordinate equality.
    """
    builder = _GraphBuilder(points)
    for i, polygon in enumerate(compute_cell_polygons(points, width, height)):
        builder.add_cell(i, polygon)
    return builder.graph


def relax_corners(graph: Graph, width: float, height: float):
    """Move every interior corner halfway toward the mean of its touching sites."""
    for corner in graph.corners:
        if is_on_map_edge(corner.x, corner.y, width, height) or not corner.touches:
            continue
        sites = [(graph.centers[i].x, graph.centers[i].y) for i in corner.touches]
        cx, cy = approximate_centroid(sites)
        corner.x = (corner.x + cx) / 2
        corner.y = (corner.y + cy) / 2


def center_polygon(graph: Graph, center_index: int) -> List[Point]:
    """Corner coordinates of a center, in polygon order."""
    return [(graph.corners[c].x, graph.corners[c].y) for c in graph.centers[center_index].corners]


def calculate_areas(graph: Graph):
    for i, center in enumerate(graph.centers):
        center.area = polygon_area(center_polygon(graph, i))


def generate_planar_graph(options: MapOptions, rng: RandomNumberGenerator) -> Graph:
    """
    Sample, relax and link the map's Voronoi graph.

    Args:
        options: Map options
        rng: Seeded generator; consumes two draws per site

    Returns:
        Graph with positions, topology and cell areas populated
    """
    logger.info(
        "Generating planar graph",
        width=options.width,
        height=options.height,
        num_polygons=options.num_polygons,
    )

    points = sample_points(options, rng)

    for iteration in range(options.point_relaxation_iterations):
        points = relax_points(points, options.width, options.height)
        logger.debug("Point relaxation iteration complete", iteration=iteration + 1)

    graph = build_graph(points, options.width, options.height)

    for iteration in range(options.corner_relaxation_iterations):
        relax_corners(graph, options.width, options.height)
        logger.debug("Corner relaxation iteration complete", iteration=iteration + 1)

    calculate_areas(graph)

    logger.info(
        "Planar graph built",
        centers=len(graph.centers),
        corners=len(graph.corners),
        edges=len(graph.edges),
    )
    return graph


def touches_map_edge(graph: Graph, center_index: int, width: float, height: float) -> bool:
    """True if any corner of the center lies on the map boundary."""
    for corner_index in graph.centers[center_index].corners:
        corner = graph.corners[corner_index]
        if is_on_map_edge(corner.x, corner.y, width, height):
            return True
    return False


def closest_center(graph: Graph, x: float, y: float) -> Optional[int]:
    """Index of the center nearest to (x, y); first one wins ties."""
    closest_index = None
    closest_distance = 0.0
    for index, center in enumerate(graph.centers):
        d = distance(center.x, center.y, x, y)
        if closest_index is None or d < closest_distance:
            closest_index = index
            closest_distance = d
    return closest_index


def flood_fill(graph: Graph, start: int, can_enter: Callable[[int], bool]) -> List[bool]:
    """
    Mark every center reachable from ``start`` through enterable neighbours.

    Uses an explicit LIFO stack; the start cell is always visited.

    Returns:
        visited flag per center
    """
    visited = [False] * len(graph.centers)
    stack = [start]

    while stack:
        index = stack.pop()
        if visited[index]:
            continue
        visited[index] = True

        for neighbour in graph.centers[index].neighbours:
            if not visited[neighbour] and can_enter(neighbour):
                stack.append(neighbour)

    return visited


def connected_components(graph: Graph, members: Sequence[bool]) -> List[List[int]]:
    """Split the flagged centers into neighbour-connected groups, in index order."""
    visited = [False] * len(graph.centers)
    components: List[List[int]] = []

    for i, is_member in enumerate(members):
        if not is_member or visited[i]:
            continue
        component: List[int] = []
        stack = [i]
        while stack:
            j = stack.pop()
            if visited[j]:
                continue
            visited[j] = True
            component.append(j)
            for k in graph.centers[j].neighbours:
                if not visited[k] and members[k]:
                    stack.append(k)
        components.append(component)

    return components
