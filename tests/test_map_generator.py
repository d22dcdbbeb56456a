"""End-to-end tests for the map generation pipeline."""

import dataclasses
import json

import pytest

from py_polymap.core.map_generator import Map, generate_map
from py_polymap.core.options import MapOptions
from py_polymap.core.voronoi_graph import flood_fill



def flags(game_map):
    graph = game_map.graph
    return (
        [(c.water, c.ocean, c.mainland, c.coastal, c.lakeshore) for c in graph.centers],
        [(c.coastal, c.lakeshore) for c in graph.corners],
        [(e.water, e.coastal, e.lakeshore) for e in graph.edges],
    )


class TestDeterminism:
    """Same options and seed must give the same map."""

    def test_scenario_runs_identical(self, scenario_map, scenario_options):
        """Test that two runs of the same options match."""
        again = generate_map(scenario_options)
        assert again.to_dict() == scenario_map.to_dict()

    def test_points_and_topology_identical(self, scenario_map, scenario_options):
        """Test that points, topology and flags are reproduced."""
        again = generate_map(scenario_options)
        assert [(c.x, c.y) for c in again.graph.centers] == [
            (c.x, c.y) for c in scenario_map.graph.centers
        ]
        assert [c.neighbours for c in again.graph.centers] == [
            c.neighbours for c in scenario_map.graph.centers
        ]
        assert flags(again) == flags(scenario_map)

    def test_different_seed_differs(self, scenario_map, scenario_options):
        """Test that a different seed gives a different map."""
        other = generate_map(scenario_options.model_copy(update={"seed": "another-seed"}))
        assert [(c.x, c.y) for c in other.graph.centers] != [
            (c.x, c.y) for c in scenario_map.graph.centers
        ]

    def test_unseeded_map_can_be_replayed(self):
        """Test that an unseeded map can be replayed from its seed."""
        options = MapOptions(width=300, height=300, num_polygons=80)
        first = generate_map(options)
        assert first.seed
        replay = generate_map(MapOptions(width=300, height=300, num_polygons=80, seed=first.seed))
        assert replay.to_dict() == first.to_dict()


class TestScenarioMap:
    """Properties of the reference map."""

    def test_metadata(self, scenario_map):
        """Test that map metadata is recorded."""
        assert scenario_map.width == 600
        assert scenario_map.height == 600
        assert scenario_map.seed == "test-seed"
        assert len(scenario_map.graph.centers) == 300

    def test_has_ocean_and_land(self, scenario_map):
        """Test that the map has both ocean and land."""
        centers = scenario_map.graph.centers
        assert any(c.ocean for c in centers)
        assert any(c.mainland and not c.water for c in centers)

    def test_regions_are_peninsulas(self, scenario_map):
        """Test that regions are dry peninsulas."""
        assert isinstance(scenario_map.regions, tuple)
        for region in scenario_map.regions:
            assert region.peninsula
            for i in region.centers:
                assert not scenario_map.graph.centers[i].water

    def test_mainland_connected(self, scenario_map):
        """Test that the finished mainland is connected."""
        graph = scenario_map.graph
        land = [i for i, c in enumerate(graph.centers) if c.mainland and not c.water]
        start = next(i for i in land if graph.centers[i].coastal)
        visited = flood_fill(
            graph, start, lambda i: graph.centers[i].mainland and not graph.centers[i].water
        )
        assert all(visited[i] for i in land)

    def test_areas_non_negative(self, scenario_map):
        """Test that cell areas are never negative."""
        for center in scenario_map.graph.centers:
            assert center.area >= 0
            if len(center.corners) >= 3:
                assert center.area > 0

    def test_map_is_frozen(self, scenario_map):
        """Test that the top-level map fields cannot be reassigned."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            scenario_map.seed = "changed"
        with pytest.raises(dataclasses.FrozenInstanceError):
            scenario_map.graph = None

    def test_to_dict_is_detached(self, scenario_map):
        """Test that editing the serialized map leaves the map untouched."""
        data = scenario_map.to_dict()
        data["graph"]["centers"][0]["water"] = not data["graph"]["centers"][0]["water"]
        data["graph"]["centers"][0]["neighbours"].append(-1)
        if data["regions"]:
            data["regions"][0]["centers"].clear()
        assert scenario_map.to_dict() != data
        assert -1 not in scenario_map.graph.centers[0].neighbours
        for region in scenario_map.regions:
            assert len(region.centers) > 0

    def test_to_dict_is_json_serializable(self, scenario_map):
        """Test that the serialized map is plain JSON."""
        data = json.loads(json.dumps(scenario_map.to_dict()))
        assert set(data) == {"width", "height", "seed", "graph", "regions"}
        assert set(data["graph"]) == {"centers", "corners", "edges"}
        center = data["graph"]["centers"][0]
        for key in ("x", "y", "neighbours", "borders", "corners", "water", "ocean",
                    "mainland", "coastal", "lakeshore", "area"):
            assert key in center
        edge = data["graph"]["edges"][0]
        for key in ("v0", "v1", "d0", "d1", "d_edge", "water", "coastal", "lakeshore"):
            assert key in edge


class TestDegenerateInput:
    def test_zero_polygons(self):
        """Test that zero polygons give an empty map."""
        game_map = generate_map(MapOptions(width=100, height=100, num_polygons=0, seed="zero"))
        assert game_map.graph.centers == []
        assert game_map.graph.corners == []
        assert game_map.graph.edges == []
        assert game_map.regions == ()

    def test_single_polygon(self):
        """Test that a single polygon becomes ocean."""
        game_map = generate_map(MapOptions(width=200, height=100, num_polygons=1, seed="one"))
        center = game_map.graph.centers[0]
        assert center.neighbours == []
        assert center.water and center.ocean
        assert not center.mainland
        assert game_map.regions == ()


@pytest.mark.parametrize("seed", ["alpha", "beta", "gamma"])
def test_boundary_ring_is_ocean(seed):
    """Test that every cell on the map boundary is ocean."""
    game_map = generate_map(
        MapOptions(width=500, height=400, num_polygons=250, seed=seed, point_relaxation_iterations=2)
    )
    graph = game_map.graph
    for center in graph.centers:
        on_edge = any(
            graph.corners[k].x in (0, 500) or graph.corners[k].y in (0, 400)
            for k in center.corners
        )
        if on_edge:
            assert center.ocean
    assert isinstance(game_map, Map)
