"""End-to-end checks on the five-point k-means style example."""

from geoclusters import (
    Feature,
    FeatureCollection,
    cluster_each,
    cluster_reduce,
    create_bins,
    filter_properties,
    get_cluster,
)


def _points():
    coords_and_props = [
        ([0, 0], {"cluster": 0}),
        ([2, 4], {"cluster": 1}),
        ([3, 6], {"cluster": 1}),
        ([5, 1], {}),
        ([4, 2], {"cluster": 0}),
    ]
    return FeatureCollection(tuple(
        Feature(geometry={"type": "Point", "coordinates": c}, properties=p)
        for c, p in coords_and_props
    ))


def test_create_bins_on_scenario():
    assert create_bins(_points(), "cluster") == {"0": [0, 4], "1": [1, 2]}


def test_cluster_reduce_counts_two_clusters():
    assert cluster_reduce(_points(), "cluster", lambda previous, *_: previous + 1, 0) == 2


def test_get_cluster_zero():
    points = _points()
    cluster = get_cluster(points, {"cluster": 0})
    assert [f.geometry["coordinates"] for f in cluster] == [[0, 0], [4, 2]]
    assert cluster.features == (points[0], points[4])


def test_each_then_project():
    projected = []

    def collect(cluster, value, index):
        projected.append((value, [filter_properties(f.properties, ["cluster"]) for f in cluster]))

    cluster_each(_points(), "cluster", collect)
    assert projected == [
        ("0", [{"cluster": 0}, {"cluster": 0}]),
        ("1", [{"cluster": 1}, {"cluster": 1}]),
    ]


def test_geojson_input_flows_through():
    points = FeatureCollection.from_geojson(_points().to_geojson())
    assert len(get_cluster(points, {"cluster": 1})) == 2
    assert create_bins(points, "cluster") == {"0": [0, 4], "1": [1, 2]}
