from unittest.mock import MagicMock

import pytest

from geoclusters.clustering.traversal import (
    ClusterSequence,
    cluster_each,
    cluster_reduce,
    iter_clusters,
)
from geoclusters.core_types import ClusterVisit, Feature, FeatureCollection


@pytest.fixture
def clustered():
    points = [([0, 0], {"cluster": 0}), ([2, 4], {"cluster": 1}), ([3, 6], {"cluster": 1}),
              ([5, 1], {}), ([4, 2], {"cluster": 0})]
    return FeatureCollection(tuple(
        Feature(geometry={"type": "Point", "coordinates": c}, properties=p) for c, p in points
    ))


def test_cluster_each_visits_clusters_in_bin_order(clustered):
    seen = []
    cluster_each(clustered, "cluster", lambda cluster, value, index: seen.append((value, index, len(cluster))))
    assert seen == [("0", 0, 2), ("1", 1, 2)]


def test_cluster_each_builds_clusters_from_original_features(clustered):
    clusters = {}

    def collect(cluster, value, index):
        clusters[value] = cluster

    result = cluster_each(clustered, "cluster", collect)

    assert result is None
    assert clusters["0"].features == (clustered[0], clustered[4])
    assert clusters["1"].features == (clustered[1], clustered[2])


def test_cluster_each_absent_property_never_calls_back(clustered):
    callback = MagicMock()
    cluster_each(clustered, "missing", callback)
    callback.assert_not_called()


def test_cluster_reduce_counts_clusters(clustered):
    assert cluster_reduce(clustered, "cluster", lambda previous, *_: previous + 1, 0) == 2


def test_cluster_reduce_collects_values(clustered):
    values = cluster_reduce(
        clustered, "cluster", lambda previous, cluster, value, index: previous + [value], []
    )
    assert values == ["0", "1"]


def test_cluster_reduce_with_initial_value_starts_at_index_zero(clustered):
    callback = MagicMock(side_effect=lambda previous, cluster, value, index: previous)
    cluster_reduce(clustered, "cluster", callback, "start")
    assert callback.call_count == 2
    assert [c.args[3] for c in callback.call_args_list] == [0, 1]
    assert callback.call_args_list[0].args[0] == "start"


def test_cluster_reduce_without_initial_value_uses_first_cluster(clustered):
    callback = MagicMock(side_effect=lambda previous, cluster, value, index: previous)
    result = cluster_reduce(clustered, "cluster", callback)

    assert callback.call_count == 1
    previous, cluster, value, index = callback.call_args.args
    assert index == 1
    assert value == "1"
    assert isinstance(previous, FeatureCollection)
    assert previous.features == (clustered[0], clustered[4])
    assert result.features == (clustered[0], clustered[4])


def test_cluster_reduce_single_bin_without_initial_value_never_calls_back():
    collection = FeatureCollection((Feature(None, {"cluster": "a"}),))
    callback = MagicMock()
    result = cluster_reduce(collection, "cluster", callback)
    callback.assert_not_called()
    assert len(result) == 1


def test_cluster_reduce_zero_bins_passes_initial_value_through():
    callback = MagicMock()
    sentinel = object()
    assert cluster_reduce(FeatureCollection(), "cluster", callback, sentinel) is sentinel
    assert cluster_reduce(FeatureCollection(), "cluster", callback) is None
    callback.assert_not_called()


def test_cluster_reduce_accepts_none_as_initial_value(clustered):
    calls = []

    def reducer(previous, cluster, value, index):
        calls.append(previous)
        return index

    assert cluster_reduce(clustered, "cluster", reducer, None) == 1
    assert calls == [None, 0]


def test_iter_clusters_is_lazy_and_restartable(clustered):
    sequence = iter_clusters(clustered, "cluster")
    assert isinstance(sequence, ClusterSequence)

    first_pass = list(sequence)
    second_pass = list(sequence)

    assert [v.value for v in first_pass] == ["0", "1"]
    assert [(v.value, v.index) for v in first_pass] == [(v.value, v.index) for v in second_pass]
    assert all(isinstance(v, ClusterVisit) for v in first_pass)


def test_iter_clusters_reduce_matches_cluster_reduce(clustered):
    sequence = iter_clusters(clustered, "cluster")
    assert sequence.reduce(lambda previous, *_: previous + 1, 0) == 2


def test_cluster_subcollections_are_independent(clustered):
    clusters = [visit.cluster for visit in iter_clusters(clustered, "cluster")]
    assert clusters[0].features is not clustered.features
    assert len(clustered) == 5
