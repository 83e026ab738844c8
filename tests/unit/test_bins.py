import math

import numpy as np
import pytest

from geoclusters.clustering.bins import bin_key, create_bins
from geoclusters.core_types import Feature, FeatureCollection


def _point(x, y, properties=None):
    return Feature(geometry={"type": "Point", "coordinates": [x, y]}, properties=properties)


def _collection(*property_bags):
    return FeatureCollection(tuple(_point(i, i, p) for i, p in enumerate(property_bags)))


def test_create_bins_groups_indices_and_skips_missing_property():
    collection = _collection(
        {"cluster": 0}, {"cluster": 1}, {"cluster": 1}, {}, {"cluster": 0}
    )
    assert create_bins(collection, "cluster") == {"0": [0, 4], "1": [1, 2]}


def test_create_bins_matches_documented_example():
    collection = _collection(
        {"cluster": 0, "foo": "null"},
        {"cluster": 1, "foo": "bar"},
        {0: "foo"},
        {"cluster": 1},
    )
    assert create_bins(collection, "cluster") == {"0": [0], "1": [1, 3]}


def test_create_bins_keeps_first_occurrence_order():
    collection = _collection({"k": "b"}, {"k": "a"}, {"k": "b"}, {"k": "c"})
    bins = create_bins(collection, "k")
    assert list(bins) == ["b", "a", "c"]
    assert bins["b"] == [0, 2]


def test_create_bins_numeric_and_string_values_collide():
    collection = _collection({"k": 1}, {"k": "1"}, {"k": 1.0}, {"k": 2})
    assert create_bins(collection, "k") == {"1": [0, 1, 2], "2": [3]}


def test_create_bins_integer_property_key():
    collection = _collection({0: "foo"}, {"0": "bar"}, {0: "foo"})
    assert create_bins(collection, 0) == {"foo": [0, 2]}


def test_create_bins_none_properties_are_skipped():
    collection = _collection(None, {"cluster": 3}, None)
    assert create_bins(collection, "cluster") == {"3": [1]}


def test_create_bins_empty_inputs():
    assert create_bins(FeatureCollection(), "cluster") == {}
    assert create_bins(_collection({}, {"other": 1}), "cluster") == {}


def test_create_bins_returns_fresh_table_each_call():
    collection = _collection({"k": "a"})
    first = create_bins(collection, "k")
    first["a"].append(99)
    assert create_bins(collection, "k") == {"a": [0]}


@pytest.mark.parametrize(
    "value, expected",
    [
        ("circle", "circle"),
        ("", ""),
        (0, "0"),
        (-3, "-3"),
        (1.0, "1"),
        (-0.0, "0"),
        (1.5, "1.5"),
        (-2.25, "-2.25"),
        (0.1, "0.1"),
        (1e-07, "0.0000001"),
        (-2.5e-05, "-0.000025"),
        (True, "true"),
        (False, "false"),
        (None, "null"),
        (math.nan, "NaN"),
        (math.inf, "Infinity"),
        (-math.inf, "-Infinity"),
        (np.int64(7), "7"),
        (np.float64(2.0), "2"),
        (np.bool_(True), "true"),
    ],
)
def test_bin_key_canonical_stringification(value, expected):
    assert bin_key(value) == expected


def test_bin_key_falls_back_to_str_for_other_values():
    assert bin_key([1, 2]) == "[1, 2]"
