from dataclasses import dataclass

import pytest

from geoclusters.clustering import get_cluster
from geoclusters.core_types import Feature, FeatureCollection
from geoclusters.filtering.matchers import AllOfFilter, KeyFilter, PropertyFilter
from geoclusters.interfaces import ClusterCallback, ClusterReducer, FilterKind
from geoclusters.registry import FILTER_KIND_REGISTRY, register_filter_kind


def test_filter_kind_protocol_present():
    assert hasattr(FilterKind, "accepts")
    assert hasattr(FilterKind, "from_raw")
    assert hasattr(FilterKind, "matches")


def test_callback_protocols_present():
    assert callable(ClusterCallback.__call__)
    assert callable(ClusterReducer.__call__)


def test_builtin_kinds_registered_in_dispatch_order():
    names = list(FILTER_KIND_REGISTRY)
    assert names[:3] == ["properties", "key", "all_of"]
    assert FILTER_KIND_REGISTRY["properties"] is PropertyFilter
    assert FILTER_KIND_REGISTRY["key"] is KeyFilter
    assert FILTER_KIND_REGISTRY["all_of"] is AllOfFilter


def test_duplicate_registration_rejected():
    with pytest.raises(ValueError, match="already registered"):
        register_filter_kind("properties")(PropertyFilter)


def test_custom_filter_kind_plugs_into_get_cluster():
    @dataclass(frozen=True)
    class PredicateFilter:
        predicate: object

        @classmethod
        def accepts(cls, raw):
            return callable(raw)

        @classmethod
        def from_raw(cls, raw):
            return cls(raw)

        def matches(self, properties):
            return properties is not None and self.predicate(properties)

    register_filter_kind("test_predicate")(PredicateFilter)
    try:
        collection = FeatureCollection(tuple(Feature(None, {"size": s}) for s in (1, 5, 9)))
        cluster = get_cluster(collection, lambda props: props["size"] > 3)
        assert [f.properties["size"] for f in cluster] == [5, 9]
    finally:
        FILTER_KIND_REGISTRY.pop("test_predicate", None)
