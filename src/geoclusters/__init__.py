"""geoclusters: grouping, traversal and retrieval of labeled feature clusters."""

__version__ = "0.1.0b1"

# Core types
from .core_types import BinTable, ClusterVisit, Feature, FeatureCollection
from .errors import InvalidInputError

# Clustering primitives
from .clustering import (
    ClusterSequence,
    bin_key,
    cluster_each,
    cluster_reduce,
    create_bins,
    get_cluster,
    iter_clusters,
)

# Filtering
from .filtering import (
    AllOfFilter,
    KeyFilter,
    PropertyFilter,
    apply_filter,
    coerce_filter,
    filter_properties,
    properties_contains_filter,
)

# Config and API facade
from .config import GeoclustersParams, load_geoclusters_params
from .api import run, summarize_clusters

# Extension system
from .registry import register_filter_kind

__all__ = [
    # Version
    "__version__",
    # Types
    "BinTable",
    "ClusterVisit",
    "Feature",
    "FeatureCollection",
    "InvalidInputError",
    # Clustering
    "ClusterSequence",
    "bin_key",
    "cluster_each",
    "cluster_reduce",
    "create_bins",
    "get_cluster",
    "iter_clusters",
    # Filtering
    "AllOfFilter",
    "KeyFilter",
    "PropertyFilter",
    "apply_filter",
    "coerce_filter",
    "filter_properties",
    "properties_contains_filter",
    # Config / API
    "GeoclustersParams",
    "load_geoclusters_params",
    "run",
    "summarize_clusters",
    # Extensions
    "register_filter_kind",
]
