"""
Binning, traversal and retrieval of feature clusters.
"""

from geoclusters.core_types import BinTable, ClusterVisit, Feature, FeatureCollection

from .bins import bin_key, create_bins
from .retrieval import get_cluster
from .traversal import ClusterSequence, cluster_each, cluster_reduce, iter_clusters

__all__ = [
    "BinTable",
    "ClusterSequence",
    "ClusterVisit",
    "Feature",
    "FeatureCollection",
    "bin_key",
    "cluster_each",
    "cluster_reduce",
    "create_bins",
    "get_cluster",
    "iter_clusters",
]
