"""
traversal.py

Per-cluster iteration and reduction. ``iter_clusters`` exposes the clusters of
a collection as a lazy, restartable sequence of ``ClusterVisit`` triples;
``cluster_each`` and ``cluster_reduce`` are thin drivers over it.
"""

from collections.abc import Iterator
from typing import Any

from geoclusters.core_types import ClusterVisit, FeatureCollection, PropertyKey
from geoclusters.interfaces import ClusterCallback, ClusterReducer
from geoclusters.utils.logging import GeoclustersLogger

from .bins import create_bins

logger = GeoclustersLogger.get_logger(__name__)

# Marks an omitted initial value; None is a legitimate accumulator
_MISSING = object()


class ClusterSequence:
    """Clusters of a collection grouped by one property.

    Every iteration rebuilds the bins from the collection, so the sequence
    can be iterated any number of times.
    """

    def __init__(self, collection: FeatureCollection, property: PropertyKey):
        self.collection = collection
        self.property = property

    def __iter__(self) -> Iterator[ClusterVisit]:
        bins = create_bins(self.collection, self.property)
        for index, (value, indices) in enumerate(bins.items()):
            yield ClusterVisit(self.collection.subset(indices), value, index)

    def reduce(self, callback: ClusterReducer, initial_value: Any = _MISSING) -> Any:
        """Left fold over the clusters.

        Without ``initial_value`` the first cluster is the starting
        accumulator and ``callback`` is first called for the second cluster.
        With no clusters at all the result is ``initial_value`` (``None``
        when omitted).
        """
        visits = iter(self)
        if initial_value is _MISSING:
            first = next(visits, None)
            if first is None:
                return None
            accumulator = first.cluster
        else:
            accumulator = initial_value

        for cluster, value, index in visits:
            accumulator = callback(accumulator, cluster, value, index)
        return accumulator


def iter_clusters(collection: FeatureCollection, property: PropertyKey) -> ClusterSequence:
    """Return the clusters of ``collection`` on ``property`` as a lazy sequence."""
    return ClusterSequence(collection, property)


def cluster_each(
    collection: FeatureCollection,
    property: PropertyKey,
    callback: ClusterCallback,
) -> None:
    """Call ``callback(cluster, value, index)`` once per cluster.

    ``value`` is the bin key of the cluster and ``index`` its position among
    all clusters (not a feature index).
    """
    visited = 0
    for cluster, value, index in iter_clusters(collection, property):
        callback(cluster, value, index)
        visited += 1
    logger.debug(f"cluster_each visited {visited} clusters on '{property}'")


def cluster_reduce(
    collection: FeatureCollection,
    property: PropertyKey,
    callback: ClusterReducer,
    initial_value: Any = _MISSING,
) -> Any:
    """Reduce the clusters of ``collection``, like :func:`functools.reduce`.

    ``callback(previous, cluster, value, index)`` returns the next
    accumulator. When ``initial_value`` is omitted the first cluster is used
    as the initial accumulator and the callback starts at index 1.

    Example:
        >>> total = cluster_reduce(collection, 'cluster',
        ...                        lambda previous, *_: previous + 1, 0)  # doctest: +SKIP
    """
    return iter_clusters(collection, property).reduce(callback, initial_value)
