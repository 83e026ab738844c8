"""Retrieval of a single cluster by filtering feature properties."""

from typing import Any

from geoclusters.core_types import FeatureCollection
from geoclusters.filtering.matchers import coerce_filter
from geoclusters.utils.logging import GeoclustersLogger

logger = GeoclustersLogger.get_logger(__name__)


def get_cluster(collection: FeatureCollection, filter: Any) -> FeatureCollection:
    """Return the features whose properties satisfy ``filter``, in order.

    The filter need not be the grouping property: ``{'cluster': 0,
    'marker-symbol': 'circle'}`` narrows to features matching both keys. An
    empty mapping is an explicit request for the whole collection.

    Raises:
        InvalidInputError: if ``filter`` is missing or has no usable shape.
    """
    matcher = coerce_filter(filter)
    indices = [
        index
        for index, feature in enumerate(collection)
        if matcher.matches(feature.properties)
    ]
    logger.debug(f"get_cluster matched {len(indices)} of {len(collection)} features")
    return collection.subset(indices)
