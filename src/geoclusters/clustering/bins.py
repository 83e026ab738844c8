"""
bins.py

Groups feature indices by the value of a property. Bins are the building
block of cluster traversal: a bin key is the canonical string form of a
property value and a bin holds the original indices of the features sharing
it.
"""

import math
import numbers
from typing import Any

import numpy as np

from geoclusters.core_types import BinTable, FeatureCollection, PropertyKey
from geoclusters.utils.logging import GeoclustersLogger

logger = GeoclustersLogger.get_logger(__name__)


def bin_key(value: Any) -> str:
    """Canonical string form of a property value.

    Numbers use plain decimal text and integral floats drop their fraction,
    so ``1``, ``1.0`` and ``"1"`` all land in the same bin. Booleans become
    ``"true"``/``"false"``, ``None`` becomes ``"null"``, NaN ``"NaN"`` and
    infinities ``"Infinity"``/``"-Infinity"``. Other floats use the shortest
    positional decimal that round-trips, never exponent notation
    (``1e-07`` -> ``"0.0000001"``).
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, np.bool_)):
        return 'true' if value else 'false'
    if value is None:
        return 'null'
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        number = float(value)
        if math.isnan(number):
            return 'NaN'
        if math.isinf(number):
            return 'Infinity' if number > 0 else '-Infinity'
        if number.is_integer():
            return str(int(number))
        return np.format_float_positional(number, trim='-')
    return str(value)


def create_bins(collection: FeatureCollection, property: PropertyKey) -> BinTable:
    """Map each bin key to the indices of the features holding that value.

    Features without ``property`` are left out of every bin. Bin keys keep
    first-occurrence order and indices keep collection order.

    >>> create_bins(collection, 'cluster')  # doctest: +SKIP
    {'0': [0, 4], '1': [1, 2]}
    """
    bins: BinTable = {}
    for index, feature in enumerate(collection):
        properties = feature.properties
        if properties is None or property not in properties:
            continue
        bins.setdefault(bin_key(properties[property]), []).append(index)

    logger.debug(
        f"Created {len(bins)} bins on '{property}' from {len(collection)} features"
    )
    return bins
