"""Property projection: keep a named subset of a property bag."""

from collections.abc import Iterable, Mapping
from typing import Any, Optional


def filter_properties(
    properties: Optional[Mapping], keys: Iterable[str | int] | str | int
) -> dict[Any, Any]:
    """Return a new dict with only the entries of ``properties`` named in ``keys``.

    Values are kept by reference. Keys absent from ``properties`` are simply
    left out.

    >>> filter_properties({'foo': 'bar', 'cluster': 0}, ['cluster'])
    {'cluster': 0}
    """
    if properties is None:
        return {}
    if isinstance(keys, (str, int)):
        keys = [keys]
    wanted = set(keys)
    return {key: value for key, value in properties.items() if key in wanted}
