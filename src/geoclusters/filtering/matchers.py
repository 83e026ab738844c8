"""
matchers.py

Filter matching over property bags. A filter is one of a small set of
registered kinds (see ``geoclusters.registry``):

- ``PropertyFilter``: a property bag; matches by containment with strict,
  non-deep equality of values.
- ``KeyFilter``: a single property key; matches when the key is present.
- ``AllOfFilter``: a list of filters; matches when every member matches.

Raw values handed to ``apply_filter``/``get_cluster`` are turned into a kind
by ``coerce_filter``.
"""

import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from geoclusters.errors import InvalidInputError
from geoclusters.interfaces import FilterKind
from geoclusters.registry import FILTER_KIND_REGISTRY, register_filter_kind
from geoclusters.utils.logging import GeoclustersLogger

logger = GeoclustersLogger.get_logger(__name__)

_SCALAR_TYPES = (str, bytes, numbers.Number, bool, np.bool_, type(None))


def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without type juggling and without deep comparison.

    Containers only equal themselves (identity), booleans only equal
    booleans, strings never equal numbers and NaN equals nothing.
    """
    if not (isinstance(left, _SCALAR_TYPES) and isinstance(right, _SCALAR_TYPES)):
        return left is right
    if _is_bool(left) or _is_bool(right):
        return _is_bool(left) and _is_bool(right) and bool(left) == bool(right)
    if left is None or right is None:
        return left is None and right is None
    left_is_number = isinstance(left, numbers.Number)
    if left_is_number != isinstance(right, numbers.Number):
        return False
    return bool(left == right)


def properties_contains_filter(
    properties: Optional[Mapping], filter: Mapping
) -> bool:
    """Return True if every key of ``filter`` is in ``properties`` with an equal value.

    Values are compared with :func:`strict_equals`, so nested dicts or lists
    only match the very same object. An empty filter matches anything,
    ``None`` properties included.

    >>> properties_contains_filter({'foo': 'bar', 'cluster': 0}, {'cluster': 0})
    True
    >>> properties_contains_filter({'foo': 'bar', 'cluster': 0}, {'cluster': 1})
    False
    """
    for key, expected in filter.items():
        if properties is None or key not in properties:
            return False
        if not strict_equals(properties[key], expected):
            return False
    return True


@register_filter_kind('properties')
@dataclass(frozen=True)
class PropertyFilter:
    """Exact-match property bag."""
    criteria: Mapping

    @classmethod
    def accepts(cls, raw: Any) -> bool:
        return isinstance(raw, Mapping)

    @classmethod
    def from_raw(cls, raw: Mapping) -> 'PropertyFilter':
        # Shallow copy: values keep their identity for strict comparison
        return cls(dict(raw))

    def matches(self, properties: Optional[Mapping]) -> bool:
        return properties_contains_filter(properties, self.criteria)


@register_filter_kind('key')
@dataclass(frozen=True)
class KeyFilter:
    """Presence of a single property key, whatever its value."""
    key: str | int

    @classmethod
    def accepts(cls, raw: Any) -> bool:
        if _is_bool(raw):
            return False
        if isinstance(raw, str):
            return raw != ''
        return isinstance(raw, numbers.Integral)

    @classmethod
    def from_raw(cls, raw: str | int) -> 'KeyFilter':
        return cls(raw if isinstance(raw, str) else int(raw))

    def matches(self, properties: Optional[Mapping]) -> bool:
        return properties is not None and self.key in properties


@register_filter_kind('all_of')
@dataclass(frozen=True)
class AllOfFilter:
    """Conjunction of filters; an empty conjunction matches everything."""
    members: Tuple[FilterKind, ...]

    @classmethod
    def accepts(cls, raw: Any) -> bool:
        return isinstance(raw, (list, tuple))

    @classmethod
    def from_raw(cls, raw: list | tuple) -> 'AllOfFilter':
        return cls(tuple(coerce_filter(member) for member in raw))

    def matches(self, properties: Optional[Mapping]) -> bool:
        return all(member.matches(properties) for member in self.members)


def coerce_filter(raw: Any) -> FilterKind:
    """Turn a raw filter value into a registered filter kind.

    Raises:
        InvalidInputError: if ``raw`` is missing or no kind accepts its shape.
    """
    if raw is None:
        raise InvalidInputError("filter is required")

    kinds = tuple(FILTER_KIND_REGISTRY.values())
    if isinstance(raw, kinds):
        return raw

    for name, kind in FILTER_KIND_REGISTRY.items():
        if kind.accepts(raw):
            logger.debug(f"Using '{name}' filter kind for {type(raw).__name__}")
            return kind.from_raw(raw)

    raise InvalidInputError(
        f"Unsupported filter of type {type(raw).__name__}: expected a property "
        f"mapping, a property key or a list of filters"
    )


def apply_filter(properties: Optional[Mapping], filter: Any) -> bool:
    """Return True if ``properties`` satisfies ``filter``.

    A plain mapping delegates to :func:`properties_contains_filter`.
    """
    return coerce_filter(filter).matches(properties)
