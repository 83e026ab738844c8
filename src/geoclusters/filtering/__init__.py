"""
Filter matching and property projection over feature property bags.
"""

from .matchers import (
    AllOfFilter,
    KeyFilter,
    PropertyFilter,
    apply_filter,
    coerce_filter,
    properties_contains_filter,
    strict_equals,
)
from .projection import filter_properties

__all__ = [
    "AllOfFilter",
    "KeyFilter",
    "PropertyFilter",
    "apply_filter",
    "coerce_filter",
    "filter_properties",
    "properties_contains_filter",
    "strict_equals",
]
