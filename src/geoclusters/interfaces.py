"""Protocol definitions for pluggable components in geoclusters."""

from collections.abc import Mapping
from typing import Any, Protocol

from geoclusters.core_types import FeatureCollection


class FilterKind(Protocol):
    """Protocol for filter kinds.

    Implementation note: ``accepts`` decides whether a raw filter value (as
    given by callers of ``get_cluster``/``apply_filter``) has this kind's
    shape; ``from_raw`` builds the kind from such a value.
    """

    @classmethod
    def accepts(cls, raw: Any) -> bool:
        """Return True if ``raw`` can be turned into this filter kind."""
        ...

    @classmethod
    def from_raw(cls, raw: Any) -> "FilterKind":
        ...

    def matches(self, properties: Mapping | None) -> bool:
        """Return True if the property bag satisfies the filter."""
        ...


class ClusterCallback(Protocol):
    """Callback for ``cluster_each``."""

    def __call__(self, cluster: FeatureCollection, value: str, index: int) -> None:
        ...


class ClusterReducer(Protocol):
    """Callback for ``cluster_reduce``: returns the next accumulator."""

    def __call__(
        self, previous: Any, cluster: FeatureCollection, value: str, index: int
    ) -> Any:
        ...
