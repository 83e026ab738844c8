"""Registry for pluggable filter kinds in geoclusters."""

from geoclusters.utils.logging import GeoclustersLogger

from .interfaces import FilterKind

logger = GeoclustersLogger.get_logger(__name__)

# Registration order is dispatch order when coercing raw filters
FILTER_KIND_REGISTRY: dict[str, type[FilterKind]] = {}

__all__ = [
    "register_filter_kind",
    # Exposed for advanced users who need direct access
    "FILTER_KIND_REGISTRY",
]


def register_filter_kind(name: str):
    """Decorator to register a filter kind implementation."""

    def decorator(cls: type[FilterKind]):
        if name in FILTER_KIND_REGISTRY:
            raise ValueError(f"Filter kind '{name}' is already registered")
        FILTER_KIND_REGISTRY[name] = cls
        logger.debug(f"Registered filter kind '{name}' -> {cls.__name__}")
        return cls

    return decorator
