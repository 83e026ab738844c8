"""Configuration module for geoclusters parameters."""

from .loader import load_yaml as load_geoclusters_params
from .params import (
    ClusterParams,
    GeoclustersParams,
    IOParams,
    RuntimeParams,
)

__all__ = [
    "ClusterParams",
    "IOParams",
    "RuntimeParams",
    "GeoclustersParams",
    "load_geoclusters_params",
]
