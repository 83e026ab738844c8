from __future__ import annotations

"""Parameter container dataclasses for geoclusters runs.

Settings are split into what to group and retrieve (`ClusterParams`), where
data comes from and goes to (`IOParams`), and a small mutable `RuntimeParams`
bucket for flags that are never read from YAML.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

__all__ = [
    "ClusterParams",
    "IOParams",
    "RuntimeParams",
    "GeoclustersParams",
]


# ---------------------------------------------------------------------------
# Clustering parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ClusterParams:
    """Which property groups the features and how clusters are reported."""

    property: Union[str, int] = "cluster"
    keys: Optional[List[Union[str, int]]] = None
    filter: Any = None

    def __post_init__(self):  # type: ignore[override]
        if isinstance(self.property, bool) or not isinstance(self.property, (str, int)):
            raise ValueError("ClusterParams.property must be a string or an integer.")
        if self.property == "":
            raise ValueError("ClusterParams.property cannot be empty.")

        if self.keys is not None:
            if not isinstance(self.keys, list):
                raise ValueError("ClusterParams.keys must be a list of property keys.")
            invalid = [k for k in self.keys if isinstance(k, bool) or not isinstance(k, (str, int))]
            if invalid:
                raise ValueError(f"ClusterParams.keys contains invalid keys: {invalid}")


# ---------------------------------------------------------------------------
# IO parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IOParams:
    """Settings for data input and output pathways."""

    input_file: str
    results_dir: Path = Path("results")
    format: str = "json"  # One of: json, csv

    def __post_init__(self):  # type: ignore[override]
        if self.format not in {"json", "csv"}:
            raise ValueError("IOParams.format must be 'json' or 'csv'.")

        results_dir = Path(self.results_dir)
        if not results_dir.is_absolute():
            results_dir = (Path.cwd() / results_dir).resolve()
        object.__setattr__(self, "results_dir", results_dir)


# ---------------------------------------------------------------------------
# Runtime parameters – toggles that are never serialized to yaml
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class RuntimeParams:
    verbose: bool = False
    debug: bool = False


# ---------------------------------------------------------------------------
# Aggregate container
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class GeoclustersParams:
    """Aggregate parameter object passed to the API and CLI."""

    clustering: ClusterParams
    io: IOParams
    runtime: RuntimeParams = field(default_factory=RuntimeParams)

    # Convenience accessors so calling code can use `params.X`.
    def __getattr__(self, item):
        # Delegate lookup to contained dataclasses.
        for section in (self.clustering, self.io, self.runtime):
            if hasattr(section, item):
                return getattr(section, item)
        raise AttributeError(item)
