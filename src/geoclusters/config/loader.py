from __future__ import annotations

"""Load geoclusters YAML configuration files into the parameter dataclasses.

Expected layout (all keys top-level)::

    property: cluster
    keys: [marker-symbol]
    filter: {cluster: 0}
    input_file: data/points.geojson
    results_dir: results
    format: json
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from geoclusters.utils.logging import GeoclustersLogger

from .params import ClusterParams, GeoclustersParams, IOParams

logger = GeoclustersLogger.get_logger(__name__)


def _as_property_key(value: Any) -> Any:
    """YAML reads ``property: 0`` as an int; file-backed property bags only have string keys."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _normalize_filter_keys(raw: Any) -> Any:
    if isinstance(raw, dict):
        return {_as_property_key(k): v for k, v in raw.items()}
    if isinstance(raw, list):
        return [_normalize_filter_keys(member) for member in raw]
    return _as_property_key(raw)


def load_yaml(path: str | Path) -> GeoclustersParams:
    """Load a YAML configuration file into `GeoclustersParams`."""

    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(cfg_path)

    try:
        with cfg_path.open() as f:
            data: Dict[str, Any] = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ValueError(
            f"Error parsing YAML configuration {cfg_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"YAML configuration {cfg_path} must be a mapping.")

    # ---------------------------------------------------------------------
    # Clustering parameters
    # ---------------------------------------------------------------------

    keys = data.pop("keys", None)
    clustering = ClusterParams(
        property=_as_property_key(data.pop("property", "cluster")),
        keys=[_as_property_key(k) for k in keys] if isinstance(keys, list) else keys,
        filter=_normalize_filter_keys(data.pop("filter", None)),
    )

    # ---------------------------------------------------------------------
    # IO parameters
    # ---------------------------------------------------------------------

    input_file = data.pop("input_file", None)
    if input_file is None:
        raise ValueError("YAML missing required key 'input_file'.")

    io_params = IOParams(
        input_file=str(input_file),
        results_dir=Path(data.pop("results_dir", "results")),
        format=data.pop("format", "json"),
    )

    # Any remaining unknown keys will raise an error to avoid silent mistakes.
    if data:
        unknown_keys = ", ".join(sorted(str(k) for k in data.keys()))
        raise ValueError(
            f"Unknown top-level configuration keys in YAML: {unknown_keys}"
        )

    logger.debug(
        "Loaded configuration - clustering: %s io: %s", clustering, io_params
    )

    return GeoclustersParams(clustering=clustering, io=io_params)
