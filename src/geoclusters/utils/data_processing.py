"""Loading feature collections from disk."""

import json
from pathlib import Path

import pandas as pd

from geoclusters.core_types import FeatureCollection
from geoclusters.utils.logging import GeoclustersLogger

logger = GeoclustersLogger.get_logger(__name__)

GEOJSON_SUFFIXES = {".geojson", ".json"}
CSV_SUFFIXES = {".csv"}


def load_feature_collection(path: str | Path) -> FeatureCollection:
    """Load a FeatureCollection from a GeoJSON or CSV file.

    CSV files need ``Longitude`` and ``Latitude`` columns; every other column
    becomes a property and empty cells are left out of the property bag.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(file_path)

    suffix = file_path.suffix.lower()
    if suffix in GEOJSON_SUFFIXES:
        try:
            with file_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Error parsing GeoJSON file {file_path}: {exc}") from exc
        collection = FeatureCollection.from_geojson(data)
    elif suffix in CSV_SUFFIXES:
        df = pd.read_csv(file_path)
        collection = FeatureCollection.from_dataframe(df)
    else:
        raise ValueError(
            f"Unsupported input format '{suffix}' for {file_path}: "
            f"expected one of {sorted(GEOJSON_SUFFIXES | CSV_SUFFIXES)}"
        )

    logger.debug(f"Loaded {len(collection)} features from {file_path}")
    return collection
