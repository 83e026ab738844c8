from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional, Tuple

import pandas as pd

from geoclusters.errors import InvalidInputError

# Bin key -> original feature indices, in first-occurrence order
BinTable = dict[str, list[int]]

PropertyKey = str | int


def empty_tuple_factory():
    """Ensures a new empty tuple is used as default."""
    return ()


@dataclass(frozen=True)
class Feature:
    """A geometry plus a property bag.

    The geometry is opaque here: nothing in this package inspects it. A
    ``properties`` of ``None`` is treated as a feature without properties.
    """
    geometry: Any
    properties: Optional[Mapping[PropertyKey, Any]] = None
    id: Optional[Any] = None

    def has_property(self, key: PropertyKey) -> bool:
        return self.properties is not None and key in self.properties

    @staticmethod
    def from_geojson(data: Mapping[str, Any]) -> 'Feature':
        """Build a Feature from a GeoJSON ``Feature`` mapping."""
        if not isinstance(data, Mapping):
            raise InvalidInputError(f"GeoJSON feature must be a mapping, got {type(data).__name__}")
        properties = data.get('properties')
        if properties is not None and not isinstance(properties, Mapping):
            raise InvalidInputError("GeoJSON feature 'properties' must be an object or null")
        return Feature(
            geometry=data.get('geometry'),
            properties=dict(properties) if properties is not None else None,
            id=data.get('id'),
        )

    def to_geojson(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            'type': 'Feature',
            'geometry': self.geometry,
            'properties': dict(self.properties) if self.properties is not None else None,
        }
        if self.id is not None:
            data['id'] = self.id
        return data


@dataclass(frozen=True)
class FeatureCollection:
    """Ordered, immutable sequence of features.

    Identity of a feature is its position; every subcollection built from a
    collection keeps the original relative order.
    """
    features: Tuple[Feature, ...] = field(default_factory=empty_tuple_factory)

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        if not isinstance(self.features, tuple):
            object.__setattr__(self, 'features', tuple(self.features))

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __getitem__(self, index: int) -> Feature:
        return self.features[index]

    def subset(self, indices: Iterable[int]) -> 'FeatureCollection':
        """New collection holding the features at ``indices``, in that order."""
        return FeatureCollection(tuple(self.features[i] for i in indices))

    @staticmethod
    def from_geojson(data: Mapping[str, Any]) -> 'FeatureCollection':
        """Build a collection from a GeoJSON ``FeatureCollection`` mapping."""
        if not isinstance(data, Mapping) or data.get('type') != 'FeatureCollection':
            raise InvalidInputError("Expected a GeoJSON object with type 'FeatureCollection'")
        features = data.get('features')
        if not isinstance(features, list):
            raise InvalidInputError("GeoJSON FeatureCollection 'features' must be a list")
        return FeatureCollection(tuple(Feature.from_geojson(f) for f in features))

    def to_geojson(self) -> dict[str, Any]:
        return {
            'type': 'FeatureCollection',
            'features': [feature.to_geojson() for feature in self.features],
        }

    @staticmethod
    def from_dataframe(
        df: pd.DataFrame,
        geometry_columns: Tuple[str, str] = ('Longitude', 'Latitude'),
    ) -> 'FeatureCollection':
        """Convert a DataFrame to a collection of Point features.

        Every non-geometry column becomes a property; missing cells leave the
        property out of that feature's bag.
        """
        missing = set(geometry_columns) - set(df.columns)
        if missing:
            raise ValueError(f"Missing geometry columns: {sorted(missing)}")

        property_cols = [col for col in df.columns if col not in geometry_columns]
        x_col, y_col = geometry_columns
        features = []
        for _, row in df.iterrows():
            properties = {}
            for col in property_cols:
                value = row[col]
                if pd.api.types.is_scalar(value) and pd.isna(value):
                    continue
                # Unwrap numpy scalars so they behave like plain Python values
                properties[col] = value.item() if hasattr(value, 'item') else value
            features.append(Feature(
                geometry={'type': 'Point', 'coordinates': [float(row[x_col]), float(row[y_col])]},
                properties=properties,
            ))
        return FeatureCollection(tuple(features))

    def to_dataframe(
        self,
        geometry_columns: Tuple[str, str] = ('Longitude', 'Latitude'),
    ) -> pd.DataFrame:
        """Convert Point features back to a DataFrame (one row per feature)."""
        if len(self.features) == 0:
            return pd.DataFrame(columns=list(geometry_columns))

        x_col, y_col = geometry_columns
        data = []
        for feature in self.features:
            geometry = feature.geometry if isinstance(feature.geometry, Mapping) else {}
            coords = geometry.get('coordinates') or [None, None]
            row = {x_col: coords[0], y_col: coords[1]}
            row.update(feature.properties or {})
            data.append(row)
        return pd.DataFrame(data)


class ClusterVisit(NamedTuple):
    """One step of a cluster traversal."""
    cluster: FeatureCollection
    value: str  # bin key the cluster was built from
    index: int  # ordinal of the bin, starting at 0
