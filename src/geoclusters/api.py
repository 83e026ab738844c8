"""
API facade for geoclusters - summaries and a single entry point for config-driven runs.
"""

from typing import Optional, Sequence

import pandas as pd

from geoclusters.clustering import cluster_reduce, create_bins, get_cluster
from geoclusters.config.params import GeoclustersParams
from geoclusters.core_types import FeatureCollection, PropertyKey
from geoclusters.filtering import filter_properties
from geoclusters.utils.data_processing import load_feature_collection
from geoclusters.utils.logging import (
    GeoclustersLogger,
    ProgressTracker,
    log_detail,
    log_warning,
)
from geoclusters.utils.save_results import save_cluster_summary

logger = GeoclustersLogger.get_logger("geoclusters.api")

SUMMARY_COLUMNS = ["Cluster_Value", "Cluster_Index", "Size", "Feature_Indices"]


def summarize_clusters(
    collection: FeatureCollection,
    property: PropertyKey,
    keys: Optional[Sequence[PropertyKey]] = None,
) -> pd.DataFrame:
    """One row per cluster of ``collection`` on ``property``.

    Columns: ``Cluster_Value`` (bin key), ``Cluster_Index``, ``Size``,
    ``Feature_Indices`` (positions in ``collection``) and, when ``keys`` is
    given, ``Properties`` with each member's projected properties.
    """
    bins = create_bins(collection, property)

    def add_row(rows, cluster, value, index):
        row = {
            "Cluster_Value": value,
            "Cluster_Index": index,
            "Size": len(cluster),
            "Feature_Indices": list(bins[value]),
        }
        if keys is not None:
            row["Properties"] = [
                filter_properties(feature.properties, keys) for feature in cluster
            ]
        rows.append(row)
        return rows

    rows = cluster_reduce(collection, property, add_row, [])

    columns = SUMMARY_COLUMNS + (["Properties"] if keys is not None else [])
    if not rows:
        log_warning(f"No feature has the property '{property}'")
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows, columns=columns)


def run(params: GeoclustersParams) -> pd.DataFrame:
    """Load, optionally retrieve one cluster, summarize and save.

    When ``params.clustering.filter`` is set, only the features matching it
    are summarized and ``Feature_Indices`` refer to that subcollection.
    """
    steps = ["Load Data", "Filter Features", "Summarize Clusters", "Save Results"]
    logger.debug(f"Running with {params.clustering} and {params.io}")
    progress = ProgressTracker(steps)

    collection = load_feature_collection(params.io.input_file)
    progress.advance(f"Loaded {len(collection)} features")

    if params.clustering.filter is not None:
        collection = get_cluster(collection, params.clustering.filter)
        progress.advance(f"Filter kept {len(collection)} features")
    else:
        progress.advance("No filter configured")

    summary = summarize_clusters(
        collection, params.clustering.property, params.clustering.keys
    )
    progress.advance(f"Summarized {len(summary)} clusters")
    if params.runtime.verbose:
        for row in summary.itertuples(index=False):
            log_detail(f"Cluster '{row.Cluster_Value}': {row.Size} features")

    path = save_cluster_summary(summary, params)
    progress.advance(f"Results saved to {path.name}")
    progress.close()
    return summary
