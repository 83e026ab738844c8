"""
save_results.py - the single place where cluster summaries hit disk.

Keeps the binning, traversal and filtering code free of side effects: they
build in-memory tables and this module turns them into JSON or CSV files.
"""

import json
from datetime import datetime
from pathlib import Path

import pandas as pd

from geoclusters.config.params import GeoclustersParams
from geoclusters.utils.logging import GeoclustersLogger

logger = GeoclustersLogger.get_logger(__name__)


def save_cluster_summary(
    summary: pd.DataFrame,
    parameters: GeoclustersParams,
    filename: str | Path | None = None,
) -> Path:
    """Write a cluster summary table as JSON or CSV and return the file path."""
    format = parameters.io.format

    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_filename = parameters.io.results_dir / f"cluster_summary_{timestamp}.{format}"
    else:
        output_filename = Path(filename)

    output_filename.parent.mkdir(parents=True, exist_ok=True)

    if format == "csv":
        # Nested columns (index lists, projected properties) as JSON text
        flat = summary.copy()
        for col in ("Feature_Indices", "Properties"):
            if col in flat.columns:
                flat[col] = flat[col].apply(lambda value: json.dumps(value, default=str))
        flat.to_csv(output_filename, index=False)
    else:
        payload = {
            "property": parameters.clustering.property,
            "generated_at": datetime.now().isoformat(timespec="seconds"),
            # Round-trip through pandas' encoder to get plain Python scalars
            "clusters": json.loads(summary.to_json(orient="records", default_handler=str)),
        }
        with output_filename.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, default=str)

    logger.info(f"Cluster summary saved to {output_filename}")
    return output_filename
