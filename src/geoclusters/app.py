"""
Command-line interface for geoclusters using Typer.
"""

import dataclasses
import json
from pathlib import Path
from typing import Any

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from geoclusters import __version__
from geoclusters.api import run as api_run
from geoclusters.api import summarize_clusters
from geoclusters.clustering import create_bins, get_cluster
from geoclusters.config import (
    ClusterParams,
    GeoclustersParams,
    IOParams,
    RuntimeParams,
    load_geoclusters_params,
)
from geoclusters.utils.data_processing import load_feature_collection
from geoclusters.utils.logging import (
    LogLevel,
    log_debug,
    log_detail,
    log_error,
    log_info,
    log_progress,
    log_success,
    setup_logging,
)
from geoclusters.utils.save_results import save_cluster_summary

app = typer.Typer(
    help="geoclusters: group, traverse and retrieve clusters of labeled features",
    add_completion=False,
)
console = Console()


def _parse_filters(raw_filters: list[str]) -> Any:
    """Build a filter from ``key=value`` and bare ``key`` options.

    Values are parsed as JSON, the format of the input files, so ``cluster=0``
    matches the number 0 while ``answer=yes`` and ``day=2020-01-01`` stay
    strings.
    """
    criteria: dict[str, Any] = {}
    required_keys: list[str] = []
    for item in raw_filters:
        if "=" in item:
            key, value = item.split("=", 1)
            criteria[key] = _parse_value(value)
        else:
            required_keys.append(item)

    if not raw_filters:
        return None
    if not required_keys:
        return criteria
    return ([criteria] if criteria else []) + required_keys


def _parse_value(value: str) -> Any:
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _parse_keys(keys: str | None) -> list[str] | None:
    if keys is None:
        return None
    return [key.strip() for key in keys.split(",") if key.strip()]


def _print_summary(summary: pd.DataFrame, title: str) -> None:
    table = Table(title=title, show_header=True)
    table.add_column("Cluster", style="cyan")
    table.add_column("Index", style="dim")
    table.add_column("Size", style="green")
    table.add_column("Features")
    if "Properties" in summary.columns:
        table.add_column("Properties")

    for _, row in summary.iterrows():
        cells = [
            str(row["Cluster_Value"]),
            str(row["Cluster_Index"]),
            str(row["Size"]),
            ", ".join(str(i) for i in row["Feature_Indices"]),
        ]
        if "Properties" in summary.columns:
            cells.append(json.dumps(row["Properties"], default=str))
        table.add_row(*cells)

    console.print(table)
    console.print(f"\n[dim]Total: {len(summary)} clusters[/dim]")


@app.command()
def bins(
    input: Path = typer.Argument(..., help="GeoJSON or CSV file with features"),
    property: str = typer.Option(
        "cluster", "--property", "-p", help="Property used to group features"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Minimal output (errors only)"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output"),
) -> None:
    """
    Show the bin table: feature indices grouped by property value.
    """
    _setup_logging_from_flags(verbose, quiet, debug)

    try:
        collection = load_feature_collection(input)
    except (FileNotFoundError, ValueError) as e:
        log_error(str(e))
        raise typer.Exit(1)

    bin_table = create_bins(collection, property)
    if not bin_table:
        log_info(f"No feature in {input} has the property '{property}'")

    table = Table(title=f"Bins on '{property}'", show_header=True)
    table.add_column("Bin", style="cyan")
    table.add_column("Feature Indices", style="green")
    for key, indices in bin_table.items():
        table.add_row(key, ", ".join(str(i) for i in indices))

    console.print(table)
    console.print(f"\n[dim]Total: {len(bin_table)} bins[/dim]")


@app.command()
def summary(
    input: Path = typer.Argument(..., help="GeoJSON or CSV file with features"),
    property: str = typer.Option(
        "cluster", "--property", "-p", help="Property used to group features"
    ),
    keys: str | None = typer.Option(
        None, "--keys", "-k", help="Comma separated properties to report per feature"
    ),
    save: bool = typer.Option(False, "--save", help="Save the summary to disk"),
    output: Path = typer.Option("results", "--output", "-o", help="Output directory"),
    format: str = typer.Option(
        "json", "--format", "-f", help="Output format (json, csv)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Minimal output (errors only)"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output"),
) -> None:
    """
    Summarize every cluster: size, member indices and selected properties.
    """
    _setup_logging_from_flags(verbose, quiet, debug)

    if format not in ["json", "csv"]:
        log_error("Invalid format. Choose 'json' or 'csv'")
        raise typer.Exit(1)

    try:
        collection = load_feature_collection(input)
        key_list = _parse_keys(keys)
        table = summarize_clusters(collection, property, key_list)

        if not quiet:
            _print_summary(table, f"Clusters on '{property}'")

        if save:
            params = GeoclustersParams(
                clustering=ClusterParams(property=property, keys=key_list),
                io=IOParams(input_file=str(input), results_dir=output, format=format),
            )
            path = save_cluster_summary(table, params)
            log_success(f"Summary saved to {path}")

    except FileNotFoundError as e:
        log_error(str(e))
        raise typer.Exit(1)
    except ValueError as e:
        log_error(str(e))
        raise typer.Exit(1)


@app.command()
def get(
    input: Path = typer.Argument(..., help="GeoJSON or CSV file with features"),
    filter: list[str] | None = typer.Option(
        None,
        "--filter",
        "-F",
        help="Filter as key=value (value parsed as JSON) or a bare key; repeatable",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Minimal output (errors only)"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output"),
) -> None:
    """
    Print the features matching a filter as a GeoJSON FeatureCollection.
    """
    _setup_logging_from_flags(verbose, quiet, debug)

    try:
        collection = load_feature_collection(input)
        parsed = _parse_filters(filter or [])
        log_debug(f"Parsed filter: {parsed!r}")
        cluster = get_cluster(collection, parsed)
        log_detail(f"Matched {len(cluster)} of {len(collection)} features")
    except FileNotFoundError as e:
        log_error(str(e))
        raise typer.Exit(1)
    except ValueError as e:
        log_error(str(e))
        raise typer.Exit(1)

    typer.echo(json.dumps(cluster.to_geojson(), indent=2, default=str))


@app.command()
def run(
    config: Path = typer.Option(
        ..., "--config", "-c", help="Path to configuration YAML file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Minimal output (errors only)"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output"),
) -> None:
    """
    Run a configured summary: load, optionally filter, summarize and save.
    """
    _setup_logging_from_flags(verbose, quiet, debug)

    if not config.exists():
        log_error(f"Config file not found: {config}")
        raise typer.Exit(1)

    try:
        params = load_geoclusters_params(config)
        params = dataclasses.replace(
            params, runtime=RuntimeParams(verbose=verbose, debug=debug)
        )
        log_progress(f"Summarizing {params.io.input_file} on '{params.clustering.property}'...")
        table = api_run(params)
    except FileNotFoundError as e:
        log_error(str(e))
        raise typer.Exit(1)
    except ValueError as e:
        log_error(str(e))
        raise typer.Exit(1)

    if not quiet:
        _print_summary(table, f"Clusters on '{params.clustering.property}'")
    log_success(f"Results saved to {params.io.results_dir}/")


@app.command()
def version() -> None:
    """
    Show the geoclusters version.
    """
    console.print(f"geoclusters version {__version__}")


def _setup_logging_from_flags(
    verbose: bool = False, quiet: bool = False, debug: bool = False
):
    """Setup logging based on CLI flags or environment variable."""
    level_from_flags: LogLevel | None = None
    if debug:
        level_from_flags = LogLevel.DEBUG
    elif verbose:
        level_from_flags = LogLevel.VERBOSE
    elif quiet:
        level_from_flags = LogLevel.QUIET

    if level_from_flags is not None:
        setup_logging(level_from_flags)
    else:
        # No flags set, let setup_logging handle it (will check env var)
        setup_logging()


if __name__ == "__main__":
    app()
