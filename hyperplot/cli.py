"""HyperPlot matching CLI."""

import json
import logging
from pathlib import Path

import click

from hyperplot.catalog.store import CatalogLoadError, CatalogStore
from hyperplot.config import ASSUME_SQM_FOR_UNKNOWN, CATALOG_PATH, LAST_SEEN_PATH
from hyperplot.matching.engine import match_parcels
from hyperplot.parse.engine import parse_parcels
from hyperplot.parse.parsers.parse_form import build_parcel_from_form, can_quick_search
from hyperplot.plots.store import LastSeenLog

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def _load_catalog(catalog_path):
    store = CatalogStore(Path(catalog_path) if catalog_path else CATALOG_PATH)
    if not store.exists():
        click.echo(f"Error: no catalog at {store.path}", err=True)
        raise SystemExit(1)
    try:
        return store.plots
    except CatalogLoadError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


def _echo_results(results, as_json: bool, limit: int):
    shown = results[:limit] if limit else results
    if as_json:
        click.echo(json.dumps([r.to_dict() for r in shown], indent=2, ensure_ascii=False))
        return

    if not shown:
        click.echo("No matching plots.")
        return

    click.echo(f"{'Plot':<14} {'Conf':>4}  {'Area':>10} {'Dev%':>6}  {'GFA':>10} {'Dev%':>6}  Location")
    click.echo("-" * 78)
    for r in shown:
        click.echo(
            f"{r.matched_plot_id:<14} {r.confidence_score:>4}  "
            f"{r.matched_plot_area:>10,.0f} {r.area_deviation:>6.2f}  "
            f"{r.matched_gfa:>10,.0f} {r.gfa_deviation:>6.2f}  {r.matched_location}"
        )
    if limit and len(results) > limit:
        click.echo(f"... {len(results) - limit} more")


@click.group()
def main():
    """HyperPlot - match parcel descriptions against the plot catalog."""


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--catalog", "catalog_path", default=None, type=click.Path(dir_okay=False), help="Catalog JSON (default: data/catalog.json).")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON.")
@click.option("--limit", type=int, default=0, help="Show at most N results.")
@click.option("--assume-sqm", is_flag=True, default=ASSUME_SQM_FOR_UNKNOWN, help="Read values without a unit as sqm.")
def match(input_file: str, catalog_path: str, as_json: bool, limit: int, assume_sqm: bool):
    """Parse INPUT_FILE (structured or free-form) and match it against the catalog."""
    content = Path(input_file).read_text(encoding="utf-8")
    parcels, incomplete = parse_parcels(content, assume_sqm=assume_sqm)
    if not parcels:
        click.echo("No valid parcels found in the input.", err=True)
        raise SystemExit(1)

    if incomplete and not as_json:
        click.echo(f"{incomplete} parcel(s) missing both plot area and GFA - excluded.")

    plots = _load_catalog(catalog_path)
    results = match_parcels(parcels, plots)
    if not as_json:
        click.echo(f"Parsed {len(parcels)} parcel(s), {len(plots):,} plots in catalog.\n")
    _echo_results(results, as_json, limit)


@main.command()
@click.option("--area", "area_name", required=True, help="Area / community name.")
@click.option("--plot-area", type=float, default=None, help="Plot area.")
@click.option("--plot-unit", type=click.Choice(["sqm", "sqft"]), default="sqm")
@click.option("--gfa", type=float, default=None, help="Gross floor area.")
@click.option("--gfa-unit", type=click.Choice(["sqm", "sqft"]), default="sqm")
@click.option("--zoning", default=None, help="Zoning / use label.")
@click.option("--floors", type=int, default=None, help="Number of floors.")
@click.option("--catalog", "catalog_path", default=None, type=click.Path(dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON.")
@click.option("--limit", type=int, default=0, help="Show at most N results.")
def quick(area_name, plot_area, plot_unit, gfa, gfa_unit, zoning, floors, catalog_path, as_json, limit):
    """Quick search from discrete values instead of a text file."""
    parcel = build_parcel_from_form(
        area_name,
        plot_area=plot_area,
        plot_area_unit=plot_unit,
        gfa=gfa,
        gfa_unit=gfa_unit,
        zoning=zoning,
        floors=floors,
    )
    if not can_quick_search(parcel):
        click.echo("Error: give an area name and a positive --plot-area or --gfa.", err=True)
        raise SystemExit(1)

    results = match_parcels([parcel], _load_catalog(catalog_path))
    _echo_results(results, as_json, limit)


@main.command()
@click.option("--catalog", "catalog_path", default=None, type=click.Path(dir_okay=False))
def catalog(catalog_path: str):
    """Show plot catalog stats."""
    store = CatalogStore(Path(catalog_path) if catalog_path else CATALOG_PATH)
    if not store.exists():
        click.echo(f"No catalog at {store.path}")
        return
    try:
        stats = store.stats()
    except CatalogLoadError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"Catalog:        {stats['path']}")
    click.echo(f"Source plots:   {stats['plots']:,}")
    click.echo(f"Manual entries: {stats['manual']:,}")
    click.echo(f"Total:          {stats['total']:,}")


@main.command()
@click.option("--clear", is_flag=True, help="Forget all recently viewed plots.")
def seen(clear: bool):
    """List recently viewed plots."""
    log = LastSeenLog(LAST_SEEN_PATH)
    if clear:
        log.clear()
        click.echo("Last seen cleared.")
        return

    entries = log.entries()
    if not entries:
        click.echo("No recently viewed plots.")
        return
    for e in entries:
        click.echo(f"{e.get('timestamp', ''):<20} {e.get('plot_id', ''):<14} {e.get('location', '')}")


@main.command()
@click.option("--port", default=8099, help="Port to run on.")
def web(port: int):
    """Launch the matching API."""
    import uvicorn

    click.echo(f"Starting HyperPlot API at http://localhost:{port}")
    click.echo("Press Ctrl+C to stop.\n")
    uvicorn.run("hyperplot.web.app:app", host="127.0.0.1", port=port, log_level="warning")


if __name__ == "__main__":
    main()
