"""Command line entry point: ranks local GPX tracks and topptur.guide tours by descent quality."""

from pathlib import Path
from typing import List, Optional

import typer

from skirank.iio.gpx_loader import GPX_DIR, LoadedTrack, LocalGPXLoader, TrackSourceError
from skirank.iio.results_writer import OUTPUT_FILE, ResultsWriteError, write_results
from skirank.iio.tour_catalog import CatalogError, CatalogTour, SearchArea, ToppturCatalog, select_tours
from skirank.routes.rating_system import RatingSystem
from skirank.routes.route_processor import RouteProcessor, ScoredResult
from skirank.ui.log_helpers import configure_logging, print_step
from skirank.ui.results_table import print_table

DEFAULT_TOP_N = 30

def _load_tracks(gpx_dir: Path, required: bool) -> List[LoadedTrack]:
    try:
        return LocalGPXLoader(gpx_dir).load_all()
    except TrackSourceError as e:
        if required:
            raise
        print_step("Core", f"{e}; continuing with catalog tours only", level="WARNING")
        return []

def _load_tours(catalog: ToppturCatalog, area: SearchArea, system: RatingSystem) -> List[CatalogTour]:
    try:
        return select_tours(catalog.fetch_raw_tours(), area, system)
    except CatalogError as e:
        print_step("Core", f"Failed to fetch topptur.guide: {e}", level="WARNING")
        return []

def run(gpx_only: bool = False,
        tours_only: bool = False,
        top_n: int = DEFAULT_TOP_N,
        gpx_dir: Path = GPX_DIR,
        out_path: Path = OUTPUT_FILE,
        system: Optional[RatingSystem] = None,
        area: Optional[SearchArea] = None,
        catalog: Optional[ToppturCatalog] = None) -> List[ScoredResult]:
    """Full pipeline. Raises on fatal errors; a failing catalog only degrades the result."""
    system = system or RatingSystem.create()
    errors = system.validate_config()
    if errors:
        raise ValueError("Invalid rating system: " + "; ".join(errors))

    tracks: List[LoadedTrack] = []
    tours: List[CatalogTour] = []
    if not tours_only:
        tracks = _load_tracks(gpx_dir, required=gpx_only)
    if not gpx_only:
        tours = _load_tours(catalog or ToppturCatalog(), area or SearchArea(), system)

    results = RouteProcessor(system).process(tracks, tours)

    print_table(results, top_n, system.min_drop_m)
    write_results(results, out_path)
    return results

app = typer.Typer(add_completion=False, help="Rank ski tours by their best continuous descent.")

@app.command()
def main(
    gpx_only: bool = typer.Option(False, "--gpx-only", help="Only analyze local GPX tracks"),
    tours_only: bool = typer.Option(False, "--tours-only", help="Only analyze topptur.guide tours"),
    top: int = typer.Option(DEFAULT_TOP_N, "--top", min=1, help="Number of rows to print"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rank routes by long, steep descents close to 30 degrees."""
    configure_logging(verbose)
    try:
        run(gpx_only=gpx_only, tours_only=tours_only, top_n=top)
    except (TrackSourceError, ResultsWriteError, ValueError) as e:
        print_step("Core", f"Error: {e}", level="ERROR")
        raise typer.Exit(1)
