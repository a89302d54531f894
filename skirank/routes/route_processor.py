# route_processor.py
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from skirank.iio.gpx_loader import LoadedTrack
from skirank.iio.tour_catalog import CatalogTour
from skirank.routes.descent_evaluator import DescentAnalysis, analyze_descent_segment
from skirank.routes.descent_finder import DescentSegment, find_descent_segments
from skirank.routes.rating_system import RatingSystem
from skirank.routes.route import Route
from skirank.routes.route_summary import RouteSummary, summarize_route
from skirank.routes.scoring import descent_score
from skirank.routes.smoothing import smooth_elevation
from skirank.ui.log_helpers import print_step

class DescentSource(Enum):
    GPX = "gpx"
    TOPPTUR = "topptur"

@dataclass(frozen=True)
class Provenance:
    """Where a route came from; only the fields of its source are set"""
    filename: Optional[str] = None
    date: Optional[str] = None
    tour_id: Optional[Any] = None
    place: Optional[str] = None
    ates: Optional[Any] = None
    dist_from_reference_km: Optional[float] = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

@dataclass(frozen=True)
class ScoredResult:
    source: DescentSource
    route_name: str
    descent: DescentAnalysis
    score: float
    provenance: Provenance
    summary: Optional[RouteSummary] = None

    def to_dict(self) -> dict:
        data = {
            'source': self.source.value,
            'name': self.route_name,
            **self.provenance.to_dict(),
            'descent': self.descent.to_dict(),
            'score': self.score
        }
        if self.summary:
            data['summary'] = self.summary.to_dict()
        return data

def best_descent(route: Route,
                 elevations: Sequence[Optional[float]],
                 segments: Iterable[DescentSegment],
                 system: RatingSystem) -> Optional[Tuple[DescentAnalysis, float]]:
    """Highest-scoring analysis among the segments; the first one wins a tie"""
    best: Optional[Tuple[DescentAnalysis, float]] = None
    for seg in segments:
        analysis = analyze_descent_segment(route.points, elevations, seg, system)
        if analysis is None:
            print_step("RouteProcessor", f"{route.name}: descent {seg.peak_index}-{seg.trough_index} too short, skipped", level="DEBUG")
            continue
        score = descent_score(analysis, system)
        if best is None or score > best[1]:
            best = (analysis, score)
    return best

def rank_results(results: Iterable[ScoredResult]) -> List[ScoredResult]:
    """Best first; sorted() is stable so equal scores keep input order"""
    return sorted(results, key=lambda r: r.score, reverse=True)

class RouteProcessor:
    def __init__(self, system: Optional[RatingSystem] = None):
        self.system = system or RatingSystem.create()

    def evaluate_track(self, track: LoadedTrack) -> Optional[ScoredResult]:
        """Locally recorded track: dense and noisy, so smoothed before segmentation"""
        route = track.route
        if len(route) < self.system.min_track_points:
            print_step("RouteProcessor", f"{route.name}: only {len(route)} points, skipped", level="DEBUG")
            return None

        smooth_ele = smooth_elevation(route.points, self.system.smooth_window)
        segments = find_descent_segments(smooth_ele, self.system)
        best = best_descent(route, smooth_ele, segments, self.system)
        if best is None:
            return None

        analysis, score = best
        return ScoredResult(
            source=DescentSource.GPX,
            route_name=route.name,
            descent=analysis,
            score=score,
            provenance=Provenance(filename=track.filename, date=track.date),
            summary=summarize_route(route, self.system)
        )

    def evaluate_tour(self, tour: CatalogTour) -> Optional[ScoredResult]:
        """
        Catalog tour: sparse waypoints, analyzed unsmoothed. Tours are usually
        published trailhead-to-summit, so when the forward direction holds no
        descent at all the route is reversed and analyzed once more.
        """
        route = tour.route
        if len(route) < self.system.min_catalog_points:
            print_step("RouteProcessor", f"{route.name}: only {len(route)} waypoints, skipped", level="DEBUG")
            return None

        segments = find_descent_segments(route.elevations, self.system)
        if not segments:
            # TODO: also try the reverse when forward finds only a weak descent
            route = route.reversed()
            segments = find_descent_segments(route.elevations, self.system)
            print_step("RouteProcessor", f"{route.name}: no forward descent, analyzing reversed ({len(segments)} found)", level="DEBUG")

        best = best_descent(route, route.elevations, segments, self.system)
        if best is None:
            return None

        analysis, score = best
        return ScoredResult(
            source=DescentSource.TOPPTUR,
            route_name=route.name,
            descent=analysis,
            score=score,
            provenance=Provenance(tour_id=tour.tour_id,
                                  place=tour.place,
                                  ates=tour.ates,
                                  dist_from_reference_km=tour.dist_from_reference_km),
            summary=summarize_route(tour.route, self.system, smooth=False)
        )

    def process_tracks(self, tracks: Iterable[LoadedTrack]) -> List[ScoredResult]:
        results = [r for r in (self.evaluate_track(t) for t in tracks) if r is not None]
        print_step("RouteProcessor", f"{len(results)} tracks with significant descents")
        return results

    def process_tours(self, tours: Iterable[CatalogTour]) -> List[ScoredResult]:
        results = [r for r in (self.evaluate_tour(t) for t in tours) if r is not None]
        print_step("RouteProcessor", f"Analyzed {len(results)} tours with significant descents")
        return results

    def process(self, tracks: Iterable[LoadedTrack], tours: Iterable[CatalogTour]) -> List[ScoredResult]:
        """Scores every route of both sources and ranks them together"""
        return rank_results(self.process_tracks(tracks) + self.process_tours(tours))
