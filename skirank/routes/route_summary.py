from dataclasses import dataclass
from typing import Optional

from skirank.routes.rating_system import RatingSystem
from skirank.routes.route import Route
from skirank.routes.route_helpers import iter_hops, round_to
from skirank.routes.smoothing import smooth_elevation

@dataclass(frozen=True)
class RouteSummary:
    """Whole-route statistics shown next to the best descent"""
    start_lat: float
    start_lon: float
    max_ele: Optional[int]
    ascent_m: int
    distance_km: float

    def to_dict(self) -> dict:
        return {
            'start_lat': self.start_lat,
            'start_lon': self.start_lon,
            'max_ele': self.max_ele,
            'ascent_m': self.ascent_m,
            'distance_km': self.distance_km
        }

def summarize_route(route: Route, system: RatingSystem, smooth: bool = True) -> RouteSummary:
    """
    Distance skips glitch hops. Ascent sums positive steps of the (smoothed)
    elevation series; on smoothed tracks steps of ``summary_max_climb_step_m``
    or more are ignored.
    """
    points = route.points
    elevations = smooth_elevation(points, system.smooth_window) if smooth else route.elevations
    # Sparse catalog waypoints legitimately climb hundreds of meters per step
    max_step = system.summary_max_climb_step_m if smooth else float("inf")

    raw = [e for e in route.elevations if e is not None]
    max_ele = round_to(max(raw)) if raw else None

    distance_m = 0.0
    ascent = 0.0
    for i, hop in iter_hops(points, 0, len(points) - 1, system.glitch_hop_m):
        distance_m += hop
        prev_ele, ele = elevations[i - 1], elevations[i]
        if prev_ele is None or ele is None:
            continue
        delta = ele - prev_ele
        if 0 < delta < max_step:
            ascent += delta

    return RouteSummary(
        start_lat=points[0].lat,
        start_lon=points[0].lon,
        max_ele=max_ele,
        ascent_m=round_to(ascent),
        distance_km=round_to(distance_m / 1000, 1)
    )
