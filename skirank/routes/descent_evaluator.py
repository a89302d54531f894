from dataclasses import dataclass
from typing import Optional, Sequence

from skirank.routes.descent_finder import DescentSegment
from skirank.routes.rating_system import RatingSystem
from skirank.routes.route import GeoPoint
from skirank.routes.route_helpers import gradient_deg, horizontal_distance, round_to
from skirank.routes.steep_analyzer import SteepSegment, find_longest_steep_segment

@dataclass(frozen=True)
class DescentAnalysis:
    vertical_drop: int
    horiz_dist_m: int
    avg_gradient_deg: float
    peak_ele: int
    trough_ele: int
    peak_index: int
    trough_index: int
    steep_segment: Optional[SteepSegment] = None

    def to_dict(self) -> dict:
        return {
            'vertical_drop': self.vertical_drop,
            'horiz_dist_m': self.horiz_dist_m,
            'avg_gradient_deg': self.avg_gradient_deg,
            'peak_ele': self.peak_ele,
            'trough_ele': self.trough_ele,
            'peak_index': self.peak_index,
            'trough_index': self.trough_index,
            'steep_segment': self.steep_segment.to_dict() if self.steep_segment else None
        }

def analyze_descent_segment(points: Sequence[GeoPoint],
                            elevations: Sequence[Optional[float]],
                            segment: DescentSegment,
                            system: RatingSystem) -> Optional[DescentAnalysis]:
    """Shape of one descent; None when its horizontal extent is too short to rate"""
    peak_i, trough_i = segment.peak_index, segment.trough_index

    horiz_dist_m = horizontal_distance(points, peak_i, trough_i, system.glitch_hop_m)
    if horiz_dist_m < system.min_horiz_dist_m:
        return None

    peak_ele = elevations[peak_i]
    trough_ele = elevations[trough_i]
    vertical_drop = peak_ele - trough_ele

    return DescentAnalysis(
        vertical_drop=round_to(vertical_drop),
        horiz_dist_m=round_to(horiz_dist_m),
        avg_gradient_deg=round_to(gradient_deg(vertical_drop, horiz_dist_m), 1),
        peak_ele=round_to(peak_ele),
        trough_ele=round_to(trough_ele),
        peak_index=peak_i,
        trough_index=trough_i,
        steep_segment=find_longest_steep_segment(points, elevations, peak_i, trough_i, system)
    )
