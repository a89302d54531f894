from dataclasses import dataclass
from typing import List, Optional, Sequence

from skirank.routes.rating_system import RatingSystem

@dataclass(frozen=True)
class DescentSegment:
    """Peak-to-trough stretch of a route, as indices into its elevation series"""
    peak_index: int
    trough_index: int
    drop: float

def find_descent_segments(elevations: Sequence[Optional[float]], system: RatingSystem) -> List[DescentSegment]:
    """
    Single forward scan for disjoint peak -> trough descents.

    A new high point restarts the leg, a lower point extends the trough and a
    re-ascent of more than ``min_climb_to_reset_m`` above the trough closes the
    current descent. Smaller re-ascents are treated as noise inside the leg.
    Null elevations are skipped.
    """
    segments: List[DescentSegment] = []

    start = next((i for i, ele in enumerate(elevations) if ele is not None), None)
    if start is None:
        return segments

    peak_i, peak_ele = start, elevations[start]
    trough_i, trough_ele = start, elevations[start]

    for i in range(start + 1, len(elevations)):
        ele = elevations[i]
        if ele is None:
            continue

        if ele > peak_ele:
            peak_i, peak_ele = i, ele
            trough_i, trough_ele = i, ele
        elif ele < trough_ele:
            trough_i, trough_ele = i, ele
        elif ele > trough_ele + system.min_climb_to_reset_m:
            # Climbing again: close the descent if it was big enough
            if peak_ele - trough_ele >= system.min_drop_m:
                segments.append(DescentSegment(peak_i, trough_i, peak_ele - trough_ele))
            peak_i, peak_ele = i, ele
            trough_i, trough_ele = i, ele

    if peak_ele - trough_ele >= system.min_drop_m:
        segments.append(DescentSegment(peak_i, trough_i, peak_ele - trough_ele))

    return segments
