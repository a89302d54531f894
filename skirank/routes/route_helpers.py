import math
from typing import Iterator, Optional, Sequence, Tuple

from skirank.routes.route import GeoPoint

DEGREES_PER_RADIAN = 180 / math.pi

def iter_hops(points: Sequence[GeoPoint], start: int, end: int, glitch_hop_m: float) -> Iterator[Tuple[int, float]]:
    """
    Yields (i, distance) for every hop points[i-1] -> points[i] with start < i <= end.

    Hops longer than ``glitch_hop_m`` are GPS dropouts and are left out.
    """
    for i in range(start + 1, end + 1):
        hop = points[i - 1].distance_to(points[i])
        if hop > glitch_hop_m:
            continue
        yield i, hop

def horizontal_distance(points: Sequence[GeoPoint], start: int, end: int, glitch_hop_m: float) -> float:
    return sum(hop for _, hop in iter_hops(points, start, end, glitch_hop_m))

def gradient_deg(drop: float, distance: float) -> float:
    return math.atan(drop / distance) * DEGREES_PER_RADIAN

def round_to(value: Optional[float], digits: int = 0):
    """Half-up rounding; whole-meter values come back as int."""
    if value is None:
        return None
    scale = 10 ** digits
    rounded = math.floor(value * scale + 0.5) / scale
    return int(rounded) if digits == 0 else rounded
