from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import math

import numpy as np

from skirank.routes.rating_system import RatingSystem
from skirank.routes.route import GeoPoint
from skirank.routes.route_helpers import DEGREES_PER_RADIAN, gradient_deg, iter_hops, round_to

@dataclass(frozen=True)
class Chunk:
    """Stretch of roughly ``chunk_dist_m`` horizontal distance inside a descent"""
    start_index: int
    end_index: int
    dist: float
    drop: float
    gradient_deg: float

    def in_band(self, min_deg: float, max_deg: float) -> bool:
        return min_deg <= self.gradient_deg <= max_deg

@dataclass(frozen=True)
class SteepSegment:
    start_index: int
    end_index: int
    vertical_drop: int
    horiz_dist_m: int
    avg_gradient_deg: float
    start_ele: int
    end_ele: int

    def to_dict(self) -> dict:
        return {
            'start_index': self.start_index,
            'end_index': self.end_index,
            'vertical_drop': self.vertical_drop,
            'horiz_dist_m': self.horiz_dist_m,
            'avg_gradient_deg': self.avg_gradient_deg,
            'start_ele': self.start_ele,
            'end_ele': self.end_ele
        }

def build_chunks(points: Sequence[GeoPoint],
                 elevations: Sequence[Optional[float]],
                 peak_index: int,
                 trough_index: int,
                 system: RatingSystem) -> List[Chunk]:
    """
    Cuts [peak_index, trough_index] into consecutive chunks of at least
    ``chunk_dist_m`` horizontal distance. Only net downhill counts toward a
    chunk's gradient. Distance left over after the last full chunk is dropped.
    """
    chunks: List[Chunk] = []
    chunk_start = peak_index
    chunk_dist = 0.0

    for i, hop in iter_hops(points, peak_index, trough_index, system.glitch_hop_m):
        chunk_dist += hop
        if chunk_dist < system.chunk_dist_m:
            continue

        start_ele = elevations[chunk_start]
        end_ele = elevations[i]
        if start_ele is not None and end_ele is not None and chunk_dist > 0:
            drop = start_ele - end_ele
            grad = math.atan2(max(0.0, drop), chunk_dist) * DEGREES_PER_RADIAN
            chunks.append(Chunk(chunk_start, i, chunk_dist, drop, grad))

        chunk_start = i
        chunk_dist = 0.0

    return chunks

def longest_steep_run(chunks: Sequence[Chunk], min_deg: float, max_deg: float) -> Tuple[int, int]:
    """
    Returns (start, length) of the longest run of consecutive in-band chunks.
    Runs are compared by chunk count only; the earliest wins a tie.
    Length 0 means no chunk is in band.
    """
    best_start, best_len = 0, 0
    cur_start, cur_len = 0, 0

    for c, chunk in enumerate(chunks):
        if chunk.in_band(min_deg, max_deg):
            if cur_len == 0:
                cur_start = c
            cur_len += 1
            if cur_len > best_len:
                best_start, best_len = cur_start, cur_len
        else:
            cur_len = 0

    return best_start, best_len

def find_longest_steep_segment(points: Sequence[GeoPoint],
                               elevations: Sequence[Optional[float]],
                               peak_index: int,
                               trough_index: int,
                               system: RatingSystem) -> Optional[SteepSegment]:
    chunks = build_chunks(points, elevations, peak_index, trough_index, system)
    start, length = longest_steep_run(chunks, system.steep_min_deg, system.steep_max_deg)
    if length == 0:
        return None

    run = chunks[start:start + length]
    total_dist = float(np.sum([c.dist for c in run]))
    total_drop = float(np.sum([c.drop for c in run]))

    return SteepSegment(
        start_index=run[0].start_index,
        end_index=run[-1].end_index,
        vertical_drop=round_to(total_drop),
        horiz_dist_m=round_to(total_dist),
        avg_gradient_deg=round_to(gradient_deg(total_drop, total_dist), 1),
        start_ele=round_to(elevations[run[0].start_index]),
        end_ele=round_to(elevations[run[-1].end_index])
    )
