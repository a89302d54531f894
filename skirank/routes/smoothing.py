from typing import List, Optional, Sequence

import numpy as np
from scipy.ndimage import convolve1d

from skirank.routes.route import GeoPoint

def smooth_elevation(points: Sequence[GeoPoint], window: int) -> List[Optional[float]]:
    """
    Edge-truncated moving average of elevation.

    Each output sample is the unweighted mean of the non-null elevations within
    ``window`` samples on either side; the window shrinks at the route ends.
    Samples whose whole window lacks elevation come out as None.
    """
    if not points:
        return []

    raw = np.array([np.nan if p.elevation is None else p.elevation for p in points], dtype=float)
    mask = ~np.isnan(raw)
    if not mask.any():
        return [None] * len(points)

    # Averaging offsets from the first known elevation keeps a flat series exact
    base = float(raw[mask][0])
    values = np.where(mask, raw - base, 0.0)

    kernel = np.ones(2 * window + 1)
    sums = convolve1d(values, kernel, mode='constant', cval=0.0)
    counts = convolve1d(mask.astype(float), kernel, mode='constant', cval=0.0)

    return [base + float(s / c) if c > 0 else None for s, c in zip(sums, counts)]
