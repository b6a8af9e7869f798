"""
Peak Extraction - Find locally dominant buckets in a color histogram

A bucket is a peak when none of its 26 grid neighbours holds strictly more
samples. Neighbours outside the grid are skipped rather than padded, so
buckets on the faces of the RGB cube are compared against fewer cells.
"""

import logging
from itertools import product
from typing import List, Tuple

import numpy as np

from .histogram import Bucket, ColorHistogram

logger = logging.getLogger(__name__)

NEIGHBOR_OFFSETS: List[Tuple[int, int, int]] = [
    offset for offset in product((-1, 0, 1), repeat=3) if offset != (0, 0, 0)
]


def _window(offset: int, size: int) -> Tuple[slice, slice]:
    """Slices of the cells that have an in-bounds neighbour at offset, and of those neighbours"""
    if offset < 0:
        return slice(1, size), slice(0, size - 1)
    if offset > 0:
        return slice(0, size - 1), slice(1, size)
    return slice(0, size), slice(0, size)


def peak_mask(histogram: ColorHistogram) -> np.ndarray:
    """Boolean [ri, gi, bi] array marking local maxima"""
    grid = histogram.grid()
    size = histogram.resolution
    mask = grid > 0

    for dr, dg, db in NEIGHBOR_OFFSETS:
        (cr, nr), (cg, ng), (cb, nb) = _window(dr, size), _window(dg, size), _window(db, size)
        mask[cr, cg, cb] &= ~(grid[nr, ng, nb] > grid[cr, cg, cb])

    return mask


def is_local_maximum(histogram: ColorHistogram, ri: int, gi: int, bi: int) -> bool:
    """Check a single bucket against its in-bounds neighbours"""
    size = histogram.resolution
    count = histogram.counts[histogram.index(ri, gi, bi)]
    if count == 0:
        return False

    for dr, dg, db in NEIGHBOR_OFFSETS:
        r, g, b = ri + dr, gi + dg, bi + db
        if not (0 <= r < size and 0 <= g < size and 0 <= b < size):
            continue
        if histogram.counts[histogram.index(r, g, b)] > count:
            return False
    return True


def find_peaks(histogram: ColorHistogram) -> List[Bucket]:
    """
    Extract the local maxima of a histogram.

    Returns:
        Copies of the peak buckets sorted by hit count, most populated
        first. Ties come out in reverse grid scan order (the scan runs
        red outermost, blue innermost).
    """
    mask = peak_mask(histogram)

    # argwhere walks [ri, gi, bi] in C order: red outermost
    peaks = [
        histogram.bucket(histogram.index(int(ri), int(gi), int(bi)))
        for ri, gi, bi in np.argwhere(mask)
    ]
    peaks.sort(key=lambda bucket: bucket.hit_count)
    peaks.reverse()

    logger.debug("Found %d peaks in %d occupied buckets", len(peaks), histogram.occupied)
    return peaks
