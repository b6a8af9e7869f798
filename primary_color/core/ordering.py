"""
Candidate ordering by brightness
"""

from typing import List

from .histogram import Bucket
from .options import ColorOptions


def order_candidates(candidates: List[Bucket], options: ColorOptions) -> List[Bucket]:
    """
    Sort candidates by brightness when requested.

    Darkness ordering runs first and brightness ordering second, so with
    both flags set the list ends up brightest first. Both sorts are stable.
    """
    result = list(candidates)
    if ColorOptions.ORDER_BY_DARKNESS in options:
        result.sort(key=lambda bucket: bucket.brightness)
    if ColorOptions.ORDER_BY_BRIGHTNESS in options:
        result.sort(key=lambda bucket: bucket.brightness, reverse=True)
    return result
