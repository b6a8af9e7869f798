"""
Post-Filter Chain - Thin out peak candidates

Applied in a fixed order:
1. Distinct filter  - greedy, keeps the first of any near-duplicate cluster
2. Avoid filters    - one pass per avoided color (white, black, then the
                      caller's colors)
"""

import logging
from typing import Iterable, List

from .config import EngineConfig, DEFAULT_CONFIG
from .histogram import Bucket
from .options import ColorOptions
from .utils import BLACK, WHITE, ColorLike, ColorUtils

logger = logging.getLogger(__name__)


def filter_distinct(candidates: List[Bucket], threshold: float) -> List[Bucket]:
    """Keep candidates at least `threshold` away from every earlier kept one"""
    kept: List[Bucket] = []
    for candidate in candidates:
        color = candidate.color
        if all(ColorUtils.distance(color, other.color) >= threshold for other in kept):
            kept.append(candidate)
    return kept


def filter_avoid(candidates: List[Bucket], avoid: ColorLike, distance: float) -> List[Bucket]:
    """
    Drop candidates closer than `distance` to one avoided color.

    A color with no extractable RGB components leaves the list untouched.
    """
    target = ColorUtils.parse(avoid)
    if target is None:
        logger.warning("Skipping avoid filter for unreadable color %r", avoid)
        return list(candidates)

    return [c for c in candidates if ColorUtils.distance(c.color, target) >= distance]


def avoid_targets(options: ColorOptions, avoid: Iterable[ColorLike] = ()) -> List[ColorLike]:
    """Colors to avoid, in the order their passes run"""
    targets: List[ColorLike] = []
    if ColorOptions.AVOID_WHITE in options:
        targets.append(WHITE)
    if ColorOptions.AVOID_BLACK in options:
        targets.append(BLACK)
    targets.extend(ColorUtils.as_color_list(avoid))
    return targets


def apply_filters(
    candidates: List[Bucket],
    options: ColorOptions,
    avoid: Iterable[ColorLike] = (),
    config: EngineConfig = DEFAULT_CONFIG
) -> List[Bucket]:
    """Run the enabled filters over a peak list"""
    result = list(candidates)

    if ColorOptions.ONLY_DISTINCT_COLORS in options:
        result = filter_distinct(result, config.distinct_threshold)
        logger.debug("Distinct filter kept %d of %d", len(result), len(candidates))

    for target in avoid_targets(options, avoid):
        before = len(result)
        result = filter_avoid(result, target, config.avoid_distance)
        logger.debug("Avoid filter %r removed %d", target, before - len(result))

    return result
