"""
Quantization Pipeline - Composes the engine stages

    raw bytes -> histogram -> peaks -> filtered peaks -> ordered peaks -> colors

Everything here is synchronous and free of shared state; the same input
always yields the same colors.
"""

import logging
from typing import Iterable, List, Optional

from .config import EngineConfig, DEFAULT_CONFIG
from .filters import apply_filters
from .histogram import Bucket, Buffer, ColorHistogram
from .options import ColorOptions, DEFAULT_OPTIONS
from .ordering import order_candidates
from .parser import ImageParser, ImageSource
from .peaks import find_peaks
from .utils import Color, ColorLike

logger = logging.getLogger(__name__)


def find_candidates(
    buffer: Buffer,
    options: ColorOptions = DEFAULT_OPTIONS,
    avoid: Iterable[ColorLike] = (),
    config: EngineConfig = DEFAULT_CONFIG
) -> List[Bucket]:
    """Run all stages on a rendered buffer and keep the surviving buckets"""
    histogram = ColorHistogram.build(buffer, options, config)
    candidates = find_peaks(histogram)
    candidates = apply_filters(candidates, options, avoid, config)
    return order_candidates(candidates, options)


def process_buffer(
    buffer: Buffer,
    options: ColorOptions = DEFAULT_OPTIONS,
    avoid: Iterable[ColorLike] = (),
    config: EngineConfig = DEFAULT_CONFIG
) -> List[Color]:
    """Extract ordered colors from a rendered RGBA8 buffer"""
    return [bucket.color for bucket in find_candidates(buffer, options, avoid, config)]


def process_image(
    image: Optional[ImageSource],
    options: ColorOptions = DEFAULT_OPTIONS,
    avoid: Iterable[ColorLike] = (),
    config: EngineConfig = DEFAULT_CONFIG
) -> List[Color]:
    """
    Extract ordered colors from any supported image source.

    Images that cannot be decoded produce an empty list.
    """
    buffer = ImageParser.raw_data(image)
    if buffer is None:
        logger.warning("No pixel data available, returning no colors")
        return []

    colors = process_buffer(buffer, options, avoid, config)
    logger.debug("Extracted %d colors", len(colors))
    return colors
