"""
Primary Color - Dominant color extraction for still images
"""

from typing import Iterable, List

from .core import (
    Color, ColorOptions, ColorEngine, EngineConfig, ImageParser,
    NoColorFoundError, PaletteExporter, PresetManager,
    DEFAULT_OPTIONS, BRIGHT_OPTIONS, DARK_OPTIONS, DEFAULT_CONFIG,
    process_image, main_color,
)

__version__ = "0.1.0"
__all__ = [
    'Color',
    'ColorOptions',
    'ColorEngine',
    'EngineConfig',
    'ImageParser',
    'NoColorFoundError',
    'PaletteExporter',
    'PresetManager',
    'extract_colors',
    'extract_main_color',
    'extract_bright_colors',
    'extract_dark_colors',
]


def extract_colors(
    image,
    options: ColorOptions = DEFAULT_OPTIONS,
    avoid: Iterable = (),
    config: EngineConfig = DEFAULT_CONFIG
) -> List[Color]:
    """
    Extract the dominant colors of an image.

    Args:
        image: Path, Pillow image, numpy array or rendered RGBA8 bytes
        options: ColorOptions flags (default: bright colors only)
        avoid: Colors to keep out of the result ('#ffffff', (1, 1, 1), ...)
        config: Pipeline constants

    Returns:
        Colors ordered by significance (or brightness, if requested).
        Empty when the image cannot be read or nothing passes filtering.
    """
    return process_image(image, options, avoid, config)


def extract_main_color(image, config: EngineConfig = DEFAULT_CONFIG) -> Color:
    """
    Most significant bright color of an image.

    Raises:
        NoColorFoundError: if the image has no bright pixels
    """
    return main_color(image, config)


def extract_bright_colors(image, config: EngineConfig = DEFAULT_CONFIG) -> List[Color]:
    """Bright colors, brightest first"""
    return process_image(image, BRIGHT_OPTIONS, (), config)


def extract_dark_colors(image, config: EngineConfig = DEFAULT_CONFIG) -> List[Color]:
    """Dark colors, darkest first"""
    return process_image(image, DARK_OPTIONS, (), config)
