"""
Primary Color - Core quantization engine
"""

from .options import (
    ColorOptions, DEFAULT_OPTIONS, BRIGHT_OPTIONS, DARK_OPTIONS,
    parse_options, option_names,
)
from .config import EngineConfig, DEFAULT_CONFIG
from .utils import Color, ColorUtils, WHITE, BLACK
from .histogram import Bucket, ColorHistogram
from .peaks import find_peaks, is_local_maximum, NEIGHBOR_OFFSETS
from .filters import filter_distinct, filter_avoid, apply_filters
from .ordering import order_candidates
from .parser import ImageParser
from .pipeline import process_buffer, process_image, find_candidates
from .engine import ColorEngine, NoColorFoundError, main_color
from .presets import ExtractionPreset, PresetManager, get_preset, get_preset_manager, list_presets
from .exporter import PaletteExporter

__all__ = [
    # Options & configuration
    'ColorOptions', 'DEFAULT_OPTIONS', 'BRIGHT_OPTIONS', 'DARK_OPTIONS',
    'parse_options', 'option_names',
    'EngineConfig', 'DEFAULT_CONFIG',
    # Colors
    'Color', 'ColorUtils', 'WHITE', 'BLACK',
    # Pipeline stages
    'Bucket', 'ColorHistogram',
    'find_peaks', 'is_local_maximum', 'NEIGHBOR_OFFSETS',
    'filter_distinct', 'filter_avoid', 'apply_filters',
    'order_candidates',
    'ImageParser',
    'process_buffer', 'process_image', 'find_candidates',
    # Engine
    'ColorEngine', 'NoColorFoundError', 'main_color',
    # Presets & export
    'ExtractionPreset', 'PresetManager', 'get_preset', 'get_preset_manager', 'list_presets',
    'PaletteExporter',
]
