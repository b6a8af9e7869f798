#!/usr/bin/env python
"""
Primary Color CLI - Dominant color extraction for still images

Usage:
    primary-color <input_image> [options]
    python -m primary_color.main <input_image> [options]

Examples:
    primary-color photo.jpg                          # Dominant bright colors
    primary-color photo.jpg --main                   # Single main color
    primary-color photo.jpg --preset vivid           # Use a preset
    primary-color photo.jpg -O distinct -O no_white  # Pick option flags
    primary-color photo.jpg --avoid "#336699"        # Keep a color out
    primary-color photo.jpg -o palette.png           # Save a swatch strip
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for command line use"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # Pillow's plugin loader is noisy at DEBUG
    logging.getLogger("PIL").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="primary-color",
        description="Extract dominant colors from an image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Option Flags (-O/--option, repeatable):
  only_bright_colors   (bright)        - Sample only pixels with a channel >= 0.6
  only_dark_colors     (dark)          - Sample only pixels with all channels <= 0.4
  only_distinct_colors (distinct)      - Drop colors closer than 0.2 to a stronger one
  order_by_brightness  (by_brightness) - Brightest first
  order_by_darkness    (by_darkness)   - Darkest first
  avoid_white          (no_white)      - Drop colors near white
  avoid_black          (no_black)      - Drop colors near black

Examples:
  %(prog)s photo.jpg                         # Default: bright colors
  %(prog)s photo.jpg --main                  # Main color only
  %(prog)s photo.jpg --preset dark           # Dark colors, darkest first
  %(prog)s photo.jpg -O dark -O distinct     # Custom flags
  %(prog)s photo.jpg --avoid white --avoid 0.2,0.4,0.8
  %(prog)s photo.jpg --json                  # Machine readable output
  %(prog)s --list-presets                    # Show all presets
  %(prog)s --list-presets --tag palette      # Presets with a tag
        """
    )

    parser.add_argument(
        'input',
        type=str,
        nargs='?',  # Optional for --list-presets and --preset-info
        default=None,
        help='Input image (PNG, JPEG, GIF, ...)'
    )

    parser.add_argument(
        '-p', '--preset',
        type=str,
        default=None,
        metavar='NAME',
        help='Use a preset option combination (e.g., bright, dark, vivid)'
    )

    parser.add_argument(
        '-O', '--option',
        dest='options',
        action='append',
        default=[],
        metavar='FLAG',
        help='Enable an option flag (repeatable, see below)'
    )

    parser.add_argument(
        '-a', '--avoid',
        action='append',
        default=[],
        metavar='COLOR',
        help='Color to keep out of the result: name, #hex or R,G,B in 0-1 (repeatable)'
    )

    parser.add_argument(
        '--main',
        action='store_true',
        help='Only print the main color (default options)'
    )

    parser.add_argument(
        '-n', '--limit',
        type=int,
        default=None,
        help='Maximum number of colors to print'
    )

    parser.add_argument(
        '-c', '--config',
        type=str,
        default=None,
        metavar='FILE',
        help='YAML engine configuration (resolution, thresholds)'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print colors as JSON'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        metavar='PATH',
        help='Save colors to PATH (.png swatch strip or .json)'
    )

    parser.add_argument(
        '--swatch-size',
        type=int,
        default=32,
        help='Swatch size in pixels for PNG output (default: 32)'
    )

    parser.add_argument(
        '--list-presets',
        action='store_true',
        help='List all available presets and exit'
    )

    parser.add_argument(
        '--tag',
        type=str,
        default=None,
        help='With --list-presets, only show presets with this tag'
    )

    parser.add_argument(
        '--preset-info',
        type=str,
        default=None,
        metavar='NAME',
        help='Show detailed info about a preset and exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging'
    )

    return parser


def parse_avoid(values: Sequence[str]) -> List:
    """Turn 'R,G,B' arguments into float triples, leave other strings alone"""
    colors = []
    for value in values:
        parts = value.split(',')
        if len(parts) in (3, 4):
            try:
                colors.append(tuple(float(p) for p in parts))
                continue
            except ValueError:
                pass
        colors.append(value)
    return colors


def print_colors(colors) -> None:
    for i, color in enumerate(colors, 1):
        r, g, b = color
        print(f"  {i:>2}. {color.hex}  ({r:.3f}, {g:.3f}, {b:.3f})  brightness {color.brightness:.2f}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    from primary_color.core.presets import get_preset_manager, list_presets

    # Handle preset listing/info (doesn't require input file)
    if args.list_presets:
        manager = get_preset_manager()
        names = list_presets(args.tag)

        title = f" tagged '{args.tag}'" if args.tag else ""
        print(f"Available Extraction Presets{title}:\n")
        for name in names:
            preset = manager.get(name)
            source = "" if manager.is_builtin(name) else f" [user: {manager.source(name).name}]"
            print(f"  {name:<14} - {preset.description}{source}")

        print(f"\nTotal: {len(names)} presets")
        print(f"Tags: {', '.join(manager.list_tags())}")
        print("\nUsage: --preset <name>")
        print("Details: --preset-info <name>")
        return 0

    if args.preset_info:
        preset = get_preset_manager().get(args.preset_info)
        if not preset:
            print(f"Error: Preset '{args.preset_info}' not found")
            print("Use --list-presets to see available presets")
            return 1

        print(f"Preset: {preset.name}")
        print(f"Description: {preset.description}")
        print(f"Options: {', '.join(preset.options) or 'none'}")
        if preset.avoid:
            print(f"Avoid: {', '.join(str(c) for c in preset.avoid)}")
        if preset.limit:
            print(f"Limit: {preset.limit}")
        print(f"Tags: {', '.join(preset.tags)}")
        return 0

    if not args.input:
        print("Error: Input file is required")
        print("Usage: primary-color <input_image> [options]")
        print("       primary-color --list-presets")
        return 1

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}")
        return 1

    # Import here to avoid slow startup for --help
    from primary_color.core import (
        ColorEngine, EngineConfig, DEFAULT_CONFIG, DEFAULT_OPTIONS,
        NoColorFoundError, PaletteExporter, parse_options,
    )

    try:
        config = EngineConfig.from_yaml(args.config) if args.config else DEFAULT_CONFIG
        flags = parse_options(args.options)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    avoid = parse_avoid(args.avoid)
    limit = args.limit

    if args.preset:
        preset = get_preset_manager().get(args.preset)
        if not preset:
            print(f"Error: Preset '{args.preset}' not found")
            print("Use --list-presets to see available presets")
            return 1

        logger.info("Using preset: %s (%s)", preset.name, preset.description)
        flags |= preset.flags
        avoid = list(preset.avoid) + avoid
        if limit is None and preset.limit:
            limit = preset.limit
    elif not args.options:
        flags = DEFAULT_OPTIONS

    with ColorEngine(config) as engine:
        if args.main:
            try:
                colors = [engine.extract_main_color(input_path).result()]
            except NoColorFoundError as e:
                print(f"Error: {e}")
                return 1
        else:
            colors = engine.extract_colors(input_path, flags, avoid).result()

    if limit:
        colors = colors[:limit]

    if args.output:
        output = Path(args.output)
        if output.suffix.lower() == '.json':
            PaletteExporter.to_json(colors, output)
        elif colors:
            PaletteExporter.to_png(colors, output, args.swatch_size)
        else:
            print("Error: No colors to export")
            return 1
        logger.info("Saved: %s", output)

    if args.json:
        print(json.dumps({'colors': PaletteExporter.to_dict(colors)}, indent=2))
    elif colors:
        print(f"Colors in {input_path.name}:")
        print_colors(colors)
    else:
        print(f"No colors found in {input_path.name}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
