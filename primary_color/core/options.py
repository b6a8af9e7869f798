"""
Extraction Options - Combinable flags that steer the quantization pipeline

Each flag switches on one stage of the pipeline:
- ONLY_BRIGHT_COLORS / ONLY_DARK_COLORS  -> histogram sampling
- ONLY_DISTINCT_COLORS                   -> distinct filter
- AVOID_WHITE / AVOID_BLACK              -> avoid filters
- ORDER_BY_DARKNESS / ORDER_BY_BRIGHTNESS -> final ordering
"""

from enum import Flag, auto
from typing import Iterable, Union


class ColorOptions(Flag):
    """Option set for a single extraction request"""
    NONE = 0
    ONLY_BRIGHT_COLORS = auto()
    ONLY_DARK_COLORS = auto()
    ONLY_DISTINCT_COLORS = auto()
    ORDER_BY_BRIGHTNESS = auto()
    ORDER_BY_DARKNESS = auto()
    AVOID_WHITE = auto()
    AVOID_BLACK = auto()


DEFAULT_OPTIONS = ColorOptions.ONLY_BRIGHT_COLORS

BRIGHT_OPTIONS = ColorOptions.ONLY_BRIGHT_COLORS | ColorOptions.ORDER_BY_BRIGHTNESS
DARK_OPTIONS = ColorOptions.ONLY_DARK_COLORS | ColorOptions.ORDER_BY_DARKNESS

# Short names accepted on the command line and in preset files
OPTION_ALIASES = {
    'bright': ColorOptions.ONLY_BRIGHT_COLORS,
    'dark': ColorOptions.ONLY_DARK_COLORS,
    'distinct': ColorOptions.ONLY_DISTINCT_COLORS,
    'by_brightness': ColorOptions.ORDER_BY_BRIGHTNESS,
    'by_darkness': ColorOptions.ORDER_BY_DARKNESS,
    'no_white': ColorOptions.AVOID_WHITE,
    'no_black': ColorOptions.AVOID_BLACK,
}


def option_from_name(name: str) -> ColorOptions:
    """Resolve a single flag from its member name or alias (case/dash insensitive)"""
    key = name.strip().lower().replace('-', '_')
    if key in OPTION_ALIASES:
        return OPTION_ALIASES[key]

    member = ColorOptions.__members__.get(key.upper())
    if member is None or member is ColorOptions.NONE:
        available = sorted(
            [m.lower() for m in ColorOptions.__members__ if m != 'NONE'] + list(OPTION_ALIASES)
        )
        raise ValueError(f"Unknown option '{name}'. Available: {available}")
    return member


def parse_options(names: Union[str, Iterable[str], ColorOptions, None]) -> ColorOptions:
    """
    Build an option set from flag names.

    Accepts an existing ColorOptions value, a comma separated string,
    or any iterable of names. None gives an empty option set.
    """
    if names is None:
        return ColorOptions.NONE
    if isinstance(names, ColorOptions):
        return names
    if isinstance(names, str):
        names = [n for n in names.split(',') if n.strip()]

    options = ColorOptions.NONE
    for name in names:
        options |= option_from_name(name)
    return options


def option_names(options: ColorOptions) -> list:
    """List member names set in an option value, in declaration order"""
    return [
        name.lower()
        for name, member in ColorOptions.__members__.items()
        if member is not ColorOptions.NONE and member in options
    ]
