"""
Color Histogram - 3D RGB accumulator grid

The RGB cube is split into R x R x R buckets (R = resolution). Each pixel
sample is routed to one bucket by truncating its normalized channels:

    ci    = floor(channel * (R - 1))
    index = ri + gi * R + bi * R^2

Every bucket keeps a hit count and running channel sums so the average
color of the samples it received can be recovered after the scan.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

import numpy as np

from .config import EngineConfig, DEFAULT_CONFIG
from .options import ColorOptions, DEFAULT_OPTIONS
from .utils import Color

logger = logging.getLogger(__name__)

BYTES_PER_PIXEL = 4

# Pixels converted to float samples at a time while building
CHUNK_PIXELS = 1 << 16

Buffer = Union[bytes, bytearray, memoryview, np.ndarray]


@dataclass
class Bucket:
    """One cell of the color histogram"""
    hit_count: int = 0
    red_sum: float = 0.0
    green_sum: float = 0.0
    blue_sum: float = 0.0
    index: int = -1

    # Averages are only meaningful when hit_count > 0

    @property
    def red_avg(self) -> float:
        return self.red_sum / self.hit_count

    @property
    def green_avg(self) -> float:
        return self.green_sum / self.hit_count

    @property
    def blue_avg(self) -> float:
        return self.blue_sum / self.hit_count

    @property
    def brightness(self) -> float:
        """Brightest averaged channel"""
        return max(self.red_avg, self.green_avg, self.blue_avg)

    @property
    def color(self) -> Color:
        return Color(self.red_avg, self.green_avg, self.blue_avg)

    @property
    def is_empty(self) -> bool:
        return self.hit_count == 0


def as_byte_array(buffer: Buffer) -> np.ndarray:
    """View a raw RGBA buffer as a flat uint8 array"""
    if isinstance(buffer, np.ndarray):
        return np.ascontiguousarray(buffer, dtype=np.uint8).reshape(-1)
    return np.frombuffer(buffer, dtype=np.uint8)


def sample_filter(rgb: np.ndarray, options: ColorOptions, config: EngineConfig) -> np.ndarray:
    """Keep the (N, 3) samples the bright/dark sampling options allow"""
    if ColorOptions.ONLY_BRIGHT_COLORS in options:
        return rgb[np.any(rgb >= config.bright_threshold, axis=1)]
    if ColorOptions.ONLY_DARK_COLORS in options:
        return rgb[np.all(rgb <= config.dark_threshold, axis=1)]
    return rgb


class ColorHistogram:
    """Dense R^3 grid of buckets stored as flat numpy arrays"""

    def __init__(self, resolution: int = DEFAULT_CONFIG.resolution):
        if resolution < 2:
            raise ValueError(f"Resolution must be at least 2, got {resolution}")
        self.resolution = resolution
        self.counts = np.zeros(resolution ** 3, dtype=np.int64)
        # Columns: red, green, blue
        self.sums = np.zeros((resolution ** 3, 3), dtype=np.float64)

    def __len__(self) -> int:
        return self.resolution ** 3

    @property
    def total_hits(self) -> int:
        return int(self.counts.sum())

    @property
    def occupied(self) -> int:
        """Number of buckets with at least one sample"""
        return int(np.count_nonzero(self.counts))

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def channel_index(self, value: float) -> int:
        """Bucket coordinate of a normalized channel value"""
        return int(value * (self.resolution - 1))

    def index(self, ri: int, gi: int, bi: int) -> int:
        """Flatten bucket coordinates"""
        r = self.resolution
        return ri + gi * r + bi * r * r

    def coordinates(self, index: int) -> Tuple[int, int, int]:
        """Inverse of index()"""
        r = self.resolution
        bi, rest = divmod(index, r * r)
        gi, ri = divmod(rest, r)
        return ri, gi, bi

    def color_index(self, red: float, green: float, blue: float) -> int:
        """Flat index of the bucket a normalized color falls into"""
        return self.index(
            self.channel_index(red),
            self.channel_index(green),
            self.channel_index(blue),
        )

    def grid(self) -> np.ndarray:
        """Hit counts as a 3D array addressed [ri, gi, bi]"""
        r = self.resolution
        return self.counts.reshape((r, r, r), order='F')

    # ------------------------------------------------------------------
    # Bucket access
    # ------------------------------------------------------------------

    def bucket(self, index: int) -> Bucket:
        """Copy of the bucket at a flat index"""
        red, green, blue = self.sums[index]
        return Bucket(
            hit_count=int(self.counts[index]),
            red_sum=float(red),
            green_sum=float(green),
            blue_sum=float(blue),
            index=int(index),
        )

    def buckets(self) -> Iterator[Bucket]:
        """Iterate over non-empty buckets in flat index order"""
        for index in np.flatnonzero(self.counts):
            yield self.bucket(index)

    # ------------------------------------------------------------------
    # Accumulation
    # ------------------------------------------------------------------

    def add(self, red: float, green: float, blue: float) -> None:
        """Route one normalized sample to its bucket"""
        index = self.color_index(red, green, blue)
        self.counts[index] += 1
        self.sums[index] += (red, green, blue)

    def add_samples(self, rgb: np.ndarray) -> None:
        """Route an (N, 3) array of normalized samples"""
        if len(rgb) == 0:
            return
        r = self.resolution
        coords = (rgb * (r - 1)).astype(np.intp)
        flat = coords[:, 0] + coords[:, 1] * r + coords[:, 2] * r * r

        size = r ** 3
        self.counts += np.bincount(flat, minlength=size)
        for channel in range(3):
            self.sums[:, channel] += np.bincount(flat, weights=rgb[:, channel], minlength=size)

    @classmethod
    def build(
        cls,
        buffer: Buffer,
        options: ColorOptions = DEFAULT_OPTIONS,
        config: EngineConfig = DEFAULT_CONFIG
    ) -> 'ColorHistogram':
        """
        Scan an RGBA8 buffer into a new histogram.

        Args:
            buffer: Row-major RGBA bytes, 4 per pixel (alpha is ignored)
            options: ONLY_BRIGHT_COLORS drops pixels whose channels are all
                below the bright threshold; otherwise ONLY_DARK_COLORS drops
                pixels with any channel above the dark threshold
            config: Grid resolution and thresholds

        Returns:
            Populated histogram
        """
        histogram = cls(config.resolution)
        data = as_byte_array(buffer)

        remainder = len(data) % BYTES_PER_PIXEL
        if remainder:
            logger.warning("Ignoring %d trailing bytes of incomplete pixel data", remainder)
            data = data[:len(data) - remainder]

        pixels = data.reshape(-1, BYTES_PER_PIXEL)
        kept = 0

        # Fixed-size chunks keep scratch memory independent of image size
        for start in range(0, len(pixels), CHUNK_PIXELS):
            rgb = pixels[start:start + CHUNK_PIXELS, :3] / 255.0
            rgb = sample_filter(rgb, options, config)
            histogram.add_samples(rgb)
            kept += len(rgb)

        logger.debug(
            "Histogram: %d/%d pixels kept, %d buckets occupied",
            kept, len(pixels), histogram.occupied
        )
        return histogram

    def peaks(self) -> List[Bucket]:
        """Local maxima of this histogram, most populated first"""
        from .peaks import find_peaks
        return find_peaks(self)
