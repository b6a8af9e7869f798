"""
Image Parser - Renders images into the flat RGBA8 buffer the engine scans
Supports: file paths, Pillow images, numpy arrays and pre-rendered bytes
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, Image.Image, np.ndarray, bytes, bytearray, memoryview]


class ImageParser:
    """Turns the supported image sources into premultiplied RGBA bytes"""

    SUPPORTED_FORMATS = {'.png', '.gif', '.jpg', '.jpeg', '.bmp', '.webp', '.tif', '.tiff'}

    @classmethod
    def raw_data(cls, image: Optional[ImageSource]) -> Optional[np.ndarray]:
        """
        Render an image source into a flat uint8 RGBA buffer.

        Raw bytes are taken as already rendered. Arrays, Pillow images and
        files are converted to RGBA with premultiplied alpha, so fully
        transparent pixels read as black.

        Returns:
            Flat uint8 array (4 bytes per pixel), or None when the source
            cannot be decoded
        """
        if image is None:
            return None

        if isinstance(image, (bytes, bytearray, memoryview)):
            return np.frombuffer(image, dtype=np.uint8)

        try:
            if isinstance(image, (str, Path)):
                img = cls.open(image)
            elif isinstance(image, np.ndarray):
                img = cls.from_array(image)
            elif isinstance(image, Image.Image):
                img = image
            else:
                logger.warning("Unsupported image source: %s", type(image).__name__)
                return None

            return cls.render(img)
        except (OSError, ValueError) as e:
            logger.warning("Could not decode image: %s", e)
            return None

    @classmethod
    def open(cls, path: str | Path) -> Image.Image:
        """Open and fully load an image file"""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in cls.SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported format: {suffix}")

        with Image.open(path) as img:
            img.load()
            # Animated formats: only the first frame is used
            return img.copy()

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> Image.Image:
        """
        Create an RGBA Pillow image from an HxWx3 or HxWx4 array.

        Float arrays are read as 0-1 channels; integer arrays as 0-255.
        """
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError("Pixels must be HxWx3 or HxWx4 array")

        if np.issubdtype(pixels.dtype, np.floating):
            pixels = np.rint(np.clip(pixels, 0.0, 1.0) * 255.0).astype(np.uint8)
        elif pixels.dtype != np.uint8:
            if not np.issubdtype(pixels.dtype, np.integer):
                raise ValueError(f"Unsupported pixel dtype: {pixels.dtype}")
            pixels = np.clip(pixels, 0, 255).astype(np.uint8)

        # Ensure RGBA
        if pixels.shape[2] == 3:
            alpha = np.full((*pixels.shape[:2], 1), 255, dtype=np.uint8)
            pixels = np.concatenate([pixels, alpha], axis=2)

        return Image.fromarray(np.ascontiguousarray(pixels))

    @staticmethod
    def render(img: Image.Image) -> np.ndarray:
        """Draw an image into premultiplied RGBA bytes"""
        if img.mode != 'RGBA':
            img = img.convert('RGBA')
        premultiplied = img.convert('RGBa')
        return np.frombuffer(premultiplied.tobytes(), dtype=np.uint8)
