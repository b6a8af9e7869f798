"""
Palette Exporter - Writes extracted colors to swatch images and JSON
"""

import json
from PIL import Image
import numpy as np
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .utils import Color


class PaletteExporter:
    """Exports color lists to various formats"""

    @staticmethod
    def to_dict(colors: Sequence[Color]) -> List[Dict[str, Any]]:
        """JSON-ready description of each color"""
        return [
            {
                'hex': color.hex,
                'rgb': [round(c, 6) for c in color],
                'rgb8': list(color.to_rgb8()),
                'brightness': round(color.brightness, 6),
            }
            for color in map(Color._make, colors)
        ]

    @classmethod
    def to_json(cls, colors: Sequence[Color], path: str | Path) -> Path:
        """Export colors to a JSON file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump({'colors': cls.to_dict(colors)}, f, indent=2)

        return path

    @classmethod
    def to_swatch(cls, colors: Sequence[Color], swatch_size: int = 32) -> Image.Image:
        """Render colors as a horizontal strip of square swatches"""
        if not colors:
            raise ValueError("No colors to export")
        if swatch_size < 1:
            raise ValueError(f"Swatch size must be positive, got {swatch_size}")

        strip = np.zeros((swatch_size, swatch_size * len(colors), 3), dtype=np.uint8)
        for i, color in enumerate(map(Color._make, colors)):
            x = i * swatch_size
            strip[:, x:x + swatch_size] = color.to_rgb8()

        return Image.fromarray(strip)

    @classmethod
    def to_png(cls, colors: Sequence[Color], path: str | Path, swatch_size: int = 32) -> Path:
        """Export colors to a PNG swatch strip"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        cls.to_swatch(colors, swatch_size).save(path, 'PNG')

        return path
