"""Tests for palette export."""

import json

import numpy as np
import pytest
from PIL import Image

from primary_color.core import Color, PaletteExporter

COLORS = [Color(1.0, 0.0, 0.0), Color(0.2, 0.4, 0.6)]


def test_to_dict() -> None:
    data = PaletteExporter.to_dict(COLORS)

    assert data[0] == {"hex": "#ff0000", "rgb": [1.0, 0.0, 0.0], "rgb8": [255, 0, 0], "brightness": 1.0}
    assert data[1]["hex"] == "#336699"


def test_to_dict_accepts_plain_tuples() -> None:
    assert PaletteExporter.to_dict([(0.0, 1.0, 0.0)])[0]["hex"] == "#00ff00"


def test_to_json(tmp_path) -> None:
    path = PaletteExporter.to_json(COLORS, tmp_path / "out" / "palette.json")

    payload = json.loads(path.read_text())
    assert [c["hex"] for c in payload["colors"]] == ["#ff0000", "#336699"]


def test_to_png_swatch_strip(tmp_path) -> None:
    path = PaletteExporter.to_png(COLORS, tmp_path / "palette.png", swatch_size=8)

    with Image.open(path) as img:
        assert img.size == (16, 8)
        pixels = np.array(img.convert("RGB"))

    assert tuple(pixels[0, 0]) == (255, 0, 0)
    assert tuple(pixels[7, 15]) == (51, 102, 153)


def test_swatch_requires_colors() -> None:
    with pytest.raises(ValueError):
        PaletteExporter.to_swatch([])
    with pytest.raises(ValueError):
        PaletteExporter.to_swatch(COLORS, swatch_size=0)
