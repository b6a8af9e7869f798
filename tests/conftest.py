"""Shared fixtures for building synthetic pixel buffers."""

import numpy as np
import pytest

from primary_color.core import presets


def _make_buffer(*runs) -> bytes:
    """Concatenate runs of ((r, g, b), count) opaque pixels, channels 0-255."""
    data = bytearray()
    for (r, g, b), count in runs:
        data += bytes((r, g, b, 255)) * count
    return bytes(data)


@pytest.fixture
def make_buffer():
    return _make_buffer


@pytest.fixture
def noise_image() -> np.ndarray:
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(48, 48, 4), dtype=np.uint8)


@pytest.fixture
def clustered_image() -> np.ndarray:
    """Six color clusters with mild noise, opaque."""
    rng = np.random.default_rng(11)
    bases = np.array([
        (230, 40, 40), (40, 200, 60), (30, 60, 220),
        (240, 240, 235), (20, 20, 25), (200, 170, 40),
    ])
    labels = rng.integers(0, len(bases), size=(64, 64))
    noise = rng.integers(-12, 13, size=(64, 64, 3))
    rgb = np.clip(bases[labels] + noise, 0, 255).astype(np.uint8)
    alpha = np.full((64, 64, 1), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=2)


@pytest.fixture
def preset_manager(tmp_path, monkeypatch) -> presets.PresetManager:
    """Preset manager rooted in a temp dir, installed as the global one."""
    manager = presets.PresetManager(tmp_path / "presets")
    monkeypatch.setattr(presets, "_manager", manager)
    return manager
