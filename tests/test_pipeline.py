"""End-to-end tests for the blocking extraction functions."""

import itertools

import numpy as np
import pytest
from PIL import Image

import primary_color
from primary_color import ColorOptions, EngineConfig, NoColorFoundError
from primary_color.core import (
    ColorHistogram, ColorUtils, ImageParser, find_candidates, find_peaks, process_buffer,
)


def test_single_color_image_defaults(make_buffer) -> None:
    colors = primary_color.extract_colors(make_buffer(((204, 204, 204), 100)))

    assert len(colors) == 1
    assert colors[0] == pytest.approx((0.8, 0.8, 0.8))


@pytest.mark.parametrize("red_count, blue_count", [(60, 40), (35, 65)])
def test_two_separated_colors_distinct(make_buffer, red_count, blue_count) -> None:
    buffer = make_buffer(((255, 0, 0), red_count), ((0, 0, 255), blue_count))

    colors = primary_color.extract_colors(buffer, ColorOptions.ONLY_DISTINCT_COLORS)

    red, blue = (1.0, 0.0, 0.0), (0.0, 0.0, 1.0)
    expected = [red, blue] if red_count > blue_count else [blue, red]
    assert colors == [pytest.approx(c) for c in expected]


def test_main_color_of_black_image_fails(make_buffer) -> None:
    with pytest.raises(NoColorFoundError):
        primary_color.extract_main_color(make_buffer(((0, 0, 0), 64)))


def test_main_color_is_most_common(make_buffer) -> None:
    buffer = make_buffer(((255, 0, 0), 10), ((0, 255, 0), 30), ((0, 0, 255), 20))

    assert primary_color.extract_main_color(buffer) == pytest.approx((0.0, 1.0, 0.0))


def test_main_color_tie_goes_to_last_scanned_bucket(make_buffer) -> None:
    # blue sits at grid (0, 0, 29), red at (29, 0, 0)
    buffer = make_buffer(((0, 0, 255), 5), ((255, 0, 0), 5))

    assert primary_color.extract_main_color(buffer) == pytest.approx((1.0, 0.0, 0.0))


def test_invalid_images_give_no_colors(tmp_path) -> None:
    bogus = tmp_path / "broken.png"
    bogus.write_text("not an image")

    assert primary_color.extract_colors(None) == []
    assert primary_color.extract_colors(bogus) == []
    assert primary_color.extract_colors(tmp_path / "missing.png") == []
    assert primary_color.extract_colors(object()) == []
    assert primary_color.extract_colors(b"") == []


def test_output_never_exceeds_peaks(clustered_image) -> None:
    options = ColorOptions.ONLY_DISTINCT_COLORS | ColorOptions.AVOID_BLACK
    histogram = ColorHistogram.build(clustered_image, options)

    colors = process_buffer(clustered_image, options)

    assert len(colors) <= len(find_peaks(histogram)) <= 30 ** 3


def test_idempotent(clustered_image) -> None:
    options = ColorOptions.ONLY_DISTINCT_COLORS | ColorOptions.ORDER_BY_BRIGHTNESS

    first = primary_color.extract_colors(clustered_image, options, ["#ff0000"])
    second = primary_color.extract_colors(clustered_image, options, ["#ff0000"])

    assert first == second


def test_avoid_colors_keep_their_distance(clustered_image) -> None:
    avoid = [(0.9, 0.15, 0.15), "#1e3cdc"]
    options = ColorOptions.NONE | ColorOptions.AVOID_WHITE

    colors = primary_color.extract_colors(clustered_image, options, avoid)

    assert colors
    targets = [ColorUtils.parse(c) for c in avoid] + [(1.0, 1.0, 1.0)]
    for color, target in itertools.product(colors, targets):
        assert ColorUtils.distance(color, target) >= 0.5


def test_distinct_output_is_pairwise_separated(noise_image) -> None:
    colors = primary_color.extract_colors(noise_image, ColorOptions.ONLY_DISTINCT_COLORS)

    for a, b in itertools.combinations(colors, 2):
        assert ColorUtils.distance(a, b) >= 0.2 - 1e-12


def test_bright_colors_are_ordered(clustered_image) -> None:
    colors = primary_color.extract_bright_colors(clustered_image)

    brightness = [c.brightness for c in colors]
    assert brightness == sorted(brightness, reverse=True)
    assert all(b >= 0.6 for b in brightness)


def test_dark_colors_are_ordered(clustered_image) -> None:
    colors = primary_color.extract_dark_colors(clustered_image)

    assert colors
    brightness = [c.brightness for c in colors]
    assert brightness == sorted(brightness)
    assert all(b <= 0.4 for b in brightness)


def test_default_ordering_follows_hit_count(clustered_image) -> None:
    candidates = find_candidates(clustered_image, ColorOptions.NONE)

    counts = [c.hit_count for c in candidates]
    assert counts == sorted(counts, reverse=True)


def test_image_sources_agree(tmp_path, clustered_image) -> None:
    path = tmp_path / "clusters.png"
    Image.fromarray(clustered_image).save(path)

    from_path = primary_color.extract_colors(path)
    from_pil = primary_color.extract_colors(Image.open(path))
    from_array = primary_color.extract_colors(clustered_image)
    from_rgb = primary_color.extract_colors(clustered_image[:, :, :3])

    assert from_path == from_pil == from_array == from_rgb


def test_float_arrays_are_read_as_unit_range(clustered_image) -> None:
    as_float = clustered_image.astype(np.float64) / 255.0

    np.testing.assert_array_equal(ImageParser.raw_data(as_float), ImageParser.raw_data(clustered_image))
    assert primary_color.extract_colors(as_float) == primary_color.extract_colors(clustered_image)


def test_non_numeric_arrays_give_no_colors() -> None:
    assert primary_color.extract_colors(np.zeros((2, 2, 3), dtype=complex)) == []


def test_transparent_pixels_render_black() -> None:
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels[:2] = (255, 0, 0, 0)
    pixels[2:] = (0, 255, 0, 255)

    colors = primary_color.extract_colors(pixels)

    assert colors == [pytest.approx((0.0, 1.0, 0.0))]


def test_custom_config(make_buffer) -> None:
    buffer = make_buffer(((255, 0, 0), 10), ((230, 20, 0), 5))
    coarse = EngineConfig(resolution=4)

    default = primary_color.extract_colors(buffer, ColorOptions.NONE)
    merged = primary_color.extract_colors(buffer, ColorOptions.NONE, config=coarse)

    assert len(default) == 2
    assert len(merged) == 1
