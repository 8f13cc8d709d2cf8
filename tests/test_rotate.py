import pytest

from simplemenu.rotate import (
    rotate_surface_90,
    rotozoom_surface,
    rotozoom_surface_size,
    rotozoom_surface_size_xy,
    rotozoom_surface_xy,
)
from simplemenu.zoom import Rgba, Surface, zoom_surface


def _sample32(width=3, height=2):
    return Surface.from_rows(
        [[Rgba(x * 40, y * 60, x + y, 255) for x in range(width)] for y in range(height)]
    )


def test_size_without_rotation_keeps_even_dimensions():
    assert rotozoom_surface_size(10, 10, 0, 1) == (10, 10)


def test_size_has_minimum_of_two():
    assert rotozoom_surface_size(0, 0, 45, 1) == (2, 2)


@pytest.mark.parametrize("angle", [15, 30, 45, 90, 135, 200, -60])
def test_size_is_even_and_positive(angle):
    w, h = rotozoom_surface_size(17, 9, angle, 1.5)
    assert w % 2 == 0 and h % 2 == 0
    assert w >= 2 and h >= 2


def test_size_xy_ignores_vertical_factor():
    assert rotozoom_surface_size_xy(20, 12, 33, 2, 5) == rotozoom_surface_size(20, 12, 33, 2)


def test_size_symmetric_under_half_turn():
    assert rotozoom_surface_size(20, 12, 30, 1) == rotozoom_surface_size(20, 12, 210, 1)


def test_rotate_90_swaps_dimensions_and_moves_pixels():
    src = _sample32(3, 2)
    dst = rotate_surface_90(src, 1)
    assert (dst.width, dst.height) == (2, 3)
    assert dst.get(1, 0) == src.get(0, 0)
    assert dst.get(0, 0) == src.get(0, 1)
    assert dst.get(1, 2) == src.get(2, 0)


def test_rotate_180_reverses_pixels():
    src = _sample32(3, 2)
    dst = rotate_surface_90(src, 2)
    assert dst.pixels == list(reversed(src.pixels))


def test_rotate_four_turns_is_identity():
    src = _sample32(4, 3)
    result = src
    for _ in range(4):
        result = rotate_surface_90(result, 1)
    assert result.pixels == src.pixels
    assert rotate_surface_90(src, 4).pixels == src.pixels


def test_rotate_negative_turns_normalise():
    src = _sample32(4, 3)
    assert rotate_surface_90(src, -1).pixels == rotate_surface_90(src, 3).pixels


def test_rotate_three_then_one_returns_original():
    src = _sample32(3, 5)
    assert rotate_surface_90(rotate_surface_90(src, 3), 1).pixels == src.pixels


def test_rotate_90_rejects_8bit():
    src = Surface.from_rows([[1, 2], [3, 4]], depth=8)
    with pytest.raises(ValueError):
        rotate_surface_90(src, 1)


@pytest.mark.parametrize("smooth", [False, True])
def test_zero_angle_matches_zoom(smooth):
    src = _sample32(4, 4)
    assert rotozoom_surface(src, 0, 2, smooth).pixels == zoom_surface(src, 2, 2, smooth).pixels


def test_zero_angle_negative_zoom_mirrors():
    src = _sample32(3, 2)
    assert rotozoom_surface(src, 0, -1).pixels == zoom_surface(src, -1, -1).pixels


def test_zero_angle_8bit_matches_zoom():
    src = Surface.from_rows([[1, 2, 3], [4, 5, 6]], depth=8)
    assert rotozoom_surface_xy(src, 0, 2, 3).pixels == zoom_surface(src, 2, 3).pixels


@pytest.mark.parametrize("smooth", [False, True])
def test_rotated_uniform_surface_centre_keeps_colour(smooth):
    colour = Rgba(10, 20, 30, 255)
    src = Surface.blank(4, 4, 32, colour)
    dst = rotozoom_surface(src, 180, 1, smooth)
    assert (dst.width, dst.height) == rotozoom_surface_size(4, 4, 180, 1)
    assert dst.get(dst.width // 2, dst.height // 2) == colour


def test_rotated_8bit_pixels_come_from_source_or_key():
    src = Surface.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]], depth=8)
    src.colorkey = 200
    dst = rotozoom_surface(src, 45, 1)
    assert (dst.width, dst.height) == rotozoom_surface_size(3, 3, 45, 1)
    assert set(dst.pixels) <= set(src.pixels) | {200}
    assert 200 in dst.pixels
    assert dst.colorkey == 200


def test_rotated_32bit_keeps_colorkey_and_fills_corners():
    key = Rgba(255, 0, 255, 255)
    src = Surface.blank(4, 4, 32, Rgba(1, 2, 3, 255))
    src.colorkey = key
    dst = rotozoom_surface(src, 45, 1)
    assert dst.colorkey == key
    assert dst.get(0, 0) == key


def test_rotozoom_rejects_empty_surface():
    with pytest.raises(ValueError):
        rotozoom_surface(Surface.blank(0, 0, 32), 30, 1)