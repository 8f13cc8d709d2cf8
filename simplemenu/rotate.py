"""Rotation, combined rotation and zoom, and quarter-turn rotation of surfaces."""

from __future__ import annotations

import math

from .zoom import (
    VALUE_LIMIT,
    Rgba,
    Surface,
    _destination,
    _interpolate,
    _zoom_rgba,
    _zoom_y,
    zoom_surface_size,
)


def _short(value: int) -> int:
    """Wrap an integer to the signed 16-bit range."""
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _size_and_trig(width: int, height: int, angle: float, zoom: float) -> tuple:
    """Return destination size plus the zoom-scaled cosine and sine of ``angle``."""
    radians = math.radians(angle)
    sine = math.sin(radians) * zoom
    cosine = math.cos(radians) * zoom
    x = float(int(width / 2))
    y = float(int(height / 2))
    cx, cy = cosine * x, cosine * y
    sx, sy = sine * x, sine * y
    half_w = max(int(math.ceil(max(abs(cx + sy), abs(cx - sy), abs(-cx + sy), abs(-cx - sy)))), 1)
    half_h = max(int(math.ceil(max(abs(sx + cy), abs(sx - cy), abs(-sx + cy), abs(-sx - cy)))), 1)
    return 2 * half_w, 2 * half_h, cosine, sine


def rotozoom_surface_size_xy(width: int, height: int, angle: float, zoomx: float, zoomy: float) -> tuple:
    """Return the (width, height) of a rotozoom result.

    The box is sized from the horizontal factor alone; ``zoomy`` does not
    affect it.
    """
    dst_w, dst_h, _, _ = _size_and_trig(width, height, angle, zoomx)
    return dst_w, dst_h


def rotozoom_surface_size(width: int, height: int, angle: float, zoom: float) -> tuple:
    """Return the (width, height) of a rotozoom with a single zoom factor."""
    return rotozoom_surface_size_xy(width, height, angle, zoom, zoom)


def rotate_surface_90(src: Surface, turns: int) -> Surface:
    """Rotate a 32-bit surface clockwise by ``turns`` quarter turns."""
    if src.depth != 32:
        raise ValueError("quarter-turn rotation needs a 32-bit surface")
    turns %= 4
    w, h = src.width, src.height
    if turns % 2:
        dst = Surface.blank(h, w, 32)
    else:
        dst = Surface.blank(w, h, 32)
    out = dst.pixels
    dw = dst.width
    for row, line in enumerate(src.rows()):
        for col, pixel in enumerate(line):
            if turns == 0:
                x, y = col, row
            elif turns == 1:
                x, y = h - 1 - row, col
            elif turns == 2:
                x, y = w - 1 - col, h - 1 - row
            else:
                x, y = row, w - 1 - col
            out[y * dw + x] = pixel
    return dst


def _transform_rgba(
    src: Surface, dst: Surface, cx: int, cy: int, isin: int, icos: int,
    flipx: bool, flipy: bool, smooth: bool,
) -> None:
    xd = (src.width - dst.width) << 15
    yd = (src.height - dst.height) << 15
    ax = (cx << 16) - icos * cx
    ay = (cy << 16) - isin * cx
    sw = src.width - 1
    sh = src.height - 1
    out = dst.pixels
    dw = dst.width
    for y in range(dst.height):
        offset = cy - y
        sdx = ax + isin * offset + xd
        sdy = ay - icos * offset + yd
        for x in range(dw):
            if smooth:
                dx = sdx >> 16
                dy = sdy >> 16
                if flipx:
                    dx = sw - dx
                if flipy:
                    dy = sh - dy
                if -1 < dx < sw and -1 < dy < sh:
                    c00 = src.get(dx, dy)
                    c01 = src.get(dx + 1, dy)
                    c10 = src.get(dx, dy + 1)
                    c11 = src.get(dx + 1, dy + 1)
                    if flipx:
                        c00, c01 = c01, c00
                        c10, c11 = c11, c10
                    if flipy:
                        c00, c10 = c10, c00
                        c01, c11 = c11, c01
                    out[y * dw + x] = _interpolate(c00, c01, c10, c11, sdx & 0xFFFF, sdy & 0xFFFF)
            else:
                dx = _short(sdx >> 16)
                dy = _short(sdy >> 16)
                if flipx:
                    dx = sw - dx
                if flipy:
                    dy = sh - dy
                if 0 <= dx < src.width and 0 <= dy < src.height:
                    out[y * dw + x] = src.get(dx, dy)
            sdx += icos
            sdy += isin


def _transform_y(
    src: Surface, dst: Surface, cx: int, cy: int, isin: int, icos: int,
    flipx: bool, flipy: bool,
) -> None:
    xd = (src.width - dst.width) << 15
    yd = (src.height - dst.height) << 15
    ax = (cx << 16) - icos * cx
    ay = (cy << 16) - isin * cx
    key = (src.colorkey or 0) & 0xFF
    dst.pixels = [key] * (dst.width * dst.height)
    out = dst.pixels
    dw = dst.width
    for y in range(dst.height):
        offset = cy - y
        sdx = ax + isin * offset + xd
        sdy = ay - icos * offset + yd
        for x in range(dw):
            dx = _short(sdx >> 16)
            dy = _short(sdy >> 16)
            if flipx:
                dx = src.width - 1 - dx
            if flipy:
                dy = src.height - 1 - dy
            if 0 <= dx < src.width and 0 <= dy < src.height:
                out[y * dw + x] = src.get(dx, dy)
            sdx += icos
            sdy += isin


def _result_surface(src: Surface, width: int, height: int) -> Surface:
    dst = _destination(src, width, height)
    if src.depth == 32:
        if src.colorkey is not None:
            dst.pixels = [src.colorkey] * (width * height)
        dst.colorkey = src.colorkey if src.colorkey is not None else Rgba(0, 0, 0, 0)
    return dst


def rotozoom_surface_xy(
    src: Surface, angle: float, zoomx: float, zoomy: float, smooth: bool = False
) -> Surface:
    """Rotate by ``angle`` degrees and scale by separate factors.

    Negative factors mirror that axis. Angles within 0.001 of zero give a
    plain zoom. ``smooth`` enables bilinear interpolation on 32-bit surfaces.
    Uncovered destination pixels hold the colour key.
    """
    if src.width == 0 or src.height == 0:
        raise ValueError("cannot rotozoom an empty surface")
    flipx = zoomx < 0.0
    flipy = zoomy < 0.0
    zoomx = max(abs(zoomx), VALUE_LIMIT)
    zoomy = max(abs(zoomy), VALUE_LIMIT)
    smooth = bool(smooth)

    if abs(angle) > VALUE_LIMIT:
        zoominv = 65536.0 / (zoomx * zoomx)
        width, height, cosine, sine = _size_and_trig(src.width, src.height, angle, zoomx)
        dst = _result_surface(src, width, height)
        isin = int(sine * zoominv)
        icos = int(cosine * zoominv)
        if src.depth == 32:
            _transform_rgba(src, dst, width // 2, height // 2, isin, icos, flipx, flipy, smooth)
        else:
            _transform_y(src, dst, width // 2, height // 2, isin, icos, flipx, flipy)
        return dst

    width, height = zoom_surface_size(src.width, src.height, zoomx, zoomy)
    dst = _result_surface(src, width, height)
    if src.depth == 32:
        _zoom_rgba(src, dst, flipx, flipy, smooth)
    else:
        _zoom_y(src, dst, flipx, flipy)
    return dst


def rotozoom_surface(src: Surface, angle: float, zoom: float, smooth: bool = False) -> Surface:
    """Rotate by ``angle`` degrees and scale both axes by ``zoom``."""
    return rotozoom_surface_xy(src, angle, zoom, zoom, smooth)