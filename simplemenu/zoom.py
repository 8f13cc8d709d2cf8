"""Scaling and integer-factor shrinking of 8-bit and 32-bit surfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Sequence, Union

VALUE_LIMIT = 0.001
"""Smallest absolute zoom factor that is honoured."""

_SUPPORTED_DEPTHS = (8, 32)


class Rgba(NamedTuple):
    """A 32-bit pixel."""

    r: int
    g: int
    b: int
    a: int = 255


Pixel = Union[int, Rgba]


@dataclass
class Surface:
    """A rectangular block of pixels.

    Depth 8 surfaces hold palette indices (ints 0-255); depth 32 surfaces
    hold ``Rgba`` values. Pixels are stored row by row.
    """

    width: int
    height: int
    depth: int
    pixels: list
    palette: tuple = ()
    colorkey: Optional[Pixel] = None

    def __post_init__(self) -> None:
        if self.depth not in _SUPPORTED_DEPTHS:
            raise ValueError(f"unsupported depth {self.depth}; use 8 or 32")
        if self.width < 0 or self.height < 0:
            raise ValueError("surface dimensions must not be negative")
        self.pixels = [self._checked(p) for p in self.pixels]
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} pixels, got {len(self.pixels)}"
            )
        self.palette = tuple(Rgba(*colour) for colour in self.palette)
        if self.colorkey is not None:
            self.colorkey = self._checked(self.colorkey)

    @classmethod
    def blank(cls, width: int, height: int, depth: int = 32, fill: Optional[Pixel] = None) -> "Surface":
        """Create a surface with every pixel set to ``fill`` (zero by default)."""
        if fill is None:
            fill = 0 if depth == 8 else Rgba(0, 0, 0, 0)
        return cls(width, height, depth, [fill] * (max(width, 0) * max(height, 0)))

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Pixel]], depth: int = 32) -> "Surface":
        """Create a surface from a sequence of equally long rows."""
        grid = [list(row) for row in rows]
        width = len(grid[0]) if grid else 0
        if any(len(row) != width for row in grid):
            raise ValueError("all rows must have the same length")
        return cls(width, len(grid), depth, [p for row in grid for p in row])

    def _checked(self, value: Pixel) -> Pixel:
        if self.depth == 8:
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"8-bit pixel must be an int in 0..255, got {value!r}")
            return value
        colour = Rgba(*value)
        if not all(isinstance(c, int) and 0 <= c <= 255 for c in colour):
            raise ValueError(f"32-bit pixel channels must be ints in 0..255, got {value!r}")
        return colour

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} surface")
        return y * self.width + x

    def _clamped(self, x: int, y: int) -> Pixel:
        x = min(max(x, 0), self.width - 1)
        y = min(max(y, 0), self.height - 1)
        return self.pixels[y * self.width + x]

    def get(self, x: int, y: int) -> Pixel:
        """Return the pixel at column ``x``, row ``y``."""
        return self.pixels[self._index(x, y)]

    def set(self, x: int, y: int, value: Pixel) -> None:
        """Replace the pixel at column ``x``, row ``y``."""
        self.pixels[self._index(x, y)] = self._checked(value)

    def rows(self) -> list:
        """Return the pixels as a list of row lists."""
        w = self.width
        return [self.pixels[y * w:(y + 1) * w] for y in range(self.height)]

    def copy(self) -> "Surface":
        """Return an independent copy of this surface."""
        return Surface(
            self.width, self.height, self.depth, list(self.pixels), self.palette, self.colorkey
        )


def _destination(src: Surface, width: int, height: int) -> Surface:
    """Allocate a result surface matching the source's format."""
    dst = Surface.blank(width, height, src.depth)
    if src.depth == 8:
        dst.palette = src.palette
        dst.colorkey = src.colorkey if src.colorkey is not None else 0
    return dst


def _fixed_point_offsets(step: int, count: int) -> list:
    """16.16 fixed-point positions; the integer part of each entry is the next step."""
    offsets = []
    acc = 0
    for _ in range(count + 1):
        offsets.append(acc)
        acc = (acc & 0xFFFF) + step
    return offsets


def _integer_steps(src_len: int, dst_len: int) -> list:
    """Whole-pixel source advances for each destination pixel."""
    steps = []
    acc = 0
    for _ in range(dst_len):
        count, acc = divmod(acc + src_len, dst_len)
        steps.append(count)
    return steps


def _lerp_channel(c00: int, c01: int, c10: int, c11: int, ex: int, ey: int) -> int:
    t1 = ((((c01 - c00) * ex) >> 16) + c00) & 0xFF
    t2 = ((((c11 - c10) * ex) >> 16) + c10) & 0xFF
    return ((((t2 - t1) * ey) >> 16) + t1) & 0xFF


def _interpolate(c00: Rgba, c01: Rgba, c10: Rgba, c11: Rgba, ex: int, ey: int) -> Rgba:
    """Bilinear blend of four pixels with 16-bit fractional weights."""
    return Rgba(*(_lerp_channel(*channel, ex, ey) for channel in zip(c00, c01, c10, c11)))


def _zoom_rgba(src: Surface, dst: Surface, flipx: bool, flipy: bool, smooth: bool) -> None:
    span_w = src.width - 1 if smooth else src.width
    span_h = src.height - 1 if smooth else src.height
    sax = _fixed_point_offsets(int(65536.0 * span_w / dst.width), dst.width)
    say = _fixed_point_offsets(int(65536.0 * span_h / dst.height), dst.height)
    start_col = src.width - 1 if flipx else 0
    start_row = src.height - 1 if flipy else 0
    xdir = -1 if flipx else 1
    ydir = -1 if flipy else 1
    out = dst.pixels
    dw = dst.width

    row = start_row
    lines_advanced = 0
    for y in range(dst.height):
        col = start_col
        if smooth:
            r0, r1 = (row + 1, row) if flipy else (row, row + 1)
            ey = say[y] & 0xFFFF
            cols_advanced = 0
            for x in range(dw):
                c0, c1 = (col + 1, col) if flipx else (col, col + 1)
                out[y * dw + x] = _interpolate(
                    src._clamped(c0, r0),
                    src._clamped(c1, r0),
                    src._clamped(c0, r1),
                    src._clamped(c1, r1),
                    sax[x] & 0xFFFF,
                    ey,
                )
                if sax[x + 1] > 0:
                    step = sax[x + 1] >> 16
                    cols_advanced += step
                    if cols_advanced <= src.width:
                        col += step * xdir
            if say[y + 1] > 0:
                step = say[y + 1] >> 16
                lines_advanced += step
                if lines_advanced < src.height:
                    row += step * ydir
        else:
            for x in range(dw):
                out[y * dw + x] = src.get(col, row)
                if sax[x + 1] > 0:
                    col += (sax[x + 1] >> 16) * xdir
            if say[y + 1] > 0:
                row += (say[y + 1] >> 16) * ydir


def _zoom_y(src: Surface, dst: Surface, flipx: bool, flipy: bool) -> None:
    sax = _integer_steps(src.width, dst.width)
    say = _integer_steps(src.height, dst.height)
    xdir = -1 if flipx else 1
    ydir = -1 if flipy else 1
    out = dst.pixels
    dw = dst.width
    row = src.height - 1 if flipy else 0
    for y in range(dst.height):
        col = src.width - 1 if flipx else 0
        for x in range(dw):
            out[y * dw + x] = src.get(col, row)
            col += sax[x] * xdir
        row += say[y] * ydir


def zoom_surface_size(width: int, height: int, zoomx: float, zoomy: float) -> tuple:
    """Return the (width, height) a zoom produces; each is at least 1.

    Negative factors count as their absolute value.
    """
    zoomx = max(abs(zoomx), VALUE_LIMIT)
    zoomy = max(abs(zoomy), VALUE_LIMIT)
    return max(int(width * zoomx), 1), max(int(height * zoomy), 1)


def shrink_surface(src: Surface, factorx: int, factory: int) -> Surface:
    """Shrink by integer ratios, averaging each source box into one pixel.

    Source columns and rows that do not fill a whole box are dropped.
    """
    if factorx < 1 or factory < 1:
        raise ValueError("shrink factors must be at least 1")
    dst = _destination(src, src.width // factorx, src.height // factory)
    count = factorx * factory
    w = src.width
    for y in range(dst.height):
        for x in range(dst.width):
            box = [
                src.pixels[(y * factory + dy) * w + x * factorx + dx]
                for dy in range(factory)
                for dx in range(factorx)
            ]
            if src.depth == 32:
                value: Pixel = Rgba(*(sum(channel) // count for channel in zip(*box)))
            else:
                value = sum(box) // count
            dst.pixels[y * dst.width + x] = value
    return dst


def zoom_surface(src: Surface, zoomx: float, zoomy: float, smooth: bool = False) -> Surface:
    """Scale a surface by independent factors; negative factors mirror that axis.

    ``smooth`` enables bilinear interpolation on 32-bit surfaces; 8-bit
    surfaces are always scaled by nearest neighbour.
    """
    if src.width == 0 or src.height == 0:
        raise ValueError("cannot zoom an empty surface")
    flipx = zoomx < 0.0
    flipy = zoomy < 0.0
    width, height = zoom_surface_size(src.width, src.height, zoomx, zoomy)
    dst = _destination(src, width, height)
    if src.depth == 32:
        _zoom_rgba(src, dst, flipx, flipy, bool(smooth))
    else:
        _zoom_y(src, dst, flipx, flipy)
    return dst