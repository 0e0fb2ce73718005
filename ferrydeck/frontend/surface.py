"""2D drawing surfaces for the deck renderer.

``Surface`` is the small set of drawing operations the renderer needs:
rectangles, circles, lines, vertical gradients, text and a clip region.
``PillowSurface`` implements it on a Pillow RGBA image.

Pillow's ``ImageDraw`` overwrites pixels instead of blending, so each
operation is drawn onto a transparent layer the size of its bounding box and
alpha-composited onto the image. The same step enforces the clip rectangle:
the layer box is intersected with the clip before compositing.

Colors are ``#rrggbb`` strings or ``(r, g, b[, a])`` tuples.
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from typing import Iterator, Protocol, Union

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

Color = Union[str, tuple]
Box = tuple[int, int, int, int]

_H_ANCHOR = {"left": "l", "center": "m", "right": "r"}
_V_ANCHOR = {"top": "t", "middle": "m", "bottom": "b", "alphabetic": "s"}


class Surface(Protocol):
    @property
    def size(self) -> tuple[int, int]: ...

    def resize(self, width: int, height: int) -> None: ...

    def clear(self) -> None: ...

    def fill_rect(self, x, y, w, h, color: Color) -> None: ...

    def stroke_rect(self, x, y, w, h, color: Color, width=1) -> None: ...

    def fill_gradient_rect(
        self, x, y, w, h, top: Color, bottom: Color
    ) -> None: ...

    def fill_shadow_rect(
        self, x, y, w, h, color: Color, blur: float
    ) -> None: ...

    def fill_circle(self, cx, cy, r, color: Color) -> None: ...

    def stroke_circle(self, cx, cy, r, color: Color, width=1) -> None: ...

    def line(self, x0, y0, x1, y1, color: Color, width=1) -> None: ...

    def text(
        self,
        x,
        y,
        text: str,
        size: int,
        color: Color,
        bold: bool = False,
        align: str = "center",
        baseline: str = "middle",
        angle: float = 0.0,
    ) -> None: ...

    def clip(self, x, y, w, h): ...


def to_rgba(color: Color) -> tuple[int, int, int, int]:
    if isinstance(color, str):
        rgb = ImageColor.getrgb(color)
        return (rgb[0], rgb[1], rgb[2], rgb[3] if len(rgb) > 3 else 255)
    if len(color) == 3:
        return (color[0], color[1], color[2], 255)
    return tuple(color)  # type: ignore[return-value]


_FONT_CACHE: dict[tuple[int, bool], ImageFont.ImageFont] = {}


def load_font(size: int, bold: bool = False):
    """DejaVu Sans when installed, Pillow's bundled font otherwise."""
    key = (size, bold)
    font = _FONT_CACHE.get(key)
    if font is None:
        name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
        try:
            font = ImageFont.truetype(name, size)
        except OSError:
            font = ImageFont.load_default(size=size)
        _FONT_CACHE[key] = font
    return font


class PillowSurface:
    def __init__(self, width: int = 1, height: int = 1):
        self.image = Image.new("RGBA", (max(1, width), max(1, height)))
        self._clip: Box | None = None

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def resize(self, width: int, height: int) -> None:
        self.image = Image.new("RGBA", (max(1, width), max(1, height)))
        self._clip = None

    def clear(self) -> None:
        self.image.paste((0, 0, 0, 0), (0, 0, *self.image.size))

    def flattened(self, background: Color = "#ffffff") -> Image.Image:
        """Opaque RGB copy of the surface over ``background``."""
        base = Image.new("RGBA", self.image.size, to_rgba(background))
        base.alpha_composite(self.image)
        return base.convert("RGB")

    # -- clipping & compositing --

    @contextmanager
    def clip(self, x, y, w, h) -> Iterator[None]:
        previous = self._clip
        box = (
            math.floor(x),
            math.floor(y),
            math.ceil(x + w),
            math.ceil(y + h),
        )
        self._clip = _intersect(box, previous) if previous else box
        try:
            yield
        finally:
            self._clip = previous

    def _visible_box(self, x0, y0, x1, y1) -> Box | None:
        box = _intersect(
            (math.floor(x0), math.floor(y0), math.ceil(x1), math.ceil(y1)),
            (0, 0, *self.image.size),
        )
        if box is not None and self._clip is not None:
            box = _intersect(box, self._clip)
        return box

    def _paint(self, bbox, paint) -> None:
        """Run ``paint(draw, ox, oy)`` on a layer covering ``bbox``.

        ``ox``/``oy`` is the layer's origin in surface pixels; painters
        subtract it from their coordinates.
        """
        box = self._visible_box(*bbox)
        if box is None:
            return
        ox, oy = math.floor(bbox[0]), math.floor(bbox[1])
        lw = math.ceil(bbox[2]) - ox + 1
        lh = math.ceil(bbox[3]) - oy + 1
        layer = Image.new("RGBA", (lw, lh), (0, 0, 0, 0))
        paint(ImageDraw.Draw(layer), ox, oy)
        self.image.alpha_composite(
            layer,
            dest=(box[0], box[1]),
            source=(box[0] - ox, box[1] - oy, box[2] - ox, box[3] - oy),
        )

    # -- primitives --

    def fill_rect(self, x, y, w, h, color: Color) -> None:
        if w <= 0 or h <= 0:
            return
        fill = to_rgba(color)
        self._paint(
            (x, y, x + w, y + h),
            lambda d, ox, oy: d.rectangle(
                [
                    x - ox,
                    y - oy,
                    max(x, x + w - 1) - ox,
                    max(y, y + h - 1) - oy,
                ],
                fill=fill,
            ),
        )

    def stroke_rect(self, x, y, w, h, color: Color, width=1) -> None:
        outline = to_rgba(color)
        half = width / 2
        self._paint(
            (x - half, y - half, x + w + half, y + h + half),
            lambda d, ox, oy: d.rectangle(
                [
                    x - half - ox,
                    y - half - oy,
                    x + w + half - ox - 1,
                    y + h + half - oy - 1,
                ],
                outline=outline,
                width=max(1, round(width)),
            ),
        )

    def fill_gradient_rect(
        self, x, y, w, h, top: Color, bottom: Color
    ) -> None:
        box = self._visible_box(x, y, x + w, y + h)
        if box is None:
            return
        x0, y0, x1, y1 = box
        top_c = np.array(to_rgba(top), dtype=float)
        bottom_c = np.array(to_rgba(bottom), dtype=float)
        rows = np.arange(y0, y1, dtype=float) + 0.5
        t = np.clip((rows - y) / h, 0.0, 1.0) if h > 0 else rows * 0.0
        colors = top_c + (bottom_c - top_c) * t[:, None]
        arr = np.repeat(colors[:, None, :], x1 - x0, axis=1)
        layer = Image.fromarray(np.round(arr).astype(np.uint8))
        self.image.alpha_composite(layer, dest=(x0, y0))

    def fill_shadow_rect(
        self, x, y, w, h, color: Color, blur: float
    ) -> None:
        """Rectangle with edges softened like a canvas ``shadowBlur``.

        The Gaussian's standard deviation is half of ``blur``.
        """
        if w <= 0 or h <= 0:
            return
        if blur <= 0:
            self.fill_rect(x, y, w, h, color)
            return
        fill = to_rgba(color)
        sigma = blur / 2
        pad = math.ceil(3 * sigma)
        ox = math.floor(x) - pad
        oy = math.floor(y) - pad
        layer = Image.new(
            "RGBA",
            (math.ceil(x + w) + pad - ox, math.ceil(y + h) + pad - oy),
            fill[:3] + (0,),
        )
        ImageDraw.Draw(layer).rectangle(
            [
                x - ox,
                y - oy,
                max(x, x + w - 1) - ox,
                max(y, y + h - 1) - oy,
            ],
            fill=fill,
        )
        layer = layer.filter(ImageFilter.GaussianBlur(sigma))
        box = self._visible_box(
            ox, oy, ox + layer.width, oy + layer.height
        )
        if box is None:
            return
        self.image.alpha_composite(
            layer,
            dest=(box[0], box[1]),
            source=(box[0] - ox, box[1] - oy, box[2] - ox, box[3] - oy),
        )

    def fill_circle(self, cx, cy, r, color: Color) -> None:
        fill = to_rgba(color)
        self._paint(
            (cx - r, cy - r, cx + r, cy + r),
            lambda d, ox, oy: d.ellipse(
                [cx - r - ox, cy - r - oy, cx + r - ox, cy + r - oy],
                fill=fill,
            ),
        )

    def stroke_circle(self, cx, cy, r, color: Color, width=1) -> None:
        outline = to_rgba(color)
        outer = r + width / 2
        self._paint(
            (cx - outer, cy - outer, cx + outer, cy + outer),
            lambda d, ox, oy: d.ellipse(
                [
                    cx - outer - ox,
                    cy - outer - oy,
                    cx + outer - ox,
                    cy + outer - oy,
                ],
                outline=outline,
                width=max(1, round(width)),
            ),
        )

    def line(self, x0, y0, x1, y1, color: Color, width=1) -> None:
        fill = to_rgba(color)
        pad = max(1, width)
        self._paint(
            (min(x0, x1) - pad, min(y0, y1) - pad,
             max(x0, x1) + pad, max(y0, y1) + pad),
            lambda d, ox, oy: d.line(
                [(x0 - ox, y0 - oy), (x1 - ox, y1 - oy)],
                fill=fill,
                width=max(1, round(width)),
            ),
        )

    def text(
        self,
        x,
        y,
        text: str,
        size: int,
        color: Color,
        bold: bool = False,
        align: str = "center",
        baseline: str = "middle",
        angle: float = 0.0,
    ) -> None:
        font = load_font(int(size), bold)
        fill = to_rgba(color)
        anchor = _H_ANCHOR[align] + _V_ANCHOR[baseline]
        if angle:
            self._rotated_text(x, y, text, font, fill, angle)
            return
        left, top, right, bottom = font.getbbox(text, anchor=anchor)
        self._paint(
            (x + left, y + top, x + right, y + bottom),
            lambda d, ox, oy: d.text(
                (x - ox, y - oy), text, font=font, fill=fill, anchor=anchor
            ),
        )

    def _rotated_text(self, x, y, text, font, fill, angle) -> None:
        """Counter-clockwise rotated text, centered on (x, y)."""
        left, top, right, bottom = font.getbbox(text, anchor="lt")
        tile = Image.new(
            "RGBA", (math.ceil(right) + 2, math.ceil(bottom) + 2), (0, 0, 0, 0)
        )
        ImageDraw.Draw(tile).text(
            (1, 1), text, font=font, fill=fill, anchor="lt"
        )
        tile = tile.rotate(angle, expand=True)
        tx = round(x - tile.width / 2)
        ty = round(y - tile.height / 2)
        box = self._visible_box(tx, ty, tx + tile.width, ty + tile.height)
        if box is None:
            return
        self.image.alpha_composite(
            tile,
            dest=(box[0], box[1]),
            source=(box[0] - tx, box[1] - ty, box[2] - tx, box[3] - ty),
        )


def _intersect(a: Box, b: Box) -> Box | None:
    x0 = max(a[0], b[0])
    y0 = max(a[1], b[1])
    x1 = min(a[2], b[2])
    y1 = min(a[3], b[3])
    if x1 <= x0 or y1 <= y0:
        return None
    return (x0, y0, x1, y1)
