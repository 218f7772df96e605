"""
Off-screen rasterizer: paints a renderer Frame into an RGB numpy array with Pillow.
Used for rgb_array rendering in the env and in tests (no window needed).

Opaque primitives are drawn straight onto the frame image. Translucent ones are
drawn on a transparent RGBA layer cropped to their bounds and alpha-composited.
"""

from __future__ import annotations

import math

import numpy as np
from PIL import Image, ImageDraw

from .renderer import Frame, Circle, Line, Polygon


def _paint(img: Image.Image, bounds, color, draw):
    """Run draw(ImageDraw, ox, oy) for one primitive in the given color"""
    if color[3] == 255:
        draw(ImageDraw.Draw(img), 0, 0)
        return

    w, h = img.size
    x_min, y_min, x_max, y_max = bounds
    x0 = max(0, int(math.floor(x_min)) - 1)
    y0 = max(0, int(math.floor(y_min)) - 1)
    x1 = min(w, int(math.ceil(x_max)) + 2)
    y1 = min(h, int(math.ceil(y_max)) + 2)
    if x0 >= x1 or y0 >= y1:
        return

    layer = Image.new("RGBA", (x1 - x0, y1 - y0), (0, 0, 0, 0))
    draw(ImageDraw.Draw(layer), x0, y0)
    img.alpha_composite(layer, dest=(x0, y0))


def draw_circle(img: Image.Image, shape: Circle):
    r = shape.radius
    bounds = (shape.x - r, shape.y - r, shape.x + r, shape.y + r)

    def box(ox, oy):
        return [bounds[0] - ox, bounds[1] - oy, bounds[2] - ox, bounds[3] - oy]

    if shape.fill is not None:
        _paint(img, bounds, shape.fill,
               lambda d, ox, oy: d.ellipse(box(ox, oy), fill=shape.fill))
    if shape.outline is not None:
        _paint(img, bounds, shape.outline,
               lambda d, ox, oy: d.ellipse(box(ox, oy), outline=shape.outline, width=1))


def draw_line(img: Image.Image, shape: Line):
    width = max(1, int(round(shape.width)))
    half = width / 2.0
    bounds = (min(shape.x1, shape.x2) - half, min(shape.y1, shape.y2) - half,
              max(shape.x1, shape.x2) + half, max(shape.y1, shape.y2) + half)
    _paint(img, bounds, shape.color,
           lambda d, ox, oy: d.line([(shape.x1 - ox, shape.y1 - oy), (shape.x2 - ox, shape.y2 - oy)],
                                    fill=shape.color, width=width))


def draw_polygon(img: Image.Image, shape: Polygon):
    xs = [p[0] for p in shape.points]
    ys = [p[1] for p in shape.points]
    _paint(img, (min(xs), min(ys), max(xs), max(ys)), shape.fill,
           lambda d, ox, oy: d.polygon([(x - ox, y - oy) for x, y in shape.points], fill=shape.fill))


def rasterize(frame: Frame) -> np.ndarray:
    """Clear and fully repaint a (height, width, 3) uint8 image"""
    img = Image.new("RGBA", (frame.width, frame.height), tuple(frame.background))

    for shape in frame.shapes:
        if isinstance(shape, Circle):
            draw_circle(img, shape)
        elif isinstance(shape, Line):
            draw_line(img, shape)
        elif isinstance(shape, Polygon):
            draw_polygon(img, shape)
        else:
            raise TypeError(f"Cannot rasterize {type(shape).__name__}")

    return np.array(img.convert("RGB"), dtype=np.uint8)
