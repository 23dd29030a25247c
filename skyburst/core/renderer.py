"""
Renderers - drawing backends for the firework engine

The engine only asks for filled circles/stars with an alpha and an optional
glow radius, plus a low-alpha fill over the previous frame. Backends:

- RecordingRenderer: keeps the requests (inspection, tests)
- RasterRenderer: Pillow canvas with blurred glow layers, used for export

The pygame backend lives in preview.py.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from PIL import Image, ImageChops, ImageDraw, ImageFilter, ImageFont

from .palette import Color, NIGHT_SKY
from .particles import CIRCLE, STAR, star_points


# =============================================================================
# Renderer Interface
# =============================================================================

class Renderer(ABC):
    """Drawing capability invoked by particles and the show director"""

    def begin_frame(self):
        """Called before the first draw of a tick"""

    def end_frame(self):
        """Called after the last draw of a tick"""

    @abstractmethod
    def fade(self, color: Color, alpha: float):
        """Paint `color` at `alpha` over the whole frame (motion-blur trails)"""

    @abstractmethod
    def clear(self, color: Color):
        """Hard clear to `color`"""

    @abstractmethod
    def draw_shape(
        self,
        x: float,
        y: float,
        size: float,
        color: Color,
        alpha: float = 1.0,
        shape: str = CIRCLE,
        rotation: float = 0.0,
        glow: float = 0.0
    ):
        """Fill a circle (radius `size`) or star (outer radius `size`)"""


# =============================================================================
# Recording Renderer
# =============================================================================

@dataclass
class DrawCall:
    """One recorded draw request"""
    x: float
    y: float
    size: float
    color: Color
    alpha: float
    shape: str
    rotation: float
    glow: float


class RecordingRenderer(Renderer):
    """
    Records every request instead of drawing.

    Example:
        renderer = RecordingRenderer()
        burst.draw(renderer)
        assert all(call.alpha <= 1.0 for call in renderer.calls)
    """

    def __init__(self):
        self.calls: List[DrawCall] = []
        self.fades: List[Tuple[Color, float]] = []
        self.clears: List[Color] = []
        self.frames = 0

    def begin_frame(self):
        self.frames += 1

    def fade(self, color: Color, alpha: float):
        self.fades.append((color, alpha))

    def clear(self, color: Color):
        self.clears.append(color)

    def draw_shape(self, x, y, size, color, alpha=1.0, shape=CIRCLE, rotation=0.0, glow=0.0):
        self.calls.append(DrawCall(x, y, size, color, alpha, shape, rotation, glow))

    def reset(self):
        self.calls.clear()
        self.fades.clear()
        self.clears.clear()


# =============================================================================
# Raster Renderer (Pillow)
# =============================================================================

MIN_VISIBLE_SIZE = 0.1


def _shape_geometry(x: float, y: float, size: float, shape: str, rotation: float):
    if shape == STAR:
        return star_points(x, y, size, rotation)
    return [x - size, y - size, x + size, y + size]


class RasterRenderer(Renderer):
    """
    Draws into a Pillow RGB canvas.

    Shapes are alpha-blended directly. Glowing shapes are also drawn into a
    per-radius glow layer which is Gaussian-blurred and screened onto the
    canvas at end_frame, approximating a canvas shadow blur.

    Args:
        width, height: Canvas size in pixels
        background: Initial fill color
        glow_scale: Blur sigma per unit of glow radius
    """

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        background: Color = NIGHT_SKY,
        glow_scale: float = 0.4
    ):
        self.width = width
        self.height = height
        self.background = background
        self.glow_scale = glow_scale
        self.canvas = Image.new('RGB', (width, height), background)
        self._draw = ImageDraw.Draw(self.canvas, 'RGBA')
        self._glow_layers: Dict[float, Image.Image] = {}
        self._glow_draws: Dict[float, ImageDraw.ImageDraw] = {}
        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    def _replace_canvas(self, image: Image.Image):
        self.canvas = image
        self._draw = ImageDraw.Draw(self.canvas, 'RGBA')

    def begin_frame(self):
        self._glow_layers.clear()
        self._glow_draws.clear()

    def fade(self, color: Color, alpha: float):
        a = int(round(max(0.0, min(1.0, alpha)) * 255))
        self._draw.rectangle([0, 0, self.width, self.height], fill=(*color, a))

    def clear(self, color: Color):
        self._draw.rectangle([0, 0, self.width, self.height], fill=(*color, 255))

    def _glow_draw(self, radius: float) -> ImageDraw.ImageDraw:
        if radius not in self._glow_layers:
            layer = Image.new('RGB', (self.width, self.height), (0, 0, 0))
            self._glow_layers[radius] = layer
            self._glow_draws[radius] = ImageDraw.Draw(layer, 'RGBA')
        return self._glow_draws[radius]

    def draw_shape(self, x, y, size, color, alpha=1.0, shape=CIRCLE, rotation=0.0, glow=0.0):
        if size < MIN_VISIBLE_SIZE or alpha <= 0:
            return

        fill = (*color, int(round(min(1.0, alpha) * 255)))
        geometry = _shape_geometry(x, y, size, shape, rotation)

        if glow > 0:
            target = self._glow_draw(glow)
            if shape == STAR:
                target.polygon(geometry, fill=fill)
            else:
                target.ellipse(geometry, fill=fill)

        if shape == STAR:
            self._draw.polygon(geometry, fill=fill)
        else:
            self._draw.ellipse(geometry, fill=fill)

    def end_frame(self):
        """Blur the glow layers and screen them onto the canvas"""
        canvas = self.canvas
        for radius, layer in self._glow_layers.items():
            blurred = layer.filter(ImageFilter.GaussianBlur(radius * self.glow_scale))
            canvas = ImageChops.screen(canvas, blurred)
        if canvas is not self.canvas:
            self._replace_canvas(canvas)
        self._glow_layers.clear()
        self._glow_draws.clear()

    # -------------------------------------------------------------------------
    # Overlays
    # -------------------------------------------------------------------------

    def _font(self, size: int) -> ImageFont.ImageFont:
        if size not in self._fonts:
            self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]

    def _render_text(self, overlay) -> Optional[Image.Image]:
        font = self._font(overlay.font_size)
        left, top, right, bottom = font.getbbox(overlay.text)
        w, h = right - left, bottom - top
        if w <= 0 or h <= 0:
            return None

        pad = 8
        tile = Image.new('RGBA', (w + pad * 2, h + pad * 2), (0, 0, 0, 0))
        draw = ImageDraw.Draw(tile)
        if overlay.kind == 'button':
            draw.rounded_rectangle(
                [0, 0, tile.width - 1, tile.height - 1],
                radius=pad * 2, fill=(255, 107, 157, 255)
            )
        draw.text((pad - left, pad - top), overlay.text, font=font, fill=(*overlay.color, 255))
        return tile

    def compose(self, overlays: Iterable = ()) -> Image.Image:
        """
        Return a copy of the canvas with overlays drawn on top.

        The canvas itself is never touched, so overlays don't smear into
        the persistent firework trails.
        """
        frame = self.canvas.convert('RGBA')

        for overlay in overlays:
            if not overlay.shown:
                continue
            cx, cy = overlay.position

            if overlay.kind == 'dot':
                layer = Image.new('RGBA', frame.size, (0, 0, 0, 0))
                r = max(1.0, 4 * overlay.scale)
                ImageDraw.Draw(layer).ellipse(
                    [cx - r, cy - r, cx + r, cy + r],
                    fill=(*overlay.color, int(255 * min(1.0, overlay.opacity)))
                )
                frame = Image.alpha_composite(frame, layer)
                continue

            tile = self._render_text(overlay)
            if tile is None:
                continue

            # rotate_y squashes the width like a card turning
            squash = abs(math.cos(math.radians(overlay.rotate_y)))
            w = int(tile.width * overlay.scale * squash)
            h = int(tile.height * overlay.scale)
            if w < 1 or h < 1:
                continue
            tile = tile.resize((w, h), Image.LANCZOS)

            alpha = tile.getchannel('A').point(lambda a: int(a * min(1.0, overlay.opacity)))
            tile.putalpha(alpha)

            layer = Image.new('RGBA', frame.size, (0, 0, 0, 0))
            layer.paste(tile, (int(cx - w / 2), int(cy - h / 2)))
            frame = Image.alpha_composite(frame, layer)

        return frame.convert('RGB')
