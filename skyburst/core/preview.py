"""
Real-Time Preview Window

Plays a show live in a pygame window.

Controls:
    SPACE / CLICK  - Launch the show
    F              - Toggle FPS/info overlay
    H              - Show/hide help
    ESC/Q          - Quit

Requires: pygame (pip install pygame)
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .palette import Color
from .particles import CIRCLE, STAR, star_points
from .renderer import MIN_VISIBLE_SIZE, Renderer

# Try to import pygame
try:
    import pygame
    from pygame.locals import K_ESCAPE, K_SPACE, K_f, K_h, K_q
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False
    pygame = None


# =============================================================================
# Preview Configuration
# =============================================================================

@dataclass
class PreviewConfig:
    """Window and overlay settings for a live show"""
    window_title: str = "Skyburst"
    fps: int = 60
    show_info: bool = False
    show_help: bool = False
    auto_launch: bool = False
    glow_strength: float = 0.35


# =============================================================================
# Pygame Renderer
# =============================================================================

class PygameRenderer(Renderer):
    """
    Draws onto a persistent pygame surface.

    Glow is approximated by a translucent halo drawn under the shape.
    """

    def __init__(self, surface, glow_strength: float = 0.35):
        self.surface = surface
        self.glow_strength = glow_strength
        self._veils: Dict[Tuple[Color, int], Any] = {}

    def fade(self, color: Color, alpha: float):
        a = int(round(max(0.0, min(1.0, alpha)) * 255))
        key = (tuple(color), a)
        if key not in self._veils:
            veil = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
            veil.fill((*color, a))
            self._veils[key] = veil
        self.surface.blit(self._veils[key], (0, 0))

    def clear(self, color: Color):
        self.surface.fill(color)

    def _blit_shape(self, x, y, size, rgba, shape, rotation):
        r = int(math.ceil(size)) + 1
        tmp = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
        if shape == STAR:
            pygame.draw.polygon(tmp, rgba, star_points(r, r, size, rotation))
        else:
            pygame.draw.circle(tmp, rgba, (r, r), size)
        self.surface.blit(tmp, (int(x) - r, int(y) - r))

    def draw_shape(self, x, y, size, color, alpha=1.0, shape=CIRCLE, rotation=0.0, glow=0.0):
        if size < MIN_VISIBLE_SIZE or alpha <= 0:
            return
        a = int(round(min(1.0, alpha) * 255))

        if glow > 0:
            halo = size + glow * self.glow_strength
            self._blit_shape(x, y, halo, (*color, int(a * 0.2)), CIRCLE, 0.0)

        self._blit_shape(x, y, size, (*color, a), shape, rotation)


# =============================================================================
# Preview Window
# =============================================================================

class PreviewWindow:
    """
    Interactive show window.

    Example:
        window = PreviewWindow(get_preset('anime'), seed=1)
        window.run()
    """

    def __init__(self, preset, seed: Optional[int] = None, config: Optional[PreviewConfig] = None):
        if not PYGAME_AVAILABLE:
            raise ImportError(
                "pygame is required for preview. Install with: pip install pygame"
            )
        from ..show.session import Show

        self.preset = preset
        self.config = config or PreviewConfig()

        pygame.init()
        pygame.display.set_caption(self.config.window_title)
        self.screen = pygame.display.set_mode((preset.width, preset.height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)
        self._fonts: Dict[int, Any] = {}

        self.canvas = pygame.Surface((preset.width, preset.height))
        self.canvas.fill(preset.background_color)
        self.renderer = PygameRenderer(self.canvas, self.config.glow_strength)
        self.show = Show(preset, self.renderer, seed=seed)

    def run(self):
        """Pump events, step the show clock by real elapsed time, redraw"""
        if self.config.auto_launch:
            self.show.trigger()

        running = True
        while running:
            dt_ms = self.clock.tick(self.config.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self._handle_key(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    self.show.trigger()

            self.show.clock.step(dt_ms)
            self._render()
            pygame.display.flip()

        pygame.quit()

    def _handle_key(self, key: int) -> bool:
        """React to a key press; False means close the window"""
        if key in (K_ESCAPE, K_q):
            return False
        elif key == K_SPACE:
            self.show.trigger()
        elif key == K_f:
            self.config.show_info = not self.config.show_info
        elif key == K_h:
            self.config.show_help = not self.config.show_help
        return True

    def _font_for(self, size: int):
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, int(size * 1.3))
        return self._fonts[size]

    def _render(self):
        self.screen.blit(self.canvas, (0, 0))

        for overlay in self.show.overlays:
            if overlay.shown:
                self._render_overlay(overlay)

        if self.config.show_info:
            self._render_info()
        if self.config.show_help:
            self._render_help()

    def _render_overlay(self, overlay):
        cx, cy = overlay.position
        alpha = int(255 * min(1.0, overlay.opacity))

        if overlay.kind == 'dot':
            r = max(1, int(4 * overlay.scale))
            dot = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
            pygame.draw.circle(dot, (*overlay.color, alpha), (r, r), r)
            self.screen.blit(dot, (int(cx) - r, int(cy) - r))
            return

        text = self._font_for(overlay.font_size).render(overlay.text, True, overlay.color)
        if overlay.kind == 'button':
            pad = 12
            box = pygame.Surface((text.get_width() + pad * 2, text.get_height() + pad * 2), pygame.SRCALPHA)
            pygame.draw.rect(box, (255, 107, 157), box.get_rect(), border_radius=pad * 2)
            box.blit(text, (pad, pad))
            text = box

        squash = abs(math.cos(math.radians(overlay.rotate_y)))
        w = int(text.get_width() * overlay.scale * squash)
        h = int(text.get_height() * overlay.scale)
        if w < 1 or h < 1:
            return

        surf = pygame.transform.smoothscale(text, (w, h))
        surf.set_alpha(alpha)
        self.screen.blit(surf, (int(cx - w / 2), int(cy - h / 2)))

    def _render_info(self):
        director = self.show.director
        lines = [
            f"FPS: {self.clock.get_fps():.0f}",
            f"State: {director.state.value}",
            f"Bursts: {len(director.fireworks)} live / {director.ignited_count} ignited",
            f"Pending: {director.pending_ignitions}",
            f"Particles: {sum(b.particle_count for b in director.fireworks)}",
        ]
        for i, line in enumerate(lines):
            self.screen.blit(self.font.render(line, True, (200, 200, 200)), (10, 10 + i * 18))

    def _render_help(self):
        lines = ["SPACE/CLICK - launch", "F - info", "H - help", "ESC/Q - quit"]
        y = self.screen.get_height() - 18 * len(lines) - 10
        for i, line in enumerate(lines):
            self.screen.blit(self.font.render(line, True, (200, 200, 200)), (10, y + i * 18))


def preview_show(preset, seed: Optional[int] = None, auto_launch: bool = False) -> None:
    """Quick live preview of a preset"""
    if not PYGAME_AVAILABLE:
        print("Preview requires pygame. Install with: pip install pygame")
        print("Or render a GIF instead: python main.py --preset " + preset.name)
        return

    config = PreviewConfig(window_title=f"Skyburst - {preset.name}", auto_launch=auto_launch)
    PreviewWindow(preset, seed=seed, config=config).run()


def check_pygame_available() -> bool:
    """True when pygame imported, so --preview can work"""
    return PYGAME_AVAILABLE
