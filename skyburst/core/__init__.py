"""
Skyburst - Core simulation and rendering
"""

from .variants import BurstVariant, STANDARD, ENHANCED, VARIANTS, get_variant
from .palette import (
    Color, WHITE, NIGHT_SKY, VIVID_PALETTE,
    hsl_to_rgb, random_hue_color, parse_color,
)
from .particles import (
    # Shapes
    CIRCLE, STAR, star_points,
    # Particle
    TrailPoint, Particle,
)
from .firework import Firework
from .easing import (
    linear, ease, ease_range, get_easing, EASING_FUNCTIONS,
    ease_in_quad, ease_out_quad, ease_in_out_quad,
    ease_in_sine, ease_out_sine, ease_in_out_sine,
    ease_in_back, ease_out_back,
    ease_out_elastic,
)
from .renderer import Renderer, DrawCall, RecordingRenderer, RasterRenderer
from .exporter import ShowExporter
from .preview import (
    PreviewConfig, PygameRenderer, PreviewWindow,
    preview_show, check_pygame_available,
)

__all__ = [
    # Variants
    'BurstVariant', 'STANDARD', 'ENHANCED', 'VARIANTS', 'get_variant',
    # Palette
    'Color', 'WHITE', 'NIGHT_SKY', 'VIVID_PALETTE',
    'hsl_to_rgb', 'random_hue_color', 'parse_color',
    # Particles
    'CIRCLE', 'STAR', 'star_points',
    'TrailPoint', 'Particle',
    'Firework',
    # Easing
    'linear', 'ease', 'ease_range', 'get_easing', 'EASING_FUNCTIONS',
    'ease_in_quad', 'ease_out_quad', 'ease_in_out_quad',
    'ease_in_sine', 'ease_out_sine', 'ease_in_out_sine',
    'ease_in_back', 'ease_out_back',
    'ease_out_elastic',
    # Rendering
    'Renderer', 'DrawCall', 'RecordingRenderer', 'RasterRenderer',
    'ShowExporter',
    # Real-Time Preview
    'PreviewConfig', 'PygameRenderer', 'PreviewWindow',
    'preview_show', 'check_pygame_available',
]
