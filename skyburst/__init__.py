"""
Skyburst - Particle fireworks shows with a scripted message finale
"""

from .core import Firework, Particle, RasterRenderer, ShowExporter, STANDARD, ENHANCED
from .show import Show, ShowDirector, MessageSequencer, ShowRunner, get_preset, list_presets

__version__ = "0.1.0"
__all__ = [
    'Firework',
    'Particle',
    'STANDARD',
    'ENHANCED',
    'Show',
    'ShowDirector',
    'MessageSequencer',
    'ShowRunner',
    'ShowExporter',
    'RasterRenderer',
    'get_preset',
    'list_presets',
    'render_show',
]


def render_show(
    preset: str = 'classic',
    output_path: str = None,
    format: str = 'gif',
    seed: int = None,
    duration: float = None,
    frame_step: int = 2,
    width: int = None,
    height: int = None,
    presets_dir: str = None
):
    """
    Render a preset show headless and export it.

    Args:
        preset: Preset name
        output_path: Output path (auto-generated if None)
        format: 'gif' or 'frames'
        seed: Random seed for a reproducible show
        duration: Seconds to render (default: until the final message, plus a tail)
        frame_step: Keep every Nth simulated frame
        width, height: Override the preset canvas size
        presets_dir: Directory with user YAML presets

    Returns:
        Path to the output file, or list of frame paths
    """
    from pathlib import Path
    from .show.presets import PresetManager

    if presets_dir is not None:
        show_preset = PresetManager(Path(presets_dir)).get(preset)
    else:
        show_preset = get_preset(preset)
    if show_preset is None:
        raise ValueError(f"Unknown preset: {preset}")

    runner = ShowRunner(show_preset, seed=seed, width=width, height=height)
    frames = runner.run(
        duration_ms=duration * 1000 if duration is not None else None,
        frame_step=frame_step,
    )

    if output_path is None:
        suffix = '.gif' if format == 'gif' else ''
        output_path = Path(f"{show_preset.name}_show{suffix}")

    if format == 'gif':
        return ShowExporter.to_gif(frames, output_path, duration=runner.frame_duration_ms)
    elif format == 'frames':
        return ShowExporter.to_frames(frames, output_path)
    else:
        raise ValueError(f"Unknown format: {format}")
