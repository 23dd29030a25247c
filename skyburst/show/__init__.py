"""
Skyburst - Show choreography
"""

from .clock import FrameClock
from .tween import Tween, TweenEngine
from .overlay import Overlay
from .sequencer import StagePhase, StageSpec, MessageSequencer
from .presets import (
    WaveSpec, RocketSpec, ShowPreset,
    PresetManager, BUILTIN_PRESETS,
    get_preset_manager, get_preset, list_presets,
)
from .director import ShowState, ShowDirector
from .ambient import AmbientField
from .session import Show
from .runner import ShowRunner

__all__ = [
    'FrameClock',
    'Tween', 'TweenEngine',
    'Overlay',
    'StagePhase', 'StageSpec', 'MessageSequencer',
    'WaveSpec', 'RocketSpec', 'ShowPreset',
    'PresetManager', 'BUILTIN_PRESETS',
    'get_preset_manager', 'get_preset', 'list_presets',
    'ShowState', 'ShowDirector',
    'AmbientField',
    'Show',
    'ShowRunner',
]
