"""
Show Presets - pre-configured fireworks shows
Launch waves, rocket settings and message stages in one named bundle,
loadable from YAML files
"""

import copy
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..core.easing import get_easing
from ..core.palette import Color, parse_color
from ..core.variants import get_variant
from .sequencer import StageSpec


# ============================================================================
# Preset Data Structures
# ============================================================================

@dataclass
class WaveSpec:
    """A staggered run of ignitions"""
    variant: str = "standard"
    count: int = 8
    start_ms: float = 0.0
    spacing_ms: float = 300.0
    jitter_ms: float = 0.0

    # Spawn region as canvas fractions: (x_min, x_max, y_min, y_max)
    region: Tuple[float, float, float, float] = (0.0, 1.0, 0.1, 0.7)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WaveSpec':
        valid_fields = {f for f in cls.__dataclass_fields__}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        if 'region' in filtered:
            filtered['region'] = tuple(float(v) for v in filtered['region'])
        return cls(**filtered)


@dataclass
class RocketSpec:
    """Rocket ascent followed by a cluster of bursts at the target"""
    duration_ms: float = 1500.0
    easing: str = "easeInQuad"

    # Canvas fractions
    start: Tuple[float, float] = (0.5, 1.0)
    target: Tuple[float, float] = (0.5, 0.3)

    cluster_variant: str = "enhanced"
    cluster_count: int = 3
    cluster_spacing_ms: float = 200.0
    cluster_jitter_px: float = 40.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RocketSpec':
        valid_fields = {f for f in cls.__dataclass_fields__}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        for key in ('start', 'target'):
            if key in filtered:
                filtered[key] = tuple(float(v) for v in filtered[key])
        return cls(**filtered)


@dataclass
class ShowPreset:
    """A complete show configuration"""

    name: str
    description: str = ""

    # Canvas / timing
    width: int = 800
    height: int = 600
    fps: int = 60
    background: str = "#1A1A2E"
    fade_alpha: float = 0.1

    # Launch
    launcher_text: str = "Click me!"
    waves: List[WaveSpec] = field(default_factory=lambda: [WaveSpec()])
    rocket: Optional[RocketSpec] = None

    # Messages, in order; the last one floats forever
    messages: List[StageSpec] = field(default_factory=list)

    # Ambient drifting dots before launch
    ambient_count: int = 20

    tags: List[str] = field(default_factory=list)

    @property
    def background_color(self) -> Color:
        return parse_color(self.background)

    @property
    def total_bursts(self) -> int:
        count = sum(w.count for w in self.waves)
        if self.rocket is not None:
            count += self.rocket.cluster_count
        return count

    def validate(self):
        """
        Check names and ranges.

        Raises:
            ValueError: On an unusable configuration
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Preset '{self.name}': canvas size must be positive")
        if not 0.0 < self.fade_alpha <= 1.0:
            raise ValueError(f"Preset '{self.name}': fade_alpha must be in (0, 1]")
        if self.total_bursts <= 0:
            raise ValueError(f"Preset '{self.name}': show launches no bursts")
        if not self.messages:
            raise ValueError(f"Preset '{self.name}': at least one message is required")
        for wave in self.waves:
            get_variant(wave.variant)
            if wave.count < 0:
                raise ValueError(f"Preset '{self.name}': wave count must not be negative")
            if len(wave.region) != 4:
                raise ValueError(
                    f"Preset '{self.name}': wave region needs 4 values "
                    f"(x_min, x_max, y_min, y_max), got {len(wave.region)}"
                )
        if self.rocket is not None:
            get_variant(self.rocket.cluster_variant)
            get_easing(self.rocket.easing)
        for stage in self.messages:
            for easing in (stage.entry_easing, stage.float_easing, stage.exit_easing):
                get_easing(easing)
        parse_color(self.background)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        data = asdict(self)
        data['waves'] = [
            {**asdict(w), 'region': list(w.region)} for w in self.waves
        ]
        if self.rocket is not None:
            rocket = asdict(self.rocket)
            rocket['start'] = list(self.rocket.start)
            rocket['target'] = list(self.rocket.target)
            data['rocket'] = rocket
        data['messages'] = [m.to_dict() for m in self.messages]
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ShowPreset':
        """Create from dictionary"""
        data = copy.deepcopy(data)
        valid_fields = {f for f in cls.__dataclass_fields__}
        filtered = {k: v for k, v in data.items() if k in valid_fields}

        if 'waves' in filtered:
            filtered['waves'] = [WaveSpec.from_dict(w) for w in filtered['waves']]
        if filtered.get('rocket') is not None:
            filtered['rocket'] = RocketSpec.from_dict(filtered['rocket'])
        if 'messages' in filtered:
            filtered['messages'] = [
                StageSpec(text=m) if isinstance(m, str) else StageSpec.from_dict(m)
                for m in filtered['messages']
            ]

        return cls(**filtered)


# ============================================================================
# Built-in Presets
# ============================================================================

_FINAL_STAGE = {
    "entry": {"opacity": [0, 1], "scale": [0.5, 1], "rotate_y": [90, 0]},
    "float_amplitude": 8,
    "float_duration": 3000,
}

BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    "classic": {
        "name": "classic",
        "description": "Eight bursts at 300ms, then a two-part message",
        "waves": [
            {"variant": "standard", "count": 8, "spacing_ms": 300},
        ],
        "messages": [
            {"text": "Surprise!"},
            {"text": "Have a wonderful day", "font_size": 40, **_FINAL_STAGE},
        ],
        "tags": ["standard", "short"],
    },

    "anime": {
        "name": "anime",
        "description": "Rocket launch, star-burst cluster and a full mixed show",
        "launcher_text": "Launch!",
        "rocket": {
            "duration_ms": 1500,
            "easing": "easeInQuad",
            "target": [0.5, 0.3],
            "cluster_count": 3,
            "cluster_spacing_ms": 200,
            "cluster_jitter_px": 40,
        },
        "waves": [
            {"variant": "enhanced", "count": 15, "start_ms": 600,
             "spacing_ms": 300, "jitter_ms": 200},
            {"variant": "standard", "count": 8, "start_ms": 900,
             "spacing_ms": 500, "jitter_ms": 150},
        ],
        "messages": [
            {"text": "Thank you"},
            {"text": "for being amazing",
             "entry": {"opacity": [0, 1], "scale": [0.5, 1], "rotate_y": [-90, 0]}},
            {"text": "Happy New Year!", "font_size": 56, **_FINAL_STAGE},
        ],
        "tags": ["enhanced", "rocket", "long"],
    },

    "finale": {
        "name": "finale",
        "description": "Dense overlapping waves of both variants",
        "waves": [
            {"variant": "enhanced", "count": 10, "spacing_ms": 200, "jitter_ms": 100},
            {"variant": "standard", "count": 12, "start_ms": 100,
             "spacing_ms": 150, "jitter_ms": 100},
            {"variant": "enhanced", "count": 6, "start_ms": 2500,
             "spacing_ms": 80, "region": [0.3, 0.7, 0.15, 0.4]},
        ],
        "messages": [
            {"text": "That's all", "hold_ms": 2500},
            {"text": "folks!", "font_size": 64, **_FINAL_STAGE},
        ],
        "tags": ["mixed", "dense"],
    },
}


# ============================================================================
# Preset Manager
# ============================================================================

class PresetManager:
    """Built-in presets plus user presets from a directory of YAML files"""

    def __init__(self, user_presets_dir: Optional[Path] = None):
        if user_presets_dir is None:
            user_presets_dir = Path.home() / '.skyburst' / 'presets'

        self.user_presets_dir = Path(user_presets_dir)
        self._presets: Dict[str, ShowPreset] = {}

        self._load_builtin_presets()
        self._load_user_presets()

    def _load_builtin_presets(self) -> None:
        for name, data in BUILTIN_PRESETS.items():
            self._presets[name] = ShowPreset.from_dict(data)

    def _load_user_presets(self) -> None:
        if not self.user_presets_dir.exists():
            return

        for yaml_file in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                with open(yaml_file, 'r') as f:
                    data = yaml.safe_load(f)
                if not isinstance(data, dict):
                    raise ValueError("top level must be a mapping")
                data.setdefault('name', yaml_file.stem)
                preset = ShowPreset.from_dict(data)
                preset.validate()
                self._presets[preset.name] = preset
            except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
                print(f"Warning: Could not load preset file {yaml_file}: {e}")

    def get(self, name: str) -> Optional[ShowPreset]:
        """Get a copy of a preset by name"""
        preset = self._presets.get(name)
        return copy.deepcopy(preset) if preset else None

    def exists(self, name: str) -> bool:
        return name in self._presets

    def list_all(self) -> List[str]:
        return sorted(self._presets.keys())

    def list_by_tag(self, tag: str) -> List[str]:
        return sorted(n for n, p in self._presets.items() if tag in p.tags)

    def list_tags(self) -> List[str]:
        tags = set()
        for preset in self._presets.values():
            tags.update(preset.tags)
        return sorted(tags)

    def search(self, query: str) -> List[str]:
        """Search names, descriptions and tags"""
        query = query.lower()
        return sorted(
            name for name, p in self._presets.items()
            if query in name.lower()
            or query in p.description.lower()
            or any(query in t.lower() for t in p.tags)
        )

    def save_preset(self, preset: ShowPreset, filename: Optional[str] = None) -> Path:
        """
        Save a preset to the user presets directory.

        Returns:
            Path to the written file
        """
        preset.validate()
        self.user_presets_dir.mkdir(parents=True, exist_ok=True)

        filename = filename or f"{preset.name}.yaml"
        if not filename.endswith('.yaml'):
            filename += '.yaml'

        path = self.user_presets_dir / filename
        with open(path, 'w') as f:
            yaml.safe_dump(preset.to_dict(), f, default_flow_style=False, sort_keys=False)

        self._presets[preset.name] = copy.deepcopy(preset)
        return path

    def get_preset_info(self, name: str) -> Optional[Dict[str, Any]]:
        preset = self._presets.get(name)
        if preset is None:
            return None
        return {
            'name': preset.name,
            'description': preset.description,
            'size': f"{preset.width}x{preset.height}",
            'bursts': preset.total_bursts,
            'rocket': preset.rocket is not None,
            'waves': [
                f"{w.count}x {w.variant} from {w.start_ms:g}ms every {w.spacing_ms:g}ms"
                for w in preset.waves
            ],
            'messages': [m.text for m in preset.messages],
            'tags': preset.tags,
        }


_manager: Optional[PresetManager] = None


def get_preset_manager() -> PresetManager:
    """Shared manager for the default user directory"""
    global _manager
    if _manager is None:
        _manager = PresetManager()
    return _manager


def get_preset(name: str) -> Optional[ShowPreset]:
    return get_preset_manager().get(name)


def list_presets(tag: Optional[str] = None) -> List[str]:
    manager = get_preset_manager()
    if tag:
        return manager.list_by_tag(tag)
    return manager.list_all()
