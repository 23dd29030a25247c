import pytest
import yaml

from skyburst.show.presets import (
    BUILTIN_PRESETS, PresetManager, RocketSpec, ShowPreset, WaveSpec,
)
from skyburst.show.sequencer import StageSpec


@pytest.fixture
def manager(tmp_path):
    return PresetManager(tmp_path / "presets")


def test_builtins_valid(manager):
    assert manager.list_all() == sorted(BUILTIN_PRESETS)
    for name in manager.list_all():
        manager.get(name).validate()


def test_classic_matches_default_show(manager):
    preset = manager.get('classic')
    assert preset.total_bursts == 8
    assert preset.waves[0].spacing_ms == 300
    assert preset.waves[0].jitter_ms == 0
    assert [m.text for m in preset.messages] == ["Surprise!", "Have a wonderful day"]
    assert preset.background_color == (26, 26, 46)
    assert preset.rocket is None


def test_anime_has_rocket(manager):
    preset = manager.get('anime')
    assert isinstance(preset.rocket, RocketSpec)
    assert preset.total_bursts == 3 + 15 + 8
    assert len(preset.messages) == 3


def test_get_returns_copy(manager):
    preset = manager.get('classic')
    preset.waves[0].count = 99
    assert manager.get('classic').waves[0].count == 8
    assert manager.get('nope') is None


def test_save_and_reload(manager):
    preset = manager.get('anime')
    preset.name = 'mine'
    preset.tags = ['custom']
    path = manager.save_preset(preset)
    assert path.name == 'mine.yaml'

    reloaded = PresetManager(manager.user_presets_dir).get('mine')
    assert reloaded == preset


def test_user_yaml_with_string_messages(tmp_path):
    presets_dir = tmp_path / "presets"
    presets_dir.mkdir()
    (presets_dir / "party.yaml").write_text(yaml.safe_dump({
        'description': 'Tiny party',
        'waves': [{'variant': 'anime', 'count': 3, 'region': [0.2, 0.8, 0.1, 0.5]}],
        'messages': ['Hi', 'Bye'],
    }))
    manager = PresetManager(presets_dir)

    preset = manager.get('party')
    assert preset.waves[0].region == (0.2, 0.8, 0.1, 0.5)
    assert [m.text for m in preset.messages] == ['Hi', 'Bye']
    assert manager.search('tiny') == ['party']


def test_bad_user_file_skipped(tmp_path, capsys):
    presets_dir = tmp_path / "presets"
    presets_dir.mkdir()
    (presets_dir / "broken.yaml").write_text("waves: [{variant: laser}]\nmessages: [x]\n")
    (presets_dir / "junk.yaml").write_text("- just\n- a list\n")
    (presets_dir / "easing.yaml").write_text("messages: [{text: x, exit_easing: easeSideways}]\n")
    (presets_dir / "region.yaml").write_text("waves: [{region: [0, 1, 0.2]}]\nmessages: [x]\n")
    manager = PresetManager(presets_dir)

    assert not manager.exists('broken')
    assert not manager.exists('junk')
    assert not manager.exists('easing')
    assert not manager.exists('region')
    assert "Warning" in capsys.readouterr().out


@pytest.mark.parametrize("changes", [
    {'width': 0},
    {'fade_alpha': 0.0},
    {'messages': []},
    {'waves': []},
    {'waves': [WaveSpec(variant='laser')]},
    {'background': '#12'},
    {'waves': [WaveSpec(region=(0.0, 1.0, 0.2))]},
    {'waves': [WaveSpec(count=-1), WaveSpec()]},
    {'messages': [StageSpec('x', exit_easing='easeSideways')]},
    {'messages': [StageSpec('x', float_easing='easeInQuad(a)')]},
    {'rocket': RocketSpec(easing='bounce')},
])
def test_validate_rejects(changes):
    data = dict(name='bad', messages=[StageSpec('x')])
    data.update(changes)
    with pytest.raises(ValueError):
        ShowPreset(**data).validate()


def test_tags_and_info(manager):
    assert 'rocket' in manager.list_tags()
    assert manager.list_by_tag('rocket') == ['anime']

    info = manager.get_preset_info('classic')
    assert info['bursts'] == 8
    assert info['size'] == '800x600'
    assert manager.get_preset_info('nope') is None
