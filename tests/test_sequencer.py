import pytest

from skyburst.show.sequencer import MessageSequencer, StagePhase, StageSpec


@pytest.fixture
def stages():
    return [StageSpec("Thank you"), StageSpec("for being amazing"), StageSpec("Happy New Year!")]


@pytest.fixture
def finished():
    return []


@pytest.fixture
def seq(stages, manual_tweens, manual_clock, finished):
    return MessageSequencer(
        stages, manual_tweens, manual_clock,
        center=(400, 300), on_finished=lambda: finished.append(True),
    )


def test_overlays_start_hidden(seq):
    assert [o.name for o in seq.overlays] == ['message1', 'message2', 'message3']
    assert all(o.opacity == 0 for o in seq.overlays)
    assert seq.overlays[0].position == (400, 300)
    assert seq.phase == StagePhase.PENDING


def test_start_only_once(seq, manual_tweens):
    assert seq.start()
    assert not seq.start()
    assert len(manual_tweens.calls) == 1


def test_entry_tween(seq, manual_tweens):
    seq.start()
    call = manual_tweens.calls[0]
    assert call['target'] is seq.overlays[0]
    assert call['properties'] == {'opacity': (0.0, 1.0), 'scale': (0.5, 1.0)}
    assert call['duration'] == 1500
    assert call['easing'] == 'easeOutElastic(1, .8)'
    assert seq.current_stage == 0
    assert seq.phase == StagePhase.ENTERING


def test_full_chain(seq, manual_tweens, manual_clock, finished):
    seq.start()

    for stage in range(2):
        entry = len(manual_tweens.calls) - 1
        manual_tweens.complete(entry)
        assert seq.phase == StagePhase.HOLDING

        float_call = manual_tweens.calls[-1]
        assert float_call['direction'] == 'alternate'
        assert float_call['loop'] == 3
        assert float_call['properties'] == {'translate_y': (-5.0, 5.0)}
        assert manual_clock.timers[-1][0] == 4000

        manual_clock.fire(len(manual_clock.timers) - 1)
        assert seq.phase == StagePhase.EXITING
        exit_call = manual_tweens.calls[-1]
        assert exit_call['target'] is seq.overlays[stage]
        assert exit_call['properties'] == {'opacity': (1.0, 0.0), 'scale': (1.0, 0.8)}
        assert exit_call['easing'] == 'easeInQuad'

        manual_tweens.complete(len(manual_tweens.calls) - 1)
        assert seq.current_stage == stage + 1
        assert seq.phase == StagePhase.ENTERING

    assert finished == []
    manual_tweens.complete(len(manual_tweens.calls) - 1)
    assert seq.phase == StagePhase.FLOATING
    assert seq.finished
    assert finished == [True]
    assert manual_tweens.calls[-1]['loop'] is True

    assert seq.transitions == [
        (0, StagePhase.ENTERING), (0, StagePhase.HOLDING), (0, StagePhase.EXITING),
        (1, StagePhase.ENTERING), (1, StagePhase.HOLDING), (1, StagePhase.EXITING),
        (2, StagePhase.ENTERING), (2, StagePhase.FLOATING),
    ]


def test_stale_completion_ignored(seq, manual_tweens, manual_clock):
    seq.start()
    manual_tweens.complete(0)
    assert seq.phase == StagePhase.HOLDING

    # the entry tween completing again must not restart the hold
    manual_tweens.complete(0)
    assert len(manual_clock.timers) == 1
    assert seq.transitions[-1] == (0, StagePhase.HOLDING)

    manual_clock.fire(0)
    manual_clock.fire(0)
    exits = [c for c in manual_tweens.calls if c['easing'] == 'easeInQuad']
    assert len(exits) == 1

    seq.on_stage_complete(2, StagePhase.ENTERING)
    assert seq.current_stage == 0
    assert not seq.finished


def test_terminal_completion_fires_once(manual_tweens, manual_clock, finished):
    seq = MessageSequencer(
        [StageSpec("only")], manual_tweens, manual_clock,
        on_finished=lambda: finished.append(True),
    )
    seq.start()
    manual_tweens.complete(0)
    manual_tweens.complete(0)
    assert finished == [True]
    assert manual_clock.timers == []


def test_no_float_when_amplitude_zero(manual_tweens, manual_clock):
    seq = MessageSequencer(
        [StageSpec("a", float_amplitude=0), StageSpec("b")], manual_tweens, manual_clock,
    )
    seq.start()
    manual_tweens.complete(0)
    assert len(manual_tweens.calls) == 1
    assert seq.phase == StagePhase.HOLDING


def test_needs_stages(manual_tweens, manual_clock):
    with pytest.raises(ValueError):
        MessageSequencer([], manual_tweens, manual_clock)


def test_real_engine_order(clock, tweens):
    seq = MessageSequencer(
        [StageSpec("one", hold_ms=500), StageSpec("two")], tweens, clock, center=(100, 100),
    )
    seq.start()
    one, two = seq.overlays

    clock.advance(1500)
    assert one.opacity == pytest.approx(1.0)
    assert two.opacity == 0
    assert seq.phase == StagePhase.HOLDING

    clock.advance(500 + 1000 + 50)
    assert one.opacity == pytest.approx(0.0)
    assert seq.current_stage == 1

    clock.advance(1600)
    assert seq.finished
    assert two.opacity == pytest.approx(1.0)


def test_stage_spec_from_dict():
    spec = StageSpec.from_dict({
        'text': 'hi', 'font_size': 40, 'unknown': 1,
        'entry': {'opacity': [0, 1], 'rotate_y': [90, 0]},
    })
    assert spec.font_size == 40
    assert spec.entry == {'opacity': (0, 1), 'rotate_y': (90, 0)}
    assert StageSpec.from_dict(spec.to_dict()) == spec
