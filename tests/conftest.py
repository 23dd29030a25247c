import numpy as np
import pytest

from skyburst.core.renderer import RecordingRenderer, Renderer
from skyburst.show.clock import FrameClock
from skyburst.show.tween import TweenEngine


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def recorder():
    return RecordingRenderer()


@pytest.fixture
def clock():
    return FrameClock(fps=60)


@pytest.fixture
def tweens(clock):
    return TweenEngine(clock)


class ManualTweens:
    """Records animate() calls; completions are fired by the test"""

    def __init__(self):
        self.calls = []

    def animate(self, target, properties, duration, easing='linear',
                direction='normal', loop=1, on_complete=None, delay=0.0):
        self.calls.append({
            'target': target,
            'properties': dict(properties),
            'duration': duration,
            'easing': easing,
            'direction': direction,
            'loop': loop,
            'on_complete': on_complete,
        })
        return len(self.calls) - 1

    def complete(self, index):
        callback = self.calls[index]['on_complete']
        if callback is not None:
            callback()

    def completing(self):
        return [i for i, c in enumerate(self.calls) if c['on_complete'] is not None]


class ManualClock:
    """set_timeout that only records; timers are fired by the test"""

    def __init__(self):
        self.timers = []
        self.ticks = []

    def set_timeout(self, callback, delay_ms=0.0):
        self.timers.append((delay_ms, callback))

    def request_tick(self, callback):
        self.ticks.append(callback)

    def fire(self, index):
        self.timers[index][1]()


@pytest.fixture
def manual_tweens():
    return ManualTweens()


@pytest.fixture
def manual_clock():
    return ManualClock()


class EventRenderer(Renderer):
    """Counts requests and keeps the per-frame event order, without storing draw calls"""

    def __init__(self):
        self.frames = []
        self.draws = 0
        self.fade_args = None

    def begin_frame(self):
        self.frames.append([])

    def fade(self, color, alpha):
        self.fade_args = (color, alpha)
        self.frames[-1].append('fade')

    def clear(self, color):
        self.frames[-1].append('clear')

    def draw_shape(self, x, y, size, color, alpha=1.0, shape='circle', rotation=0.0, glow=0.0):
        self.draws += 1
        frame = self.frames[-1]
        if not frame or frame[-1] != 'draw':
            frame.append('draw')


@pytest.fixture
def events():
    return EventRenderer()
