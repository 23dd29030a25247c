"""
Frame Clock - per-frame callbacks and one-shot timers on a virtual timeline

The clock never sleeps. Whoever owns it feeds time in: the headless runner
steps it in fixed 1000/fps increments, the pygame preview feeds real elapsed
time. Within one step the order is:

1. timers that are due, by due time then scheduling order
2. frame callbacks requested so far (one requested from inside a frame
   callback waits for the next step)
3. frame listeners (tween engine, recorders)
"""

import heapq
import itertools
from typing import Callable, List, Optional, Tuple


FrameCallback = Callable[[float], None]
TimerCallback = Callable[[], None]

EPSILON = 1e-6


class FrameClock:
    """
    Animation clock with request_tick / set_timeout semantics.

    Example:
        clock = FrameClock(fps=60)
        clock.set_timeout(lambda: print("boom"), 300)
        clock.advance(1000)    # runs ~60 frames, fires the timer at 300ms
    """

    def __init__(self, fps: int = 60):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.fps = fps
        self.frame_ms = 1000.0 / fps
        self.now = 0.0
        self.frame_count = 0

        self._frame_callbacks: List[FrameCallback] = []
        self._timers: List[Tuple[float, int, TimerCallback]] = []
        self._seq = itertools.count()
        self._listeners: List[FrameCallback] = []

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def request_tick(self, callback: FrameCallback):
        """Run `callback(now)` once, on the next frame"""
        self._frame_callbacks.append(callback)

    def set_timeout(self, callback: TimerCallback, delay_ms: float = 0.0):
        """Run `callback()` once `delay_ms` from now. Cannot be cancelled."""
        due = self.now + max(0.0, delay_ms)
        heapq.heappush(self._timers, (due, next(self._seq), callback))

    def add_frame_listener(self, listener: FrameCallback):
        """Call `listener(now)` at the end of every frame"""
        self._listeners.append(listener)

    def remove_frame_listener(self, listener: FrameCallback):
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    @property
    def tick_requested(self) -> bool:
        return bool(self._frame_callbacks)

    # -------------------------------------------------------------------------
    # Driving time
    # -------------------------------------------------------------------------

    def _fire_timers(self):
        # Timers scheduled while firing run too if they are already due
        while self._timers and self._timers[0][0] <= self.now + EPSILON:
            _, _, callback = heapq.heappop(self._timers)
            callback()

    def step(self, dt_ms: Optional[float] = None):
        """Advance one frame"""
        self.now += self.frame_ms if dt_ms is None else dt_ms
        self.frame_count += 1

        self._fire_timers()

        callbacks, self._frame_callbacks = self._frame_callbacks, []
        for callback in callbacks:
            callback(self.now)

        for listener in list(self._listeners):
            listener(self.now)

    def advance(self, ms: float):
        """Advance `ms` of time in whole frames, landing exactly on now + ms"""
        if ms < 0:
            raise ValueError(f"Cannot advance by a negative time: {ms}")
        target = self.now + ms
        while target - self.now > EPSILON:
            remaining = target - self.now
            # last frame lands exactly on target
            self.step(remaining if remaining < self.frame_ms + EPSILON else None)
        self.now = target

    def run_until(self, predicate: Callable[[], bool], max_ms: float) -> bool:
        """
        Step frames until `predicate()` is true or `max_ms` elapses.

        Returns:
            True if the predicate was satisfied
        """
        deadline = self.now + max_ms
        while not predicate():
            if self.now >= deadline - EPSILON:
                return False
            self.step()
        return True
