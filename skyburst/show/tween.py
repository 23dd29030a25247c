"""
Tween Engine - property interpolation with completion callbacks

Animates numeric attributes (or dict keys) of any target object:

    tweens.animate(
        overlay,
        {'opacity': (0, 1), 'scale': (0.5, 1)},
        duration=1500,
        easing='easeOutElastic(1, .8)',
        on_complete=show_next,
    )

Directions: 'normal', 'reverse', 'alternate' (every odd iteration plays
backwards). `loop` is an iteration count, or True to run forever. A tween's
on_complete fires at most once; endless tweens never complete.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from ..core.easing import EasingFunc, ease_range, get_easing


DIRECTIONS = ('normal', 'reverse', 'alternate')


def _set_value(target: Any, name: str, value: float):
    if isinstance(target, dict):
        target[name] = value
    else:
        setattr(target, name, value)


@dataclass
class Tween:
    """A running property animation"""
    target: Any
    properties: Dict[str, Sequence[float]]
    duration: float
    easing: EasingFunc
    direction: str = 'normal'
    loop: Union[int, bool] = 1
    on_complete: Optional[Callable[[], None]] = None
    start_time: float = 0.0
    completed: bool = False
    cancelled: bool = field(default=False, repr=False)

    @property
    def iterations(self) -> Optional[int]:
        """Total iterations, None when endless"""
        if self.loop is True:
            return None
        if self.loop is False:
            return 1
        return max(1, int(self.loop))

    def _is_reversed(self, iteration: int) -> bool:
        if self.direction == 'reverse':
            return True
        return self.direction == 'alternate' and iteration % 2 == 1

    def _apply(self, iteration: int, local_t: float):
        t = 1.0 - local_t if self._is_reversed(iteration) else local_t
        for name, (start, end) in self.properties.items():
            _set_value(self.target, name, ease_range(t, start, end, self.easing))

    def seek(self, now: float) -> bool:
        """
        Set properties for time `now`.

        Returns:
            True once the last iteration has played out
        """
        elapsed = now - self.start_time
        if elapsed < 0:
            return False

        iteration = int(elapsed // self.duration)
        total = self.iterations
        if total is not None and iteration >= total:
            self._apply(total - 1, 1.0)
            return True

        self._apply(iteration, (elapsed % self.duration) / self.duration)
        return False


class TweenEngine:
    """
    Drives tweens from a FrameClock (or manual update(now) calls).

    Example:
        clock = FrameClock()
        tweens = TweenEngine(clock)
        tweens.animate(obj, {'x': (0, 100)}, duration=500)
        clock.advance(500)    # obj.x == 100
    """

    def __init__(self, clock=None):
        self.now = 0.0
        self._clock = clock
        self._active: List[Tween] = []
        if clock is not None:
            self.now = clock.now
            clock.add_frame_listener(self.update)

    def _current_time(self) -> float:
        # Tweens started from timer callbacks mid-frame use the clock time
        return self._clock.now if self._clock is not None else self.now

    def animate(
        self,
        target: Any,
        properties: Dict[str, Sequence[float]],
        duration: float,
        easing: Union[str, EasingFunc] = 'linear',
        direction: str = 'normal',
        loop: Union[int, bool] = 1,
        on_complete: Optional[Callable[[], None]] = None,
        delay: float = 0.0
    ) -> Tween:
        """
        Start animating `properties` ({name: (start, end)}) on `target`.

        Start values are applied immediately unless a delay is given.

        Raises:
            ValueError: On a non-positive duration, unknown direction or easing
        """
        if duration <= 0:
            raise ValueError(f"Tween duration must be positive, got {duration}")
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction '{direction}'. Available: {', '.join(DIRECTIONS)}")
        if isinstance(easing, str):
            easing = get_easing(easing)

        now = self._current_time()
        tween = Tween(
            target=target,
            properties={k: (float(v[0]), float(v[1])) for k, v in properties.items()},
            duration=float(duration),
            easing=easing,
            direction=direction,
            loop=loop,
            on_complete=on_complete,
            start_time=now + delay,
        )
        if delay <= 0:
            tween.seek(now)
        self._active.append(tween)
        return tween

    def update(self, now: float):
        """Advance all tweens to time `now`"""
        self.now = now
        for tween in list(self._active):
            if tween.cancelled:
                continue
            if tween.seek(now):
                self._finish(tween)

    def finish(self, tween: Tween):
        """Jump a tween to its end state and complete it now"""
        if tween.completed or tween.cancelled:
            return
        total = tween.iterations
        if total is not None:
            tween._apply(total - 1, 1.0)
        self._finish(tween)

    def cancel(self, tween: Tween):
        """Stop a tween without completing it"""
        tween.cancelled = True
        if tween in self._active:
            self._active.remove(tween)

    def _finish(self, tween: Tween):
        if tween.completed:
            return
        tween.completed = True
        if tween in self._active:
            self._active.remove(tween)
        if tween.on_complete is not None:
            tween.on_complete()

    def tweens_of(self, target: Any) -> List[Tween]:
        return [t for t in self._active if t.target is target]

    @property
    def active(self) -> List[Tween]:
        return list(self._active)
