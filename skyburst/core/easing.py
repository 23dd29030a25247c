"""
Easing Curves

Progress curves for the launcher, rocket and message tweens.

Only ease-in curves are written out. The ease-out and ease-in-out forms are
mirrored from them, so every family gets all three:

    ease_out(t)    = 1 - ease_in(1 - t)
    ease_in_out(t) = ease_in(2t) / 2            for t < 0.5
                     1 - ease_in(2 - 2t) / 2    otherwise

Names are accepted in snake_case or in the camelCase used by web tween
libraries, with optional parameters:

    get_easing('easeOutElastic(1, .8)')   # amplitude=1, period=0.8
    get_easing('ease_in_out_sine')
"""

import re
from typing import Callable, Dict, Union

import numpy as np


EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    return t


# =============================================================================
# Ease-in curves
# =============================================================================

def ease_in_quad(t: float) -> float:
    return t ** 2


def ease_in_cubic(t: float) -> float:
    return t ** 3


def ease_in_sine(t: float) -> float:
    return 1 - np.cos(t * np.pi / 2)


def ease_in_back(t: float, overshoot: float = 1.70158) -> float:
    """Dips below zero first; the launcher uses it to wind up before vanishing"""
    return t ** 2 * ((overshoot + 1) * t - overshoot)


def ease_in_elastic(t: float, amplitude: float = 1.0, period: float = 0.5) -> float:
    """
    Spring curve.

    Args:
        amplitude: Overshoot size, clamped to at least 1
        period: Oscillation period as a fraction of the tween (smaller wobbles more)
    """
    if t <= 0 or t >= 1:
        return float(t)
    a = max(1.0, amplitude)
    p = min(2.0, max(0.1, period))
    phase = p / (2 * np.pi) * np.arcsin(1 / a)
    return -a * 2 ** (10 * (t - 1)) * np.sin((t - 1 - phase) * 2 * np.pi / p)


# =============================================================================
# Mirrored forms
# =============================================================================

def _mirror_out(curve: Callable[..., float]) -> Callable[..., float]:
    def ease_out(t: float, *args) -> float:
        return 1 - curve(1 - t, *args)
    ease_out.__name__ = curve.__name__.replace('_in_', '_out_')
    return ease_out


def _mirror_in_out(curve: Callable[..., float]) -> Callable[..., float]:
    def ease_in_out(t: float, *args) -> float:
        if t < 0.5:
            return curve(2 * t, *args) / 2
        return 1 - curve(2 - 2 * t, *args) / 2
    ease_in_out.__name__ = curve.__name__.replace('_in_', '_in_out_')
    return ease_in_out


ease_out_quad = _mirror_out(ease_in_quad)
ease_in_out_quad = _mirror_in_out(ease_in_quad)
ease_out_cubic = _mirror_out(ease_in_cubic)
ease_in_out_cubic = _mirror_in_out(ease_in_cubic)
ease_out_sine = _mirror_out(ease_in_sine)
ease_in_out_sine = _mirror_in_out(ease_in_sine)
ease_out_back = _mirror_out(ease_in_back)
ease_in_out_back = _mirror_in_out(ease_in_back)
ease_out_elastic = _mirror_out(ease_in_elastic)
ease_in_out_elastic = _mirror_in_out(ease_in_elastic)


EASING_FUNCTIONS: Dict[str, EasingFunc] = {'linear': linear}
for _family in ('quad', 'cubic', 'sine', 'back', 'elastic'):
    for _form in ('in', 'out', 'in_out'):
        _name = f'ease_{_form}_{_family}'
        EASING_FUNCTIONS[_name] = globals()[_name]
del _family, _form, _name


# =============================================================================
# Lookup
# =============================================================================

_EASING_NAME = re.compile(r'^\s*([A-Za-z_]+)\s*(?:\((.*)\))?\s*$')
_UPPER = re.compile(r'(?<!^)(?=[A-Z])')


def _snake(name: str) -> str:
    """'easeOutElastic' -> 'ease_out_elastic'"""
    if '_' in name:
        return name.lower()
    return _UPPER.sub('_', name).lower()


def _bind(func: Callable[..., float], params) -> EasingFunc:
    def bound(t: float) -> float:
        return func(t, *params)
    bound.__name__ = func.__name__
    return bound


def get_easing(name: str) -> EasingFunc:
    """
    Resolve an easing name, with optional parameters, to a function of t.

    Raises:
        ValueError: If the name is unknown or its parameters aren't numbers
    """
    match = _EASING_NAME.match(name)
    if not match:
        raise ValueError(f"Malformed easing '{name}'")

    base, params = match.groups()
    func = EASING_FUNCTIONS.get(_snake(base))
    if func is None:
        known = ', '.join(sorted(EASING_FUNCTIONS))
        raise ValueError(f"Unknown easing '{name}'. Known: {known}")

    if params and params.strip():
        try:
            args = [float(p) for p in params.split(',')]
        except ValueError:
            raise ValueError(f"Bad easing parameters in '{name}'") from None
        func = _bind(func, args)
    return func


def ease(t: float, easing: Union[str, EasingFunc] = 'linear') -> float:
    """Eased value of progress t, clamped to 0-1 first"""
    if isinstance(easing, str):
        easing = get_easing(easing)
    return float(easing(min(1.0, max(0.0, float(t)))))


def ease_range(
    t: float,
    start: float,
    end: float,
    easing: Union[str, EasingFunc] = 'linear'
) -> float:
    return start + (end - start) * ease(t, easing)
