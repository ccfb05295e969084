"""Built-in parametric curves and the selection of where curve points come from.

A frame is always built from exactly one ``CurveSource``:

- ``Parametric``  a pair of functions x(t), y(t) on [-pi, pi]
- ``DrawnPoints`` points drawn by hand, already in mathematical orientation
- ``TermsSource`` a user-authored sparse Fourier series

User-authored sources that are too small to analyse fall back to the
default curve (the unit circle).
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .constants import MINIMUM_POINT_COUNT
from .integration import sample
from .terms import sample_terms

logger = logging.getLogger(__name__)


class WaveFunctionType(Enum):
    SINE = "Sine"
    SQUARE = "Square"
    SQUARE_FOURIER = "Square Fourier"
    TRIANGLE = "Triangle"
    TRIANGLE_FOURIER = "Triangle Fourier"
    SAWTOOTH = "Sawtooth"
    SAWTOOTH_FOURIER = "Sawtooth Fourier"


# unit wave functions take the phase p in [0, 1) and have values in [-1, 1]

def sine(p):
    return np.sin(2 * np.pi * p)


def square(p):
    return np.where(p < 0.5, 1.0, -1.0)


def triangle(p):
    p = np.asarray(p, dtype=float)
    return np.where(p < 0.25, 4 * p, np.where(p < 0.75, -4 * p + 2, 4 * p - 4))


def sawtooth(p):
    return np.asarray(p, dtype=float)


def square_fourier_series(p, n):
    total = 0.0
    for a in range(1, 2 * n, 2):
        total = total + np.sin(2 * a * np.pi * p) / a
    return (4.0 / np.pi) * total


def triangle_fourier_series(p, n):
    total = 0.0
    for a in range(1, n + 1, 2):
        total = total + ((-1) ** ((a - 1) // 2) / a ** 2) * np.sin(2 * a * np.pi * p)
    return (8.0 / np.pi ** 2) * total


def sawtooth_fourier_series(p, n):
    total = 0.0
    for i in range(1, n + 1):
        total = total + np.sin(i * 2.0 * np.pi * p) / i
    return 0.5 - total / np.pi


WAVE_FOURIER_TERM_COUNT = 3


def unit_function(wave_type):
    n = WAVE_FOURIER_TERM_COUNT
    return {
        WaveFunctionType.SINE: sine,
        WaveFunctionType.SQUARE: square,
        WaveFunctionType.TRIANGLE: triangle,
        WaveFunctionType.SAWTOOTH: sawtooth,
        WaveFunctionType.SQUARE_FOURIER: lambda p: square_fourier_series(p, n),
        WaveFunctionType.TRIANGLE_FOURIER: lambda p: triangle_fourier_series(p, n),
        WaveFunctionType.SAWTOOTH_FOURIER: lambda p: sawtooth_fourier_series(p, n),
    }[wave_type]


def wavefunction(t, frequency, amplitude, offset, wave_type):
    """amplitude * unit_wave(frac(frequency * t + offset))"""
    p = np.fmod(np.multiply(frequency, t) + offset, 1.0)
    return amplitude * unit_function(wave_type)(p)


def _wave_curve(wave_type):
    x = lambda t: t
    y = lambda t: wavefunction(t + np.pi, 1.0 / np.pi, np.pi / 2, 0.0, wave_type)
    return x, y


# Several from "Fifty Famous Curves"
CURVES = {
    "astroid": (lambda t: np.cos(t) ** 7, lambda t: np.sin(t) ** 7),
    "wave": (lambda t: (3 * t) ** 2, lambda t: 15 * t * np.cos(4 * t)),
    "loop": (lambda t: t * t * np.sin(t) * np.cos(t), lambda t: t * np.cos(t / 2)),
    "v": (lambda t: t ** 3, lambda t: (2 * t) ** 2),
    "heart": (
        lambda t: 16 * np.sin(t) ** 3,
        lambda t: 13 * np.cos(t) - 5 * np.cos(2 * t) - 2 * np.cos(3 * t) - np.cos(4 * t),
    ),
    "sine": _wave_curve(WaveFunctionType.SINE),
    "square": _wave_curve(WaveFunctionType.SQUARE),
    "triangle": _wave_curve(WaveFunctionType.TRIANGLE),
    "spiral": (
        lambda t: (t + np.pi) * np.cos(3 * (t + np.pi)),
        lambda t: (t + np.pi) * np.sin(3 * (t + np.pi)),
    ),
    "circle": (np.cos, np.sin),
}

DEFAULT_CURVE = "circle"


def sample_curve(count, x, y):
    """Points (x(t_i), y(t_i)) at the uniform times on [-pi, pi]."""
    return np.column_stack([sample(count, x), sample(count, y)])


@dataclass(frozen=True)
class Parametric:
    x: object
    y: object
    name: str = "parametric"

    @classmethod
    def named(cls, name):
        try:
            x, y = CURVES[name]
        except KeyError:
            raise ValueError(f"Unknown curve {name!r}, expected one of {sorted(CURVES)}") from None
        return cls(x, y, name)


@dataclass(frozen=True, eq=False)
class DrawnPoints:
    points: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))


@dataclass(frozen=True)
class TermsSource:
    terms: tuple = ()


def default_source():
    return Parametric.named(DEFAULT_CURVE)


def user_points(source, sample_count):
    if isinstance(source, DrawnPoints):
        return np.asarray(source.points, dtype=float).reshape(-1, 2)
    return sample_terms(sample_count, source.terms)


def raw_curve_points(source, sample_count):
    """Resolve ``source`` into raw points in mathematical orientation.

    Returns ``(points, too_few_points)``; ``too_few_points`` is set when a
    user-authored source was replaced by the default curve.
    """
    if isinstance(source, Parametric):
        return sample_curve(sample_count, source.x, source.y), False

    points = user_points(source, sample_count)
    if len(points) >= MINIMUM_POINT_COUNT:
        return points, False

    logger.warning("Only %d user points (need %d), using the %s curve",
                   len(points), MINIMUM_POINT_COUNT, DEFAULT_CURVE)
    fallback = default_source()
    return sample_curve(sample_count, fallback.x, fallback.y), True
