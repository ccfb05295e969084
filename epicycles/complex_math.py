"""Complex arithmetic used by sampling, analysis and synthesis.

The helpers accept Python ``complex`` values as well as numpy complex
arrays, so the same code path serves a single time value and a whole
partition of times.
"""

import numpy as np


def complex_add(a, b):
    return a + b


def complex_multiply(a, b):
    # (x + yi)(u + vi) = (xu - yv) + (xv + yu)i
    return a * b


def unit_exponential(t, n):
    """Return e^(i n t) = cos(n t) + i sin(n t)."""
    nt = np.multiply(n, t)
    value = np.cos(nt) + 1j * np.sin(nt)
    if np.ndim(value) == 0:
        return complex(value)
    return value


def from_polar(amplitude, phase):
    """Coefficient amplitude * e^(i phase)."""
    return complex_multiply(amplitude, unit_exponential(phase, 1.0))
