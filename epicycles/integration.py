"""Uniform sampling on [-pi, pi] and Simpson's-rule integration over it."""

import math

import numpy as np
from scipy import integrate as sp_integrate


def step_for_count(count):
    if count < 2:
        raise ValueError(f"Need at least 2 samples on [-pi, pi], got {count}")
    return (2 * math.pi) / (count - 1)


def sample_times(count):
    """Times t_i = i * step - pi, i = 0..count-1, both endpoints included."""
    step = step_for_count(count)
    return np.arange(count) * step - math.pi


def sample(count, f):
    """Evaluate ``f`` at ``count`` uniform times on [-pi, pi].

    ``f`` is called once with the whole array of times, so it should be
    written with numpy functions. A constant result is broadcast.
    """
    times = sample_times(count)
    values = np.asarray(f(times), dtype=float)
    return np.broadcast_to(values, times.shape).copy()


def cos_samples(n, count):
    return np.cos(n * sample_times(count))


def sin_samples(n, count):
    return np.sin(n * sample_times(count))


def integrate(samples):
    """Definite integral over [-pi, pi] of uniformly spaced samples.

    Uses composite Simpson's rule with step 2*pi/(count-1). An odd count
    gives the classic rule; for an even count scipy corrects the last
    interval instead of dropping it.
    """
    samples = np.asarray(samples, dtype=float)
    count = samples.shape[-1]
    if count < 3:
        raise ValueError(f"Simpson's rule needs at least 3 samples, got {count}")
    return float(sp_integrate.simpson(samples, dx=step_for_count(count)))
