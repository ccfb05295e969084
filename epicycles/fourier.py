"""Fourier analysis and synthesis of closed planar curves.

A curve (x(t), y(t)) on [-pi, pi] is read as the complex function
z(t) = x(t) + i y(t) with the series

    z(t) = sum_{n=-N}^{N} A_n e^(i n t),   A_n = (1/2pi) int z(t) e^(-i n t) dt

Coefficients are stored in a numpy complex array of length 2N+1 with
A_n at index n + N.
"""

import logging
import math

import numpy as np

from .complex_math import complex_add, complex_multiply, unit_exponential
from .constants import MAX_FOURIER_SERIES_TERMS
from .integration import cos_samples, integrate, sample_times, sin_samples
from .terms import highest_absolute_frequency_component

logger = logging.getLogger(__name__)


def term_count(coefficients):
    """N for a coefficient array of length 2N+1."""
    count = len(coefficients)
    if count == 0 or count % 2 == 0:
        raise ValueError(f"Coefficients need an odd length, got {count}")
    return (count - 1) // 2


def fourier_coefficient(n, x, y):
    """A_n of the sampled curve, from four real Simpson integrals."""
    count = len(x)
    cosn = cos_samples(n, count)
    sinn = sin_samples(n, count)

    # e^(-int) = cos(nt) - i sin(nt)
    cx = complex(integrate(x * cosn), -integrate(x * sinn)) / (2 * math.pi)
    cy = complex(integrate(y * cosn), -integrate(y * sinn)) / (2 * math.pi)

    # cx + i cy = (cx.re - cy.im) + i (cx.im + cy.re)
    return complex_add(cx, complex_multiply(1j, cy))


def estimate_coefficients(n_terms, points):
    """The 2N+1 coefficients of points sampled uniformly on [-pi, pi], A_n at index n + N."""
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    x, y = points[:, 0], points[:, 1]

    coefficients = np.zeros(2 * n_terms + 1, dtype=complex)
    for n in range(-n_terms, n_terms + 1):
        coefficients[n + n_terms] = fourier_coefficient(n, x, y)

    logger.debug("Estimated %d coefficients from %d points", len(coefficients), len(points))
    return coefficients


def chain_frequencies(n_terms):
    """Frequencies in chain order: 0, 1, -1, 2, -2, ..., N, -N."""
    frequencies = [0]
    for n in range(1, n_terms + 1):
        frequencies.extend([n, -n])
    return np.array(frequencies)


def series_terms(t, coefficients):
    """The 2N+1 vectors A_n e^(i n t) in chain order, constant term first.

    ``t`` may be a scalar or an array; an array adds a leading axis.
    """
    n_terms = term_count(coefficients)
    frequencies = chain_frequencies(n_terms)
    coefficients = np.asarray(coefficients, dtype=complex)
    eint = unit_exponential(np.expand_dims(t, -1), frequencies)
    return complex_multiply(coefficients[frequencies + n_terms], eint)


def epicycle_points(t, coefficients):
    """Tips of the vector chain at time ``t`` as points, shape (2N+1, 2).

    Element i is the running sum of the first i+1 chain vectors; the last
    element is the series value at ``t``.
    """
    sums = np.cumsum(series_terms(t, coefficients), axis=-1)
    return np.stack([sums.real, sums.imag], axis=-1)


def fourier_series_points(sample_count, coefficients):
    """The series sampled at ``sample_count`` uniform times on [-pi, pi]."""
    chains = epicycle_points(sample_times(sample_count), coefficients)
    return chains[:, -1, :]


def suggested_terms_for_sample_count(count):
    """N at the Nyquist frequency for ``count`` uniform samples of one period."""
    n = (count / (2 * math.pi)) / 2.0
    return min(max(int(n), 1), MAX_FOURIER_SERIES_TERMS)


def suggested_terms_for_terms(terms):
    # the terms are the Fourier series
    n = highest_absolute_frequency_component(terms)
    return min(max(int(n), 1), MAX_FOURIER_SERIES_TERMS)


def fourier_series_formula(coefficients, tolerance=1e-6):
    """Return the series as text, omitting negligible coefficients."""
    n_terms = term_count(coefficients)
    parts = []
    for n in chain_frequencies(n_terms):
        a = coefficients[n + n_terms]
        if abs(a) <= tolerance:
            continue
        coefficient = f"({a.real:+.3f}{a.imag:+.3f}i)"
        parts.append(coefficient if n == 0 else f"{coefficient} e^(i{n}t)")
    return "z(t) = " + (" + ".join(parts) if parts else "0")
