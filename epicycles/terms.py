"""User-authored Fourier series terms.

A term is one coefficient A_n = amplitude * e^(i phase) of the frequency
component n. A collection of terms with unique non-zero frequencies is
itself a sparse Fourier series, so sampling it needs no analysis step.
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .complex_math import complex_add, complex_multiply, from_polar, unit_exponential
from .constants import (
    DEFAULT_TERM_COLOR,
    FALLBACK_TERM_COLOR,
    MAX_AMPLITUDE,
    MAX_FREQUENCY_COMPONENT,
    MAX_PHASE,
    MIN_AMPLITUDE,
    MIN_FREQUENCY_COMPONENT,
    MIN_PHASE,
)
from .integration import sample_times

logger = logging.getLogger(__name__)


class TermError(ValueError):
    """A term was rejected by the editing rules."""


@dataclass(frozen=True)
class Term:
    amplitude: float = 0.5
    phase: float = 0.0
    frequency_component: int = 1
    color: tuple = DEFAULT_TERM_COLOR

    @property
    def coefficient(self):
        return from_polar(self.amplitude, self.phase)


def sample_terms(count, terms):
    """Sum of amplitude*e^(i phase)*e^(i n t) at the uniform times, as (Re, Im) points."""
    if len(terms) == 0:
        return np.empty((0, 2))

    times = sample_times(count)
    total = np.zeros(count, dtype=complex)
    for term in terms:
        eint = unit_exponential(times, term.frequency_component)
        total = complex_add(total, complex_multiply(term.coefficient, eint))
    return np.column_stack([total.real, total.imag])


def highest_absolute_frequency_component(terms):
    return max([1] + [abs(term.frequency_component) for term in terms])


def available_frequency_components(terms):
    existing = {term.frequency_component for term in terms}
    return [n for n in range(MIN_FREQUENCY_COMPONENT, MAX_FREQUENCY_COMPONENT + 1)
            if n != 0 and n not in existing]


def circle_index_for_frequency(n, n_terms):
    """Index of the epicycle circle drawn for frequency ``n``, or None.

    The chain is ordered 0, 1, -1, 2, -2, ..., N, -N and circle k joins chain
    points k and k+1, so n > 0 maps to 2n-1 and n < 0 to -2n, both shifted
    down by one. Frequencies above the current N have no circle.
    """
    if n == 0:
        return None
    k = (-2 * n if n < 0 else 2 * n - 1) - 1
    if 0 <= k < 2 * n_terms:
        return k
    return None


def circle_index_for_term(term, n_terms):
    return circle_index_for_frequency(term.frequency_component, n_terms)


def validate_term(term, terms=()):
    n = term.frequency_component
    if n == 0:
        raise TermError("Frequency component 0 is the constant term and cannot be edited")
    if not MIN_FREQUENCY_COMPONENT <= n <= MAX_FREQUENCY_COMPONENT:
        raise TermError(f"Frequency component {n} outside "
                        f"[{MIN_FREQUENCY_COMPONENT}, {MAX_FREQUENCY_COMPONENT}]")
    if not MIN_AMPLITUDE <= term.amplitude <= MAX_AMPLITUDE:
        raise TermError(f"Amplitude {term.amplitude} outside [{MIN_AMPLITUDE}, {MAX_AMPLITUDE}]")
    if not MIN_PHASE <= term.phase <= MAX_PHASE:
        raise TermError(f"Phase {term.phase} outside [{MIN_PHASE}, {MAX_PHASE}]")
    if any(other.frequency_component == n for other in terms):
        raise TermError(f"Frequency component {n} is already used")


def add_term(terms, term):
    """Return ``terms`` with ``term`` appended, raising TermError if it is invalid."""
    validate_term(term, terms)
    return tuple(terms) + (term,)


def remove_term(terms, index):
    terms = list(terms)
    del terms[index]
    return tuple(terms)


def random_term(terms, rng=None):
    """A term with random amplitude, phase and light color on a free frequency, or None."""
    rng = np.random.default_rng() if rng is None else rng
    available = available_frequency_components(terms)
    if not available:
        return None
    red, green, blue = rng.uniform(0.5, 1.0, size=3)
    return Term(
        amplitude=float(rng.uniform(0.0, 1.0)),
        phase=float(rng.uniform(0.0, 1.0)),
        frequency_component=int(rng.choice(available)),
        color=(float(red), float(green), float(blue), 1.0),
    )


def add_random_terms(terms, rng=None):
    """Append between 2 and 7 random terms while free frequencies remain."""
    rng = np.random.default_rng() if rng is None else rng
    terms = tuple(terms)
    for _ in range(int(rng.integers(2, 8))):
        term = random_term(terms, rng)
        if term is None:
            break
        terms = add_term(terms, term)
    return terms


# persistence shape: [{"amplitude", "phase", "frequencyComponent", "color": [r, g, b, a]}]

def _decode_color(value):
    if isinstance(value, (list, tuple)) and len(value) in (3, 4):
        try:
            rgba = [float(c) for c in value]
        except (TypeError, ValueError):
            return FALLBACK_TERM_COLOR
        if len(rgba) == 3:
            rgba.append(1.0)
        return tuple(rgba)
    return FALLBACK_TERM_COLOR


def terms_to_records(terms):
    return [{
        "amplitude": term.amplitude,
        "phase": term.phase,
        "frequencyComponent": term.frequency_component,
        "color": list(term.color),
    } for term in terms]


def terms_from_records(records):
    terms = []
    for record in records:
        terms.append(Term(
            amplitude=float(record["amplitude"]),
            phase=float(record["phase"]),
            frequency_component=int(record["frequencyComponent"]),
            color=_decode_color(record.get("color")),
        ))
    return tuple(terms)


def save_terms(path, terms):
    df = pd.DataFrame(terms_to_records(terms),
                      columns=["amplitude", "phase", "frequencyComponent", "color"])
    df.to_json(path, orient="records", double_precision=15)


def load_terms(path):
    df = pd.read_json(path, orient="records")
    if df.empty:
        return ()
    terms = terms_from_records(df.to_dict(orient="records"))
    logger.debug("Loaded %d terms from %s", len(terms), path)
    return terms
