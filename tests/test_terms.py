import json
import math

import numpy as np
import pytest

from epicycles.terms import (
    Term,
    TermError,
    add_random_terms,
    add_term,
    available_frequency_components,
    circle_index_for_frequency,
    circle_index_for_term,
    highest_absolute_frequency_component,
    load_terms,
    remove_term,
    sample_terms,
    save_terms,
)
from epicycles.constants import FALLBACK_TERM_COLOR


def test_no_terms_no_points():
    assert sample_terms(100, []).shape == (0, 2)


def test_sample_terms_sums_terms():
    terms = [Term(0.5, 0.0, 1), Term(0.25, math.pi / 2, -2)]
    points = sample_terms(3, terms)
    # t = -pi, 0, pi
    expected = [0.5 * np.exp(1j * t) + 0.25j * np.exp(-2j * t) for t in (-math.pi, 0.0, math.pi)]
    np.testing.assert_allclose(points[:, 0], np.real(expected), atol=1e-12)
    np.testing.assert_allclose(points[:, 1], np.imag(expected), atol=1e-12)


@pytest.mark.parametrize("n, k", [(1, 0), (-1, 1), (2, 2), (-2, 3), (3, 4), (-3, 5)])
def test_circle_index_for_frequency(n, k):
    assert circle_index_for_frequency(n, 3) == k


def test_circle_index_out_of_range():
    assert circle_index_for_frequency(0, 3) is None
    assert circle_index_for_frequency(4, 3) is None
    assert circle_index_for_frequency(-4, 3) is None
    assert circle_index_for_term(Term(frequency_component=-1), 1) == 1


def test_add_term_rejects_invalid_terms():
    terms = add_term((), Term(frequency_component=2))
    with pytest.raises(TermError):
        add_term(terms, Term(frequency_component=2))
    with pytest.raises(TermError):
        add_term(terms, Term(frequency_component=0))
    with pytest.raises(TermError):
        add_term(terms, Term(frequency_component=21))
    with pytest.raises(TermError):
        add_term(terms, Term(amplitude=1.5, frequency_component=3))
    with pytest.raises(TermError):
        add_term(terms, Term(phase=7.0, frequency_component=3))
    assert len(add_term(terms, Term(frequency_component=-2))) == 2


def test_remove_term():
    terms = (Term(frequency_component=1), Term(frequency_component=2))
    assert remove_term(terms, 0) == (Term(frequency_component=2),)


def test_available_frequency_components():
    available = available_frequency_components([Term(frequency_component=5)])
    assert len(available) == 39
    assert 0 not in available and 5 not in available
    assert available[0] == -20 and available[-1] == 20


def test_highest_absolute_frequency_component():
    assert highest_absolute_frequency_component([]) == 1
    assert highest_absolute_frequency_component([Term(frequency_component=-9)]) == 9


def test_random_terms_are_valid_and_unique():
    rng = np.random.default_rng(3)
    terms = add_random_terms((), rng)
    assert 2 <= len(terms) <= 7
    assert len({term.frequency_component for term in terms}) == len(terms)
    for term in terms:
        assert 0.0 <= term.amplitude <= 1.0
        assert all(0.5 <= c <= 1.0 for c in term.color[:3])


def test_random_terms_stop_when_frequencies_run_out():
    terms = tuple(Term(frequency_component=n) for n in range(-20, 21) if n != 0)
    filled = add_random_terms(terms[1:], np.random.default_rng(0))
    assert len(filled) == 40
    assert filled[-1].frequency_component == -20
    assert add_random_terms(terms) == terms


def test_save_and_load_terms(tmp_path):
    terms = (Term(0.5, 1.0, 3, (0.1, 0.2, 0.3, 1.0)), Term(-0.25, 0.0, -1, (1.0, 0.5, 0.25, 0.75)))
    path = tmp_path / "terms.json"
    save_terms(path, terms)

    records = json.loads(path.read_text())
    assert records[0]["frequencyComponent"] == 3
    assert load_terms(path) == terms


def test_load_terms_color_fallback(tmp_path):
    path = tmp_path / "terms.json"
    path.write_text(json.dumps([{"amplitude": 0.5, "phase": 0, "frequencyComponent": 2}]))
    (term,) = load_terms(path)
    assert term.color == FALLBACK_TERM_COLOR
    assert term.frequency_component == 2


def test_load_no_terms(tmp_path):
    path = tmp_path / "terms.json"
    path.write_text("[]")
    assert load_terms(path) == ()
