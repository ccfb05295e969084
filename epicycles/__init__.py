"""Fourier series epicycles for closed planar curves."""

from .curves import CURVES, DrawnPoints, Parametric, TermsSource
from .export import BatchOutcome, BatchResult, GifGenerator
from .fourier import epicycle_points, estimate_coefficients, fourier_series_points
from .paths import Frame, build_frame, suggested_term_count
from .terms import Term, TermError

__version__ = "0.1.0"
