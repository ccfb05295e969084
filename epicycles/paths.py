"""Assemble the drawable artifacts of one animation frame.

A frame holds five artifacts, all in view coordinates (y down):

- the curve being approximated
- the Fourier series approximation
- the radii, i.e. the vector chain as a polyline
- one circle per consecutive pair of chain points
- a small terminator circle on the chain's last point
"""

import logging
from collections import namedtuple
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .constants import MINIMUM_POINT_COUNT, PATHS_PADDING, TERMINATOR_RADIUS
from .curves import DrawnPoints, TermsSource, raw_curve_points
from .fourier import (
    epicycle_points,
    estimate_coefficients,
    fourier_series_points,
    suggested_terms_for_sample_count,
    suggested_terms_for_terms,
)
from .geometry import Rect, bounding_rect, flip_points_for_view, scale_points_into_view, union_rect

logger = logging.getLogger(__name__)


class PathType(Enum):
    CURVE = "f"
    FOURIER_SERIES = "Σ"
    RADII = "Radii"
    CIRCLES = "Circles"
    TERMINATOR = "f(t)"


class Circle(namedtuple("Circle", ["x", "y", "radius"])):
    __slots__ = ()

    @property
    def center(self):
        return (self.x, self.y)

    def bounding_rect(self):
        return Rect(self.x - self.radius, self.y - self.radius, 2 * self.radius, 2 * self.radius)


def epicycle_circles(points):
    """Circle i is centered on point i and passes through point i+1."""
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    circles = []
    for center, nxt in zip(points[:-1], points[1:]):
        radius = float(np.hypot(*(nxt - center)))
        circles.append(Circle(float(center[0]), float(center[1]), radius))
    return circles


def terminator_circle(points, radius=TERMINATOR_RADIUS):
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if radius <= 0 or len(points) == 0:
        return None
    return Circle(float(points[-1, 0]), float(points[-1, 1]), radius)


@dataclass
class Frame:
    time: float
    n_terms: int
    curve_points: np.ndarray
    fourier_series_points: np.ndarray
    epicycle_points: np.ndarray
    circles: list = field(default_factory=list)
    terminator: Circle = None
    coefficients: np.ndarray = None
    too_few_points: bool = False

    def bounding_rect(self):
        """Union of the bounding rects of all five artifacts."""
        rects = [
            bounding_rect(self.curve_points),
            bounding_rect(self.fourier_series_points),
            bounding_rect(self.epicycle_points),
        ]
        rects.extend(circle.bounding_rect() for circle in self.circles)
        if self.terminator is not None:
            rects.append(self.terminator.bounding_rect())
        return union_rect(rects)


def fit_into_view(point_sets, rect, view_size, inset):
    scaled = scale_points_into_view(point_sets, rect, view_size, inset)
    if scaled is None:
        # nothing to fit against, keep the unscaled points
        return point_sets
    return scaled


def build_frame(t, sample_count, view_size, n_terms, source, bounding_rect_all_paths=None,
                inset=PATHS_PADDING):
    """Build the frame for time ``t`` of the epicycles approximating ``source``.

    The three point sets are flipped into view orientation and fitted into
    ``view_size`` against the curve's bounding rect. When
    ``bounding_rect_all_paths`` is given (a rect in the view coordinates of
    such fitted frames, usually taken over a whole animation) the sets are
    fitted once more against it, so every frame shares one placement.
    """
    curve, too_few_points = raw_curve_points(source, sample_count)

    coefficients = estimate_coefficients(n_terms, curve)
    series = fourier_series_points(len(curve), coefficients)
    chain = epicycle_points(t, coefficients)

    point_sets = [flip_points_for_view(points, view_size) for points in (curve, series, chain)]

    curve_rect = bounding_rect(point_sets[0])
    if curve_rect is not None:
        point_sets = fit_into_view(point_sets, curve_rect, view_size, inset)

    if bounding_rect_all_paths is not None:
        point_sets = fit_into_view(point_sets, bounding_rect_all_paths, view_size, inset)

    curve, series, chain = point_sets
    logger.debug("Frame at t=%.4f with N=%d from %d curve points", t, n_terms, len(curve))
    return Frame(
        time=t,
        n_terms=n_terms,
        curve_points=curve,
        fourier_series_points=series,
        epicycle_points=chain,
        circles=epicycle_circles(chain),
        terminator=terminator_circle(chain),
        coefficients=coefficients,
        too_few_points=too_few_points,
    )


def frame_bounding_rect(t, sample_count, view_size, n_terms, source):
    return build_frame(t, sample_count, view_size, n_terms, source).bounding_rect()


def suggested_term_count(source, sample_count):
    """Suggested N: drawn points by their own density, terms by their top frequency."""
    if isinstance(source, DrawnPoints) and len(source.points) >= MINIMUM_POINT_COUNT:
        return suggested_terms_for_sample_count(len(source.points))
    if isinstance(source, TermsSource) and len(source.terms) > 0:
        return suggested_terms_for_terms(source.terms)
    return suggested_terms_for_sample_count(sample_count)
