"""Bounding rectangles and fitting point sets into a padded viewport."""

import logging
from collections import namedtuple

import numpy as np
from matplotlib.transforms import Affine2D

logger = logging.getLogger(__name__)


class Rect(namedtuple("Rect", ["x", "y", "width", "height"])):
    __slots__ = ()

    @property
    def max_x(self):
        return self.x + self.width

    @property
    def max_y(self):
        return self.y + self.height

    @property
    def origin(self):
        return (self.x, self.y)

    def inset(self, dx, dy):
        return Rect(self.x + dx, self.y + dy, self.width - 2 * dx, self.height - 2 * dy)

    def is_degenerate(self):
        return self.width <= 0 or self.height <= 0


def bounding_rect(points):
    """Smallest rect containing ``points``, or None for no points."""
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if len(points) == 0:
        return None
    min_x, min_y = points.min(axis=0)
    max_x, max_y = points.max(axis=0)
    return Rect(float(min_x), float(min_y), float(max_x - min_x), float(max_y - min_y))


def union_rect(rects):
    rects = [rect for rect in rects if rect is not None]
    if not rects:
        return None
    min_x = min(rect.x for rect in rects)
    min_y = min(rect.y for rect in rects)
    max_x = max(rect.max_x for rect in rects)
    max_y = max(rect.max_y for rect in rects)
    return Rect(min_x, min_y, max_x - min_x, max_y - min_y)


def flip_points_for_view(points, view_size):
    """Reflect y between mathematical (origin bottom left) and view (origin top left) frames."""
    points = np.array(points, dtype=float).reshape(-1, 2)
    points[:, 1] = view_size[1] - points[:, 1]
    return points


def fit_rect_inside(rect, inside_rect):
    """Largest rect with the aspect ratio of ``rect`` centered inside ``inside_rect``.

    A rect with no width is treated as the narrowest possible, and one
    with no height as the widest. Returns None if ``rect`` has no area at
    all or ``inside_rect`` is empty.
    """
    if (rect.width <= 0 and rect.height <= 0) or inside_rect.is_degenerate():
        return None

    inside_ratio = inside_rect.width / inside_rect.height
    ratio = rect.width / rect.height if rect.height > 0 else np.inf

    if ratio > inside_ratio:
        new_width = inside_rect.width
        new_height = new_width / ratio
        y_offset = (inside_rect.height - new_height) / 2.0
        return Rect(inside_rect.x, inside_rect.y + y_offset, new_width, new_height)

    new_height = inside_rect.height
    new_width = new_height * ratio
    x_offset = (inside_rect.width - new_width) / 2.0
    return Rect(inside_rect.x + x_offset, inside_rect.y, new_width, new_height)


def scale_transform(rect, scale, origin):
    """Scale about (0, 0) then translate so ``rect.origin * scale`` lands on ``origin``."""
    return Affine2D().scale(scale).translate(origin[0] - rect.x * scale,
                                             origin[1] - rect.y * scale)


def apply_transform(point_sets, transform):
    transformed = []
    for points in point_sets:
        points = np.asarray(points, dtype=float).reshape(-1, 2)
        transformed.append(transform.transform(points) if len(points) else points.copy())
    return transformed


def viewport_transform(rect, view_size, inset):
    """The similarity transform fitting ``rect`` into the inset viewport, or None."""
    target = Rect(0.0, 0.0, float(view_size[0]), float(view_size[1])).inset(inset, inset)
    plot_rect = fit_rect_inside(rect, target)
    if plot_rect is None:
        return None

    if rect.width > 0:
        scale = plot_rect.width / rect.width
    else:
        scale = plot_rect.height / rect.height
    return scale_transform(rect, scale, plot_rect.origin)


def scale_points_into_view(point_sets, rect, view_size, inset):
    """Map every point set with the one transform that fits ``rect`` into the view.

    Sharing the transform keeps the sets' relative geometry. Returns None
    when ``rect`` has no area or the inset view is empty.
    """
    transform = viewport_transform(rect, view_size, inset)
    if transform is None:
        logger.warning("Cannot fit %s into a %sx%s view with inset %s",
                       rect, view_size[0], view_size[1], inset)
        return None
    return apply_transform(point_sets, transform)
