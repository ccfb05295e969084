"""Draw frames with matplotlib.

Styling is carried by an explicit ``PathStyle`` so the engine itself stays
free of drawing state.
"""

import logging
from dataclasses import dataclass, field, replace

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.collections import LineCollection
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure
from matplotlib.patches import Circle as CirclePatch

from .paths import PathType
from .terms import circle_index_for_term

logger = logging.getLogger(__name__)

DPI = 72


def _default_colors():
    return {
        PathType.CURVE: "orange",
        PathType.FOURIER_SERIES: "black",
        PathType.RADII: "red",
        PathType.CIRCLES: "blue",
        PathType.TERMINATOR: "green",
    }


def _default_widths():
    return {
        PathType.CURVE: 3.0,
        PathType.FOURIER_SERIES: 1.0,
        PathType.RADII: 1.0,
        PathType.CIRCLES: 1.0,
        PathType.TERMINATOR: 1.0,
    }


def _default_visible():
    return {path_type: True for path_type in PathType}


@dataclass
class PathStyle:
    line_color: dict = field(default_factory=_default_colors)
    line_width: dict = field(default_factory=_default_widths)
    visible: dict = field(default_factory=_default_visible)
    trail_length: float = 0.0
    background: object = "white"

    def scaled(self, factor):
        widths = {path_type: factor * width for path_type, width in self.line_width.items()}
        return replace(self, line_width=widths)

    def max_line_width(self):
        return max(self.line_width.values())


def trail_alpha(j, t, point_count, trail_length):
    """Opacity of series segment ``j`` for a trail fading behind time ``t``.

    Fully opaque at the current time, fading to transparent one period
    behind it at a rate given by the power ``trail_length``.
    """
    g = ((t + np.pi) / (2 * np.pi)) + (1.0 - j / (point_count - 1))
    return (1 - np.fmod(g, 1.0)) ** trail_length


def new_figure(view_size, scale_factor=1.0, background="white"):
    width, height = view_size
    fig = Figure(figsize=(scale_factor * width / DPI, scale_factor * height / DPI), dpi=DPI)
    FigureCanvasAgg(fig)
    if background is None:
        fig.patch.set_alpha(0.0)
    else:
        fig.patch.set_facecolor(background)
    ax = fig.add_axes([0, 0, 1, 1])
    return fig, ax


def _prepare_axes(ax, view_size):
    ax.clear()
    ax.set_xlim(0, view_size[0])
    ax.set_ylim(view_size[1], 0)
    ax.set_aspect("equal")
    ax.axis("off")


def _plot_line(ax, points, color, width):
    if len(points) > 1:
        ax.plot(points[:, 0], points[:, 1], color=color, linewidth=width,
                solid_capstyle="round", solid_joinstyle="round")


def _add_circle(ax, circle, color, width):
    ax.add_patch(CirclePatch(circle.center, circle.radius, fill=False,
                             edgecolor=color, linewidth=width))


def _draw_series(ax, frame, style, scale_factor):
    points = frame.fourier_series_points
    color = style.line_color[PathType.FOURIER_SERIES]
    width = scale_factor * style.line_width[PathType.FOURIER_SERIES]
    if style.trail_length > 0 and len(points) > 1:
        segments = np.stack([points[:-1], points[1:]], axis=1)
        alphas = trail_alpha(np.arange(len(segments)), frame.time, len(points), style.trail_length)
        colors = [to_rgba(color, alpha) for alpha in alphas]
        # round caps on every faded segment show up as dots
        ax.add_collection(LineCollection(segments, colors=colors, linewidths=width, capstyle="butt"))
    else:
        _plot_line(ax, points, color, width)


def draw_frame(ax, frame, style, view_size, terms=None, scale_factor=1.0):
    """Draw the visible artifacts of ``frame`` on ``ax``.

    With ``terms`` the epicycle circles are drawn only for the frequencies
    of the terms, each in its term's color.
    """
    _prepare_axes(ax, view_size)

    def width(path_type):
        return scale_factor * style.line_width[path_type]

    if style.visible[PathType.CURVE]:
        _plot_line(ax, frame.curve_points, style.line_color[PathType.CURVE], width(PathType.CURVE))

    if style.visible[PathType.FOURIER_SERIES]:
        _draw_series(ax, frame, style, scale_factor)

    if style.visible[PathType.RADII]:
        _plot_line(ax, frame.epicycle_points, style.line_color[PathType.RADII], width(PathType.RADII))

    if style.visible[PathType.CIRCLES]:
        if terms:
            for term in terms:
                k = circle_index_for_term(term, frame.n_terms)
                if k is not None and k < len(frame.circles):
                    _add_circle(ax, frame.circles[k], term.color, width(PathType.CIRCLES))
        else:
            for circle in frame.circles:
                _add_circle(ax, circle, style.line_color[PathType.CIRCLES], width(PathType.CIRCLES))

    if style.visible[PathType.TERMINATOR] and frame.terminator is not None:
        _add_circle(ax, frame.terminator, style.line_color[PathType.TERMINATOR],
                    width(PathType.TERMINATOR))


def save_frame_png(path, frame, style, view_size, terms=None, scale_factor=1.0):
    fig, ax = new_figure(view_size, scale_factor, style.background)
    draw_frame(ax, frame, style, view_size, terms=terms, scale_factor=scale_factor)
    fig.savefig(path, format="png", dpi=DPI, transparent=style.background is None)
    logger.info("Saved frame at t=%.4f to %s", frame.time, path)
    return path
