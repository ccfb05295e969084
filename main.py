#!/usr/bin/env python3
"""
Fourier Series Epicycles

Computes the Fourier series of a closed curve (a built-in curve, points
drawn into a CSV file, or a JSON file of terms), prints the series, and
shows or exports the epicycles drawing it at a given time.

Usage:
    python main.py --curve heart --n-terms 10
    python main.py --points drawing.csv --png frame.png --no-show
    python main.py --terms terms.json --gif epicycles.gif --frames 90 --duration 3
"""

import argparse
import logging
import os

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from scipy import interpolate

from epicycles.constants import MAX_FOURIER_SERIES_TERMS, MEDIA_SIZES, SAMPLE_COUNT
from epicycles.curves import CURVES, DrawnPoints, Parametric, TermsSource
from epicycles.export import BatchOutcome, GifGenerator
from epicycles.fourier import fourier_series_formula
from epicycles.paths import PathType, build_frame, frame_bounding_rect, suggested_term_count
from epicycles.render import DPI, PathStyle, draw_frame, save_frame_png
from epicycles.terms import add_random_terms, add_term, load_terms, save_terms

HIDE_CHOICES = {
    "function": PathType.CURVE,
    "series": PathType.FOURIER_SERIES,
    "radii": PathType.RADII,
    "circles": PathType.CIRCLES,
    "terminator": PathType.TERMINATOR,
}


def load_csv(path, x_col=None, y_col=None):
    df = pd.read_csv(path)
    x_col = df.columns[0] if x_col is None else x_col
    y_col = df.columns[1] if y_col is None else y_col
    x = df[x_col].values.astype(float)
    y = df[y_col].values.astype(float)
    return np.column_stack([x, y])


def resample_to_uniform(points, num=SAMPLE_COUNT):
    """Resample drawn points to ``num`` points evenly spaced along the stroke."""
    steps = np.hypot(*np.diff(points, axis=0).T)
    points = points[np.concatenate([[True], steps > 0])]
    if len(points) < 2:
        raise ValueError("Not enough distinct points")
    s = np.concatenate([[0.0], np.cumsum(np.hypot(*np.diff(points, axis=0).T))])
    f = interpolate.interp1d(s, points, axis=0, kind='linear')
    return f(np.linspace(0.0, s[-1], num=num))


def curve_source(args):
    if args.points:
        points = load_csv(args.points, args.x_col, args.y_col)
        if args.resample:
            points = resample_to_uniform(points, num=args.resample)
        return DrawnPoints(points)
    if args.terms or args.random_terms:
        terms = ()
        for term in (load_terms(args.terms) if args.terms else ()):
            terms = add_term(terms, term)
        if args.random_terms:
            terms = add_random_terms(terms)
        if args.save_terms:
            save_terms(args.save_terms, terms)
            print(f"Saved {len(terms)} terms to {args.save_terms}")
        return TermsSource(tuple(terms))
    return Parametric.named(args.curve)


def plot_results(frame, style, view_size, terms=None):
    fig = plt.figure(figsize=(view_size[0] / DPI, view_size[1] / DPI), dpi=DPI)
    fig.patch.set_facecolor(style.background or "white")
    ax = fig.add_axes([0, 0, 1, 1])
    draw_frame(ax, frame, style, view_size, terms=terms)
    plt.show()
    plt.close(fig)


def print_progress(title, fraction, frame):
    print(f"\r{title} {int(100 * fraction):3d}%", end="", flush=True)


def main():
    p = argparse.ArgumentParser(description="Fourier series epicycles of a closed curve")
    p.add_argument("--curve", choices=sorted(CURVES), default="heart",
                   help="Built-in curve (default: heart)")
    p.add_argument("--points", help="CSV of drawn points (x, y), y pointing up")
    p.add_argument("--x-col", help="x column name (default: first column)")
    p.add_argument("--y-col", help="y column name (default: second column)")
    p.add_argument("--resample", type=int, help="Resample drawn points to this many along the stroke")
    p.add_argument("--terms", help="JSON file of Fourier series terms")
    p.add_argument("--random-terms", action="store_true", help="Add 2 to 7 random terms")
    p.add_argument("--save-terms", help="Write the terms used to this JSON file")
    p.add_argument("--n-terms", type=int, help="Number of terms N (default: suggested)")
    p.add_argument("--samples", type=int, default=SAMPLE_COUNT,
                   help=f"Sample count (default={SAMPLE_COUNT})")
    p.add_argument("--time", type=float, default=0.0, help="Epicycle time in [-pi, pi] (default=0)")
    p.add_argument("--size", type=int, default=500, help="View size in pixels (default=500)")
    p.add_argument("--media-size", choices=MEDIA_SIZES, help="Export size, overrides --size")
    p.add_argument("--trail-length", type=float, default=0.0, help="Fade the series behind f(t)")
    p.add_argument("--hide", action="append", choices=HIDE_CHOICES, default=[],
                   help="Do not draw this path (repeatable)")
    p.add_argument("--png", help="Save the frame as PNG")
    p.add_argument("--gif", help="Save one period as an animated GIF")
    p.add_argument("--frames", type=int, default=60, help="GIF frame count (default=60)")
    p.add_argument("--duration", type=float, default=3.0, help="GIF duration in seconds (default=3)")
    p.add_argument("--no-show", action="store_true", help="Do not open a plot window")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.samples < 3:
        p.error("--samples must be at least 3")
    if args.frames < 1 or args.duration <= 0:
        p.error("--frames and --duration must be positive")

    try:
        source = curve_source(args)
    except ValueError as e:
        p.error(str(e))

    n_terms = args.n_terms
    if n_terms is None:
        n_terms = suggested_term_count(source, args.samples)
    if not 1 <= n_terms <= MAX_FOURIER_SERIES_TERMS:
        p.error(f"--n-terms must be in [1, {MAX_FOURIER_SERIES_TERMS}]")

    style = PathStyle(trail_length=args.trail_length)
    for name in args.hide:
        style.visible[HIDE_CHOICES[name]] = False
    terms = source.terms if isinstance(source, TermsSource) else None

    view_size = (args.size, args.size)
    frame = build_frame(args.time, args.samples, view_size, n_terms, source)
    if frame.too_few_points:
        print("Too few points to define a curve, showing the circle instead.")

    print(f"Fourier series with N={n_terms}:")
    print(fourier_series_formula(frame.coefficients))

    sample_count = args.samples
    if args.media_size:
        edge, multiplier = MEDIA_SIZES[args.media_size]
        view_size = (edge, edge)
        sample_count = multiplier * args.samples
        style = style.scaled(multiplier)

    if args.png:
        rect = frame_bounding_rect(args.time, args.samples, view_size, n_terms, source)
        export_frame = build_frame(args.time, sample_count, view_size, n_terms, source, rect)
        save_frame_png(args.png, export_frame, style, view_size, terms=terms)
        print(f"Saved {args.png}")

    if args.gif:
        result = GifGenerator().export_gif(
            args.gif, source, sample_count, n_terms, view_size, args.frames, args.duration,
            style=style, terms=terms, progress=print_progress)
        print()
        if result.outcome is BatchOutcome.COMPLETED:
            print(f"Saved {os.path.abspath(result.value)}")
        elif result.outcome is BatchOutcome.FAILED:
            p.exit(1, f"GIF export failed: {result.value}\n")
        else:
            print(f"GIF export {result.outcome.value}")

    if not args.no_show:
        plot_results(frame, PathStyle(trail_length=args.trail_length, visible=style.visible),
                     (args.size, args.size), terms=terms)

if __name__ == "__main__":
    main()
