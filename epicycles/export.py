"""Batch jobs that build many frames: bounding rect estimation and GIF export.

A ``GifGenerator`` is cancelled cooperatively: the flag is checked between
frames, so the frame in progress completes and no further frames start.
Every job returns a ``BatchResult`` whose outcome tells a finished job,
a cancelled one, one that produced nothing and one that failed apart.
"""

import logging
import math
import threading
from collections import namedtuple
from enum import Enum

from matplotlib.animation import PillowWriter

from .geometry import union_rect
from .paths import build_frame
from .render import DPI, PathStyle, draw_frame, new_figure

logger = logging.getLogger(__name__)


class BatchOutcome(Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    EMPTY = "empty"
    FAILED = "failed"


BatchResult = namedtuple("BatchResult", ["outcome", "value"])


def _ignore_progress(*args):
    pass


def _write_failed(path, error):
    logger.error("Could not write %s: %s", path, error)
    return BatchResult(BatchOutcome.FAILED, error)


class GifGenerator:

    def __init__(self):
        self._cancelled = threading.Event()

    def cancel(self):
        self._cancelled.set()

    @property
    def is_cancelled(self):
        return self._cancelled.is_set()

    def estimate_bounding_rect(self, time_intervals, sample_count, view_size, n_terms, source,
                               progress=None):
        """Union of the frame bounding rects at ``time_intervals + 1`` uniform times on [-pi, pi].

        ``progress(i, fraction)`` is called after each frame.
        """
        if time_intervals < 1:
            raise ValueError(f"Need at least one time interval, got {time_intervals}")
        progress = progress or _ignore_progress
        delta = 2.0 * math.pi / time_intervals

        rects = []
        for i in range(time_intervals + 1):
            if self.is_cancelled:
                break
            t = -math.pi + i * delta
            rect = build_frame(t, sample_count, view_size, n_terms, source).bounding_rect()
            if rect is not None:
                rects.append(rect)
            progress(i, i / time_intervals)

        if self.is_cancelled:
            logger.info("Bounding rect estimation cancelled after %d frames", len(rects))
            return BatchResult(BatchOutcome.CANCELLED, None)

        rect = union_rect(rects)
        if rect is None:
            return BatchResult(BatchOutcome.EMPTY, None)
        return BatchResult(BatchOutcome.COMPLETED, rect)

    def generate_frames(self, image_count, frame_at_index, progress=None):
        """Call ``frame_at_index(i)`` for i = 1..image_count until cancelled.

        ``progress(fraction, frame)`` follows every frame. The result value
        is the number of frames produced.
        """
        progress = progress or _ignore_progress
        produced = 0
        for count in range(1, image_count + 1):
            if self.is_cancelled:
                break
            frame = frame_at_index(count)
            if frame is not None:
                produced += 1
            progress(count / image_count, frame)

        if self.is_cancelled:
            logger.info("Frame generation cancelled after %d of %d frames", produced, image_count)
            return BatchResult(BatchOutcome.CANCELLED, produced)
        if produced == 0:
            return BatchResult(BatchOutcome.EMPTY, 0)
        return BatchResult(BatchOutcome.COMPLETED, produced)

    def export_gif(self, path, source, sample_count, n_terms, view_size, image_count, duration,
                   style=None, terms=None, scale_factor=1.0, progress=None):
        """Write an animated GIF of one period looping forever.

        All frames share a bounding rect estimated over the whole period so
        the picture does not jitter. ``progress(title, fraction, frame)``
        reports both phases. A cancelled export writes no file, and a file
        that cannot be written gives a FAILED result holding the error.
        A cancel issued before the export starts is discarded.
        """
        self._cancelled.clear()
        style = style or PathStyle()
        progress = progress or _ignore_progress

        estimate = self.estimate_bounding_rect(
            image_count, sample_count, view_size, n_terms, source,
            progress=lambda i, fraction: progress("Preparing…", fraction, None))
        if estimate.outcome is not BatchOutcome.COMPLETED:
            return estimate

        # room for the widest stroke
        half_width = style.max_line_width() / 2.0
        rect = estimate.value.inset(-half_width, -half_width)

        fig, ax = new_figure(view_size, scale_factor, style.background)
        writer = PillowWriter(fps=image_count / duration)
        try:
            writer.setup(fig, path, dpi=DPI)
        except OSError as e:
            return _write_failed(path, e)

        def frame_at_index(i):
            t = (i - 1) * (2.0 * math.pi) / image_count
            frame = build_frame(t, sample_count, view_size, n_terms, source, rect)
            draw_frame(ax, frame, style, view_size, terms=terms, scale_factor=scale_factor)
            writer.grab_frame()
            return frame

        result = self.generate_frames(
            image_count, frame_at_index,
            progress=lambda fraction, frame: progress("Generating GIF…", fraction, frame))
        if result.outcome is not BatchOutcome.COMPLETED:
            return BatchResult(result.outcome, None)

        try:
            writer.finish()
        except OSError as e:
            return _write_failed(path, e)
        logger.info("Wrote %d frames to %s", result.value, path)
        return BatchResult(BatchOutcome.COMPLETED, path)


def run_in_background(job, *args, completion=None, **kwargs):
    """Run ``job(*args, **kwargs)`` on a daemon thread and pass its result to ``completion``.

    ``completion`` runs on the worker thread; callers marshal it to their
    own thread if they need to. A job that raises completes with a FAILED
    result holding the exception.
    """
    def target():
        try:
            result = job(*args, **kwargs)
        except Exception as e:
            logger.exception("Background job %s failed", getattr(job, "__name__", job))
            result = BatchResult(BatchOutcome.FAILED, e)
        if completion is not None:
            completion(result)

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread
