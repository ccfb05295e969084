import itertools

import numpy as np
import pytest

from epicycles.geometry import (
    Rect,
    bounding_rect,
    fit_rect_inside,
    flip_points_for_view,
    scale_points_into_view,
    scale_transform,
    union_rect,
)


def sine_between(u, v):
    return (u[0] * v[1] - u[1] * v[0]) / (np.linalg.norm(u) * np.linalg.norm(v))


def test_bounding_rect_empty_and_single_point():
    assert bounding_rect([]) is None
    assert bounding_rect(np.empty((0, 2))) is None
    assert bounding_rect([(3.0, -2.0)]) == Rect(3.0, -2.0, 0.0, 0.0)


def test_bounding_rect():
    rect = bounding_rect([(1, 5), (-2, 3), (4, -1)])
    assert rect == Rect(-2.0, -1.0, 6.0, 6.0)
    assert (rect.max_x, rect.max_y) == (4.0, 5.0)


def test_union_rect():
    assert union_rect([]) is None
    assert union_rect([Rect(0, 0, 1, 1), Rect(2, -1, 1, 1)]) == Rect(0, -1, 3, 2)


def test_inset():
    assert Rect(0, 0, 500, 300).inset(10, 10) == Rect(10, 10, 480, 280)


def test_fit_wide_rect_is_centered_vertically():
    assert fit_rect_inside(Rect(5, 5, 4, 1), Rect(0, 0, 100, 100)) == Rect(0, 37.5, 100, 25)


def test_fit_tall_rect_is_centered_horizontally():
    assert fit_rect_inside(Rect(5, 5, 1, 4), Rect(0, 0, 100, 100)) == Rect(37.5, 0, 25, 100)


def test_fit_degenerate_rects():
    assert fit_rect_inside(Rect(1, 1, 0, 0), Rect(0, 0, 100, 100)) is None
    assert fit_rect_inside(Rect(0, 0, 2, 2), Rect(0, 0, 0, 100)) is None
    assert fit_rect_inside(Rect(0, 0, 2, 0), Rect(0, 0, 100, 100)) == Rect(0, 50, 100, 0)
    assert fit_rect_inside(Rect(0, 0, 0, 2), Rect(0, 0, 100, 100)) == Rect(50, 0, 0, 100)


def test_scale_transform_maps_origin():
    transform = scale_transform(Rect(2, 3, 4, 4), 10.0, (50, 60))
    np.testing.assert_allclose(transform.transform(np.array([[2.0, 3.0], [3.0, 3.0]])),
                               [[50, 60], [60, 60]])


def test_flip_points_for_view():
    points = flip_points_for_view([(1, 2), (3, 400)], (500, 500))
    np.testing.assert_allclose(points, [[1, 498], [3, 100]])


def test_scale_points_into_view_fills_inset_view():
    curve = np.array([[-1.0, -1.0], [1.0, 1.0]])
    (scaled,) = scale_points_into_view([curve], bounding_rect(curve), (500, 500), 10)
    np.testing.assert_allclose(scaled, [[10, 10], [490, 490]])


def test_scale_points_into_view_is_a_similarity():
    rng = np.random.default_rng(7)
    a = rng.normal(size=(6, 2))
    b = rng.normal(size=(4, 2)) * 3
    scaled_a, scaled_b = scale_points_into_view([a, b], bounding_rect(a), (640, 480), 10)

    before = np.vstack([a, b])
    after = np.vstack([scaled_a, scaled_b])
    ratios = [np.linalg.norm(after[i] - after[j]) / np.linalg.norm(before[i] - before[j])
              for i, j in itertools.combinations(range(len(before)), 2)]
    np.testing.assert_allclose(ratios, ratios[0])

    # angles and orientation are kept
    v1, v2 = after[1] - after[0], after[2] - after[0]
    w1, w2 = before[1] - before[0], before[2] - before[0]
    assert sine_between(v1, v2) == pytest.approx(sine_between(w1, w2))


def test_scale_points_into_view_keeps_empty_sets():
    curve = np.array([[0.0, 0.0], [1.0, 2.0]])
    scaled = scale_points_into_view([curve, np.empty((0, 2))], bounding_rect(curve), (100, 100), 10)
    assert scaled[1].shape == (0, 2)


def test_scale_points_into_view_degenerate():
    points = np.array([[2.0, 2.0], [2.0, 2.0]])
    assert scale_points_into_view([points], bounding_rect(points), (100, 100), 10) is None
