import math

import numpy as np
import pytest

from tagkit.conditioner import (
    condition,
    condition_all,
    conditioner_from_ellipse,
    conditioner_from_image,
)


def test_image_conditioner_inverse_pair():
    trans, inverse = conditioner_from_image(640, 480, 500)
    np.testing.assert_allclose(trans @ inverse, np.eye(3), atol=1e-12)


def test_image_conditioner_centre_maps_to_origin():
    trans, _ = conditioner_from_image(640, 480, 500)
    np.testing.assert_allclose(condition((320, 240), trans), [0.0, 0.0], atol=1e-12)


def test_image_conditioner_zero_focal():
    with pytest.raises(ZeroDivisionError):
        conditioner_from_image(10, 10, 0)


def test_ellipse_centre_maps_to_origin():
    mat = conditioner_from_ellipse((12.0, -4.0), 3.0, 5.0)
    np.testing.assert_allclose(condition((12.0, -4.0), mat), [0.0, 0.0], atol=1e-12)


def test_ellipse_mean_axis_scaled_to_sqrt2():
    mat = conditioner_from_ellipse((1.0, 2.0), 3.0, 5.0)
    out = condition((1.0 + 4.0, 2.0), mat)
    assert out[0] == pytest.approx(math.sqrt(2.0))
    assert out[1] == pytest.approx(0.0)


def test_ellipse_degenerate():
    with pytest.raises(ZeroDivisionError):
        conditioner_from_ellipse((0.0, 0.0), 0.0, 0.0)


def test_condition_round_trip():
    trans, inverse = conditioner_from_image(800, 600, 700)
    point = (123.5, 456.25)
    back = condition(condition(point, trans), inverse)
    np.testing.assert_allclose(back, point)


def test_condition_keeps_weight_of_homogeneous_point():
    trans, _ = conditioner_from_image(100, 100, 10)
    out = condition((50.0, 50.0, 1.0), trans)
    assert out.shape == (3,)
    assert out[2] == 1.0


def test_condition_rejects_bad_shape():
    with pytest.raises(ValueError):
        condition((1.0,), np.eye(3))


def test_condition_all_matches_single():
    mat = conditioner_from_ellipse((5.0, 5.0), 2.0, 2.0)
    points = [(5.0, 5.0), (7.0, 5.0), (5.0, 3.0)]
    results = condition_all(points, mat)
    assert len(results) == 3
    for point, result in zip(points, results):
        np.testing.assert_allclose(result, condition(point, mat))