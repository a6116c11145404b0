"""Normalising transforms that condition points before numerical fitting."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np

__all__ = [
    "conditioner_from_ellipse",
    "conditioner_from_image",
    "condition",
    "condition_all",
]

_SQRT2 = math.sqrt(2.0)


def conditioner_from_ellipse(center: Sequence[float], a: float, b: float) -> np.ndarray:
    """Return the 3x3 transform that centres an ellipse and scales its mean axis to sqrt(2)."""
    mean_ab = (a + b) / 2.0
    if mean_ab == 0:
        raise ZeroDivisionError("ellipse semi-axes sum to zero")
    scale = _SQRT2 / mean_ab
    x0, y0 = float(center[0]), float(center[1])
    return np.array(
        [
            [scale, 0.0, -scale * x0],
            [0.0, scale, -scale * y0],
            [0.0, 0.0, 1.0],
        ]
    )


def conditioner_from_image(
    columns: int, rows: int, focal: float
) -> tuple[np.ndarray, np.ndarray]:
    """Return the transform centring an image and dividing by ``focal``, and its inverse."""
    if focal == 0:
        raise ZeroDivisionError("focal length must not be zero")
    trans = np.array(
        [
            [1.0 / focal, 0.0, -columns / (2.0 * focal)],
            [0.0, 1.0 / focal, -rows / (2.0 * focal)],
            [0.0, 0.0, 1.0],
        ]
    )
    inverse = np.array(
        [
            [float(focal), 0.0, columns / 2.0],
            [0.0, float(focal), rows / 2.0],
            [0.0, 0.0, 1.0],
        ]
    )
    return trans, inverse


def condition(point: Sequence[float], transformation: np.ndarray) -> np.ndarray:
    """Apply ``transformation`` to a point and return the transformed point.

    A two-element point is taken with a homogeneous weight of one. For a
    three-element point only x and y change; the weight is kept as it was.
    """
    coords = np.asarray(point, dtype=float)
    if coords.shape == (2,):
        homogeneous = np.append(coords, 1.0)
    elif coords.shape == (3,):
        homogeneous = coords
    else:
        raise ValueError(f"expected a point of 2 or 3 coordinates, got shape {coords.shape}")
    mapped = np.asarray(transformation, dtype=float) @ homogeneous
    result = coords.copy()
    result[0] = mapped[0] / mapped[2]
    result[1] = mapped[1] / mapped[2]
    return result


def condition_all(
    points: Iterable[Sequence[float]], transformation: np.ndarray
) -> list[np.ndarray]:
    """Apply :func:`condition` to every point."""
    return [condition(point, transformation) for point in points]