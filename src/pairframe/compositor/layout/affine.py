"""
Module: compositor.layout.affine

Purpose:
    3x3 homogeneous affine matrices (numpy) for the half-plane layout.
    Canvas coordinates are y-down, so a positive angle turns clockwise
    on screen.

Key Functions:
    - translation(), rotation(), scaling(): Elementary matrices
    - compose(): Left-to-right matrix product
    - apply(): Map points through a matrix
    - pillow_coefficients(): Inverse mapping for Image.transform(AFFINE)

Dependencies:
    - numpy: Matrix algebra
"""

from __future__ import annotations

import math
from functools import reduce
from typing import Iterable, Sequence, Tuple

import numpy as np


def identity() -> np.ndarray:
    return np.eye(3)


def translation(tx: float, ty: float) -> np.ndarray:
    return np.array([
        [1.0, 0.0, tx],
        [0.0, 1.0, ty],
        [0.0, 0.0, 1.0],
    ])


def rotation(degrees: float) -> np.ndarray:
    theta = math.radians(degrees)
    c, s = math.cos(theta), math.sin(theta)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def scaling(sx: float, sy: float | None = None) -> np.ndarray:
    if sy is None:
        sy = sx
    return np.array([
        [sx, 0.0, 0.0],
        [0.0, sy, 0.0],
        [0.0, 0.0, 1.0],
    ])


def compose(*matrices: np.ndarray) -> np.ndarray:
    """
    Multiply matrices left to right.

    ``compose(A, B, C)`` maps a point through C first, then B, then A,
    which matches the order transforms are listed when drawing.
    """
    return reduce(np.matmul, matrices, identity())


def apply(matrix: np.ndarray, points: Iterable[Sequence[float]]) -> np.ndarray:
    """
    Map (x, y) points through ``matrix``.

    Returns:
        N x 2 array of transformed points
    """
    pts = np.asarray(list(points), dtype=float).reshape(-1, 2)
    homogeneous = np.hstack([pts, np.ones((pts.shape[0], 1))])
    return (matrix @ homogeneous.T).T[:, :2]


def pillow_coefficients(matrix: np.ndarray) -> Tuple[float, float, float, float, float, float]:
    """
    Coefficients for ``Image.transform(size, Image.Transform.AFFINE, data)``.

    Pillow maps each output pixel back to the input, so the data is the
    first two rows of the inverse matrix.

    Raises:
        numpy.linalg.LinAlgError: If the matrix is singular
    """
    inverse = np.linalg.inv(matrix)
    a, b, c = inverse[0]
    d, e, f = inverse[1]
    return (float(a), float(b), float(c), float(d), float(e), float(f))
