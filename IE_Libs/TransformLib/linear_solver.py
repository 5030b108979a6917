"""
Dense linear algebra for the perspective engine.

Functions:
    solve: Solve A x = b by Gaussian elimination with partial pivoting
    invert_3x3: Closed-form inverse of a row-major 3x3 matrix

Both return None for singular input (pivot or determinant magnitude below
SINGULAR_EPSILON). That means degenerate geometry such as collinear or
repeated points; retrying will not help.
"""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from IE_Libs.constants import SINGULAR_EPSILON

logger = logging.getLogger(__name__)

Matrix3x3 = Tuple[float, float, float, float, float, float, float, float, float]


def solve(
    a: Sequence[Sequence[float]],
    b: Sequence[float],
    epsilon: float = SINGULAR_EPSILON,
) -> Optional[np.ndarray]:
    """
    Solve the square system ``a @ x = b``.

    At each column the row with the largest absolute entry is swapped into
    the pivot position before eliminating below it. The inputs are copied,
    never modified.

    Args:
        a: n x n coefficient matrix
        b: Right-hand side of length n
        epsilon: Smallest acceptable pivot magnitude

    Returns:
        Solution vector of length n, or None if the system is singular

    Raises:
        ValueError: If a is not square or b does not match it
    """
    m = np.array(a, dtype=np.float64)
    rhs = np.array(b, dtype=np.float64)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise ValueError(f"Coefficient matrix must be square, got shape {m.shape}")
    n = m.shape[0]
    if rhs.shape != (n,):
        raise ValueError(f"Right-hand side must have length {n}, got shape {rhs.shape}")

    for i in range(n):
        pivot_row = i + int(np.argmax(np.abs(m[i:, i])))
        if pivot_row != i:
            m[[i, pivot_row]] = m[[pivot_row, i]]
            rhs[[i, pivot_row]] = rhs[[pivot_row, i]]

        if abs(m[i, i]) <= epsilon:
            logger.debug(f"Singular system: pivot {m[i, i]:.3g} at column {i}")
            return None

        for j in range(i + 1, n):
            factor = m[j, i] / m[i, i]
            rhs[j] -= factor * rhs[i]
            m[j, i:] -= factor * m[i, i:]

    x = np.zeros(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        x[i] = (rhs[i] - np.dot(m[i, i + 1:], x[i + 1:])) / m[i, i]
    return x


def invert_3x3(m: Sequence[float], epsilon: float = SINGULAR_EPSILON) -> Optional[Matrix3x3]:
    """
    Invert a 3x3 matrix via its adjugate.

    Args:
        m: 9 floats, row-major
        epsilon: Smallest acceptable determinant magnitude

    Returns:
        The inverse as 9 row-major floats, or None if not invertible

    Raises:
        ValueError: If m does not have 9 entries
    """
    if len(m) != 9:
        raise ValueError(f"Expected 9 matrix entries, got {len(m)}")
    a, b, c, d, e, f, g, h, i = (float(v) for v in m)

    det = a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)
    if abs(det) < epsilon:
        logger.debug(f"Matrix not invertible: determinant {det:.3g}")
        return None

    inv_det = 1.0 / det
    return (
        (e * i - f * h) * inv_det,
        (c * h - b * i) * inv_det,
        (b * f - c * e) * inv_det,
        (f * g - d * i) * inv_det,
        (a * i - c * g) * inv_det,
        (c * d - a * f) * inv_det,
        (d * h - e * g) * inv_det,
        (b * g - a * h) * inv_det,
        (a * e - b * d) * inv_det,
    )
