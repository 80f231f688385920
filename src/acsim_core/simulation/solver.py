# src/acsim_core/simulation/solver.py
import logging
from typing import Optional

import numpy as np

from ..constants import ELIMINATION_SKIP_THRESHOLD, SINGULAR_PIVOT_EPSILON
from .exceptions import SingularSystemError

logger = logging.getLogger(__name__)


def solve_linear_system(A: np.ndarray, z: np.ndarray, frequency: Optional[float] = None) -> np.ndarray:
    """
    Solves `A x = z` over the complex numbers by Gauss-Jordan elimination with
    partial pivoting.

    At step k the row among k..N-1 with the largest |A[r, k]|^2 becomes the pivot
    row. The pivot row is normalised and column k is eliminated from every other
    row, above and below, so no back-substitution pass is needed. The inputs are
    not modified.

    Args:
        A: Square (N, N) complex matrix.
        z: Right-hand side of length N.
        frequency: The frequency being solved, for diagnostic context only.

    Returns:
        The complex solution vector of length N.

    Raises:
        SingularSystemError: If a pivot's magnitude falls below SINGULAR_PIVOT_EPSILON,
                             or the solution contains non-finite values.
        ValueError: If the shapes are inconsistent.
    """
    a = np.array(A, dtype=np.complex128, copy=True)
    x = np.array(z, dtype=np.complex128, copy=True)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"MNA matrix must be square, got shape {a.shape}.")
    n = a.shape[0]
    if x.shape != (n,):
        raise ValueError(f"Right-hand side must have shape ({n},), got {x.shape}.")

    threshold = SINGULAR_PIVOT_EPSILON ** 2
    logger.debug(f"Solving {n}x{n} complex system by Gauss-Jordan elimination...")

    for k in range(n):
        column = a[k:, k]
        magnitudes = column.real ** 2 + column.imag ** 2
        offset = int(np.argmax(magnitudes))
        if not magnitudes[offset] >= threshold:
            logger.debug(f"Pivot magnitude^2 {magnitudes[offset]:.3e} below threshold at step {k}.")
            raise SingularSystemError(
                details=f"No usable pivot in column {k} (largest |pivot|^2 = {magnitudes[offset]:.3e}).",
                frequency=frequency,
                step=k,
            )
        r = k + offset
        if r != k:
            a[[k, r]] = a[[r, k]]
            x[[k, r]] = x[[r, k]]

        pivot = a[k, k]
        a[k, k:] /= pivot
        x[k] /= pivot

        factors = a[:, k].copy()
        factors[k] = 0.0
        rows = np.nonzero(np.abs(factors) > ELIMINATION_SKIP_THRESHOLD)[0]
        if rows.size:
            a[np.ix_(rows, np.arange(k, n))] -= np.outer(factors[rows], a[k, k:])
            x[rows] -= factors[rows] * x[k]

    if not np.all(np.isfinite(x)):
        raise SingularSystemError(details="Elimination produced NaN/Inf values.", frequency=frequency)
    return x
