"""
simulation/linear_solver.py

Dense Gaussian elimination with partial pivoting.

Columns whose best pivot falls below the tolerance are treated as
structurally singular: elimination and back-substitution skip them and the
corresponding unknown stays 0. This never raises.
"""

import logging

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_PIVOT_TOLERANCE = 1e-10


def solve_linear_system(matrix, rhs, pivot_tolerance: float = DEFAULT_PIVOT_TOLERANCE):
    """
    Solve matrix @ x = rhs.

    Args:
        matrix: Square (n x n) array-like.
        rhs: Length-n array-like.
        pivot_tolerance: Smallest pivot magnitude treated as non-zero.

    Returns:
        (solution, singular_columns) where solution is a float ndarray of
        length n and singular_columns lists the unknowns left at 0.
    """
    a = np.asarray(matrix, dtype=float)
    b = np.asarray(rhs, dtype=float).reshape(-1)
    n = b.shape[0]
    if a.shape != (n, n):
        raise ValueError(f"Matrix shape {a.shape} does not match right-hand side of length {n}")

    if n == 0:
        return np.zeros(0), []

    augmented = np.column_stack((a, b))
    singular_columns = []

    for i in range(n):
        # First row with the largest magnitude wins ties
        pivot_row = i + int(np.argmax(np.abs(augmented[i:, i])))
        if pivot_row != i:
            augmented[[i, pivot_row]] = augmented[[pivot_row, i]]

        pivot = augmented[i, i]
        if abs(pivot) < pivot_tolerance:
            singular_columns.append(i)
            continue

        factors = augmented[i + 1:, i] / pivot
        augmented[i + 1:, i:] -= np.outer(factors, augmented[i, i:])

    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        pivot = augmented[i, i]
        if abs(pivot) < pivot_tolerance:
            continue
        x[i] = (augmented[i, n] - augmented[i, i + 1:n] @ x[i + 1:]) / pivot

    if singular_columns:
        logger.debug("Singular pivot in column(s) %s; unknowns left at 0", singular_columns)

    return x, singular_columns
