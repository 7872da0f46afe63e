"""Gram matrix construction for kernel SVM training and scoring."""

import numpy as np

from .kernels import Kernel


def kernel_matrix(X: np.ndarray, kernel: Kernel) -> np.ndarray:
    """
    Compute the symmetric N x N kernel matrix K[i, j] = k(x_i, x_j).

    Only the upper triangle is evaluated; the lower triangle is mirrored so
    that K[i, j] == K[j, i] holds exactly.

    Args:
        X: Training points (n_samples, n_features)
        kernel: Object with evaluate(a, b)

    Returns:
        Kernel matrix (n_samples, n_samples)
    """
    X = np.asarray(X, dtype=np.float64)
    if X.ndim != 2:
        raise ValueError(f"Expected a 2D array of points, got shape {X.shape}")

    n_samples = X.shape[0]
    K = np.empty((n_samples, n_samples), dtype=np.float64)

    for i in range(n_samples):
        for j in range(i, n_samples):
            value = kernel.evaluate(X[i], X[j])
            K[i, j] = value
            K[j, i] = value

    return K


def cross_kernel_matrix(A: np.ndarray, B: np.ndarray, kernel: Kernel) -> np.ndarray:
    """
    Compute K[q, s] = k(a_q, b_s) between two point sets.

    Args:
        A: Query points (n_a, n_features)
        B: Reference points, e.g. support vectors (n_b, n_features)
        kernel: Object with evaluate(a, b)

    Returns:
        Kernel matrix (n_a, n_b)
    """
    A = np.asarray(A, dtype=np.float64)
    B = np.asarray(B, dtype=np.float64)
    if A.ndim != 2 or B.ndim != 2:
        raise ValueError(f"Expected 2D arrays, got shapes {A.shape} and {B.shape}")
    if A.shape[1] != B.shape[1]:
        raise ValueError(f"Expected {B.shape[1]} features, got {A.shape[1]}")

    K = np.empty((A.shape[0], B.shape[0]), dtype=np.float64)
    for q in range(A.shape[0]):
        for s in range(B.shape[0]):
            K[q, s] = kernel.evaluate(A[q], B[s])

    return K
