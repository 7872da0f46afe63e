"""
Kernel and kernel matrix tests.

Tests for:
- Closed-form values of every kernel
- Kernel registry lookup
- Gram matrix symmetry and evaluation count
"""

import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kernel_svm.kernels import (
    LinearKernel, PolynomialKernel, GaussianKernel, LaplacianKernel,
    HyperbolicTangentKernel, CosineKernel, get_kernel,
)
from kernel_svm.kernel_matrix import kernel_matrix, cross_kernel_matrix


class CountingKernel:
    """Linear kernel that counts its evaluations."""

    def __init__(self):
        self.calls = 0

    def evaluate(self, a, b):
        self.calls += 1
        return float(np.dot(a, b))


def test_kernel_values():
    a = np.array([1.0, 2.0])
    b = np.array([3.0, 4.0])

    assert LinearKernel().evaluate(a, b) == 11.0
    assert PolynomialKernel(degree=2, offset=1.0).evaluate(a, b) == 144.0
    assert HyperbolicTangentKernel(scale=0.5).evaluate(a, b) == pytest.approx(np.tanh(5.5))

    origin = np.zeros(2)
    assert GaussianKernel(bandwidth=1.0).evaluate(origin, np.ones(2)) == pytest.approx(np.exp(-1.0))
    assert LaplacianKernel(bandwidth=2.0).evaluate(origin, np.array([3.0, 4.0])) == pytest.approx(np.exp(-2.5))

    assert CosineKernel().evaluate(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == 0.0
    assert CosineKernel().evaluate(np.array([1.0, 1.0]), np.array([2.0, 2.0])) == pytest.approx(1.0)
    assert CosineKernel().evaluate(origin, a) == 0.0


def test_kernels_are_callable_and_symmetric():
    rng = np.random.default_rng(3)
    a, b = rng.normal(size=3), rng.normal(size=3)

    for kernel in (LinearKernel(), PolynomialKernel(3, 1.0), GaussianKernel(0.7),
                   LaplacianKernel(1.3), HyperbolicTangentKernel(0.2, 0.1), CosineKernel()):
        assert kernel(a, b) == kernel.evaluate(a, b)
        assert kernel(a, b) == pytest.approx(kernel(b, a))


def test_get_kernel():
    assert isinstance(get_kernel('linear'), LinearKernel)
    assert isinstance(get_kernel('poly', degree=3), PolynomialKernel)

    rbf = get_kernel('RBF', bandwidth=0.5)
    assert isinstance(rbf, GaussianKernel)
    assert rbf.bandwidth == 0.5

    custom = CountingKernel()
    assert get_kernel(custom) is custom


def test_get_kernel_rejects_bad_input():
    with pytest.raises(ValueError):
        get_kernel('sigmoid-ish')
    with pytest.raises(ValueError):
        get_kernel(object())
    with pytest.raises(ValueError):
        get_kernel(CountingKernel(), bandwidth=1.0)
    with pytest.raises(ValueError):
        GaussianKernel(bandwidth=0.0)
    with pytest.raises(ValueError):
        LaplacianKernel(bandwidth=-1.0)


def test_kernel_matrix_is_exactly_symmetric():
    rng = np.random.default_rng(0)
    X = rng.normal(size=(12, 4))

    K = kernel_matrix(X, GaussianKernel(bandwidth=0.8))

    assert K.shape == (12, 12)
    assert np.array_equal(K, K.T)
    assert np.allclose(np.diag(K), 1.0)


def test_kernel_matrix_evaluates_upper_triangle_once():
    X = np.arange(10, dtype=float).reshape(5, 2)
    kernel = CountingKernel()

    K = kernel_matrix(X, kernel)

    assert kernel.calls == 5 * 6 // 2
    assert np.allclose(K, X @ X.T)


def test_cross_kernel_matrix():
    rng = np.random.default_rng(1)
    A = rng.normal(size=(4, 3))
    B = rng.normal(size=(6, 3))

    K = cross_kernel_matrix(A, B, LinearKernel())
    assert K.shape == (4, 6)
    assert np.allclose(K, A @ B.T)

    with pytest.raises(ValueError):
        cross_kernel_matrix(A, rng.normal(size=(6, 2)), LinearKernel())


def test_kernel_matrix_rejects_1d_input():
    with pytest.raises(ValueError):
        kernel_matrix(np.array([1.0, 2.0, 3.0]), LinearKernel())
