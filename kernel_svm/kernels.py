"""
Kernel functions for the kernel SVM.

A kernel is any object with an ``evaluate(a, b) -> float`` method that is
symmetric in its arguments. The classes below cover the usual choices:

- LinearKernel:             k(a, b) = a.b
- PolynomialKernel:         k(a, b) = (a.b + offset)^degree
- GaussianKernel:           k(a, b) = exp(-||a - b||^2 / (2 * bandwidth^2))
- LaplacianKernel:          k(a, b) = exp(-||a - b|| / bandwidth)
- HyperbolicTangentKernel:  k(a, b) = tanh(scale * a.b + offset)
- CosineKernel:             k(a, b) = a.b / (||a|| * ||b||)

Estimators accept either a registry name (see ``get_kernel``) or an
instance of any class that provides ``evaluate``.
"""

import numpy as np
from typing import Dict, Protocol, Union

from config import (
    POLYNOMIAL_DEGREE, POLYNOMIAL_OFFSET,
    GAUSSIAN_BANDWIDTH, LAPLACIAN_BANDWIDTH,
    TANH_SCALE, TANH_OFFSET,
)


class Kernel(Protocol):
    """Anything that can score the similarity of two points."""

    def evaluate(self, a: np.ndarray, b: np.ndarray) -> float:
        ...


class LinearKernel:
    """Plain inner product."""

    def evaluate(self, a: np.ndarray, b: np.ndarray) -> float:
        return float(np.dot(a, b))

    def __call__(self, a, b):
        return self.evaluate(a, b)

    def __repr__(self):
        return "LinearKernel()"


class PolynomialKernel:
    """
    Polynomial kernel.

    k(a, b) = (a.b + offset)^degree
    """

    def __init__(self, degree: float = POLYNOMIAL_DEGREE,
                 offset: float = POLYNOMIAL_OFFSET):
        self.degree = degree
        self.offset = offset

    def evaluate(self, a: np.ndarray, b: np.ndarray) -> float:
        return float((np.dot(a, b) + self.offset) ** self.degree)

    def __call__(self, a, b):
        return self.evaluate(a, b)

    def __repr__(self):
        return f"PolynomialKernel(degree={self.degree}, offset={self.offset})"


class GaussianKernel:
    """
    Gaussian (RBF) kernel.

    k(a, b) = exp(-||a - b||^2 / (2 * bandwidth^2))

    The bandwidth is the standard deviation of the Gaussian; a smaller
    bandwidth gives a more local, wigglier decision boundary.
    """

    def __init__(self, bandwidth: float = GAUSSIAN_BANDWIDTH):
        if bandwidth <= 0:
            raise ValueError(f"bandwidth must be positive, got {bandwidth}")
        self.bandwidth = bandwidth
        self.gamma = 1.0 / (2.0 * bandwidth ** 2)

    def evaluate(self, a: np.ndarray, b: np.ndarray) -> float:
        diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
        return float(np.exp(-self.gamma * np.dot(diff, diff)))

    def __call__(self, a, b):
        return self.evaluate(a, b)

    def __repr__(self):
        return f"GaussianKernel(bandwidth={self.bandwidth})"


class LaplacianKernel:
    """
    Laplacian kernel.

    k(a, b) = exp(-||a - b|| / bandwidth)
    """

    def __init__(self, bandwidth: float = LAPLACIAN_BANDWIDTH):
        if bandwidth <= 0:
            raise ValueError(f"bandwidth must be positive, got {bandwidth}")
        self.bandwidth = bandwidth

    def evaluate(self, a: np.ndarray, b: np.ndarray) -> float:
        diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
        return float(np.exp(-np.linalg.norm(diff) / self.bandwidth))

    def __call__(self, a, b):
        return self.evaluate(a, b)

    def __repr__(self):
        return f"LaplacianKernel(bandwidth={self.bandwidth})"


class HyperbolicTangentKernel:
    """
    Sigmoid kernel.

    k(a, b) = tanh(scale * a.b + offset)

    Not positive semi-definite for every (scale, offset); SMO simply skips
    pairs with non-negative curvature.
    """

    def __init__(self, scale: float = TANH_SCALE, offset: float = TANH_OFFSET):
        self.scale = scale
        self.offset = offset

    def evaluate(self, a: np.ndarray, b: np.ndarray) -> float:
        return float(np.tanh(self.scale * np.dot(a, b) + self.offset))

    def __call__(self, a, b):
        return self.evaluate(a, b)

    def __repr__(self):
        return f"HyperbolicTangentKernel(scale={self.scale}, offset={self.offset})"


class CosineKernel:
    """Cosine similarity; zero when either point is the origin."""

    def evaluate(self, a: np.ndarray, b: np.ndarray) -> float:
        denom = np.linalg.norm(a) * np.linalg.norm(b)
        if denom == 0:
            return 0.0
        return float(np.dot(a, b) / denom)

    def __call__(self, a, b):
        return self.evaluate(a, b)

    def __repr__(self):
        return "CosineKernel()"


KERNELS: Dict[str, type] = {
    'linear': LinearKernel,
    'polynomial': PolynomialKernel,
    'poly': PolynomialKernel,
    'gaussian': GaussianKernel,
    'rbf': GaussianKernel,
    'laplacian': LaplacianKernel,
    'tanh': HyperbolicTangentKernel,
    'cosine': CosineKernel,
}


def get_kernel(kernel: Union[str, Kernel] = 'linear', **params) -> Kernel:
    """
    Resolve a kernel name or pass a kernel object through.

    Args:
        kernel: Registry name ('linear', 'polynomial', 'gaussian', ...) or
            an object exposing ``evaluate(a, b)``
        **params: Constructor arguments for a named kernel

    Returns:
        Kernel instance
    """
    if isinstance(kernel, str):
        name = kernel.lower()
        if name not in KERNELS:
            raise ValueError(f"Unknown kernel: {kernel}. "
                             f"Choose from {sorted(KERNELS)}")
        return KERNELS[name](**params)

    if not hasattr(kernel, 'evaluate'):
        raise ValueError(f"Kernel {kernel!r} has no evaluate(a, b) method")
    if params:
        raise ValueError("Kernel parameters can only be given with a kernel name")
    return kernel
