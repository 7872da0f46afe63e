"""
Kernel SVM - Support Vector Machines trained with simplified SMO.

Components:
- Kernels: Linear, Polynomial, Gaussian, Laplacian, HyperbolicTangent, Cosine
- kernel_matrix / cross_kernel_matrix: Gram matrix construction
- SMOTrainer: Simplified SMO with random second-index selection
- BinaryKernelSVM: Two-class classifier with batch-mean thresholding
- MulticlassKernelSVM: One-vs-One ensemble with majority voting

All numerics are implemented with NumPy only.
"""

# Kernels
from .kernels import (
    Kernel,
    LinearKernel,
    PolynomialKernel,
    GaussianKernel,
    LaplacianKernel,
    HyperbolicTangentKernel,
    CosineKernel,
    get_kernel,
)
from .kernel_matrix import kernel_matrix, cross_kernel_matrix

# Optimizer
from .smo import SMOTrainer, SMOResult

# Classifiers
from .binary_svm import BinaryKernelSVM
from .multiclass import MulticlassKernelSVM

__all__ = [
    # Kernels
    'Kernel',
    'LinearKernel',
    'PolynomialKernel',
    'GaussianKernel',
    'LaplacianKernel',
    'HyperbolicTangentKernel',
    'CosineKernel',
    'get_kernel',
    'kernel_matrix',
    'cross_kernel_matrix',

    # Optimizer
    'SMOTrainer',
    'SMOResult',

    # Classifiers
    'BinaryKernelSVM',
    'MulticlassKernelSVM',
]
