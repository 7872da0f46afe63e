"""
Kernel SVM - Global Configuration

This module contains the default hyperparameters for the SMO trainer,
the kernels and the binary / one-vs-one estimators.
"""

from dataclasses import dataclass, field
from typing import Dict, Any

# =============================================================================
# SMO OPTIMIZER
# =============================================================================
SVM_C = 1.0  # Box constraint (soft margin regularization)
SVM_TOL = 1e-3  # KKT violation tolerance, also the minimum alpha step
SVM_MAX_ITER = 1000  # Consecutive passes without a change before stopping
SVM_FIT_INTERCEPT = True  # Add the bias term when scoring

# =============================================================================
# SUPPORT VECTOR RETENTION
# =============================================================================
# 'all': keep every training point
# 'above_mean_alpha': keep only points whose alpha exceeds the mean alpha
SVM_SUPPORT_STRATEGY = 'all'
SUPPORT_STRATEGIES = ('all', 'above_mean_alpha')

# =============================================================================
# KERNELS
# =============================================================================
SVM_KERNEL = 'linear'
POLYNOMIAL_DEGREE = 2.0
POLYNOMIAL_OFFSET = 0.0
GAUSSIAN_BANDWIDTH = 1.0
LAPLACIAN_BANDWIDTH = 1.0
TANH_SCALE = 1.0
TANH_OFFSET = 0.0

# =============================================================================
# DATACLASSES FOR CONFIGURATION
# =============================================================================

@dataclass
class SMOConfig:
    """SMO trainer configuration."""
    C: float = SVM_C
    tol: float = SVM_TOL
    max_iter: int = SVM_MAX_ITER
    fit_intercept: bool = SVM_FIT_INTERCEPT
    support: str = SVM_SUPPORT_STRATEGY


@dataclass
class KernelConfig:
    """Kernel selection and parameters."""
    name: str = SVM_KERNEL
    params: Dict[str, Any] = field(default_factory=dict)

    def build(self):
        """Instantiate the configured kernel."""
        from kernel_svm.kernels import get_kernel
        return get_kernel(self.name, **self.params)


def get_default_config():
    """Get default configuration objects."""
    return {
        'smo': SMOConfig(),
        'kernel': KernelConfig(),
    }
