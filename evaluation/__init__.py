"""
Evaluation module for the kernel SVM classifiers.

Provides:
- Classification metrics: accuracy

All metrics are implemented using only NumPy.
"""

from .metrics import accuracy_score

__all__ = [
    'accuracy_score',
]
