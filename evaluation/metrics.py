"""
Evaluation Metrics for the kernel SVM classifiers.

Classification Metrics:
- Accuracy
"""

import numpy as np


def _check_same_length(y_true, y_pred):
    y_true = np.asarray(y_true).ravel()
    y_pred = np.asarray(y_pred).ravel()
    if len(y_true) != len(y_pred):
        raise ValueError(f"y_true has {len(y_true)} labels but "
                         f"y_pred has {len(y_pred)}")
    return y_true, y_pred


# =============================================================================
# CLASSIFICATION METRICS
# =============================================================================

def accuracy_score(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Calculate classification accuracy.

    Parameters
    ----------
    y_true : np.ndarray
        Ground truth labels.
    y_pred : np.ndarray
        Predicted labels.

    Returns
    -------
    float
        Accuracy score in [0, 1].

    Raises
    ------
    ValueError
        If y_true and y_pred differ in length.

    Mathematical Definition
    -----------------------
    Accuracy = correct_predictions / total_predictions
    """
    y_true, y_pred = _check_same_length(y_true, y_pred)

    if len(y_true) == 0:
        return 0.0

    return float(np.mean(y_true == y_pred))

