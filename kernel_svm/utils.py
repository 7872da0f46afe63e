"""Input validation and random source helpers shared by the estimators."""

import numbers
import numpy as np
from typing import Tuple


def check_random_state(random_state=None):
    """
    Turn ``random_state`` into a random source with ``integers(high)``.

    Args:
        random_state: None (fresh unseeded generator), an int seed, a
            numpy Generator, or any object exposing ``integers(high)``

    Returns:
        Random source
    """
    if random_state is None:
        return np.random.default_rng()
    if isinstance(random_state, numbers.Integral):
        return np.random.default_rng(int(random_state))
    if hasattr(random_state, 'integers'):
        return random_state
    raise ValueError(f"{random_state!r} cannot be used as a random source")


def check_hyperparameters(C: float, tol: float, max_iter: int) -> None:
    """Reject non-positive C / tol and a max_iter below one."""
    if not C > 0:
        raise ValueError(f"C must be positive, got {C}")
    if not tol > 0:
        raise ValueError(f"tol must be positive, got {tol}")
    if max_iter < 1:
        raise ValueError(f"max_iter must be at least 1, got {max_iter}")


def check_training_data(X, y, min_samples: int = 2) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate and copy a training set.

    Args:
        X: Training points (n_samples, n_features)
        y: Labels (n_samples,)
        min_samples: Smallest accepted number of points

    Returns:
        (X, y) as fresh float64 / label arrays
    """
    X = np.array(X, dtype=np.float64)
    y = np.array(y).ravel()

    if X.size == 0:
        raise ValueError("Training set is empty")
    if X.ndim != 2:
        raise ValueError(f"Expected a 2D array of points, got shape {X.shape}")
    if len(y) != X.shape[0]:
        raise ValueError(f"Got {X.shape[0]} points but {len(y)} labels")
    if X.shape[0] < min_samples:
        raise ValueError(f"Need at least {min_samples} training points, "
                         f"got {X.shape[0]}")
    if not np.all(np.isfinite(X)):
        raise ValueError("Training points contain NaN or infinite values")

    return X, y


def check_query_points(X, n_features: int) -> np.ndarray:
    """Validate a batch of query points against the fitted feature count."""
    X = np.asarray(X, dtype=np.float64)
    if X.ndim == 1:
        X = X.reshape(1, -1)
    if X.ndim != 2:
        raise ValueError(f"Expected a 2D array of points, got shape {X.shape}")
    if X.shape[1] != n_features:
        raise ValueError(f"Expected {n_features} features, got {X.shape[1]}")
    return X
