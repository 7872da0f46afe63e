"""
Simplified Sequential Minimal Optimization (SMO).

Solves the soft-margin SVM dual

    max  sum(alpha) - 1/2 * sum_ij alpha_i alpha_j y_i y_j K(x_i, x_j)
    s.t. 0 <= alpha_i <= C

two coefficients at a time. The first index sweeps the training set in
order; the second is drawn uniformly at random from the remaining points
(no maximal-violation heuristic). Training stops after ``max_iter``
consecutive full passes that change nothing, so it always terminates, but
the result is not guaranteed to be dual optimal.
"""

import numpy as np
from dataclasses import dataclass

from config import SVM_C, SVM_TOL, SVM_MAX_ITER
from .utils import check_random_state, check_hyperparameters


@dataclass
class SMOResult:
    """Coefficients and diagnostics from one SMO run."""
    alpha: np.ndarray
    b: float
    n_passes: int
    n_updates: int
    dual_objective: float


class SMOTrainer:
    """
    Binary SMO trainer working on a precomputed kernel matrix.

    Labels must already be mapped to {-1, +1}.
    """

    def __init__(self,
                 C: float = SVM_C,
                 tol: float = SVM_TOL,
                 max_iter: int = SVM_MAX_ITER,
                 random_state=None,
                 verbose: bool = False):
        """
        Initialize SMO trainer.

        Args:
            C: Upper bound on every alpha (soft margin)
            tol: KKT tolerance and minimum accepted change of alpha[j]
            max_iter: Consecutive unproductive passes before stopping
            random_state: Source for picking the second index (None, seed,
                numpy Generator or any object with integers(high))
            verbose: Print a summary when training finishes
        """
        check_hyperparameters(C, tol, max_iter)
        self.C = C
        self.tol = tol
        self.max_iter = max_iter
        self.random_state = random_state
        self.verbose = verbose

    def _pick_second(self, i: int, n_samples: int, rng) -> int:
        """Draw j uniformly from [0, n_samples) without i."""
        j = int(rng.integers(n_samples - 1))
        return j + 1 if j >= i else j

    def _error(self, k: int, K: np.ndarray, y: np.ndarray,
               alpha: np.ndarray, b: float) -> float:
        """E_k = f(x_k) - y_k with the current alpha and bias."""
        return b + np.dot(alpha * y, K[:, k]) - y[k]

    def _take_step(self, i: int, j: int, K: np.ndarray, y: np.ndarray,
                   alpha: np.ndarray, b: float, E_i: float):
        """
        Jointly optimize alpha[i] and alpha[j].

        Returns:
            New bias, or None when the pair was skipped (alpha untouched)
        """
        C = self.C
        E_j = self._error(j, K, y, alpha, b)
        alpha_i_old, alpha_j_old = alpha[i], alpha[j]

        # Box for alpha[j] along the line sum(alpha * y) = const
        if y[i] == y[j]:
            L = max(0.0, alpha_j_old + alpha_i_old - C)
            H = min(C, alpha_j_old + alpha_i_old)
        else:
            L = max(0.0, alpha_j_old - alpha_i_old)
            H = min(C, C + alpha_j_old - alpha_i_old)

        if L == H:
            return None

        eta = 2.0 * K[i, j] - K[i, i] - K[j, j]
        if eta >= 0:
            return None

        alpha_j_new = alpha_j_old - y[j] * (E_i - E_j) / eta
        alpha_j_new = min(max(alpha_j_new, L), H)

        if abs(alpha_j_new - alpha_j_old) < self.tol:
            return None

        alpha_i_new = alpha_i_old + y[i] * y[j] * (alpha_j_old - alpha_j_new)
        # Rounding can push alpha[i] a hair outside the box
        alpha_i_new = min(max(alpha_i_new, 0.0), C)
        alpha[i] = alpha_i_new
        alpha[j] = alpha_j_new

        delta_i = y[i] * (alpha_i_new - alpha_i_old)
        delta_j = y[j] * (alpha_j_new - alpha_j_old)
        b1 = b - E_i - delta_i * K[i, j] - delta_j * K[i, j]
        b2 = b - E_j - delta_i * K[i, j] - delta_j * K[j, j]

        if 0 < alpha_i_new < C:
            return b1
        if 0 < alpha_j_new < C:
            return b2
        return (b1 + b2) / 2.0

    def train(self, K: np.ndarray, y: np.ndarray) -> SMOResult:
        """
        Run SMO until max_iter consecutive passes leave alpha unchanged.

        Args:
            K: Kernel matrix (n_samples, n_samples)
            y: Labels in {-1, +1} (n_samples,)

        Returns:
            SMOResult with alpha, bias and run statistics
        """
        K = np.asarray(K, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64).ravel()
        n_samples = len(y)

        if K.shape != (n_samples, n_samples):
            raise ValueError(f"Kernel matrix shape {K.shape} does not match "
                             f"{n_samples} labels")
        if n_samples < 2:
            raise ValueError(f"Need at least 2 training points, got {n_samples}")
        if not np.all(np.isin(y, (-1.0, 1.0))):
            raise ValueError("SMO labels must be -1 or +1")

        rng = check_random_state(self.random_state)

        alpha = np.zeros(n_samples)
        b = 0.0
        count = 0
        n_passes = 0
        n_updates = 0

        while count < self.max_iter:
            num_changed = 0

            for i in range(n_samples):
                E_i = self._error(i, K, y, alpha, b)

                # KKT check
                if (y[i] * E_i < -self.tol and alpha[i] < self.C) or \
                   (y[i] * E_i > self.tol and alpha[i] > 0):

                    j = self._pick_second(i, n_samples, rng)
                    new_b = self._take_step(i, j, K, y, alpha, b, E_i)
                    if new_b is not None:
                        b = new_b
                        num_changed += 1

            n_passes += 1
            n_updates += num_changed

            if num_changed == 0:
                count += 1
            else:
                count = 0

        ay = alpha * y
        dual_objective = float(np.sum(alpha) - 0.5 * ay @ K @ ay)

        if self.verbose:
            n_sv = int(np.sum(alpha > 0))
            print(f"SMO finished: {n_passes} passes, {n_updates} updates, "
                  f"{n_sv} non-zero alphas, dual objective={dual_objective:.4f}")

        return SMOResult(
            alpha=alpha,
            b=float(b),
            n_passes=n_passes,
            n_updates=n_updates,
            dual_objective=dual_objective,
        )
