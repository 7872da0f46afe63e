"""
Binary kernel SVM trained with simplified SMO.

Scores a point as

    f(x) = sum_j alpha_j * y_j * k(x, sv_j) (+ b)

over the retained support vectors, and labels a batch by comparing each
score with the mean score of that same batch: scores at or above the mean
get the upper class, the rest get the lower class. Predictions therefore
depend on which other points are classified in the same call, and a batch
holding a single point always receives the upper class.
"""

import numpy as np
from typing import Optional, Tuple, Literal

from config import (
    SVM_C, SVM_TOL, SVM_MAX_ITER, SVM_FIT_INTERCEPT,
    SVM_KERNEL, SVM_SUPPORT_STRATEGY, SUPPORT_STRATEGIES,
)
from .kernels import get_kernel
from .kernel_matrix import kernel_matrix, cross_kernel_matrix
from .smo import SMOTrainer
from .utils import check_hyperparameters, check_training_data, check_query_points
from evaluation.metrics import accuracy_score


class BinaryKernelSVM:
    """
    Two-class kernel Support Vector Classifier.

    Labels can be any two distinct values; the larger one is mapped to +1
    and the smaller one to -1 for training.

    Support vector retention:
        'all'              every training point contributes to scoring
        'above_mean_alpha' only points with alpha above the mean alpha
                           contribute (the stored label of the others is
                           zeroed). This gives a different decision
                           function from 'all' on the same training data.
    """

    def __init__(self,
                 C: float = SVM_C,
                 fit_intercept: bool = SVM_FIT_INTERCEPT,
                 max_iter: int = SVM_MAX_ITER,
                 tol: float = SVM_TOL,
                 kernel=SVM_KERNEL,
                 support: Literal['all', 'above_mean_alpha'] = SVM_SUPPORT_STRATEGY,
                 random_state=None,
                 verbose: bool = False,
                 **kernel_params):
        """
        Initialize binary kernel SVM.

        Args:
            C: Regularization parameter (soft margin), must be > 0
            fit_intercept: Add the bias term when scoring
            max_iter: Consecutive unproductive SMO passes before stopping
            tol: KKT tolerance, must be > 0
            kernel: Kernel name or object with evaluate(a, b)
            support: Support vector retention strategy
            random_state: Random source for SMO pair selection
            verbose: Print training progress
            **kernel_params: Parameters for a named kernel (e.g. bandwidth)
        """
        check_hyperparameters(C, tol, max_iter)
        if support not in SUPPORT_STRATEGIES:
            raise ValueError(f"Unknown support strategy: {support}. "
                             f"Choose from {SUPPORT_STRATEGIES}")

        self.C = C
        self.fit_intercept = fit_intercept
        self.max_iter = max_iter
        self.tol = tol
        self.kernel = get_kernel(kernel, **kernel_params)
        self.support = support
        self.random_state = random_state
        self.verbose = verbose

        self.classes_: Optional[np.ndarray] = None
        self.alpha_: Optional[np.ndarray] = None
        self.b_: float = 0.0
        self.X_train_: Optional[np.ndarray] = None
        self.labels_: Optional[np.ndarray] = None
        self.support_mask_: Optional[np.ndarray] = None
        self.support_vectors_: Optional[np.ndarray] = None
        self.support_labels_: Optional[np.ndarray] = None
        self.support_alpha_: Optional[np.ndarray] = None
        self.n_features_: int = 0
        self.n_passes_: int = 0
        self.n_updates_: int = 0
        self.dual_objective_: float = 0.0

    def _reset(self) -> None:
        self.classes_ = None
        self.alpha_ = None
        self.b_ = 0.0
        self.X_train_ = None
        self.labels_ = None
        self.support_mask_ = None
        self.support_vectors_ = None
        self.support_labels_ = None
        self.support_alpha_ = None
        self.n_features_ = 0
        self.n_passes_ = 0
        self.n_updates_ = 0
        self.dual_objective_ = 0.0

    def _check_fitted(self) -> None:
        if self.alpha_ is None:
            raise ValueError("Model not fitted. Call fit() first.")

    def fit(self, X: np.ndarray, y: np.ndarray) -> 'BinaryKernelSVM':
        """
        Fit the SVM with SMO.

        Args:
            X: Training features (n_samples, n_features)
            y: Training labels with exactly two distinct values

        Returns:
            self
        """
        self._reset()
        X, y = check_training_data(X, y)

        classes = np.unique(y)
        if len(classes) != 2:
            raise ValueError(f"Binary SVM needs exactly 2 classes, got {len(classes)}")

        y_signed = np.where(y == classes[1], 1.0, -1.0)

        K = kernel_matrix(X, self.kernel)
        trainer = SMOTrainer(C=self.C, tol=self.tol, max_iter=self.max_iter,
                             random_state=self.random_state, verbose=self.verbose)
        result = trainer.train(K, y_signed)

        labels = y_signed.copy()
        if self.support == 'above_mean_alpha':
            labels[result.alpha <= np.mean(result.alpha)] = 0.0
        mask = labels != 0

        self.classes_ = classes
        self.alpha_ = result.alpha
        self.b_ = result.b
        self.X_train_ = X
        self.labels_ = labels
        self.support_mask_ = mask
        self.support_vectors_ = X[mask]
        self.support_labels_ = labels[mask]
        self.support_alpha_ = result.alpha[mask]
        self.n_features_ = X.shape[1]
        self.n_passes_ = result.n_passes
        self.n_updates_ = result.n_updates
        self.dual_objective_ = result.dual_objective

        if self.verbose:
            print(f"Binary SVM {classes[0]} vs {classes[1]}: "
                  f"{int(mask.sum())}/{len(mask)} support vectors kept ({self.support})")

        return self

    def decision_function(self, X: np.ndarray) -> np.ndarray:
        """
        Raw scores sum_j alpha_j * y_j * k(x, sv_j) (+ b).

        Args:
            X: Query points (n_queries, n_features)

        Returns:
            Scores (n_queries,)
        """
        self._check_fitted()
        X = check_query_points(X, self.n_features_)

        if len(self.support_vectors_) == 0:
            scores = np.zeros(len(X))
        else:
            K = cross_kernel_matrix(X, self.support_vectors_, self.kernel)
            scores = K @ (self.support_alpha_ * self.support_labels_)

        if self.fit_intercept:
            scores = scores + self.b_
        return scores

    def predict_with_scores(self, X: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Predict labels and return the raw scores used.

        The threshold is the mean score of this batch.

        Returns:
            (labels, scores)
        """
        scores = self.decision_function(X)
        if len(scores) == 0:
            return np.empty(0, dtype=self.classes_.dtype), scores

        threshold = np.mean(scores)
        labels = np.where(scores >= threshold, self.classes_[1], self.classes_[0])
        return labels, scores

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict class labels."""
        labels, _ = self.predict_with_scores(X)
        return labels

    def predict_one(self, x: np.ndarray):
        """Predict the label of a single point."""
        x = np.asarray(x, dtype=np.float64).ravel()
        return self.predict(x.reshape(1, -1))[0]

    def score(self, X: np.ndarray, y: np.ndarray) -> float:
        """Calculate accuracy."""
        return accuracy_score(y, self.predict(X))
