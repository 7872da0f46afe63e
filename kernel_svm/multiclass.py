"""
One-vs-One multiclass kernel SVM.

A K-class problem is split into K(K-1)/2 binary problems, one per class
pair (a, b) with a < b. Each pair gets its own BinaryKernelSVM trained only
on the points labelled a or b. At prediction time every pair classifier
casts one vote per point and the class with the most votes wins; ties go
to the lowest class index.

Each pair classifier thresholds its scores at the mean of its own scores
over the query batch. Pair scores are oriented towards the lower class a,
so a score at or above the mean is a vote for a and anything below is a
vote for b. A batch holding a single point therefore always gets class 0.
"""

import numpy as np
from typing import List, Optional, Tuple, Literal

from config import (
    SVM_C, SVM_TOL, SVM_MAX_ITER, SVM_FIT_INTERCEPT,
    SVM_KERNEL, SVM_SUPPORT_STRATEGY, SUPPORT_STRATEGIES,
)
from .kernels import get_kernel
from .binary_svm import BinaryKernelSVM
from .utils import (
    check_hyperparameters, check_random_state,
    check_training_data, check_query_points,
)
from evaluation.metrics import accuracy_score


class MulticlassKernelSVM:
    """
    Kernel SVM for K integer classes {0, ..., K-1} via One-vs-One voting.

    Works for K = 2 as well, in which case a single pair classifier is
    trained.
    """

    def __init__(self,
                 C: float = SVM_C,
                 fit_intercept: bool = SVM_FIT_INTERCEPT,
                 n_classes: Optional[int] = None,
                 max_iter: int = SVM_MAX_ITER,
                 tol: float = SVM_TOL,
                 kernel=SVM_KERNEL,
                 support: Literal['all', 'above_mean_alpha'] = SVM_SUPPORT_STRATEGY,
                 random_state=None,
                 verbose: bool = False,
                 **kernel_params):
        """
        Initialize multiclass kernel SVM.

        Args:
            C: Regularization parameter shared by every pair classifier
            fit_intercept: Add the bias term when scoring
            n_classes: Number of classes K (None = max label + 1)
            max_iter: Consecutive unproductive SMO passes before stopping
            tol: KKT tolerance
            kernel: Kernel name or object with evaluate(a, b)
            support: Support vector retention strategy ('all' or
                'above_mean_alpha')
            random_state: Random source shared by all pair trainers
            verbose: Print training progress
            **kernel_params: Parameters for a named kernel
        """
        check_hyperparameters(C, tol, max_iter)
        if n_classes is not None and n_classes < 2:
            raise ValueError(f"n_classes must be at least 2, got {n_classes}")
        if support not in SUPPORT_STRATEGIES:
            raise ValueError(f"Unknown support strategy: {support}. "
                             f"Choose from {SUPPORT_STRATEGIES}")

        self.C = C
        self.fit_intercept = fit_intercept
        self.n_classes = n_classes
        self.max_iter = max_iter
        self.tol = tol
        self.kernel = get_kernel(kernel, **kernel_params)
        self.support = support
        self.random_state = random_state
        self.verbose = verbose

        self.n_classes_: int = 0
        self.n_classifiers_: int = 0
        self.n_features_: int = 0
        self.class_pairs_: Optional[np.ndarray] = None
        self.estimators_: List[BinaryKernelSVM] = []

    def _check_fitted(self) -> None:
        if not self.estimators_:
            raise ValueError("Model not fitted. Call fit() first.")

    def fit(self, X: np.ndarray, y: np.ndarray) -> 'MulticlassKernelSVM':
        """
        Train one binary SVM per unordered class pair.

        Args:
            X: Training features (n_samples, n_features)
            y: Integer labels in {0, ..., K-1}

        Returns:
            self
        """
        self.estimators_ = []
        self.class_pairs_ = None
        self.n_classes_ = 0
        self.n_classifiers_ = 0
        self.n_features_ = 0
        X, y = check_training_data(X, y)

        if not np.issubdtype(y.dtype, np.number) or not np.all(np.mod(y, 1) == 0):
            raise ValueError("Multiclass labels must be integers")
        y = y.astype(np.int64)
        if np.min(y) < 0:
            raise ValueError("Multiclass labels must be non-negative")

        n_classes = self.n_classes if self.n_classes is not None else int(np.max(y)) + 1
        if n_classes < 2:
            raise ValueError(f"Need at least 2 classes, got {n_classes}")
        if np.max(y) >= n_classes:
            raise ValueError(f"Label {np.max(y)} out of range for {n_classes} classes")

        missing = [c for c in range(n_classes) if not np.any(y == c)]
        if missing:
            raise ValueError(f"No training points for classes {missing}; every "
                             f"pair classifier needs both of its classes")

        rng = check_random_state(self.random_state)

        pairs = []
        estimators = []
        n_classifiers = n_classes * (n_classes - 1) // 2

        for a in range(n_classes):
            for b in range(a + 1, n_classes):
                mask = (y == a) | (y == b)

                if self.verbose:
                    print(f"Training classifier {len(pairs) + 1}/{n_classifiers}: "
                          f"class {a} vs class {b} ({int(mask.sum())} points)")

                clf = BinaryKernelSVM(
                    C=self.C,
                    fit_intercept=self.fit_intercept,
                    max_iter=self.max_iter,
                    tol=self.tol,
                    kernel=self.kernel,
                    support=self.support,
                    random_state=rng,
                    verbose=self.verbose,
                )
                clf.fit(X[mask], y[mask])

                pairs.append((a, b))
                estimators.append(clf)

        self.n_classes_ = n_classes
        self.n_classifiers_ = len(estimators)
        self.n_features_ = X.shape[1]
        self.class_pairs_ = np.array(pairs, dtype=np.int64)
        self.estimators_ = estimators

        return self

    def decision_function(self, X: np.ndarray) -> np.ndarray:
        """
        Raw score of every pair classifier.

        Row k belongs to class_pairs_[k] = (a, b) and is oriented so that
        higher scores favour the lower class a.

        Args:
            X: Query points (n_queries, n_features)

        Returns:
            Scores (n_classifiers, n_queries)
        """
        self._check_fitted()
        X = check_query_points(X, self.n_features_)

        scores = np.zeros((self.n_classifiers_, len(X)))
        for k, clf in enumerate(self.estimators_):
            # pair classifiers map b to +1
            scores[k] = -clf.decision_function(X)
        return scores

    def _votes_from_scores(self, scores: np.ndarray) -> np.ndarray:
        n_queries = scores.shape[1]
        votes = np.zeros((n_queries, self.n_classes_), dtype=np.int64)
        if n_queries == 0:
            return votes

        for k, (a, b) in enumerate(self.class_pairs_):
            threshold = np.mean(scores[k])
            for_a = scores[k] >= threshold
            votes[for_a, a] += 1
            votes[~for_a, b] += 1
        return votes

    def votes(self, X: np.ndarray) -> np.ndarray:
        """
        Pairwise vote counts.

        Returns:
            Votes (n_queries, n_classes); each row sums to n_classifiers_
        """
        return self._votes_from_scores(self.decision_function(X))

    def predict_with_scores(self, X: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Predict labels and return the pair scores they were voted from.

        Returns:
            (labels (n_queries,), scores (n_classifiers, n_queries))
        """
        scores = self.decision_function(X)
        votes = self._votes_from_scores(scores)
        # argmax returns the first maximum, so ties go to the lowest class
        labels = np.argmax(votes, axis=1) if len(votes) else np.empty(0, dtype=np.int64)
        return labels, scores

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict class labels."""
        labels, _ = self.predict_with_scores(X)
        return labels

    def predict_one(self, x: np.ndarray) -> int:
        """Predict the class of a single point."""
        x = np.asarray(x, dtype=np.float64).ravel()
        return int(self.predict(x.reshape(1, -1))[0])

    def score(self, X: np.ndarray, y: np.ndarray) -> float:
        """Calculate accuracy."""
        return accuracy_score(y, self.predict(X))


# =============================================================================
# Demo
# =============================================================================

def _demo():
    """Three Gaussian blobs, linear kernel."""
    rng = np.random.default_rng(0)
    centers = np.array([[0.0, 6.0], [-5.2, -3.0], [5.2, -3.0]])

    X_train = np.vstack([rng.normal(c, 0.7, size=(20, 2)) for c in centers])
    y_train = np.repeat(np.arange(3), 20)
    X_test = np.vstack([rng.normal(c, 0.7, size=(10, 2)) for c in centers])
    y_test = np.repeat(np.arange(3), 10)

    svm = MulticlassKernelSVM(C=1.0, kernel='linear', max_iter=50,
                              random_state=0, verbose=True)
    svm.fit(X_train, y_train)

    print(f"Classifiers: {svm.n_classifiers_}, pairs: {svm.class_pairs_.tolist()}")
    print(f"Train Accuracy: {svm.score(X_train, y_train):.4f}")
    print(f"Test Accuracy: {svm.score(X_test, y_test):.4f}")


if __name__ == "__main__":
    _demo()
