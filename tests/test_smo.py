"""
SMO trainer tests.

Tests for:
- Box and equality constraints on the trained alphas
- Termination through the stall counter
- Reproducibility with a seeded or injected random source
- Invalid argument handling
"""

import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kernel_svm.kernels import LinearKernel, GaussianKernel
from kernel_svm.kernel_matrix import kernel_matrix
from kernel_svm.smo import SMOTrainer, SMOResult


class FixedSource:
    """Random source that always draws 0 and records the calls."""

    def __init__(self):
        self.calls = []

    def integers(self, high):
        self.calls.append(high)
        return 0


def _separable_problem(n_per_class=15, seed=0, kernel=None):
    rng = np.random.default_rng(seed)
    X = np.vstack([
        rng.normal([-3.0, -3.0], 1.0, size=(n_per_class, 2)),
        rng.normal([3.0, 3.0], 1.0, size=(n_per_class, 2)),
    ])
    y = np.array([-1.0] * n_per_class + [1.0] * n_per_class)
    K = kernel_matrix(X, kernel or LinearKernel())
    return K, y


def test_alpha_respects_box_constraint():
    for C in (0.05, 1.0, 10.0):
        K, y = _separable_problem()
        result = SMOTrainer(C=C, tol=1e-3, max_iter=20, random_state=1).train(K, y)

        assert isinstance(result, SMOResult)
        assert result.alpha.shape == (len(y),)
        assert np.all(result.alpha >= 0.0)
        assert np.all(result.alpha <= C)


def test_equality_constraint_is_preserved():
    K, y = _separable_problem(kernel=GaussianKernel(bandwidth=2.0))
    result = SMOTrainer(C=1.0, tol=1e-3, max_iter=20, random_state=2).train(K, y)

    assert result.n_updates > 0
    assert abs(np.dot(result.alpha, y)) < 1e-8


def test_dual_objective_improves_on_zero_start():
    K, y = _separable_problem()
    result = SMOTrainer(C=1.0, tol=1e-3, max_iter=10, random_state=0).train(K, y)

    assert result.n_updates > 0
    assert result.dual_objective > 0.0


def test_terminates_after_max_iter_stalled_passes():
    # eta is zero for every pair, so nothing can ever change
    K = np.zeros((4, 4))
    y = np.array([-1.0, -1.0, 1.0, 1.0])

    result = SMOTrainer(C=1.0, tol=1e-3, max_iter=5, random_state=0).train(K, y)

    assert result.n_passes == 5
    assert result.n_updates == 0
    assert np.all(result.alpha == 0.0)
    assert result.b == 0.0


def test_run_ends_with_max_iter_unproductive_passes():
    K, y = _separable_problem()
    result = SMOTrainer(C=1.0, tol=1e-3, max_iter=7, random_state=3).train(K, y)

    assert result.n_passes >= 7
    assert result.n_passes >= result.n_updates // len(y)


def test_seeded_runs_are_reproducible():
    K, y = _separable_problem(seed=4)

    first = SMOTrainer(C=1.0, tol=1e-3, max_iter=10, random_state=123).train(K, y)
    second = SMOTrainer(C=1.0, tol=1e-3, max_iter=10, random_state=123).train(K, y)

    assert np.array_equal(first.alpha, second.alpha)
    assert first.b == second.b
    assert first.n_passes == second.n_passes


def test_injected_random_source_is_used():
    K, y = _separable_problem(n_per_class=5)
    source = FixedSource()

    result = SMOTrainer(C=1.0, tol=1e-3, max_iter=3, random_state=source).train(K, y)

    assert len(source.calls) > 0
    # j is drawn from the n - 1 indices other than i
    assert all(high == len(y) - 1 for high in source.calls)
    assert np.all((result.alpha >= 0.0) & (result.alpha <= 1.0))


def test_numpy_generator_is_accepted():
    K, y = _separable_problem(n_per_class=5)
    result = SMOTrainer(max_iter=3, random_state=np.random.default_rng(9)).train(K, y)
    assert result.n_passes >= 3


def test_invalid_hyperparameters():
    with pytest.raises(ValueError):
        SMOTrainer(C=0.0)
    with pytest.raises(ValueError):
        SMOTrainer(C=-1.0)
    with pytest.raises(ValueError):
        SMOTrainer(tol=0.0)
    with pytest.raises(ValueError):
        SMOTrainer(max_iter=0)
    with pytest.raises(ValueError):
        SMOTrainer(random_state="seed").train(np.eye(2), np.array([-1.0, 1.0]))


def test_invalid_training_input():
    trainer = SMOTrainer(max_iter=2)

    with pytest.raises(ValueError):
        trainer.train(np.ones((1, 1)), np.array([1.0]))
    with pytest.raises(ValueError):
        trainer.train(np.eye(3), np.array([-1.0, 1.0]))
    with pytest.raises(ValueError):
        trainer.train(np.eye(2), np.array([0.0, 1.0]))


def test_verbose_prints_summary(capsys):
    K, y = _separable_problem(n_per_class=4)
    SMOTrainer(max_iter=2, random_state=0, verbose=True).train(K, y)

    out = capsys.readouterr().out
    assert "SMO finished" in out
