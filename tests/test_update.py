"""
Tests for the AdaGrad update policy.

Run with: python -m pytest tests/test_update.py -v
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from cne.core.update import AdaGradUpdate, AdaGradPolicy
from cne.exceptions import ShapeMismatchError


class TestAdaGradUpdate:
    """Tests for AdaGradUpdate and its per-run policy."""

    def test_default_epsilon(self):
        assert AdaGradUpdate().epsilon == 1e-8

    def test_epsilon_settable(self):
        update = AdaGradUpdate()
        update.epsilon = 0.5
        policy = update.initialize(1, 1)
        iterate = np.array([[1.0]])

        policy.update(iterate, 1.0, np.array([[1.0]]))

        assert iterate[0, 0] == pytest.approx(1.0 - 1.0 / 1.5)

    def test_initialize_zero_accumulator(self):
        policy = AdaGradUpdate().initialize(3, 2)
        assert isinstance(policy, AdaGradPolicy)
        assert policy.shape == (3, 2)
        assert np.all(policy.accumulator == 0.0)

    def test_single_entry_step(self):
        """gradient=2, step 0.1: accumulator 4, iterate moves by ~0.1."""
        policy = AdaGradUpdate(epsilon=1e-8).initialize(1, 1)
        iterate = np.array([[1.0]])

        policy.update(iterate, 0.1, np.array([[2.0]]))

        assert policy.accumulator[0, 0] == pytest.approx(4.0)
        assert iterate[0, 0] == pytest.approx(1.0 - 0.1 * 2.0 / (2.0 + 1e-8))
        assert iterate[0, 0] == pytest.approx(0.9)

    def test_accumulates_across_updates(self):
        policy = AdaGradUpdate().initialize(1, 1)
        iterate = np.array([[0.0]])

        policy.update(iterate, 0.1, np.array([[2.0]]))
        policy.update(iterate, 0.1, np.array([[2.0]]))

        assert policy.accumulator[0, 0] == pytest.approx(8.0)
        # Second step is smaller: 0.1 * 2 / sqrt(8)
        assert iterate[0, 0] == pytest.approx(-0.1 - 0.2 / np.sqrt(8.0), rel=1e-6)

    def test_zero_gradient_is_safe(self):
        policy = AdaGradUpdate().initialize(2, 2)
        iterate = np.ones((2, 2))

        policy.update(iterate, 0.5, np.zeros((2, 2)))

        np.testing.assert_array_equal(iterate, np.ones((2, 2)))

    def test_policies_do_not_share_state(self):
        update = AdaGradUpdate()
        first = update.initialize(1, 1)
        first.update(np.zeros((1, 1)), 0.1, np.array([[3.0]]))

        second = update.initialize(1, 1)
        assert second.accumulator[0, 0] == 0.0
        assert first.accumulator[0, 0] == pytest.approx(9.0)

    def test_gradient_shape_mismatch(self):
        policy = AdaGradUpdate().initialize(2, 2)
        with pytest.raises(ShapeMismatchError):
            policy.update(np.zeros((2, 2)), 0.1, np.zeros((2, 3)))

    def test_iterate_shape_mismatch(self):
        policy = AdaGradUpdate().initialize(2, 2)
        with pytest.raises(ShapeMismatchError):
            policy.update(np.zeros((3, 2)), 0.1, np.zeros((2, 2)))

    def test_minimizes_quadratic(self):
        policy = AdaGradUpdate().initialize(3, 1)
        iterate = np.array([[1.0], [-2.0], [0.5]])
        for _ in range(500):
            policy.update(iterate, 0.5, 2.0 * iterate)
        assert np.sum(iterate ** 2) < 1e-3
