import math
import unittest

import numpy as np

from scalarnet.domain._errors import LogDomainError, ShapeMismatchError
from scalarnet.infrastructure._losses import (
    binary_cross_entropy,
    categorical_cross_entropy,
    cross_entropy,
    mse,
    sse,
)
from scalarnet.infrastructure.utils import from_values, to_grads


class TestRegressionLosses(unittest.TestCase):
    def test_sse_value_and_grads(self):
        pred = from_values([1.0, 2.0])
        loss = sse(pred, [0.0, 0.0])
        self.assertEqual(loss.value, 5.0)
        loss.backward()
        self.assertEqual(to_grads(pred), [2.0, 4.0])

    def test_mse_is_mean(self):
        pred = from_values([1.0, 2.0])
        loss = mse(pred, [0.0, 0.0])
        self.assertAlmostEqual(loss.value, 2.5)
        loss.backward()
        np.testing.assert_allclose(to_grads(pred), [1.0, 2.0])

    def test_nested_inputs_are_flattened(self):
        pred = from_values([[1.0, 0.0], [0.0, 3.0]])
        self.assertAlmostEqual(mse(pred, [1.0, 0.0, 0.0, 1.0]).value, 1.0)

    def test_length_mismatch_raises(self):
        with self.assertRaises(ShapeMismatchError):
            sse(from_values([1.0, 2.0]), [1.0])

    def test_empty_input_raises(self):
        with self.assertRaises(ShapeMismatchError):
            mse([], [])


class TestClassificationLosses(unittest.TestCase):
    def test_cross_entropy(self):
        probs = from_values([0.2, 0.5, 0.3])
        loss = cross_entropy(probs, 1)
        self.assertAlmostEqual(loss.value, -math.log(0.5))
        loss.backward()
        self.assertAlmostEqual(probs[1].grad, -2.0)
        self.assertEqual(probs[0].grad, 0.0)

    def test_cross_entropy_label_out_of_range(self):
        with self.assertRaises(IndexError):
            cross_entropy(from_values([0.5, 0.5]), 2)
        with self.assertRaises(IndexError):
            cross_entropy(from_values([0.5, 0.5]), -1)

    def test_zero_probability_raises(self):
        with self.assertRaises(LogDomainError):
            cross_entropy(from_values([1.0, 0.0]), 1)

    def test_categorical_skips_zero_targets(self):
        probs = from_values([0.0, 0.25, 0.75])
        loss = categorical_cross_entropy(probs, [0.0, 0.5, 0.5])
        expected = -(0.5 * math.log(0.25) + 0.5 * math.log(0.75))
        self.assertAlmostEqual(loss.value, expected)

    def test_categorical_matches_cross_entropy_for_one_hot(self):
        probs = from_values([0.1, 0.6, 0.3])
        a = categorical_cross_entropy(probs, [0.0, 1.0, 0.0]).value
        b = cross_entropy(probs, 1).value
        self.assertAlmostEqual(a, b)

    def test_binary_cross_entropy(self):
        pred = from_values([0.9, 0.2])
        loss = binary_cross_entropy(pred, [1.0, 0.0])
        expected = -(math.log(0.9) + math.log(0.8)) / 2.0
        self.assertAlmostEqual(loss.value, expected)
        loss.backward()
        self.assertAlmostEqual(pred[0].grad, -1.0 / (2.0 * 0.9))
        self.assertAlmostEqual(pred[1].grad, 1.0 / (2.0 * 0.8))

    def test_binary_cross_entropy_saturated_but_correct(self):
        # log(0) terms have zero weight and are skipped
        loss = binary_cross_entropy(from_values([1.0, 0.0]), [1.0, 0.0])
        self.assertEqual(loss.value, 0.0)

    def test_binary_cross_entropy_soft_targets(self):
        loss = binary_cross_entropy(from_values([0.5]), [0.5])
        self.assertAlmostEqual(loss.value, math.log(2.0))


if __name__ == "__main__":
    unittest.main()
