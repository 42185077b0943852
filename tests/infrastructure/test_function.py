import math
import unittest
import warnings

import numpy as np

from scalarnet.domain._errors import LogDomainError, NumericInstabilityError
from scalarnet.infrastructure import _function as F
from scalarnet.infrastructure.node import Node


def _central_difference(fn, values, i, h=1e-6):
    """Numerical d fn / d values[i] by central differences."""
    plus = list(values)
    minus = list(values)
    plus[i] += h
    minus[i] -= h
    f_plus = fn(*[Node(v) for v in plus]).value
    f_minus = fn(*[Node(v) for v in minus]).value
    return (f_plus - f_minus) / (2.0 * h)


def _analytic_grads(fn, values):
    leaves = [Node(v) for v in values]
    out = fn(*leaves)
    out.backward()
    return [leaf.grad for leaf in leaves]


class TestCatalogGradients(unittest.TestCase):
    # (name, fn, operand tuples): negative, near-zero and positive operands.
    # log and fractional powers only take positive bases; relu stays clear of 0.
    CASES = [
        ("add", lambda a, b: F.add(a, b), [(0.7, -1.3), (-2.0, 1e-3), (1e-4, 5.0)]),
        ("sub", lambda a, b: F.sub(a, b), [(0.7, -1.3), (-2.0, 1e-3), (1e-4, 5.0)]),
        (
            "mul",
            lambda a, b: F.mul(a, b),
            [(1.5, -2.0), (-0.3, 1e-3), (1e-3, 1e-3), (4.0, 2.5)],
        ),
        (
            "div",
            lambda a, b: F.div(a, b),
            [(1.5, -2.0), (1.5, 0.05), (-0.7, -0.05), (1e-3, 3.0)],
        ),
        ("neg", lambda a: F.neg(a), [(0.3,), (-2.0,), (1e-3,)]),
        ("pow_int", lambda a: F.pow(a, 3), [(-1.2,), (1e-2,), (2.0,)]),
        ("pow_frac", lambda a: F.pow(a, 2.5), [(1.3,), (1e-2,), (4.0,)]),
        ("pow_neg", lambda a: F.pow(a, -2), [(0.8,), (-0.1,), (0.1,), (3.0,)]),
        ("exp", lambda a: F.exp(a), [(0.4,), (-3.0,), (1e-3,), (-1e-3,), (2.5,)]),
        ("log", lambda a: F.log(a), [(2.2,), (1e-2,), (0.5,), (20.0,)]),
        ("relu", lambda a: F.relu(a), [(0.9,), (-0.9,), (1e-3,), (-1e-3,)]),
        ("sigmoid", lambda a: F.sigmoid(a), [(-0.6,), (1e-3,), (-8.0,), (4.0,)]),
        ("tanh", lambda a: F.tanh(a), [(0.35,), (-2.0,), (1e-3,), (-1e-3,), (3.0,)]),
        (
            "composite",
            lambda a, b: F.tanh(F.add(F.mul(a, b), F.exp(F.neg(a)))),
            [(0.5, -0.25), (-1.0, 1e-2), (1e-3, 2.0)],
        ),
    ]

    def test_gradients_match_central_differences(self):
        for name, fn, operands in self.CASES:
            for values in operands:
                with self.subTest(op=name, values=values):
                    analytic = _analytic_grads(fn, values)
                    numeric = [
                        _central_difference(fn, values, i)
                        for i in range(len(values))
                    ]
                    np.testing.assert_allclose(
                        analytic, numeric, rtol=1e-5, atol=1e-6
                    )

    def test_relu_gradient_at_zero_is_zero(self):
        x = Node(0.0)
        y = F.relu(x)
        y.backward()
        self.assertEqual(y.value, 0.0)
        self.assertEqual(x.grad, 0.0)

    def test_pow_zero_exponent_has_zero_gradient(self):
        x = Node(0.0)
        y = F.pow(x, 0)
        y.backward()
        self.assertEqual(y.value, 1.0)
        self.assertEqual(x.grad, 0.0)

    def test_sigmoid_saturates_without_overflow(self):
        self.assertEqual(F.sigmoid(-1000.0).value, 0.0)
        self.assertEqual(F.sigmoid(1000.0).value, 1.0)


class TestNumericPolicy(unittest.TestCase):
    def test_log_of_zero_raises(self):
        with self.assertRaises(LogDomainError) as cm:
            F.log(Node(0.0))
        self.assertEqual(cm.exception.value, 0.0)

    def test_log_of_negative_raises_value_error(self):
        with self.assertRaises(ValueError):
            Node(-1.0).log()

    def test_reciprocal_of_zero_is_infinite(self):
        y = F.pow(Node(0.0), -1)
        self.assertTrue(math.isinf(y.value))

    def test_fractional_power_of_negative_is_nan(self):
        y = Node(-8.0) ** (1.0 / 3.0)
        self.assertTrue(math.isnan(y.value))

    def test_exp_overflow_is_infinite(self):
        self.assertTrue(math.isinf(F.exp(1000.0).value))

    def test_infinite_value_raises_on_backward(self):
        y = F.div(1.0, Node(0.0))
        with self.assertRaises(NumericInstabilityError):
            y.backward()

    def test_pow_rejects_non_numeric_exponent(self):
        with self.assertRaises(TypeError):
            F.pow(Node(2.0), "2")
        with self.assertRaises(TypeError):
            F.pow(Node(2.0), Node(2.0))

    def test_as_node_rejects_non_numbers(self):
        with self.assertRaises(TypeError):
            F.as_node("1.0")
        n = Node(1.0)
        self.assertIs(F.as_node(n), n)
        self.assertTrue(F.as_node(2).is_leaf)


class TestReduceSumAndSoftmax(unittest.TestCase):
    def test_reduce_sum_value_and_gradients(self):
        xs = [Node(v) for v in (1.0, 2.0, 3.5)]
        s = F.reduce_sum(xs)
        s.backward()
        self.assertEqual(s.value, 6.5)
        self.assertEqual([x.grad for x in xs], [1.0, 1.0, 1.0])

    def test_reduce_sum_single_term_is_returned(self):
        x = Node(4.0)
        self.assertIs(F.reduce_sum([x]), x)

    def test_reduce_sum_empty_raises(self):
        with self.assertRaises(ValueError):
            F.reduce_sum([])

    def test_softmax_is_a_distribution(self):
        probs = F.softmax([Node(1.0), Node(2.0), Node(3.0)])
        values = np.array([p.value for p in probs])
        expected = np.exp([1.0, 2.0, 3.0]) / np.exp([1.0, 2.0, 3.0]).sum()
        np.testing.assert_allclose(values, expected, rtol=1e-12)
        self.assertAlmostEqual(values.sum(), 1.0, places=12)
        self.assertTrue(np.all((values > 0.0) & (values < 1.0)))

    def test_softmax_gradient_matches_jacobian(self):
        xs = [Node(v) for v in (0.2, -0.4, 1.1)]
        probs = F.softmax(xs)
        probs[0].backward()
        s = np.array([p.value for p in probs])
        # d s_0 / d x_j = s_0 * (delta_0j - s_j)
        expected = s[0] * (np.eye(3)[0] - s)
        np.testing.assert_allclose([x.grad for x in xs], expected, rtol=1e-9)

    def test_softmax_large_input_warns(self):
        with self.assertWarns(RuntimeWarning):
            F.softmax([1000.0, 0.0])

    def test_softmax_moderate_input_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            F.softmax([10.0, -10.0])

    def test_softmax_empty_raises(self):
        with self.assertRaises(ValueError):
            F.softmax([])


if __name__ == "__main__":
    unittest.main()
