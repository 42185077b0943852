import math
import unittest

from scalarnet.infrastructure.node import Node


class TestNodeBasics(unittest.TestCase):
    def test_leaf_state(self):
        n = Node(3)
        self.assertIsInstance(n.value, float)
        self.assertEqual(n.value, 3.0)
        self.assertEqual(n.grad, 0.0)
        self.assertEqual(n.children, ())
        self.assertTrue(n.is_leaf)
        self.assertEqual(n.op, "leaf")

    def test_set_value_on_leaf(self):
        n = Node(1.0)
        n.set_value(2.5)
        self.assertEqual(n.value, 2.5)
        self.assertEqual(n.item(), 2.5)
        self.assertEqual(float(n), 2.5)

    def test_set_value_on_derived_node_raises(self):
        y = Node(1.0) + Node(2.0)
        with self.assertRaises(RuntimeError):
            y.set_value(0.0)

    def test_operations_do_not_mutate_operands(self):
        a, b = Node(2.0), Node(3.0)
        c = a * b
        self.assertEqual((a.value, b.value), (2.0, 3.0))
        self.assertEqual(c.value, 6.0)
        self.assertEqual(c.children, (a, b))
        self.assertEqual(c.op, "mul")
        self.assertFalse(c.is_leaf)

    def test_equal_values_remain_distinct_nodes(self):
        a, b = Node(1.0), Node(1.0)
        self.assertNotEqual(a, b)
        self.assertEqual(len({a, b}), 2)

    def test_repr(self):
        self.assertEqual(repr(Node(1.0)), "Node(v=1.000, g=0.000)")


class TestNodeOperators(unittest.TestCase):
    def test_forward_values(self):
        x = Node(2.0)
        self.assertEqual((x + 1).value, 3.0)
        self.assertEqual((1 + x).value, 3.0)
        self.assertEqual((x - 0.5).value, 1.5)
        self.assertEqual((1 - x).value, -1.0)
        self.assertEqual((x * 4).value, 8.0)
        self.assertEqual((4 * x).value, 8.0)
        self.assertEqual((x / 4).value, 0.5)
        self.assertEqual((1 / x).value, 0.5)
        self.assertEqual((x**3).value, 8.0)
        self.assertEqual((-x).value, -2.0)

    def test_method_forms_match_catalog(self):
        x = Node(0.5)
        self.assertAlmostEqual(x.exp().value, math.exp(0.5))
        self.assertAlmostEqual(x.log().value, math.log(0.5))
        self.assertAlmostEqual(x.tanh().value, math.tanh(0.5))
        self.assertAlmostEqual(x.sigmoid().value, 1.0 / (1.0 + math.exp(-0.5)))
        self.assertEqual(x.relu().value, 0.5)
        self.assertEqual(x.neg().value, -0.5)
        self.assertEqual(x.add(1).sub(2).mul(3).div(2).value, -0.75)
        self.assertEqual(x.pow(2).value, 0.25)

    def test_node_exponent_is_rejected(self):
        with self.assertRaises(TypeError):
            _ = Node(2.0) ** Node(2.0)

    def test_unsupported_operand_raises_type_error(self):
        with self.assertRaises(TypeError):
            _ = Node(1.0) + "a"


if __name__ == "__main__":
    unittest.main()
