import unittest

import numpy as np

from scalarnet.domain._errors import ShapeMismatchError
from scalarnet.infrastructure._activations import ReLU
from scalarnet.infrastructure._linear import Linear
from scalarnet.infrastructure._module import Module
from scalarnet.infrastructure._parameter import Parameter
from scalarnet.infrastructure.layers import Dropout
from scalarnet.infrastructure.models._sequential import Sequential


class _Scale(Module):
    """Tiny custom module: multiplies every input by one learned factor."""

    def __init__(self) -> None:
        super().__init__()
        self.register_parameters("factor", [Parameter(2.0)])

    def forward(self, x):
        f = self._parameters["factor"][0]
        return [f * xi for xi in x]


class TestModuleRegistration(unittest.TestCase):
    def test_custom_module_parameters(self):
        m = _Scale()
        self.assertEqual(m.num_parameters(), 1)
        out = m([1.0, 3.0])
        self.assertEqual([o.value for o in out], [2.0, 6.0])

    def test_duplicate_group_raises(self):
        m = _Scale()
        with self.assertRaises(ValueError):
            m.register_parameters("factor", [Parameter()])

    def test_non_parameter_entry_raises(self):
        m = Module()
        with self.assertRaises(TypeError):
            m.register_parameters("w", [1.0])

    def test_register_module_rejects_non_modules(self):
        m = Module()
        with self.assertRaises(TypeError):
            m.register_module("child", object())

    def test_register_module_none_is_skipped(self):
        m = Module()
        m.register_module("child", None)
        self.assertEqual(list(m.children()), [])

    def test_named_parameters_follow_parameter_order(self):
        model = Sequential(Linear(2, 1), _Scale())
        names = [n for n, _ in model.named_parameters()]
        self.assertEqual(
            names,
            ["0.weight.0", "0.weight.1", "0.bias.0", "1.factor.0"],
        )
        self.assertEqual(
            [p for _, p in model.named_parameters()], model.parameters()
        )

    def test_leaf_layers_have_no_children(self):
        self.assertEqual(list(Linear(2, 2).named_children()), [])

    def test_base_forward_and_config_are_abstract(self):
        m = Module()
        with self.assertRaises(NotImplementedError):
            m([1.0])
        with self.assertRaises(NotImplementedError):
            m.get_config()
        with self.assertRaises(NotImplementedError):
            Module.from_config({})


class TestModuleModes(unittest.TestCase):
    def test_train_eval_propagate_to_children(self):
        drop = Dropout(0.5)
        model = Sequential(Linear(2, 2), ReLU(), drop)
        self.assertTrue(drop.training)

        self.assertIs(model.eval(), model)
        self.assertFalse(model.training)
        self.assertFalse(drop.training)

        model.train()
        self.assertTrue(drop.training)


class TestFlatValues(unittest.TestCase):
    def test_state_values_round_trip(self):
        np.random.seed(1)
        src = Sequential(Linear(3, 2), ReLU(), Linear(2, 1))
        dst = Sequential(Linear(3, 2), ReLU(), Linear(2, 1))

        values = src.state_values()
        self.assertEqual(values.dtype, np.float64)
        self.assertEqual(values.shape, (11,))

        dst.load_values(values)
        np.testing.assert_array_equal(dst.state_values(), values)

        x = [0.1, -0.2, 0.3]
        self.assertEqual(src(x)[0].value, dst(x)[0].value)

    def test_load_values_accepts_python_lists(self):
        m = Linear(1, 1)
        m.load_values([0.5, -0.25])
        self.assertEqual(m.weight[0][0].value, 0.5)
        self.assertEqual(m.bias[0].value, -0.25)

    def test_load_values_length_mismatch_raises(self):
        m = Linear(3, 2)
        with self.assertRaises(ShapeMismatchError) as cm:
            m.load_values(np.zeros(7))
        self.assertEqual(cm.exception.expected, 8)
        self.assertEqual(cm.exception.actual, 7)

    def test_load_values_rejects_non_finite(self):
        m = Linear(1, 1)
        with self.assertRaises(ValueError):
            m.load_values([float("nan"), 0.0])

    def test_zero_grad_clears_every_parameter(self):
        m = Linear(2, 2)
        for y in m([1.0, 2.0]):
            y.backward()
        self.assertTrue(any(p.grad != 0.0 for p in m.parameters()))
        m.zero_grad()
        self.assertTrue(all(p.grad == 0.0 for p in m.parameters()))


if __name__ == "__main__":
    unittest.main()
