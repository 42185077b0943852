import unittest

import numpy as np

from scalarnet.infrastructure._activations import Sigmoid, Tanh
from scalarnet.infrastructure._function import mul
from scalarnet.infrastructure._linear import Linear
from scalarnet.infrastructure._losses import mse
from scalarnet.infrastructure._parameter import Parameter
from scalarnet.infrastructure.models import Sequential
from scalarnet.infrastructure.optimizers import SGD, Adam


def _with_grad(value, grad):
    p = Parameter(value)
    mul(p, grad).backward()
    return p


class TestSGD(unittest.TestCase):
    def test_plain_step(self):
        p = _with_grad(1.0, 0.5)
        SGD([p], lr=0.1).step()
        self.assertAlmostEqual(p.value, 0.95)

    def test_weight_decay(self):
        p = _with_grad(1.0, 0.5)
        SGD([p], lr=0.1, weight_decay=0.1).step()
        self.assertAlmostEqual(p.value, 0.94)

    def test_frozen_parameters_are_skipped(self):
        p = _with_grad(1.0, 0.5)
        p.requires_grad = False
        SGD([p], lr=0.1).step()
        self.assertEqual(p.value, 1.0)

    def test_zero_grad(self):
        p = _with_grad(1.0, 3.0)
        opt = SGD([p], lr=0.1)
        opt.zero_grad()
        self.assertEqual(p.grad, 0.0)

    def test_invalid_hyperparameters(self):
        with self.assertRaises(ValueError):
            SGD([], lr=0.0)
        with self.assertRaises(ValueError):
            SGD([], lr=0.1, weight_decay=-1.0)

    def test_params_are_captured_as_tuple(self):
        params = [Parameter(1.0)]
        opt = SGD(params, lr=0.1)
        params.append(Parameter(2.0))
        self.assertEqual(len(opt.params), 1)


class TestAdam(unittest.TestCase):
    def test_first_step_moves_by_lr(self):
        p = _with_grad(1.0, 0.3)
        opt = Adam([p], lr=0.1)
        opt.step()
        self.assertAlmostEqual(p.value, 0.9, places=6)
        self.assertEqual(opt.t, 1)
        self.assertAlmostEqual(opt.m[0], 0.1 * 0.3)
        self.assertAlmostEqual(opt.v[0], 0.001 * 0.09)

    def test_negative_gradient_moves_up(self):
        p = _with_grad(0.0, -4.0)
        Adam([p], lr=0.01).step()
        self.assertAlmostEqual(p.value, 0.01, places=6)

    def test_frozen_parameter_keeps_state(self):
        a = _with_grad(1.0, 1.0)
        b = _with_grad(1.0, 1.0)
        b.requires_grad = False
        opt = Adam([a, b], lr=0.1)
        opt.step()
        self.assertEqual(b.value, 1.0)
        self.assertEqual(opt.m[1], 0.0)
        self.assertEqual(opt.v[1], 0.0)
        self.assertLess(a.value, 1.0)

    def test_empty_parameter_list(self):
        opt = Adam([], lr=0.1)
        opt.step()
        self.assertEqual(opt.t, 0)

    def test_invalid_hyperparameters(self):
        with self.assertRaises(ValueError):
            Adam([], lr=-1.0)
        with self.assertRaises(ValueError):
            Adam([], betas=(1.0, 0.999))
        with self.assertRaises(ValueError):
            Adam([], betas=(0.9, -0.1))
        with self.assertRaises(ValueError):
            Adam([], eps=0.0)
        with self.assertRaises(ValueError):
            Adam([], weight_decay=-0.5)


def _fit_line(opt_factory, steps):
    model = Linear(1, 1, initializer="zeros")
    opt = opt_factory(model.parameters())
    xs = [-1.0, -0.5, 0.0, 0.5, 1.0]
    for _ in range(steps):
        opt.zero_grad()
        preds = [model([x])[0] for x in xs]
        mse(preds, [2.0 * x for x in xs]).backward()
        opt.step()
    return model.weight[0][0].value, model.bias[0].value


class TestTraining(unittest.TestCase):
    def test_sgd_fits_a_line(self):
        w, b = _fit_line(lambda ps: SGD(ps, lr=0.05), 600)
        self.assertAlmostEqual(w, 2.0, delta=1e-2)
        self.assertAlmostEqual(b, 0.0, delta=1e-2)

    def test_adam_fits_a_line(self):
        w, b = _fit_line(lambda ps: Adam(ps, lr=0.05), 1000)
        self.assertAlmostEqual(w, 2.0, delta=5e-2)
        self.assertAlmostEqual(b, 0.0, delta=5e-2)

    def test_xor_loss_decreases(self):
        np.random.seed(0)
        model = Sequential(Linear(2, 4), Tanh(), Linear(4, 1), Sigmoid())
        opt = Adam(model.parameters(), lr=0.1)
        data = [([0.0, 0.0], 0.0), ([0.0, 1.0], 1.0), ([1.0, 0.0], 1.0), ([1.0, 1.0], 0.0)]

        def epoch():
            opt.zero_grad()
            preds = [model(x)[0] for x, _ in data]
            loss = mse(preds, [y for _, y in data])
            loss.backward()
            opt.step()
            return loss.value

        first = epoch()
        for _ in range(300):
            last = epoch()
        self.assertLess(last, 0.8 * first)


if __name__ == "__main__":
    unittest.main()
