import unittest

import numpy as np

from scalarnet.domain._errors import ShapeMismatchError
from scalarnet.infrastructure.convolution import Conv2d
from scalarnet.infrastructure.utils import from_values, to_values


def _ones(c, h, w):
    return [[[1.0] * w for _ in range(h)] for _ in range(c)]


class TestConv2dShapes(unittest.TestCase):
    def test_channel_list_input(self):
        out = Conv2d(3, 2)(_ones(2, 4, 4))
        self.assertEqual(np.array(to_values(out)).shape, (3, 3, 3))

    def test_single_map_input_is_one_channel(self):
        out = Conv2d(2, 3)(_ones(1, 5, 5)[0])
        self.assertEqual(np.array(to_values(out)).shape, (2, 3, 3))

    def test_single_channel_list_matches_single_map(self):
        np.random.seed(0)
        conv = Conv2d(2, 2)
        x = np.random.randn(4, 4).tolist()
        np.testing.assert_array_equal(to_values(conv(x)), to_values(conv([x])))

    def test_mismatched_channels_raise(self):
        x = [_ones(1, 4, 4)[0], _ones(1, 3, 4)[0]]
        with self.assertRaises(ShapeMismatchError):
            Conv2d(1, 2)(x)

    def test_empty_input_raises(self):
        with self.assertRaises(ShapeMismatchError):
            Conv2d(1, 2)([])

    def test_invalid_out_channels(self):
        with self.assertRaises(ValueError):
            Conv2d(0, 3)


class TestConv2dValues(unittest.TestCase):
    def test_channels_are_summed(self):
        out = to_values(Conv2d(3, 2, initializer="ones")(_ones(2, 4, 4)))
        np.testing.assert_array_equal(out, np.full((3, 3, 3), 8.0))

    def test_each_filter_uses_its_own_kernel(self):
        conv = Conv2d(2, 1, initializer="zeros")
        conv.load_values([2.0, -1.0])
        out = to_values(conv([[1.0, 2.0], [3.0, 4.0]]))
        np.testing.assert_array_equal(out[0], [[2.0, 4.0], [6.0, 8.0]])
        np.testing.assert_array_equal(out[1], [[-1.0, -2.0], [-3.0, -4.0]])

    def test_parameters_per_filter(self):
        conv = Conv2d(3, 2, stride=2, padding=1)
        self.assertEqual(conv.num_parameters(), 12)
        expected = [p for f in conv.filters for p in f.parameters()]
        self.assertEqual(conv.parameters(), expected)
        self.assertEqual(list(conv.named_children()), [])

    def test_gradients_flow_into_every_channel(self):
        conv = Conv2d(1, 1, initializer="ones")
        x = from_values(_ones(2, 2, 2))
        out = conv(x)
        total = out[0][0][0] + out[0][0][1] + out[0][1][0] + out[0][1][1]
        total.backward()
        for ch in x:
            for row in ch:
                self.assertEqual([n.grad for n in row], [1.0, 1.0])
        # the kernel tap sees 4 cells in each of 2 channels
        self.assertEqual(conv.parameters()[0].grad, 8.0)

    def test_config(self):
        conv = Conv2d(4, 3, stride=2, padding=1)
        cfg = conv.get_config()
        self.assertEqual(cfg["out_channels"], 4)
        clone = Conv2d.from_config(cfg)
        self.assertEqual(clone.num_parameters(), 36)


if __name__ == "__main__":
    unittest.main()
