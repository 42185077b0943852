import json
import tempfile
import unittest
from pathlib import Path

import numpy as np

from scalarnet.domain._errors import ShapeMismatchError
from scalarnet.infrastructure._activations import ReLU, Softmax, Tanh
from scalarnet.infrastructure._linear import Linear
from scalarnet.infrastructure.convolution import Conv2d
from scalarnet.infrastructure.encoding import ndarray_to_payload
from scalarnet.infrastructure.flatten import Flatten
from scalarnet.infrastructure.layers import Dropout
from scalarnet.infrastructure.models import Model, Sequential
from scalarnet.infrastructure.models._models import CHECKPOINT_FORMAT
from scalarnet.infrastructure.utils import to_values


class TestCheckpointJson(unittest.TestCase):
    def setUp(self):
        np.random.seed(42)
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "ckpt" / "model.json"

    def tearDown(self):
        self._tmp.cleanup()

    def test_dense_round_trip(self):
        model = Sequential(Linear(3, 4, initializer="xavier"), Tanh(), Linear(4, 2))
        model.save_json(self.path)
        loaded = Sequential.load_json(self.path)

        self.assertIsInstance(loaded, Sequential)
        np.testing.assert_array_equal(loaded.state_values(), model.state_values())
        x = [0.5, -1.0, 2.0]
        self.assertEqual(to_values(loaded(x)), to_values(model(x)))

    def test_conv_round_trip(self):
        model = Sequential(
            Conv2d(2, 3, padding=1),
            ReLU(),
            Flatten(),
            Linear(32, 3),
            Softmax(),
        )
        x = np.random.randn(4, 4).tolist()
        model.save_json(self.path)
        loaded = Model.load_json(self.path)

        self.assertEqual(len(loaded), 5)
        self.assertIsInstance(loaded[0], Conv2d)
        self.assertEqual(loaded[0].padding, 1)
        np.testing.assert_allclose(to_values(loaded(x)), to_values(model(x)), rtol=0, atol=0)

    def test_many_layers_keep_their_order(self):
        layers = [Linear(2, 2) for _ in range(11)]
        model = Sequential(*layers)
        model.save_json(self.path)
        loaded = Sequential.load_json(self.path)
        np.testing.assert_array_equal(loaded.state_values(), model.state_values())

    def test_dropout_probability_is_kept(self):
        Sequential(Linear(2, 2), Dropout(0.3)).save_json(self.path)
        loaded = Sequential.load_json(self.path)
        self.assertEqual(loaded[1].p, 0.3)

    def test_file_layout(self):
        model = Sequential(Linear(2, 1))
        model.save_json(self.path)
        doc = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(doc["format"], CHECKPOINT_FORMAT)
        self.assertEqual(doc["arch"]["type"], "Sequential")
        self.assertEqual(doc["arch"]["children"]["0"]["type"], "Linear")
        self.assertEqual(doc["state"]["shape"], [3])
        self.assertEqual(doc["state"]["dtype"], "<f8")

    def _write(self, doc):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(doc), encoding="utf-8")

    def test_wrong_format_raises(self):
        self._write({"format": "something.else", "arch": {}, "state": {}})
        with self.assertRaises(ValueError):
            Sequential.load_json(self.path)

    def test_unknown_module_type_raises(self):
        self._write(
            {
                "format": CHECKPOINT_FORMAT,
                "arch": {"type": "NoSuchLayer", "config": {}, "children": {}},
                "state": ndarray_to_payload(np.zeros(0)),
            }
        )
        with self.assertRaises(ValueError):
            Sequential.load_json(self.path)

    def test_weight_count_mismatch_raises(self):
        Sequential(Linear(2, 2)).save_json(self.path)
        doc = json.loads(self.path.read_text(encoding="utf-8"))
        doc["state"] = ndarray_to_payload(np.zeros(5))
        self._write(doc)
        with self.assertRaises(ShapeMismatchError):
            Sequential.load_json(self.path)

    def test_non_finite_weights_rejected(self):
        Sequential(Linear(1, 1)).save_json(self.path)
        doc = json.loads(self.path.read_text(encoding="utf-8"))
        doc["state"] = ndarray_to_payload(np.array([np.nan, 0.0]))
        self._write(doc)
        with self.assertRaises(ValueError):
            Sequential.load_json(self.path)

    def test_loading_a_bare_layer_as_model_raises(self):
        self._write(
            {
                "format": CHECKPOINT_FORMAT,
                "arch": {"type": "ReLU", "config": {}, "children": {}},
                "state": ndarray_to_payload(np.zeros(0)),
            }
        )
        with self.assertRaises(TypeError):
            Sequential.load_json(self.path)


if __name__ == "__main__":
    unittest.main()
