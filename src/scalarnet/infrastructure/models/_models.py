"""
High-level model utilities.

This module defines the infrastructure-level `Model` base class, which extends
the core `Module` abstraction with conveniences expected at the
"top-level network" boundary:

- Inference helper (`predict`)
- Checkpoint serialization (`save_json`, `load_json`)

Checkpoints are a single JSON document holding the architecture (the config
tree produced by `module_to_config`) and the weights (the flat value vector of
`parameters()`, base64-encoded).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

from .._module import Module
from ..encoding._b64 import ndarray_to_payload, payload_to_ndarray
from ..module._serialization_core import module_from_config, module_to_config
from ..module._serialization_weights import extract_flat_values, load_flat_values_

logger = logging.getLogger(__name__)

CHECKPOINT_FORMAT = "scalarnet.json.ckpt.v1"


class Model(Module):
    """
    Base class for top-level neural network models.

    `Model` is a semantic specialization of `Module` intended to represent
    complete networks rather than individual layers. It preserves all core
    `Module` behavior while providing:

    - `predict` for inference-style forward passes
    - `save_json` / `load_json` for architecture + weights checkpointing
    """

    def predict(self, x: Any) -> Any:
        """
        Perform an inference-style forward pass.

        The model is switched to evaluation mode for the call and restored to
        its previous mode afterwards, even if `forward` raises.

        Parameters
        ----------
        x : Any
            Input structure of nodes (or numbers).

        Returns
        -------
        Any
            Output produced by the model's forward computation.
        """
        was_training = self.training
        self.eval()
        try:
            return self.forward(x)
        finally:
            if was_training:
                self.train()

    def save_json(self, path: Union[str, Path]) -> None:
        """
        Save model architecture and weights into a single JSON file.

        Parameters
        ----------
        path : str | Path
            Output JSON file path, e.g. "checkpoint.json". Parent directories
            are created as needed.

        Format
        ------
        {
          "format": "scalarnet.json.ckpt.v1",
          "arch": {"type": ..., "config": {...}, "children": {...}},
          "state": {"b64": "...", "dtype": "<f8", "shape": [n], "order": "C"}
        }
        """
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)

        payload = {
            "format": CHECKPOINT_FORMAT,
            "arch": module_to_config(self),
            "state": ndarray_to_payload(extract_flat_values(self)),
        }

        p.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info("saved checkpoint to %s (%d parameters)", p, self.num_parameters())

    @classmethod
    def load_json(cls, path: Union[str, Path]) -> "Model":
        """
        Load a model from a single JSON checkpoint created by `save_json()`.

        Returns
        -------
        Model
            Reconstructed model with weights loaded.

        Raises
        ------
        ValueError
            If the checkpoint format is unsupported or names an unknown
            module type.
        ShapeMismatchError
            If the stored weight vector does not fit the architecture.
        TypeError
            If the reconstructed object is not an instance of `cls`.
        """
        p = Path(path)
        payload = json.loads(p.read_text(encoding="utf-8"))

        fmt = payload.get("format")
        if fmt != CHECKPOINT_FORMAT:
            raise ValueError(f"Unsupported checkpoint format: {fmt!r}")

        model = module_from_config(payload["arch"])
        load_flat_values_(model, payload_to_ndarray(payload["state"]))

        if not isinstance(model, cls):
            raise TypeError(
                f"Loaded object is {type(model).__name__}, expected {cls.__name__}."
            )

        logger.info("loaded checkpoint from %s", p)
        return model
