"""
Dropout regularization module.

During training each incoming scalar is multiplied by a fresh Bernoulli mask
constant: 1 with probability `1 - p`, 0 with probability `p`. Kept values
are *not* rescaled, so the expected activation shrinks by `1 - p` in training
mode. During evaluation the layer is the identity and returns its input
unchanged.

Masks are drawn from NumPy's global random state, so `np.random.seed` makes
them reproducible.
"""

from __future__ import annotations

from typing import Any, Dict

import numpy as np

from .._function import mul
from .._module import Module
from ..module._serialization_core import register_module
from ..node import Node
from ..utils._nested import map_nested


@register_module()
class Dropout(Module):
    """
    Dropout regularization layer (no inverted scaling).

    Behavior
    --------
    - Training mode:
        y = x * mask, where mask ~ Bernoulli(1 - p), drawn per scalar
    - Evaluation mode, or p == 0:
        y = x (the input object itself)

    Parameters
    ----------
    p : float, optional
        Probability of dropping (zeroing) a scalar. Must satisfy
        0.0 <= p < 1.0. Default is 0.5.
    """

    def __init__(self, p: float = 0.5):
        """
        Initialize the Dropout module.

        Raises
        ------
        ValueError
            If `p` is outside [0, 1).
        """
        super().__init__()
        p = float(p)
        if not (0.0 <= p < 1.0):
            raise ValueError("Dropout probability p must be in [0, 1).")
        self.p = p

    def _drop(self, x: Node) -> Node:
        keep = 1.0 if np.random.random() >= self.p else 0.0
        return mul(x, keep)

    def forward(self, x: Any) -> Any:
        """
        Apply the dropout mask in training mode; identity otherwise.

        Parameters
        ----------
        x : Any
            Node or nested sequence of nodes.

        Returns
        -------
        Any
            Masked copy of `x` (training) or `x` itself (evaluation).
        """
        if not self.training or self.p == 0.0:
            return x
        return map_nested(self._drop, x)

    def get_config(self) -> Dict[str, Any]:
        """
        Return a JSON-serializable configuration of the module.
        """
        return {"p": self.p}

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Dropout":
        """
        Reconstruct a Dropout module from its configuration.
        """
        return cls(p=float(config.get("p", 0.5)))
