"""
Linear (fully-connected) layer implementation.

This module provides an infrastructure-level `Linear` layer. It is a trainable
`Module` (registered for serialization via `register_module`) that maps a
vector of scalar nodes to a vector of weighted sums:

    y_j = sum_i W[j][i] * x_i + b_j

Shape conventions
-----------------
- x : list of `in_channels` scalars
- W : `out_channels` rows of `in_channels` parameters
- b : `out_channels` parameters (omitted if bias=False)
- y : list of `out_channels` nodes

Parameter order
---------------
`parameters()` lists the weights row-major (all inputs of output 0, then
output 1, ...) followed by the biases. Flat persistence relies on this order.
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Callable, Dict, List, Sequence, Union

from ..domain._errors import ShapeMismatchError
from ._function import add, mul, reduce_sum
from ._module import Module
from ._parameter import Parameter
from .module._serialization_core import register_module
from .node import Node
from .utils.weight_initializer import WeightInitializer


@register_module()
class Linear(Module):
    """
    Fully-connected layer over a vector of scalars.

    Parameters
    ----------
    in_channels : int
        Expected input vector length.
    out_channels : int
        Output vector length.
    bias : bool, optional
        Whether each output unit has a bias. Defaults to True.
    initializer : str | Callable[[], float], optional
        Registered initializer name, or a zero-argument sampler. Used for
        weights and biases alike. Defaults to "uniform" (U(-1, 1)).

    Raises
    ------
    ValueError
        If a channel count is not positive.
    """

    def __init__(
        self,
        in_channels: int,
        out_channels: int,
        bias: bool = True,
        initializer: Union[str, Callable[[], float]] = "uniform",
    ) -> None:
        super().__init__()
        if int(in_channels) <= 0 or int(out_channels) <= 0:
            raise ValueError(
                f"Linear channel counts must be positive, got "
                f"in_channels={in_channels}, out_channels={out_channels}"
            )

        self.in_channels = int(in_channels)
        self.out_channels = int(out_channels)
        self.use_bias = bool(bias)
        self.initializer = initializer

        init = WeightInitializer(initializer)

        weights = [Parameter() for _ in range(self.out_channels * self.in_channels)]
        init(weights, (self.out_channels, self.in_channels))
        self.register_parameters("weight", weights)

        if self.use_bias:
            biases = [Parameter() for _ in range(self.out_channels)]
            init(biases, (self.out_channels,))
            self.register_parameters("bias", biases)

    @property
    def weight(self) -> List[List[Parameter]]:
        """
        Return weights as `out_channels` rows of `in_channels` parameters.
        """
        flat = self._parameters["weight"]
        n = self.in_channels
        return [flat[j * n : (j + 1) * n] for j in range(self.out_channels)]

    @property
    def bias(self) -> List[Parameter]:
        """
        Return the bias parameters (empty when bias is disabled).
        """
        return self._parameters.get("bias", [])

    def forward(self, x: Sequence[Union[Node, float]]) -> List[Node]:
        """
        Compute one weighted sum per output unit.

        Parameters
        ----------
        x : Sequence[Node | float]
            Input vector of length `in_channels`.

        Returns
        -------
        List[Node]
            Output vector of length `out_channels`.

        Raises
        ------
        ShapeMismatchError
            If the input is not a flat vector of `in_channels` scalars.
        """
        if not isinstance(x, (list, tuple)):
            raise ShapeMismatchError(
                "Linear input", f"vector of {self.in_channels}", type(x).__name__
            )
        if len(x) != self.in_channels:
            raise ShapeMismatchError("Linear input length", self.in_channels, len(x))
        for i, xi in enumerate(x):
            if not isinstance(xi, (Node, Real)):
                raise ShapeMismatchError(
                    f"Linear input entry {i}", "scalar", type(xi).__name__
                )

        bias = self.bias
        out: List[Node] = []
        for j, row in enumerate(self.weight):
            y = reduce_sum([mul(w, xi) for w, xi in zip(row, x)])
            if self.use_bias:
                y = add(y, bias[j])
            out.append(y)

        if len(out) != self.out_channels:
            raise ShapeMismatchError("Linear output length", self.out_channels, len(out))
        return out

    def get_config(self) -> Dict[str, Any]:
        """
        Return a JSON-serializable configuration for reconstructing this layer.

        Trainable parameter values are handled by the checkpoint state, not
        by the config. A custom sampler is recorded as "uniform".
        """
        return {
            "in_channels": self.in_channels,
            "out_channels": self.out_channels,
            "bias": self.use_bias,
            "initializer": _initializer_name(self.initializer),
        }

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Linear":
        """
        Construct a Linear layer from a configuration dict.
        """
        return cls(
            in_channels=int(cfg["in_channels"]),
            out_channels=int(cfg["out_channels"]),
            bias=bool(cfg.get("bias", True)),
            initializer=str(cfg.get("initializer", "uniform")),
        )


def _initializer_name(initializer: Union[str, Callable[[], float]]) -> str:
    return initializer if isinstance(initializer, str) else "uniform"
