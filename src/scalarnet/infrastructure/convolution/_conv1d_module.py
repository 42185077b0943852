"""
Single-kernel 2-D convolution over one feature map.

`Conv1d` owns one square `kernel_size x kernel_size` kernel and slides it over
a single 2-D map of scalar nodes (one channel, hence the name). Each output
cell is the sum of the kernel taps that land inside the map:

    out[oi][oj] = sum_{k,l in bounds} x[i + k][j + l] * w[k][l]
    with i = oi * stride - padding, j = oj * stride - padding

Padding is virtual: out-of-bounds taps are skipped rather than multiplied by
a materialized zero, so the graph only contains real products.

Output size per axis:

    floor((n - kernel_size + 2 * padding) / stride) + 1
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence, Union

from ...domain._errors import ShapeMismatchError
from .._function import mul, reduce_sum
from .._module import Module
from .._parameter import Parameter
from ..module._serialization_core import register_module
from ..node import Node
from ..utils._nested import grid_shape
from ..utils.weight_initializer import WeightInitializer


def conv_output_size(n: int, kernel_size: int, stride: int, padding: int) -> int:
    """
    Return the output length of a strided, padded window along one axis.
    """
    return (n - kernel_size + 2 * padding) // stride + 1


def _validate_geometry(kernel_size: int, stride: int, padding: int) -> None:
    if int(kernel_size) <= 0:
        raise ValueError(f"kernel_size must be positive, got {kernel_size}")
    if int(stride) <= 0:
        raise ValueError(f"stride must be positive, got {stride}")
    if int(padding) < 0:
        raise ValueError(f"padding must be non-negative, got {padding}")


@register_module()
class Conv1d(Module):
    """
    Square-kernel convolution over a single-channel 2-D map.

    Parameters
    ----------
    kernel_size : int
        Side length of the square kernel.
    stride : int, optional
        Step between window positions along both axes. Defaults to 1.
    padding : int, optional
        Virtual zero border on every side. Defaults to 0.
    initializer : str | Callable[[], float], optional
        Registered initializer name or zero-argument sampler. Defaults to
        "uniform".

    Notes
    -----
    `parameters()` returns the kernel row-major.
    """

    def __init__(
        self,
        kernel_size: int,
        stride: int = 1,
        padding: int = 0,
        initializer: Union[str, Callable[[], float]] = "uniform",
    ) -> None:
        super().__init__()
        _validate_geometry(kernel_size, stride, padding)

        self.kernel_size = int(kernel_size)
        self.stride = int(stride)
        self.padding = int(padding)
        self.initializer = initializer

        k = self.kernel_size
        kernel = [Parameter() for _ in range(k * k)]
        WeightInitializer(initializer)(kernel, (1, k, k))
        self.register_parameters("kernel", kernel)

    @property
    def weight(self) -> List[List[Parameter]]:
        """
        Return the kernel as `kernel_size` rows of parameters.
        """
        flat = self._parameters["kernel"]
        k = self.kernel_size
        return [flat[r * k : (r + 1) * k] for r in range(k)]

    def output_shape(self, rows: int, cols: int) -> tuple[int, int]:
        """
        Return the `(rows, cols)` produced for an input map of the given size.

        Raises
        ------
        ShapeMismatchError
            If either output dimension would be non-positive.
        """
        out_h = conv_output_size(rows, self.kernel_size, self.stride, self.padding)
        out_w = conv_output_size(cols, self.kernel_size, self.stride, self.padding)
        if out_h <= 0 or out_w <= 0:
            raise ShapeMismatchError(
                "Conv1d output size",
                "positive",
                (out_h, out_w),
            )
        return out_h, out_w

    def forward(self, x: Sequence[Sequence[Union[Node, float]]]) -> List[List[Node]]:
        """
        Convolve the kernel over a 2-D map.

        Parameters
        ----------
        x : Sequence[Sequence[Node | float]]
            Rectangular map of scalars.

        Returns
        -------
        List[List[Node]]
            Output map of `output_shape(rows, cols)`.

        Raises
        ------
        ShapeMismatchError
            If `x` is ragged or not 2-D, or the output would be empty.
        """
        rows, cols = grid_shape(x, "Conv1d input")
        out_h, out_w = self.output_shape(rows, cols)
        w = self.weight
        k, s, p = self.kernel_size, self.stride, self.padding

        out: List[List[Node]] = []
        for oi in range(out_h):
            i = oi * s - p
            out_row: List[Node] = []
            for oj in range(out_w):
                j = oj * s - p
                terms = [
                    mul(x[i + a][j + b], w[a][b])
                    for a in range(k)
                    if 0 <= i + a < rows
                    for b in range(k)
                    if 0 <= j + b < cols
                ]
                # every tap fell into the padding
                out_row.append(reduce_sum(terms) if terms else Node(0.0))
            out.append(out_row)
        return out

    def get_config(self) -> Dict[str, Any]:
        return {
            "kernel_size": self.kernel_size,
            "stride": self.stride,
            "padding": self.padding,
            "initializer": self.initializer
            if isinstance(self.initializer, str)
            else "uniform",
        }

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Conv1d":
        return cls(
            kernel_size=int(cfg["kernel_size"]),
            stride=int(cfg.get("stride", 1)),
            padding=int(cfg.get("padding", 0)),
            initializer=str(cfg.get("initializer", "uniform")),
        )
