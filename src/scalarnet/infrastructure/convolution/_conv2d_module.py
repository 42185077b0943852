"""
Multi-filter convolution over channeled 2-D maps.

`Conv2d` owns `out_channels` square kernels (one `Conv1d` per output filter).
Each filter's kernel is applied to every input channel and the per-channel
maps are summed cell by cell, so the output has one map per filter:

    out[f] = sum_c conv(x[c], kernel_f)

Accepted inputs
---------------
- `C x H x W`: a list of `C` equally sized maps.
- `H x W`: a single map, treated as one channel.

The output is always `out_channels x H' x W'`.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Union

from ...domain._errors import ShapeMismatchError
from .._function import add
from .._module import Module
from ..module._serialization_core import register_module
from ..node import Node
from ..utils._nested import grid_shape
from ._conv1d_module import Conv1d, _validate_geometry


def _is_single_map(x: Any) -> bool:
    return (
        isinstance(x, (list, tuple))
        and len(x) > 0
        and isinstance(x[0], (list, tuple))
        and len(x[0]) > 0
        and not isinstance(x[0][0], (list, tuple))
    )


@register_module()
class Conv2d(Module):
    """
    Convolution producing `out_channels` feature maps.

    Parameters
    ----------
    out_channels : int
        Number of filters (output maps).
    kernel_size : int
        Side length of each square kernel.
    stride : int, optional
        Defaults to 1.
    padding : int, optional
        Defaults to 0.
    initializer : str | Callable[[], float], optional
        Defaults to "uniform".

    Notes
    -----
    `parameters()` lists filter 0's kernel row-major, then filter 1's, and so
    on. Filters are not registered as child modules; they are an internal
    detail of this layer.
    """

    def __init__(
        self,
        out_channels: int,
        kernel_size: int,
        stride: int = 1,
        padding: int = 0,
        initializer: Union[str, Callable[[], float]] = "uniform",
    ) -> None:
        super().__init__()
        if int(out_channels) <= 0:
            raise ValueError(f"out_channels must be positive, got {out_channels}")
        _validate_geometry(kernel_size, stride, padding)

        self.out_channels = int(out_channels)
        self.kernel_size = int(kernel_size)
        self.stride = int(stride)
        self.padding = int(padding)
        self.initializer = initializer

        self._filters: List[Conv1d] = []
        for f in range(self.out_channels):
            conv = Conv1d(self.kernel_size, self.stride, self.padding, initializer)
            self._filters.append(conv)
            self.register_parameters(f"filter{f}", conv.parameters())

    @property
    def filters(self) -> tuple[Conv1d, ...]:
        """
        Return the per-filter kernels.
        """
        return tuple(self._filters)

    def forward(self, x: Any) -> List[List[List[Node]]]:
        """
        Apply every filter to every channel and sum over channels.

        Parameters
        ----------
        x : C x H x W or H x W nested sequence of scalars

        Returns
        -------
        List[List[List[Node]]]
            `out_channels` maps.

        Raises
        ------
        ShapeMismatchError
            If channels differ in size, a map is ragged, or the output would
            be empty.
        """
        channels = [x] if _is_single_map(x) else x
        if not isinstance(channels, (list, tuple)) or len(channels) == 0:
            raise ShapeMismatchError("Conv2d input", "C x H x W or H x W", type(x).__name__)

        shape = grid_shape(channels[0], "Conv2d channel 0")
        for c, ch in enumerate(channels[1:], start=1):
            other = grid_shape(ch, f"Conv2d channel {c}")
            if other != shape:
                raise ShapeMismatchError(f"Conv2d channel {c} size", shape, other)

        out: List[List[List[Node]]] = []
        for conv in self._filters:
            acc = conv(channels[0])
            for ch in channels[1:]:
                m = conv(ch)
                acc = [
                    [add(a, b) for a, b in zip(row_a, row_b)]
                    for row_a, row_b in zip(acc, m)
                ]
            out.append(acc)

        if len(out) != self.out_channels:
            raise ShapeMismatchError("Conv2d output channels", self.out_channels, len(out))
        return out

    def get_config(self) -> Dict[str, Any]:
        return {
            "out_channels": self.out_channels,
            "kernel_size": self.kernel_size,
            "stride": self.stride,
            "padding": self.padding,
            "initializer": self.initializer
            if isinstance(self.initializer, str)
            else "uniform",
        }

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Conv2d":
        return cls(
            out_channels=int(cfg["out_channels"]),
            kernel_size=int(cfg["kernel_size"]),
            stride=int(cfg.get("stride", 1)),
            padding=int(cfg.get("padding", 0)),
            initializer=str(cfg.get("initializer", "uniform")),
        )
