"""
Abstract interfaces and utilities for weight initialization.

This module defines the abstract base class for weight initializer
dispatchers, along with the helper that derives fan-in and fan-out values
from a parameter grid shape.

The concrete implementation and registry logic live in the infrastructure
layer. This module exists in the domain layer to define contracts and shared
mathematical utilities without binding to NumPy.
"""

from abc import ABC
from typing import Callable, Dict, Sequence, Tuple, TypeVar


T = TypeVar("T", bound=Callable[..., object])


class _WeightInitializer(ABC):
    """
    Abstract base class for weight initializer dispatchers.

    Design notes
    ------------
    - Initializers are identified by string names.
    - Each initializer is a callable that assigns values to a sequence of
      parameters in place and returns that sequence.
    """

    INITIALIZERS: Dict[str, Callable] = {}

    def __init__(self, initializer_name: str) -> None:
        """
        Construct a weight initializer dispatcher.

        Parameters
        ----------
        initializer_name:
            The string key identifying a registered initializer.
        """
        ...

    @classmethod
    def register_initializer(
        cls, name: str, *, overwrite: bool = False
    ) -> Callable[[T], T]:
        """
        Return a decorator registering an initializer under `name`.
        """
        ...

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """
        Return the names of all registered initializers.
        """
        ...


def _calculate_fan_in_and_fan_out(shape: Sequence[int]) -> Tuple[int, int]:
    """
    Compute fan-in and fan-out for a parameter grid.

    Conventions
    -----------
    - `(n,)`: bias-like vector, fan_in = fan_out = n.
    - `(out, in)`: fully connected weights, fan_in = in, fan_out = out.
    - `(out, k, k)`: a bank of `out` square kernels, fan_in = k * k,
      fan_out = out * k * k. A single kernel is described as `(1, k, k)`.

    Parameters
    ----------
    shape:
        Logical shape of the parameter grid.

    Returns
    -------
    tuple[int, int]
        `(fan_in, fan_out)`.

    Raises
    ------
    ValueError
        If `shape` is empty.
    """
    dims = tuple(int(d) for d in shape)
    if len(dims) == 0:
        raise ValueError("Cannot compute fan_in/fan_out for an empty shape")

    if len(dims) == 1:
        return dims[0], dims[0]

    if len(dims) == 2:
        return dims[1], dims[0]

    receptive = 1
    for d in dims[1:]:
        receptive *= d
    return receptive, dims[0] * receptive
